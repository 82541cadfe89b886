from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Iterable

# Ensure project root on path when running from source
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from molhandles.describe import describe_molecule  # type: ignore
from molhandles.formula import get_mol_formula  # type: ignore
from molhandles.molecules import parse_smiles  # type: ignore
from molhandles.rules import check_formula  # type: ignore
from molhandles.util.rdkit_helpers import quiet_rdkit  # type: ignore

logger = logging.getLogger("molhandles.cli")


def _iter_inputs(args) -> Iterable[str]:
    if args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            for line in f:
                s = line.strip()
                if s:
                    yield s
        return
    if args.demo:
        for s in [
            "c1ccccc1",          # benzene
            "Nc1ccccc1",         # aniline
            "CC(=O)[O-]",        # acetate
            "C[N+](C)(C)C",      # tetramethylammonium
            "C1CC1C(=O)O",       # cyclopropanecarboxylic acid
            "notasmiles",        # invalid
        ]:
            yield s
        return
    if args.smiles:
        for s in args.smiles:
            yield s
        return
    # Interactive
    print("Enter SMILES, blank line to quit:")
    while True:
        try:
            s = input("> ").strip()
        except EOFError:
            break
        if not s:
            break
        yield s


def _formula_only(smiles: str) -> dict:
    f = get_mol_formula(parse_smiles(smiles))
    checks = check_formula(f)
    return {
        "formula": f.to_string(),
        "exact_mass": round(f.exact_mass, 6),
        "rules": checks,
        "valid": all(checks.values()),
    }


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Describe atoms, bonds and formula of molecules given as SMILES")
    p.add_argument("smiles", nargs="*", help="One or more SMILES")
    p.add_argument("--file", "-f", help="File with one SMILES per line")
    p.add_argument("--demo", action="store_true", help="Run on a small demo set")
    p.add_argument("--coords", choices=["none", "2d", "3d"], default="none", help="Generate coordinates first")
    p.add_argument("--charges", action="store_true", help="Compute Gasteiger partial charges")
    p.add_argument("--formula-only", action="store_true", help="Print only formula, mass and rule checks")
    p.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    p.add_argument("--jsonl", action="store_true", help="Emit one compact JSON object per line")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else os.environ.get("MOLHANDLES_LOG_LEVEL", "WARNING").upper())
    quiet_rdkit()

    any_done = False
    any_invalid = False
    for s in _iter_inputs(args):
        any_done = True
        try:
            if args.formula_only:
                res = _formula_only(s)
            else:
                res = describe_molecule(s, coords=args.coords, partial_charges=args.charges)
        except (ValueError, RuntimeError) as e:
            any_invalid = True
            logger.debug("failed on %r: %s", s, e)
            res = {"error": str(e)}
        payload = {"query": s, **res}
        if args.jsonl and not args.pretty:
            print(json.dumps(payload, ensure_ascii=False))
        else:
            print(json.dumps(payload, indent=(2 if args.pretty else None), ensure_ascii=False))
    if not any_done:
        p.print_help()
    return 1 if any_invalid else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
