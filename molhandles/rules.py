"""Rule checkers for molecular formulas.

Each rule takes a :class:`~molhandles.formula.MolecularFormula` plus keyword
options and returns True when the formula passes.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple
import logging
import os

from rdkit import Chem

from .handles import valid_formula

logger = logging.getLogger(__name__)

DEFAULT_RULES: Tuple[str, ...] = ("nitrogen", "rdbe")

_PTABLE = Chem.GetPeriodicTable()


def compute_rdbe(formula) -> Optional[float]:
    """Rings plus double bonds: 1 + sum(n_i * (v_i - 2)) / 2.

    None when an element has no default valence in RDKit (most metals).
    """
    formula = valid_formula(formula)
    total = 0
    for sym, n in formula.as_dict().items():
        v = _PTABLE.GetDefaultValence(sym)
        if v < 0:
            return None
        total += n * (v - 2)
    return 1.0 + total / 2.0


def nitrogen_rule(formula, **_options) -> bool:
    """Odd nitrogen count <=> odd nominal mass. Only neutral formulas are checked."""
    formula = valid_formula(formula)
    if formula.charge != 0:
        return True
    n = formula.get_element_count("N")
    return (formula.nominal_mass % 2) == (n % 2)


def rdbe_rule(formula, **_options) -> bool:
    """Neutral: integer RDBE >= 0. Ions: RDBE >= -0.5 (e.g. [NH4]+)."""
    rdbe = compute_rdbe(formula)
    if rdbe is None:
        return False
    if formula.charge != 0:
        return rdbe >= -0.5
    return rdbe >= 0 and float(rdbe).is_integer()


def element_rule(formula, element_ranges: Optional[Mapping[str, Sequence[int]]] = None, **_options) -> bool:
    """Element counts within ``element_ranges`` (symbol -> (min, max)).

    Elements missing from the ranges are not allowed once ranges are given.
    """
    formula = valid_formula(formula)
    if not element_ranges:
        return True
    for sym in formula.elements:
        if sym not in element_ranges:
            return False
    for sym, (lo, hi) in element_ranges.items():
        n = formula.get_element_count(sym)
        if n < lo or n > hi:
            return False
    return True


def charge_rule(formula, charge_range: Sequence[int] = (0, 0), **_options) -> bool:
    formula = valid_formula(formula)
    lo, hi = charge_range
    return lo <= formula.charge <= hi


RULES: Dict[str, Callable[..., bool]] = {
    "nitrogen": nitrogen_rule,
    "rdbe": rdbe_rule,
    "element": element_rule,
    "charge": charge_rule,
}


def default_rules() -> Tuple[str, ...]:
    raw = os.environ.get("MOLHANDLES_FORMULA_RULES", "").strip()
    if not raw:
        return DEFAULT_RULES
    return _split_names(raw)


def _split_names(raw: str) -> Tuple[str, ...]:
    return tuple(r.strip().lower() for r in raw.split(",") if r.strip())


def _resolve(rules: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if rules is None:
        names = default_rules()
    elif isinstance(rules, str):
        # "nitrogen,rdbe" as in MOLHANDLES_FORMULA_RULES
        names = _split_names(rules)
    else:
        names = tuple(r.strip().lower() for r in rules)
    unknown = [r for r in names if r not in RULES]
    if unknown:
        raise ValueError("Unknown formula rule(s): %s" % ", ".join(unknown))
    return names


def check_formula(formula, rules: Optional[Iterable[str]] = None, **options) -> Dict[str, bool]:
    """Run each named rule; returns {rule: passed}."""
    formula = valid_formula(formula)
    out: Dict[str, bool] = {}
    for name in _resolve(rules):
        out[name] = bool(RULES[name](formula, **options))
    logger.debug("formula %s rules %s", formula, out)
    return out


def is_valid_formula(formula, rules: Optional[Iterable[str]] = None, **options) -> bool:
    return all(check_formula(formula, rules, **options).values())


__all__ = [
    "DEFAULT_RULES",
    "RULES",
    "compute_rdbe",
    "nitrogen_rule",
    "rdbe_rule",
    "element_rule",
    "charge_rule",
    "default_rules",
    "check_formula",
    "is_valid_formula",
]
