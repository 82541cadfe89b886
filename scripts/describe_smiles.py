#!/usr/bin/env python3
"""
Thin wrapper script for the molecule describe CLI.
Delegates to molhandles.cli.describe:main for reuse in console_scripts.

Usage examples:
  python scripts/describe_smiles.py "c1ccccc1" --pretty
  python scripts/describe_smiles.py --demo --formula-only
"""
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from molhandles.cli.describe import main  # type: ignore

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
