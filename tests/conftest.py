import os
import sys

import pytest

# Ensure project root is importable for local package imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from molhandles.molecules import parse_smiles  # noqa: E402


@pytest.fixture
def phenol():
    return parse_smiles("c1ccccc1O")


@pytest.fixture
def acetic_acid():
    return parse_smiles("CC(=O)O")
