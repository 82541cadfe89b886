from typing import Optional
import math
import os

from rdkit import Chem
from rdkit import RDLogger


def quiet_rdkit() -> None:
    # RDKit prints parse errors straight to stderr; keep the CLI/API output clean
    if os.environ.get("MOLHANDLES_RDKIT_LOG", "").strip().lower() in {"1", "true", "yes", "on"}:
        return
    RDLogger.DisableLog("rdApp.*")


def parse_smiles(smiles: str) -> Optional[Chem.Mol]:
    s = (smiles or "").strip()
    if not s:
        return None
    return Chem.MolFromSmiles(s)


def mol_to_canonical_smiles(mol) -> Optional[str]:
    if mol is None:
        return None
    return Chem.MolToSmiles(mol, canonical=True)


def is_missing(value) -> bool:
    """True for None and float NaN."""
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return False


def json_float(value) -> Optional[float]:
    if is_missing(value):
        return None
    return float(value)
