from __future__ import annotations

from typing import List, Optional
import logging
import os

import numpy as np
from rdkit import Chem
from rdkit.Chem import AllChem, rdDepictor

from .atoms import get_point2d, get_point3d
from .handles import valid_molecule
from .util.rdkit_helpers import parse_smiles as _parse_smiles

logger = logging.getLogger(__name__)

DEFAULT_EMBED_SEED = 42


def parse_smiles(smiles: str) -> Chem.Mol:
    mol = _parse_smiles(smiles)
    if mol is None:
        raise ValueError("Invalid SMILES: %r" % (smiles,))
    return mol


def get_atoms(mol) -> List[Chem.Atom]:
    mol = valid_molecule(mol)
    return list(mol.GetAtoms())


def get_bonds(mol) -> List[Chem.Bond]:
    mol = valid_molecule(mol)
    return list(mol.GetBonds())


def get_atom_count(mol) -> int:
    mol = valid_molecule(mol)
    return int(mol.GetNumAtoms())


def get_bond_count(mol) -> int:
    mol = valid_molecule(mol)
    return int(mol.GetNumBonds())


def get_total_formal_charge(mol) -> int:
    mol = valid_molecule(mol)
    return int(Chem.GetFormalCharge(mol))


def get_coordinates(mol, dim: int = 3) -> np.ndarray:
    """Coordinate matrix of shape (n_atoms, dim); NaN rows where missing."""
    mol = valid_molecule(mol)
    if dim not in (2, 3):
        raise ValueError("dim must be 2 or 3, got %r" % (dim,))
    getter = get_point3d if dim == 3 else get_point2d
    atoms = list(mol.GetAtoms())
    if not atoms:
        return np.empty((0, dim))
    return np.vstack([getter(a) for a in atoms])


def _embed_seed(seed: Optional[int]) -> int:
    if seed is not None:
        return int(seed)
    raw = os.environ.get("MOLHANDLES_EMBED_SEED", "").strip()
    if not raw:
        return DEFAULT_EMBED_SEED
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer MOLHANDLES_EMBED_SEED=%r", raw)
        return DEFAULT_EMBED_SEED


def generate_2d_coordinates(mol) -> int:
    """Compute a 2D depiction in place; returns the conformer id."""
    mol = valid_molecule(mol)
    return int(rdDepictor.Compute2DCoords(mol))


def generate_3d_coordinates(mol, seed: Optional[int] = None) -> int:
    """Embed a 3D conformer in place; returns the conformer id.

    Hydrogens are not added; call Chem.AddHs first for a realistic geometry.
    """
    mol = valid_molecule(mol)
    cid = AllChem.EmbedMolecule(mol, randomSeed=_embed_seed(seed))
    if cid < 0:
        raise RuntimeError("3D embedding failed for %s" % Chem.MolToSmiles(mol))
    logger.debug("embedded conformer %d for %d atoms", cid, mol.GetNumAtoms())
    return int(cid)


def compute_partial_charges(mol) -> None:
    """Gasteiger partial charges in place, readable with atoms.get_charge."""
    mol = valid_molecule(mol)
    AllChem.ComputeGasteigerCharges(mol)


def perceive_aromaticity(mol) -> None:
    """Sanitize in place: valences, ring info and aromaticity flags."""
    mol = valid_molecule(mol)
    Chem.SanitizeMol(mol)


__all__ = [
    "parse_smiles",
    "get_atoms",
    "get_bonds",
    "get_atom_count",
    "get_bond_count",
    "get_total_formal_charge",
    "get_coordinates",
    "generate_2d_coordinates",
    "generate_3d_coordinates",
    "compute_partial_charges",
    "perceive_aromaticity",
]
