"""Atom accessors.

Example, all 3D coordinates of a molecule::

    atoms = get_atoms(mol)
    coords = numpy.vstack([get_point3d(a) for a in atoms])
"""

from __future__ import annotations

from typing import List, Optional
import math

import numpy as np
from rdkit import Chem

from .handles import owned_by, valid_atom, valid_molecule

# Property written by set_charge; RDKit's Gasteiger code uses the second one
PARTIAL_CHARGE_PROP = "PartialCharge"
GASTEIGER_CHARGE_PROP = "_GasteigerCharge"


def _conformer(atom: Chem.Atom, want_3d: bool, conf_id: Optional[int]):
    if not atom.HasOwningMol():
        return None
    mol = atom.GetOwningMol()
    if mol.GetNumConformers() == 0:
        return None
    if conf_id is not None:
        conf = mol.GetConformer(int(conf_id))
        return conf if conf.Is3D() == want_3d else None
    for conf in mol.GetConformers():
        if conf.Is3D() == want_3d:
            return conf
    return None


def get_point3d(atom, conf_id: Optional[int] = None) -> np.ndarray:
    """Get the 3D coordinates of the atom.

    When coordinates are unavailable (e.g. the molecule came from SMILES) or
    have not been generated yet, NaN is returned for X, Y and Z.
    """
    atom = valid_atom(atom)
    conf = _conformer(atom, True, conf_id)
    if conf is None:
        return np.full(3, np.nan)
    p = conf.GetAtomPosition(atom.GetIdx())
    return np.array([p.x, p.y, p.z], dtype=float)


def get_point2d(atom, conf_id: Optional[int] = None) -> np.ndarray:
    """Get the 2D coordinates of the atom; NaN for X and Y when unavailable."""
    atom = valid_atom(atom)
    conf = _conformer(atom, False, conf_id)
    if conf is None:
        return np.full(2, np.nan)
    p = conf.GetAtomPosition(atom.GetIdx())
    return np.array([p.x, p.y], dtype=float)


def get_symbol(atom) -> str:
    atom = valid_atom(atom)
    return atom.GetSymbol()


def get_atomic_number(atom) -> int:
    atom = valid_atom(atom)
    return int(atom.GetAtomicNum())


def get_charge(atom) -> Optional[float]:
    """Partial charge on the atom, or None if charges have not been set.

    See :func:`get_formal_charge` for the integer formal charge.
    """
    atom = valid_atom(atom)
    if atom.HasProp(PARTIAL_CHARGE_PROP):
        return float(atom.GetDoubleProp(PARTIAL_CHARGE_PROP))
    if atom.HasProp(GASTEIGER_CHARGE_PROP):
        ch = float(atom.GetDoubleProp(GASTEIGER_CHARGE_PROP))
        # Gasteiger leaves NaN on atoms it has no parameters for
        return None if math.isnan(ch) else ch
    return None


def set_charge(atom, charge: float) -> None:
    atom = valid_atom(atom)
    atom.SetDoubleProp(PARTIAL_CHARGE_PROP, float(charge))


def get_formal_charge(atom) -> int:
    """Formal charge; 0 by default, never None."""
    atom = valid_atom(atom)
    return int(atom.GetFormalCharge())


def get_hydrogen_count(atom) -> Optional[int]:
    """Number of hydrogens carried by the atom (implicit plus bracket H).

    Hydrogens present as separate graph atoms are not counted. None when the
    valence of the atom has not been perceived yet.
    """
    atom = valid_atom(atom)
    if atom.NeedsUpdatePropertyCache():
        return None
    return int(atom.GetTotalNumHs(includeNeighbors=False))


def is_aromatic(atom) -> bool:
    """Assumes the owning molecule has been sanitized (see perceive_aromaticity)."""
    atom = valid_atom(atom)
    return bool(atom.GetIsAromatic())


def is_aliphatic(atom) -> bool:
    atom = valid_atom(atom)
    return not atom.GetIsAromatic()


def is_in_ring(atom) -> bool:
    """Ring membership as RDKit reports it; on an unsanitized molecule RDKit
    decides whether to compute ring info or raise."""
    atom = valid_atom(atom)
    return bool(atom.IsInRing())


def get_atom_index(atom, mol) -> int:
    """0-based index of the atom in ``mol``; -1 if the atom is not part of it."""
    mol = valid_molecule(mol)
    atom = valid_atom(atom)
    if not owned_by(atom, mol):
        return -1
    return int(atom.GetIdx())


def get_connected_atoms(atom, mol) -> List[Chem.Atom]:
    """Atoms of ``mol`` directly bonded to ``atom``."""
    mol = valid_molecule(mol)
    atom = valid_atom(atom)
    idx = get_atom_index(atom, mol)
    if idx < 0:
        return []
    return list(mol.GetAtomWithIdx(idx).GetNeighbors())


__all__ = [
    "get_point3d",
    "get_point2d",
    "get_symbol",
    "get_atomic_number",
    "get_charge",
    "set_charge",
    "get_formal_charge",
    "get_hydrogen_count",
    "is_aromatic",
    "is_aliphatic",
    "is_in_ring",
    "get_atom_index",
    "get_connected_atoms",
]
