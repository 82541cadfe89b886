from __future__ import annotations

from typing import List, Optional

from rdkit import Chem

from .handles import owned_by, valid_atom, valid_bond, valid_molecule


def get_bond_order(bond) -> str:
    """Bond order name: SINGLE, DOUBLE, TRIPLE, QUADRUPLE, AROMATIC or UNSET.

    RDKit's UNSPECIFIED maps to UNSET; other exotic types keep their RDKit name.
    """
    bond = valid_bond(bond)
    bt = bond.GetBondType()
    if bt == Chem.BondType.UNSPECIFIED:
        return "UNSET"
    return str(bt)


def get_bond_order_value(bond) -> float:
    bond = valid_bond(bond)
    return float(bond.GetBondTypeAsDouble())


def get_bond_atoms(bond) -> List[Chem.Atom]:
    bond = valid_bond(bond)
    return [bond.GetBeginAtom(), bond.GetEndAtom()]


def get_connected_atom(bond, atom) -> Optional[Chem.Atom]:
    """The atom at the other end of ``bond``, or None if ``atom`` is not on it."""
    bond = valid_bond(bond)
    atom = valid_atom(atom)
    if not owned_by(atom, bond.GetOwningMol()):
        return None
    idx = atom.GetIdx()
    if idx == bond.GetBeginAtomIdx():
        return bond.GetEndAtom()
    if idx == bond.GetEndAtomIdx():
        return bond.GetBeginAtom()
    return None


def is_bond_aromatic(bond) -> bool:
    bond = valid_bond(bond)
    return bool(bond.GetIsAromatic())


def is_bond_in_ring(bond) -> bool:
    bond = valid_bond(bond)
    return bool(bond.IsInRing())


def get_bond_index(bond, mol) -> int:
    """0-based index of the bond in ``mol``; -1 if not found."""
    mol = valid_molecule(mol)
    bond = valid_bond(bond)
    if not owned_by(bond, mol):
        return -1
    return int(bond.GetIdx())


__all__ = [
    "get_bond_order",
    "get_bond_order_value",
    "get_bond_atoms",
    "get_connected_atom",
    "is_bond_aromatic",
    "is_bond_in_ring",
    "get_bond_index",
]
