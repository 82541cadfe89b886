from __future__ import annotations

from typing import Any, Dict, List, Optional

from . import atoms as _atoms
from . import bonds as _bonds
from . import molecules as _molecules
from .formula import get_mol_formula
from .handles import valid_molecule
from .rules import check_formula
from .util.rdkit_helpers import json_float, mol_to_canonical_smiles


def _point(values) -> List[Optional[float]]:
    return [json_float(v) for v in values]


def describe_atom(atom, mol) -> Dict[str, Any]:
    return {
        "index": _atoms.get_atom_index(atom, mol),
        "symbol": _atoms.get_symbol(atom),
        "atomic_number": _atoms.get_atomic_number(atom),
        "formal_charge": _atoms.get_formal_charge(atom),
        "charge": json_float(_atoms.get_charge(atom)),
        "hydrogen_count": _atoms.get_hydrogen_count(atom),
        "aromatic": _atoms.is_aromatic(atom),
        "aliphatic": _atoms.is_aliphatic(atom),
        "in_ring": _atoms.is_in_ring(atom),
        "point2d": _point(_atoms.get_point2d(atom)),
        "point3d": _point(_atoms.get_point3d(atom)),
        "connected": [_atoms.get_atom_index(a, mol) for a in _atoms.get_connected_atoms(atom, mol)],
    }


def describe_bond(bond, mol) -> Dict[str, Any]:
    begin, end = _bonds.get_bond_atoms(bond)
    return {
        "index": _bonds.get_bond_index(bond, mol),
        "atoms": [_atoms.get_atom_index(begin, mol), _atoms.get_atom_index(end, mol)],
        "order": _bonds.get_bond_order(bond),
        "order_value": _bonds.get_bond_order_value(bond),
        "aromatic": _bonds.is_bond_aromatic(bond),
        "in_ring": _bonds.is_bond_in_ring(bond),
    }


def describe_formula(mol) -> Dict[str, Any]:
    """Formula block; molecules with dummy atoms get an error entry instead."""
    try:
        f = get_mol_formula(mol)
        rules = check_formula(f)
    except ValueError as e:
        return {
            "formula": None,
            "charge": None,
            "mass": None,
            "exact_mass": None,
            "rules": {},
            "valid": False,
            "error": str(e),
        }
    return {
        "formula": f.to_string(),
        "charge": f.charge,
        "mass": f.mass,
        "exact_mass": f.exact_mass,
        "rules": rules,
        "valid": all(rules.values()),
    }


def describe_molecule(mol_or_smiles: Any, coords: str = "none", partial_charges: bool = False) -> Dict[str, Any]:
    """JSON-ready summary of a molecule: atoms, bonds and formula.

    coords: "none", "2d" or "3d" (generated in place on the parsed molecule).
    Missing coordinates and charges come back as None.
    """
    if isinstance(mol_or_smiles, str):
        mol = _molecules.parse_smiles(mol_or_smiles)
    else:
        mol = valid_molecule(mol_or_smiles)
    mode = (coords or "none").strip().lower()
    if mode == "2d":
        _molecules.generate_2d_coordinates(mol)
    elif mode == "3d":
        _molecules.generate_3d_coordinates(mol)
    elif mode != "none":
        raise ValueError("coords must be one of none, 2d, 3d; got %r" % (coords,))
    if partial_charges:
        _molecules.compute_partial_charges(mol)
    return {
        "smiles": mol_to_canonical_smiles(mol),
        "atom_count": _molecules.get_atom_count(mol),
        "bond_count": _molecules.get_bond_count(mol),
        "formal_charge": _molecules.get_total_formal_charge(mol),
        "atoms": [describe_atom(a, mol) for a in _molecules.get_atoms(mol)],
        "bonds": [describe_bond(b, mol) for b in _molecules.get_bonds(mol)],
        **describe_formula(mol),
    }


__all__ = ["describe_atom", "describe_bond", "describe_formula", "describe_molecule"]
