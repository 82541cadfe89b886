"""Handle validation.

Every accessor in this package takes RDKit objects (or a
:class:`~molhandles.formula.MolecularFormula`) as opaque handles and checks
their type before forwarding to the toolkit.
"""

from __future__ import annotations

from typing import Any, Optional

from rdkit import Chem


class HandleTypeError(TypeError):
    """Raised when a handle is not of an accepted type."""


def _is_formula(obj: Any) -> bool:
    # Lazy import to avoid a cycle: formula imports handles
    from .formula import MolecularFormula
    return isinstance(obj, MolecularFormula)


def handle_kind(obj: Any) -> Optional[str]:
    if isinstance(obj, Chem.Atom):
        return "atom"
    if isinstance(obj, Chem.Bond):
        return "bond"
    if isinstance(obj, Chem.Mol):
        return "molecule"
    if _is_formula(obj):
        return "formula"
    return None


def valid_atom(atom: Any) -> Chem.Atom:
    if atom is None or not isinstance(atom, Chem.Atom):
        raise HandleTypeError("Must supply an Atom object, got %s" % type(atom).__name__)
    return atom


def valid_bond(bond: Any) -> Chem.Bond:
    if bond is None or not isinstance(bond, Chem.Bond):
        raise HandleTypeError("Must supply a Bond object, got %s" % type(bond).__name__)
    return bond


def valid_molecule(mol: Any) -> Chem.Mol:
    if mol is None or not isinstance(mol, Chem.Mol):
        raise HandleTypeError("object must be of class Mol, got %s" % type(mol).__name__)
    return mol


def valid_formula(formula: Any):
    if formula is None or not _is_formula(formula):
        raise HandleTypeError("Must supply a MolecularFormula object, got %s" % type(formula).__name__)
    return formula


_PROBE_PROP = "__molhandles_owner_probe"


def owned_by(handle: Any, mol: Chem.Mol) -> bool:
    """True when an atom or bond handle belongs to exactly this molecule.

    Python wrappers returned by RDKit are not identical objects, so ownership
    is checked by tagging ``mol`` with a private property and looking for it
    on the handle's owning molecule.
    """
    if not handle.HasOwningMol():
        return False
    owner = handle.GetOwningMol()
    if mol.HasProp(_PROBE_PROP):
        return False
    mol.SetIntProp(_PROBE_PROP, 1)
    try:
        return bool(owner.HasProp(_PROBE_PROP))
    finally:
        mol.ClearProp(_PROBE_PROP)


__all__ = [
    "HandleTypeError",
    "owned_by",
    "handle_kind",
    "valid_atom",
    "valid_bond",
    "valid_molecule",
    "valid_formula",
]
