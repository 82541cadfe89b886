"""Molecular formula handle.

RDKit has no formula object, so :class:`MolecularFormula` fills that role:
element counts plus a net charge, with masses taken from RDKit's periodic
table.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple
import re

from rdkit import Chem

from .atoms import get_formal_charge, get_hydrogen_count, get_symbol
from .handles import valid_formula, valid_molecule

ELECTRON_MASS = 0.00054857990946

_PTABLE = Chem.GetPeriodicTable()
ELEMENTS = frozenset(_PTABLE.GetElementSymbol(z) for z in range(1, 119))

_TOKEN = re.compile(r"([A-Z][a-z]?)(\d*)|(\()|(\))(\d*)")
_BRACKETED = re.compile(r"^\[(?P<body>[^\[\]]+)\](?P<charge>\d+[+-]|[+-]\d+|\++|-+)?$")
_TRAILING_CHARGE = re.compile(r"(?P<charge>\++|-+|[+-]\d+)$")


class MolecularFormula:
    """Element symbol -> count, plus net charge."""

    def __init__(self, counts: Optional[Mapping[str, int]] = None, charge: int = 0) -> None:
        self._counts: Dict[str, int] = {}
        for sym, n in (counts or {}).items():
            if sym not in ELEMENTS:
                raise ValueError("Unknown element symbol: %r" % (sym,))
            n = int(n)
            if n < 0:
                raise ValueError("Negative count for %s: %d" % (sym, n))
            if n:
                self._counts[sym] = self._counts.get(sym, 0) + n
        self._charge = int(charge)

    @property
    def charge(self) -> int:
        return self._charge

    @property
    def elements(self) -> List[str]:
        return [sym for sym, _ in self._hill_items()]

    @property
    def atom_count(self) -> int:
        return sum(self._counts.values())

    def get_element_count(self, symbol: str) -> int:
        return self._counts.get(symbol, 0)

    def as_dict(self) -> Dict[str, int]:
        return dict(self._hill_items())

    def _hill_items(self) -> List[Tuple[str, int]]:
        if "C" in self._counts:
            head = [s for s in ("C", "H") if s in self._counts]
            rest = sorted(s for s in self._counts if s not in ("C", "H"))
            order = head + rest
        else:
            order = sorted(self._counts)
        return [(s, self._counts[s]) for s in order]

    def to_string(self) -> str:
        """Hill-order formula; charged formulas are bracketed, e.g. [O4S]2-."""
        body = "".join(s if n == 1 else "%s%d" % (s, n) for s, n in self._hill_items())
        if not self._charge:
            return body
        sign = "+" if self._charge > 0 else "-"
        mag = abs(self._charge)
        return "[%s]%s%s" % (body, "" if mag == 1 else mag, sign)

    @property
    def mass(self) -> float:
        """Average molecular weight."""
        return sum(n * _PTABLE.GetAtomicWeight(s) for s, n in self._counts.items())

    @property
    def exact_mass(self) -> float:
        """Monoisotopic mass, corrected for the electrons gained or lost."""
        m = sum(n * _PTABLE.GetMostCommonIsotopeMass(s) for s, n in self._counts.items())
        return m - self._charge * ELECTRON_MASS

    @property
    def nominal_mass(self) -> int:
        return sum(n * _PTABLE.GetMostCommonIsotope(s) for s, n in self._counts.items())

    def __eq__(self, other) -> bool:
        if not isinstance(other, MolecularFormula):
            return NotImplemented
        return self._counts == other._counts and self._charge == other._charge

    def __hash__(self) -> int:
        return hash((frozenset(self._counts.items()), self._charge))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return "MolecularFormula(%r)" % self.to_string()


def _parse_charge(text: str) -> int:
    sign = 1 if "+" in text else -1
    digits = re.sub(r"[^0-9]", "", text)
    if digits:
        return sign * int(digits)
    # "++" / "--"
    return sign * len(text)


def _parse_body(body: str) -> Dict[str, int]:
    stack: List[Dict[str, int]] = [{}]
    pos = 0
    while pos < len(body):
        m = _TOKEN.match(body, pos)
        if not m or m.end() == pos:
            raise ValueError("Cannot parse formula at %r" % body[pos:])
        pos = m.end()
        sym, num, open_paren, close_paren, mult = m.groups()
        if sym:
            stack[-1][sym] = stack[-1].get(sym, 0) + (int(num) if num else 1)
        elif open_paren:
            stack.append({})
        elif close_paren:
            if len(stack) == 1:
                raise ValueError("Unbalanced ')' in formula %r" % body)
            group = stack.pop()
            k = int(mult) if mult else 1
            for s, n in group.items():
                stack[-1][s] = stack[-1].get(s, 0) + n * k
    if len(stack) != 1:
        raise ValueError("Unbalanced '(' in formula %r" % body)
    return stack[0]


def formula_from_string(text: str, charge: Optional[int] = None) -> MolecularFormula:
    """Parse a formula such as ``C6H6``, ``Ca(OH)2``, ``C6H5O-`` or ``[SO4]2-``.

    Outside brackets only a trailing sign run (``+``, ``--``) or sign-then-digits
    (``-2``) is read as charge, so ``Fe2+`` is Fe2 with charge +1; write
    ``[Fe]2+`` for an iron(II) ion. An explicit ``charge`` overrides the text.
    """
    s = (text or "").strip().replace(" ", "")
    if not s:
        raise ValueError("Empty formula")
    parsed_charge = 0
    m = _BRACKETED.match(s)
    if m:
        body = m.group("body")
        if m.group("charge"):
            parsed_charge = _parse_charge(m.group("charge"))
    else:
        body = s
        mc = _TRAILING_CHARGE.search(s)
        if mc:
            parsed_charge = _parse_charge(mc.group("charge"))
            body = s[: mc.start()]
    counts = _parse_body(body)
    return MolecularFormula(counts, charge=parsed_charge if charge is None else charge)


def get_mol_formula(mol, charge: Optional[int] = None) -> MolecularFormula:
    """Formula of a molecule, counting the hydrogens carried by each atom."""
    mol = valid_molecule(mol)
    counts: Dict[str, int] = {}
    total_charge = 0
    for atom in mol.GetAtoms():
        sym = get_symbol(atom)
        counts[sym] = counts.get(sym, 0) + 1
        h = get_hydrogen_count(atom)
        if h is None:
            raise ValueError("Hydrogen counts not perceived; sanitize the molecule first")
        if h:
            counts["H"] = counts.get("H", 0) + h
        total_charge += get_formal_charge(atom)
    return MolecularFormula(counts, charge=total_charge if charge is None else charge)


def get_formula_string(formula) -> str:
    return valid_formula(formula).to_string()


__all__ = [
    "ELECTRON_MASS",
    "ELEMENTS",
    "MolecularFormula",
    "formula_from_string",
    "get_mol_formula",
    "get_formula_string",
]
