"""Molhandles package.

Thin accessors over RDKit atom, bond and molecule objects plus a molecular
formula handle. Submodules are available via explicit imports, e.g.:

    from molhandles import atoms
    from molhandles.formula import formula_from_string
"""

__all__ = [
    "handles",
    "atoms",
    "bonds",
    "molecules",
    "formula",
    "rules",
    "describe",
]
