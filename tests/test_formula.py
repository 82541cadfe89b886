import pytest

from molhandles.formula import (
    MolecularFormula,
    formula_from_string,
    get_formula_string,
    get_mol_formula,
)
from molhandles.handles import HandleTypeError
from molhandles.molecules import parse_smiles


def test_hill_order():
    assert formula_from_string("H6C6").to_string() == "C6H6"
    assert formula_from_string("ClC6H5").to_string() == "C6H5Cl"
    # no carbon: alphabetical, H included
    assert formula_from_string("H2O").to_string() == "H2O"
    assert formula_from_string("Ca(OH)2").to_string() == "CaH2O2"


def test_charged_strings():
    f = formula_from_string("[SO4]2-")
    assert f.charge == -2
    assert f.get_element_count("O") == 4
    assert str(f) == "[O4S]2-"
    assert formula_from_string(str(f)) == f
    assert formula_from_string("C6H5O-").charge == -1
    assert formula_from_string("[NH4]+").to_string() == "[H4N]+"
    assert formula_from_string("C2H3O2-1").charge == -1


def test_explicit_charge_overrides_text():
    assert formula_from_string("C6H5O-", charge=0).charge == 0
    assert formula_from_string("C6H6", charge=1).to_string() == "[C6H6]+"


@pytest.mark.parametrize("bad", ["", "Xy2", "C6H6)", "(CH3", "c6h6", "CH4+-", "CH4-+", "[CH4]+-"])
def test_bad_formula_strings(bad):
    with pytest.raises(ValueError):
        formula_from_string(bad)


def test_counts_validation():
    with pytest.raises(ValueError):
        MolecularFormula({"C": -1})
    f = MolecularFormula({"C": 2, "N": 0})
    assert f.elements == ["C"]
    assert f.get_element_count("N") == 0
    assert f.atom_count == 2


def test_masses():
    f = formula_from_string("C6H6")
    assert f.mass == pytest.approx(78.114, abs=1e-2)
    assert f.exact_mass == pytest.approx(78.04695, abs=1e-4)
    assert f.nominal_mass == 78
    ion = formula_from_string("[C6H6]+")
    assert ion.exact_mass < f.exact_mass


def test_formula_from_molecule():
    assert get_mol_formula(parse_smiles("c1ccccc1")) == formula_from_string("C6H6")
    acetate = get_mol_formula(parse_smiles("CC(=O)[O-]"))
    assert acetate.charge == -1
    assert acetate.to_string() == "[C2H3O2]-"
    assert get_mol_formula(parse_smiles("CC(=O)[O-]"), charge=0).charge == 0
    assert get_mol_formula(parse_smiles("[NH4+]")).as_dict() == {"H": 4, "N": 1}


def test_formula_string_accessor():
    assert get_formula_string(formula_from_string("CH4")) == "CH4"
    with pytest.raises(HandleTypeError):
        get_formula_string("CH4")
    with pytest.raises(HandleTypeError):
        get_mol_formula("CCO")


def test_sign_runs_still_parse():
    assert formula_from_string("CH4++").charge == 2
    assert formula_from_string("[SO4]--").charge == -2


def test_unknown_symbol_in_counts():
    with pytest.raises(ValueError, match="Unknown element"):
        MolecularFormula({"Xx": 1})


def test_dummy_atoms_have_no_formula():
    with pytest.raises(ValueError, match="Unknown element"):
        get_mol_formula(parse_smiles("*CC"))
