import json

from molhandles.cli.describe import main


def _lines(capsys):
    return [json.loads(l) for l in capsys.readouterr().out.splitlines() if l.strip()]


def test_cli_describe(capsys):
    assert main(["CCO", "--jsonl"]) == 0
    (out,) = _lines(capsys)
    assert out["query"] == "CCO"
    assert out["formula"] == "C2H6O"
    assert len(out["atoms"]) == 3


def test_cli_formula_only(capsys):
    assert main(["c1ccccc1", "CC(=O)[O-]", "--formula-only"]) == 0
    outs = _lines(capsys)
    assert [o["formula"] for o in outs] == ["C6H6", "[C2H3O2]-"]
    assert all(o["valid"] for o in outs)


def test_cli_invalid_input_sets_exit_code(capsys):
    assert main(["notasmiles", "C"]) == 1
    outs = _lines(capsys)
    assert "error" in outs[0]
    assert outs[1]["formula"] == "CH4"


def test_cli_file_input(tmp_path, capsys):
    p = tmp_path / "smiles.txt"
    p.write_text("CCO\n\nC=O\n", encoding="utf-8")
    assert main(["--file", str(p), "--formula-only"]) == 0
    assert [o["formula"] for o in _lines(capsys)] == ["C2H6O", "CH2O"]
