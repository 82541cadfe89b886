from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def test_health():
    assert client.get("/health").json() == {"ok": True}


def test_describe_molecule():
    resp = client.post("/api/v1/molecule/describe", json={"smiles": "CCO"})
    assert resp.status_code == 200
    out = resp.json()
    assert out["atom_count"] == 3
    assert out["formula"] == "C2H6O"
    assert out["valid"] is True
    o = out["atoms"][2]
    assert o["symbol"] == "O" and o["hydrogen_count"] == 1
    assert o["connected"] == [1]
    # no coordinates generated: missing values come back as null
    assert o["point3d"] == [None, None, None]
    assert o["charge"] is None


def test_describe_with_2d_and_charges():
    resp = client.post(
        "/api/v1/molecule/describe",
        json={"smiles": "c1ccccc1O", "coords": "2d", "partial_charges": True},
    )
    assert resp.status_code == 200
    atoms = resp.json()["atoms"]
    assert all(None not in a["point2d"] for a in atoms)
    assert all(a["charge"] is not None for a in atoms)
    assert atoms[0]["aromatic"] is True


def test_describe_errors():
    assert client.post("/api/v1/molecule/describe", json={"smiles": "notasmiles"}).status_code == 400
    bad = client.post("/api/v1/molecule/describe", json={"smiles": "CCO", "coords": "4d"})
    assert bad.status_code == 400


def test_connected_atoms():
    resp = client.post("/api/v1/atoms/connected", json={"smiles": "CC(=O)O", "index": 1})
    assert resp.status_code == 200
    out = resp.json()
    assert out["symbol"] == "C"
    assert sorted(a["index"] for a in out["connected"]) == [0, 2, 3]
    missing = client.post("/api/v1/atoms/connected", json={"smiles": "CC(=O)O", "index": 9})
    assert missing.status_code == 404


def test_formula_from_smiles():
    resp = client.post("/api/v1/formula/from-smiles", json={"smiles": "CC(=O)[O-]"})
    out = resp.json()
    assert out["formula"] == "[C2H3O2]-"
    assert out["charge"] == -1
    assert out["elements"] == {"C": 2, "H": 3, "O": 2}


def test_formula_validate():
    resp = client.post("/api/v1/formula/validate", json={"formula": "C6H7"})
    out = resp.json()
    assert out["valid"] is False
    assert out["rdbe"] == 3.5
    resp = client.post(
        "/api/v1/formula/validate",
        json={"formula": "[NH4]+", "rules": ["charge"], "charge_range": [-1, 1]},
    )
    assert resp.json()["rules"] == {"charge": True}


def test_formula_validate_errors():
    assert client.post("/api/v1/formula/validate", json={"formula": "Xy"}).status_code == 400
    resp = client.post("/api/v1/formula/validate", json={"formula": "C6H6", "rules": ["octet"]})
    assert resp.status_code == 400


def test_metrics():
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "molhandles_requests_total" in resp.text


def test_dummy_atom_smiles():
    resp = client.post("/api/v1/formula/from-smiles", json={"smiles": "*CC"})
    assert resp.status_code == 400
    assert "Unknown element" in resp.json()["detail"]
    resp = client.post("/api/v1/molecule/describe", json={"smiles": "*CC"})
    assert resp.status_code == 200
    out = resp.json()
    assert out["atom_count"] == 3
    assert out["formula"] is None and out["valid"] is False
