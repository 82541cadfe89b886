from fastapi import FastAPI, HTTPException, Request, Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from molhandles.contracts import (
    DescribeMoleculeRequest, ConnectedAtomsRequest,
    FormulaFromSmilesRequest, FormulaValidateRequest,
)
from molhandles import atoms, describe, formula, molecules, rules
from molhandles.util.rdkit_helpers import quiet_rdkit
import logging, os, time

REQUEST_COUNT = Counter(
    'molhandles_requests_total', 'Total HTTP requests', ['method', 'path', 'status']
)
REQUEST_LATENCY = Histogram(
    'molhandles_request_latency_seconds', 'Latency per request', ['method', 'path']
)

logging.basicConfig(level=os.environ.get("MOLHANDLES_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("molhandles.api")
quiet_rdkit()

app = FastAPI(title="Molecule Handles API", version="0.1.0")


@app.middleware("http")
async def logging_timing_middleware(request: Request, call_next):
    start = time.perf_counter()
    path = request.url.path
    method = request.method
    status = 500
    try:
        response: Response = await call_next(request)
        status = response.status_code
        return response
    finally:
        dur = time.perf_counter() - start
        # Log without body; SMILES may be proprietary structures
        logger.info("%s %s -> %s in %.3f s", method, path, status, dur)
        REQUEST_COUNT.labels(method=method, path=path, status=str(status)).inc()
        REQUEST_LATENCY.labels(method=method, path=path).observe(dur)


def _parse_or_400(smiles: str):
    try:
        return molecules.parse_smiles(smiles)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/health")
def health(): return {"ok": True}


@app.post("/api/v1/molecule/describe")
def api_molecule_describe(req: DescribeMoleculeRequest):
    mol = _parse_or_400(req.smiles)
    try:
        return describe.describe_molecule(mol, coords=req.coords, partial_charges=req.partial_charges)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        logger.warning("coordinate generation failed: %s", e)
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/api/v1/atoms/connected")
def api_atoms_connected(req: ConnectedAtomsRequest):
    mol = _parse_or_400(req.smiles)
    if req.index < 0 or req.index >= molecules.get_atom_count(mol):
        raise HTTPException(status_code=404, detail=f"No atom with index {req.index}")
    atom = mol.GetAtomWithIdx(req.index)
    nbrs = atoms.get_connected_atoms(atom, mol)
    return {
        "index": req.index,
        "symbol": atoms.get_symbol(atom),
        "connected": [
            {"index": atoms.get_atom_index(a, mol), "symbol": atoms.get_symbol(a)} for a in nbrs
        ],
    }


@app.post("/api/v1/formula/from-smiles")
def api_formula_from_smiles(req: FormulaFromSmilesRequest):
    mol = _parse_or_400(req.smiles)
    try:
        f = formula.get_mol_formula(mol, charge=req.charge)
        checks = rules.check_formula(f)
    except ValueError as e:
        # e.g. dummy atoms ("*") have no element
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "formula": f.to_string(),
        "elements": f.as_dict(),
        "charge": f.charge,
        "mass": f.mass,
        "exact_mass": f.exact_mass,
        "rules": checks,
        "valid": all(checks.values()),
    }


@app.post("/api/v1/formula/validate")
def api_formula_validate(req: FormulaValidateRequest):
    options = {}
    if req.element_ranges is not None:
        options["element_ranges"] = req.element_ranges
    if req.charge_range is not None:
        options["charge_range"] = req.charge_range
    try:
        f = formula.formula_from_string(req.formula, charge=req.charge)
        checks = rules.check_formula(f, req.rules, **options)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "formula": f.to_string(),
        "charge": f.charge,
        "rdbe": rules.compute_rdbe(f),
        "rules": checks,
        "valid": all(checks.values()),
    }


@app.get("/metrics")
def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
