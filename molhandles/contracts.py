from pydantic import BaseModel
from typing import List, Optional, Dict, Tuple

class DescribeMoleculeRequest(BaseModel):
    smiles: str
    coords: str = "none"  # none | 2d | 3d
    partial_charges: bool = False

class ConnectedAtomsRequest(BaseModel): smiles: str; index: int

class FormulaFromSmilesRequest(BaseModel):
    smiles: str; charge: Optional[int] = None

class FormulaValidateRequest(BaseModel):
    formula: str
    charge: Optional[int] = None
    rules: Optional[List[str]] = None
    # Options for the "element" and "charge" rules
    element_ranges: Optional[Dict[str, Tuple[int, int]]] = None
    charge_range: Optional[Tuple[int, int]] = None
