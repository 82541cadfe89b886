# -*- coding: utf-8 -*-
"""
Gradio UI to interactively inspect molecule handles.

Run:
  python app/ui_gradio.py

Then open the URL printed by Gradio (default http://127.0.0.1:7860).
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple
import json
import os, sys

# Ensure project root is importable when running as a script
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import gradio as gr

from molhandles import atoms, describe, formula, molecules, rules
from molhandles.util.rdkit_helpers import quiet_rdkit


def _safe_json_loads(s: str) -> Dict[str, Any]:
    s = (s or "").strip()
    if not s:
        return {}
    try:
        obj = json.loads(s)
    except json.JSONDecodeError:
        return {}
    return obj if isinstance(obj, dict) else {}


# --- Handlers for tabs ---

def ui_describe_molecule(smi: str, coords: str, charges: bool) -> Dict[str, Any]:
    try:
        return describe.describe_molecule(smi or "", coords=coords or "none", partial_charges=bool(charges))
    except (ValueError, RuntimeError) as e:
        return {"error": str(e)}


def ui_atom_table(smi: str, coords: str) -> List[List[Any]]:
    out = ui_describe_molecule(smi, coords, False)
    rows: List[List[Any]] = []
    for a in out.get("atoms") or []:
        rows.append([
            a["index"], a["symbol"], a["formal_charge"], a["hydrogen_count"],
            a["aromatic"], a["in_ring"], ",".join(str(i) for i in a["connected"]),
        ])
    return rows


def ui_connected(smi: str, index: float) -> Dict[str, Any]:
    try:
        mol = molecules.parse_smiles(smi or "")
    except ValueError as e:
        return {"error": str(e)}
    idx = int(index or 0)
    if idx < 0 or idx >= molecules.get_atom_count(mol):
        return {"error": f"No atom with index {idx}"}
    atom = mol.GetAtomWithIdx(idx)
    return {
        "symbol": atoms.get_symbol(atom),
        "connected": [
            {"index": atoms.get_atom_index(a, mol), "symbol": atoms.get_symbol(a)}
            for a in atoms.get_connected_atoms(atom, mol)
        ],
    }


def ui_validate_formula(text: str, rule_names: List[str], options_json: str) -> Tuple[str, Dict[str, Any]]:
    opts = _safe_json_loads(options_json)
    try:
        f = formula.formula_from_string(text or "")
        checks = rules.check_formula(f, rule_names or None, **opts)
    except (ValueError, TypeError) as e:
        return "invalid input", {"error": str(e)}
    verdict = "valid" if all(checks.values()) else "invalid"
    return verdict, {
        "formula": f.to_string(),
        "exact_mass": round(f.exact_mass, 6),
        "rdbe": rules.compute_rdbe(f),
        "rules": checks,
    }


def build_demo() -> gr.Blocks:
    with gr.Blocks(title="Molhandles UI") as demo:
        gr.Markdown("""
        # Molhandles - Interactive UI
        Inspect atoms, bonds and formulas of a molecule without writing code.
        """)

        with gr.Tab("Describe Molecule"):
            smi_in = gr.Textbox(label="SMILES", value="c1ccccc1O")
            coords_in = gr.Radio(choices=["none", "2d", "3d"], value="none", label="Coordinates")
            charges_in = gr.Checkbox(value=False, label="Gasteiger partial charges")
            smi_btn = gr.Button("Describe")
            smi_out = gr.JSON(label="Result")
            smi_btn.click(ui_describe_molecule, inputs=[smi_in, coords_in, charges_in], outputs=[smi_out])

        with gr.Tab("Atom Table"):
            tab_in = gr.Textbox(label="SMILES", value="Nc1ccccc1")
            tab_coords = gr.Radio(choices=["none", "2d"], value="none", label="Coordinates")
            tab_btn = gr.Button("Tabulate")
            tab_out = gr.Dataframe(
                headers=["index", "symbol", "formal_charge", "H", "aromatic", "in_ring", "connected"],
                label="Atoms",
            )
            tab_btn.click(ui_atom_table, inputs=[tab_in, tab_coords], outputs=[tab_out])

        with gr.Tab("Connected Atoms"):
            con_smi = gr.Textbox(label="SMILES", value="CC(=O)O")
            con_idx = gr.Number(label="Atom index", value=1, precision=0)
            con_btn = gr.Button("Neighbours")
            con_out = gr.JSON(label="Connected")
            con_btn.click(ui_connected, inputs=[con_smi, con_idx], outputs=[con_out])

        with gr.Tab("Formula Rules"):
            f_in = gr.Textbox(label="Formula", value="C6H5NO2")
            f_rules = gr.CheckboxGroup(choices=sorted(rules.RULES), value=list(rules.DEFAULT_RULES), label="Rules")
            f_opts = gr.Textbox(label="Options (JSON)", value='{"charge_range": [-1, 1]}')
            f_btn = gr.Button("Validate")
            f_verdict = gr.Textbox(label="Verdict")
            f_out = gr.JSON(label="Details")
            f_btn.click(ui_validate_formula, inputs=[f_in, f_rules, f_opts], outputs=[f_verdict, f_out])

    return demo


if __name__ == "__main__":
    quiet_rdkit()
    demo = build_demo()
    # Bind to localhost; use share=True if you need a public link
    demo.launch(server_name="127.0.0.1", server_port=7860)
