# volley_core/io.py
from __future__ import annotations
import json
import re
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from .constants import MODES
from .errors import DocumentError
from .models import RotationDocument

DEFAULT_SYSTEMS = ["5-1"]


# -----------------------
# Loading
# -----------------------
def document_from_dict(raw: Any) -> RotationDocument:
    """Apply the import checks and build a validated RotationDocument."""
    if not isinstance(raw, dict):
        raise DocumentError("Invalid rotation data: expected a JSON object")
    if not isinstance(raw.get("players"), list):
        raise DocumentError("Invalid rotation data: missing players array")
    if not raw.get("phases"):
        raise DocumentError("Invalid rotation data: missing phases")

    data = dict(raw)
    if not data.get("positions"):
        data["positions"] = {}
    try:
        return RotationDocument.model_validate(data)
    except ValidationError as e:
        raise DocumentError(f"Invalid rotation data: {e}") from e

def parse_document(text: str) -> RotationDocument:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentError(f"Malformed JSON: {e}") from e
    return document_from_dict(raw)

def load_document(source) -> RotationDocument:
    """
    Load a rotation document from a path, raw bytes, or a file-like object
    (e.g. a Streamlit upload).
    """
    try:
        if isinstance(source, (bytes, bytearray)):
            text = bytes(source).decode("utf-8")
        elif hasattr(source, "read"):
            data = source.read()
            text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        else:
            path = Path(source)
            if not path.is_file():
                raise DocumentError(f"File not found: {path}")
            text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocumentError(f"Rotation file is not UTF-8 text: {e}") from e
    except OSError as e:
        raise DocumentError(f"Cannot read rotation file: {e}") from e
    return parse_document(text)


# -----------------------
# Export (editor layout)
# -----------------------
def _q(s: str) -> str:
    return json.dumps(s, ensure_ascii=False)

def dump_document(doc: RotationDocument, newline: str = "\r\n") -> str:
    """
    Serialize in the editor's export layout: one player per line, phase keys
    sorted, rotations sorted numerically, one formation per line.
    """
    nl = newline
    ind = "  "
    ind2 = ind * 2
    lines: List[str] = ["{"]
    lines.append(f'{ind}"name": {_q(doc.name)},')
    lines.append(f'{ind}"description": {_q(doc.description)},')
    lines.append(f'{ind}"players": [')
    for i, p in enumerate(doc.players):
        entry = f'{ind2}{{ "id": {_q(p.id)}, "label": {_q(p.label)}, "role": {_q(p.role)}'
        if p.isLibero:
            entry += ', "isLibero": true'
        entry += " }"
        if i < len(doc.players) - 1:
            entry += ","
        lines.append(entry)
    lines.append(f"{ind}],")

    lines.append(f'{ind}"phases": {{')
    for i, mode in enumerate(MODES):
        entry = f'{ind2}"{mode}": {json.dumps(doc.phases.get(mode, []), separators=(",", ":"))}'
        if i < len(MODES) - 1:
            entry += ","
        lines.append(entry)
    lines.append(f"{ind}}},")

    lines.append(f'{ind}"positions": {{')
    keys = sorted(doc.positions)
    for ki, key in enumerate(keys):
        lines.append(f'{ind2}"{key}": {{')
        rotations = sorted(doc.positions[key])
        for ri, r in enumerate(rotations):
            formation = doc.positions[key][r]
            if formation:
                body = ", ".join(f'{_q(pid)}: [{pos[0]}, {pos[1]}]' for pid, pos in formation.items())
                entry = f'{ind}{ind2}{ind}"{r}": {{ {body} }}'
            else:
                entry = f'{ind}{ind2}{ind}"{r}": {{}}'
            if ri < len(rotations) - 1:
                entry += ","
            lines.append(entry)
        lines.append(f"{ind2}}}" + ("," if ki < len(keys) - 1 else ""))
    lines.append(f"{ind}}}")
    lines.append("}")
    return nl.join(lines)

def dump_document_bytes(doc: RotationDocument) -> bytes:
    return dump_document(doc).encode("utf-8")

def save_document(path, doc: RotationDocument) -> None:
    Path(path).write_text(dump_document(doc, newline="\n"), encoding="utf-8")

def export_filename(doc: RotationDocument) -> str:
    return re.sub(r"\s+", "-", doc.name).lower() + ".json"


# -----------------------
# Systems manifest
# -----------------------
def load_systems_manifest(path) -> List[str]:
    """
    Available rotation systems, e.g. ["4-2", "5-1"]. Accepts a bare YAML list
    or a mapping with a `systems` list; a missing file falls back to ["5-1"].
    """
    p = Path(path)
    if not p.exists():
        return DEFAULT_SYSTEMS[:]
    with open(p, "r", encoding="utf-8") as f:
        obj = yaml.safe_load(f) or []
    if isinstance(obj, dict):
        obj = obj.get("systems", [])
    if not isinstance(obj, list) or not all(isinstance(s, (str, int, float)) for s in obj):
        raise DocumentError(f"Systems manifest {p} must be a list of system names.")
    return [str(s) for s in obj] or DEFAULT_SYSTEMS[:]

def save_systems_manifest(path, systems: List[str]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump({"systems": list(systems)}, f, sort_keys=False)

def document_to_dict(doc: RotationDocument) -> Dict[str, Any]:
    """Plain JSON-ready dict (rotation keys become strings once serialized)."""
    return json.loads(dump_document(doc, newline="\n"))
