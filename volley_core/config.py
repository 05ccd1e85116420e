# volley_core/config.py
from __future__ import annotations
import os
import textwrap
from copy import deepcopy

from .constants import (
    BENCH_POSITION, COURT_SIZE, COURT_TOLERANCE, DEFAULT_PHASES, OVERLAP_PHASES,
    SERVE_PHASE, SERVING_LINE,
)

# ===== App defaults (feed models.AppConfig) =====
DEFAULT_CONFIG = {
    "court_size": COURT_SIZE,
    "court_tolerance": COURT_TOLERANCE,
    "serving_line": SERVING_LINE,
    "bench_x": BENCH_POSITION[0],
    "bench_y": BENCH_POSITION[1],
    "overlap_phases": list(OVERLAP_PHASES),
    "serve_phase": SERVE_PHASE,
    "level_is_legal": False,         # exact alignment is an overlap unless switched on
}

ASSETS_DIR = "assets"
ROTATIONS_DIR = os.path.join(ASSETS_DIR, "rotations")
SYSTEMS_MANIFEST = os.path.join(ASSETS_DIR, "systems.yaml")

# ===== Editor default document =====
DEFAULT_ROTATION = {
    "name": "New Rotation",
    "description": "Custom rotation system",
    "players": [
        {"id": "s", "label": "S", "role": "setter"},
        {"id": "o", "label": "O", "role": "opposite"},
        {"id": "h1", "label": "H1", "role": "outside"},
        {"id": "h2", "label": "H2", "role": "outside"},
        {"id": "m1", "label": "M1", "role": "middle"},
        {"id": "m2", "label": "M2", "role": "middle"},
    ],
    "phases": deepcopy(DEFAULT_PHASES),
    "positions": {},
}

# ===== Sample 4-2 system written on first run =====
SAMPLE_SYSTEM = "4-2"
SAMPLE_LINEUP = ["s1", "m1", "h2", "s2", "m2", "h1"]
SAMPLE_PLAYERS = [
    {"id": "s1", "label": "S1", "role": "setter"},
    {"id": "s2", "label": "S2", "role": "setter"},
    {"id": "h1", "label": "H1", "role": "outside"},
    {"id": "h2", "label": "H2", "role": "outside"},
    {"id": "m1", "label": "M1", "role": "middle"},
    {"id": "m2", "label": "M2", "role": "middle"},
    {"id": "l", "label": "L", "role": "libero", "isLibero": True},
]

DEFAULT_SYSTEMS_YAML = textwrap.dedent("""\
systems:
  - "4-2"
""")


def new_document():
    from .models import RotationDocument
    return RotationDocument.model_validate(deepcopy(DEFAULT_ROTATION))

def sample_document():
    """4-2 system on the textbook zone grid for every phase it lists."""
    from .editor import fill_standard_positions
    from .models import RotationDocument, phase_key

    doc = RotationDocument(
        name="4-2",
        description="Two setters, setter opposite setter; standard zone grid",
        players=deepcopy(SAMPLE_PLAYERS),
        phases={"serving": ["base", "serve"], "receiving": ["base", "pass"]},
    )
    for mode, names in doc.phases.items():
        for name in names:
            doc = fill_standard_positions(doc, phase_key(mode, name), SAMPLE_LINEUP)
    return doc

def ensure_assets_exist():
    from .io import save_document
    os.makedirs(ROTATIONS_DIR, exist_ok=True)
    if not os.path.exists(SYSTEMS_MANIFEST):
        with open(SYSTEMS_MANIFEST, "w", encoding="utf-8") as f:
            f.write(DEFAULT_SYSTEMS_YAML)
    sample_path = os.path.join(ROTATIONS_DIR, f"{SAMPLE_SYSTEM}.json")
    if not os.path.exists(sample_path):
        save_document(sample_path, sample_document())

def system_path(name: str) -> str:
    return os.path.join(ROTATIONS_DIR, f"{name}.json")

# ===== Visual theme (wrapped in <style>) =====
def ui_css() -> str:
    return """
<style>
:root{
  --surface: rgba(18, 22, 31, 0.78);
  --line:#2a3142;
  --text:#eaf1fb;
  --sub:#B7C2D3;
  --player:#efa581; --libero:#e74c3c; --highlight:#f1c40f;
  --good:#25d790; --warn:#ffb547; --danger:#ff6b6b;
  --radius:16px;
}
.block-container { padding-top: 1rem; max-width: 1200px; }
.court-card{
  background: var(--surface);
  border:1px solid rgba(255,255,255,.05);
  border-radius:var(--radius);
  padding:12px;
  display:flex; justify-content:center;
}
.court-card g { transition: transform .5s ease-out, opacity .5s ease-out; }
.legend{display:flex;gap:12px;flex-wrap:wrap;align-items:center;color:var(--sub);font-size:12px}
.dot{display:inline-block;width:10px;height:10px;border-radius:999px;margin-right:4px}
.finding-error{color:var(--danger)}
.finding-warn{color:var(--warn)}
</style>
"""
