# volley_core/constants.py
from __future__ import annotations
from typing import Dict, List, Tuple

# -----------------------------
# Court geometry (900-unit grid)
# -----------------------------
# x: 0 (left sideline) .. 900 (right sideline)
# y: 0 (net) .. 900 (end line); y > 900 is the serving area behind the end line
COURT_SIZE = 900
COURT_TOLERANCE = 10
SERVING_LINE = 900
BENCH_POSITION: Tuple[int, int] = (-64, 700)

ZONES: List[int] = [1, 2, 3, 4, 5, 6]
NUM_ROTATIONS = 6
ROTATIONS: List[int] = [1, 2, 3, 4, 5, 6]

FRONT_ROW: List[int] = [2, 3, 4]
SERVER_ZONE = 1

# Approximate zone centers, used to guess a lineup from coordinates
ZONE_REFS: Dict[int, Tuple[int, int]] = {
    1: (700, 600),
    2: (700, 100),
    3: (450, 100),
    4: (200, 100),
    5: (200, 600),
    6: (450, 600),
}

# --------------------------------------------
# Overlap rules (front, back, axis, description)
# --------------------------------------------
# axis "y": front player must be closer to the net than the back player
# axis "x": front player must be further left than the back player
OVERLAP_RULES: List[Tuple[int, int, str, str]] = [
    (4, 5, "y", "Z4 (LF) must be in front of Z5 (LB)"),
    (3, 6, "y", "Z3 (CF) must be in front of Z6 (CB)"),
    (2, 1, "y", "Z2 (RF) must be in front of Z1 (RB)"),
    (4, 3, "x", "Z4 (LF) must be left of Z3 (CF)"),
    (3, 2, "x", "Z3 (CF) must be left of Z2 (RF)"),
    (5, 6, "x", "Z5 (LB) must be left of Z6 (CB)"),
    (6, 1, "x", "Z6 (CB) must be left of Z1 (RB)"),
]

# ---------------------
# Phases
# ---------------------
MODES: List[str] = ["serving", "receiving"]
AVAILABLE_PHASES: List[str] = ["base", "serve", "pass", "set", "attack", "switch"]

DEFAULT_PHASES: Dict[str, List[str]] = {
    "serving": ["base", "serve", "switch"],
    "receiving": ["base", "pass", "set", "attack", "switch"],
}

OVERLAP_PHASES: List[str] = ["servingBase", "receivingBase", "receivingPass"]
SERVE_PHASE = "servingServe"
DETECTION_PHASE = "servingBase"

# ---------------------
# Roles
# ---------------------
ROLES: List[str] = ["setter", "opposite", "outside", "middle", "libero", "defensive"]
SETTER_ROLE = "setter"

# ---------------------
# Rendering
# ---------------------
SVG_SCALE = 250 / 900
COURT_OFFSET_X = 25
COURT_OFFSET_Y = 32
PLAYER_RADIUS = 18
BENCH_X = 12

COLORS: Dict[str, str] = {
    "player": "#efa581",
    "highlight": "#f1c40f",
    "libero": "#e74c3c",
    "text": "#f5f5f5",
}


# ---------------------
# Normalization helpers
# ---------------------
def normalize_phase(p: str) -> str:
    if not p:
        return ""
    return p.strip().lower()

def normalize_role(r: str) -> str:
    if not r:
        return ""
    return r.strip().lower()
