# volley_core/geometry.py
from __future__ import annotations
from typing import Sequence

import numpy as np

from .constants import COURT_SIZE, COURT_TOLERANCE, SERVING_LINE, ZONES, ZONE_REFS

_ZONE_REF_ARRAY = np.array([ZONE_REFS[z] for z in ZONES], dtype=float)


def is_bench(pos: Sequence[int]) -> bool:
    """Substituted out: parked off the left sideline."""
    return pos[0] < 0

def is_serving(pos: Sequence[int], serving_line: int = SERVING_LINE) -> bool:
    """Standing behind the end line to serve."""
    return pos[1] > serving_line

def is_unusual(pos: Sequence[int], court_size: int = COURT_SIZE, tolerance: int = COURT_TOLERANCE) -> bool:
    lo, hi = -tolerance, court_size + tolerance
    x, y = pos[0], pos[1]
    return x < lo or x > hi or y < lo or y > hi

def zone_distances(pos: Sequence[int]) -> np.ndarray:
    """Euclidean distance from pos to each zone reference point, ordered Z1..Z6."""
    return np.linalg.norm(_ZONE_REF_ARRAY - np.asarray(pos[:2], dtype=float), axis=1)

def nearest_zone(pos: Sequence[int]) -> int:
    # argmin keeps the lowest zone number on ties
    return ZONES[int(np.argmin(zone_distances(pos)))]
