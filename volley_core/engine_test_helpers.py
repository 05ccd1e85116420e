"""
Internal helpers for tests (not imported by app).
"""
from __future__ import annotations
from typing import Dict, List, Optional, Sequence

from .constants import ROTATIONS, ZONE_REFS
from .models import Player, RotationDocument
from .zones import assign_zones

LINEUP_42: List[str] = ["s1", "m1", "h2", "s2", "m2", "h1"]


def quick_player(pid: str, role: str = "outside", label: Optional[str] = None, libero: bool = False) -> Player:
    return Player(id=pid, label=label or pid.upper(), role=role, isLibero=libero)

def grid_formation(lineup: Sequence[str], rotation: int, **overrides) -> Dict[str, tuple]:
    """Every lineup player on their zone center; keyword args override single players."""
    formation = {pid: ZONE_REFS[z] for z, pid in assign_zones(lineup, rotation).items()}
    formation.update(overrides)
    return formation

def quick_document(lineup: Sequence[str] = LINEUP_42, phases: Sequence[str] = ("servingBase", "receivingBase"),
                   libero: Optional[str] = None) -> RotationDocument:
    """Document whose phases all sit on the standard grid for all six rotations."""
    roles = {"s": "setter", "m": "middle", "h": "outside", "o": "opposite"}
    players = [quick_player(pid, roles.get(pid[0], "outside")) for pid in lineup]
    if libero:
        players.append(quick_player(libero, "libero", libero=True))
    positions = {}
    for key in phases:
        positions[key] = {}
        for r in ROTATIONS:
            formation = grid_formation(lineup, r)
            if libero:
                formation[libero] = (-64, 700)
            positions[key][r] = formation
    return RotationDocument(
        name="Test System",
        players=players,
        phases={"serving": ["base", "serve"], "receiving": ["base", "pass"]},
        positions=positions,
    )
