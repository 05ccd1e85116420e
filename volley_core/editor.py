# volley_core/editor.py
"""
Document edits used by the Streamlit editor pages. Every function returns a
new RotationDocument and leaves its input untouched.
"""
from __future__ import annotations
from typing import Optional, Sequence

from .constants import (
    AVAILABLE_PHASES, BENCH_POSITION, ROTATIONS, SERVER_ZONE, SERVING_LINE, ZONE_REFS,
)
from .errors import EditorError
from .models import Coordinate, Mode, Player, RotationDocument, phase_key, split_phase_key
from .zones import assign_zones


def _copy(doc: RotationDocument) -> RotationDocument:
    return doc.model_copy(deep=True)

def _check_slot(key: str, rotation: int) -> None:
    try:
        split_phase_key(key)
    except ValueError as e:
        raise EditorError(str(e)) from e
    if rotation not in ROTATIONS:
        raise EditorError(f"rotation must be 1-6, got {rotation!r}")


# -----------------------
# Players
# -----------------------
def add_player(doc: RotationDocument, player_id: str, label: str, role: str = "outside",
               is_libero: bool = False) -> RotationDocument:
    pid = (player_id or "").strip()
    label = (label or "").strip()
    if not pid or not label:
        raise EditorError("Player id and label are required")
    if doc.player(pid) is not None:
        raise EditorError("Player ID must be unique")
    try:
        player = Player(id=pid, label=label, role=role, isLibero=is_libero)
    except ValueError as e:
        raise EditorError(str(e)) from e
    out = _copy(doc)
    out.players.append(player)
    return out

def update_player(doc: RotationDocument, player_id: str, label: Optional[str] = None,
                  role: Optional[str] = None, is_libero: Optional[bool] = None) -> RotationDocument:
    current = doc.player(player_id)
    if current is None:
        raise EditorError(f"Unknown player {player_id}")
    data = current.model_dump()
    if label is not None:
        if not label.strip():
            raise EditorError("Player label is required")
        data["label"] = label.strip()
    if role is not None:
        data["role"] = role
    if is_libero is not None:
        data["isLibero"] = is_libero
    try:
        updated = Player(**data)
    except ValueError as e:
        raise EditorError(str(e)) from e
    out = _copy(doc)
    out.players = [updated if p.id == player_id else p for p in out.players]
    return out

def delete_player(doc: RotationDocument, player_id: str) -> RotationDocument:
    """Drop the player and every position recorded for them."""
    out = _copy(doc)
    out.players = [p for p in out.players if p.id != player_id]
    for rotations in out.positions.values():
        for formation in rotations.values():
            formation.pop(player_id, None)
    return out


# -----------------------
# Phases
# -----------------------
def add_phase(doc: RotationDocument, mode: str) -> RotationDocument:
    """Append the first phase from AVAILABLE_PHASES not yet used in this mode."""
    m = Mode(mode).value
    used = doc.phases.get(m, [])
    available = [p for p in AVAILABLE_PHASES if p not in used]
    if not available:
        raise EditorError("No more phases available")
    out = _copy(doc)
    out.phases.setdefault(m, []).append(available[0])
    return out

def remove_phase(doc: RotationDocument, mode: str, phase: str) -> RotationDocument:
    m = Mode(mode).value
    used = doc.phases.get(m, [])
    if phase not in used:
        raise EditorError(f"{m} has no phase {phase!r}")
    if len(used) <= 1:
        raise EditorError("Cannot remove the last phase")
    out = _copy(doc)
    out.phases[m] = [p for p in used if p != phase]
    out.positions.pop(phase_key(m, phase), None)
    return out


# -----------------------
# Positions
# -----------------------
def set_position(doc: RotationDocument, key: str, rotation: int, player_id: str,
                 pos: Coordinate) -> RotationDocument:
    _check_slot(key, rotation)
    if doc.player(player_id) is None:
        raise EditorError(f"Unknown player {player_id}")
    out = _copy(doc)
    formation = out.positions.setdefault(key, {}).setdefault(rotation, {})
    formation[player_id] = (int(round(pos[0])), int(round(pos[1])))
    return out

def send_to_bench(doc: RotationDocument, key: str, rotation: int, player_id: str,
                  bench: Coordinate = BENCH_POSITION) -> RotationDocument:
    return set_position(doc, key, rotation, player_id, bench)

def copy_positions(doc: RotationDocument, source_key: str, source_rotation: int,
                   target_key: str, target_rotation: int) -> RotationDocument:
    """Copy every coordinate from the source formation over the target formation."""
    _check_slot(source_key, source_rotation)
    _check_slot(target_key, target_rotation)
    source = doc.formation(source_key, source_rotation)
    if not source:
        raise EditorError("Source has no positions defined")
    out = _copy(doc)
    target = out.positions.setdefault(target_key, {}).setdefault(target_rotation, {})
    for pid, pos in source.items():
        target[pid] = (pos[0], pos[1])
    return out

def fill_standard_positions(doc: RotationDocument, key: str, lineup: Sequence[str]) -> RotationDocument:
    """
    Fill all six rotations of a phase with the textbook grid: each lineup player
    on their zone center, everyone else on the bench. In the serve phase the
    Z1 player stands behind the end line.
    """
    _check_slot(key, 1)
    mode, phase = split_phase_key(key)
    serving = mode == Mode.SERVING and phase.value == "serve"
    out = _copy(doc)
    rotations = out.positions.setdefault(key, {})
    for r in ROTATIONS:
        zones = assign_zones(lineup, r)
        formation = {p.id: BENCH_POSITION for p in out.players}
        for z, pid in zones.items():
            x, y = ZONE_REFS[z]
            if serving and z == SERVER_ZONE:
                y = SERVING_LINE + 40
            formation[pid] = (x, y)
        rotations[r] = formation
    return out
