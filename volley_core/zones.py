# volley_core/zones.py
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Union

from .constants import (
    ZONES, ROTATIONS, NUM_ROTATIONS, FRONT_ROW, DETECTION_PHASE, SETTER_ROLE,
)
from .errors import LineupError
from .geometry import is_bench, nearest_zone
from .logging_utils import get_logger
from .models import LineupDetection, Player, RotationDocument

logger = get_logger(__name__)


# -----------------------
# Zone assignment
# -----------------------
def lineup_index(zone: int, rotation: int) -> int:
    """Index into the rotation-1 lineup for the player standing in `zone` at `rotation`.

    Players rotate clockwise (Z1 -> Z6 -> Z5 -> Z4 -> Z3 -> Z2 -> Z1), so each
    step of rotation moves every player down one zone. Python's % is already
    non-negative, which keeps the index in 0..5 for any integer input.
    """
    return (zone - rotation) % NUM_ROTATIONS

def wrap_rotation(rotation: int) -> int:
    """Fold any integer onto 1..6 (rotation 7 is rotation 1 again)."""
    return (rotation - 1) % NUM_ROTATIONS + 1

def _check_lineup(lineup: Sequence[str]) -> None:
    if len(lineup) != len(ZONES):
        raise ValueError(f"lineup must have exactly {len(ZONES)} players, got {len(lineup)}")
    if any(not pid for pid in lineup):
        raise ValueError("lineup contains an empty slot")
    if len(set(lineup)) != len(lineup):
        raise ValueError(f"lineup players must be distinct: {', '.join(lineup)}")

def _check_rotation(rotation: int) -> None:
    if isinstance(rotation, bool) or not isinstance(rotation, int) or rotation not in ROTATIONS:
        raise ValueError(f"rotation must be an integer 1-6, got {rotation!r}")

def assign_zones(lineup: Sequence[str], rotation: int) -> Dict[int, str]:
    """zone (1..6) -> player id for the given rotation."""
    _check_lineup(lineup)
    _check_rotation(rotation)
    return {z: lineup[lineup_index(z, rotation)] for z in ZONES}

def assign_player_zones(lineup: Sequence[str], rotation: int) -> Dict[str, int]:
    """player id -> zone (1..6); inverse of assign_zones."""
    return {pid: z for z, pid in assign_zones(lineup, rotation).items()}


# -----------------------
# Lineup resolution
# -----------------------
def auto_detect_lineup(doc: RotationDocument) -> LineupDetection:
    """Guess the rotation-1 lineup from the servingBase rotation 1 formation.

    Each on-court, non-libero player goes to the nearest zone reference point.
    When two players land on the same zone the later one wins and a conflict
    message is recorded; slots nobody lands on stay None.
    """
    formation = doc.formation(DETECTION_PHASE, 1)
    if formation is None:
        raise LineupError(f"Cannot auto-detect lineup: {DETECTION_PHASE} rotation 1 not found")

    libero = doc.libero
    lineup: List[Optional[str]] = [None] * len(ZONES)
    conflicts: List[str] = []
    for pid, pos in formation.items():
        if is_bench(pos):
            continue
        if libero is not None and pid == libero.id:
            continue
        zone = nearest_zone(pos)
        prev = lineup[zone - 1]
        if prev is not None:
            logger.warning("zone_detection_conflict", zone=zone, previous=prev, player=pid)
            conflicts.append(f"Zone {zone} conflict between {prev} and {pid}")
        lineup[zone - 1] = pid

    return LineupDetection(lineup=lineup, conflicts=conflicts)

def parse_lineup(text: str) -> List[str]:
    return [s.strip() for s in text.split(",")]

def check_lineup_members(lineup: Sequence[str], doc: RotationDocument) -> None:
    try:
        _check_lineup(lineup)
    except ValueError as e:
        raise LineupError(str(e)) from e
    allowed = set(doc.non_libero_ids)
    unknown = [pid for pid in lineup if pid not in allowed]
    if unknown:
        raise LineupError(f"lineup players not in the non-libero roster: {', '.join(unknown)}")

def resolve_lineup(
    doc: RotationDocument,
    lineup: Union[str, Sequence[str], None] = None,
) -> LineupDetection:
    """Explicit lineup (comma string or sequence) when given, otherwise auto-detected.

    Raises LineupError when the result is not six distinct non-libero players.
    """
    if lineup is None:
        detection = auto_detect_lineup(doc)
        if not detection.complete:
            zones = ", ".join(f"Z{z}" for z in detection.missing_zones)
            raise LineupError(
                f"Auto-detected lineup is incomplete (no player found for {zones}); "
                "pass the lineup explicitly"
            )
    else:
        ids = parse_lineup(lineup) if isinstance(lineup, str) else list(lineup)
        detection = LineupDetection(lineup=ids)

    check_lineup_members(detection.lineup, doc)
    return detection


# -----------------------
# Rotation overview
# -----------------------
def front_row_setter(zones: Dict[int, str], players: Sequence[Player]) -> Optional[str]:
    setters = {p.id for p in players if p.role == SETTER_ROLE}
    return next((zones[z] for z in FRONT_ROW if zones[z] in setters), None)

def zone_table(lineup: Sequence[str], players: Sequence[Player]) -> List[Dict]:
    """Per-rotation summary: zone occupants, front row (Z2, Z3, Z4) and front-row setter."""
    rows = []
    for r in ROTATIONS:
        zones = assign_zones(lineup, r)
        rows.append({
            "rotation": r,
            "zones": zones,
            "front_row": [zones[z] for z in FRONT_ROW],
            "setter": front_row_setter(zones, players),
        })
    return rows
