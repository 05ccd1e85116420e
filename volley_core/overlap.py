# volley_core/overlap.py
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import OVERLAP_RULES, SERVER_ZONE
from .geometry import is_bench, is_serving, is_unusual
from .models import AppConfig, Coordinate, Finding, Formation
from .zones import assign_player_zones, assign_zones

Occupant = Tuple[str, Coordinate]   # (player_id, position)


def _fmt(pos: Coordinate) -> str:
    return f"[{pos[0]}, {pos[1]}]"


# -----------------------
# Structural checks
# -----------------------
def missing_players(formation: Formation, roster: Sequence[str]) -> List[str]:
    return [f"Player {pid} missing" for pid in roster if pid not in formation]

def duplicate_positions(formation: Formation) -> List[str]:
    out = []
    seen: Dict[Coordinate, str] = {}
    for pid, pos in formation.items():
        key = tuple(pos)
        if key in seen and not is_bench(pos):
            out.append(f"{pid} and {seen[key]} at same position {_fmt(pos)}")
        seen[key] = pid
    return out

def unusual_positions(formation: Formation, config: AppConfig) -> List[str]:
    out = []
    for pid, pos in formation.items():
        if is_bench(pos) or is_serving(pos, config.serving_line):
            continue
        if is_unusual(pos, config.court_size, config.court_tolerance):
            out.append(f"{pid} at unusual position {_fmt(pos)}")
    return out


# -----------------------
# Overlap rules
# -----------------------
def occupied_zones(
    formation: Formation,
    lineup: Sequence[str],
    rotation: int,
    libero: Optional[str] = None,
) -> Tuple[Dict[int, Occupant], List[str]]:
    """zone -> (player, position) for every on-court zone occupant.

    A libero on court takes over the zone of the single benched lineup player.
    With more than one lineup player benched the swap is ambiguous: no
    substitution is made and an error message is returned instead.
    """
    zones = assign_zones(lineup, rotation)
    occupied: Dict[int, Occupant] = {}
    for z, pid in zones.items():
        pos = formation.get(pid)
        if pos is not None and not is_bench(pos):
            occupied[z] = (pid, pos)

    problems: List[str] = []
    lib_pos = formation.get(libero) if libero else None
    if lib_pos is not None and not is_bench(lib_pos):
        benched = [pid for pid, pos in formation.items() if is_bench(pos) and pid in lineup]
        if len(benched) > 1:
            problems.append(
                f"Ambiguous libero substitution: {libero} is on court while "
                f"{', '.join(benched)} are all benched"
            )
        elif benched:
            zone = assign_player_zones(lineup, rotation)[benched[0]]
            occupied[zone] = (libero, lib_pos)
    return occupied, problems

def _violates(front_value: int, back_value: int, level_is_legal: bool) -> bool:
    if level_is_legal:
        return front_value > back_value
    return front_value >= back_value

def overlap_errors(
    phase: str,
    rotation: int,
    formation: Formation,
    lineup: Sequence[str],
    libero: Optional[str],
    config: AppConfig,
) -> List[str]:
    occupied, errors = occupied_zones(formation, lineup, rotation, libero)

    server_pos = formation.get(assign_zones(lineup, rotation)[SERVER_ZONE])
    server_exempt = (
        phase == config.serve_phase
        and server_pos is not None
        and is_serving(server_pos, config.serving_line)
    )
    op = ">" if config.level_is_legal else ">="

    for front, back, axis, desc in OVERLAP_RULES:
        if server_exempt and SERVER_ZONE in (front, back):
            continue
        if front not in occupied or back not in occupied:
            continue
        front_pid, front_pos = occupied[front]
        back_pid, back_pos = occupied[back]
        i = 1 if axis == "y" else 0
        if _violates(front_pos[i], back_pos[i], config.level_is_legal):
            errors.append(
                f"OVERLAP: {desc}: "
                f"{front_pid}(Z{front}) {axis}={front_pos[i]} {op} "
                f"{back_pid}(Z{back}) {axis}={back_pos[i]}"
            )
    return errors


# -----------------------
# Entry point
# -----------------------
def check_formation(
    phase: str,
    rotation: int,
    formation: Formation,
    lineup: Sequence[str],
    roster: Sequence[str],
    libero: Optional[str] = None,
    config: Optional[AppConfig] = None,
) -> List[Finding]:
    """
    Check one phase/rotation formation. Errors come first, then warnings.
    An empty list means the formation passes.
    """
    cfg = config or AppConfig()
    errors = missing_players(formation, roster)
    warnings = duplicate_positions(formation) + unusual_positions(formation, cfg)

    if phase in cfg.overlap_phases:
        errors += overlap_errors(phase, rotation, formation, lineup, libero, cfg)

    if phase == cfg.serve_phase:
        server = assign_zones(lineup, rotation)[SERVER_ZONE]
        pos = formation.get(server)
        if pos is not None and not is_serving(pos, cfg.serving_line):
            warnings.append(
                f"Server {server} not at serving position "
                f"(y={pos[1]}, expected y>{cfg.serving_line})"
            )

    return (
        [Finding(severity="error", phase=phase, rotation=rotation, message=m) for m in errors]
        + [Finding(severity="warning", phase=phase, rotation=rotation, message=m) for m in warnings]
    )
