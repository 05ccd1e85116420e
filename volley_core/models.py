# volley_core/models.py
from __future__ import annotations
from copy import deepcopy
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from .constants import (
    COURT_SIZE, COURT_TOLERANCE, SERVING_LINE, BENCH_POSITION,
    DEFAULT_PHASES, OVERLAP_PHASES, SERVE_PHASE, ROLES, ROTATIONS, ZONES,
    normalize_phase, normalize_role,
)


class Mode(str, Enum):
    SERVING = "serving"
    RECEIVING = "receiving"


class PhaseName(str, Enum):
    BASE = "base"
    SERVE = "serve"
    SWITCH = "switch"
    PASS = "pass"
    SET = "set"
    ATTACK = "attack"


def phase_key(mode, phase) -> str:
    """Build the positions key for a mode/phase pair, e.g. ('receiving', 'pass') -> 'receivingPass'."""
    m = Mode(mode)
    p = PhaseName(normalize_phase(phase.value if isinstance(phase, PhaseName) else phase))
    return m.value + p.value.capitalize()


_PHASE_KEYS: Dict[str, Tuple[Mode, PhaseName]] = {
    phase_key(m, p): (m, p) for m in Mode for p in PhaseName
}
ALL_PHASE_KEYS: List[str] = list(_PHASE_KEYS)


def split_phase_key(key: str) -> Tuple[Mode, PhaseName]:
    try:
        return _PHASE_KEYS[key]
    except KeyError:
        raise ValueError(f"Unknown phase key: {key!r}") from None


Coordinate = Tuple[int, int]
Formation = Dict[str, Coordinate]          # player_id -> (x, y)
Severity = Literal["error", "warning"]


class Player(BaseModel):
    id: str
    label: str = ""
    role: str = "outside"
    isLibero: bool = False

    @field_validator("id")
    @classmethod
    def _nonempty_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("player id must be a non-empty string")
        return v

    @field_validator("role")
    @classmethod
    def _known_role(cls, v: str) -> str:
        r = normalize_role(v)
        if r not in ROLES:
            raise ValueError(f"unknown role {v!r}; expected one of {', '.join(ROLES)}")
        return r

    @property
    def display(self) -> str:
        return self.label or self.id


class RotationDocument(BaseModel):
    name: str = "Untitled Rotation"
    description: str = ""
    players: List[Player] = Field(default_factory=list)
    phases: Dict[str, List[str]] = Field(default_factory=lambda: deepcopy(DEFAULT_PHASES))
    positions: Dict[str, Dict[int, Formation]] = Field(default_factory=dict)  # phaseKey -> rotation -> formation

    @field_validator("players")
    @classmethod
    def _unique_ids(cls, v: List[Player]) -> List[Player]:
        seen = set()
        dupes = []
        for p in v:
            if p.id in seen:
                dupes.append(p.id)
            seen.add(p.id)
        if dupes:
            raise ValueError(f"duplicate player ids: {', '.join(dupes)}")
        return v

    @field_validator("phases")
    @classmethod
    def _known_phases(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        out: Dict[str, List[str]] = {}
        for mode, names in v.items():
            m = Mode(normalize_phase(mode)).value
            out[m] = [PhaseName(normalize_phase(n)).value for n in names]
        return out

    @field_validator("positions")
    @classmethod
    def _known_keys(cls, v: Dict[str, Dict[int, Formation]]) -> Dict[str, Dict[int, Formation]]:
        for key, rotations in v.items():
            split_phase_key(key)
            bad = [r for r in rotations if r not in ROTATIONS]
            if bad:
                raise ValueError(f"{key}: rotation keys must be 1-6, got {bad}")
        return v

    # ---- lookups ----
    @property
    def player_ids(self) -> List[str]:
        return [p.id for p in self.players]

    @property
    def libero(self) -> Optional[Player]:
        return next((p for p in self.players if p.isLibero), None)

    @property
    def non_libero_ids(self) -> List[str]:
        return [p.id for p in self.players if not p.isLibero]

    def player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def formation(self, key: str, rotation: int) -> Optional[Formation]:
        """Positions for one phase/rotation, or None when the document has no entry."""
        return self.positions.get(key, {}).get(rotation)


class Finding(BaseModel):
    severity: Severity
    phase: str
    rotation: int
    message: str


class ValidationReport(BaseModel):
    document_name: str = ""
    lineup: List[str] = Field(default_factory=list)
    libero: Optional[str] = None
    findings: List[Finding] = Field(default_factory=list)

    @property
    def errors(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == "error"]

    @property
    def warnings(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == "warning"]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def passed(self) -> bool:
        return self.error_count == 0

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def findings_for(self, phase: str, rotation: int) -> List[Finding]:
        return [f for f in self.findings if f.phase == phase and f.rotation == rotation]


class LineupDetection(BaseModel):
    lineup: List[Optional[str]] = Field(default_factory=lambda: [None] * len(ZONES))
    conflicts: List[str] = Field(default_factory=list)

    @property
    def complete(self) -> bool:
        return all(pid is not None for pid in self.lineup)

    @property
    def missing_zones(self) -> List[int]:
        return [z for z, pid in zip(ZONES, self.lineup) if pid is None]


class AppConfig(BaseModel):
    court_size: int = COURT_SIZE
    court_tolerance: int = COURT_TOLERANCE   # +/- band before a coordinate is "unusual"
    serving_line: int = SERVING_LINE         # y beyond this is the serving area
    bench_x: int = BENCH_POSITION[0]
    bench_y: int = BENCH_POSITION[1]
    overlap_phases: List[str] = Field(default_factory=lambda: list(OVERLAP_PHASES))
    serve_phase: str = SERVE_PHASE
    level_is_legal: bool = False             # False: exact alignment counts as an overlap

    @field_validator("overlap_phases")
    @classmethod
    def _known_overlap_phases(cls, v: List[str]) -> List[str]:
        for key in v:
            split_phase_key(key)
        return v

    @field_validator("serve_phase")
    @classmethod
    def _known_serve_phase(cls, v: str) -> str:
        split_phase_key(v)
        return v

    @property
    def bench_position(self) -> Coordinate:
        return (self.bench_x, self.bench_y)
