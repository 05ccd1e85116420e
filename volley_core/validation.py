# volley_core/validation.py
from __future__ import annotations
from typing import Optional, Sequence, Union

from .constants import DETECTION_PHASE, ROTATIONS
from .logging_utils import get_logger
from .models import AppConfig, Finding, RotationDocument, ValidationReport
from .overlap import check_formation
from .zones import assign_player_zones, assign_zones, lineup_index, resolve_lineup

logger = get_logger(__name__)


def validate_document(
    doc: RotationDocument,
    lineup: Union[str, Sequence[str], None] = None,
    config: Optional[AppConfig] = None,
) -> ValidationReport:
    """
    Check every phase present in the document across all six rotations.

    Missing phase/rotation entries are recorded as errors and the pass goes on.
    Lineup problems (LineupError) are fatal and propagate to the caller.
    """
    cfg = config or AppConfig()
    detection = resolve_lineup(doc, lineup)
    lineup_ids = list(detection.lineup)
    libero = doc.libero
    libero_id = libero.id if libero else None
    roster = doc.player_ids

    logger.info("validation_started", document=doc.name, lineup=lineup_ids, libero=libero_id)

    findings = [
        Finding(severity="warning", phase=DETECTION_PHASE, rotation=1, message=msg)
        for msg in detection.conflicts
    ]
    for key in doc.positions:
        for r in ROTATIONS:
            formation = doc.formation(key, r)
            if formation is None:
                findings.append(Finding(
                    severity="error", phase=key, rotation=r,
                    message=f"MISSING: {key} rotation {r}",
                ))
                continue
            found = check_formation(key, r, formation, lineup_ids, roster, libero_id, cfg)
            logger.debug("formation_checked", phase=key, rotation=r, findings=len(found))
            findings.extend(found)

    report = ValidationReport(
        document_name=doc.name,
        lineup=lineup_ids,
        libero=libero_id,
        findings=findings,
    )
    logger.info(
        "validation_finished",
        document=doc.name,
        errors=report.error_count,
        warnings=report.warning_count,
    )
    return report


def run_self_test():
    """
    Run a basic suite of engine self-tests.
    """
    results = {"tests": []}
    lineup = ["s1", "m1", "h2", "s2", "m2", "h1"]
    r2 = assign_zones(lineup, 2)
    results["tests"].append((
        "Rotation 2 shifts clockwise",
        r2 == {1: "h1", 2: "s1", 3: "m1", 4: "h2", 5: "s2", 6: "m2"},
    ))
    results["tests"].append((
        "Rotation index is periodic",
        all(lineup_index(z, r) == lineup_index(z, r + 6) for z in range(1, 7) for r in ROTATIONS),
    ))
    results["tests"].append((
        "Player zones invert zone assignment",
        all(
            {z: p for p, z in assign_player_zones(lineup, r).items()} == assign_zones(lineup, r)
            for r in ROTATIONS
        ),
    ))
    base = {"a": (200, 100), "b": (200, 600)}
    swapped = {"a": (200, 600), "b": (200, 100)}
    two = ["x", "y", "z", "a", "b", "w"]   # a in Z4, b in Z5 at rotation 1
    ok = check_formation("receivingBase", 1, base, two, ["a", "b"])
    bad = check_formation("receivingBase", 1, swapped, two, ["a", "b"])
    results["tests"].append(("Front/back overlap detected", not ok and len(bad) == 1))
    return results
