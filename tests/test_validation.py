# FILE: tests/test_validation.py
import pytest

from volley_core.config import SAMPLE_LINEUP, sample_document
from volley_core.engine_test_helpers import LINEUP_42, grid_formation, quick_document, quick_player
from volley_core.errors import LineupError
from volley_core.models import AppConfig, RotationDocument
from volley_core.validation import run_self_test, validate_document


def test_sample_document_passes_cleanly():
    doc = sample_document()
    report = validate_document(doc)
    assert report.lineup == SAMPLE_LINEUP
    assert report.libero == "l"
    assert report.findings == []
    assert report.passed and report.exit_code == 0

def test_missing_rotation_is_one_error_and_pass_continues():
    doc = quick_document()
    del doc.positions["receivingBase"][3]
    # s1 is Z4 in rotation 4; pushing it right of Z3 breaks a lateral rule
    doc.positions["receivingBase"][4]["s1"] = (700, 50)
    report = validate_document(doc)
    missing = [f for f in report.errors if f.message.startswith("MISSING")]
    assert len(missing) == 1
    assert (missing[0].phase, missing[0].rotation) == ("receivingBase", 3)
    assert missing[0].message == "MISSING: receivingBase rotation 3"
    later = report.findings_for("receivingBase", 4)
    assert len(later) == 1 and "Z4 (LF) must be left of Z3 (CF)" in later[0].message
    assert report.exit_code == 1

def test_non_overlap_phase_still_gets_structural_checks():
    doc = quick_document(phases=("servingBase", "receivingSet"))
    doc.positions["receivingSet"][2]["s1"] = (-500, 100)   # benched: no warning
    doc.positions["receivingSet"][5]["h1"] = (1000, 100)
    report = validate_document(doc)
    assert [(f.phase, f.rotation) for f in report.findings] == [("receivingSet", 5)]
    assert report.warning_count == 1 and report.passed

def test_explicit_lineup_used_over_detection():
    doc = quick_document()
    # every player one zone off from where the grid put them
    report = validate_document(doc, "m1,h2,s2,m2,h1,s1")
    assert report.lineup == ["m1", "h2", "s2", "m2", "h1", "s1"]
    assert report.error_count > 0

def test_explicit_lineup_as_sequence():
    report = validate_document(quick_document(), LINEUP_42)
    assert report.lineup == LINEUP_42 and report.findings == []

def test_detection_conflict_becomes_warning():
    base = quick_document(phases=("servingBase",))
    # x lands on Z1 first, s1 overwrites it later in the same formation
    r1 = {"x": (690, 590), **grid_formation(LINEUP_42, 1)}
    positions = {"servingBase": {1: r1}}
    doc = RotationDocument(name="Conflict", players=base.players + [quick_player("x")],
                           phases=base.phases, positions=positions)
    report = validate_document(doc)
    assert report.lineup == LINEUP_42
    conflicts = [f for f in report.warnings if "conflict" in f.message]
    assert len(conflicts) == 1
    assert conflicts[0].message == "Zone 1 conflict between x and s1"
    assert (conflicts[0].phase, conflicts[0].rotation) == ("servingBase", 1)

def test_incomplete_detection_is_fatal():
    doc = quick_document()
    doc.positions["servingBase"][1]["h1"] = (650, 600)   # drifts from Z6 onto Z1
    with pytest.raises(LineupError, match="Z6"):
        validate_document(doc)

def test_missing_detection_phase_needs_explicit_lineup():
    doc = quick_document(phases=("receivingBase",))
    with pytest.raises(LineupError, match="servingBase rotation 1 not found"):
        validate_document(doc)
    assert validate_document(doc, LINEUP_42).passed

def test_unknown_lineup_player_is_fatal():
    with pytest.raises(LineupError, match="zz"):
        validate_document(quick_document(), "s1,m1,h2,s2,m2,zz")

def test_validation_does_not_mutate_document():
    doc = sample_document()
    before = doc.model_dump()
    validate_document(doc, config=AppConfig(level_is_legal=True))
    assert doc.model_dump() == before

def test_self_test_all_pass():
    results = run_self_test()
    assert results["tests"]
    assert all(ok for _, ok in results["tests"])
