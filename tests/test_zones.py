# FILE: tests/test_zones.py
import pytest

from volley_core.engine_test_helpers import LINEUP_42, grid_formation, quick_document, quick_player
from volley_core.errors import LineupError
from volley_core.zones import (
    assign_player_zones, assign_zones, auto_detect_lineup, lineup_index, resolve_lineup,
    wrap_rotation, zone_table,
)

LINEUPS = [
    LINEUP_42,
    ["a", "b", "c", "d", "e", "f"],
    ["f", "d", "b", "a", "c", "e"],
]


def test_rotation_2_worked_example():
    assert assign_zones(LINEUP_42, 2) == {1: "h1", 2: "s1", 3: "m1", 4: "h2", 5: "s2", 6: "m2"}

def test_rotation_1_is_the_lineup():
    assert assign_zones(LINEUP_42, 1) == {1: "s1", 2: "m1", 3: "h2", 4: "s2", 5: "m2", 6: "h1"}

@pytest.mark.parametrize("lineup", LINEUPS)
def test_every_rotation_is_a_bijection(lineup):
    for r in range(1, 7):
        zones = assign_zones(lineup, r)
        assert sorted(zones) == [1, 2, 3, 4, 5, 6]
        assert sorted(zones.values()) == sorted(lineup)

def test_index_is_periodic_and_non_negative():
    for z in range(1, 7):
        for r in range(-12, 13):
            assert lineup_index(z, r) == lineup_index(z, r + 6)
            assert 0 <= lineup_index(z, r) < 6

@pytest.mark.parametrize("lineup", LINEUPS)
def test_assignment_repeats_after_six_rotations(lineup):
    for r in range(1, 7):
        assert assign_zones(lineup, r) == assign_zones(lineup, wrap_rotation(r + 6))

@pytest.mark.parametrize("lineup", LINEUPS)
def test_zone6_player_serves_next_rotation(lineup):
    for r in range(1, 7):
        assert assign_zones(lineup, r)[6] == assign_zones(lineup, wrap_rotation(r + 1))[1]

@pytest.mark.parametrize("lineup", LINEUPS)
def test_player_zones_invert_zone_assignment(lineup):
    for r in range(1, 7):
        zones = assign_zones(lineup, r)
        players = assign_player_zones(lineup, r)
        assert {z: p for p, z in players.items()} == zones
        assert all(zones[players[p]] == p for p in lineup)

@pytest.mark.parametrize("rotation", [0, 7, -1, "1", 1.0, True])
def test_out_of_range_rotation_rejected(rotation):
    with pytest.raises(ValueError):
        assign_zones(LINEUP_42, rotation)

@pytest.mark.parametrize("lineup", [
    ["a", "b", "c", "d", "e"],
    ["a", "b", "c", "d", "e", "a"],
    ["a", "b", "c", "d", "e", ""],
])
def test_bad_lineup_rejected(lineup):
    with pytest.raises(ValueError):
        assign_zones(lineup, 1)

def test_auto_detect_from_serving_base():
    doc = quick_document()
    detection = auto_detect_lineup(doc)
    assert detection.lineup == LINEUP_42
    assert detection.conflicts == []
    assert detection.complete

def test_auto_detect_skips_bench_and_libero():
    doc = quick_document(libero="l")
    formation = doc.positions["servingBase"][1]
    formation["l"] = (700, 650)   # libero standing near zone 1
    assert auto_detect_lineup(doc).lineup == LINEUP_42

def test_auto_detect_conflict_later_player_wins():
    doc = quick_document()
    doc.positions["servingBase"][1]["m1"] = (690, 590)   # m1 now nearest zone 1 too
    detection = auto_detect_lineup(doc)
    assert detection.conflicts == ["Zone 1 conflict between s1 and m1"]
    assert detection.lineup[0] == "m1"
    assert detection.lineup[1] is None
    assert not detection.complete
    assert detection.missing_zones == [2]

def test_incomplete_detection_is_fatal():
    doc = quick_document()
    doc.positions["servingBase"][1]["m1"] = (690, 590)
    with pytest.raises(LineupError, match="Z2"):
        resolve_lineup(doc)

def test_missing_serving_base_is_fatal():
    doc = quick_document(phases=("receivingBase",))
    with pytest.raises(LineupError, match="servingBase rotation 1 not found"):
        auto_detect_lineup(doc)

def test_resolve_explicit_lineup_string():
    doc = quick_document()
    detection = resolve_lineup(doc, " s1, m1 ,h2,s2,m2,h1")
    assert detection.lineup == LINEUP_42
    assert detection.conflicts == []

def test_resolve_rejects_unknown_and_libero_ids():
    doc = quick_document(libero="l")
    with pytest.raises(LineupError, match="zz"):
        resolve_lineup(doc, ["s1", "m1", "h2", "s2", "m2", "zz"])
    with pytest.raises(LineupError, match="non-libero roster: l$"):
        resolve_lineup(doc, ["s1", "m1", "h2", "s2", "m2", "l"])
    with pytest.raises(LineupError):
        resolve_lineup(doc, "s1,m1,h2")

def test_zone_table_front_row_setter():
    players = [quick_player("s1", "setter"), quick_player("s2", "setter"), quick_player("m1", "middle")]
    rows = zone_table(LINEUP_42, players)
    assert [row["rotation"] for row in rows] == [1, 2, 3, 4, 5, 6]
    assert rows[0]["front_row"] == ["m1", "h2", "s2"]
    assert rows[0]["setter"] == "s2"
    # rotation 2: front row s1, m1, h2
    assert rows[1]["setter"] == "s1"

def test_grid_helper_matches_zone_centers():
    f = grid_formation(LINEUP_42, 1)
    assert f["s1"] == (700, 600)
    assert f["s2"] == (200, 100)
