# FILE: tests/test_court.py
from volley_core.constants import BENCH_X, COLORS, COURT_OFFSET_X, COURT_OFFSET_Y
from volley_core.court import player_color, render_court_svg, scale_position
from volley_core.engine_test_helpers import quick_document, quick_player


def test_scale_position():
    assert scale_position((0, 0)) == (COURT_OFFSET_X, COURT_OFFSET_Y)
    x, y = scale_position((900, 900))
    assert round(x) == COURT_OFFSET_X + 250 and round(y) == COURT_OFFSET_Y + 250
    assert scale_position((-64, 0))[0] == BENCH_X

def test_player_color():
    p = quick_player("a")
    lib = quick_player("l", "libero", libero=True)
    assert player_color(p) == COLORS["player"]
    assert player_color(lib) == COLORS["libero"]
    assert player_color(lib, highlight="l") == COLORS["highlight"]

def test_render_draws_each_positioned_player():
    doc = quick_document(libero="l")
    svg = render_court_svg(doc, "servingBase", 1)
    assert svg.startswith("<svg") and svg.endswith("</svg>")
    assert svg.count("data-player=") == 7
    assert 'data-player="l"' in svg and 'opacity="0.5"' in svg
    assert ">S1</text>" in svg

def test_render_hides_bench_and_zones():
    doc = quick_document(libero="l")
    svg = render_court_svg(doc, "servingBase", 1, show_bench=False, show_zones=False)
    assert svg.count("data-player=") == 6
    assert 'font-size="28"' not in svg

def test_render_empty_slot_draws_court_only():
    svg = render_court_svg(quick_document(), "receivingAttack", 2)
    assert "data-player" not in svg and "<rect" in svg

def test_highlight_and_escaping():
    doc = quick_document()
    doc.players[0].label = "<S&1>"
    svg = render_court_svg(doc, "servingBase", 1, highlight="m1")
    assert "&lt;S&amp;1&gt;" in svg
    assert COLORS["highlight"] in svg
