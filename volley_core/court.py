# volley_core/court.py
from __future__ import annotations
from html import escape
from typing import List, Optional, Sequence, Tuple

from .constants import (
    SVG_SCALE, COURT_OFFSET_X, COURT_OFFSET_Y, PLAYER_RADIUS, BENCH_X, COLORS,
    COURT_SIZE, ZONE_REFS,
)
from .geometry import is_bench
from .models import Player, RotationDocument

ATTACK_LINE = 300   # 3 m line, in court units from the net
SVG_WIDTH = 300
SVG_HEIGHT = 320


def scale_position(pos: Sequence[int]) -> Tuple[float, float]:
    """Court units -> SVG pixels. Benched players are pinned to the bench column."""
    y = COURT_OFFSET_Y + pos[1] * SVG_SCALE
    if is_bench(pos):
        return (BENCH_X, y)
    return (COURT_OFFSET_X + pos[0] * SVG_SCALE, y)

def player_color(player: Player, highlight: Optional[str] = None) -> str:
    if highlight == player.id:
        return COLORS["highlight"]
    if player.isLibero:
        return COLORS["libero"]
    return COLORS["player"]

def _court_markup(show_zones: bool) -> List[str]:
    side = COURT_SIZE * SVG_SCALE
    attack_y = COURT_OFFSET_Y + ATTACK_LINE * SVG_SCALE
    out = [
        f'<rect x="{COURT_OFFSET_X}" y="{COURT_OFFSET_Y}" width="{side:.1f}" height="{side:.1f}" '
        'fill="#2b6cb0" stroke="#f5f5f5" stroke-width="2"/>',
        f'<line x1="{COURT_OFFSET_X - 8}" y1="{COURT_OFFSET_Y}" x2="{COURT_OFFSET_X + side + 8:.1f}" '
        f'y2="{COURT_OFFSET_Y}" stroke="#f5f5f5" stroke-width="4"/>',
        f'<line x1="{COURT_OFFSET_X}" y1="{attack_y:.1f}" x2="{COURT_OFFSET_X + side:.1f}" '
        f'y2="{attack_y:.1f}" stroke="#f5f5f5" stroke-width="1" stroke-dasharray="4 3"/>',
    ]
    if show_zones:
        for zone, ref in ZONE_REFS.items():
            x, y = scale_position(ref)
            out.append(
                f'<text x="{x:.1f}" y="{y:.1f}" text-anchor="middle" fill="#f5f5f5" '
                f'fill-opacity="0.25" font-size="28" font-weight="700">{zone}</text>'
            )
    return out

def render_court_svg(
    doc: RotationDocument,
    key: str,
    rotation: int,
    highlight: Optional[str] = None,
    show_bench: bool = True,
    show_zones: bool = True,
) -> str:
    """SVG markup for one phase/rotation; players without a position are not drawn."""
    formation = doc.formation(key, rotation) or {}
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{SVG_WIDTH}" height="{SVG_HEIGHT}" '
        f'viewBox="0 0 {SVG_WIDTH} {SVG_HEIGHT}">'
    ]
    parts += _court_markup(show_zones)

    for player in doc.players:
        pos = formation.get(player.id)
        if pos is None:
            continue
        bench = is_bench(pos)
        if bench and not show_bench:
            continue
        x, y = scale_position(pos)
        opacity = "0.5" if bench else "1"
        parts.append(
            f'<g transform="translate({x:.1f}, {y:.1f})" opacity="{opacity}" data-player="{escape(player.id)}">'
            f'<circle r="{PLAYER_RADIUS}" fill="{player_color(player, highlight)}" '
            f'stroke="{COLORS["text"]}" stroke-width="2"/>'
            f'<text text-anchor="middle" dominant-baseline="central" fill="{COLORS["text"]}" '
            f'font-size="11" font-weight="700">{escape(player.display)}</text>'
            "</g>"
        )
    parts.append("</svg>")
    return "".join(parts)
