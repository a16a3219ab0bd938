from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from appleten.constants import GAUGE_GREEN_ABOVE, GAUGE_YELLOW_ABOVE, HUD_HEIGHT
from appleten.utils.life_economy import format_mmss
from appleten.utils.session import get_countdown, get_lives, get_score

if TYPE_CHECKING:
    from appleten.rendering.context import RenderContext

GAUGE_GREEN = (46, 204, 113)
GAUGE_YELLOW = (241, 196, 15)
GAUGE_RED = (231, 76, 60)
TEXT_COLOR = (235, 235, 235)


def gauge_color(percent: float) -> Tuple[int, int, int]:
    if percent > GAUGE_GREEN_ABOVE:
        return GAUGE_GREEN
    if percent > GAUGE_YELLOW_ABOVE:
        return GAUGE_YELLOW
    return GAUGE_RED


class HudRenderer:
    """Score, lives and the vertical time gauge beside the board."""

    def __init__(self, time_to_next_refill=None):
        # Optional callable returning ms until the next life.
        self._time_to_next_refill = time_to_next_refill

    def render(self, arcade, ctx: RenderContext) -> None:
        world = ctx.world
        top = ctx.window_height - 24
        score = get_score(world)
        lives = get_lives(world)
        countdown = get_countdown(world)
        if score is not None:
            arcade.draw_text(f"Score {score.value}", 24, top, TEXT_COLOR, 18, anchor_y="top")
        if lives is not None:
            text = f"Lives {lives.current}/{lives.max_lives}"
            if not lives.is_full and self._time_to_next_refill is not None:
                text += f"  next in {format_mmss(self._time_to_next_refill())}"
            arcade.draw_text(text, ctx.window_width - 24, top, TEXT_COLOR, 14, anchor_x="right", anchor_y="top")
        if countdown is None:
            return
        geom = ctx.geometry
        pct = countdown.percent
        gauge_w = 12
        gauge_left = min(geom.right + 8, ctx.window_width - gauge_w - 4)
        gauge_h = geom.height
        arcade.draw_lbwh_rectangle_outline(gauge_left, geom.bottom, gauge_w, gauge_h, TEXT_COLOR, border_width=1)
        fill_h = gauge_h * pct / 100.0
        if fill_h > 0:
            arcade.draw_lbwh_rectangle_filled(gauge_left, geom.bottom, gauge_w, fill_h, gauge_color(pct))
        seconds = countdown.remaining_ms / 1000.0
        arcade.draw_text(f"{seconds:5.1f}s", 24, ctx.window_height - HUD_HEIGHT / 2, TEXT_COLOR, 14)
