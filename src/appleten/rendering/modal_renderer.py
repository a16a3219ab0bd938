from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Tuple

from appleten.components.game_state import AdMode, GameMode, GameState
from appleten.utils.session import get_score

if TYPE_CHECKING:
    from appleten.rendering.context import RenderContext

BUTTON_WIDTH = 220
BUTTON_HEIGHT = 48
BUTTON_SPACING = 14
OVERLAY_COLOR = (0, 0, 0, 170)
PANEL_COLOR = (40, 44, 52)
BUTTON_COLOR = (214, 48, 49)
BUTTON_MUTED_COLOR = (99, 110, 114)
TEXT_COLOR = (255, 255, 255)

MODAL_BUTTONS: Dict[GameMode, List[Tuple[str, str]]] = {
    GameMode.HOME: [("start", "Start"), ("recharge", "+ Lives")],
    GameMode.PAUSED: [("resume", "Resume"), ("restart", "Restart"), ("home", "Home")],
    GameMode.AD_CHOICE: [("watch_ad", "Watch ad"), ("decline_ad", "No thanks")],
    GameMode.TIMED_OUT: [("restart", "Play again"), ("home", "Home")],
    GameMode.CLEARED: [("restart", "Play again"), ("home", "Home")],
}


def modal_title(state: GameState, score: int) -> str:
    if state.mode == GameMode.HOME:
        return "Apple Ten"
    if state.mode == GameMode.PAUSED:
        return "Paused"
    if state.mode == GameMode.AD_CHOICE:
        if state.ad_mode == AdMode.REVIVE:
            return "Time's up! Watch an ad for +60s?"
        return "Watch an ad to refill your lives?"
    if state.mode == GameMode.AD_PLAYING:
        return "Ad playing..."
    if state.mode == GameMode.TIMED_OUT:
        return f"Time's up! Score {score}"
    if state.mode == GameMode.CLEARED:
        return f"Board cleared! Score {score}"
    return ""


def layout_buttons(mode: GameMode, window_width: int, window_height: int) -> List[Dict[str, Any]]:
    """Stack the buttons for ``mode`` centred in the window, first one on top."""
    if mode == GameMode.PLAYING:
        # Small pause button in the HUD strip.
        return [{
            "action": "menu",
            "label": "II",
            "left": window_width / 2 - 24,
            "bottom": window_height - 64,
            "width": 48,
            "height": 40,
        }]
    entries = []
    left = (window_width - BUTTON_WIDTH) / 2
    top = window_height / 2
    for action, label in MODAL_BUTTONS.get(mode, []):
        bottom = top - BUTTON_HEIGHT
        entries.append({
            "action": action,
            "label": label,
            "left": left,
            "bottom": bottom,
            "width": BUTTON_WIDTH,
            "height": BUTTON_HEIGHT,
        })
        top = bottom - BUTTON_SPACING
    return entries


class ModalRenderer:
    def __init__(self):
        self.layout_cache: List[Dict[str, Any]] = []

    def update_layout(self, state: GameState | None, window_width: int, window_height: int) -> None:
        self.layout_cache = layout_buttons(state.mode, window_width, window_height) if state else []

    def action_at_point(self, x: float, y: float) -> str | None:
        for entry in self.layout_cache:
            if entry["left"] <= x <= entry["left"] + entry["width"] and entry["bottom"] <= y <= entry["bottom"] + entry["height"]:
                return entry["action"]
        return None

    def render(self, arcade, ctx: RenderContext, state: GameState | None) -> None:
        if state is None:
            return
        if state.mode != GameMode.PLAYING:
            arcade.draw_lbwh_rectangle_filled(0, 0, ctx.window_width, ctx.window_height, OVERLAY_COLOR)
            score = get_score(ctx.world)
            title = modal_title(state, score.value if score is not None else 0)
            arcade.draw_text(
                title,
                ctx.window_width / 2,
                ctx.window_height / 2 + 60,
                TEXT_COLOR,
                20,
                anchor_x="center",
                width=int(ctx.window_width * 0.9),
                align="center",
                multiline=True,
            )
        for entry in self.layout_cache:
            color = BUTTON_MUTED_COLOR if entry["action"] in ("decline_ad", "home") else BUTTON_COLOR
            arcade.draw_lbwh_rectangle_filled(entry["left"], entry["bottom"], entry["width"], entry["height"], color)
            arcade.draw_text(
                entry["label"],
                entry["left"] + entry["width"] / 2,
                entry["bottom"] + entry["height"] / 2,
                TEXT_COLOR,
                16,
                anchor_x="center",
                anchor_y="center",
            )
