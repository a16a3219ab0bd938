from __future__ import annotations

from typing import TYPE_CHECKING

from appleten.ui.layout import cell_center

if TYPE_CHECKING:
    from appleten.rendering.context import RenderContext

APPLE_COLOR = (214, 48, 49)
APPLE_SELECTED_COLOR = (253, 203, 110)
BOARD_BACKGROUND = (34, 70, 40)
DIGIT_COLOR = (255, 255, 255)
PARTICLE_COLOR = (255, 140, 90)


class BoardRenderer:
    def __init__(self, padding: int = 4):
        self._padding = padding

    def render(self, arcade, ctx: RenderContext) -> None:
        geom = ctx.geometry
        arcade.draw_lbwh_rectangle_filled(geom.left, geom.bottom, geom.width, geom.height, BOARD_BACKGROUND)
        radius = max(2.0, geom.tile_size / 2 - self._padding)
        font_size = max(8, int(geom.tile_size * 0.4))
        for row, values in enumerate(ctx.cells):
            for col, value in enumerate(values):
                if value == 0:
                    continue
                cx, cy = cell_center(geom, row, col)
                color = APPLE_SELECTED_COLOR if (row, col) in ctx.selected else APPLE_COLOR
                arcade.draw_circle_filled(cx, cy, radius, color)
                arcade.draw_text(str(value), cx, cy, DIGIT_COLOR, font_size, anchor_x="center", anchor_y="center", bold=True)
        self._render_bursts(arcade, ctx, radius, font_size)

    def _render_bursts(self, arcade, ctx: RenderContext, radius: float, font_size: int) -> None:
        geom = ctx.geometry
        for burst in ctx.bursts:
            cx, cy = cell_center(geom, *burst.pos)
            p = burst.particle_progress
            if p < 1.0:
                alpha = int(255 * (1.0 - p))
                for particle in burst.particles:
                    arcade.draw_circle_filled(
                        cx + particle.dx * p,
                        cy + particle.dy * p,
                        max(1.0, radius * 0.2),
                        (*PARTICLE_COLOR, alpha),
                    )
            f = burst.fall_progress
            if f < 1.0:
                # Ease-in drop with a sideways drift.
                fx = cx + burst.drift * geom.tile_size * f
                fy = cy - geom.tile_size * 6 * f * f
                alpha = int(255 * (1.0 - f))
                arcade.draw_circle_filled(fx, fy, radius, (*APPLE_COLOR, alpha))
                arcade.draw_text(str(burst.value), fx, fy, (*DIGIT_COLOR, alpha), font_size, anchor_x="center", anchor_y="center")
