from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from appleten.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    HUD_HEIGHT,
    MIN_TILE_SIZE,
)


@dataclass(slots=True)
class BoardGeometry:
    tile_size: int
    left: float
    bottom: float
    rows: int
    cols: int

    @property
    def width(self) -> float:
        return self.tile_size * self.cols

    @property
    def height(self) -> float:
        return self.tile_size * self.rows

    @property
    def top(self) -> float:
        return self.bottom + self.height

    @property
    def right(self) -> float:
        return self.left + self.width


def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int) -> BoardGeometry:
    """Fit the board into the window below the HUD strip.

    Shared by rendering and input so pointer mapping matches what is drawn.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / max(1, cols)
    tile_by_h = max_board_h / max(1, rows)
    tile_size = int(min(tile_by_w, tile_by_h))
    if tile_size < MIN_TILE_SIZE:
        tile_size = MIN_TILE_SIZE
    left = (window_width - cols * tile_size) / 2
    return BoardGeometry(tile_size=tile_size, left=left, bottom=BOTTOM_MARGIN, rows=rows, cols=cols)


def cell_at_point(geometry: BoardGeometry, x: float, y: float) -> Tuple[int, int] | None:
    """Map window coordinates to (row, col); row 0 is the top row on screen."""
    if x < geometry.left or x >= geometry.right:
        return None
    if y < geometry.bottom or y >= geometry.top:
        return None
    col = int((x - geometry.left) // geometry.tile_size)
    row_from_bottom = int((y - geometry.bottom) // geometry.tile_size)
    return geometry.rows - 1 - row_from_bottom, col


def cell_center(geometry: BoardGeometry, row: int, col: int) -> Tuple[float, float]:
    cx = geometry.left + col * geometry.tile_size + geometry.tile_size / 2
    cy = geometry.bottom + (geometry.rows - 1 - row) * geometry.tile_size + geometry.tile_size / 2
    return cx, cy
