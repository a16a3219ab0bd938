from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set, Tuple

from esper import World

from appleten.components.clear_burst import ClearBurst
from appleten.ui.layout import BoardGeometry, compute_board_geometry
from appleten.utils.session import get_board, get_selection

BoardPos = Tuple[int, int]


@dataclass(slots=True)
class RenderContext:
    """Frame-scoped rendering data shared across renderer subcomponents."""

    world: World
    window_width: int
    window_height: int
    geometry: BoardGeometry
    cells: List[List[int]]
    selected: Set[BoardPos] = field(default_factory=set)
    bursts: List[ClearBurst] = field(default_factory=list)


def build_render_context(world: World, window_width: int, window_height: int) -> RenderContext:
    """Populate a RenderContext for the current frame."""
    board = get_board(world)
    rows = board.rows if board is not None else 0
    cols = board.cols if board is not None else 0
    selection = get_selection(world)
    return RenderContext(
        world=world,
        window_width=window_width,
        window_height=window_height,
        geometry=compute_board_geometry(window_width, window_height, rows, cols),
        cells=board.cells if board is not None else [],
        selected=set(selection.cells()) if selection is not None else set(),
        bursts=[burst for _, burst in world.get_component(ClearBurst)],
    )
