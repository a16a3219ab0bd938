"""Rules deciding whether a dragged rectangle of apples may be cleared."""
from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from appleten.utils.block_catalog import TARGET_SUM

Cell = Tuple[int, int]
Grid = Sequence[Sequence[int]]


class SelectionVerdict(Enum):
    VALID = "valid"
    TOO_SMALL = "too_small"
    OUT_OF_BOUNDS = "out_of_bounds"
    WRONG_SUM = "wrong_sum"
    NOT_RECTANGLE = "not_rectangle"
    CONTAINS_EMPTY = "contains_empty"

    @property
    def ok(self) -> bool:
        return self is SelectionVerdict.VALID


def _in_grid(grid: Grid, row: int, col: int) -> bool:
    return 0 <= row < len(grid) and 0 <= col < len(grid[row])


def is_rectangle(cells: Iterable[Cell]) -> bool:
    """True when ``cells`` fill their own bounding box exactly."""
    unique = set(cells)
    if not unique:
        return False
    rows = [r for r, _ in unique]
    cols = [c for _, c in unique]
    height = max(rows) - min(rows) + 1
    width = max(cols) - min(cols) + 1
    return height * width == len(unique)


def check_selection(selection: Iterable[Cell], grid: Grid, *, allow_empty: bool = False) -> SelectionVerdict:
    cells: List[Cell] = list(dict.fromkeys(selection))
    if len(cells) < 2:
        return SelectionVerdict.TOO_SMALL
    if any(not _in_grid(grid, r, c) for r, c in cells):
        return SelectionVerdict.OUT_OF_BOUNDS
    if sum(grid[r][c] for r, c in cells) != TARGET_SUM:
        return SelectionVerdict.WRONG_SUM
    if not is_rectangle(cells):
        return SelectionVerdict.NOT_RECTANGLE
    if not allow_empty and any(grid[r][c] == 0 for r, c in cells):
        return SelectionVerdict.CONTAINS_EMPTY
    return SelectionVerdict.VALID


def is_valid_clear(selection: Iterable[Cell], grid: Grid, *, allow_empty: bool = False) -> bool:
    return check_selection(selection, grid, allow_empty=allow_empty).ok
