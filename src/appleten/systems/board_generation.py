from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from appleten.config import ShapeWeights
from appleten.constants import MAX_GENERATION_ATTEMPTS
from appleten.utils.block_catalog import Digits, Shape, ShapeCategory, TARGET_SUM, random_block, shapes_in

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Grid = List[List[int]]
# (row, col, shape) of a block still waiting for digits.
Slot = Tuple[int, int, Shape]

_NEIGHBOUR_ORDER: Tuple[Position, ...] = ((0, -1), (-1, 0), (0, 1), (1, 0))


@dataclass(slots=True)
class Placement:
    """One block written into the grid, digits stored row-major."""
    row: int
    col: int
    shape: Shape
    digits: Digits

    @property
    def rows(self) -> int:
        return self.shape.rows

    @property
    def cols(self) -> int:
        return self.shape.cols

    @property
    def total(self) -> int:
        return sum(self.digits)

    def cells(self) -> List[Position]:
        return [
            (self.row + dr, self.col + dc)
            for dr in range(self.rows)
            for dc in range(self.cols)
        ]


@dataclass(slots=True)
class GeneratedBoard:
    grid: Grid
    placements: List[Placement]
    strategy_counts: Counter = field(default_factory=Counter)
    forced: bool = False

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0


class _BoardBuilder:
    """Mutable scratch state for a single generation run."""

    def __init__(self, width: int, height: int, weights: ShapeWeights, rng: random.Random):
        self.width = width
        self.height = height
        self.weights = weights
        self.rng = rng
        self.grid: Grid = [[0] * width for _ in range(height)]
        self._owner: List[List[Optional[Placement]]] = [[None] * width for _ in range(height)]
        self.placements: List[Placement] = []

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def owner_at(self, row: int, col: int) -> Optional[Placement]:
        return self._owner[row][col]

    def fits(self, row: int, col: int, shape: Shape) -> bool:
        if row + shape.rows > self.height or col + shape.cols > self.width:
            return False
        for dr in range(shape.rows):
            for dc in range(shape.cols):
                if self._owner[row + dr][col + dc] is not None:
                    return False
        return True

    def place(self, row: int, col: int, shape: Shape) -> Placement:
        digits = random_block(shape, self.rng).digits
        placement = Placement(row=row, col=col, shape=shape, digits=digits)
        for (r, c), value in zip(placement.cells(), digits):
            self.grid[r][c] = value
            self._owner[r][c] = placement
        self.placements.append(placement)
        return placement

    def remove(self, placement: Placement) -> None:
        for r, c in placement.cells():
            self.grid[r][c] = 0
            self._owner[r][c] = None
        self.placements.remove(placement)

    def next_empty(self) -> Optional[Position]:
        for row in range(self.height):
            for col in range(self.width):
                if self._owner[row][col] is None:
                    return row, col
        return None


def _shape_weight(shape: Shape, weights: ShapeWeights) -> float:
    category = shape.category
    if category is ShapeCategory.PAIR:
        base = weights.pair
    elif category is ShapeCategory.TRIPLE:
        base = weights.triple
    else:
        base = weights.quad
    return base / len(shapes_in(category))


def _place_weighted(builder: _BoardBuilder, row: int, col: int) -> bool:
    options: List[Shape] = []
    option_weights: List[float] = []
    for shape in Shape:
        weight = _shape_weight(shape, builder.weights)
        if weight > 0 and builder.fits(row, col, shape):
            options.append(shape)
            option_weights.append(weight)
    if not options:
        return False
    shape = builder.rng.choices(options, weights=option_weights, k=1)[0]
    builder.place(row, col, shape)
    return True


def _place_pair(builder: _BoardBuilder, row: int, col: int) -> bool:
    for shape in (Shape.PAIR_H, Shape.PAIR_V):
        if builder.fits(row, col, shape):
            builder.place(row, col, shape)
            return True
    return False


def regroup_slots(placement: Placement, cell: Position) -> Optional[List[Slot]]:
    """Re-partition ``placement`` plus an adjacent ``cell`` into catalog shapes.

    Returns None when the union cannot be split into at most two blocks.
    """
    row, col = cell
    top, left = placement.row, placement.col
    bottom = top + placement.rows - 1
    right = left + placement.cols - 1
    u_top, u_bottom = min(top, row), max(bottom, row)
    u_left, u_right = min(left, col), max(right, col)
    u_rows = u_bottom - u_top + 1
    u_cols = u_right - u_left + 1

    if u_rows * u_cols == placement.shape.size + 1:
        # The cell extends a line.
        shape = Shape.for_footprint(u_rows, u_cols)
        if shape is not None:
            return [(u_top, u_left, shape)]
        if (u_rows, u_cols) == (1, 4):
            return [(u_top, u_left, Shape.PAIR_H), (u_top, u_left + 2, Shape.PAIR_H)]
        if (u_rows, u_cols) == (4, 1):
            return [(u_top, u_left, Shape.PAIR_V), (u_top + 2, u_left, Shape.PAIR_V)]
        return None

    if placement.shape is Shape.QUAD:
        if top <= row <= bottom and col in (left - 1, right + 1):
            other_row = bottom if row == top else top
            return [(row, u_left, Shape.TRIPLE_H), (other_row, left, Shape.PAIR_H)]
        if left <= col <= right and row in (top - 1, bottom + 1):
            other_col = right if col == left else left
            return [(u_top, col, Shape.TRIPLE_V), (top, other_col, Shape.PAIR_V)]
    return None


def _regroup_with_neighbour(builder: _BoardBuilder, row: int, col: int) -> bool:
    for dr, dc in _NEIGHBOUR_ORDER:
        nr, nc = row + dr, col + dc
        if not builder.in_bounds(nr, nc):
            continue
        neighbour = builder.owner_at(nr, nc)
        if neighbour is None:
            continue
        slots = regroup_slots(neighbour, (row, col))
        if slots is None:
            continue
        builder.remove(neighbour)
        for slot_row, slot_col, shape in slots:
            builder.place(slot_row, slot_col, shape)
        return True
    return False


Strategy = Callable[[_BoardBuilder, int, int], bool]

PLACEMENT_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("weighted", _place_weighted),
    ("pair_fallback", _place_pair),
    ("regroup", _regroup_with_neighbour),
)

# Used once the attempt bound is spent: no more weighted draws.
FORCED_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = PLACEMENT_STRATEGIES[1:]


def _fill_at(builder: _BoardBuilder, row: int, col: int, strategies: Sequence[Tuple[str, Strategy]], counts: Counter) -> None:
    for name, strategy in strategies:
        if strategy(builder, row, col):
            counts[name] += 1
            if name != "weighted":
                logger.debug("Filled (%d, %d) via %s", row, col, name)
            return
    # A row-major scan keeps every earlier cell filled, so an isolated cell
    # always has an in-line neighbour to regroup with.
    tried = ", ".join(name for name, _ in strategies) or "none"
    raise RuntimeError(
        f"No placement strategy filled cell ({row}, {col}) of a "
        f"{builder.width}x{builder.height} board (tried: {tried})"
    )


def generate_board(
    width: int,
    height: int,
    weights: Sequence[float] | ShapeWeights,
    rng: random.Random | None = None,
    *,
    max_attempts: int = MAX_GENERATION_ATTEMPTS,
) -> GeneratedBoard:
    """Tile a ``height`` x ``width`` grid completely with sum-10 blocks."""
    if width < 1 or height < 1 or width * height < 2:
        raise ValueError(f"Cannot tile a {width}x{height} board")
    shape_weights = ShapeWeights(*weights)
    builder = _BoardBuilder(width, height, shape_weights, rng or random.Random())
    counts: Counter = Counter()
    attempts = 0
    forced = False

    while True:
        position = builder.next_empty()
        if position is None:
            break
        if attempts >= max_attempts:
            forced = True
            logger.warning("Placement bound %d reached, force-filling remaining cells", max_attempts)
            _force_fill(builder, counts)
            break
        attempts += 1
        _fill_at(builder, position[0], position[1], PLACEMENT_STRATEGIES, counts)

    return GeneratedBoard(grid=builder.grid, placements=builder.placements, strategy_counts=counts, forced=forced)


def _force_fill(builder: _BoardBuilder, counts: Counter) -> None:
    for _ in range(builder.width * builder.height):
        position = builder.next_empty()
        if position is None:
            return
        _fill_at(builder, position[0], position[1], FORCED_STRATEGIES, counts)


def generate(width: int, height: int, weights: Sequence[float] | ShapeWeights, seed: int | None = None) -> Grid:
    """Return only the grid of a board generated from ``seed``."""
    return generate_board(width, height, weights, random.Random(seed)).grid


def verify_tiling(board: GeneratedBoard) -> bool:
    """True when the placements cover every cell exactly once and each sums to 10."""
    seen: set[Position] = set()
    for placement in board.placements:
        if placement.total != TARGET_SUM:
            return False
        for r, c in placement.cells():
            if (r, c) in seen or board.grid[r][c] == 0:
                return False
            seen.add((r, c))
    return len(seen) == board.rows * board.cols
