from dataclasses import dataclass, field
from typing import Iterable, List, Tuple


@dataclass(slots=True)
class Board:
    """Digit grid for the current session; ``0`` marks a cleared cell."""
    rows: int
    cols: int
    cells: List[List[int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[0] * self.cols for _ in range(self.rows)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def clear_cells(self, positions: Iterable[Tuple[int, int]]) -> None:
        for row, col in positions:
            self.cells[row][col] = 0

    def replace(self, grid: List[List[int]]) -> None:
        self.rows = len(grid)
        self.cols = len(grid[0]) if grid else 0
        self.cells = [list(row) for row in grid]

    def remaining(self) -> int:
        return sum(1 for row in self.cells for value in row if value != 0)

    def is_empty(self) -> bool:
        return all(value == 0 for row in self.cells for value in row)
