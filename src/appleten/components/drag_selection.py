from dataclasses import dataclass
from typing import List, Optional, Tuple

Cell = Tuple[int, int]


@dataclass(slots=True)
class DragSelection:
    """Rectangle spanned by the cell where a drag started and the cell under the pointer."""
    anchor: Optional[Cell] = None
    current: Optional[Cell] = None

    @property
    def active(self) -> bool:
        return self.anchor is not None

    def begin(self, cell: Cell) -> None:
        self.anchor = cell
        self.current = cell

    def reset(self) -> None:
        self.anchor = None
        self.current = None

    def cells(self) -> List[Cell]:
        if self.anchor is None or self.current is None:
            return []
        (r0, c0), (r1, c1) = self.anchor, self.current
        top, bottom = min(r0, r1), max(r0, r1)
        left, right = min(c0, c1), max(c0, c1)
        return [(r, c) for r in range(top, bottom + 1) for c in range(left, right + 1)]
