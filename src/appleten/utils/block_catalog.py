"""Static library of sum-10 digit groups used to build boards."""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

TARGET_SUM = 10

Digits = Tuple[int, ...]


class ShapeCategory(Enum):
    PAIR = "pair"
    TRIPLE = "triple"
    QUAD = "quad"


class Shape(Enum):
    """Block footprints as (rows, cols)."""
    PAIR_H = (1, 2)
    PAIR_V = (2, 1)
    TRIPLE_H = (1, 3)
    TRIPLE_V = (3, 1)
    QUAD = (2, 2)

    @property
    def rows(self) -> int:
        return self.value[0]

    @property
    def cols(self) -> int:
        return self.value[1]

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @property
    def category(self) -> ShapeCategory:
        return _CATEGORY_BY_SIZE[self.size]

    @classmethod
    def for_footprint(cls, rows: int, cols: int) -> "Shape | None":
        for shape in cls:
            if shape.value == (rows, cols):
                return shape
        return None


_CATEGORY_BY_SIZE = {2: ShapeCategory.PAIR, 3: ShapeCategory.TRIPLE, 4: ShapeCategory.QUAD}


@dataclass(frozen=True, slots=True)
class Block:
    """A catalog entry: a footprint and one digit multiset summing to 10."""
    shape: Shape
    digits: Digits


PAIRS: Tuple[Digits, ...] = ((1, 9), (2, 8), (3, 7), (4, 6), (5, 5))

TRIPLES: Tuple[Digits, ...] = (
    (1, 1, 8), (1, 2, 7), (1, 3, 6), (1, 4, 5),
    (2, 2, 6), (2, 3, 5), (2, 4, 4), (3, 3, 4),
)

# Hand-picked; long tails like (1, 1, 1, 7) read as noise on a 2x2 tile.
QUADS: Tuple[Digits, ...] = (
    (1, 1, 3, 5), (1, 1, 4, 4), (1, 2, 2, 5),
    (1, 2, 3, 4), (2, 2, 2, 4), (2, 2, 3, 3),
)

_MULTISETS: Dict[ShapeCategory, Tuple[Digits, ...]] = {
    ShapeCategory.PAIR: PAIRS,
    ShapeCategory.TRIPLE: TRIPLES,
    ShapeCategory.QUAD: QUADS,
}


def shapes_in(category: ShapeCategory) -> List[Shape]:
    return [shape for shape in Shape if shape.category is category]


def candidates(shape: Shape) -> List[Block]:
    """List every catalog block for ``shape``."""
    return [Block(shape=shape, digits=digits) for digits in _MULTISETS[shape.category]]


def random_block(shape: Shape, rng: random.Random) -> Block:
    """Pick one candidate for ``shape`` and return its digits in a random order."""
    digits = list(rng.choice(_MULTISETS[shape.category]))
    rng.shuffle(digits)
    return Block(shape=shape, digits=tuple(digits))
