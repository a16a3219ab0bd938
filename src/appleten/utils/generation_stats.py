"""Shape-mix statistics used to tune difficulty weights."""
from __future__ import annotations

import random
from typing import Dict

from appleten.config import DifficultyConfig
from appleten.systems.board_generation import GeneratedBoard, generate_board
from appleten.utils.block_catalog import ShapeCategory


def shape_mix(board: GeneratedBoard) -> Dict[ShapeCategory, float]:
    """Share of cells covered by each shape category."""
    covered = {category: 0 for category in ShapeCategory}
    for placement in board.placements:
        covered[placement.shape.category] += placement.shape.size
    total = sum(covered.values()) or 1
    return {category: count / total for category, count in covered.items()}


def sample_shape_mix(config: DifficultyConfig, samples: int = 50, seed: int = 0) -> Dict[ShapeCategory, float]:
    """Average ``shape_mix`` over ``samples`` boards built from one seeded stream."""
    if samples <= 0:
        raise ValueError("samples must be positive")
    rng = random.Random(seed)
    totals = {category: 0.0 for category in ShapeCategory}
    for _ in range(samples):
        board = generate_board(
            config.board_width,
            config.board_height,
            config.weights,
            rng,
            max_attempts=config.max_generation_attempts,
        )
        for category, share in shape_mix(board).items():
            totals[category] += share
    return {category: value / samples for category, value in totals.items()}
