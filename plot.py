import sys
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from appleten.config import DifficultyConfig  # noqa: E402
from appleten.utils.block_catalog import ShapeCategory  # noqa: E402
from appleten.utils.generation_stats import sample_shape_mix  # noqa: E402


def sweep_pair_weight(pair_weights, samples=20):
    """Cell share per shape category as the pair weight grows; triple:quad stays 3:2."""
    shares = {category: [] for category in ShapeCategory}
    for pair_weight in pair_weights:
        remainder = max(0.0, 100.0 - pair_weight)
        config = DifficultyConfig(
            pair_weight=float(pair_weight),
            triple_weight=remainder * 0.6,
            quad_weight=remainder * 0.4,
        )
        mix = sample_shape_mix(config, samples=samples, seed=7)
        for category in ShapeCategory:
            shares[category].append(mix[category])
    return shares


pair_weights = np.linspace(0, 100, 21)
shares = sweep_pair_weight(pair_weights)

plt.figure(figsize=(7, 4))
for category in ShapeCategory:
    plt.plot(pair_weights, shares[category], label=f"{category.value}s")
plt.axvline(50, color="gray", linestyle="--", label="Default pair weight (50)")
plt.xlabel("Pair weight")
plt.ylabel("Share of board cells")
plt.title("Board shape mix vs. pair weight (10x14)")
plt.legend()
plt.grid(True)
plt.show()
