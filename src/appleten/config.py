"""Difficulty configuration shared by the generator and the session systems."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, NamedTuple

from appleten import constants

logger = logging.getLogger(__name__)


class ShapeWeights(NamedTuple):
    """Relative preference for pair / triple / quad placements."""
    pair: float
    triple: float
    quad: float


@dataclass(frozen=True, slots=True)
class DifficultyConfig:
    pair_weight: float = constants.PAIR_WEIGHT
    triple_weight: float = constants.TRIPLE_WEIGHT
    quad_weight: float = constants.QUAD_WEIGHT
    clear_time_bonus_ms: int = constants.CLEAR_TIME_BONUS_MS
    max_time_ms: int = constants.MAX_TIME_MS
    tick_quantum_ms: int = constants.TICK_QUANTUM_MS
    revive_bonus_ms: int = constants.REVIVE_BONUS_MS
    max_lives: int = constants.MAX_LIVES
    refill_interval_ms: int = constants.REFILL_INTERVAL_MS
    board_width: int = constants.BOARD_WIDTH
    board_height: int = constants.BOARD_HEIGHT
    success_score_threshold: int = constants.SUCCESS_SCORE_THRESHOLD
    allow_empty_in_selection: bool = False
    max_generation_attempts: int = constants.MAX_GENERATION_ATTEMPTS
    storage_ttl_days: int = constants.STORAGE_TTL_DAYS

    def __post_init__(self) -> None:
        if self.board_width < 1 or self.board_height < 1:
            raise ValueError("board dimensions must be positive")
        if self.board_width * self.board_height < 2:
            raise ValueError("board needs at least two cells")
        if min(self.pair_weight, self.triple_weight, self.quad_weight) < 0:
            raise ValueError("shape weights must be non-negative")
        for name in ("max_time_ms", "tick_quantum_ms", "max_lives", "refill_interval_ms", "max_generation_attempts"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        for name in ("clear_time_bonus_ms", "revive_bonus_ms", "success_score_threshold"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    @property
    def weights(self) -> ShapeWeights:
        return ShapeWeights(self.pair_weight, self.triple_weight, self.quad_weight)

    def with_overrides(self, **overrides: Any) -> "DifficultyConfig":
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


PRESETS: Dict[str, DifficultyConfig] = {
    "easy": DifficultyConfig(pair_weight=70, triple_weight=25, quad_weight=5, clear_time_bonus_ms=2_500),
    "normal": DifficultyConfig(),
    "hard": DifficultyConfig(pair_weight=20, triple_weight=40, quad_weight=40, clear_time_bonus_ms=250),
    "classic": DifficultyConfig(board_height=constants.CLASSIC_BOARD_HEIGHT),
}


def get_preset(name: str | None) -> DifficultyConfig:
    key = (name or "normal").strip().lower()
    preset = PRESETS.get(key)
    if preset is None:
        logger.warning("Unknown difficulty preset %r, using 'normal'", name)
        return PRESETS["normal"]
    return preset


def config_from_mapping(data: Mapping[str, Any], *, base: DifficultyConfig | None = None) -> DifficultyConfig:
    """Overlay known keys from ``data`` onto ``base``; unknown keys are ignored."""
    base = base or DifficultyConfig()
    known = {f.name for f in fields(DifficultyConfig)}
    overrides = {key: value for key, value in data.items() if key in known}
    ignored = sorted(set(data) - known)
    if ignored:
        logger.debug("Ignoring unknown difficulty keys: %s", ", ".join(ignored))
    return replace(base, **overrides)


def load_difficulty(path: Path | str | None = None, *, preset: str | None = None) -> DifficultyConfig:
    """Load overrides from a JSON file on top of a named preset.

    A missing file yields the preset unchanged. Malformed JSON is reported and
    ignored; invalid values still raise ``ValueError`` from validation.
    """
    base = get_preset(preset)
    if path is None:
        return base
    config_path = Path(path)
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError:
        logger.info("No difficulty file at %s, using preset", config_path)
        return base
    except json.JSONDecodeError as exc:
        logger.warning("Malformed difficulty file %s: %s", config_path, exc)
        return base
    if not isinstance(payload, dict):
        logger.warning("Difficulty file %s must contain an object", config_path)
        return base
    return config_from_mapping(payload, base=base)
