"""Pure life-count arithmetic: passive refill and spending."""
from __future__ import annotations

from typing import Tuple


def clamp_lives(lives: int, max_lives: int) -> int:
    return max(0, min(lives, max_lives))


def refill(lives: int, last_refill_ms: int, now_ms: int, *, max_lives: int, interval_ms: int) -> Tuple[int, int]:
    """Credit one life per full ``interval_ms`` elapsed since ``last_refill_ms``.

    Partial progress toward the next life is kept by advancing the timestamp
    only by whole intervals. Once full, the timestamp snaps to ``now_ms``.
    """
    elapsed = max(0, now_ms - last_refill_ms)
    gained = elapsed // interval_ms
    new_lives = clamp_lives(lives + gained, max_lives)
    if new_lives == max_lives:
        return new_lives, now_ms
    return new_lives, last_refill_ms + gained * interval_ms


def spend(lives: int, amount: int = 1, *, max_lives: int) -> int:
    return clamp_lives(lives - amount, max_lives)


def time_to_next_refill(lives: int, last_refill_ms: int, now_ms: int, *, max_lives: int, interval_ms: int) -> int:
    """Milliseconds until the next life arrives; 0 when already full."""
    if lives >= max_lives:
        return 0
    elapsed = max(0, now_ms - last_refill_ms)
    return max(0, interval_ms - elapsed % interval_ms)


def refill_progress(lives: int, last_refill_ms: int, now_ms: int, *, max_lives: int, interval_ms: int) -> float:
    if lives >= max_lives:
        return 100.0
    elapsed = max(0, now_ms - last_refill_ms) % interval_ms
    return 100.0 * elapsed / interval_ms


def format_mmss(ms: int) -> str:
    total_seconds = max(0, int(ms)) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"
