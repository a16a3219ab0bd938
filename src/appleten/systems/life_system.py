from __future__ import annotations

import logging
from typing import Callable

from esper import World

from appleten.config import DifficultyConfig
from appleten.constants import LAST_REFILL_KEY, LIVES_KEY
from appleten.events.bus import (
    EVENT_LIFE_SPEND_REQUEST,
    EVENT_LIVES_CHANGED,
    EVENT_LIVES_RECHARGE_REQUEST,
    EVENT_TICK,
    EventBus,
)
from appleten.components.lives import Lives
from appleten.utils import life_economy
from appleten.utils.session import get_config, get_lives
from appleten.utils.storage import KeyValueStore, MemoryStore, wall_clock_ms

logger = logging.getLogger(__name__)


class LifeSystem:
    """Owns the persistent life counter.

    The counter is read from ``store`` once at construction, refilled
    passively on every tick, and written back after every change.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        store: KeyValueStore | None = None,
        clock: Callable[[], int] | None = None,
        config: DifficultyConfig | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config = config or get_config(world)
        self._clock = clock or getattr(world, "clock", None) or wall_clock_ms
        self.store = store or MemoryStore(clock=self._clock)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_LIFE_SPEND_REQUEST, self.on_spend_request)
        self.event_bus.subscribe(EVENT_LIVES_RECHARGE_REQUEST, self.on_recharge_request)
        self.load()

    def _lives(self) -> Lives:
        lives = get_lives(self.world)
        if lives is None:
            lives = Lives(current=self.config.max_lives, max_lives=self.config.max_lives, last_refill_ms=self._clock())
            self.world.create_entity(lives)
        return lives

    def _read_int(self, key: str) -> int | None:
        raw = self.store.load(key)
        if raw is None:
            return None
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed stored value for %r: %r", key, raw)
            return None

    def load(self) -> Lives:
        now = self._clock()
        lives = self._lives()
        lives.max_lives = self.config.max_lives
        stored_lives = self._read_int(LIVES_KEY)
        stored_refill = self._read_int(LAST_REFILL_KEY)
        lives.current = self.config.max_lives if stored_lives is None else stored_lives
        lives.last_refill_ms = now if stored_refill is None else stored_refill
        lives.clamp()
        self._apply_refill(lives, now)
        self.flush()
        self._emit(lives, delta=0, reason="load")
        return lives

    def flush(self) -> None:
        lives = self._lives()
        ttl = self.config.storage_ttl_days
        self.store.save(LIVES_KEY, str(lives.current), ttl)
        self.store.save(LAST_REFILL_KEY, str(lives.last_refill_ms), ttl)

    def _apply_refill(self, lives: Lives, now: int) -> int:
        before = lives.current
        lives.current, lives.last_refill_ms = life_economy.refill(
            lives.current,
            lives.last_refill_ms,
            now,
            max_lives=lives.max_lives,
            interval_ms=self.config.refill_interval_ms,
        )
        return lives.current - before

    def _emit(self, lives: Lives, *, delta: int, reason: str) -> None:
        self.event_bus.emit(
            EVENT_LIVES_CHANGED,
            current=lives.current,
            max_lives=lives.max_lives,
            last_refill_ms=lives.last_refill_ms,
            delta=delta,
            reason=reason,
        )

    def on_tick(self, sender, **kwargs):
        lives = self._lives()
        if lives.is_full:
            return
        before_refill = lives.last_refill_ms
        gained = self._apply_refill(lives, self._clock())
        if gained or lives.last_refill_ms != before_refill:
            self.flush()
        if gained:
            logger.info("Refilled %d lives", gained)
            self._emit(lives, delta=gained, reason="refill")

    def on_spend_request(self, sender, **kwargs):
        amount = kwargs.get('amount', 1)
        try:
            amount = int(amount)
        except (TypeError, ValueError):
            return
        self.spend(amount, reason=kwargs.get('reason') or "spend")

    def on_recharge_request(self, sender, **kwargs):
        self.recharge(reason=kwargs.get('reason') or "recharge")

    def spend(self, amount: int = 1, *, reason: str = "spend") -> int:
        now = self._clock()
        lives = self._lives()
        self._apply_refill(lives, now)
        if lives.is_full:
            # The refill interval starts counting from the first missing life.
            lives.last_refill_ms = now
        before = lives.current
        lives.current = life_economy.spend(lives.current, amount, max_lives=lives.max_lives)
        self.flush()
        self._emit(lives, delta=lives.current - before, reason=reason)
        return lives.current

    def recharge(self, *, reason: str = "recharge") -> int:
        lives = self._lives()
        before = lives.current
        lives.current = lives.max_lives
        lives.last_refill_ms = self._clock()
        self.flush()
        self._emit(lives, delta=lives.current - before, reason=reason)
        return lives.current

    def time_to_next_refill(self) -> int:
        lives = self._lives()
        return life_economy.time_to_next_refill(
            lives.current,
            lives.last_refill_ms,
            self._clock(),
            max_lives=lives.max_lives,
            interval_ms=self.config.refill_interval_ms,
        )
