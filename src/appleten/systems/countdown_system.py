from __future__ import annotations

import logging

from esper import World

from appleten.components.game_state import GameMode
from appleten.events.bus import (
    EVENT_COUNTDOWN_EXPIRED,
    EVENT_GAME_MODE_CHANGED,
    EVENT_TICK,
    EventBus,
)
from appleten.utils.game_state import current_mode
from appleten.utils.session import get_config, get_countdown, get_score

logger = logging.getLogger(__name__)


class CountdownSystem:
    """Drains the session timer in fixed quanta while a session is being played.

    Tick events carry ``dt`` in seconds; the elapsed time accumulates and is
    spent in whole quanta so frame jitter does not change the drain rate.
    """

    def __init__(self, world: World, event_bus: EventBus, *, quantum_ms: int | None = None):
        self.world = world
        self.event_bus = event_bus
        self.quantum_ms = quantum_ms or get_config(world).tick_quantum_ms
        self._pending_ms = 0.0
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self.on_mode_changed)

    def on_mode_changed(self, sender, **kwargs):
        if kwargs.get('new_mode') != GameMode.PLAYING:
            self._pending_ms = 0.0

    def on_tick(self, sender, **kwargs):
        if current_mode(self.world) != GameMode.PLAYING:
            self._pending_ms = 0.0
            return
        try:
            dt = float(kwargs.get('dt', 0.0))
        except (TypeError, ValueError):
            return
        if dt <= 0:
            return
        self._pending_ms += dt * 1000.0
        while self._pending_ms >= self.quantum_ms:
            self._pending_ms -= self.quantum_ms
            if not self.tick():
                self._pending_ms = 0.0
                break

    def tick(self) -> bool:
        """Advance the timer by one quantum. Returns False once the timer stopped."""
        if current_mode(self.world) != GameMode.PLAYING:
            return False
        countdown = get_countdown(self.world)
        if countdown is None:
            return False
        countdown.remaining_ms -= self.quantum_ms
        countdown.clamp()
        if countdown.expired:
            score = get_score(self.world)
            value = score.value if score is not None else 0
            logger.info("Countdown expired with score %d", value)
            self.event_bus.emit(EVENT_COUNTDOWN_EXPIRED, score=value)
            return False
        return True
