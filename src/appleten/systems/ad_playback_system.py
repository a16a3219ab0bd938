from __future__ import annotations

import logging

from esper import World

from appleten.components.game_state import GameMode
from appleten.events.bus import (
    EVENT_AD_COMPLETED,
    EVENT_GAME_MODE_CHANGED,
    EVENT_TICK,
    EventBus,
)
from appleten.utils.game_state import current_mode

logger = logging.getLogger(__name__)

DEFAULT_AD_DURATION = 3.0


class AdPlaybackSystem:
    """Stand-in ad player: reports completion after a fixed play time."""

    def __init__(self, world: World, event_bus: EventBus, *, duration: float = DEFAULT_AD_DURATION):
        self.world = world
        self.event_bus = event_bus
        self.duration = duration
        self.elapsed = 0.0
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self.on_mode_changed)

    def on_mode_changed(self, sender, **kwargs):
        if kwargs.get('new_mode') == GameMode.AD_PLAYING:
            self.elapsed = 0.0

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0
        return min(1.0, self.elapsed / self.duration)

    def on_tick(self, sender, **kwargs):
        if current_mode(self.world) != GameMode.AD_PLAYING:
            return
        try:
            self.elapsed += float(kwargs.get('dt', 0.0))
        except (TypeError, ValueError):
            return
        if self.elapsed >= self.duration:
            logger.debug("Ad finished after %.2fs", self.elapsed)
            self.elapsed = 0.0
            self.event_bus.emit(EVENT_AD_COMPLETED)
