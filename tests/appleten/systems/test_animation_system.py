import random

import pytest
from esper import World

from appleten.components.clear_burst import ClearBurst
from appleten.events.bus import (
    EVENT_ANIMATION_COMPLETE,
    EVENT_APPLES_CLEARED,
    EVENT_BOARD_GENERATED,
    EVENT_TICK,
    EventBus,
)
from appleten.systems.animation import AnimationSystem
from appleten.systems.clear_system import ClearedApple


@pytest.fixture
def setup_world():
    bus = EventBus()
    world = World()
    setattr(world, "random", random.Random(0))
    system = AnimationSystem(world, bus)
    return bus, world, system


def _bursts(world):
    return [burst for _, burst in world.get_component(ClearBurst)]


def test_cleared_apples_spawn_bursts(setup_world):
    bus, world, _ = setup_world

    bus.emit(EVENT_APPLES_CLEARED, cleared=[ClearedApple(0, 0, 4, -1), ClearedApple(0, 1, 6, 1)], score=2, remaining_ms=0)

    bursts = sorted(_bursts(world), key=lambda b: b.pos)
    assert [b.pos for b in bursts] == [(0, 0), (0, 1)]
    assert [b.drift for b in bursts] == [-1, 1]
    assert all(len(b.particles) == 8 for b in bursts)


def test_bursts_expire_after_fall_lifetime(setup_world):
    bus, world, _ = setup_world
    completed = []
    bus.subscribe(EVENT_ANIMATION_COMPLETE, lambda sender, **kw: completed.append(kw.get("kind")))
    bus.emit(EVENT_APPLES_CLEARED, cleared=[ClearedApple(2, 3, 5, 0)], score=1, remaining_ms=0)

    bus.emit(EVENT_TICK, dt=1.0)
    burst = _bursts(world)[0]
    assert burst.particle_progress == pytest.approx(1.0 / 1.2)
    assert completed == []

    bus.emit(EVENT_TICK, dt=0.5)
    assert _bursts(world) == []
    assert completed == ["clear_burst"]


def test_new_board_drops_running_bursts(setup_world):
    bus, world, _ = setup_world
    bus.emit(EVENT_APPLES_CLEARED, cleared=[ClearedApple(0, 0, 1, 0)], score=1, remaining_ms=0)

    bus.emit(EVENT_BOARD_GENERATED, rows=14, cols=10, placements=50)

    assert _bursts(world) == []
