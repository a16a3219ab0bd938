from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from esper import World

from appleten.components.game_state import GameMode
from appleten.config import DifficultyConfig
from appleten.events.bus import EventBus
from appleten.systems.clear_system import ClearSystem
from appleten.systems.countdown_system import CountdownSystem
from appleten.systems.life_system import LifeSystem
from appleten.systems.selection_system import SelectionSystem
from appleten.systems.session_flow_system import SessionFlowSystem
from appleten.utils.session import get_board
from appleten.utils.storage import KeyValueStore, MemoryStore
from appleten.world import create_world


class FakeClock:
    def __init__(self, value: int = 1_000_000) -> None:
        self.value = value

    def advance(self, amount: int) -> None:
        self.value += amount

    def __call__(self) -> int:
        return self.value


@dataclass
class Session:
    bus: EventBus
    world: World
    clock: FakeClock
    store: KeyValueStore
    life: LifeSystem
    flow: SessionFlowSystem
    countdown: CountdownSystem
    selection: SelectionSystem
    clear: ClearSystem
    events: List[tuple[str, Dict[str, Any]]] = field(default_factory=list)

    def record(self, *names: str) -> None:
        for name in names:
            self.bus.subscribe(name, lambda sender, _name=name, **payload: self.events.append((_name, payload)))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def payloads(self, name: str) -> List[Dict[str, Any]]:
        return [payload for event, payload in self.events if event == name]


def build_session(
    config: DifficultyConfig | None = None,
    *,
    mode: GameMode = GameMode.HOME,
    seed: int = 0,
    store: KeyValueStore | None = None,
    clock: FakeClock | None = None,
) -> Session:
    """Wire a world with every non-presentation system, the way main.py does."""
    bus = EventBus()
    clock = clock or FakeClock()
    world = create_world(bus, config, initial_mode=mode, rng=random.Random(seed), clock=clock)
    store = store if store is not None else MemoryStore(clock=clock)
    life = LifeSystem(world, bus, store=store, clock=clock)
    flow = SessionFlowSystem(world, bus)
    countdown = CountdownSystem(world, bus)
    selection = SelectionSystem(world, bus)
    clear = ClearSystem(world, bus)
    return Session(bus, world, clock, store, life, flow, countdown, selection, clear)


def set_grid(world: World, grid: Sequence[Sequence[int]]) -> None:
    board = get_board(world)
    assert board is not None, "Board component expected"
    board.replace([list(row) for row in grid])
