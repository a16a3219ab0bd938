import random
from typing import Callable

from esper import World

from appleten.components.board import Board
from appleten.components.countdown import Countdown
from appleten.components.drag_selection import DragSelection
from appleten.components.game_state import GameMode, GameState
from appleten.components.lives import Lives
from appleten.components.score import Score
from appleten.config import DifficultyConfig
from appleten.events.bus import EventBus
from appleten.utils.storage import wall_clock_ms


def create_world(
    event_bus: EventBus,
    config: DifficultyConfig | None = None,
    *,
    initial_mode: GameMode = GameMode.HOME,
    rng: random.Random | None = None,
    clock: Callable[[], int] | None = None,
) -> World:
    config = config or DifficultyConfig()
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "config", config)
    setattr(world, "clock", clock or wall_clock_ms)

    # Register the global game state resource.
    world.create_entity(GameState(mode=initial_mode))

    # Session entity; the board stays empty until a session starts.
    world.create_entity(
        Board(rows=config.board_height, cols=config.board_width),
        Countdown(remaining_ms=config.max_time_ms, max_ms=config.max_time_ms),
        Score(),
        DragSelection(),
    )

    # Life counter outlives individual sessions; LifeSystem loads it from storage.
    world.create_entity(
        Lives(current=config.max_lives, max_lives=config.max_lives, last_refill_ms=world.clock()),
    )
    return world
