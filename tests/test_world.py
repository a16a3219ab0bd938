import random

from appleten.components.board import Board
from appleten.components.countdown import Countdown
from appleten.components.game_state import GameMode, GameState
from appleten.components.lives import Lives
from appleten.config import DifficultyConfig
from appleten.events.bus import EventBus
from appleten.utils.session import get_config
from appleten.world import create_world


def test_create_world_registers_session_components():
    config = DifficultyConfig(board_width=6, board_height=4, max_lives=3)
    world = create_world(EventBus(), config, rng=random.Random(1), clock=lambda: 99)

    state = next(comp for _, comp in world.get_component(GameState))
    board = next(comp for _, comp in world.get_component(Board))
    countdown = next(comp for _, comp in world.get_component(Countdown))
    lives = next(comp for _, comp in world.get_component(Lives))

    assert state.mode == GameMode.HOME
    assert (board.rows, board.cols) == (4, 6)
    assert board.is_empty()
    assert countdown.remaining_ms == config.max_time_ms
    assert (lives.current, lives.max_lives, lives.last_refill_ms) == (3, 3, 99)
    assert get_config(world) is config
    assert isinstance(world.random, random.Random)
