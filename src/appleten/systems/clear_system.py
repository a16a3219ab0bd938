from __future__ import annotations

import logging
from typing import List, NamedTuple, Sequence, Tuple

from esper import World

from appleten.components.game_state import GameMode
from appleten.events.bus import (
    EVENT_APPLES_CLEARED,
    EVENT_BOARD_CLEARED,
    EVENT_SELECTION_VALID,
    EventBus,
)
from appleten.utils.game_state import current_mode, set_game_mode
from appleten.utils.session import get_board, get_config, get_countdown, get_score

logger = logging.getLogger(__name__)


class ClearedApple(NamedTuple):
    row: int
    col: int
    value: int
    # -1 / 0 / 1: which way the apple falls relative to the selection's mean column.
    drift: int


def describe_clear(cells: Sequence[Tuple[int, int]], grid: Sequence[Sequence[int]]) -> List[ClearedApple]:
    if not cells:
        return []
    mean_col = sum(col for _, col in cells) / len(cells)
    cleared: List[ClearedApple] = []
    for row, col in cells:
        if col < mean_col:
            drift = -1
        elif col > mean_col:
            drift = 1
        else:
            drift = 0
        cleared.append(ClearedApple(row, col, grid[row][col], drift))
    return cleared


class ClearSystem:
    """Applies a validated selection: score, time bonus and board update."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_SELECTION_VALID, self.on_selection_valid)

    def on_selection_valid(self, sender, **kwargs):
        cells = kwargs.get('cells')
        if not cells:
            return
        if current_mode(self.world) != GameMode.PLAYING:
            return
        board = get_board(self.world)
        score = get_score(self.world)
        countdown = get_countdown(self.world)
        if board is None or score is None or countdown is None:
            return
        cleared = describe_clear(cells, board.cells)
        board.clear_cells(cells)
        score.add(len(cells))
        countdown.add(get_config(self.world).clear_time_bonus_ms)
        self.event_bus.emit(
            EVENT_APPLES_CLEARED,
            cleared=cleared,
            score=score.value,
            remaining_ms=countdown.remaining_ms,
        )
        if board.is_empty():
            logger.info("Board cleared with score %d", score.value)
            set_game_mode(self.world, self.event_bus, GameMode.CLEARED)
            self.event_bus.emit(EVENT_BOARD_CLEARED, score=score.value)
