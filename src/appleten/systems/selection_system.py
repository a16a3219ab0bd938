from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from esper import World

from appleten.components.game_state import GameMode
from appleten.events.bus import (
    EVENT_GAME_MODE_CHANGED,
    EVENT_SELECTION_CHANGED,
    EVENT_SELECTION_END,
    EVENT_SELECTION_INVALID,
    EVENT_SELECTION_MOVE,
    EVENT_SELECTION_START,
    EVENT_SELECTION_SUBMIT,
    EVENT_SELECTION_VALID,
    EventBus,
)
from appleten.utils.game_state import current_mode
from appleten.utils.selection_rules import SelectionVerdict, check_selection
from appleten.utils.session import get_board, get_config, get_selection

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class SelectionSystem:
    """Tracks the drag rectangle and judges it when the gesture ends."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_SELECTION_START, self.on_start)
        self.event_bus.subscribe(EVENT_SELECTION_MOVE, self.on_move)
        self.event_bus.subscribe(EVENT_SELECTION_END, self.on_end)
        self.event_bus.subscribe(EVENT_SELECTION_SUBMIT, self.on_submit)
        self.event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self.on_mode_changed)

    def _cell_from(self, kwargs) -> Cell | None:
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return None
        board = get_board(self.world)
        if board is None or not board.in_bounds(row, col):
            return None
        return row, col

    def on_start(self, sender, **kwargs):
        if current_mode(self.world) != GameMode.PLAYING:
            return
        selection = get_selection(self.world)
        cell = self._cell_from(kwargs)
        if selection is None or cell is None:
            return
        selection.begin(cell)
        self.event_bus.emit(EVENT_SELECTION_CHANGED, cells=selection.cells())

    def on_move(self, sender, **kwargs):
        selection = get_selection(self.world)
        cell = self._cell_from(kwargs)
        if selection is None or not selection.active or cell is None:
            return
        if cell == selection.current:
            return
        selection.current = cell
        self.event_bus.emit(EVENT_SELECTION_CHANGED, cells=selection.cells())

    def on_end(self, sender, **kwargs):
        selection = get_selection(self.world)
        if selection is None or not selection.active:
            return
        cells = selection.cells()
        selection.reset()
        self.event_bus.emit(EVENT_SELECTION_CHANGED, cells=[])
        self.submit(cells)

    def on_submit(self, sender, **kwargs):
        cells = kwargs.get('cells')
        if cells is None:
            return
        self.submit(cells)

    def on_mode_changed(self, sender, **kwargs):
        selection = get_selection(self.world)
        if selection is not None and selection.active:
            selection.reset()
            self.event_bus.emit(EVENT_SELECTION_CHANGED, cells=[])

    def submit(self, cells: Iterable[Cell]) -> SelectionVerdict | None:
        if current_mode(self.world) != GameMode.PLAYING:
            return None
        board = get_board(self.world)
        if board is None:
            return None
        selected: List[Cell] = [tuple(cell) for cell in cells]
        verdict = check_selection(
            selected,
            board.cells,
            allow_empty=get_config(self.world).allow_empty_in_selection,
        )
        logger.debug("Selection of %d cells: %s", len(selected), verdict.value)
        if verdict.ok:
            self.event_bus.emit(EVENT_SELECTION_VALID, cells=selected)
        else:
            self.event_bus.emit(EVENT_SELECTION_INVALID, cells=selected, reason=verdict)
        return verdict
