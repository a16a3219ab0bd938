from appleten.components.game_state import GameMode
from appleten.constants import (
    KEY_BACKSPACE,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_L,
    KEY_M,
    KEY_R,
    KEY_RETURN,
    KEY_SPACE,
    MOUSE_BUTTON_LEFT,
)
from appleten.events.bus import (
    EventBus,
    EVENT_AD_ACCEPTED,
    EVENT_AD_DECLINED,
    EVENT_HOME_REQUEST,
    EVENT_MENU_CLOSE_REQUEST,
    EVENT_MENU_OPEN_REQUEST,
    EVENT_MOUSE_DRAG,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_RELEASE,
    EVENT_RECHARGE_OFFER_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_SELECTION_END,
    EVENT_SELECTION_MOVE,
    EVENT_SELECTION_START,
    EVENT_START_GAME_REQUEST,
)
from appleten.ui.layout import cell_at_point, compute_board_geometry
from appleten.utils.game_state import current_mode
from appleten.utils.session import get_board

# Button actions published by the modal renderer's layout cache.
ACTION_EVENTS = {
    "start": EVENT_START_GAME_REQUEST,
    "restart": EVENT_RESTART_REQUEST,
    "menu": EVENT_MENU_OPEN_REQUEST,
    "resume": EVENT_MENU_CLOSE_REQUEST,
    "home": EVENT_HOME_REQUEST,
    "watch_ad": EVENT_AD_ACCEPTED,
    "decline_ad": EVENT_AD_DECLINED,
    "recharge": EVENT_RECHARGE_OFFER_REQUEST,
}


class InputSystem:
    def __init__(self, event_bus: EventBus, window, world=None):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self._dragging = False
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_MOUSE_DRAG, self.on_mouse_drag)
        self.event_bus.subscribe(EVENT_MOUSE_RELEASE, self.on_mouse_release)

    def _mode(self):
        mode = current_mode(self.world) if self.world is not None else None
        return mode if mode is not None else GameMode.PLAYING

    def _cell_at(self, x, y):
        board = get_board(self.world) if self.world is not None else None
        if board is None:
            return None
        geometry = compute_board_geometry(self.window.width, self.window.height, board.rows, board.cols)
        return cell_at_point(geometry, x, y)

    def emit_action(self, action) -> bool:
        event = ACTION_EVENTS.get(action)
        if event is None:
            return False
        self.event_bus.emit(event)
        return True

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        if kwargs.get('button', MOUSE_BUTTON_LEFT) != MOUSE_BUTTON_LEFT:
            return
        render_system = getattr(self.window, 'render_system', None)
        if render_system and hasattr(render_system, 'get_action_at_point'):
            action = render_system.get_action_at_point(x, y)
            if action is not None:
                self.emit_action(action)
                return
        if self._mode() != GameMode.PLAYING:
            return
        cell = self._cell_at(x, y)
        if cell is None:
            return
        self._dragging = True
        self.event_bus.emit(EVENT_SELECTION_START, row=cell[0], col=cell[1])

    def on_mouse_drag(self, sender, **kwargs):
        if not self._dragging:
            return
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        cell = self._cell_at(x, y)
        # Leaving the board keeps the last rectangle.
        if cell is None:
            return
        self.event_bus.emit(EVENT_SELECTION_MOVE, row=cell[0], col=cell[1])

    def on_mouse_release(self, sender, **kwargs):
        if not self._dragging:
            return
        self._dragging = False
        self.event_bus.emit(EVENT_SELECTION_END)

    def handle_key_press(self, symbol: int, modifiers: int = 0) -> None:
        mode = self._mode()
        confirm = symbol in (KEY_ENTER, KEY_RETURN, KEY_SPACE)
        if mode == GameMode.HOME:
            if confirm:
                self.emit_action("start")
            elif symbol == KEY_L:
                self.emit_action("recharge")
        elif mode == GameMode.PLAYING:
            if symbol in (KEY_ESCAPE, KEY_M):
                self.emit_action("menu")
            elif symbol == KEY_R:
                self.emit_action("restart")
        elif mode == GameMode.PAUSED:
            if symbol in (KEY_ESCAPE, KEY_M) or confirm:
                self.emit_action("resume")
            elif symbol == KEY_R:
                self.emit_action("restart")
            elif symbol == KEY_BACKSPACE:
                self.emit_action("home")
        elif mode == GameMode.AD_CHOICE:
            if confirm:
                self.emit_action("watch_ad")
            elif symbol in (KEY_ESCAPE, KEY_BACKSPACE):
                self.emit_action("decline_ad")
        elif mode in (GameMode.TIMED_OUT, GameMode.CLEARED):
            if symbol == KEY_R or confirm:
                self.emit_action("restart")
            elif symbol in (KEY_ESCAPE, KEY_BACKSPACE):
                self.emit_action("home")
