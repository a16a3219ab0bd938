from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody else references alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_MOUSE_DRAG = "mouse_drag"                    # payload: x, y
EVENT_MOUSE_RELEASE = "mouse_release"              # payload: x, y, button


# ============================================================================
# SELECTION
# ============================================================================
EVENT_SELECTION_START = "selection_start"          # payload: row, col
EVENT_SELECTION_MOVE = "selection_move"            # payload: row, col
EVENT_SELECTION_END = "selection_end"              # payload: None
EVENT_SELECTION_SUBMIT = "selection_submit"        # payload: cells=Iterable[(r,c)]
EVENT_SELECTION_CHANGED = "selection_changed"      # payload: cells=list[(r,c)]
EVENT_SELECTION_VALID = "selection_valid"          # payload: cells=list[(r,c)]
EVENT_SELECTION_INVALID = "selection_invalid"      # payload: cells=list[(r,c)], reason=SelectionVerdict


# ============================================================================
# BOARD
# ============================================================================
EVENT_BOARD_GENERATED = "board_generated"          # payload: rows=int, cols=int, placements=int
EVENT_APPLES_CLEARED = "apples_cleared"            # payload: cleared=list[ClearedApple], score=int, remaining_ms=int
EVENT_BOARD_CLEARED = "board_cleared"              # payload: score=int


# ============================================================================
# COUNTDOWN
# ============================================================================
EVENT_COUNTDOWN_EXPIRED = "countdown_expired"      # payload: score=int


# ============================================================================
# LIVES
# ============================================================================
EVENT_LIFE_SPEND_REQUEST = "life_spend_request"    # payload: amount=int, reason=str
EVENT_LIVES_RECHARGE_REQUEST = "lives_recharge_request"  # payload: reason=str
EVENT_LIVES_CHANGED = "lives_changed"              # payload: current=int, max_lives=int, last_refill_ms=int, delta=int, reason=str


# ============================================================================
# SESSION FLOW
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_START_GAME_REQUEST = "start_game_request"    # payload: None
EVENT_SESSION_STARTED = "session_started"          # payload: reason=str
EVENT_SESSION_OVER = "session_over"                # payload: score=int, reason=str
EVENT_RESTART_REQUEST = "restart_request"          # payload: reason=str|None
EVENT_MENU_OPEN_REQUEST = "menu_open_request"      # payload: None
EVENT_MENU_CLOSE_REQUEST = "menu_close_request"    # payload: None
EVENT_HOME_REQUEST = "home_request"                # payload: None
EVENT_NAVIGATE_HOME = "navigate_home"              # payload: reason=str


# ============================================================================
# ADS
# ============================================================================
EVENT_RECHARGE_OFFER_REQUEST = "recharge_offer_request"  # payload: None
EVENT_AD_CHOICE_OPENED = "ad_choice_opened"        # payload: ad_mode=AdMode, pending_restart=bool
EVENT_AD_ACCEPTED = "ad_accepted"                  # payload: None
EVENT_AD_DECLINED = "ad_declined"                  # payload: None
EVENT_AD_COMPLETED = "ad_completed"                # payload: None


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, entity=int
