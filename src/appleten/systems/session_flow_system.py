from __future__ import annotations

import logging

from esper import World

from appleten.components.game_state import AdMode, GameMode, GameState
from appleten.events.bus import (
    EVENT_AD_ACCEPTED,
    EVENT_AD_CHOICE_OPENED,
    EVENT_AD_COMPLETED,
    EVENT_AD_DECLINED,
    EVENT_BOARD_GENERATED,
    EVENT_COUNTDOWN_EXPIRED,
    EVENT_HOME_REQUEST,
    EVENT_LIFE_SPEND_REQUEST,
    EVENT_LIVES_RECHARGE_REQUEST,
    EVENT_MENU_CLOSE_REQUEST,
    EVENT_MENU_OPEN_REQUEST,
    EVENT_NAVIGATE_HOME,
    EVENT_RECHARGE_OFFER_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_SESSION_OVER,
    EVENT_SESSION_STARTED,
    EVENT_START_GAME_REQUEST,
    EventBus,
)
from appleten.systems.board_generation import generate_board
from appleten.utils.game_state import get_game_state, set_game_mode
from appleten.utils.session import (
    get_board,
    get_config,
    get_countdown,
    get_lives,
    get_score,
    get_selection,
)

logger = logging.getLogger(__name__)

RESTARTABLE_MODES = frozenset({
    GameMode.PLAYING,
    GameMode.PAUSED,
    GameMode.AD_CHOICE,
    GameMode.TIMED_OUT,
    GameMode.CLEARED,
})

HOME_REACHABLE_MODES = frozenset({GameMode.PAUSED, GameMode.TIMED_OUT, GameMode.CLEARED})


class SessionFlowSystem:
    """Coordinates mode transitions between home, play and the ad-gated recovery prompts.

    Life bookkeeping is delegated to ``LifeSystem`` through spend/recharge
    events, which are dispatched synchronously, so the ``Lives`` component is
    up to date as soon as ``emit`` returns.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_START_GAME_REQUEST, self.on_start_game_request)
        self.event_bus.subscribe(EVENT_RESTART_REQUEST, self.on_restart_request)
        self.event_bus.subscribe(EVENT_MENU_OPEN_REQUEST, self.on_menu_open)
        self.event_bus.subscribe(EVENT_MENU_CLOSE_REQUEST, self.on_menu_close)
        self.event_bus.subscribe(EVENT_AD_ACCEPTED, self.on_ad_accepted)
        self.event_bus.subscribe(EVENT_AD_DECLINED, self.on_ad_declined)
        self.event_bus.subscribe(EVENT_AD_COMPLETED, self.on_ad_completed)
        self.event_bus.subscribe(EVENT_COUNTDOWN_EXPIRED, self.on_countdown_expired)
        self.event_bus.subscribe(EVENT_HOME_REQUEST, self.on_home_request)
        self.event_bus.subscribe(EVENT_RECHARGE_OFFER_REQUEST, self.on_recharge_offer_request)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _state(self) -> GameState:
        state = get_game_state(self.world)
        if state is None:
            set_game_mode(self.world, self.event_bus, GameMode.HOME)
            state = get_game_state(self.world)
        return state

    def _lives_left(self) -> int:
        lives = get_lives(self.world)
        return lives.current if lives is not None else 0

    def _score_value(self) -> int:
        score = get_score(self.world)
        return score.value if score is not None else 0

    def _spend_life(self, reason: str) -> int:
        self.event_bus.emit(EVENT_LIFE_SPEND_REQUEST, amount=1, reason=reason)
        return self._lives_left()

    def _deal_board(self) -> None:
        config = get_config(self.world)
        board = get_board(self.world)
        if board is None:
            return
        generated = generate_board(
            config.board_width,
            config.board_height,
            config.weights,
            self.world.random,
            max_attempts=config.max_generation_attempts,
        )
        board.replace(generated.grid)
        self.event_bus.emit(
            EVENT_BOARD_GENERATED,
            rows=board.rows,
            cols=board.cols,
            placements=len(generated.placements),
        )

    def _reset_session(self) -> None:
        self._deal_board()
        score = get_score(self.world)
        if score is not None:
            score.value = 0
        countdown = get_countdown(self.world)
        if countdown is not None:
            countdown.max_ms = get_config(self.world).max_time_ms
            countdown.reset()
        selection = get_selection(self.world)
        if selection is not None:
            selection.reset()
        state = self._state()
        state.time_over = False
        state.ad_mode = None
        state.pending_restart = False
        state.resume_mode = None

    def _play_fresh(self, reason: str) -> None:
        self._reset_session()
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        logger.info("Session started (%s)", reason)
        self.event_bus.emit(EVENT_SESSION_STARTED, reason=reason)

    def _open_ad_choice(self, ad_mode: AdMode, *, pending_restart: bool = False, resume_mode: GameMode | None = None) -> None:
        state = self._state()
        state.ad_mode = ad_mode
        state.pending_restart = pending_restart
        state.resume_mode = resume_mode
        set_game_mode(self.world, self.event_bus, GameMode.AD_CHOICE)
        self.event_bus.emit(EVENT_AD_CHOICE_OPENED, ad_mode=ad_mode, pending_restart=pending_restart)

    def _end_session(self, reason: str) -> None:
        set_game_mode(self.world, self.event_bus, GameMode.TIMED_OUT)
        score = self._score_value()
        logger.info("Session over (%s) with score %d", reason, score)
        self.event_bus.emit(EVENT_SESSION_OVER, score=score, reason=reason)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------
    def enter_session(self, *, reload: bool = False) -> None:
        """Enter the play screen directly, e.g. on launch or reload."""
        if reload:
            self._spend_life("reload")
        if self._lives_left() <= 0:
            self._reset_session()
            self._open_ad_choice(AdMode.RECHARGE, resume_mode=GameMode.PLAYING)
            return
        self._play_fresh("enter")

    def start_from_home(self) -> None:
        if self._state().mode != GameMode.HOME:
            return
        if self._lives_left() <= 0:
            self._open_ad_choice(AdMode.RECHARGE, resume_mode=GameMode.HOME)
            return
        self._spend_life("start")
        self._play_fresh("start")

    def restart(self) -> None:
        state = self._state()
        if state.mode not in RESTARTABLE_MODES:
            return
        if self._spend_life("restart") <= 0:
            self._open_ad_choice(AdMode.RECHARGE, pending_restart=True)
            return
        self._play_fresh("restart")

    def offer_recharge(self) -> None:
        """Open the recharge prompt from home so lives can be topped up early."""
        if self._state().mode != GameMode.HOME:
            return
        lives = get_lives(self.world)
        if lives is None or lives.is_full:
            return
        self._open_ad_choice(AdMode.RECHARGE, resume_mode=GameMode.HOME)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def on_start_game_request(self, sender, **kwargs):
        self.start_from_home()

    def on_restart_request(self, sender, **kwargs):
        self.restart()

    def on_menu_open(self, sender, **kwargs):
        if self._state().mode == GameMode.PLAYING:
            set_game_mode(self.world, self.event_bus, GameMode.PAUSED)

    def on_menu_close(self, sender, **kwargs):
        if self._state().mode == GameMode.PAUSED:
            set_game_mode(self.world, self.event_bus, GameMode.PLAYING)

    def on_home_request(self, sender, **kwargs):
        if self._state().mode not in HOME_REACHABLE_MODES:
            return
        set_game_mode(self.world, self.event_bus, GameMode.HOME)
        self.event_bus.emit(EVENT_NAVIGATE_HOME, reason="menu")

    def on_recharge_offer_request(self, sender, **kwargs):
        self.offer_recharge()

    def on_countdown_expired(self, sender, **kwargs):
        state = self._state()
        if state.mode != GameMode.PLAYING:
            return
        state.time_over = True
        if self._score_value() < get_config(self.world).success_score_threshold:
            self._open_ad_choice(AdMode.REVIVE)
        else:
            self._end_session("timeout")

    def on_ad_accepted(self, sender, **kwargs):
        if self._state().mode == GameMode.AD_CHOICE:
            set_game_mode(self.world, self.event_bus, GameMode.AD_PLAYING)

    def on_ad_declined(self, sender, **kwargs):
        state = self._state()
        if state.mode not in (GameMode.AD_CHOICE, GameMode.AD_PLAYING):
            return
        ad_mode = state.ad_mode
        state.ad_mode = None
        state.pending_restart = False
        state.resume_mode = None
        if ad_mode == AdMode.REVIVE:
            self._end_session("timeout")
            return
        set_game_mode(self.world, self.event_bus, GameMode.HOME)
        self.event_bus.emit(EVENT_NAVIGATE_HOME, reason="recharge_declined")

    def on_ad_completed(self, sender, **kwargs):
        state = self._state()
        if state.mode != GameMode.AD_PLAYING:
            return
        ad_mode = state.ad_mode
        if ad_mode == AdMode.RECHARGE:
            self.event_bus.emit(EVENT_LIVES_RECHARGE_REQUEST, reason="ad")
            pending = state.pending_restart
            resume = state.resume_mode or GameMode.PLAYING
            state.ad_mode = None
            state.pending_restart = False
            state.resume_mode = None
            if pending:
                self._play_fresh("restart")
            else:
                set_game_mode(self.world, self.event_bus, resume)
        elif ad_mode == AdMode.REVIVE:
            countdown = get_countdown(self.world)
            if countdown is not None:
                countdown.add(get_config(self.world).revive_bonus_ms)
            state.ad_mode = None
            state.time_over = False
            set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
