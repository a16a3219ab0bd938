import pytest

from appleten.components.game_state import AdMode, GameMode
from appleten.config import DifficultyConfig
from appleten.constants import LIVES_KEY
from appleten.events.bus import (
    EVENT_AD_ACCEPTED,
    EVENT_AD_COMPLETED,
    EVENT_AD_DECLINED,
    EVENT_BOARD_GENERATED,
    EVENT_HOME_REQUEST,
    EVENT_MENU_CLOSE_REQUEST,
    EVENT_MENU_OPEN_REQUEST,
    EVENT_NAVIGATE_HOME,
    EVENT_RECHARGE_OFFER_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_SESSION_OVER,
    EVENT_SESSION_STARTED,
    EVENT_START_GAME_REQUEST,
)
from appleten.utils.game_state import get_game_state
from appleten.utils.session import get_board, get_countdown, get_lives, get_score
from appleten.utils.storage import MemoryStore
from tests.helpers import FakeClock, build_session


def _mode(session):
    return get_game_state(session.world).mode


def _playing(config=None):
    session = build_session(config)
    session.bus.emit(EVENT_START_GAME_REQUEST)
    assert _mode(session) == GameMode.PLAYING
    return session


def test_start_from_home_spends_a_life_and_deals_board():
    session = build_session()
    session.record(EVENT_SESSION_STARTED, EVENT_BOARD_GENERATED)

    session.bus.emit(EVENT_START_GAME_REQUEST)

    board = get_board(session.world)
    assert _mode(session) == GameMode.PLAYING
    assert get_lives(session.world).current == 4
    assert (board.rows, board.cols) == (14, 10)
    assert board.remaining() == 140
    assert session.payloads(EVENT_SESSION_STARTED) == [{"reason": "start"}]
    assert len(session.payloads(EVENT_BOARD_GENERATED)) == 1


def test_start_from_home_without_lives_offers_recharge_and_returns_home():
    session = build_session()
    session.life.spend(5)

    session.bus.emit(EVENT_START_GAME_REQUEST)
    state = get_game_state(session.world)
    assert state.mode == GameMode.AD_CHOICE
    assert state.ad_mode == AdMode.RECHARGE
    assert state.pending_restart is False

    session.bus.emit(EVENT_AD_ACCEPTED)
    assert _mode(session) == GameMode.AD_PLAYING
    session.bus.emit(EVENT_AD_COMPLETED)

    assert _mode(session) == GameMode.HOME
    assert get_lives(session.world).current == 5


def test_restart_exhaustion_scenario():
    session = _playing()
    lives = get_lives(session.world)
    assert lives.current == 4

    for expected in (3, 2, 1):
        session.bus.emit(EVENT_RESTART_REQUEST)
        assert lives.current == expected
        assert _mode(session) == GameMode.PLAYING

    session.bus.emit(EVENT_RESTART_REQUEST)
    state = get_game_state(session.world)
    assert lives.current == 0
    assert state.mode == GameMode.AD_CHOICE
    assert state.ad_mode == AdMode.RECHARGE
    assert state.pending_restart is True

    session.bus.emit(EVENT_RESTART_REQUEST)
    assert lives.current == 0
    assert state.mode == GameMode.AD_CHOICE
    assert state.ad_mode == AdMode.RECHARGE
    assert state.pending_restart is True


def test_recharge_completion_performs_pending_restart():
    session = _playing()
    for _ in range(4):
        session.bus.emit(EVENT_RESTART_REQUEST)
    get_score(session.world).value = 33
    session.record(EVENT_SESSION_STARTED)

    session.bus.emit(EVENT_AD_ACCEPTED)
    session.bus.emit(EVENT_AD_COMPLETED)

    state = get_game_state(session.world)
    assert state.mode == GameMode.PLAYING
    assert state.pending_restart is False
    assert state.ad_mode is None
    assert get_lives(session.world).current == 5
    assert get_score(session.world).value == 0
    assert get_countdown(session.world).remaining_ms == 100_000
    assert session.payloads(EVENT_SESSION_STARTED) == [{"reason": "restart"}]


def test_declining_recharge_navigates_home():
    session = _playing()
    for _ in range(4):
        session.bus.emit(EVENT_RESTART_REQUEST)
    session.record(EVENT_NAVIGATE_HOME)

    session.bus.emit(EVENT_AD_DECLINED)

    state = get_game_state(session.world)
    assert state.mode == GameMode.HOME
    assert state.pending_restart is False
    assert session.payloads(EVENT_NAVIGATE_HOME) == [{"reason": "recharge_declined"}]


def test_revive_adds_a_minute_and_resumes():
    session = _playing()
    countdown = get_countdown(session.world)
    countdown.remaining_ms = 5
    session.countdown.tick()
    assert _mode(session) == GameMode.AD_CHOICE

    session.bus.emit(EVENT_AD_ACCEPTED)
    session.bus.emit(EVENT_AD_COMPLETED)

    state = get_game_state(session.world)
    assert state.mode == GameMode.PLAYING
    assert state.time_over is False
    assert countdown.remaining_ms == 60_000


def test_revive_bonus_is_clamped_to_max_time():
    session = _playing(DifficultyConfig(max_time_ms=30_000))
    get_countdown(session.world).remaining_ms = 5
    session.countdown.tick()
    session.bus.emit(EVENT_AD_ACCEPTED)
    session.bus.emit(EVENT_AD_COMPLETED)

    assert get_countdown(session.world).remaining_ms == 30_000


def test_declining_revive_ends_session():
    session = _playing()
    get_score(session.world).value = 12
    get_countdown(session.world).remaining_ms = 10
    session.countdown.tick()
    session.record(EVENT_SESSION_OVER)

    session.bus.emit(EVENT_AD_DECLINED)

    assert _mode(session) == GameMode.TIMED_OUT
    assert session.payloads(EVENT_SESSION_OVER) == [{"score": 12, "reason": "timeout"}]


def test_menu_pauses_and_resumes_without_losing_time():
    session = _playing()
    countdown = get_countdown(session.world)
    countdown.remaining_ms = 42_000

    session.bus.emit(EVENT_MENU_OPEN_REQUEST)
    assert _mode(session) == GameMode.PAUSED
    session.countdown.tick()
    session.bus.emit(EVENT_MENU_CLOSE_REQUEST)

    assert _mode(session) == GameMode.PLAYING
    assert countdown.remaining_ms == 42_000


def test_home_request_from_pause():
    session = _playing()
    session.bus.emit(EVENT_MENU_OPEN_REQUEST)
    session.record(EVENT_NAVIGATE_HOME)

    session.bus.emit(EVENT_HOME_REQUEST)

    assert _mode(session) == GameMode.HOME
    assert session.payloads(EVENT_NAVIGATE_HOME) == [{"reason": "menu"}]


@pytest.mark.parametrize("event", [EVENT_RESTART_REQUEST, EVENT_AD_COMPLETED, EVENT_AD_ACCEPTED, EVENT_MENU_OPEN_REQUEST])
def test_requests_from_home_are_noops(event):
    session = build_session()

    session.bus.emit(event)

    assert _mode(session) == GameMode.HOME
    assert get_lives(session.world).current == 5


def test_restart_after_cleared_board():
    session = _playing()
    board = get_board(session.world)
    board.replace([[1, 9]])
    session.selection.submit([(0, 0), (0, 1)])
    assert _mode(session) == GameMode.CLEARED

    session.bus.emit(EVENT_RESTART_REQUEST)

    assert _mode(session) == GameMode.PLAYING
    assert board.remaining() == 140
    assert get_lives(session.world).current == 3


def test_reload_entry_spends_a_life_first():
    clock = FakeClock()
    store = MemoryStore(clock=clock)
    store.save(LIVES_KEY, "1", ttl_days=365)
    session = build_session(clock=clock, store=store)

    session.flow.enter_session(reload=True)

    state = get_game_state(session.world)
    assert get_lives(session.world).current == 0
    assert state.mode == GameMode.AD_CHOICE
    assert state.ad_mode == AdMode.RECHARGE
    assert get_board(session.world).remaining() == 140

    session.bus.emit(EVENT_AD_ACCEPTED)
    session.bus.emit(EVENT_AD_COMPLETED)
    assert state.mode == GameMode.PLAYING
    assert get_lives(session.world).current == 5


def test_plain_entry_with_lives_plays_without_spending():
    session = build_session()

    session.flow.enter_session()

    assert _mode(session) == GameMode.PLAYING
    assert get_lives(session.world).current == 5


def test_recharge_offer_from_home_tops_up_partial_lives():
    session = build_session()
    session.life.spend(2)
    assert get_lives(session.world).current == 3

    session.bus.emit(EVENT_RECHARGE_OFFER_REQUEST)
    state = get_game_state(session.world)
    assert state.mode == GameMode.AD_CHOICE
    assert state.ad_mode == AdMode.RECHARGE
    assert state.pending_restart is False

    session.bus.emit(EVENT_AD_ACCEPTED)
    session.bus.emit(EVENT_AD_COMPLETED)

    assert _mode(session) == GameMode.HOME
    assert get_lives(session.world).current == 5


def test_recharge_offer_is_ignored_with_full_lives():
    session = build_session()

    session.bus.emit(EVENT_RECHARGE_OFFER_REQUEST)

    assert _mode(session) == GameMode.HOME
    assert get_game_state(session.world).ad_mode is None


def test_recharge_offer_is_ignored_outside_home():
    session = _playing()

    session.bus.emit(EVENT_RECHARGE_OFFER_REQUEST)

    assert _mode(session) == GameMode.PLAYING
    assert get_lives(session.world).current == 4


def test_declining_recharge_offer_returns_home_without_spending():
    session = build_session()
    session.life.spend(1)
    session.record(EVENT_NAVIGATE_HOME)

    session.bus.emit(EVENT_RECHARGE_OFFER_REQUEST)
    session.bus.emit(EVENT_AD_DECLINED)

    assert _mode(session) == GameMode.HOME
    assert get_lives(session.world).current == 4
    assert session.payloads(EVENT_NAVIGATE_HOME) == [{"reason": "recharge_declined"}]
