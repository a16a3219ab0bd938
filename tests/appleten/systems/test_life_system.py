from appleten.constants import LAST_REFILL_KEY, LIVES_KEY
from appleten.events.bus import EVENT_LIFE_SPEND_REQUEST, EVENT_LIVES_CHANGED, EVENT_TICK
from appleten.utils.session import get_lives
from appleten.utils.storage import MemoryStore
from tests.helpers import FakeClock, build_session

INTERVAL = 600_000


def _store_with(clock, **values):
    store = MemoryStore(clock=clock)
    for key, value in values.items():
        store.save(key, value, ttl_days=365)
    return store


def test_empty_store_loads_full_lives_and_persists_them():
    clock = FakeClock(5_000)
    session = build_session(clock=clock)

    lives = get_lives(session.world)
    assert lives.current == 5
    assert lives.last_refill_ms == 5_000
    assert session.store.load(LIVES_KEY) == "5"
    assert session.store.load(LAST_REFILL_KEY) == "5000"


def test_malformed_stored_values_fall_back_to_defaults():
    clock = FakeClock(7_000)
    store = _store_with(clock, **{LIVES_KEY: "lots", LAST_REFILL_KEY: "yesterday"})

    session = build_session(clock=clock, store=store)

    lives = get_lives(session.world)
    assert lives.current == 5
    assert lives.last_refill_ms == 7_000


def test_stored_lives_are_refilled_on_load():
    clock = FakeClock(10 * INTERVAL)
    store = _store_with(clock, **{LIVES_KEY: "1", LAST_REFILL_KEY: str(10 * INTERVAL - 2 * INTERVAL - 1_000)})

    session = build_session(clock=clock, store=store)

    lives = get_lives(session.world)
    assert lives.current == 3
    assert lives.last_refill_ms == 10 * INTERVAL - 1_000


def test_spend_from_full_starts_refill_timer_now():
    clock = FakeClock(0)
    session = build_session(clock=clock)
    clock.advance(3 * INTERVAL)

    session.bus.emit(EVENT_LIFE_SPEND_REQUEST, amount=1, reason="test")

    lives = get_lives(session.world)
    assert lives.current == 4
    assert lives.last_refill_ms == 3 * INTERVAL
    assert session.store.load(LIVES_KEY) == "4"


def test_tick_refills_after_interval_and_emits_change():
    clock = FakeClock(0)
    session = build_session(clock=clock)
    session.life.spend(2)
    session.record(EVENT_LIVES_CHANGED)

    clock.advance(INTERVAL - 1)
    session.bus.emit(EVENT_TICK, dt=0.016)
    assert get_lives(session.world).current == 3
    assert session.events == []

    clock.advance(1)
    session.bus.emit(EVENT_TICK, dt=0.016)
    assert get_lives(session.world).current == 4
    payload = session.payloads(EVENT_LIVES_CHANGED)[0]
    assert payload["delta"] == 1
    assert payload["reason"] == "refill"
    assert session.store.load(LIVES_KEY) == "4"


def test_spend_never_goes_below_zero():
    session = build_session()
    for _ in range(7):
        session.life.spend(1)

    assert get_lives(session.world).current == 0


def test_recharge_restores_max_and_resets_timer():
    clock = FakeClock(0)
    session = build_session(clock=clock)
    session.life.spend(5)
    clock.advance(1_234)

    session.life.recharge()

    lives = get_lives(session.world)
    assert lives.current == 5
    assert lives.last_refill_ms == 1_234
    assert session.store.load(LAST_REFILL_KEY) == "1234"


def test_time_to_next_refill_counts_down():
    clock = FakeClock(0)
    session = build_session(clock=clock)
    session.life.spend(1)
    clock.advance(60_000)

    assert session.life.time_to_next_refill() == INTERVAL - 60_000
