import json

from appleten.utils.storage import DAY_MS, JsonFileStore, MemoryStore
from tests.helpers import FakeClock


def test_memory_store_round_trip_and_expiry():
    clock = FakeClock(0)
    store = MemoryStore(clock=clock)

    store.save("lives", "3", ttl_days=1)
    assert store.load("lives") == "3"

    clock.advance(DAY_MS)
    assert store.load("lives") is None


def test_memory_store_missing_key():
    assert MemoryStore(clock=FakeClock()).load("lives") is None


def test_json_store_persists_between_instances(tmp_path):
    clock = FakeClock(0)
    path = tmp_path / "nested" / "lives.json"

    JsonFileStore(path, clock=clock).save("lives", "2", ttl_days=365)
    reopened = JsonFileStore(path, clock=clock)

    assert reopened.load("lives") == "2"
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    assert payload["lives"]["expires_at"] == 365 * DAY_MS


def test_json_store_drops_expired_entries(tmp_path):
    clock = FakeClock(0)
    store = JsonFileStore(tmp_path / "lives.json", clock=clock)
    store.save("lastRefill", "123", ttl_days=1)

    clock.advance(DAY_MS + 1)

    assert store.load("lastRefill") is None


def test_json_store_tolerates_corrupt_file(tmp_path):
    path = tmp_path / "lives.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(path, clock=FakeClock(0))

    assert store.load("lives") is None
    store.save("lives", "4", ttl_days=1)
    assert store.load("lives") == "4"


def test_json_store_ignores_non_object_document(tmp_path):
    path = tmp_path / "lives.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert JsonFileStore(path, clock=FakeClock(0)).load("lives") is None
