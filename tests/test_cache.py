"""Tests for the expiring cache."""

import json

from farm_dashboard.adapters.memory_store import InMemoryKeyValueStore
from farm_dashboard.adapters.mock_source import SAMPLE_HERD
from farm_dashboard.domain.stats import FarmStats
from farm_dashboard.services.cache import (
    CachedAnimals,
    CachedStats,
    ExpiringCache,
)
from farm_dashboard.services.persistence import (
    CACHE_EXPIRY_KEY,
    CACHE_KEY,
    PersistenceGateway,
)
from tests.conftest import FakeClock

STATS = FarmStats(
    total_animals=2,
    healthy_animals=1,
    sick_animals=1,
    total_milk_production=30.5,
    average_weight=600.0,
    feed_efficiency=1.2,
)


def test_set_then_get_returns_value() -> None:
    cache = ExpiringCache(PersistenceGateway(InMemoryKeyValueStore()), clock=FakeClock())

    cache.set("stats", CachedStats(STATS))

    assert cache.get("stats") == CachedStats(STATS)
    assert cache.get("animals") is None


def test_entries_expire_after_ttl() -> None:
    clock = FakeClock()
    cache = ExpiringCache(PersistenceGateway(InMemoryKeyValueStore()), clock=clock)
    cache.set("stats", CachedStats(STATS))

    clock.advance(299)
    assert cache.get("stats") is not None

    clock.advance(2)
    assert cache.get("stats") is None
    assert "stats" not in cache.keys()


def test_set_persists_values_and_expiry() -> None:
    kv_store = InMemoryKeyValueStore()
    clock = FakeClock()
    cache = ExpiringCache(PersistenceGateway(kv_store), ttl_seconds=60, clock=clock)

    cache.set("stats", CachedStats(STATS))

    values = json.loads(kv_store.items[CACHE_KEY])
    expiry = json.loads(kv_store.items[CACHE_EXPIRY_KEY])
    assert values["stats"]["kind"] == "stats"
    assert values["stats"]["value"]["totalAnimals"] == 2
    assert expiry["stats"] == int(clock.now.timestamp() * 1000) + 60_000


def test_invalidate_drops_only_that_key() -> None:
    cache = ExpiringCache(PersistenceGateway(InMemoryKeyValueStore()), clock=FakeClock())
    cache.set("stats", CachedStats(STATS))
    cache.set("animals", CachedAnimals(list(SAMPLE_HERD)))

    cache.invalidate("stats")
    cache.invalidate("missing")

    assert cache.get("stats") is None
    assert cache.get("animals") is not None


def test_clear_all_erases_stored_copies() -> None:
    kv_store = InMemoryKeyValueStore()
    cache = ExpiringCache(PersistenceGateway(kv_store), clock=FakeClock())
    cache.set("stats", CachedStats(STATS))

    cache.clear_all()

    assert cache.keys() == []
    assert CACHE_KEY not in kv_store.items
    assert CACHE_EXPIRY_KEY not in kv_store.items


def test_load_rehydrates_unexpired_entries() -> None:
    kv_store = InMemoryKeyValueStore()
    clock = FakeClock()
    first = ExpiringCache(PersistenceGateway(kv_store), clock=clock)
    first.set("animals", CachedAnimals(list(SAMPLE_HERD)))

    second = ExpiringCache(PersistenceGateway(kv_store), clock=clock)
    second.load()

    cached = second.get("animals")
    assert isinstance(cached, CachedAnimals)
    assert [record.name for record in cached.records][:2] == ["Bessie", "Daisy"]

    clock.advance(301)
    assert second.get("animals") is None


def test_load_drops_undecodable_entries(caplog) -> None:
    kv_store = InMemoryKeyValueStore(
        {
            CACHE_KEY: json.dumps(
                {
                    "stats": {"kind": "mystery", "value": {}},
                    "other": {"kind": "stats"},
                }
            ),
            CACHE_EXPIRY_KEY: json.dumps({"stats": 4_000_000_000_000, "other": 1}),
        }
    )
    cache = ExpiringCache(PersistenceGateway(kv_store), clock=FakeClock())

    cache.load()

    assert cache.keys() == []
    assert "undecodable" in caplog.text


def test_set_drops_expired_entries_from_storage() -> None:
    kv_store = InMemoryKeyValueStore()
    clock = FakeClock()
    cache = ExpiringCache(PersistenceGateway(kv_store), clock=clock)
    cache.set("report_daily_2024-01-15", CachedStats(STATS))

    clock.advance(301)
    cache.set("stats", CachedStats(STATS))

    assert cache.keys() == ["stats"]
    assert list(json.loads(kv_store.items[CACHE_KEY])) == ["stats"]
    assert list(json.loads(kv_store.items[CACHE_EXPIRY_KEY])) == ["stats"]
