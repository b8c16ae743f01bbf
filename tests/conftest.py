"""Shared test fixtures."""

import asyncio
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from farm_dashboard.adapters.memory_store import InMemoryKeyValueStore
from farm_dashboard.adapters.mock_source import SAMPLE_HERD
from farm_dashboard.config import Settings
from farm_dashboard.containers import AppContainer
from farm_dashboard.domain.animals import AnimalRecord
from farm_dashboard.services.cache import ExpiringCache
from farm_dashboard.services.dashboard import AnimalSource, DashboardService
from farm_dashboard.services.persistence import KeyValueStore, PersistenceGateway
from farm_dashboard.services.records import RecordStore


@dataclass
class FakeClock:
    """Controllable clock."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 1, 16, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@dataclass
class StaticAnimalSource(AnimalSource):
    """Animal source that returns fixed records and counts calls."""

    records: list[AnimalRecord] = field(default_factory=lambda: list(SAMPLE_HERD))
    calls: int = 0
    error: Exception | None = None
    delay: float = 0

    async def fetch_animals(self) -> list[AnimalRecord]:
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.records)


@dataclass
class FailingKeyValueStore(KeyValueStore):
    """Store that rejects every write, as with an exhausted quota."""

    items: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        raise OSError("storage quota exceeded")

    def remove_item(self, key: str) -> None:
        raise OSError("storage unavailable")


def make_service(
    kv_store: KeyValueStore | None = None,
    source: StaticAnimalSource | None = None,
    clock: FakeClock | None = None,
) -> DashboardService:
    """Wire a dashboard service over in-memory collaborators and load it."""
    resolved_clock = clock or FakeClock()
    gateway = PersistenceGateway(kv_store or InMemoryKeyValueStore())
    service = DashboardService(
        store=RecordStore(gateway, clock=resolved_clock),
        cache=ExpiringCache(gateway, clock=resolved_clock),
        gateway=gateway,
        source=source or StaticAnimalSource(),
        clock=resolved_clock,
    )
    service.load()
    return service


@pytest.fixture(autouse=True)
def _reset_app_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("farm_dashboard")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory", mock_latency_seconds=0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def gateway(kv_store: InMemoryKeyValueStore) -> PersistenceGateway:
    return PersistenceGateway(kv_store)


@pytest.fixture
def source() -> StaticAnimalSource:
    return StaticAnimalSource()


@pytest.fixture
def service(
    kv_store: InMemoryKeyValueStore, source: StaticAnimalSource, clock: FakeClock
) -> DashboardService:
    return make_service(kv_store, source, clock)


@pytest.fixture
def container(
    settings: Settings, service: DashboardService
) -> AppContainer:
    return AppContainer(
        settings=settings,
        gateway=service.gateway,
        dashboard_service=service,
    )
