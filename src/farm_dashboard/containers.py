"""Dependency container wiring for the application."""

from dataclasses import dataclass

from farm_dashboard.adapters.file_store import JsonFileKeyValueStore
from farm_dashboard.adapters.memory_store import InMemoryKeyValueStore
from farm_dashboard.adapters.mock_source import MockAnimalSource
from farm_dashboard.config import Settings
from farm_dashboard.services.cache import ExpiringCache
from farm_dashboard.services.dashboard import DashboardService
from farm_dashboard.services.persistence import KeyValueStore, PersistenceGateway
from farm_dashboard.services.records import RecordStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    gateway: PersistenceGateway
    dashboard_service: DashboardService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container and hydrate it from storage."""
    resolved_settings = settings or Settings()
    store: KeyValueStore
    if resolved_settings.storage_backend == "memory":
        store = InMemoryKeyValueStore()
    else:
        store = JsonFileKeyValueStore.create(resolved_settings.storage_dir)
    gateway = PersistenceGateway(store)
    dashboard_service = DashboardService(
        store=RecordStore(gateway),
        cache=ExpiringCache(gateway, ttl_seconds=resolved_settings.cache_ttl_seconds),
        gateway=gateway,
        source=MockAnimalSource(
            latency_seconds=resolved_settings.mock_latency_seconds
        ),
    )
    dashboard_service.load()
    return AppContainer(
        settings=resolved_settings,
        gateway=gateway,
        dashboard_service=dashboard_service,
    )
