"""Tests for container wiring."""

from farm_dashboard.adapters.file_store import JsonFileKeyValueStore
from farm_dashboard.adapters.memory_store import InMemoryKeyValueStore
from farm_dashboard.config import Settings
from farm_dashboard.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.dashboard_service is not None
    assert isinstance(container.gateway.store, InMemoryKeyValueStore)
    assert container.dashboard_service.cache.ttl_seconds == 300


def test_build_container_uses_file_store(tmp_path) -> None:
    settings = Settings(storage_dir=str(tmp_path / "profile"), cache_ttl_seconds=60)
    container = build_container(settings)

    assert isinstance(container.gateway.store, JsonFileKeyValueStore)
    assert (tmp_path / "profile").is_dir()
    assert container.dashboard_service.cache.ttl_seconds == 60
