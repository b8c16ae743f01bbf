"""Expiring cache for derived dashboard values."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from farm_dashboard.domain.animals import (
    AnimalRecord,
    animal_from_payload,
    animal_to_payload,
)
from farm_dashboard.domain.reports import (
    ReportData,
    report_from_payload,
    report_to_payload,
)
from farm_dashboard.domain.stats import FarmStats, stats_from_payload, stats_to_payload
from farm_dashboard.domain.widgets import (
    DashboardWidget,
    widget_from_payload,
    widget_to_payload,
)
from farm_dashboard.services.persistence import (
    CACHE_EXPIRY_KEY,
    CACHE_KEY,
    PersistenceGateway,
)

DEFAULT_TTL_SECONDS = 5 * 60

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedAnimals:
    records: list[AnimalRecord]


@dataclass(frozen=True)
class CachedStats:
    stats: FarmStats


@dataclass(frozen=True)
class CachedReport:
    report: ReportData


@dataclass(frozen=True)
class CachedWidgets:
    widgets: list[DashboardWidget]


CachedValue = CachedAnimals | CachedStats | CachedReport | CachedWidgets


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ExpiringCache:
    """Maps keys to tagged values with a fixed time-to-live.

    Every ``set`` mirrors both the value map and the expiry map to storage.
    """

    gateway: PersistenceGateway
    ttl_seconds: int = DEFAULT_TTL_SECONDS
    clock: Callable[[], datetime] = _utc_now
    _values: dict[str, CachedValue] = field(default_factory=dict, init=False)
    _expiry: dict[str, datetime] = field(default_factory=dict, init=False)

    def load(self) -> None:
        """Rehydrate both maps from storage, dropping entries that fail to decode."""
        raw_values = self.gateway.load(CACHE_KEY)
        raw_expiry = self.gateway.load(CACHE_EXPIRY_KEY)
        if not isinstance(raw_values, dict) or not isinstance(raw_expiry, dict):
            return
        for key, payload in raw_values.items():
            expires_ms = raw_expiry.get(key)
            if not isinstance(expires_ms, int | float):
                continue
            try:
                value = decode_cached_value(payload)
            except (KeyError, TypeError, ValueError):
                _logger.warning("Dropping undecodable cache entry %s", key)
                continue
            self._values[key] = value
            self._expiry[key] = datetime.fromtimestamp(expires_ms / 1000, tz=UTC)

    def get(self, key: str) -> CachedValue | None:
        """Return a cached value if present and not expired."""
        value = self._values.get(key)
        expires_at = self._expiry.get(key)
        if value is None or expires_at is None:
            return None
        if self.clock() >= expires_at:
            self._values.pop(key, None)
            self._expiry.pop(key, None)
            return None
        return value

    def set(self, key: str, value: CachedValue) -> None:
        """Store a value with a fresh expiry and persist the cache."""
        self._values[key] = value
        self._expiry[key] = self.clock() + timedelta(seconds=self.ttl_seconds)
        self._persist()

    def invalidate(self, key: str) -> None:
        """Drop a key from memory; storage is rewritten on the next set."""
        self._values.pop(key, None)
        self._expiry.pop(key, None)

    def clear_all(self) -> None:
        """Empty the cache and erase its stored copies."""
        self._values.clear()
        self._expiry.clear()
        self.gateway.remove(CACHE_KEY)
        self.gateway.remove(CACHE_EXPIRY_KEY)

    def keys(self) -> list[str]:
        return list(self._values)

    def _persist(self) -> None:
        self._prune_expired()
        self.gateway.save(
            CACHE_KEY,
            {key: encode_cached_value(value) for key, value in self._values.items()},
        )
        self.gateway.save(
            CACHE_EXPIRY_KEY,
            {
                key: int(expires_at.timestamp() * 1000)
                for key, expires_at in self._expiry.items()
            },
        )

    def _prune_expired(self) -> None:
        now = self.clock()
        expired = [key for key, expires_at in self._expiry.items() if now >= expires_at]
        for key in expired:
            self._values.pop(key, None)
            self._expiry.pop(key, None)


def encode_cached_value(value: CachedValue) -> dict[str, object]:
    """Serialize a tagged cache value."""
    if isinstance(value, CachedAnimals):
        return {
            "kind": "animals",
            "value": [animal_to_payload(record) for record in value.records],
        }
    if isinstance(value, CachedStats):
        return {"kind": "stats", "value": stats_to_payload(value.stats)}
    if isinstance(value, CachedReport):
        return {"kind": "report", "value": report_to_payload(value.report)}
    return {
        "kind": "widgets",
        "value": [widget_to_payload(widget) for widget in value.widgets],
    }


def decode_cached_value(payload: dict[str, object]) -> CachedValue:
    """Parse a tagged cache value; raises ValueError on an unknown kind."""
    kind = payload["kind"]
    value = payload["value"]
    if kind == "animals":
        return CachedAnimals([animal_from_payload(item) for item in value])
    if kind == "stats":
        return CachedStats(stats_from_payload(value))
    if kind == "report":
        return CachedReport(report_from_payload(value))
    if kind == "widgets":
        return CachedWidgets([widget_from_payload(item) for item in value])
    raise ValueError(f"Unknown cache entry kind: {kind}")
