"""Dashboard facade combining records, derivations, caching and persistence."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from farm_dashboard.domain.animals import AnimalRecord
from farm_dashboard.domain.reports import ReportData, ReportPeriod
from farm_dashboard.domain.stats import (
    EMPTY_STATS,
    FarmStats,
    stats_from_payload,
    stats_to_payload,
)
from farm_dashboard.domain.widgets import (
    DEFAULT_WIDGETS,
    DashboardWidget,
    widget_from_payload,
    widget_to_payload,
)
from farm_dashboard.services import formatting, validation
from farm_dashboard.services.cache import (
    CachedAnimals,
    CachedReport,
    CachedStats,
    CachedValue,
    CachedWidgets,
    ExpiringCache,
)
from farm_dashboard.services.channels import Channel, EventChannel
from farm_dashboard.services.derivation import (
    compute_stats,
    filter_by_date_range,
    filter_by_text,
    month_range,
    quarter_range,
    week_range,
    year_range,
)
from farm_dashboard.services.persistence import (
    STATS_KEY,
    WIDGETS_KEY,
    PersistenceGateway,
)
from farm_dashboard.services.records import RecordStore

ANIMALS_CACHE_KEY = "animals"
STATS_CACHE_KEY = "stats"
WIDGETS_CACHE_KEY = "dashboard_widgets"

_logger = logging.getLogger(__name__)


class AnimalSource(Protocol):
    """Upstream provider of herd records."""

    async def fetch_animals(self) -> list[AnimalRecord]:
        """Return the current herd."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DashboardService:
    """Read/write entry point for the dashboard.

    Reads consult the cache first and share one in-flight computation per
    key. Mutations write through the record store, drop the ``animals`` and
    ``stats`` cache entries and broadcast fresh values synchronously.
    Report entries only expire by time.
    """

    store: RecordStore
    cache: ExpiringCache
    gateway: PersistenceGateway
    source: AnimalSource
    clock: Callable[[], datetime] = _utc_now
    animals_channel: Channel[list[AnimalRecord]] = field(default_factory=Channel)
    stats_channel: Channel[FarmStats] = field(default_factory=Channel)
    report_channel: Channel[ReportData] = field(default_factory=Channel)
    loading_channel: EventChannel[bool] = field(default_factory=EventChannel)
    error_channel: EventChannel[str] = field(default_factory=EventChannel)
    _selected: AnimalRecord | None = field(default=None, init=False)
    _filter: str = field(default="", init=False)
    _needs_seed: bool = field(default=True, init=False)
    _in_flight: dict[str, asyncio.Future] = field(default_factory=dict, init=False)

    format_date = staticmethod(formatting.format_date)
    format_weight = staticmethod(formatting.format_weight)
    format_milk_production = staticmethod(formatting.format_milk_production)
    format_percentage = staticmethod(formatting.format_percentage)
    format_currency = staticmethod(formatting.format_currency)
    validate_animal = staticmethod(validation.validate_animal)
    validate_date_range = staticmethod(validation.validate_date_range)

    def load(self) -> None:
        """Hydrate records, cache and the last stats snapshot from storage."""
        self._needs_seed = not self.store.load()
        self.cache.load()
        if not self.store.is_empty():
            self.animals_channel.publish(self.store.list_animals())
        stored_stats = self.gateway.load(STATS_KEY)
        if isinstance(stored_stats, dict):
            try:
                self.stats_channel.publish(stats_from_payload(stored_stats))
            except (TypeError, ValueError):
                _logger.warning("Ignoring malformed stored stats")

    async def get_animals(self) -> list[AnimalRecord]:
        value = await self._read(
            ANIMALS_CACHE_KEY, self._compute_animals, "Failed to fetch animals"
        )
        if isinstance(value, CachedAnimals):
            return list(value.records)
        return []

    async def get_animal_by_id(self, animal_id: int) -> AnimalRecord | None:
        for animal in await self.get_animals():
            if animal.id == animal_id:
                return animal
        return None

    async def get_stats(self) -> FarmStats:
        value = await self._read(
            STATS_CACHE_KEY, self._compute_stats, "Failed to compute stats"
        )
        if isinstance(value, CachedStats):
            return value.stats
        return EMPTY_STATS

    async def get_daily_report(self, day: str) -> ReportData:
        return await self._report(
            ReportPeriod.DAILY, f"report_daily_{day}", lambda: (day, day)
        )

    async def get_weekly_report(self, start: str) -> ReportData:
        return await self._report(
            ReportPeriod.WEEKLY, f"report_weekly_{start}", lambda: week_range(start)
        )

    async def get_monthly_report(self, year: int, month: int) -> ReportData:
        return await self._report(
            ReportPeriod.MONTHLY,
            f"report_monthly_{year}_{month}",
            lambda: month_range(year, month),
        )

    async def get_quarterly_report(self, year: int, quarter: int) -> ReportData:
        return await self._report(
            ReportPeriod.QUARTERLY,
            f"report_quarterly_{year}_{quarter}",
            lambda: quarter_range(year, quarter),
        )

    async def get_yearly_report(self, year: int) -> ReportData:
        return await self._report(
            ReportPeriod.YEARLY, f"report_yearly_{year}", lambda: year_range(year)
        )

    async def get_custom_report(self, start: str, end: str) -> ReportData:
        return await self._report(
            ReportPeriod.CUSTOM, f"report_custom_{start}_{end}", lambda: (start, end)
        )

    async def get_dashboard_widgets(self) -> list[DashboardWidget]:
        value = await self._read(
            WIDGETS_CACHE_KEY, self._compute_widgets, "Failed to load dashboard widgets"
        )
        if isinstance(value, CachedWidgets):
            return list(value.widgets)
        return list(DEFAULT_WIDGETS)

    def save_dashboard_layout(self, widgets: list[DashboardWidget]) -> None:
        """Cache and persist a widget layout; widget data is not stored."""
        layout = [widget_from_payload(widget_to_payload(widget)) for widget in widgets]
        self.cache.set(WIDGETS_CACHE_KEY, CachedWidgets(layout))
        self.gateway.save(WIDGETS_KEY, [widget_to_payload(widget) for widget in layout])

    def add_animal(self, partial: dict[str, object]) -> AnimalRecord:
        record = self.store.add(partial)
        self._after_mutation()
        return record

    def update_animal(
        self, animal_id: int, partial: dict[str, object]
    ) -> AnimalRecord | None:
        record = self.store.update(animal_id, partial)
        if record is None:
            return None
        self._after_mutation()
        return record

    def delete_animal(self, animal_id: int) -> bool:
        if not self.store.delete(animal_id):
            return False
        self._after_mutation()
        return True

    def find_animal(self, animal_id: int) -> AnimalRecord | None:
        """Look up a record in the store without going through the cache."""
        return self.store.get(animal_id)

    def clear_all_cache(self) -> None:
        self.cache.clear_all()

    def select_animal(self, animal: AnimalRecord | None) -> None:
        self._selected = animal

    def get_selected_animal(self) -> AnimalRecord | None:
        return self._selected

    def set_filter(self, text: str) -> None:
        self._filter = text

    def get_filter(self) -> str:
        return self._filter

    def get_filtered_animals(self) -> list[AnimalRecord]:
        """Apply the current filter to the last broadcast animal list."""
        return filter_by_text(self.animals_channel.value or [], self._filter)

    async def _read(
        self,
        key: str,
        compute: Callable[[], Awaitable[CachedValue]],
        failure_message: str,
    ) -> CachedValue | None:
        self.loading_channel.publish(True)
        try:
            return await self._cached(key, compute)
        except Exception:
            _logger.exception(failure_message)
            self.error_channel.publish(failure_message)
            return None
        finally:
            self.loading_channel.publish(False)

    async def _cached(
        self, key: str, compute: Callable[[], Awaitable[CachedValue]]
    ) -> CachedValue:
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        pending = self._in_flight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._compute_and_cache(key, compute))
            self._in_flight[key] = pending
        return await asyncio.shield(pending)

    async def _compute_and_cache(
        self, key: str, compute: Callable[[], Awaitable[CachedValue]]
    ) -> CachedValue:
        try:
            value = await compute()
            self.cache.set(key, value)
            return value
        finally:
            self._in_flight.pop(key, None)

    async def _compute_animals(self) -> CachedAnimals:
        if self._needs_seed and self.store.is_empty():
            fetched = await self.source.fetch_animals()
            # A mutation during the fetch wins over the seed.
            if self._needs_seed and self.store.is_empty():
                self.store.replace_all(fetched)
                self._needs_seed = False
        records = self.store.list_animals()
        self.animals_channel.publish(records)
        return CachedAnimals(records)

    async def _compute_stats(self) -> CachedStats:
        animals = await self._cached(ANIMALS_CACHE_KEY, self._compute_animals)
        stats = compute_stats(animals.records)
        self.gateway.save(STATS_KEY, stats_to_payload(stats))
        self.stats_channel.publish(stats)
        return CachedStats(stats)

    async def _compute_widgets(self) -> CachedWidgets:
        saved = self.gateway.load(WIDGETS_KEY)
        if isinstance(saved, list) and saved:
            try:
                return CachedWidgets([widget_from_payload(item) for item in saved])
            except (KeyError, TypeError, ValueError):
                _logger.warning("Ignoring malformed saved dashboard layout")
        return CachedWidgets(list(DEFAULT_WIDGETS))

    async def _report(
        self,
        period: ReportPeriod,
        key: str,
        bounds: Callable[[], tuple[str, str]],
    ) -> ReportData:
        async def compute() -> CachedReport:
            start, end = bounds()
            animals = await self._cached(ANIMALS_CACHE_KEY, self._compute_animals)
            report = ReportData(
                period=period,
                start_date=start,
                end_date=end,
                animals=filter_by_date_range(animals.records, start, end),
                stats=compute_stats(animals.records),
                generated_at=self.clock().isoformat(),
            )
            self.report_channel.publish(report)
            return CachedReport(report)

        value = await self._read(
            key, compute, f"Failed to generate {period.value} report"
        )
        if isinstance(value, CachedReport):
            return value.report
        return ReportData(
            period=period,
            start_date="",
            end_date="",
            animals=[],
            stats=EMPTY_STATS,
            generated_at=self.clock().isoformat(),
        )

    def _after_mutation(self) -> None:
        self._needs_seed = False
        self.cache.invalidate(ANIMALS_CACHE_KEY)
        self.cache.invalidate(STATS_CACHE_KEY)
        records = self.store.list_animals()
        self.animals_channel.publish(records)
        stats = compute_stats(records)
        self.gateway.save(STATS_KEY, stats_to_payload(stats))
        self.stats_channel.publish(stats)
