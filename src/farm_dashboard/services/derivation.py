"""Pure derivations over herd records: stats, date filters, period bounds."""

import calendar
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from farm_dashboard.domain.animals import AnimalRecord, HealthStatus
from farm_dashboard.domain.stats import FarmStats
from farm_dashboard.domain.widgets import (
    AlertSeverity,
    HealthAlert,
    MilkProductionData,
)

DAIRY_COW = "Dairy Cow"
MONTHS_PER_QUARTER = 3


def compute_stats(records: Iterable[AnimalRecord]) -> FarmStats:
    """Aggregate herd statistics in a single pass."""
    total = 0
    healthy = 0
    total_milk = 0.0
    total_weight = 0.0
    total_feed = 0.0
    for record in records:
        total += 1
        if record.health_status == HealthStatus.HEALTHY:
            healthy += 1
        total_milk += record.milk_production or 0.0
        total_weight += record.weight
        total_feed += record.feed_consumption or 0.0
    return FarmStats(
        total_animals=total,
        healthy_animals=healthy,
        sick_animals=total - healthy,
        total_milk_production=total_milk,
        average_weight=total_weight / total if total else 0.0,
        feed_efficiency=total_milk / total_feed if total_feed > 0 else 0.0,
    )


def parse_calendar_date(value: str) -> date | None:
    """Return the calendar date of an ISO date or timestamp string."""
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def filter_by_date_range(
    records: Iterable[AnimalRecord], start: str, end: str
) -> list[AnimalRecord]:
    """Return records whose last checkup falls within [start, end].

    Unparseable checkup dates or bounds never match.
    """
    start_day = parse_calendar_date(start)
    end_day = parse_calendar_date(end)
    if start_day is None or end_day is None:
        return []
    matches = []
    for record in records:
        checkup = parse_calendar_date(record.last_checkup)
        if checkup is not None and start_day <= checkup <= end_day:
            matches.append(record)
    return matches


def filter_by_text(records: Iterable[AnimalRecord], text: str) -> list[AnimalRecord]:
    """Case-insensitive match against name, type and health status."""
    if not text:
        return list(records)
    needle = text.lower()
    return [
        record
        for record in records
        if needle in record.name.lower()
        or needle in record.type.lower()
        or needle in record.health_status.lower()
    ]


def add_days(start: str, days: int) -> str:
    """Shift an ISO date by a number of days."""
    day = parse_calendar_date(start)
    if day is None:
        raise ValueError(f"Invalid date: {start!r}")
    return (day + timedelta(days=days)).isoformat()


def last_day_of_month(year: int, month: int) -> str:
    """Return the ISO date of the final day of a month."""
    _, days = calendar.monthrange(year, month)
    return date(year, month, days).isoformat()


def week_range(start: str) -> tuple[str, str]:
    """Weekly reports end seven days after their start date."""
    return add_days(start, 0), add_days(start, 7)


def month_range(year: int, month: int) -> tuple[str, str]:
    return date(year, month, 1).isoformat(), last_day_of_month(year, month)


def quarter_range(year: int, quarter: int) -> tuple[str, str]:
    """Quarter N covers months 3N-2 through 3N."""
    if not 1 <= quarter <= 4:  # noqa: PLR2004
        raise ValueError(f"Quarter must be between 1 and 4, got {quarter}")
    start_month = (quarter - 1) * MONTHS_PER_QUARTER + 1
    end_month = start_month + MONTHS_PER_QUARTER - 1
    return date(year, start_month, 1).isoformat(), last_day_of_month(year, end_month)


def year_range(year: int) -> tuple[str, str]:
    return date(year, 1, 1).isoformat(), date(year, 12, 31).isoformat()


def health_alerts(records: Iterable[AnimalRecord]) -> list[HealthAlert]:
    """Build one alert per record that is not healthy."""
    return [
        HealthAlert(
            id=record.id,
            name=record.name,
            status=record.health_status,
            alert=_alert_message(record),
            severity=alert_severity(record.health_status),
        )
        for record in records
        if record.health_status != HealthStatus.HEALTHY
    ]


def alert_severity(status: str) -> AlertSeverity:
    if status == HealthStatus.SICK:
        return AlertSeverity.HIGH
    if status == HealthStatus.UNDER_OBSERVATION:
        return AlertSeverity.MEDIUM
    return AlertSeverity.LOW


def _alert_message(record: AnimalRecord) -> str:
    if record.health_status == HealthStatus.SICK:
        return f"{record.name} requires immediate attention"
    if record.health_status == HealthStatus.UNDER_OBSERVATION:
        return f"{record.name} is being monitored"
    return f"{record.name} status: {record.health_status}"


def milk_production_data(records: Iterable[AnimalRecord]) -> MilkProductionData:
    """Milk production series over dairy cows."""
    cows = [record for record in records if record.type == DAIRY_COW]
    values = [cow.milk_production or 0.0 for cow in cows]
    return MilkProductionData(
        labels=[cow.name for cow in cows],
        values=values,
        total=sum(values),
    )
