"""Domain models for period reports."""

from dataclasses import dataclass
from enum import StrEnum

from farm_dashboard.domain.animals import (
    AnimalRecord,
    animal_from_payload,
    animal_to_payload,
)
from farm_dashboard.domain.stats import FarmStats, stats_from_payload, stats_to_payload


class ReportPeriod(StrEnum):
    """Report granularities."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ReportData:
    """Records checked up within a period, with herd-wide stats.

    ``stats`` covers every record in the herd, not only ``animals``.
    """

    period: ReportPeriod
    start_date: str
    end_date: str
    animals: list[AnimalRecord]
    stats: FarmStats
    generated_at: str


def report_to_payload(report: ReportData) -> dict[str, object]:
    """Serialize a report into a JSON-ready dict."""
    return {
        "period": report.period.value,
        "startDate": report.start_date,
        "endDate": report.end_date,
        "animals": [animal_to_payload(animal) for animal in report.animals],
        "stats": stats_to_payload(report.stats),
        "generatedAt": report.generated_at,
    }


def report_from_payload(payload: dict[str, object]) -> ReportData:
    """Parse a stored report."""
    animals = payload.get("animals") or []
    stats = payload.get("stats") or {}
    return ReportData(
        period=ReportPeriod(str(payload["period"])),
        start_date=str(payload.get("startDate", "")),
        end_date=str(payload.get("endDate", "")),
        animals=[animal_from_payload(item) for item in animals],
        stats=stats_from_payload(stats),
        generated_at=str(payload.get("generatedAt", "")),
    )
