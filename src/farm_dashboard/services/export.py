"""CSV export of the materialized dashboard view."""

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from farm_dashboard.domain.animals import AnimalRecord
from farm_dashboard.domain.stats import FarmStats
from farm_dashboard.services.derivation import health_alerts

CSV_MEDIA_TYPE = "text/csv"
CRLF = "\r\n"
FOOTER = "Exported from Farm Dashboard"

RECORD_HEADER = [
    "ID",
    "Name",
    "Type",
    "Birth Date",
    "Weight (kg)",
    "Health Status",
    "Last Checkup",
    "Milk Production (L)",
    "Feed Consumption",
    "Notes",
]
ALERT_HEADER = ["ID", "Name", "Status", "Alert", "Severity"]


class CsvStyle(StrEnum):
    """How cell values are made safe for the comma-separated format."""

    RFC4180 = "rfc4180"
    SANITIZE = "sanitize"


@dataclass(frozen=True)
class CsvExport:
    """A CSV document ready to be offered as a download."""

    filename: str
    media_type: str
    content: str


def export_dashboard(
    records: Sequence[AnimalRecord],
    stats: FarmStats | None,
    *,
    style: CsvStyle = CsvStyle.RFC4180,
    today: date | None = None,
) -> CsvExport:
    """Serialize stats, health alerts and all records into one CSV document.

    Works only from the values passed in; nothing is fetched.
    """
    rows: list[list[object]] = []
    rows.extend(_stats_section(stats))
    rows.append([])
    rows.extend(_alerts_section(records))
    rows.append([])
    rows.extend(_records_section(records))
    rows.append([])
    rows.append([FOOTER])

    export_day = today or date.today()
    return CsvExport(
        filename=f"farm-dashboard-export-{export_day.isoformat()}.csv",
        media_type=CSV_MEDIA_TYPE,
        content=render_rows(rows, style),
    )


def render_rows(rows: list[list[object]], style: CsvStyle) -> str:
    """Join rows with CRLF using the requested cell style."""
    if style is CsvStyle.SANITIZE:
        return "".join(
            ",".join(sanitize_cell(value) for value in row) + CRLF for row in rows
        )
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator=CRLF)
    writer.writerows([[_cell_text(value) for value in row] for row in rows])
    return buffer.getvalue()


def sanitize_cell(value: object) -> str:
    """Lossy cell cleanup: commas become semicolons, quotes and newlines go."""
    text = _cell_text(value)
    text = text.replace(",", ";").replace('"', "")
    return " ".join(text.splitlines())


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _stats_section(stats: FarmStats | None) -> list[list[object]]:
    rows: list[list[object]] = [["Current Farm Statistics"]]
    if stats is None:
        rows.append(["No statistics available"])
        return rows
    rows.extend(
        [
            ["Metric", "Value"],
            ["Total Animals", stats.total_animals],
            ["Healthy Animals", stats.healthy_animals],
            ["Sick Animals", stats.sick_animals],
            ["Total Milk Production (L)", round(stats.total_milk_production, 2)],
            ["Average Weight (kg)", round(stats.average_weight, 2)],
            ["Feed Efficiency", round(stats.feed_efficiency, 2)],
        ]
    )
    return rows


def _alerts_section(records: Sequence[AnimalRecord]) -> list[list[object]]:
    rows: list[list[object]] = [["Health Alerts"]]
    alerts = health_alerts(records)
    if not alerts:
        rows.append(["No health alerts"])
        return rows
    rows.append(list(ALERT_HEADER))
    for alert in alerts:
        rows.append(
            [alert.id, alert.name, alert.status, alert.alert, alert.severity.value]
        )
    return rows


def _records_section(records: Sequence[AnimalRecord]) -> list[list[object]]:
    rows: list[list[object]] = [["Animal Records"]]
    if not records:
        rows.append(["No animal data available"])
        return rows
    rows.append(list(RECORD_HEADER))
    for record in records:
        rows.append(
            [
                record.id,
                record.name,
                record.type,
                record.birth_date,
                record.weight,
                record.health_status,
                record.last_checkup,
                record.milk_production,
                record.feed_consumption,
                record.notes,
            ]
        )
    return rows
