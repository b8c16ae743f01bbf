"""Domain models for dashboard widgets and their payloads."""

from dataclasses import dataclass, field
from enum import StrEnum


class WidgetType(StrEnum):
    """Kinds of dashboard widget."""

    STATS = "stats"
    CHART = "chart"
    LIST = "list"


class AlertSeverity(StrEnum):
    """Severity attached to a health alert."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class WidgetPosition:
    """Grid position of a widget."""

    x: int
    y: int


@dataclass(frozen=True)
class WidgetSize:
    """Grid size of a widget."""

    width: int
    height: int


@dataclass(frozen=True)
class DashboardWidget:
    """Layout entry for the dashboard.

    ``data`` is filled by the presentation layer and never cached.
    """

    id: str
    type: WidgetType
    title: str
    position: WidgetPosition
    size: WidgetSize
    data: object | None = None


@dataclass(frozen=True)
class HealthAlert:
    """Alert derived from a record that is not healthy."""

    id: int
    name: str
    status: str
    alert: str
    severity: AlertSeverity


@dataclass(frozen=True)
class MilkProductionData:
    """Per-cow milk production series."""

    labels: list[str] = field(default_factory=list)
    values: list[float] = field(default_factory=list)
    total: float = 0.0


DEFAULT_WIDGETS: tuple[DashboardWidget, ...] = (
    DashboardWidget(
        id="widget-1",
        type=WidgetType.STATS,
        title="Farm Overview",
        position=WidgetPosition(x=0, y=0),
        size=WidgetSize(width=4, height=2),
    ),
    DashboardWidget(
        id="widget-2",
        type=WidgetType.CHART,
        title="Milk Production Trend",
        position=WidgetPosition(x=4, y=0),
        size=WidgetSize(width=4, height=2),
    ),
    DashboardWidget(
        id="widget-3",
        type=WidgetType.LIST,
        title="Recent Health Alerts",
        position=WidgetPosition(x=8, y=0),
        size=WidgetSize(width=4, height=2),
    ),
)


def widget_to_payload(widget: DashboardWidget) -> dict[str, object]:
    """Serialize a widget layout entry, dropping its data payload."""
    return {
        "id": widget.id,
        "type": widget.type.value,
        "title": widget.title,
        "position": {"x": widget.position.x, "y": widget.position.y},
        "size": {"width": widget.size.width, "height": widget.size.height},
    }


def widget_from_payload(payload: dict[str, object]) -> DashboardWidget:
    """Parse a stored widget layout entry."""
    position = payload.get("position") or {}
    size = payload.get("size") or {}
    return DashboardWidget(
        id=str(payload["id"]),
        type=WidgetType(str(payload["type"])),
        title=str(payload.get("title", "")),
        position=WidgetPosition(
            x=int(position.get("x", 0)), y=int(position.get("y", 0))
        ),
        size=WidgetSize(
            width=int(size.get("width", 1)), height=int(size.get("height", 1))
        ),
    )
