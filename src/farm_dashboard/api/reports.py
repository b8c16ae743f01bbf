"""Report and widget endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Query, Request

from farm_dashboard.api.models import WidgetPayload
from farm_dashboard.domain.reports import report_to_payload
from farm_dashboard.domain.stats import stats_to_payload
from farm_dashboard.domain.widgets import WidgetType, widget_to_payload
from farm_dashboard.services.derivation import health_alerts, milk_production_data

if TYPE_CHECKING:
    from farm_dashboard.containers import AppContainer
    from farm_dashboard.services.dashboard import DashboardService

router = APIRouter(tags=["reports"])


def _service(request: Request) -> DashboardService:
    container: AppContainer = request.app.state.container
    return container.dashboard_service


@router.get("/reports/daily")
async def daily_report(request: Request, date: str) -> dict[str, object]:
    """Records checked up on a single day."""
    return report_to_payload(await _service(request).get_daily_report(date))


@router.get("/reports/weekly")
async def weekly_report(request: Request, start: str) -> dict[str, object]:
    return report_to_payload(await _service(request).get_weekly_report(start))


@router.get("/reports/monthly")
async def monthly_report(
    request: Request,
    year: int,
    month: int = Query(ge=1, le=12),
) -> dict[str, object]:
    return report_to_payload(await _service(request).get_monthly_report(year, month))


@router.get("/reports/quarterly")
async def quarterly_report(
    request: Request,
    year: int,
    quarter: int = Query(ge=1, le=4),
) -> dict[str, object]:
    return report_to_payload(
        await _service(request).get_quarterly_report(year, quarter)
    )


@router.get("/reports/yearly")
async def yearly_report(request: Request, year: int) -> dict[str, object]:
    return report_to_payload(await _service(request).get_yearly_report(year))


@router.get("/reports/custom")
async def custom_report(request: Request, start: str, end: str) -> dict[str, object]:
    """Report over an arbitrary inclusive date range."""
    service = _service(request)
    result = service.validate_date_range(start, end)
    if not result.valid:
        raise HTTPException(
            status_code=422,
            detail={"errors": result.errors},
        )
    return report_to_payload(await service.get_custom_report(start, end))


@router.get("/widgets")
async def list_widgets(request: Request) -> dict[str, object]:
    """Return the dashboard layout with each widget's data filled in."""
    service = _service(request)
    widgets = await service.get_dashboard_widgets()
    animals = await service.get_animals()
    stats = await service.get_stats()
    payloads = []
    for widget in widgets:
        payload = widget_to_payload(widget)
        if widget.type == WidgetType.STATS:
            payload["data"] = stats_to_payload(stats)
        elif widget.type == WidgetType.LIST:
            payload["data"] = [asdict(alert) for alert in health_alerts(animals)]
        else:
            payload["data"] = asdict(milk_production_data(animals))
        payloads.append(payload)
    return {"widgets": payloads}


@router.put("/widgets")
async def save_widgets(
    widgets: list[WidgetPayload], request: Request
) -> dict[str, object]:
    """Persist a new dashboard layout."""
    layout = [widget.to_widget() for widget in widgets]
    _service(request).save_dashboard_layout(layout)
    return {"widgets": [widget_to_payload(widget) for widget in layout]}
