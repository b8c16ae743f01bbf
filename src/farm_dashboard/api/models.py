"""Pydantic models for HTTP request payloads."""

from pydantic import BaseModel, ConfigDict, Field

from farm_dashboard.domain.animals import HealthStatus
from farm_dashboard.domain.widgets import (
    DashboardWidget,
    WidgetPosition,
    WidgetSize,
    WidgetType,
)


class AnimalPayload(BaseModel):
    """Animal fields accepted on create and update; all optional."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    type: str | None = None
    birth_date: str | None = Field(default=None, alias="birthDate")
    weight: float | None = None
    health_status: HealthStatus | None = Field(default=None, alias="healthStatus")
    last_checkup: str | None = Field(default=None, alias="lastCheckup")
    milk_production: float | None = Field(default=None, alias="milkProduction")
    feed_consumption: float | None = Field(default=None, alias="feedConsumption")
    notes: str | None = None

    def to_partial(self) -> dict[str, object]:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class PositionPayload(BaseModel):
    x: int
    y: int


class SizePayload(BaseModel):
    width: int
    height: int


class WidgetPayload(BaseModel):
    """Dashboard widget layout entry."""

    id: str
    type: WidgetType
    title: str
    position: PositionPayload
    size: SizePayload

    def to_widget(self) -> DashboardWidget:
        return DashboardWidget(
            id=self.id,
            type=self.type,
            title=self.title,
            position=WidgetPosition(x=self.position.x, y=self.position.y),
            size=WidgetSize(width=self.size.width, height=self.size.height),
        )


class FilterPayload(BaseModel):
    filter: str = ""


class SelectionPayload(BaseModel):
    animal_id: int | None = Field(default=None, alias="animalId")
