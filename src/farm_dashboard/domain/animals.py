"""Domain models for herd records."""

from dataclasses import dataclass
from enum import StrEnum


class HealthStatus(StrEnum):
    """Recognised animal health states."""

    HEALTHY = "Healthy"
    SICK = "Sick"
    UNDER_OBSERVATION = "Under Observation"


@dataclass(frozen=True)
class AnimalRecord:
    """A single animal in the herd."""

    id: int
    name: str
    type: str
    birth_date: str
    weight: float
    health_status: str
    last_checkup: str
    milk_production: float | None = None
    feed_consumption: float | None = None
    notes: str | None = None


# Maps record attributes to the camelCase names used in stored payloads.
ANIMAL_FIELDS: dict[str, str] = {
    "id": "id",
    "name": "name",
    "type": "type",
    "birth_date": "birthDate",
    "weight": "weight",
    "health_status": "healthStatus",
    "last_checkup": "lastCheckup",
    "milk_production": "milkProduction",
    "feed_consumption": "feedConsumption",
    "notes": "notes",
}


def animal_to_payload(animal: AnimalRecord) -> dict[str, object]:
    """Serialize an animal record into a JSON-ready dict."""
    payload: dict[str, object] = {}
    for attr, key in ANIMAL_FIELDS.items():
        value = getattr(animal, attr)
        if value is None and attr in {"milk_production", "feed_consumption", "notes"}:
            continue
        payload[key] = value
    return payload


def animal_from_payload(payload: dict[str, object]) -> AnimalRecord:
    """Parse a stored payload into an animal record."""
    return AnimalRecord(
        id=int(payload["id"]),
        name=str(payload.get("name", "")),
        type=str(payload.get("type", "")),
        birth_date=str(payload.get("birthDate", "")),
        weight=float(payload.get("weight") or 0.0),
        health_status=str(payload.get("healthStatus", HealthStatus.HEALTHY)),
        last_checkup=str(payload.get("lastCheckup", "")),
        milk_production=optional_float(payload.get("milkProduction")),
        feed_consumption=optional_float(payload.get("feedConsumption")),
        notes=optional_str(payload.get("notes")),
    )


def optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)


def optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)
