"""Domain models for herd statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FarmStats:
    """Aggregate snapshot computed over the whole herd."""

    total_animals: int
    healthy_animals: int
    sick_animals: int
    total_milk_production: float
    average_weight: float
    feed_efficiency: float


EMPTY_STATS = FarmStats(
    total_animals=0,
    healthy_animals=0,
    sick_animals=0,
    total_milk_production=0.0,
    average_weight=0.0,
    feed_efficiency=0.0,
)


def stats_to_payload(stats: FarmStats) -> dict[str, object]:
    """Serialize stats into a JSON-ready dict."""
    return {
        "totalAnimals": stats.total_animals,
        "healthyAnimals": stats.healthy_animals,
        "sickAnimals": stats.sick_animals,
        "totalMilkProduction": stats.total_milk_production,
        "averageWeight": stats.average_weight,
        "feedEfficiency": stats.feed_efficiency,
    }


def stats_from_payload(payload: dict[str, object]) -> FarmStats:
    """Parse stored stats."""
    return FarmStats(
        total_animals=int(payload.get("totalAnimals", 0)),
        healthy_animals=int(payload.get("healthyAnimals", 0)),
        sick_animals=int(payload.get("sickAnimals", 0)),
        total_milk_production=float(payload.get("totalMilkProduction", 0.0)),
        average_weight=float(payload.get("averageWeight", 0.0)),
        feed_efficiency=float(payload.get("feedEfficiency", 0.0)),
    )
