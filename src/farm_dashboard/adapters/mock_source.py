"""Simulated remote source of herd records."""

import asyncio
from dataclasses import dataclass

from farm_dashboard.domain.animals import AnimalRecord, HealthStatus

SAMPLE_HERD: tuple[AnimalRecord, ...] = (
    AnimalRecord(
        id=1,
        name="Bessie",
        type="Dairy Cow",
        birth_date="2020-03-15",
        weight=650,
        health_status=HealthStatus.HEALTHY,
        last_checkup="2024-01-15",
        milk_production=28.5,
        feed_consumption=22,
        notes="Top producer in the herd",
    ),
    AnimalRecord(
        id=2,
        name="Daisy",
        type="Dairy Cow",
        birth_date="2019-06-20",
        weight=680,
        health_status=HealthStatus.HEALTHY,
        last_checkup="2024-01-14",
        milk_production=26.0,
        feed_consumption=21,
        notes="",
    ),
    AnimalRecord(
        id=3,
        name="Rosie",
        type="Dairy Cow",
        birth_date="2021-01-10",
        weight=590,
        health_status=HealthStatus.UNDER_OBSERVATION,
        last_checkup="2024-01-16",
        milk_production=18.5,
        feed_consumption=19,
        notes="Slight decrease in milk production",
    ),
    AnimalRecord(
        id=4,
        name="Buttercup",
        type="Dairy Cow",
        birth_date="2020-08-25",
        weight=620,
        health_status=HealthStatus.HEALTHY,
        last_checkup="2024-01-12",
        milk_production=24.0,
        feed_consumption=20,
        notes="",
    ),
    AnimalRecord(
        id=5,
        name="Stella",
        type="Dairy Cow",
        birth_date="2018-11-30",
        weight=710,
        health_status=HealthStatus.HEALTHY,
        last_checkup="2024-01-13",
        milk_production=22.5,
        feed_consumption=23,
        notes="Senior cow, consistent producer",
    ),
    AnimalRecord(
        id=6,
        name="Clover",
        type="Heifer",
        birth_date="2022-05-18",
        weight=420,
        health_status=HealthStatus.HEALTHY,
        last_checkup="2024-01-15",
        milk_production=0,
        feed_consumption=15,
        notes="Expected to start milking in 6 months",
    ),
    AnimalRecord(
        id=7,
        name="Blue",
        type="Bull",
        birth_date="2019-02-14",
        weight=950,
        health_status=HealthStatus.HEALTHY,
        last_checkup="2024-01-10",
        milk_production=0,
        feed_consumption=30,
        notes="Breeding bull",
    ),
    AnimalRecord(
        id=8,
        name="Penny",
        type="Dairy Cow",
        birth_date="2021-07-22",
        weight=580,
        health_status=HealthStatus.SICK,
        last_checkup="2024-01-16",
        milk_production=12.0,
        feed_consumption=16,
        notes="Recovering from mastitis, on treatment",
    ),
    AnimalRecord(
        id=9,
        name="Marigold",
        type="Dairy Cow",
        birth_date="2020-04-05",
        weight=640,
        health_status=HealthStatus.HEALTHY,
        last_checkup="2024-01-14",
        milk_production=25.5,
        feed_consumption=21,
        notes="",
    ),
    AnimalRecord(
        id=10,
        name="Luna",
        type="Dairy Cow",
        birth_date="2021-09-12",
        weight=550,
        health_status=HealthStatus.HEALTHY,
        last_checkup="2024-01-15",
        milk_production=20.0,
        feed_consumption=18,
        notes="First lactation",
    ),
)


@dataclass
class MockAnimalSource:
    """Returns the sample herd after a simulated network delay."""

    latency_seconds: float = 0.3

    async def fetch_animals(self) -> list[AnimalRecord]:
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)
        return list(SAMPLE_HERD)
