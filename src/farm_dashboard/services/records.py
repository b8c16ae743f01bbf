"""In-memory record store mirrored to persistent storage."""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field, fields, replace
from datetime import UTC, datetime

from farm_dashboard.domain.animals import (
    AnimalRecord,
    HealthStatus,
    animal_from_payload,
    animal_to_payload,
    optional_float,
    optional_str,
)
from farm_dashboard.services.persistence import ANIMALS_KEY, PersistenceGateway

DEFAULT_NAME = "Unknown"
DEFAULT_TYPE = "Cow"
ID_JITTER = 1000

_logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = frozenset(f.name for f in fields(AnimalRecord)) - {"id"}


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class RecordStore:
    """Authoritative list of animal records.

    Every mutation persists the whole list; a failed save is logged by the
    gateway and the in-memory change stands.
    """

    gateway: PersistenceGateway
    clock: Callable[[], datetime] = _utc_now
    rng: random.Random = field(default_factory=random.Random)
    _records: list[AnimalRecord] = field(default_factory=list, init=False)
    _issued_ids: set[int] = field(default_factory=set, init=False)

    def load(self) -> bool:
        """Hydrate from storage; return False when nothing usable was stored."""
        payload = self.gateway.load(ANIMALS_KEY)
        if not isinstance(payload, list):
            self._records = []
            return False
        records = []
        for item in payload:
            try:
                records.append(animal_from_payload(item))
            except (KeyError, TypeError, ValueError):
                _logger.warning("Skipping malformed stored animal: %r", item)
        self._records = records
        self._issued_ids.update(record.id for record in records)
        return True

    def list_animals(self) -> list[AnimalRecord]:
        return list(self._records)

    def get(self, animal_id: int) -> AnimalRecord | None:
        for record in self._records:
            if record.id == animal_id:
                return record
        return None

    def is_empty(self) -> bool:
        return not self._records

    def replace_all(self, records: list[AnimalRecord]) -> None:
        """Swap in a fresh record list, e.g. from the data source."""
        self._records = list(records)
        self._issued_ids.update(record.id for record in records)
        self._persist()

    def add(self, partial: dict[str, object]) -> AnimalRecord:
        """Create a record, filling unset fields with defaults."""
        now = self.clock().isoformat()
        record = AnimalRecord(
            id=self._next_id(),
            name=str(partial.get("name") or DEFAULT_NAME),
            type=str(partial.get("type") or DEFAULT_TYPE),
            birth_date=str(partial.get("birth_date") or now),
            weight=float(partial.get("weight") or 0.0),
            health_status=str(partial.get("health_status") or HealthStatus.HEALTHY),
            last_checkup=str(partial.get("last_checkup") or now),
            milk_production=optional_float(partial.get("milk_production")),
            feed_consumption=optional_float(partial.get("feed_consumption")),
            notes=optional_str(partial.get("notes")),
        )
        self._records.append(record)
        self._persist()
        return record

    def update(self, animal_id: int, partial: dict[str, object]) -> AnimalRecord | None:
        """Merge provided fields into a record; None when the id is unknown."""
        for index, record in enumerate(self._records):
            if record.id != animal_id:
                continue
            changes = {
                key: value
                for key, value in partial.items()
                if key in _MUTABLE_FIELDS and value is not None
            }
            if not changes:
                return record
            updated = replace(record, **changes)
            self._records[index] = updated
            self._persist()
            return updated
        return None

    def delete(self, animal_id: int) -> bool:
        """Remove a record; False when the id is unknown."""
        for index, record in enumerate(self._records):
            if record.id == animal_id:
                del self._records[index]
                self._persist()
                return True
        return False

    def _next_id(self) -> int:
        base = int(self.clock().timestamp() * 1000)
        candidate = base + self.rng.randrange(ID_JITTER)
        while candidate in self._issued_ids:
            candidate += 1
        self._issued_ids.add(candidate)
        return candidate

    def _persist(self) -> None:
        self.gateway.save(
            ANIMALS_KEY, [animal_to_payload(record) for record in self._records]
        )
