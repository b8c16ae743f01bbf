"""Input validators returning structured results instead of raising."""

from dataclasses import dataclass, field

from farm_dashboard.services.derivation import parse_calendar_date


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation with human-readable messages."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def validate_animal(animal: dict[str, object]) -> ValidationResult:
    """Check a partial animal before it is submitted."""
    errors = []
    name = animal.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("Name is required")
    if not animal.get("type"):
        errors.append("Animal type is required")
    if not _non_negative(animal.get("weight")):
        errors.append("Weight must be a positive number")
    if not _non_negative(animal.get("milk_production")):
        errors.append("Milk production must be a positive number")
    if not _non_negative(animal.get("feed_consumption")):
        errors.append("Feed consumption must be a positive number")
    return ValidationResult(valid=not errors, errors=errors)


def _non_negative(value: object) -> bool:
    """Unset values pass; anything else must be a number >= 0."""
    if value is None:
        return True
    try:
        return float(value) >= 0
    except (TypeError, ValueError):
        return False


def validate_date_range(start: str, end: str) -> ValidationResult:
    """Check that both dates parse and start is on or before end."""
    start_day = parse_calendar_date(start)
    end_day = parse_calendar_date(end)
    errors = []
    if start_day is None:
        errors.append(f"Invalid start date: {start}")
    if end_day is None:
        errors.append(f"Invalid end date: {end}")
    if start_day and end_day and start_day > end_day:
        errors.append("Start date must be on or before end date")
    return ValidationResult(valid=not errors, errors=errors)
