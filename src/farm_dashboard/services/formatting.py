"""Display formatting helpers."""

from datetime import date, datetime


def format_date(value: str | date | datetime) -> str:
    """Format a date like ``Jan 15, 2024``."""
    if isinstance(value, str):
        text = value.strip()
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            value = date.fromisoformat(text[:10])
    return f"{value:%b} {value.day}, {value.year}"


def format_weight(weight: float) -> str:
    return f"{weight:.1f} kg"


def format_milk_production(liters: float) -> str:
    return f"{liters:.2f} L"


def format_percentage(value: float) -> str:
    """Format a ratio as a percentage: 0.125 -> ``12.5%``."""
    return f"{value * 100:.1f}%"


def format_currency(amount: float) -> str:
    """Format an amount in US dollars."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
