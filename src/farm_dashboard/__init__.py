"""Farm dashboard: herd records, statistics, reports and CSV export."""

__version__ = "0.1.0"
