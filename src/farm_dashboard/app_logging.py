"""Logging configuration helpers."""

import logging

APP_LOGGER = "farm_dashboard"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Attach one stream handler to the farm_dashboard logger tree.

    Repeated calls only adjust the level.
    """
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
