"""Logging setup shared by all layers. Modules only call logging.getLogger(__name__)."""

import logging

from src.core.config import LOG_FORMAT, LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger once (safe to call again, e.g. from tests)."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("src").setLevel(level)
