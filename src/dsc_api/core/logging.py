"""Logging setup."""

import logging

from dsc_api.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings.

    Called once at application startup.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

    # web3 logs every request at DEBUG
    logging.getLogger("web3").setLevel(max(level, logging.INFO))
