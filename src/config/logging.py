import logging
import sys
from logging import StreamHandler

from src.config.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Request lines carry guest emails in their PostgREST filters
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging() -> None:
    level = logging.DEBUG if settings.debug else logging.getLevelName(settings.log_level.upper())
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[StreamHandler(sys.stdout)],
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
