"""
Logging setup for applications embedding settleup.

The library only emits through module loggers under the "settleup" namespace
(the planner warns when a plan leaves money unsettled). Call
configure_logging() once at process start, e.g. in the service that builds
settlement reports, to get those records on stderr; level defaults to
SETTLEUP_LOG_LEVEL.
"""
import logging
from settleup.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str | None = None) -> logging.Logger:
    logger = logging.getLogger("settleup")
    # only ever attach one handler
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    return logger
