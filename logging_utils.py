import sys

from loguru import logger

from constants import LOG_FORMAT, LOG_LEVEL

# modules that log through loguru but stay silent until a sink is configured
SEARCH_MODULES = ("board", "search")


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Send log records at `level` and above to stderr.

    Also used as the process-pool initializer so workers share the level.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
    for name in SEARCH_MODULES:
        logger.enable(name)
