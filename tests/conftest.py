import matplotlib

matplotlib.use("Agg")

import pytest
from loguru import logger

from logging_utils import SEARCH_MODULES


@pytest.fixture(autouse=True)
def silence_search_modules():
    yield
    logger.remove()
    for name in SEARCH_MODULES:
        logger.disable(name)


@pytest.fixture
def log_messages():
    messages = []
    for name in SEARCH_MODULES:
        logger.enable(name)
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
