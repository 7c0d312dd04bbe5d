import logging

import pytest

from tests.helpers import EventHistory
from unique_sentinel import Registry
from unique_sentinel.testing import use_test_registry

logging.basicConfig(level=logging.DEBUG)


@pytest.fixture(scope="function", autouse=True)
def test_registry():
    with use_test_registry() as registry:
        yield registry


@pytest.fixture(scope="function")
def registry() -> Registry:
    return Registry()


@pytest.fixture(scope="function")
def event_history(registry) -> EventHistory:
    history = EventHistory()
    registry.add_listener(history)
    return history
