"""Shared fixtures for tagsteps tests."""

import pytest

from tagsteps.config import TagStepsConfig
from tagsteps.gateway import InMemoryElement, InMemoryGateway
from tagsteps.persistence import Instance, InMemoryInstanceRepository
from tagsteps.reporting import InMemoryErrorReporter

TAG_ELEMENT = "TAG Element 1"


class FakeClock:
    """Monotonic clock advanced only by ``sleep``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []
        self.on_sleep = None

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        if self.on_sleep is not None:
            self.on_sleep(self.now)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    return TagStepsConfig()


@pytest.fixture
def repo():
    return InMemoryInstanceRepository()


@pytest.fixture
def element():
    return InMemoryElement(TAG_ELEMENT)


@pytest.fixture
def gateway(element):
    gw = InMemoryGateway()
    gw.add_element(element)
    return gw


@pytest.fixture
def reporter():
    return InMemoryErrorReporter()


@pytest.fixture
def make_instance(repo):
    """Create an instance in the in-memory store and return its id."""

    def _make(instance_id, status, **fields):
        repo.create_instance(Instance(id=instance_id, status=status, fields=fields))
        return instance_id

    return _make
