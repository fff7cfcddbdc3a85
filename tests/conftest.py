from datetime import datetime, timedelta

import pytest

from dispatcher.dispatch import DispatchEngine
from dispatcher.io import RosterLoader

T0 = datetime(2025, 10, 19, 12, 0, 0)


class FakeClock:
    """Manually advanced clock"""

    def __init__(self, start: datetime = T0):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_engine(clock):
    def _make(names=("John", "Sarah"), **kwargs):
        drivers = RosterLoader.from_names(names, available_at=clock())
        return DispatchEngine(drivers, delivery_duration=timedelta(minutes=30), clock=clock, **kwargs)
    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()
