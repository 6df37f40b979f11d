"""Shared test fixtures."""

import datetime

import pytest

FROZEN_NOW = datetime.datetime(2024, 5, 17, 13, 45, 12, tzinfo=datetime.timezone.utc)


@pytest.fixture
def frozen_clock():
    return lambda: FROZEN_NOW


@pytest.fixture
def counting_clock():
    """A frozen clock that records how many times it was read."""

    class _Clock:
        calls = 0

        def __call__(self) -> datetime.datetime:
            self.calls += 1
            return FROZEN_NOW

    return _Clock()
