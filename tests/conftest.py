import itertools

import pytest

from storage import LocalStore, MemoryStorage


@pytest.fixture
def clock():
    counter = itertools.count()
    return lambda: f"2026-01-01T00:00:{next(counter):02d}.000Z"


@pytest.fixture
def backend():
    return MemoryStorage()


@pytest.fixture
def store(backend, clock):
    return LocalStore(backend, clock=clock)
