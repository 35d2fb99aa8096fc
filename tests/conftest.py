"""Shared fixtures for the Fakedis test suite."""

import pytest

from fakedis.commands import CommandHandler
from fakedis.connection import FakeConnection
from fakedis.store import DataStore


class FakeClock:
    """Manually advanced clock so expiration can be tested without sleeping."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> DataStore:
    """Create a fresh DataStore on a fake clock for each test."""
    return DataStore(clock=clock)


@pytest.fixture
def handler(store: DataStore) -> CommandHandler:
    return CommandHandler(store)


@pytest.fixture
def conn():
    """A connection on a freshly reset shared store."""
    FakeConnection.reset_shared_store()
    connection = FakeConnection()
    yield connection
    connection.close()
