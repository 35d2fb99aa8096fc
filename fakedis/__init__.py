"""
Fakedis - an in-process stand-in for a Redis server.

Client code talks to a ``FakeConnection`` exactly as it would to a socket
connection; commands execute synchronously against a shared in-memory store.
"""

from .version import __version__, REDIS_VERSION
from .store import DataStore, DataType
from .commands import (
    CommandError,
    CommandHandler,
    UnknownCommandError,
    UnknownSubcommandError,
)
from .connection import ConnectionClosedError, FakeConnection
from .config import Config

__all__ = [
    "FakeConnection",
    "ConnectionClosedError",
    "DataStore",
    "DataType",
    "CommandHandler",
    "CommandError",
    "UnknownCommandError",
    "UnknownSubcommandError",
    "Config",
    "REDIS_VERSION",
    "__version__",
]
