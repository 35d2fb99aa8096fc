"""
In-process connection double for Fakedis.

A ``FakeConnection`` stands where a socket connection to a Redis server
would: commands are queued by ``write`` and answered by ``read``, which
executes them synchronously against a shared ``DataStore``.
"""

import logging
import threading
import time
from collections import deque
from typing import Any, List, Optional, Sequence

from .commands import CommandError, CommandHandler
from .config import Config
from .store import DataStore

logger = logging.getLogger("fakedis")


def _first_set(value: Optional[float], default: float) -> float:
    return default if value is None else value


class ConnectionClosedError(ConnectionError):
    """Raised when a closed connection is used or there is nothing to read."""
    pass


class FakeConnection:
    """
    Connection handle backed by the process-wide shared store.

    Handles never own key state. Unless a store is passed explicitly, each
    command runs against whatever ``shared_store()`` is at that moment, so
    ``reset_shared_store()`` is visible to handles that already exist.
    """

    _shared_store: Optional[DataStore] = None
    _shared_lock = threading.Lock()

    def __init__(self, config: Optional[Config] = None,
                 connect_timeout: Optional[float] = None,
                 read_timeout: Optional[float] = None,
                 write_timeout: Optional[float] = None,
                 store: Optional[DataStore] = None):
        self.config = config or Config()
        # Explicit timeouts override the configured ones
        self.connect_timeout = _first_set(connect_timeout, self.config.connect_timeout)
        self.read_timeout = _first_set(read_timeout, self.config.read_timeout)
        self.write_timeout = _first_set(write_timeout, self.config.write_timeout)
        self._store = store
        self._handler: Optional[CommandHandler] = None
        self._connected = True
        self._pending_reads = 0
        self._command_queue = deque()
        logger.info("Fake connection opened")

    # ==================== Shared store ====================

    @classmethod
    def shared_store(cls) -> DataStore:
        """Return the process-wide store, creating it on first use."""
        with cls._shared_lock:
            if cls._shared_store is None:
                cls._shared_store = DataStore()
            return cls._shared_store

    @classmethod
    def reset_shared_store(cls) -> DataStore:
        """Replace the shared store with a fresh, empty one."""
        with cls._shared_lock:
            cls._shared_store = DataStore()
            logger.info("Shared store reset")
            return cls._shared_store

    @property
    def store(self) -> DataStore:
        return self._store if self._store is not None else self.shared_store()

    def _command_handler(self) -> CommandHandler:
        store = self.store
        if self._handler is None or self._handler.store is not store:
            self._handler = CommandHandler(store)
        return self._handler

    # ==================== Lifecycle ====================

    @property
    def connected(self) -> bool:
        return self._connected

    def close(self) -> None:
        self._connected = False
        self._pending_reads = 0
        self._command_queue.clear()
        logger.info("Fake connection closed")

    def reconnect(self) -> bool:
        self.close()
        self._connected = True
        logger.info("Fake connection reopened")
        return True

    def revalidate(self) -> bool:
        """A handle with unanswered commands is unusable and gets closed."""
        if self._pending_reads > 0:
            self.close()
            return False
        return self.connected

    # ==================== Command traffic ====================

    def write(self, command: Sequence[Any]) -> None:
        self._ensure_connected()
        self._command_queue.append(command)

    def write_multi(self, commands: Sequence[Sequence[Any]]) -> None:
        self._ensure_connected()
        self._command_queue.extend(commands)

    def read(self, timeout: Optional[float] = None) -> Any:
        """Execute the oldest queued command and return its reply."""
        self._ensure_connected()
        if not self._command_queue:
            raise ConnectionClosedError("No command to read response for")

        command = self._command_queue.popleft()
        return self._command_handler().execute(command)

    def call(self, command: Sequence[Any], timeout: Optional[float] = None) -> Any:
        """Send one command and return its reply, raising error replies."""
        self._pending_reads += 1
        self.write(command)
        result = self.read(self.connection_timeout(timeout))
        self._pending_reads -= 1

        if isinstance(result, CommandError):
            self._annotate(result, command)
            raise result
        return result

    def call_pipelined(self, commands: Sequence[Sequence[Any]],
                       timeouts: Optional[Sequence[Optional[float]]] = None,
                       raise_on_error: bool = True) -> List[Any]:
        """
        Execute commands in order and return their replies.

        Every command runs even if an earlier one fails. With
        ``raise_on_error`` the first error reply is raised afterwards;
        otherwise error replies are returned in place.
        """
        first_error = None
        results = [None] * len(commands)
        self._pending_reads += len(commands)
        self.write_multi(commands)

        for index, command in enumerate(commands):
            timeout = timeouts[index] if timeouts else None
            result = self.read(self.connection_timeout(timeout))
            self._pending_reads -= 1

            if isinstance(result, CommandError):
                self._annotate(result, command)
                if first_error is None:
                    first_error = result

            results[index] = result

        if first_error is not None and raise_on_error:
            raise first_error

        return results

    def measure_round_trip_delay(self) -> float:
        """Milliseconds taken by a PING, rounded to two places."""
        start = time.time()
        self.call(["PING"], self.read_timeout)
        return round((time.time() - start) * 1000, 2)

    def connection_timeout(self, timeout: Optional[float]) -> Optional[float]:
        """Extend a positive per-call timeout by the configured read timeout."""
        if not timeout or timeout <= 0:
            return timeout
        return timeout + self.config.read_timeout

    # ==================== Internal Helpers ====================

    def _ensure_connected(self) -> None:
        if not self._connected:
            raise ConnectionClosedError("Connection closed")

    def _annotate(self, error: CommandError, command: Sequence[Any]) -> None:
        error.command = list(command)
        error.config = self.config
