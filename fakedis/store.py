"""
Core in-memory data store for Fakedis.

Implements thread-safe key-value storage with lazy TTL expiration.
"""

import functools
import hashlib
import logging
import re
import threading
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger("fakedis")


class DataType(str, Enum):
    """Tags for the value variants a key can hold."""
    STRING = "string"
    LIST = "list"
    SET = "set"
    HASH = "hash"
    ZSET = "zset"
    NONE = "none"


def synchronized(method):
    """Run a handler method with the store lock held for its whole body."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.store.lock:
            return method(self, *args, **kwargs)
    return wrapper


def compile_pattern(pattern: str) -> "re.Pattern":
    """Compile a KEYS glob. Only * and ? are special; matching is anchored."""
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


class DataStore:
    """
    In-memory data store with TTL support.

    Thread-safe implementation using one re-entrant lock for all state.
    Expired keys are removed lazily, on the next access that touches them.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._data: Dict[str, Any] = {}
        self._types: Dict[str, DataType] = {}
        self._expires: Dict[str, float] = {}  # key -> expiration timestamp
        self._scripts: Dict[str, str] = {}  # digest -> script source
        self._lock = threading.RLock()
        self._clock = clock

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def now(self) -> float:
        return self._clock()

    # ==================== Core Operations ====================

    def get(self, key: str) -> Optional[Any]:
        """Get value by key. Returns None if expired or not found."""
        with self._lock:
            if self._expire_if_needed(key):
                return None
            return self._data.get(key)

    def set(self, key: str, value: Any, dtype: DataType = DataType.STRING) -> None:
        """Set a key-value pair with optional type. Clears any TTL."""
        with self._lock:
            self._data[key] = value
            self._types[key] = dtype
            self._expires.pop(key, None)

    def update(self, key: str, value: Any) -> None:
        """Replace the value of a key in place, keeping its type and TTL."""
        with self._lock:
            self._data[key] = value

    def set_string(self, key: str, value: str, ex: Optional[int] = None,
                   px: Optional[int] = None, exat: Optional[int] = None,
                   pxat: Optional[int] = None) -> str:
        """
        Store a string, applying at most one expiration option.

        Options are checked in the order ex, px, exat, pxat. Without any
        of them the key becomes persistent.
        """
        with self._lock:
            self.set(key, value, DataType.STRING)
            if ex is not None:
                self._expires[key] = self.now() + ex
            elif px is not None:
                self._expires[key] = self.now() + px / 1000.0
            elif exat is not None:
                self._expires[key] = float(exat)
            elif pxat is not None:
                self._expires[key] = pxat / 1000.0
            return "OK"

    def delete(self, *keys: str) -> int:
        """Delete one or more keys. Returns count of deleted keys."""
        with self._lock:
            count = 0
            for key in keys:
                if self._expire_if_needed(key):
                    continue
                if key in self._data:
                    self._delete_key(key)
                    count += 1
            return count

    def exists(self, *keys: str) -> int:
        """Check if keys exist. Returns count of existing keys."""
        with self._lock:
            count = 0
            for key in keys:
                if self._expire_if_needed(key):
                    continue
                if key in self._data:
                    count += 1
            return count

    def keys(self, pattern: str = "*") -> List[str]:
        """Get all live keys matching pattern. Supports * and ? wildcards."""
        with self._lock:
            self._cleanup_expired()
            if pattern == "*":
                return list(self._data.keys())
            regex = compile_pattern(pattern)
            return [k for k in self._data.keys() if regex.fullmatch(k)]

    def type(self, key: str) -> DataType:
        """Get the type of a key."""
        with self._lock:
            if self._expire_if_needed(key):
                return DataType.NONE
            return self._types.get(key, DataType.NONE)

    def dbsize(self) -> int:
        """Return the number of keys in the store."""
        with self._lock:
            self._cleanup_expired()
            return len(self._data)

    def flushdb(self) -> None:
        """Delete all keys in the current database."""
        with self._lock:
            self._data.clear()
            self._types.clear()
            self._expires.clear()

    def reset(self) -> None:
        """Discard every key, deadline and loaded script."""
        with self._lock:
            self.flushdb()
            self._scripts.clear()

    # ==================== TTL Operations ====================

    def expire(self, key: str, seconds: float) -> bool:
        """Set TTL on a key in seconds."""
        with self._lock:
            if self._expire_if_needed(key) or key not in self._data:
                return False
            self._expires[key] = self.now() + seconds
            return True

    def pexpire(self, key: str, milliseconds: int) -> bool:
        """Set TTL on a key in milliseconds."""
        return self.expire(key, milliseconds / 1000.0)

    def expireat(self, key: str, timestamp: float) -> bool:
        """Set expiration as Unix timestamp."""
        with self._lock:
            if self._expire_if_needed(key) or key not in self._data:
                return False
            self._expires[key] = float(timestamp)
            return True

    def ttl(self, key: str) -> int:
        """Get TTL in seconds. Returns -2 if not found, -1 if no expiry."""
        with self._lock:
            if self._expire_if_needed(key) or key not in self._data:
                return -2
            if key not in self._expires:
                return -1
            return int(self._expires[key] - self.now())

    def pttl(self, key: str) -> int:
        """Get TTL in milliseconds."""
        with self._lock:
            if self._expire_if_needed(key) or key not in self._data:
                return -2
            if key not in self._expires:
                return -1
            return int((self._expires[key] - self.now()) * 1000)

    def persist(self, key: str) -> bool:
        """Remove expiration from a key."""
        with self._lock:
            if self._expire_if_needed(key) or key not in self._data:
                return False
            return self._expires.pop(key, None) is not None

    # ==================== Type Checking ====================

    def get_typed(self, key: str, dtype: DataType) -> Optional[Any]:
        """
        Get the value if the key is live and holds ``dtype``.

        A key holding another type reads as missing.
        """
        with self._lock:
            if self._expire_if_needed(key):
                return None
            if self._types.get(key) != dtype:
                return None
            return self._data.get(key)

    def get_or_create(self, key: str, dtype: DataType, default_factory) -> Any:
        """
        Get existing value or create new one with default.

        A key holding another type is overwritten with a fresh value, and
        its TTL is dropped along with the old content.
        """
        with self._lock:
            self._expire_if_needed(key)

            if key in self._data and self._types.get(key) != dtype:
                logger.debug(f"Replacing {self._types.get(key).value} key '{key}' "
                             f"with {dtype.value}")
                self._delete_key(key)

            if key not in self._data:
                self._data[key] = default_factory()
                self._types[key] = dtype

            return self._data[key]

    # ==================== Scripts ====================

    def script_load(self, script: str) -> str:
        """Register a script and return its SHA-1 digest."""
        digest = hashlib.sha1(script.encode("utf-8")).hexdigest()
        with self._lock:
            self._scripts[digest] = script
        return digest

    def script_exists(self, *digests: str) -> List[int]:
        """Return 1/0 for each digest depending on whether it was loaded."""
        with self._lock:
            return [1 if d.lower() in self._scripts else 0 for d in digests]

    def script_flush(self) -> None:
        with self._lock:
            self._scripts.clear()

    # ==================== Internal Helpers ====================

    def _is_expired(self, key: str) -> bool:
        """Check if a key has expired."""
        if key not in self._expires:
            return False
        return self.now() >= self._expires[key]

    def _expire_if_needed(self, key: str) -> bool:
        """Delete the key if its deadline has passed. Returns True if deleted."""
        if self._is_expired(key):
            self._delete_key(key)
            return True
        return False

    def _delete_key(self, key: str) -> None:
        """Delete a key and its metadata."""
        self._data.pop(key, None)
        self._types.pop(key, None)
        self._expires.pop(key, None)

    def _cleanup_expired(self) -> int:
        """Remove all expired keys. Returns count removed."""
        expired_keys = [k for k in self._expires if self._is_expired(k)]
        for key in expired_keys:
            self._delete_key(key)
        return len(expired_keys)
