"""
String data type handler for Fakedis.

Implements Redis string commands: GET, SET, APPEND, STRLEN, INCR, DECR, etc.
"""

from typing import List, Optional, Sequence

from ..store import DataType, synchronized
from .base import INTEGER_RE, VariantHandler

BITFIELD_VALUE_OPS = ("GET", "SET", "INCRBY")


class StringHandler(VariantHandler):
    """Handler for string operations."""

    dtype = DataType.STRING
    factory = str

    @synchronized
    def get(self, key: str) -> Optional[str]:
        """Get the value of a key. Non-string keys read as missing."""
        return self._read(key)

    @synchronized
    def set(self, key: str, value: str, ex: int = None, px: int = None,
            exat: int = None, pxat: int = None) -> str:
        """
        Set a key to a value.

        Args:
            key: Key name
            value: Value to set
            ex: Expire in seconds
            px: Expire in milliseconds
            exat: Expire at Unix time in seconds
            pxat: Expire at Unix time in milliseconds

        Returns:
            "OK"
        """
        return self.store.set_string(key, value, ex=ex, px=px, exat=exat, pxat=pxat)

    @synchronized
    def setnx(self, key: str, value: str) -> int:
        """Set if not exists. Returns 1 if set, 0 otherwise."""
        if self.store.exists(key):
            return 0
        self.store.set_string(key, value)
        return 1

    def setex(self, key: str, seconds: int, value: str) -> str:
        """Set with expiration in seconds."""
        return self.set(key, value, ex=seconds)

    def psetex(self, key: str, milliseconds: int, value: str) -> str:
        """Set with expiration in milliseconds."""
        return self.set(key, value, px=milliseconds)

    @synchronized
    def getset(self, key: str, value: str) -> Optional[str]:
        """Set new value and return old value."""
        old = self.get(key)
        self.store.set_string(key, value)
        return old

    @synchronized
    def getdel(self, key: str) -> Optional[str]:
        """Get value and delete key."""
        value = self.get(key)
        if value is not None:
            self.store.delete(key)
        return value

    @synchronized
    def append(self, key: str, value: str) -> int:
        """Append value to key. Returns new length."""
        current = self._write(key)
        new_value = current + value
        self.store.update(key, new_value)
        return len(new_value)

    @synchronized
    def strlen(self, key: str) -> int:
        """Get string length."""
        value = self.get(key)
        return len(value) if value else 0

    def incr(self, key: str) -> int:
        """Increment by 1."""
        return self.incrby(key, 1)

    @synchronized
    def incrby(self, key: str, increment: int) -> int:
        """Increment by amount. A missing key counts as "0"; the TTL is kept."""
        current = self.store.get_or_create(key, DataType.STRING, lambda: "0")
        if not INTEGER_RE.fullmatch(current):
            raise ValueError("ERR value is not an integer or out of range")

        new_value = int(current) + increment
        self.store.update(key, str(new_value))
        return new_value

    def decr(self, key: str) -> int:
        """Decrement by 1."""
        return self.incrby(key, -1)

    def decrby(self, key: str, decrement: int) -> int:
        """Decrement by amount."""
        return self.incrby(key, -decrement)

    @synchronized
    def mget(self, *keys: str) -> List[Optional[str]]:
        """Get multiple keys."""
        return [self.get(key) for key in keys]

    @synchronized
    def mset(self, *args: str) -> str:
        """Set multiple keys. Args: key1, val1, key2, val2, ..."""
        if len(args) % 2 != 0:
            raise ValueError("ERR wrong number of arguments for MSET")

        for i in range(0, len(args), 2):
            self.store.set_string(args[i], args[i + 1])
        return "OK"

    @synchronized
    def msetnx(self, *args: str) -> int:
        """Set multiple keys if none exist. Returns 1 if all set, 0 otherwise."""
        if len(args) % 2 != 0:
            raise ValueError("ERR wrong number of arguments for MSETNX")

        if self.store.exists(*args[::2]) > 0:
            return 0

        for i in range(0, len(args), 2):
            self.store.set_string(args[i], args[i + 1])
        return 1

    # Bit fields are not modelled; only the shape of the reply is.

    @synchronized
    def bitfield(self, key: str, ops: Sequence[str]) -> List[int]:
        """Create the key as an empty string if needed and return zeros."""
        self._write(key)
        return [0] * _count_value_ops(ops)

    @synchronized
    def bitfield_ro(self, key: str, ops: Sequence[str]) -> List[int]:
        """Read-only BITFIELD. Returns [] unless the key holds a string."""
        if self.get(key) is None:
            return []
        return [0] * _count_value_ops(ops)


def _count_value_ops(ops: Sequence[str]) -> int:
    return sum(1 for op in ops if op.upper() in BITFIELD_VALUE_OPS)
