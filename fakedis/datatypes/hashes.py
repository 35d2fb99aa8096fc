"""
Hash values for Fakedis: field to value maps stored as plain dicts.

Field order is insertion order, and HKEYS, HVALS and HGETALL report it.
"""

from typing import Dict, List, Optional

from ..store import DataType, synchronized
from .base import INTEGER_RE, VariantHandler


class HashHandler(VariantHandler):
    dtype = DataType.HASH
    factory = dict

    @synchronized
    def hset(self, key: str, *pairs: str) -> int:
        """Store field/value pairs and return the number of new fields."""
        if not pairs or len(pairs) % 2:
            raise ValueError("ERR wrong number of arguments for 'hset' command")

        fields = self._write(key)
        added = 0
        for field, value in zip(pairs[::2], pairs[1::2]):
            added += field not in fields
            fields[field] = value
        return added

    @synchronized
    def hsetnx(self, key: str, field: str, value: str) -> int:
        fields = self._write(key)
        if field in fields:
            return 0
        fields[field] = value
        return 1

    def hget(self, key: str, field: str) -> Optional[str]:
        return self.hmget(key, field)[0]

    @synchronized
    def hmget(self, key: str, *names: str) -> List[Optional[str]]:
        fields = self._read_or_empty(key)
        return [fields.get(name) for name in names]

    @synchronized
    def hdel(self, key: str, *names: str) -> int:
        fields = self._read(key)
        if fields is None:
            return 0

        removed = [name for name in set(names) if fields.pop(name, None) is not None]
        self._discard_if_empty(key, fields)
        return len(removed)

    @synchronized
    def hexists(self, key: str, field: str) -> int:
        return int(field in self._read_or_empty(key))

    @synchronized
    def hlen(self, key: str) -> int:
        return len(self._read_or_empty(key))

    @synchronized
    def hkeys(self, key: str) -> List[str]:
        return list(self._read_or_empty(key))

    @synchronized
    def hvals(self, key: str) -> List[str]:
        return list(self._read_or_empty(key).values())

    @synchronized
    def hgetall(self, key: str) -> Dict[str, str]:
        """A copy of the whole map; the dispatcher flattens it for replies."""
        return dict(self._read_or_empty(key))

    @synchronized
    def hincrby(self, key: str, field: str, increment: int) -> int:
        current = self._read_or_empty(key).get(field, "0")
        if not INTEGER_RE.fullmatch(current):
            raise ValueError("ERR hash value is not an integer")

        result = int(current) + increment
        self._write(key)[field] = str(result)
        return result
