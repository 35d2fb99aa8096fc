"""
Set values for Fakedis: unordered collections of distinct member strings.
"""

from typing import List

from ..store import DataType, synchronized
from .base import VariantHandler


class SetHandler(VariantHandler):
    dtype = DataType.SET
    factory = set

    @synchronized
    def sadd(self, key: str, *members: str) -> int:
        """Returns how many of ``members`` were not already present."""
        target = self._write(key)
        before = len(target)
        target.update(members)
        return len(target) - before

    @synchronized
    def srem(self, key: str, *members: str) -> int:
        target = self._read(key)
        if target is None:
            return 0

        before = len(target)
        target.difference_update(members)
        self._discard_if_empty(key, target)
        return before - len(target)

    @synchronized
    def smismember(self, key: str, *members: str) -> List[int]:
        present = self._read_or_empty(key)
        return [int(member in present) for member in members]

    def sismember(self, key: str, member: str) -> int:
        return self.smismember(key, member)[0]

    @synchronized
    def smembers(self, key: str) -> List[str]:
        # Sorted so replies are stable from one call to the next
        return sorted(self._read_or_empty(key))

    @synchronized
    def scard(self, key: str) -> int:
        return len(self._read_or_empty(key))
