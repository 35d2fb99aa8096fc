"""
Sorted Set data type handler for Fakedis.

Implements Redis sorted set commands: ZADD, ZREM, ZRANGE, ZINCRBY, etc.
Uses a combination of dict and sorted list for O(log n) operations.
"""

import bisect
import math
from typing import Dict, List, Optional, Tuple

from ..store import DataType, synchronized
from .base import VariantHandler
from .lists import normalize_range


class SortedSet:
    """
    Sorted set implementation using dict + sorted list.

    - member_scores: Dict[member, score] for O(1) score lookup
    - score_members: List of (score, member) tuples, sorted by score and
      then by member, which is the order ZRANGE reports
    """

    def __init__(self):
        self.member_scores: Dict[str, float] = {}
        self.score_members: List[Tuple[float, str]] = []

    def add(self, score: float, member: str) -> int:
        """Add member with score. Returns 1 if the member is new, 0 if updated."""
        exists = member in self.member_scores
        if exists:
            self._remove_from_sorted(self.member_scores[member], member)

        self.member_scores[member] = score
        bisect.insort(self.score_members, (score, member))
        return 0 if exists else 1

    def remove(self, member: str) -> bool:
        """Remove member. Returns True if removed."""
        if member not in self.member_scores:
            return False

        score = self.member_scores.pop(member)
        self._remove_from_sorted(score, member)
        return True

    def score(self, member: str) -> Optional[float]:
        """Get score of member."""
        return self.member_scores.get(member)

    def rank(self, member: str) -> Optional[int]:
        """Get rank of member (0-indexed)."""
        if member not in self.member_scores:
            return None
        return self._find_index(self.member_scores[member], member)

    def range(self, start: int, stop: int, withscores: bool = False) -> List:
        """Get range by rank. Scores are interleaved as floats."""
        bounds = normalize_range(start, stop, len(self.score_members))
        if bounds is None:
            return []

        items = self.score_members[bounds[0]:bounds[1]]
        if withscores:
            result = []
            for score, member in items:
                result.extend([member, score])
            return result

        return [member for score, member in items]

    def score_bounds(self, min_score: float, max_score: float) -> Tuple[int, int]:
        """Return the slice of score_members whose scores lie in [min, max]."""
        start = bisect.bisect_left(self.score_members, (min_score,))
        end = start
        while end < len(self.score_members) and self.score_members[end][0] <= max_score:
            end += 1
        return start, end

    def count(self, min_score: float, max_score: float) -> int:
        """Count members with scores in range."""
        start, end = self.score_bounds(min_score, max_score)
        return end - start

    def card(self) -> int:
        """Get cardinality."""
        return len(self.member_scores)

    __len__ = card

    def incrby(self, member: str, increment: float) -> float:
        """
        Increment score by amount. Missing members start from 0.

        A NaN result (inf plus -inf) cannot be ordered, so it is rejected
        and the set is left unchanged.
        """
        new_score = self.member_scores.get(member, 0.0) + increment
        if math.isnan(new_score):
            raise ValueError("ERR resulting score is not a number (NaN)")
        self.add(new_score, member)
        return new_score

    def remove_slice(self, start: int, end: int) -> int:
        """Remove the members at sorted positions [start, end)."""
        doomed = self.score_members[start:end]
        del self.score_members[start:end]
        for _, member in doomed:
            del self.member_scores[member]
        return len(doomed)

    def _remove_from_sorted(self, score: float, member: str) -> None:
        """Remove (score, member) from sorted list."""
        idx = self._find_index(score, member)
        if idx is not None:
            del self.score_members[idx]

    def _find_index(self, score: float, member: str) -> Optional[int]:
        """Find index of (score, member) tuple."""
        left = bisect.bisect_left(self.score_members, (score, member))
        if left < len(self.score_members) and self.score_members[left] == (score, member):
            return left
        return None


class SortedSetHandler(VariantHandler):
    """Handler for sorted set operations."""

    dtype = DataType.ZSET
    factory = SortedSet

    @synchronized
    def zadd(self, key: str, *pairs: Tuple[float, str]) -> int:
        """Add (score, member) pairs. Returns the number of new members."""
        if any(math.isnan(score) for score, _ in pairs):
            raise ValueError("ERR value is not a valid float")
        zset = self._write(key)
        return sum(zset.add(score, member) for score, member in pairs)

    @synchronized
    def zrem(self, key: str, *members: str) -> int:
        """Remove members."""
        zset = self._read(key)
        if not zset:
            return 0

        count = sum(1 for m in members if zset.remove(m))
        self._discard_if_empty(key, zset)
        return count

    @synchronized
    def zscore(self, key: str, member: str) -> Optional[str]:
        """Get score of member."""
        zset = self._read(key)
        if not zset:
            return None
        score = zset.score(member)
        return str(score) if score is not None else None

    @synchronized
    def zrank(self, key: str, member: str) -> Optional[int]:
        """Get rank of member (low to high)."""
        zset = self._read(key)
        if not zset:
            return None
        return zset.rank(member)

    @synchronized
    def zrange(self, key: str, start: int, stop: int, withscores: bool = False) -> List:
        """Get range by rank."""
        zset = self._read(key)
        if not zset:
            return []
        return zset.range(start, stop, withscores=withscores)

    @synchronized
    def zcard(self, key: str) -> int:
        """Get cardinality."""
        zset = self._read(key)
        return zset.card() if zset else 0

    @synchronized
    def zcount(self, key: str, min_score: float, max_score: float) -> int:
        """Count members with scores in range."""
        zset = self._read(key)
        if not zset:
            return 0
        return zset.count(min_score, max_score)

    @synchronized
    def zincrby(self, key: str, increment: float, member: str) -> str:
        """Increment member's score."""
        zset = self._write(key)
        try:
            return str(zset.incrby(member, increment))
        finally:
            self._discard_if_empty(key, zset)

    @synchronized
    def zremrangebyrank(self, key: str, start: int, stop: int) -> int:
        """Remove members by rank range (inclusive)."""
        zset = self._read(key)
        if not zset:
            return 0

        bounds = normalize_range(start, stop, zset.card())
        if bounds is None:
            return 0

        removed = zset.remove_slice(*bounds)
        self._discard_if_empty(key, zset)
        return removed

    @synchronized
    def zremrangebyscore(self, key: str, min_score: float, max_score: float) -> int:
        """Remove members with min <= score <= max."""
        zset = self._read(key)
        if not zset:
            return 0

        removed = zset.remove_slice(*zset.score_bounds(min_score, max_score))
        self._discard_if_empty(key, zset)
        return removed
