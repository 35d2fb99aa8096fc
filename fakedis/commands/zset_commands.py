"""
Sorted Set commands for Fakedis.
"""

from typing import TYPE_CHECKING

from ..datatypes.sorted_sets import SortedSetHandler
from .args import to_float, to_int

if TYPE_CHECKING:
    from . import CommandRegistry
    from ..store import DataStore


def register_zset_commands(registry: "CommandRegistry", store: "DataStore"):
    """Register sorted set commands."""

    handler = SortedSetHandler(store)

    def cmd_zadd(key, *args):
        """ZADD key score member [score member ...]."""
        if len(args) % 2 != 0:
            raise ValueError("ERR syntax error")
        pairs = [(to_float(args[i]), args[i + 1]) for i in range(0, len(args), 2)]
        return handler.zadd(key, *pairs)

    def cmd_zrem(key, *members):
        """ZREM key member [member ...] - Remove members."""
        return handler.zrem(key, *members)

    def cmd_zscore(key, member):
        """ZSCORE key member - Get score."""
        return handler.zscore(key, member)

    def cmd_zrank(key, member):
        """ZRANK key member - Get rank (low to high)."""
        return handler.zrank(key, member)

    def cmd_zrange(key, start, stop, *args):
        """ZRANGE key start stop [WITHSCORES]."""
        withscores = any(arg.upper() == "WITHSCORES" for arg in args)
        return handler.zrange(key, to_int(start), to_int(stop), withscores=withscores)

    def cmd_zcard(key):
        """ZCARD key - Get cardinality."""
        return handler.zcard(key)

    def cmd_zcount(key, min_score, max_score):
        """ZCOUNT key min max - Count in score range."""
        return handler.zcount(key, to_float(min_score), to_float(max_score))

    def cmd_zincrby(key, increment, member):
        """ZINCRBY key increment member - Increment score."""
        return handler.zincrby(key, to_float(increment), member)

    def cmd_zremrangebyrank(key, start, stop):
        """ZREMRANGEBYRANK key start stop - Remove by rank."""
        return handler.zremrangebyrank(key, to_int(start), to_int(stop))

    def cmd_zremrangebyscore(key, min_score, max_score):
        """ZREMRANGEBYSCORE key min max - Remove by score (inclusive)."""
        return handler.zremrangebyscore(key, to_float(min_score), to_float(max_score))

    # Register commands
    registry.register("ZADD", cmd_zadd, min_args=3)
    registry.register("ZREM", cmd_zrem, min_args=2)
    registry.register("ZSCORE", cmd_zscore, min_args=2, max_args=2)
    registry.register("ZRANK", cmd_zrank, min_args=2, max_args=2)
    registry.register("ZRANGE", cmd_zrange, min_args=3)
    registry.register("ZCARD", cmd_zcard, min_args=1, max_args=1)
    registry.register("ZCOUNT", cmd_zcount, min_args=3, max_args=3)
    registry.register("ZINCRBY", cmd_zincrby, min_args=3, max_args=3)
    registry.register("ZREMRANGEBYRANK", cmd_zremrangebyrank, min_args=3, max_args=3)
    registry.register("ZREMRANGEBYSCORE", cmd_zremrangebyscore, min_args=3, max_args=3)
