"""
List commands for Fakedis.
"""

from typing import TYPE_CHECKING

from ..datatypes.lists import ListHandler
from .args import to_int

if TYPE_CHECKING:
    from . import CommandRegistry
    from ..store import DataStore


def register_list_commands(registry: "CommandRegistry", store: "DataStore"):
    """Register list commands."""

    handler = ListHandler(store)

    def cmd_lpush(key, *values):
        """LPUSH key value [value ...] - Insert at head."""
        return handler.lpush(key, *values)

    def cmd_lpushx(key, *values):
        """LPUSHX key value [...] - Insert at head if exists."""
        return handler.lpushx(key, *values)

    def cmd_rpush(key, *values):
        """RPUSH key value [value ...] - Insert at tail."""
        return handler.rpush(key, *values)

    def cmd_rpushx(key, *values):
        """RPUSHX key value [...] - Insert at tail if exists."""
        return handler.rpushx(key, *values)

    def cmd_lpop(key, *args):
        """LPOP key [count] - Remove from head."""
        count = to_int(args[0]) if args else None
        return handler.lpop(key, count)

    def cmd_rpop(key, *args):
        """RPOP key [count] - Remove from tail."""
        count = to_int(args[0]) if args else None
        return handler.rpop(key, count)

    def cmd_llen(key):
        """LLEN key - Get list length."""
        return handler.llen(key)

    def cmd_lrange(key, start, stop):
        """LRANGE key start stop - Get range."""
        return handler.lrange(key, to_int(start), to_int(stop))

    def cmd_lindex(key, index):
        """LINDEX key index - Get element at index."""
        return handler.lindex(key, to_int(index))

    def cmd_lset(key, index, value):
        """LSET key index value - Set element at index."""
        return handler.lset(key, to_int(index), value)

    def cmd_lrem(key, count, value):
        """LREM key count value - Remove occurrences."""
        return handler.lrem(key, to_int(count), value)

    def cmd_ltrim(key, start, stop):
        """LTRIM key start stop - Trim list."""
        return handler.ltrim(key, to_int(start), to_int(stop))

    def cmd_rpoplpush(source, destination):
        """RPOPLPUSH source dest - Pop from tail, push to head."""
        return handler.rpoplpush(source, destination)

    def cmd_lmove(source, dest, wherefrom, whereto):
        """LMOVE source dest LEFT|RIGHT LEFT|RIGHT."""
        return handler.lmove(source, dest, wherefrom, whereto)

    # Register commands
    registry.register("LPUSH", cmd_lpush, min_args=2)
    registry.register("LPUSHX", cmd_lpushx, min_args=2)
    registry.register("RPUSH", cmd_rpush, min_args=2)
    registry.register("RPUSHX", cmd_rpushx, min_args=2)
    registry.register("LPOP", cmd_lpop, min_args=1, max_args=2)
    registry.register("RPOP", cmd_rpop, min_args=1, max_args=2)
    registry.register("LLEN", cmd_llen, min_args=1, max_args=1)
    registry.register("LRANGE", cmd_lrange, min_args=3, max_args=3)
    registry.register("LINDEX", cmd_lindex, min_args=2, max_args=2)
    registry.register("LSET", cmd_lset, min_args=3, max_args=3)
    registry.register("LREM", cmd_lrem, min_args=3, max_args=3)
    registry.register("LTRIM", cmd_ltrim, min_args=3, max_args=3)
    registry.register("RPOPLPUSH", cmd_rpoplpush, min_args=2, max_args=2)
    registry.register("LMOVE", cmd_lmove, min_args=4, max_args=4)
