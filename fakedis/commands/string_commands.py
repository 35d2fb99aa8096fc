"""
String commands for Fakedis.
"""

from typing import TYPE_CHECKING

from ..datatypes.strings import StringHandler
from .args import to_int

if TYPE_CHECKING:
    from . import CommandRegistry
    from ..store import DataStore

SET_EXPIRY_OPTIONS = {"EX": "ex", "PX": "px", "EXAT": "exat", "PXAT": "pxat"}


def parse_set_options(args) -> dict:
    """
    Scan SET's trailing arguments for EX/PX/EXAT/PXAT.

    Recognised options consume the following argument; anything else is
    skipped one token at a time.
    """
    options = {}
    i = 0
    while i < len(args):
        name = SET_EXPIRY_OPTIONS.get(args[i].upper())
        if name is not None:
            options[name] = to_int(args[i + 1]) if i + 1 < len(args) else 0
            i += 2
        else:
            i += 1
    return options


def register_string_commands(registry: "CommandRegistry", store: "DataStore"):
    """Register string commands."""

    handler = StringHandler(store)

    def cmd_get(key):
        """GET key - Get value."""
        return handler.get(key)

    def cmd_set(key, value, *args):
        """SET key value [EX seconds] [PX ms] [EXAT ts] [PXAT ms-ts]"""
        return handler.set(key, value, **parse_set_options(args))

    def cmd_setnx(key, value):
        """SETNX key value - Set if not exists."""
        return handler.setnx(key, value)

    def cmd_setex(key, seconds, value):
        """SETEX key seconds value - Set with TTL."""
        return handler.setex(key, to_int(seconds), value)

    def cmd_psetex(key, milliseconds, value):
        """PSETEX key ms value - Set with TTL in ms."""
        return handler.psetex(key, to_int(milliseconds), value)

    def cmd_getset(key, value):
        """GETSET key value - Set and return old value."""
        return handler.getset(key, value)

    def cmd_getdel(key):
        """GETDEL key - Get and delete."""
        return handler.getdel(key)

    def cmd_append(key, value):
        """APPEND key value - Append to string."""
        return handler.append(key, value)

    def cmd_strlen(key):
        """STRLEN key - Get string length."""
        return handler.strlen(key)

    def cmd_incr(key):
        """INCR key - Increment by 1."""
        return handler.incr(key)

    def cmd_incrby(key, increment):
        """INCRBY key increment - Increment by amount."""
        return handler.incrby(key, to_int(increment))

    def cmd_decr(key):
        """DECR key - Decrement by 1."""
        return handler.decr(key)

    def cmd_decrby(key, decrement):
        """DECRBY key decrement - Decrement by amount."""
        return handler.decrby(key, to_int(decrement))

    def cmd_mget(*keys):
        """MGET key [key ...] - Get multiple keys."""
        return handler.mget(*keys)

    def cmd_mset(*args):
        """MSET key value [key value ...] - Set multiple keys."""
        return handler.mset(*args)

    def cmd_msetnx(*args):
        """MSETNX key value [...] - Set multiple if none exist."""
        return handler.msetnx(*args)

    def cmd_bitfield(key, *ops):
        """BITFIELD key [GET|SET|INCRBY ...] - Zero-filled stand-in."""
        return handler.bitfield(key, ops)

    def cmd_bitfield_ro(key, *ops):
        """BITFIELD_RO key [GET ...] - Read-only zero-filled stand-in."""
        return handler.bitfield_ro(key, ops)

    # Register commands
    registry.register("GET", cmd_get, min_args=1, max_args=1)
    registry.register("SET", cmd_set, min_args=2)
    registry.register("SETNX", cmd_setnx, min_args=2, max_args=2)
    registry.register("SETEX", cmd_setex, min_args=3, max_args=3)
    registry.register("PSETEX", cmd_psetex, min_args=3, max_args=3)
    registry.register("GETSET", cmd_getset, min_args=2, max_args=2)
    registry.register("GETDEL", cmd_getdel, min_args=1, max_args=1)
    registry.register("APPEND", cmd_append, min_args=2, max_args=2)
    registry.register("STRLEN", cmd_strlen, min_args=1, max_args=1)
    registry.register("INCR", cmd_incr, min_args=1, max_args=1)
    registry.register("INCRBY", cmd_incrby, min_args=2, max_args=2)
    registry.register("DECR", cmd_decr, min_args=1, max_args=1)
    registry.register("DECRBY", cmd_decrby, min_args=2, max_args=2)
    registry.register("MGET", cmd_mget, min_args=1)
    registry.register("MSET", cmd_mset, min_args=2)
    registry.register("MSETNX", cmd_msetnx, min_args=2)
    registry.register("BITFIELD", cmd_bitfield, min_args=1)
    registry.register("BITFIELD_RO", cmd_bitfield_ro, min_args=1)
