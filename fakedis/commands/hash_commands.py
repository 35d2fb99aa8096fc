"""
Hash commands for Fakedis.

Most hash commands map one to one onto ``HashHandler`` methods. HMSET and
HINCRBY need their own adapters for the reply and the increment argument.
"""

from typing import TYPE_CHECKING

from ..datatypes.hashes import HashHandler
from .args import to_int

if TYPE_CHECKING:
    from . import CommandRegistry
    from ..store import DataStore

# name -> (handler method, min_args, max_args)
HASH_COMMANDS = {
    "HSET": ("hset", 3, -1),
    "HSETNX": ("hsetnx", 3, 3),
    "HGET": ("hget", 2, 2),
    "HMGET": ("hmget", 2, -1),
    "HDEL": ("hdel", 2, -1),
    "HEXISTS": ("hexists", 2, 2),
    "HLEN": ("hlen", 1, 1),
    "HKEYS": ("hkeys", 1, 1),
    "HVALS": ("hvals", 1, 1),
    "HGETALL": ("hgetall", 1, 1),
}


def register_hash_commands(registry: "CommandRegistry", store: "DataStore"):
    hashes = HashHandler(store)
    for name, (method, min_args, max_args) in HASH_COMMANDS.items():
        registry.register(name, getattr(hashes, method), min_args=min_args, max_args=max_args)

    def cmd_hmset(key, *pairs):
        """HMSET key field value [field value ...] - HSET with an OK reply."""
        hashes.hset(key, *pairs)
        return "OK"

    def cmd_hincrby(key, field, increment):
        return hashes.hincrby(key, field, to_int(increment))

    registry.register("HMSET", cmd_hmset, min_args=3)
    registry.register("HINCRBY", cmd_hincrby, min_args=3, max_args=3)
