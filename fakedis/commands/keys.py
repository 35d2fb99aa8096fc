"""
Key management commands for Fakedis.
"""

from typing import TYPE_CHECKING

from .args import to_float, to_int

if TYPE_CHECKING:
    from . import CommandRegistry
    from ..store import DataStore


def register_key_commands(registry: "CommandRegistry", store: "DataStore"):
    """Register key management commands."""

    def cmd_del(*keys):
        """DEL key [key ...] - Delete keys."""
        return store.delete(*keys)

    def cmd_exists(*keys):
        """EXISTS key [key ...] - Count how many of the keys exist."""
        return store.exists(*keys)

    def cmd_keys(pattern="*"):
        """KEYS pattern - Find keys matching pattern."""
        return store.keys(pattern)

    def cmd_type(key):
        """TYPE key - Get type of key."""
        return store.type(key).value

    def cmd_expire(key, seconds):
        """EXPIRE key seconds - Set TTL in seconds."""
        return store.expire(key, to_int(seconds))

    def cmd_pexpire(key, milliseconds):
        """PEXPIRE key milliseconds - Set TTL in milliseconds."""
        return store.pexpire(key, to_int(milliseconds))

    def cmd_expireat(key, timestamp):
        """EXPIREAT key timestamp - Set expiry as Unix timestamp."""
        return store.expireat(key, to_float(timestamp))

    def cmd_ttl(key):
        """TTL key - Get TTL in seconds."""
        return store.ttl(key)

    def cmd_pttl(key):
        """PTTL key - Get TTL in milliseconds."""
        return store.pttl(key)

    def cmd_persist(key):
        """PERSIST key - Remove expiration."""
        return store.persist(key)

    # Register commands
    registry.register("DEL", cmd_del, min_args=1)
    registry.register("UNLINK", cmd_del, min_args=1)
    registry.register("EXISTS", cmd_exists, min_args=1)
    registry.register("KEYS", cmd_keys, min_args=0, max_args=1)
    registry.register("TYPE", cmd_type, min_args=1, max_args=1)
    registry.register("EXPIRE", cmd_expire, min_args=2, max_args=2)
    registry.register("PEXPIRE", cmd_pexpire, min_args=2, max_args=2)
    registry.register("EXPIREAT", cmd_expireat, min_args=2, max_args=2)
    registry.register("TTL", cmd_ttl, min_args=1, max_args=1)
    registry.register("PTTL", cmd_pttl, min_args=1, max_args=1)
    registry.register("PERSIST", cmd_persist, min_args=1, max_args=1)
