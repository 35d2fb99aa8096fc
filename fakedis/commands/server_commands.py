"""
Server commands for Fakedis.
"""

from typing import TYPE_CHECKING

from ..version import REDIS_VERSION

if TYPE_CHECKING:
    from . import CommandRegistry
    from ..store import DataStore

HELLO_REPLY = (
    "server", "redis",
    "version", REDIS_VERSION,
    "proto", 3,
    "id", 1,
    "mode", "standalone",
    "role", "master",
)


def register_server_commands(registry: "CommandRegistry", store: "DataStore"):
    """Register server commands."""

    def cmd_ping(*args):
        """PING [message] - Test connection."""
        if args:
            return args[0]
        return "PONG"

    def cmd_echo(message):
        """ECHO message - Echo message."""
        return message

    def cmd_hello(*args):
        """HELLO [protover ...] - Static handshake description."""
        return list(HELLO_REPLY)

    def cmd_dbsize():
        """DBSIZE - Get number of keys."""
        return store.dbsize()

    def cmd_flushdb(*args):
        """FLUSHDB [ASYNC] - Delete all keys."""
        store.flushdb()
        return "OK"

    def cmd_flushall(*args):
        """FLUSHALL [ASYNC] - Delete all keys in all databases."""
        store.flushdb()  # Single database
        return "OK"

    def cmd_publish(channel, message):
        """PUBLISH channel message - There are never subscribers."""
        return 0

    def cmd_script(subcommand, *args):
        """SCRIPT LOAD|EXISTS|FLUSH - Script registry (scripts never run)."""
        from . import CommandError, UnknownSubcommandError

        subcommand = subcommand.upper()

        if subcommand == "LOAD":
            if len(args) != 1:
                raise CommandError("ERR wrong number of arguments for 'script|load' command")
            return store.script_load(args[0])
        elif subcommand == "EXISTS":
            if not args:
                raise CommandError("ERR wrong number of arguments for 'script|exists' command")
            return store.script_exists(*args)
        elif subcommand == "FLUSH":
            store.script_flush()
            return "OK"
        else:
            raise UnknownSubcommandError("SCRIPT", subcommand)

    # Register commands
    registry.register("PING", cmd_ping, min_args=0, max_args=1)
    registry.register("ECHO", cmd_echo, min_args=1, max_args=1)
    registry.register("HELLO", cmd_hello, min_args=0)
    registry.register("DBSIZE", cmd_dbsize, min_args=0, max_args=0)
    registry.register("FLUSHDB", cmd_flushdb, min_args=0)
    registry.register("FLUSHALL", cmd_flushall, min_args=0)
    registry.register("PUBLISH", cmd_publish, min_args=2, max_args=2)
    registry.register("SCRIPT", cmd_script, min_args=1)
