"""
Command registry and dispatcher for Fakedis.

The dispatcher is the error-containment boundary: ``CommandHandler.execute``
always returns a reply value or a ``CommandError`` instance, never raises.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from .args import flatten

if TYPE_CHECKING:
    from ..store import DataStore

logger = logging.getLogger("fakedis")


class CommandError(Exception):
    """Error reply produced by a command."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.command: Optional[List[str]] = None
        self.config = None


class UnknownCommandError(CommandError):
    """Raised for a command name that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"ERR unknown command '{name}'")
        self.name = name


class UnknownSubcommandError(CommandError):
    """Raised for a subcommand a container command does not know."""

    def __init__(self, command_name: str, subcommand: str):
        super().__init__(
            f"ERR unknown subcommand '{subcommand}'. Try {command_name} HELP."
        )
        self.command_name = command_name
        self.subcommand = subcommand


class CommandRegistry:
    """Registry for command handlers."""

    def __init__(self):
        self._commands: Dict[str, Tuple[Callable, int, int]] = {}
        # command_name -> (handler, min_args, max_args)

    def register(self, name: str, handler: Callable,
                 min_args: int = 0, max_args: int = -1):
        """Register a command handler. ``max_args`` of -1 means unbounded."""
        self._commands[name.upper()] = (handler, min_args, max_args)

    def get(self, name: str) -> Optional[Tuple[Callable, int, int]]:
        """Get command handler and arity."""
        return self._commands.get(name.upper())


class CommandHandler:
    """Handles command execution and dispatching."""

    def __init__(self, store: "DataStore"):
        from .keys import register_key_commands
        from .server_commands import register_server_commands
        from .string_commands import register_string_commands
        from .list_commands import register_list_commands
        from .set_commands import register_set_commands
        from .hash_commands import register_hash_commands
        from .zset_commands import register_zset_commands

        self.store = store
        self.registry = CommandRegistry()

        # Register all commands
        register_key_commands(self.registry, store)
        register_server_commands(self.registry, store)
        register_string_commands(self.registry, store)
        register_list_commands(self.registry, store)
        register_set_commands(self.registry, store)
        register_hash_commands(self.registry, store)
        register_zset_commands(self.registry, store)

    def execute(self, command) -> Any:
        """
        Execute a command and return its reply.

        Args:
            command: Command name followed by its arguments. Items may be
                str, bytes, int or float; nested lists are flattened.

        Returns:
            The reply value, or a CommandError instance describing the failure.
        """
        command = flatten(command or [])
        if not command:
            return None

        cmd_name = command[0].upper()
        args = command[1:]

        cmd_info = self.registry.get(cmd_name)
        if not cmd_info:
            logger.debug(f"Unknown command '{cmd_name}'")
            return UnknownCommandError(cmd_name)

        handler, min_args, max_args = cmd_info

        # Validate argument count
        if len(args) < min_args or (max_args >= 0 and len(args) > max_args):
            return CommandError(
                f"ERR wrong number of arguments for '{cmd_name.lower()}' command"
            )

        try:
            result = handler(*args)
        except CommandError as e:
            logger.debug(f"{cmd_name} failed: {e}")
            return e
        except ValueError as e:
            logger.debug(f"{cmd_name} failed: {e}")
            return CommandError(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error while executing {cmd_name}")
            return CommandError(f"ERR {e}")

        return self._normalize_result(result)

    def _normalize_result(self, result: Any) -> Any:
        """Convert handler results to the reply shapes connections expect."""
        if isinstance(result, bool):
            return 1 if result else 0
        elif isinstance(result, (tuple, set, frozenset)):
            return list(result)
        elif isinstance(result, dict):
            # Flatten dict to a field/value list
            flat = []
            for k, v in result.items():
                flat.extend([k, v])
            return flat
        return result
