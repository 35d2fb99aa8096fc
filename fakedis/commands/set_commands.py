"""
Set commands for Fakedis.

Every set command takes plain string arguments, so the handler's bound
methods are registered directly.
"""

from typing import TYPE_CHECKING

from ..datatypes.sets import SetHandler

if TYPE_CHECKING:
    from . import CommandRegistry
    from ..store import DataStore

# name -> (handler method, min_args, max_args)
SET_COMMANDS = {
    "SADD": ("sadd", 2, -1),
    "SREM": ("srem", 2, -1),
    "SISMEMBER": ("sismember", 2, 2),
    "SMISMEMBER": ("smismember", 2, -1),
    "SMEMBERS": ("smembers", 1, 1),
    "SCARD": ("scard", 1, 1),
}


def register_set_commands(registry: "CommandRegistry", store: "DataStore"):
    sets = SetHandler(store)
    for name, (method, min_args, max_args) in SET_COMMANDS.items():
        registry.register(name, getattr(sets, method), min_args=min_args, max_args=max_args)
