"""
Data type handlers for Fakedis.
"""

from .strings import StringHandler
from .lists import ListHandler
from .sets import SetHandler
from .hashes import HashHandler
from .sorted_sets import SortedSet, SortedSetHandler

__all__ = [
    "StringHandler",
    "ListHandler",
    "SetHandler",
    "HashHandler",
    "SortedSet",
    "SortedSetHandler",
]
