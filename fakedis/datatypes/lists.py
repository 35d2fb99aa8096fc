"""
List data type handler for Fakedis.

Implements Redis list commands: LPUSH, RPUSH, LPOP, RPOP, LRANGE, etc.
Uses Python's deque for O(1) push/pop on both ends.
"""

from collections import deque
from typing import Any, List, Optional, Tuple

from ..store import DataType, synchronized
from .base import VariantHandler

LEFT = "LEFT"
RIGHT = "RIGHT"


def normalize_range(start: int, stop: int, length: int) -> Optional[Tuple[int, int]]:
    """
    Resolve an inclusive start/stop pair against a sequence length.

    Negative indices count from the end. Returns a half-open (start, stop)
    slice, or None when the range is empty.
    """
    if start < 0:
        start = max(0, length + start)
    if stop < 0:
        stop = length + stop

    # Redis includes stop index
    stop = min(stop + 1, length)

    if start >= length or start >= stop:
        return None
    return start, stop


class ListHandler(VariantHandler):
    """Handler for list operations."""

    dtype = DataType.LIST
    factory = deque

    @synchronized
    def lpush(self, key: str, *values: str) -> int:
        """Insert values at head. Returns new length."""
        lst = self._write(key)
        lst.extendleft(values)
        return len(lst)

    @synchronized
    def lpushx(self, key: str, *values: str) -> int:
        """Insert at head only if list exists."""
        lst = self._read(key)
        if not lst:
            return 0
        lst.extendleft(values)
        return len(lst)

    @synchronized
    def rpush(self, key: str, *values: str) -> int:
        """Insert values at tail. Returns new length."""
        lst = self._write(key)
        lst.extend(values)
        return len(lst)

    @synchronized
    def rpushx(self, key: str, *values: str) -> int:
        """Insert at tail only if list exists."""
        lst = self._read(key)
        if not lst:
            return 0
        lst.extend(values)
        return len(lst)

    @synchronized
    def lpop(self, key: str, count: Optional[int] = None) -> Optional[Any]:
        """Remove and return the head element, or up to count elements."""
        return self._pop(key, count, lambda lst: lst.popleft())

    @synchronized
    def rpop(self, key: str, count: Optional[int] = None) -> Optional[Any]:
        """Remove and return the tail element, or up to count elements."""
        return self._pop(key, count, lambda lst: lst.pop())

    def _pop(self, key: str, count: Optional[int], pop_one) -> Optional[Any]:
        lst = self._read(key)
        if not lst:
            return None

        if count is None:
            result = pop_one(lst)
        else:
            result = [pop_one(lst) for _ in range(min(max(count, 0), len(lst)))]

        self._discard_if_empty(key, lst)
        return result

    @synchronized
    def llen(self, key: str) -> int:
        """Get list length."""
        lst = self._read(key)
        return len(lst) if lst else 0

    @synchronized
    def lrange(self, key: str, start: int, stop: int) -> List[str]:
        """Get range of elements. Negative indices count from end."""
        lst = self._read(key)
        if not lst:
            return []

        bounds = normalize_range(start, stop, len(lst))
        if bounds is None:
            return []
        return list(lst)[bounds[0]:bounds[1]]

    @synchronized
    def lindex(self, key: str, index: int) -> Optional[str]:
        """Get element at index."""
        lst = self._read(key)
        if not lst:
            return None

        if index < 0:
            index = len(lst) + index

        if 0 <= index < len(lst):
            return lst[index]
        return None

    @synchronized
    def lset(self, key: str, index: int, value: str) -> str:
        """Set element at index."""
        lst = self._read(key)
        if not lst:
            raise ValueError("ERR no such key")

        if index < 0:
            index = len(lst) + index

        if not (0 <= index < len(lst)):
            raise ValueError("ERR index out of range")

        lst[index] = value
        return "OK"

    @synchronized
    def lrem(self, key: str, count: int, value: str) -> int:
        """
        Remove occurrences of value.

        count > 0 removes the first count matches from the head,
        count < 0 removes the last |count| matches from the tail,
        count == 0 removes every match.
        """
        lst = self._read(key)
        if not lst:
            return 0

        items = list(lst)
        removed = 0

        if count > 0:
            # Remove from head
            new_items = []
            for item in items:
                if item == value and removed < count:
                    removed += 1
                else:
                    new_items.append(item)
            items = new_items
        elif count < 0:
            # Remove from tail
            count = abs(count)
            new_items = []
            for item in reversed(items):
                if item == value and removed < count:
                    removed += 1
                else:
                    new_items.append(item)
            items = list(reversed(new_items))
        else:
            items = [item for item in items if item != value]
            removed = len(lst) - len(items)

        lst.clear()
        lst.extend(items)
        self._discard_if_empty(key, lst)
        return removed

    @synchronized
    def ltrim(self, key: str, start: int, stop: int) -> str:
        """Trim list to specified range."""
        lst = self._read(key)
        if not lst:
            return "OK"

        bounds = normalize_range(start, stop, len(lst))
        if bounds is None:
            self.store.delete(key)
        else:
            items = list(lst)[bounds[0]:bounds[1]]
            lst.clear()
            lst.extend(items)

        return "OK"

    @synchronized
    def lmove(self, source: str, dest: str, wherefrom: str, whereto: str) -> Optional[str]:
        """
        Move element between lists. The destination is created if needed.

        When source and destination are the same key the element is rotated
        within one deque, so the key and its deadline are kept.
        """
        wherefrom, whereto = wherefrom.upper(), whereto.upper()
        if wherefrom not in (LEFT, RIGHT) or whereto not in (LEFT, RIGHT):
            raise ValueError("ERR syntax error")

        src = self._read(source)
        if not src:
            return None

        value = src.popleft() if wherefrom == LEFT else src.pop()
        dst = src if dest == source else self._write(dest)
        if whereto == LEFT:
            dst.appendleft(value)
        else:
            dst.append(value)

        self._discard_if_empty(source, src)
        return value

    def rpoplpush(self, source: str, destination: str) -> Optional[str]:
        """Pop from source tail, push to destination head."""
        return self.lmove(source, destination, RIGHT, LEFT)
