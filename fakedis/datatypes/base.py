"""
Common base for the value-variant handlers.

A key holds exactly one variant. Handlers reach their values only through
``_read`` and ``_write``, which is where the mismatch policy lives: a read
sees a key of another variant as missing, while a write replaces it with a
fresh, persistent value of the handler's own variant.
"""

import re
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..store import DataStore

from ..store import DataType

INTEGER_RE = re.compile(r"[+-]?\d+")


class VariantHandler:
    """Binds one ``DataType`` and its empty-value factory to a store."""

    dtype: DataType = DataType.NONE
    factory: Callable[[], Any] = object

    def __init__(self, store: "DataStore"):
        self.store = store

    def _read(self, key: str) -> Optional[Any]:
        return self.store.get_typed(key, self.dtype)

    def _read_or_empty(self, key: str) -> Any:
        value = self._read(key)
        return self.factory() if value is None else value

    def _write(self, key: str) -> Any:
        return self.store.get_or_create(key, self.dtype, self.factory)

    def _discard_if_empty(self, key: str, value: Any) -> None:
        # Empty containers are never left behind under a key
        if not value:
            self.store.delete(key)
