import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

_EMPTY_META: Mapping[str, Any] = MappingProxyType({})


class CacheCell:
    """Atomically updatable reference holding a cache tree and its metadata.

    The cell never mutates an installed tree: every update computes a new dict and installs it with
    compare-and-set, so readers that already hold a tree keep a consistent snapshot.

    Example:
        >>> cell = CacheCell({'a': 1})
        >>> cell.swap(lambda tree: {**tree, 'b': 2})
        {'a': 1, 'b': 2}
        >>> cell.deref()
        {'a': 1, 'b': 2}
    """

    __slots__ = ('_tree', '_meta', '_lock')

    def __init__(self, tree: Mapping | None = None, meta: Mapping[str, Any] | None = None):
        self._tree: dict = dict(tree or {})
        self._meta: Mapping[str, Any] = MappingProxyType(dict(meta)) if meta else _EMPTY_META
        self._lock = threading.Lock()

    def deref(self) -> dict:
        """Current tree. Treat it as read-only."""
        return self._tree

    @property
    def meta(self) -> Mapping[str, Any]:
        return self._meta

    def compare_and_set(self, expected: dict, new: Mapping) -> bool:
        """Install `new` only if the current tree is still `expected` (by identity)."""
        return self._install(expected, dict(new))

    def _install(self, expected: dict, new: dict) -> bool:
        with self._lock:
            if self._tree is not expected:
                return False
            self._tree = new
            return True

    def swap(self, fn: Callable[..., Mapping], *args, **kwargs) -> dict:
        """Apply a pure function to the current tree and install the result, retrying on conflict.

        `fn` may run more than once under contention, so it must not have side effects.
        """
        while True:
            current = self._tree
            new = dict(fn(current, *args, **kwargs))
            if self._install(current, new):
                return new

    def set_meta(self, meta: Mapping[str, Any] | None) -> None:
        with self._lock:
            self._meta = MappingProxyType(dict(meta)) if meta else _EMPTY_META

    def __repr__(self) -> str:
        return f'CacheCell({self._tree!r})'
