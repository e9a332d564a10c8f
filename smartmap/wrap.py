from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence, Set
from typing import Any, TypeVar

from .container import AssociativeContainer

T = TypeVar('T')
U = TypeVar('U')


class LazySequence(Sequence[U]):
    """Lazy, indexable view that applies `fn` on element access.

    - Supports `len()`, integer indexing and repeated iteration.
    - Slicing returns another lazy view without materializing elements.
    - Compares equal to any non-string sequence with equal elements.
    """

    __slots__ = ('_seq', '_fn')

    def __init__(self, seq: Sequence[T], fn: Callable[[T], U]) -> None:
        self._seq = seq
        self._fn = fn

    def __len__(self) -> int:
        return len(self._seq)

    def __getitem__(self, index: int | slice) -> U | LazySequence[U]:
        if isinstance(index, slice):
            return LazySequence(self._seq[index], self._fn)
        return self._fn(self._seq[int(index)])

    def __iter__(self):
        for item in self._seq:
            yield self._fn(item)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sequence) or isinstance(other, str | bytes):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(a == b for a, b in zip(self, other, strict=True))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f'LazySequence({self._seq!r})'


def wrap(value: Any, map_factory: Callable[[Mapping], AssociativeContainer]) -> Any:
    """Wrap a stored value so nested data reads through the same lazy machinery.

    - Mappings become containers built by `map_factory`; containers pass through unchanged.
    - Lists, tuples and other non-string sequences become a `LazySequence` wrapping elements on access.
    - Sets are rebuilt eagerly with every element wrapped, since membership needs hashable, realized elements.
    - Everything else is returned as-is.
    """
    match value:
        case str() | bytes() | bytearray() | AssociativeContainer():
            return value
        case Mapping():
            return map_factory(value)
        case Sequence():
            return LazySequence(value, lambda item: wrap(item, map_factory))
        case frozenset():
            return frozenset(wrap(item, map_factory) for item in value)
        case Set():
            return set(wrap(item, map_factory) for item in value)
        case _:
            return value
