from collections.abc import Callable, Hashable, Iterable, Mapping, Set
from types import MappingProxyType
from typing import Any, TypeVar

T = TypeVar('T')
K = TypeVar('K')


def merge_dicts(dst: Mapping, src: Mapping) -> dict:
    """Deep-merge `src` into a copy of `dst`. Nested mappings are merged, anything else is replaced."""
    result = dict(dst)
    for key, value in src.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def distinct_by(key_fn: Callable[[T], Hashable], items: Iterable[T]) -> list[T]:
    """Drop items whose key was already seen, keeping the first occurrence."""
    seen = set()
    out = []
    for item in items:
        k = key_fn(item)
        if k not in seen:
            seen.add(k)
            out.append(item)
    return out


def index_by(key_fn: Callable[[T], K], items: Iterable[T]) -> dict[K, T]:
    """Build a dict from `key_fn(item)` to item. Later items win on collisions."""
    return {key_fn(item): item for item in items}


def is_cell(obj: Any) -> bool:
    """True if `obj` behaves like a cache cell (can be dereferenced and swapped)."""
    return callable(getattr(obj, 'deref', None)) and callable(getattr(obj, 'swap', None))


def frozen_view(original: Mapping[K, T]) -> Mapping[K, T]:
    """Read-only view of a mapping. Mutating the view raises TypeError."""
    return MappingProxyType(dict(original))


def freeze(value: Any) -> Hashable:
    """Recursively convert mappings, sequences and sets into hashable counterparts.

    Mappings become frozensets of (key, value) pairs, lists/tuples become tuples and sets become
    frozensets. Other values are returned as-is, so unhashable leaves still fail at hash time.
    """
    match value:
        case str() | bytes():
            return value
        case Mapping():
            return frozenset((k, freeze(v)) for k, v in value.items())
        case list() | tuple():
            return tuple(freeze(v) for v in value)
        case Set():
            return frozenset(freeze(v) for v in value)
        case _:
            return value
