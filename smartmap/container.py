from abc import abstractmethod
from collections.abc import Hashable, ItemsView, Iterator, KeysView, Mapping, ValuesView
from typing import Any


class AssociativeContainer(Mapping[Hashable, Any]):
    """Everything code written against a plain mapping may ask of a SmartMap.

    `Mapping` already derives `keys`, `values`, `items`, `get`, `__contains__` and `__eq__` from the three
    primitives; they are redeclared here because a lazily filled container must define each of them itself.
    """

    __slots__ = ()

    # Lookup
    @abstractmethod
    def __getitem__(self, key: Hashable) -> Any:
        pass

    @abstractmethod
    def get(self, key: Hashable, default: Any = None) -> Any:
        pass

    @abstractmethod
    def __contains__(self, key: object) -> bool:
        pass

    @abstractmethod
    def find(self, key: Hashable) -> tuple[Hashable, Any] | None:
        """`(key, value)` if the key is cached or can be resolved, otherwise None."""
        pass

    @abstractmethod
    def __call__(self, key: Hashable, default: Any = None) -> Any:
        pass

    # Iteration and size
    @abstractmethod
    def __iter__(self) -> Iterator[Hashable]:
        pass

    @abstractmethod
    def __reversed__(self) -> Iterator[Hashable]:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def keys(self) -> KeysView[Hashable]:
        pass

    @abstractmethod
    def values(self) -> ValuesView[Any]:
        pass

    @abstractmethod
    def items(self) -> ItemsView[Hashable, Any]:
        pass

    # Value semantics
    @abstractmethod
    def __eq__(self, other: object) -> bool:
        pass

    @abstractmethod
    def __hash__(self) -> int:
        pass

    @abstractmethod
    def empty(self) -> 'AssociativeContainer':
        pass

    # Metadata
    @property
    @abstractmethod
    def meta(self) -> Mapping[str, Any]:
        pass

    @abstractmethod
    def with_meta(self, meta: Mapping[str, Any] | None) -> 'AssociativeContainer':
        pass

    # Updates
    @abstractmethod
    def assoc(self, key: Hashable, value: Any) -> 'AssociativeContainer':
        pass

    @abstractmethod
    def dissoc(self, key: Hashable) -> 'AssociativeContainer':
        pass

    @abstractmethod
    def assoc_in_place(self, key: Hashable, value: Any) -> 'AssociativeContainer':
        pass

    @abstractmethod
    def dissoc_in_place(self, key: Hashable) -> 'AssociativeContainer':
        pass
