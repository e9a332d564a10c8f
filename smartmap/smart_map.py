"""SmartMap: a read-only-looking mapping that resolves missing attributes on demand.

A SmartMap reads through its environment's cache cell. Keys already cached are returned directly; a missing
key asks the resolution engine to plan and run whatever resolvers can produce it, and everything they return is
cached for later reads, including attributes nobody asked for yet.

Example:
    >>> from smartmap import SmartMapConfig, create, resolver
    >>> @resolver(inputs=['user/id'], outputs=['user/name'])
    ... def user_name(data):
    ...     return {'user/name': {1: 'ada'}[data['user/id']]}
    >>> sm = create(SmartMapConfig.of(user_name), {'user/id': 1})
    >>> sm['user/name']
    'ada'
    >>> list(sm.keys())
    ['user/id', 'user/name']
"""

import logging
from collections.abc import Hashable, ItemsView, Iterator, KeysView, Mapping, ValuesView
from types import MappingProxyType
from typing import Any

from smartmap.container import AssociativeContainer
from smartmap.engine import shape_of
from smartmap.env import Environment, SmartMapConfig
from smartmap.errors import ResolutionError
from smartmap.utils import freeze
from smartmap.wrap import wrap

logger = logging.getLogger(__name__)

_MISSING = object()


def _with(tree: Mapping, key: Hashable, value: Any) -> dict:
    return {**tree, key: value}


def _without(tree: Mapping, key: Hashable) -> dict:
    return {k: v for k, v in tree.items() if k != key}


class SmartMap(AssociativeContainer):
    """Lazily filled mapping over an `Environment`.

    Reads (`[]`, `get`, calling the map, `find`) resolve missing keys. Presence checks (`in`), iteration, `len`,
    `keys`, `values` and `items` only look at what is cached right now and never resolve.

    Updates come in two flavours:
    - `assoc`/`dissoc` return a new SmartMap seeded from the updated context. Everything derived so far is
      dropped, since it may depend on the changed key.
    - `assoc_in_place`/`dissoc_in_place` edit the live cache and return `self`. Every SmartMap sharing the
      environment sees the change and nothing is invalidated, so the caller is responsible for consistency.
    """

    __slots__ = ('_env',)

    def __init__(self, env: Environment):
        if not isinstance(env, Environment):
            raise TypeError(f'SmartMap requires an Environment, got {type(env).__name__}')
        self._env = env

    @property
    def env(self) -> Environment:
        return self._env

    def _tree(self) -> dict:
        return self._env.cell.deref()

    def _nested(self, value: Mapping) -> 'SmartMap':
        return SmartMap(Environment.seed(self._env.config, value))

    def _wrap(self, value: Any) -> Any:
        return wrap(value, self._nested)

    def _resolve(self, keys: tuple[Hashable, ...]) -> None:
        env = self._env
        graph = env.engine.compute_run_graph(env, shape_of(self._tree()), keys)
        try:
            env.engine.run_graph(env, graph)
        except ResolutionError:
            if env.config.error_mode == 'raise':
                raise
            logger.warning(f'Failed to resolve {list(keys)}', exc_info=True)

    def _lookup(self, key: Hashable) -> Any:
        tree = self._tree()
        if key in tree:
            return tree[key]
        self._resolve((key,))
        return self._tree().get(key, _MISSING)

    # Lookup

    def get(self, key: Hashable, default: Any = None) -> Any:
        value = self._lookup(key)
        return default if value is _MISSING else self._wrap(value)

    def __getitem__(self, key: Hashable) -> Any:
        value = self._lookup(key)
        if value is _MISSING:
            raise KeyError(key)
        return self._wrap(value)

    def __call__(self, key: Hashable, default: Any = None) -> Any:
        return self.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._tree()

    def has(self, key: Hashable) -> bool:
        return key in self

    def find(self, key: Hashable) -> tuple[Hashable, Any] | None:
        tree = self._tree()
        if key in tree:
            return key, self._wrap(tree[key])
        if not self._env.engine.attribute_reachable(self._env, shape_of(tree), key):
            return None
        value = self._lookup(key)
        return None if value is _MISSING else (key, self._wrap(value))

    def load(self, *keys: Hashable) -> 'SmartMap':
        """Resolve several attributes with a single plan. Returns `self`."""
        tree = self._tree()
        missing = tuple(k for k in keys if k not in tree)
        if missing:
            self._resolve(missing)
        return self

    # Iteration and size

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._tree()))

    def __len__(self) -> int:
        return len(self._tree())

    def __reversed__(self) -> Iterator[Hashable]:
        return reversed(self._tree().keys())

    def keys(self) -> KeysView[Hashable]:
        # Installed trees are never mutated, so this view is a snapshot
        return self._tree().keys()

    def _wrapped(self) -> Mapping[Hashable, Any]:
        return MappingProxyType({k: self._wrap(v) for k, v in self._tree().items()})

    def values(self) -> ValuesView[Any]:
        return ValuesView(self._wrapped())

    def items(self) -> ItemsView[Hashable, Any]:
        return ItemsView(self._wrapped())

    def to_dict(self) -> dict:
        """Plain copy of the cache, values unwrapped."""
        return dict(self._tree())

    # Value semantics

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SmartMap):
            return self._tree() == other._tree()
        if isinstance(other, Mapping):
            return self._tree() == {k: other[k] for k in other}
        return NotImplemented

    def __hash__(self) -> int:
        return hash(freeze(self._tree()))

    def empty(self) -> 'SmartMap':
        return SmartMap(Environment.seed(self._env.config, {}, self.meta))

    def __repr__(self) -> str:
        return f'SmartMap({self._tree()!r})'

    # Metadata

    @property
    def meta(self) -> Mapping[str, Any]:
        return self._env.cell.meta

    def with_meta(self, meta: Mapping[str, Any] | None) -> 'SmartMap':
        """Replace the metadata stored in the shared cell. The returned map shares this map's environment."""
        self._env.cell.set_meta(meta)
        return SmartMap(self._env)

    # Updates

    def assoc(self, key: Hashable, value: Any) -> 'SmartMap':
        return self.replace_context(_with(self._env.context, key, value))

    def dissoc(self, key: Hashable) -> 'SmartMap':
        return self.replace_context(_without(self._env.context, key))

    def replace_context(self, context: Mapping) -> 'SmartMap':
        """Fresh SmartMap over the same config, seeded from `context`. Keeps metadata."""
        if not isinstance(context, Mapping):
            raise TypeError(f'context must be a mapping, got {type(context).__name__}')
        return SmartMap(Environment.seed(self._env.config, context, self.meta))

    def assoc_in_place(self, key: Hashable, value: Any) -> 'SmartMap':
        self._env.cell.swap(_with, key, value)
        return self

    def dissoc_in_place(self, key: Hashable) -> 'SmartMap':
        self._env.cell.swap(_without, key)
        return self


def create(config: SmartMapConfig | Mapping[str, Any], context: Mapping) -> SmartMap:
    """Build a SmartMap whose cache starts as a copy of `context`.

    `config` is a `SmartMapConfig` or a mapping with at least an `'index'` entry.
    """
    if not isinstance(context, Mapping):
        raise TypeError(f'context must be a mapping, got {type(context).__name__}')
    return SmartMap(Environment.seed(SmartMapConfig.from_value(config), context))


def environment_of(sm: SmartMap) -> SmartMapConfig:
    if not isinstance(sm, SmartMap):
        raise TypeError(f'Expected a SmartMap, got {type(sm).__name__}')
    return sm.env.config
