from collections.abc import Hashable, Iterable, Iterator

from smartmap.errors import ConfigError
from smartmap.utils import index_by

from .resolver import Resolver


class ResolverIndex:
    """Lookup tables over a set of resolvers: attribute -> providers and name -> resolver.

    Providers of an attribute keep registration order, which is also the order the planner tries them in.
    """

    def __init__(self, resolvers: Iterable[Resolver] = ()):
        resolvers = tuple(resolvers)
        for r in resolvers:
            if not isinstance(r, Resolver):
                raise ConfigError(f'Expected a Resolver, got {type(r).__name__}')
        self._by_name = index_by(lambda r: r.name, resolvers)
        if len(self._by_name) != len(resolvers):
            names = [r.name for r in resolvers]
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise ConfigError(f'Duplicate resolver names: {duplicates}')

        self._providers: dict[Hashable, list[Resolver]] = {}
        for r in resolvers:
            for attr in r.outputs:
                self._providers.setdefault(attr, []).append(r)

    def providers(self, attribute: Hashable) -> tuple[Resolver, ...]:
        return tuple(self._providers.get(attribute, ()))

    def __iter__(self) -> Iterator[Resolver]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f'ResolverIndex({list(self._by_name)!r})'
