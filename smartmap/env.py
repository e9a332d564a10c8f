from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from smartmap.cell import CacheCell
from smartmap.engine import PlannerEngine, ResolutionEngine, Resolver, ResolverIndex
from smartmap.errors import ConfigError
from smartmap.utils import frozen_view, is_cell

# 'raise' propagates resolver failures to the reader, 'warn' logs them and treats the attribute as missing
ERROR_MODES = ('raise', 'warn')


@dataclass(frozen=True)
class SmartMapConfig:
    """Configuration shared by a SmartMap and every map derived from it.

    Args:
        index: Resolvers available for filling the cache. An iterable of `Resolver` is indexed on construction.
        engine: Plans and runs resolvers. Defaults to `PlannerEngine`.
        error_mode: One of `ERROR_MODES`.
    """

    index: ResolverIndex
    engine: ResolutionEngine = field(default_factory=PlannerEngine)
    error_mode: str = 'raise'

    def __post_init__(self):
        if isinstance(self.index, Iterable) and not isinstance(self.index, (ResolverIndex, str, Mapping)):
            object.__setattr__(self, 'index', ResolverIndex(self.index))
        if not isinstance(self.index, ResolverIndex):
            raise ConfigError(f'index must be a ResolverIndex or an iterable of Resolver, got {self.index!r}')
        if not isinstance(self.engine, ResolutionEngine):
            raise ConfigError(f'engine must be a ResolutionEngine, got {self.engine!r}')
        if self.error_mode not in ERROR_MODES:
            raise ConfigError(f'error_mode must be one of {ERROR_MODES}, got {self.error_mode!r}')

    @classmethod
    def from_value(cls, value: 'SmartMapConfig | Mapping[str, Any]') -> 'SmartMapConfig':
        """Accept either a ready config or a plain mapping such as `{'index': [...], 'error_mode': 'warn'}`."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise ConfigError(f'Expected SmartMapConfig or a mapping, got {type(value).__name__}')
        if 'index' not in value:
            raise ConfigError("Configuration is missing the resolver 'index'")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(value) - known)
        if unknown:
            raise ConfigError(f'Unknown configuration keys: {unknown}')
        return cls(**value)

    @classmethod
    def of(cls, *resolvers: Resolver, **kwargs) -> 'SmartMapConfig':
        return cls(ResolverIndex(resolvers), **kwargs)


@dataclass(frozen=True, eq=False)
class Environment:
    """Everything a SmartMap reads through: its config, its cache cell and the context the cell was seeded from.

    Environments compare by identity. Two environments over the same config are still distinct caches.
    """

    config: SmartMapConfig
    cell: CacheCell
    context: Mapping

    def __post_init__(self):
        if not is_cell(self.cell):
            raise ConfigError(f'cell must be a cache cell, got {type(self.cell).__name__}')

    @classmethod
    def seed(cls, config: SmartMapConfig, context: Mapping, meta: Mapping | None = None) -> 'Environment':
        """New environment with a private cell holding a copy of `context`."""
        return cls(config, CacheCell(context, meta), frozen_view(context))

    @property
    def engine(self) -> ResolutionEngine:
        return self.config.engine
