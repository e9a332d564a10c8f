"""Lazily resolved, cache-backed mappings."""

from .cell import CacheCell
from .container import AssociativeContainer
from .engine import PlannerEngine, ResolutionEngine, Resolver, ResolverIndex, RunGraph, resolver
from .env import Environment, SmartMapConfig
from .errors import ConfigError, ResolutionError
from .smart_map import SmartMap, create, environment_of
from .wrap import LazySequence, wrap

__all__ = [
    'AssociativeContainer',
    'CacheCell',
    'ConfigError',
    'Environment',
    'LazySequence',
    'PlannerEngine',
    'ResolutionEngine',
    'ResolutionError',
    'Resolver',
    'ResolverIndex',
    'RunGraph',
    'SmartMap',
    'SmartMapConfig',
    'create',
    'environment_of',
    'resolver',
    'wrap',
]
