"""Attribute resolution: planning which resolvers to run and running them against a cache cell."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterable
from typing import TYPE_CHECKING

from . import planner, runner
from .index import ResolverIndex
from .planner import PlanNode, RunGraph, Shape, shape_of
from .resolver import Resolver, resolver

if TYPE_CHECKING:
    from smartmap.env import Environment


class ResolutionEngine(ABC):
    """What a SmartMap needs from a resolution engine.

    `compute_run_graph` must be deterministic and side-effect free. `run_graph` may only change state by
    adding keys to `env.cell`, and reports resolver failures as `ResolutionError`.
    """

    @abstractmethod
    def compute_run_graph(self, env: Environment, available: Shape, request: Iterable[Hashable]) -> RunGraph:
        pass

    @abstractmethod
    def run_graph(self, env: Environment, graph: RunGraph) -> None:
        pass

    @abstractmethod
    def attribute_reachable(self, env: Environment, available: Shape, attribute: Hashable) -> bool:
        """Whether `attribute` is available in `available` or can be produced from it."""
        pass


class PlannerEngine(ResolutionEngine):
    """Backward-chaining planner over the environment's `ResolverIndex`, executed sequentially."""

    def compute_run_graph(self, env: Environment, available: Shape, request: Iterable[Hashable]) -> RunGraph:
        return planner.compute_run_graph(env.config.index, available, request)

    def run_graph(self, env: Environment, graph: RunGraph) -> None:
        runner.run_graph(env, graph)

    def attribute_reachable(self, env: Environment, available: Shape, attribute: Hashable) -> bool:
        return planner.attribute_reachable(env.config.index, available, attribute)

    def __repr__(self) -> str:
        return 'PlannerEngine()'


__all__ = [
    'PlanNode',
    'PlannerEngine',
    'ResolutionEngine',
    'Resolver',
    'ResolverIndex',
    'RunGraph',
    'Shape',
    'resolver',
    'shape_of',
]
