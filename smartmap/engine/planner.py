from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from smartmap.utils import distinct_by

from .index import ResolverIndex
from .resolver import Resolver

logger = logging.getLogger(__name__)

Shape = Mapping[Hashable, Any]


def shape_of(tree: Mapping) -> dict:
    """Describe which attributes a tree holds: same keys, nested mappings recursed, `{}` for leaves."""
    return {k: shape_of(v) if isinstance(v, Mapping) else {} for k, v in tree.items()}


@dataclass(frozen=True)
class PlanNode:
    resolver: Resolver
    # Attribute this node was planned for; reported when the resolver fails.
    attribute: Hashable


@dataclass(frozen=True)
class RunGraph:
    """Resolvers to call, in dependency order, to satisfy `requested`."""

    nodes: tuple[PlanNode, ...]
    requested: tuple[Hashable, ...]
    unreachable: frozenset


class _Planner:
    def __init__(self, index: ResolverIndex, available: Iterable[Hashable]):
        self.index = index
        self.available = set(available)
        self.nodes: list[PlanNode] = []

    def plan(self, attribute: Hashable, visiting: frozenset = frozenset()) -> bool:
        if attribute in self.available:
            return True
        if attribute in visiting:
            return False
        visiting = visiting | {attribute}

        for r in self.index.providers(attribute):
            nodes_before, available_before = len(self.nodes), set(self.available)
            if all(self.plan(i, visiting) for i in r.inputs):
                self.nodes.append(PlanNode(r, attribute))
                self.available.update(r.outputs)
                return True
            # Roll back whatever was planned for the inputs of a provider we gave up on
            del self.nodes[nodes_before:]
            self.available = available_before
        return False


def compute_run_graph(index: ResolverIndex, available: Shape, request: Iterable[Hashable]) -> RunGraph:
    """Plan the resolvers needed to produce `request` given the attributes in `available`.

    Planning is deterministic: for every missing attribute, providers are tried in registration order and
    the first one whose inputs can all be provided wins. Each resolver appears in the graph at most once.
    """
    request = tuple(request)
    planner = _Planner(index, available.keys())
    unreachable = frozenset(attr for attr in request if not planner.plan(attr))
    nodes = tuple(distinct_by(lambda n: n.resolver.name, planner.nodes))
    logger.debug(f'Planned {len(nodes)} resolver(s) for {list(request)}; unreachable: {sorted(map(repr, unreachable))}')
    return RunGraph(nodes=nodes, requested=request, unreachable=unreachable)


def attribute_reachable(index: ResolverIndex, available: Shape, attribute: Hashable) -> bool:
    return attribute in available or attribute not in compute_run_graph(index, available, (attribute,)).unreachable
