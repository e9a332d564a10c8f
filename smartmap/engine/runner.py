from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from typing import TYPE_CHECKING, Any

from smartmap.errors import ResolutionError
from smartmap.utils import merge_dicts

from .planner import PlanNode, RunGraph

if TYPE_CHECKING:
    from smartmap.env import Environment

logger = logging.getLogger(__name__)


def fill(tree: Mapping, output: Mapping) -> dict:
    """Add resolver output to a cache tree without overwriting anything already cached.

    New keys are appended after the existing ones. When both sides hold a mapping under the same key the
    nested keys are merged, cached values winning.
    """
    result = dict(tree)
    for key, value in output.items():
        if key not in result:
            result[key] = value
        elif isinstance(value, Mapping) and isinstance(result[key], Mapping):
            result[key] = merge_dicts(value, result[key])
    return result


def _call(node: PlanNode, inputs: dict[Hashable, Any]) -> Mapping:
    try:
        output = node.resolver(inputs)
    except Exception as e:
        raise ResolutionError(node.attribute, node.resolver.name, e) from e
    if not isinstance(output, Mapping):
        cause = TypeError(f'Resolver must return a mapping, got {type(output).__name__}')
        raise ResolutionError(node.attribute, node.resolver.name, cause) from cause
    return output


def run_graph(env: Environment, graph: RunGraph) -> None:
    """Call the planned resolvers in order, filling `env.cell` with everything they return."""
    for node in graph.nodes:
        tree = env.cell.deref()
        r = node.resolver
        if all(attr in tree for attr in r.outputs):
            logger.debug(f'Skipping {r.name}: outputs already cached')
            continue
        missing = [attr for attr in r.inputs if attr not in tree]
        if missing:
            logger.debug(f'Skipping {r.name}: inputs {missing} were not produced')
            continue

        output = _call(node, {attr: tree[attr] for attr in r.inputs})
        logger.debug(f'{r.name} produced {list(output)}')
        env.cell.swap(fill, output)
