"""Resolve attributes from the command line.

    smartmap --resolvers=@myapp.resolvers.ALL --context='{"user/id": 1}' --attrs='["user/name"]'
    smartmap --resolvers=@myapp.resolvers.ALL --context_file=ctx.yaml --attrs='["user/name"]' --error_mode=warn
    smartmap --resolvers=@myapp.resolvers.ALL --context_file=ctx.yaml --attrs='["user/name"]' --engine_log_level=DEBUG

Resolved attributes are printed as YAML. Attributes that cannot be resolved are reported as null.
"""

import logging
import sys
from collections.abc import Iterable, Mapping, Sequence, Set
from pathlib import Path
from typing import Any

import configuronic as cfn
import yaml

from smartmap.engine import Resolver
from smartmap.env import SmartMapConfig
from smartmap.smart_map import create
from smartmap.utils.logging import init_logging


def to_plain(value: Any) -> Any:
    """Convert wrapped values back into plain dicts and lists so they can be serialized."""
    match value:
        case str() | bytes():
            return value
        case Mapping():
            return {k: to_plain(v) for k, v in value.items()}
        case Sequence():
            return [to_plain(v) for v in value]
        case Set():
            return sorted((to_plain(v) for v in value), key=repr)
        case _:
            return value


def _load_context(context: Mapping | None, context_file: str | None) -> dict:
    result = {}
    if context_file is not None:
        with Path(context_file).open('r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, Mapping):
            raise ValueError(f'{context_file} must contain a mapping, got {type(loaded).__name__}')
        result.update(loaded)
    if context is not None:
        result.update(context)
    return result


@cfn.config(
    context=None,
    context_file=None,
    attrs=[],
    error_mode='raise',
    log_level='INFO',
    engine_log_level=None,
)
def resolve(
    resolvers: Iterable[Resolver],
    context: Mapping | None,
    context_file: str | None,
    attrs: Sequence[str],
    error_mode: str,
    log_level: str,
    engine_log_level: str | None,
):
    init_logging(log_level, engine_log_level)
    config = SmartMapConfig(list(resolvers), error_mode=error_mode)
    sm = create(config, _load_context(context, context_file))
    logging.info(f'Resolving {list(attrs)} with {len(config.index)} resolver(s)')

    sm.load(*attrs)
    result = {attr: to_plain(sm.get(attr)) for attr in attrs}
    yaml.safe_dump(result, sys.stdout, default_flow_style=False, sort_keys=False)


def main():
    cfn.cli(resolve)


if __name__ == '__main__':
    main()
