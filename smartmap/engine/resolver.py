from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

ResolverFn = Callable[[dict[Hashable, Any]], Mapping[Hashable, Any]]


@dataclass(frozen=True)
class Resolver:
    """Computes `outputs` from `inputs`.

    `fn` receives a dict with exactly the declared inputs and returns a mapping of produced attributes.
    It may return fewer keys than declared (nothing to report) or extra keys, which are cached as well.
    """

    name: str
    inputs: tuple[Hashable, ...]
    outputs: tuple[Hashable, ...]
    fn: ResolverFn = field(compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'inputs', tuple(self.inputs))
        object.__setattr__(self, 'outputs', tuple(self.outputs))
        if not self.outputs:
            raise ValueError(f'Resolver {self.name!r} must declare at least one output')

    def __call__(self, inputs: dict[Hashable, Any]) -> Mapping[Hashable, Any]:
        return self.fn(inputs)


def resolver(
    *, inputs: Iterable[Hashable] = (), outputs: Iterable[Hashable], name: str | None = None
) -> Callable[[ResolverFn], Resolver]:
    """Decorator turning a function into a `Resolver`.

    Example:
        @resolver(inputs=['user/id'], outputs=['user/name'])
        def user_name(data):
            return {'user/name': USERS[data['user/id']]}
    """

    def _decorator(fn: ResolverFn) -> Resolver:
        return Resolver(name or fn.__qualname__, tuple(inputs), tuple(outputs), fn)

    return _decorator
