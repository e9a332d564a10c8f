from collections.abc import Hashable


class ConfigError(Exception):
    pass


class ResolutionError(RuntimeError):
    """A resolver failed while the engine was filling the cache.

    The original exception is available as `__cause__`.
    """

    def __init__(self, attribute: Hashable, resolver: str, cause: BaseException):
        super().__init__(f'Failed to resolve {attribute!r}: resolver {resolver!r} raised {cause!r}')
        self.attribute = attribute
        self.resolver = resolver
        self.cause = cause
