import logging
import os

import coloredlogs

FORMAT = '%(asctime)s.%(msecs)03d [%(levelname)s] (%(name)s:%(lineno)s) %(message)s'
DATE_FORMAT = '%H:%M:%S'
ENGINE_LOGGER = 'smartmap.engine'


def _level_number(level: str | int) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f'Unknown log level: {level!r}')
    return number


def init_logging(level: str | int = 'INFO', engine_level: str | int | None = None) -> int:
    """Configure the root logger with coloured output and return the root level in effect.

    `LOG_LEVEL` in the environment takes precedence over `level`. `engine_level` sets the planner and runner
    loggers separately, e.g. `'DEBUG'` to trace which resolvers run without flooding the rest of the output.
    """
    root_level = _level_number(os.getenv('LOG_LEVEL', level))
    engine = root_level if engine_level is None else _level_number(engine_level)

    # The handler has to let through whichever of the two levels is lower
    handler_level = min(root_level, engine)
    logging.basicConfig(level=root_level, format=FORMAT, datefmt=DATE_FORMAT, force=True)
    coloredlogs.install(level=handler_level, fmt=FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger().setLevel(root_level)
    logging.getLogger(ENGINE_LOGGER).setLevel(logging.NOTSET if engine_level is None else engine)
    return root_level
