import logging

import pytest

from smartmap.utils.logging import ENGINE_LOGGER, init_logging


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch):
    monkeypatch.delenv('LOG_LEVEL', raising=False)
    root, engine = logging.getLogger(), logging.getLogger(ENGINE_LOGGER)
    handlers, root_level, engine_level = list(root.handlers), root.level, engine.level
    yield
    root.handlers[:] = handlers
    root.setLevel(root_level)
    engine.setLevel(engine_level)


def test_sets_root_level_and_leaves_engine_inheriting():
    assert init_logging('warning') == logging.WARNING

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger(ENGINE_LOGGER).level == logging.NOTSET
    assert logging.getLogger('smartmap.engine.planner').getEffectiveLevel() == logging.WARNING


def test_accepts_numeric_levels():
    assert init_logging(logging.ERROR) == logging.ERROR
    assert logging.getLogger().level == logging.ERROR


def test_environment_overrides_passed_level(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    assert init_logging('ERROR') == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


def test_engine_level_is_set_separately():
    """Engine debug output gets through even when the root logger is quieter."""
    init_logging('WARNING', engine_level='DEBUG')

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger('smartmap.engine.runner').isEnabledFor(logging.DEBUG)
    assert not logging.getLogger('smartmap.smart_map').isEnabledFor(logging.INFO)
    assert all(h.level <= logging.DEBUG for h in logging.getLogger().handlers)


def test_unknown_level_is_rejected():
    with pytest.raises(ValueError, match='verbose'):
        init_logging('verbose')
