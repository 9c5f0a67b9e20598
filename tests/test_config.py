import logging

import pytest

from greeksurface.config import Settings, load_settings
from greeksurface.logging_config import coerce_level, setup_logging


def test_defaults():
    s = load_settings({})
    assert s == Settings()
    assert s.persist is False
    assert s.db_url.startswith("sqlite")


def test_from_env():
    s = load_settings({"DB_URL": "sqlite:///x.db", "PERSIST": "True",
                       "LOG_LEVEL": "debug", "PERSIST_TARGET_POINTS": "50",
                       "MAX_GRID_NODES": "1000"})
    assert s.db_url == "sqlite:///x.db"
    assert s.persist is True
    assert s.log_level == "debug"
    assert s.persist_target_points == 50
    assert s.max_grid_nodes == 1000


@pytest.mark.parametrize("raw,expected", [
    (logging.INFO, logging.INFO), ("debug", logging.DEBUG), ("WARN", logging.WARNING), ("40", 40),
])
def test_coerce_level(raw, expected):
    assert coerce_level(raw) == expected


@pytest.mark.parametrize("raw", ["", "LOUD"])
def test_coerce_level_rejects(raw):
    with pytest.raises(ValueError):
        coerce_level(raw)


def test_setup_logging_sets_root_level():
    root = logging.getLogger()
    saved = root.level, root.handlers[:]
    try:
        setup_logging("WARNING")
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert logging.getLogger("urllib3").level == logging.WARNING
    finally:
        root.setLevel(saved[0])
        root.handlers[:] = saved[1]
