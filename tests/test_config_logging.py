"""
Tests for settings and logging setup.
"""

import dataclasses
import logging

import pytest

from tempograph_core import LazyGraphEngine, SETTINGS, Settings
from tempograph_core.utils.logging_config import setup_logging


@pytest.fixture
def root_logger():
    """Drop the handlers setup_logging installs once the test is done."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level

    yield root

    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)


class TestSettings:

    def test_defaults(self):
        assert SETTINGS.cache_max_entries >= 0
        assert SETTINGS.minute_units > 0

    def test_settings_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            SETTINGS.log_level = "DEBUG"

    def test_override(self):
        custom = Settings(cache_max_entries=5)
        assert custom.cache_max_entries == 5

    def test_engine_explicit_bound_wins(self):
        engine = LazyGraphEngine(cache_max_entries=3)
        engine.create_computed("C", lambda *v: sum(v))
        assert engine.graph.get_node("C").data.cache.policy == "lru(3)"


class TestSetupLogging:

    def test_writes_to_file(self, tmp_path, root_logger):
        log_file = tmp_path / "nested" / "tempograph.log"

        root = setup_logging(log_file=str(log_file), level="DEBUG")
        logging.getLogger("tempograph_core.engine").debug("[CALC] computing X at t=1")
        for handler in root.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "Logging configured successfully" in content
        assert "[DEBUG] tempograph_core.engine: [CALC] computing X at t=1" in content
        assert root.level == logging.DEBUG

    def test_replaces_existing_handlers(self, tmp_path, root_logger):
        setup_logging(log_file=str(tmp_path / "a.log"), level=logging.INFO)
        root = setup_logging(log_file=str(tmp_path / "b.log"), level=logging.INFO)

        assert len(root.handlers) == 2

    def test_engine_logs_cache_hits(self, tmp_path, root_logger, income_engine):
        log_file = tmp_path / "engine.log"
        root = setup_logging(log_file=str(log_file), level=logging.DEBUG)

        income_engine.value_at("TotalIncome", 5)
        income_engine.value_at("TotalIncome", 5)
        for handler in root.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "[CALC] computing TotalIncome at t=5" in content
        assert "[CACHE] TotalIncome (t=5) returned 1000" in content
