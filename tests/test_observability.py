"""
Observability Tests
===================

INVARIANTS TESTED:
1. setup_logging never stacks handlers on repeated calls
2. Without an explicit level, setup_logging takes the configured log_level
3. The collector records arguments exactly as received, in order
"""

import logging

import pytest

from graphview.config import ViewConfig
from graphview.graphic import GraphicGraph
from graphview.observability import EventCollector, LOGGER_NAMESPACE, setup_logging


class TestSetupLogging:

    @pytest.fixture(autouse=True)
    def restore_namespace_logger(self):
        """Put the 'graphview' logger back the way it was after each test."""
        logger = logging.getLogger(LOGGER_NAMESPACE)
        handlers = list(logger.handlers)
        level = logger.level
        yield
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers[:] = handlers
        logger.setLevel(level)

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging(logging.DEBUG)
        logger = setup_logging("warning")

        assert logger.name == LOGGER_NAMESPACE
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "graphview.log"
        logger = setup_logging(logging.INFO, str(log_file))

        assert len(logger.handlers) == 2

    def test_level_from_explicit_config(self):
        config = ViewConfig.from_env({"GRAPHVIEW_LOG_LEVEL": "error"})
        logger = setup_logging(config=config)
        assert logger.level == logging.ERROR

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("GRAPHVIEW_LOG_LEVEL", "info")
        logger = setup_logging()
        assert logger.level == logging.INFO

    def test_default_level_is_warning(self, monkeypatch):
        monkeypatch.delenv("GRAPHVIEW_LOG_LEVEL", raising=False)
        assert setup_logging().level == logging.WARNING

    def test_explicit_level_wins_over_config(self):
        logger = setup_logging(logging.DEBUG, config=ViewConfig(log_level="ERROR"))
        assert logger.level == logging.DEBUG

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="chatty"):
            setup_logging("chatty")

    def test_module_loggers_are_children(self, caplog):
        setup_logging(logging.DEBUG)

        with caplog.at_level(logging.INFO, logger=LOGGER_NAMESPACE):
            GraphicGraph("g").add_sprite("s1")

        assert any("sprite 's1' added" in r.getMessage() for r in caplog.records)


class TestEventCollector:

    def test_records_in_order(self):
        collector = EventCollector("recorder")
        collector.node_added("g", "n1")
        collector.node_attribute_changed("g", "n1", "label", None, "x")

        entries = collector.get_entries()
        assert [e.sequence for e in entries] == [1, 2]
        assert collector.get_entries("node_added")[0].args == ("g", "n1")
        assert collector.counts() == {"node_added": 1, "node_attribute_changed": 1}

    def test_clear(self):
        collector = EventCollector()
        collector.graph_cleared("g")
        collector.clear()
        assert collector.entry_count == 0
        assert "entries=0" in repr(collector)
