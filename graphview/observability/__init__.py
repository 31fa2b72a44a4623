"""
Observability Layer

RESPONSIBILITY: Logging setup, recording of stream events
ALLOWED INPUTS: Any sink call from any stage of the stream
OUTPUTS: RecordedEvent entries, configured loggers

WHAT THIS LAYER MUST NOT DO:
============================
- Modify system behavior
- Filter or interpret events (only record them)
- Forward events (a collector is a terminal sink)

BOUNDARY ENFORCEMENT:
=====================
- Records the positional arguments exactly as received
- Entries are append-only; clear() is the only reset
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union
import logging
import sys

from ..config import ViewConfig


# =============================================================================
# LOGGING
# =============================================================================

LOGGER_NAMESPACE = "graphview"


def setup_logging(
    level: Union[int, str, None] = None,
    log_file: Optional[str] = None,
    config: Optional[ViewConfig] = None
) -> logging.Logger:
    """
    Configures the logger for the 'graphview' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG or "DEBUG"). When omitted,
            the log_level of `config` is used.
        log_file: Optional path to save logs to a file.
        config: Source of the default level; ViewConfig.from_env() if omitted.
    """
    if level is None:
        level = (config or ViewConfig.from_env()).log_level

    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {name!r}")

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)

    # Avoid duplicate handlers when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


# =============================================================================
# EVENT COLLECTOR
# =============================================================================

@dataclass(frozen=True)
class RecordedEvent:
    """One sink call as received."""
    sequence: int
    method: str
    args: Tuple[Any, ...]


class EventCollector:
    """
    Terminal sink recording every event it receives.

    Collectors are append-only - no modification of collected data.
    Implements the full attribute and element sink capability sets.
    """

    def __init__(self, name: str = "collector"):
        self._name = name
        self._entries: List[RecordedEvent] = []
        self._sequence: int = 0

    def collect(self, method: str, *args: Any) -> None:
        """Collect a sink call (append-only)."""
        self._sequence += 1
        self._entries.append(RecordedEvent(self._sequence, method, args))

    def get_entries(self, method: Optional[str] = None) -> List[RecordedEvent]:
        """Get entries, optionally restricted to one sink method."""
        if method is None:
            return list(self._entries)
        return [e for e in self._entries if e.method == method]

    def calls(self) -> List[Tuple[Any, ...]]:
        """Entries as (method, *args) tuples, in arrival order."""
        return [(e.method,) + e.args for e in self._entries]

    def methods(self) -> List[str]:
        return [e.method for e in self._entries]

    def counts(self) -> Dict[str, int]:
        result: Dict[str, int] = {}
        for entry in self._entries:
            result[entry.method] = result.get(entry.method, 0) + 1
        return result

    def clear(self) -> None:
        self._entries.clear()

    @property
    def name(self) -> str:
        return self._name

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    # Attribute sink

    def graph_attribute_added(self, graph_id, attribute, value) -> None:
        self.collect("graph_attribute_added", graph_id, attribute, value)

    def graph_attribute_changed(self, graph_id, attribute, old_value, new_value) -> None:
        self.collect("graph_attribute_changed", graph_id, attribute, old_value, new_value)

    def graph_attribute_removed(self, graph_id, attribute) -> None:
        self.collect("graph_attribute_removed", graph_id, attribute)

    def node_attribute_added(self, graph_id, node_id, attribute, value) -> None:
        self.collect("node_attribute_added", graph_id, node_id, attribute, value)

    def node_attribute_changed(self, graph_id, node_id, attribute, old_value, new_value) -> None:
        self.collect("node_attribute_changed", graph_id, node_id, attribute, old_value, new_value)

    def node_attribute_removed(self, graph_id, node_id, attribute) -> None:
        self.collect("node_attribute_removed", graph_id, node_id, attribute)

    def edge_attribute_added(self, graph_id, edge_id, attribute, value) -> None:
        self.collect("edge_attribute_added", graph_id, edge_id, attribute, value)

    def edge_attribute_changed(self, graph_id, edge_id, attribute, old_value, new_value) -> None:
        self.collect("edge_attribute_changed", graph_id, edge_id, attribute, old_value, new_value)

    def edge_attribute_removed(self, graph_id, edge_id, attribute) -> None:
        self.collect("edge_attribute_removed", graph_id, edge_id, attribute)

    # Element sink

    def node_added(self, graph_id, node_id) -> None:
        self.collect("node_added", graph_id, node_id)

    def node_removed(self, graph_id, node_id) -> None:
        self.collect("node_removed", graph_id, node_id)

    def edge_added(self, graph_id, edge_id, from_id, to_id, directed) -> None:
        self.collect("edge_added", graph_id, edge_id, from_id, to_id, directed)

    def edge_removed(self, graph_id, edge_id) -> None:
        self.collect("edge_removed", graph_id, edge_id)

    def graph_cleared(self, graph_id) -> None:
        self.collect("graph_cleared", graph_id)

    def step_begins(self, graph_id, time) -> None:
        self.collect("step_begins", graph_id, time)

    def __repr__(self) -> str:
        return f"EventCollector({self._name!r}, entries={len(self._entries)})"


__all__ = ["setup_logging", "LOGGER_NAMESPACE", "RecordedEvent", "EventCollector"]
