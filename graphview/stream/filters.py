"""
Stream Filters
==============

Pass-through stages placed between a source and its downstream sinks.

IdentityFilter
--------------
Forwards every event unchanged. Base class for concrete filters.

AttributesFilter
----------------
Veto stage over attribute events. Four independently settable predicate
slots: global, graph, node, edge.

For each attribute event:
1. The kind-specific predicate (graph/node/edge) is asked first.
   A match suppresses the event; the global predicate is NOT evaluated.
2. Otherwise the global predicate is asked. A match suppresses the event.
3. Otherwise the event is forwarded with identical arguments.

The value tested is the new value for added/changed events and None for
removed events. An unset slot never matches. Element events are never
filtered.
"""

from __future__ import annotations
import logging
from typing import Any, Optional

from ..contracts.base import ElementKind
from ..contracts.predicates import (
    AttributePredicate, PredicateLike, NEVER_MATCHES, as_predicate
)
from .source import SourceBase

logger = logging.getLogger(__name__)


class IdentityFilter(SourceBase):
    """A sink that re-emits everything it receives to its own sinks."""

    # Attribute events

    def graph_attribute_added(self, graph_id: str, attribute: str, value: Any) -> None:
        self.send_graph_attribute_added(graph_id, attribute, value)

    def graph_attribute_changed(
        self, graph_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        self.send_graph_attribute_changed(graph_id, attribute, old_value, new_value)

    def graph_attribute_removed(self, graph_id: str, attribute: str) -> None:
        self.send_graph_attribute_removed(graph_id, attribute)

    def node_attribute_added(
        self, graph_id: str, node_id: str, attribute: str, value: Any
    ) -> None:
        self.send_node_attribute_added(graph_id, node_id, attribute, value)

    def node_attribute_changed(
        self, graph_id: str, node_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        self.send_node_attribute_changed(graph_id, node_id, attribute, old_value, new_value)

    def node_attribute_removed(self, graph_id: str, node_id: str, attribute: str) -> None:
        self.send_node_attribute_removed(graph_id, node_id, attribute)

    def edge_attribute_added(
        self, graph_id: str, edge_id: str, attribute: str, value: Any
    ) -> None:
        self.send_edge_attribute_added(graph_id, edge_id, attribute, value)

    def edge_attribute_changed(
        self, graph_id: str, edge_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        self.send_edge_attribute_changed(graph_id, edge_id, attribute, old_value, new_value)

    def edge_attribute_removed(self, graph_id: str, edge_id: str, attribute: str) -> None:
        self.send_edge_attribute_removed(graph_id, edge_id, attribute)

    # Element events

    def node_added(self, graph_id: str, node_id: str) -> None:
        self.send_node_added(graph_id, node_id)

    def node_removed(self, graph_id: str, node_id: str) -> None:
        self.send_node_removed(graph_id, node_id)

    def edge_added(
        self, graph_id: str, edge_id: str, from_id: str, to_id: str, directed: bool
    ) -> None:
        self.send_edge_added(graph_id, edge_id, from_id, to_id, directed)

    def edge_removed(self, graph_id: str, edge_id: str) -> None:
        self.send_edge_removed(graph_id, edge_id)

    def graph_cleared(self, graph_id: str) -> None:
        self.send_graph_cleared(graph_id)

    def step_begins(self, graph_id: str, time: float) -> None:
        self.send_step_begins(graph_id, time)


class AttributesFilter(IdentityFilter):
    """
    Filter the attribute event stream with predicates.

    Filtering is a veto system: any matching predicate stops propagation,
    no predicate means no veto. Slots accept predicate objects, plain
    callables `(attribute, value) -> bool`, or None to disable the stage.
    """

    def __init__(
        self,
        global_filter: Optional[PredicateLike] = None,
        graph_filter: Optional[PredicateLike] = None,
        node_filter: Optional[PredicateLike] = None,
        edge_filter: Optional[PredicateLike] = None,
    ):
        super().__init__()
        self._global_predicate: Optional[AttributePredicate] = as_predicate(global_filter)
        self._graph_predicate: Optional[AttributePredicate] = as_predicate(graph_filter)
        self._node_predicate: Optional[AttributePredicate] = as_predicate(node_filter)
        self._edge_predicate: Optional[AttributePredicate] = as_predicate(edge_filter)

    # -------------------------------------------------------------------------
    # Predicate slots
    # -------------------------------------------------------------------------

    def set_global_attribute_filter(self, predicate: Optional[PredicateLike]) -> None:
        """Predicate for graph, node and edge attributes. None disables it."""
        self._global_predicate = as_predicate(predicate)

    def set_graph_attribute_filter(self, predicate: Optional[PredicateLike]) -> None:
        """Predicate for graph attributes only. None disables it."""
        self._graph_predicate = as_predicate(predicate)

    def set_node_attribute_filter(self, predicate: Optional[PredicateLike]) -> None:
        """Predicate for node attributes only. None disables it."""
        self._node_predicate = as_predicate(predicate)

    def set_edge_attribute_filter(self, predicate: Optional[PredicateLike]) -> None:
        """Predicate for edge attributes only. None disables it."""
        self._edge_predicate = as_predicate(predicate)

    @property
    def global_attribute_filter(self) -> Optional[AttributePredicate]:
        return self._global_predicate

    @property
    def graph_attribute_filter(self) -> Optional[AttributePredicate]:
        return self._graph_predicate

    @property
    def node_attribute_filter(self) -> Optional[AttributePredicate]:
        return self._node_predicate

    @property
    def edge_attribute_filter(self) -> Optional[AttributePredicate]:
        return self._edge_predicate

    def _specific(self, kind: ElementKind) -> AttributePredicate:
        if kind is ElementKind.GRAPH:
            predicate = self._graph_predicate
        elif kind is ElementKind.NODE:
            predicate = self._node_predicate
        else:
            predicate = self._edge_predicate
        return NEVER_MATCHES if predicate is None else predicate

    def is_suppressed(self, kind: ElementKind, attribute: str, value: Any) -> bool:
        """
        True when the event must not be forwarded.

        Specific predicate first; the global predicate is only consulted
        when the specific one lets the event through.
        """
        if self._specific(kind).matches(attribute, value):
            logger.debug("%s attribute %r vetoed by %s predicate", kind.value, attribute, kind.value)
            return True
        global_predicate = self._global_predicate
        if global_predicate is None:
            global_predicate = NEVER_MATCHES
        if global_predicate.matches(attribute, value):
            logger.debug("%s attribute %r vetoed by global predicate", kind.value, attribute)
            return True
        return False

    # -------------------------------------------------------------------------
    # Attribute events
    # -------------------------------------------------------------------------

    def graph_attribute_added(self, graph_id: str, attribute: str, value: Any) -> None:
        if not self.is_suppressed(ElementKind.GRAPH, attribute, value):
            self.send_graph_attribute_added(graph_id, attribute, value)

    def graph_attribute_changed(
        self, graph_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        if not self.is_suppressed(ElementKind.GRAPH, attribute, new_value):
            self.send_graph_attribute_changed(graph_id, attribute, old_value, new_value)

    def graph_attribute_removed(self, graph_id: str, attribute: str) -> None:
        if not self.is_suppressed(ElementKind.GRAPH, attribute, None):
            self.send_graph_attribute_removed(graph_id, attribute)

    def node_attribute_added(
        self, graph_id: str, node_id: str, attribute: str, value: Any
    ) -> None:
        if not self.is_suppressed(ElementKind.NODE, attribute, value):
            self.send_node_attribute_added(graph_id, node_id, attribute, value)

    def node_attribute_changed(
        self, graph_id: str, node_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        if not self.is_suppressed(ElementKind.NODE, attribute, new_value):
            self.send_node_attribute_changed(graph_id, node_id, attribute, old_value, new_value)

    def node_attribute_removed(self, graph_id: str, node_id: str, attribute: str) -> None:
        if not self.is_suppressed(ElementKind.NODE, attribute, None):
            self.send_node_attribute_removed(graph_id, node_id, attribute)

    def edge_attribute_added(
        self, graph_id: str, edge_id: str, attribute: str, value: Any
    ) -> None:
        if not self.is_suppressed(ElementKind.EDGE, attribute, value):
            self.send_edge_attribute_added(graph_id, edge_id, attribute, value)

    def edge_attribute_changed(
        self, graph_id: str, edge_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        if not self.is_suppressed(ElementKind.EDGE, attribute, new_value):
            self.send_edge_attribute_changed(graph_id, edge_id, attribute, old_value, new_value)

    def edge_attribute_removed(self, graph_id: str, edge_id: str, attribute: str) -> None:
        if not self.is_suppressed(ElementKind.EDGE, attribute, None):
            self.send_edge_attribute_removed(graph_id, edge_id, attribute)
