"""
Sink Contracts
==============

Observer capability sets consumed and produced by every stage of the
event stream (graphs, filters, collectors, renderers).

An ATTRIBUTE SINK receives nine notifications:
{graph, node, edge} x {added, changed, removed}

An ELEMENT SINK receives structural notifications (nodes, edges, clears,
steps). A full SINK is both.

Arguments are positional and forwarded verbatim by pass-through stages.
"""

from __future__ import annotations
from typing import Any, Protocol, runtime_checkable


# =============================================================================
# PROTOCOLS (Interface contracts)
# =============================================================================

@runtime_checkable
class AttributeSink(Protocol):
    """Receiver of attribute add/change/remove notifications."""

    def graph_attribute_added(self, graph_id: str, attribute: str, value: Any) -> None:
        ...

    def graph_attribute_changed(
        self, graph_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        ...

    def graph_attribute_removed(self, graph_id: str, attribute: str) -> None:
        ...

    def node_attribute_added(
        self, graph_id: str, node_id: str, attribute: str, value: Any
    ) -> None:
        ...

    def node_attribute_changed(
        self, graph_id: str, node_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        ...

    def node_attribute_removed(self, graph_id: str, node_id: str, attribute: str) -> None:
        ...

    def edge_attribute_added(
        self, graph_id: str, edge_id: str, attribute: str, value: Any
    ) -> None:
        ...

    def edge_attribute_changed(
        self, graph_id: str, edge_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        ...

    def edge_attribute_removed(self, graph_id: str, edge_id: str, attribute: str) -> None:
        ...


@runtime_checkable
class ElementSink(Protocol):
    """Receiver of structural notifications."""

    def node_added(self, graph_id: str, node_id: str) -> None:
        ...

    def node_removed(self, graph_id: str, node_id: str) -> None:
        ...

    def edge_added(
        self, graph_id: str, edge_id: str, from_id: str, to_id: str, directed: bool
    ) -> None:
        ...

    def edge_removed(self, graph_id: str, edge_id: str) -> None:
        ...

    def graph_cleared(self, graph_id: str) -> None:
        ...

    def step_begins(self, graph_id: str, time: float) -> None:
        ...


@runtime_checkable
class Sink(AttributeSink, ElementSink, Protocol):
    """Receiver of every stream notification."""
