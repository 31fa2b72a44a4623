"""
Event Source Base
=================

Sink registries and synchronous fan-out shared by every producer of
stream events (graphic graphs, filters).

FAN-OUT GUARANTEES:
===================
1. The sink list is SNAPSHOTTED when a fan-out starts:
   a sink registered during dispatch does not see the triggering event.
2. Membership is re-checked before each delivery:
   a sink removed during dispatch receives nothing further.
3. Delivery is synchronous and in registration order.
4. A sink raising an error aborts the fan-out; the error propagates.
"""

from __future__ import annotations
from typing import Any, List

from ..contracts.sinks import AttributeSink, ElementSink


class SourceBase:
    """
    Producer side of the stream.

    Keeps two independent registries (attribute sinks and element sinks)
    and provides one `send_*` method per notification.
    """

    def __init__(self):
        self._attr_sinks: List[AttributeSink] = []
        self._element_sinks: List[ElementSink] = []

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    def add_sink(self, sink: Any) -> None:
        """Register a sink for both attribute and element events."""
        self.add_attribute_sink(sink)
        self.add_element_sink(sink)

    def remove_sink(self, sink: Any) -> None:
        self.remove_attribute_sink(sink)
        self.remove_element_sink(sink)

    def add_attribute_sink(self, sink: AttributeSink) -> None:
        if sink not in self._attr_sinks:
            self._attr_sinks.append(sink)

    def remove_attribute_sink(self, sink: AttributeSink) -> None:
        if sink in self._attr_sinks:
            self._attr_sinks.remove(sink)

    def add_element_sink(self, sink: ElementSink) -> None:
        if sink not in self._element_sinks:
            self._element_sinks.append(sink)

    def remove_element_sink(self, sink: ElementSink) -> None:
        if sink in self._element_sinks:
            self._element_sinks.remove(sink)

    def clear_sinks(self) -> None:
        self._attr_sinks.clear()
        self._element_sinks.clear()

    @property
    def attribute_sinks(self) -> List[AttributeSink]:
        """Registered attribute sinks (copy)."""
        return list(self._attr_sinks)

    @property
    def element_sinks(self) -> List[ElementSink]:
        """Registered element sinks (copy)."""
        return list(self._element_sinks)

    # -------------------------------------------------------------------------
    # Fan-out
    # -------------------------------------------------------------------------

    def _dispatch_attribute(self, method: str, *args: Any) -> None:
        for sink in list(self._attr_sinks):
            if sink in self._attr_sinks:
                getattr(sink, method)(*args)

    def _dispatch_element(self, method: str, *args: Any) -> None:
        for sink in list(self._element_sinks):
            if sink in self._element_sinks:
                getattr(sink, method)(*args)

    # Attribute events

    def send_graph_attribute_added(self, graph_id: str, attribute: str, value: Any) -> None:
        self._dispatch_attribute("graph_attribute_added", graph_id, attribute, value)

    def send_graph_attribute_changed(
        self, graph_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        self._dispatch_attribute(
            "graph_attribute_changed", graph_id, attribute, old_value, new_value
        )

    def send_graph_attribute_removed(self, graph_id: str, attribute: str) -> None:
        self._dispatch_attribute("graph_attribute_removed", graph_id, attribute)

    def send_node_attribute_added(
        self, graph_id: str, node_id: str, attribute: str, value: Any
    ) -> None:
        self._dispatch_attribute("node_attribute_added", graph_id, node_id, attribute, value)

    def send_node_attribute_changed(
        self, graph_id: str, node_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        self._dispatch_attribute(
            "node_attribute_changed", graph_id, node_id, attribute, old_value, new_value
        )

    def send_node_attribute_removed(self, graph_id: str, node_id: str, attribute: str) -> None:
        self._dispatch_attribute("node_attribute_removed", graph_id, node_id, attribute)

    def send_edge_attribute_added(
        self, graph_id: str, edge_id: str, attribute: str, value: Any
    ) -> None:
        self._dispatch_attribute("edge_attribute_added", graph_id, edge_id, attribute, value)

    def send_edge_attribute_changed(
        self, graph_id: str, edge_id: str, attribute: str, old_value: Any, new_value: Any
    ) -> None:
        self._dispatch_attribute(
            "edge_attribute_changed", graph_id, edge_id, attribute, old_value, new_value
        )

    def send_edge_attribute_removed(self, graph_id: str, edge_id: str, attribute: str) -> None:
        self._dispatch_attribute("edge_attribute_removed", graph_id, edge_id, attribute)

    # Element events

    def send_node_added(self, graph_id: str, node_id: str) -> None:
        self._dispatch_element("node_added", graph_id, node_id)

    def send_node_removed(self, graph_id: str, node_id: str) -> None:
        self._dispatch_element("node_removed", graph_id, node_id)

    def send_edge_added(
        self, graph_id: str, edge_id: str, from_id: str, to_id: str, directed: bool
    ) -> None:
        self._dispatch_element("edge_added", graph_id, edge_id, from_id, to_id, directed)

    def send_edge_removed(self, graph_id: str, edge_id: str) -> None:
        self._dispatch_element("edge_removed", graph_id, edge_id)

    def send_graph_cleared(self, graph_id: str) -> None:
        self._dispatch_element("graph_cleared", graph_id)

    def send_step_begins(self, graph_id: str, time: float) -> None:
        self._dispatch_element("step_begins", graph_id, time)
