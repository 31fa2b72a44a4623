"""
Graphic Elements
================

Attribute-carrying entities of a graphic graph: the base element, nodes
and edges.

ATTRIBUTE STORE CONTRACT:
=========================
- add_attribute(key, value=True): stores the value; an existing key is changed
- change_attribute(key, value): changes the value; a missing key is added
- remove_attribute(key): removes the key; a missing key is a no-op
- Every effective mutation calls attribute_changed() exactly once

Nodes and edges fan their attribute mutations out to the attribute sinks
of the owning graph.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..contracts.base import AttributeChangeEvent

if TYPE_CHECKING:
    from .graph import GraphicGraph


class GraphicElement:
    """
    Base of every graphic element.

    Owns its attribute map. Subclasses react to mutations by overriding
    attribute_changed().
    """

    def __init__(self, element_id: str, graph: Optional[GraphicGraph]):
        if not element_id or not isinstance(element_id, str):
            raise ValueError("element id must be a non-empty string")
        self._id = element_id
        self._graph = graph
        self._attributes: Dict[str, Any] = {}

    @property
    def id(self) -> str:
        return self._id

    @property
    def graph(self) -> GraphicGraph:
        return self._graph

    @property
    def selector_type(self) -> str:
        return "element"

    # -------------------------------------------------------------------------
    # Attribute access
    # -------------------------------------------------------------------------

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def has_attribute(self, key: str) -> bool:
        return key in self._attributes

    def attribute_keys(self) -> List[str]:
        return list(self._attributes)

    @property
    def attribute_count(self) -> int:
        return len(self._attributes)

    # -------------------------------------------------------------------------
    # Attribute mutation
    # -------------------------------------------------------------------------

    def add_attribute(self, key: str, value: Any = True) -> None:
        """Add an attribute. Without a value the attribute is a presence flag."""
        if key in self._attributes:
            self.change_attribute(key, value)
            return
        self._attributes[key] = value
        self.attribute_changed(key, AttributeChangeEvent.ADD, None, value)

    def change_attribute(self, key: str, value: Any) -> None:
        if key not in self._attributes:
            self.add_attribute(key, value)
            return
        old_value = self._attributes[key]
        self._attributes[key] = value
        self.attribute_changed(key, AttributeChangeEvent.CHANGE, old_value, value)

    def set_attribute(self, key: str, value: Any) -> None:
        """Alias of change_attribute()."""
        self.change_attribute(key, value)

    def remove_attribute(self, key: str) -> None:
        if key not in self._attributes:
            return
        old_value = self._attributes.pop(key)
        self.attribute_changed(key, AttributeChangeEvent.REMOVE, old_value, None)

    def clear_attributes(self) -> None:
        """Remove every attribute, one notification per key."""
        for key in list(self._attributes):
            self.remove_attribute(key)

    def attribute_changed(
        self,
        attribute: str,
        event: AttributeChangeEvent,
        old_value: Any,
        new_value: Any
    ) -> None:
        """Hook called after every attribute mutation."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._id!r})"


class GraphicNode(GraphicElement):
    """A node with a position in graph units."""

    def __init__(self, node_id: str, graph: GraphicGraph):
        super().__init__(node_id, graph)
        self.x = 0.0
        self.y = 0.0
        self.z = 0.0

    @property
    def selector_type(self) -> str:
        return "node"

    def move(self, x: float, y: float, z: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self._graph.mark_dirty()

    def attribute_changed(self, attribute, event, old_value, new_value) -> None:
        graph = self._graph
        if event is AttributeChangeEvent.ADD:
            graph.send_node_attribute_added(graph.id, self._id, attribute, new_value)
        elif event is AttributeChangeEvent.CHANGE:
            graph.send_node_attribute_changed(graph.id, self._id, attribute, old_value, new_value)
        else:
            graph.send_node_attribute_removed(graph.id, self._id, attribute)


class GraphicEdge(GraphicElement):
    """An edge between two graphic nodes."""

    def __init__(
        self,
        edge_id: str,
        graph: GraphicGraph,
        from_node: GraphicNode,
        to_node: GraphicNode,
        directed: bool = False
    ):
        super().__init__(edge_id, graph)
        self.from_node = from_node
        self.to_node = to_node
        self.directed = directed

    @property
    def selector_type(self) -> str:
        return "edge"

    def opposite(self, node: GraphicNode) -> GraphicNode:
        """The endpoint that is not `node`."""
        if node is self.from_node:
            return self.to_node
        if node is self.to_node:
            return self.from_node
        raise ValueError(f"{node!r} is not an endpoint of {self!r}")

    def attribute_changed(self, attribute, event, old_value, new_value) -> None:
        graph = self._graph
        if event is AttributeChangeEvent.ADD:
            graph.send_edge_attribute_added(graph.id, self._id, attribute, new_value)
        elif event is AttributeChangeEvent.CHANGE:
            graph.send_edge_attribute_changed(graph.id, self._id, attribute, old_value, new_value)
        else:
            graph.send_edge_attribute_removed(graph.id, self._id, attribute)
