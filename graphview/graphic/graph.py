"""
Graphic Graph
=============

The graph a viewer draws from: nodes, edges, sprites, graph attributes,
attribute/element sink registries and the redraw ("dirty") flag.

Structure is held in a networkx MultiGraph; each networkx node and edge
carries its graphic element under the "element" key. Node enumeration
follows insertion order.

SINGLE-WRITER CONTRACT:
=======================
The dirty flag is owned by the graph and mutated by every element of the
graph (node moves, sprite changes). One logical thread drives all mutation
and sink dispatch; concurrent use requires external synchronization.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterator, Optional

import networkx as nx

from ..config import ViewConfig, DEFAULT_CONFIG
from ..contracts.base import (
    AttributeChangeEvent, ElementExistsError, ElementNotFoundError
)
from ..stream.source import SourceBase
from .element import GraphicElement, GraphicNode, GraphicEdge
from .sprite import GraphicSprite

logger = logging.getLogger(__name__)


class GraphicGraph(SourceBase, GraphicElement):
    """
    Graph of graphic elements.

    Its own attribute mutations are sent as graph attribute events, those
    of its nodes and edges as node/edge attribute events, all to the same
    attribute sinks.
    """

    def __init__(self, graph_id: str, config: Optional[ViewConfig] = None):
        SourceBase.__init__(self)
        GraphicElement.__init__(self, graph_id, None)
        self._graph = self
        self._config = config or DEFAULT_CONFIG
        self._structure = nx.MultiGraph()
        self._edge_index: Dict[str, GraphicEdge] = {}
        self._sprites: Dict[str, GraphicSprite] = {}
        self._dirty = False
        self.step = 0.0

    @property
    def config(self) -> ViewConfig:
        return self._config

    @property
    def selector_type(self) -> str:
        return "graph"

    # -------------------------------------------------------------------------
    # Dirty flag
    # -------------------------------------------------------------------------

    def mark_dirty(self) -> None:
        """Signal the renderer that a redraw is needed."""
        self._dirty = True

    def consume_dirty(self) -> bool:
        """Return the dirty flag and reset it."""
        dirty = self._dirty
        self._dirty = False
        return dirty

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    # -------------------------------------------------------------------------
    # Graph attributes
    # -------------------------------------------------------------------------

    def attribute_changed(self, attribute, event, old_value, new_value) -> None:
        if event is AttributeChangeEvent.ADD:
            self.send_graph_attribute_added(self._id, attribute, new_value)
        elif event is AttributeChangeEvent.CHANGE:
            self.send_graph_attribute_changed(self._id, attribute, old_value, new_value)
        else:
            self.send_graph_attribute_removed(self._id, attribute)

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------

    def add_node(self, node_id: str) -> GraphicNode:
        if self._structure.has_node(node_id):
            raise ElementExistsError(f"node {node_id!r} already exists", node_id=node_id)
        node = GraphicNode(node_id, self)
        self._structure.add_node(node_id, element=node)
        self.mark_dirty()
        self.send_node_added(self._id, node_id)
        return node

    def get_node(self, node_id: str) -> GraphicNode:
        if not self._structure.has_node(node_id):
            raise ElementNotFoundError(f"node {node_id!r} not found", node_id=node_id)
        return self._structure.nodes[node_id]["element"]

    def has_node(self, node_id: str) -> bool:
        return self._structure.has_node(node_id)

    def node_count(self) -> int:
        return self._structure.number_of_nodes()

    def node_iterator(self) -> Iterator[GraphicNode]:
        """Nodes in insertion order."""
        return (data["element"] for _, data in self._structure.nodes(data=True))

    def remove_node(self, node_id: str) -> GraphicNode:
        """Remove a node, its incident edges first, and detach its sprites."""
        node = self.get_node(node_id)
        incident = list(dict.fromkeys(
            key for _, _, key in self._structure.edges(node_id, keys=True)
        ))
        for edge_id in incident:
            self.remove_edge(edge_id)
        self._detach_sprites_from(node)
        self._structure.remove_node(node_id)
        self.mark_dirty()
        self.send_node_removed(self._id, node_id)
        return node

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def add_edge(
        self,
        edge_id: str,
        from_id: str,
        to_id: str,
        directed: bool = False
    ) -> GraphicEdge:
        if edge_id in self._edge_index:
            raise ElementExistsError(f"edge {edge_id!r} already exists", edge_id=edge_id)
        from_node = self.get_node(from_id)
        to_node = self.get_node(to_id)
        edge = GraphicEdge(edge_id, self, from_node, to_node, directed)
        self._structure.add_edge(from_id, to_id, key=edge_id, element=edge)
        self._edge_index[edge_id] = edge
        self.mark_dirty()
        self.send_edge_added(self._id, edge_id, from_id, to_id, directed)
        return edge

    def get_edge(self, edge_id: str) -> GraphicEdge:
        edge = self._edge_index.get(edge_id)
        if edge is None:
            raise ElementNotFoundError(f"edge {edge_id!r} not found", edge_id=edge_id)
        return edge

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edge_index

    def edge_count(self) -> int:
        return self._structure.number_of_edges()

    def edge_iterator(self) -> Iterator[GraphicEdge]:
        return iter(list(self._edge_index.values()))

    def remove_edge(self, edge_id: str) -> GraphicEdge:
        edge = self.get_edge(edge_id)
        self._detach_sprites_from(edge)
        self._structure.remove_edge(edge.from_node.id, edge.to_node.id, key=edge_id)
        del self._edge_index[edge_id]
        self.mark_dirty()
        self.send_edge_removed(self._id, edge_id)
        return edge

    # -------------------------------------------------------------------------
    # Sprites
    # -------------------------------------------------------------------------

    def add_sprite(self, sprite_id: str) -> GraphicSprite:
        if sprite_id in self._sprites:
            raise ElementExistsError(f"sprite {sprite_id!r} already exists", sprite_id=sprite_id)
        sprite = GraphicSprite(sprite_id, self)
        self._sprites[sprite_id] = sprite
        self.mark_dirty()
        logger.info("sprite %r added to graph %r", sprite_id, self._id)
        return sprite

    def get_sprite(self, sprite_id: str) -> GraphicSprite:
        sprite = self._sprites.get(sprite_id)
        if sprite is None:
            raise ElementNotFoundError(f"sprite {sprite_id!r} not found", sprite_id=sprite_id)
        return sprite

    def has_sprite(self, sprite_id: str) -> bool:
        return sprite_id in self._sprites

    def sprite_count(self) -> int:
        return len(self._sprites)

    def sprite_iterator(self) -> Iterator[GraphicSprite]:
        return iter(list(self._sprites.values()))

    def remove_sprite(self, sprite_id: str) -> GraphicSprite:
        """
        Destroy a sprite: detach it from its host, remove its graph mirror
        attribute, then notify the sprite.
        """
        sprite = self.get_sprite(sprite_id)
        sprite.detach()
        self.remove_attribute(self._config.sprite_key(sprite_id))
        del self._sprites[sprite_id]
        sprite.removed()
        self.mark_dirty()
        logger.info("sprite %r removed from graph %r", sprite_id, self._id)
        return sprite

    def _detach_sprites_from(self, host: GraphicElement) -> None:
        for sprite in list(self._sprites.values()):
            if sprite.attachment.element is host:
                sprite.detach()

    # -------------------------------------------------------------------------
    # Whole-graph events
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """
        Drop every sprite, edge, node and graph attribute.

        Sinks receive a single graph_cleared notification instead of one
        notification per element.
        """
        for sprite in list(self._sprites.values()):
            sprite.removed()
        self._sprites.clear()
        self._edge_index.clear()
        self._structure.clear()
        self._attributes.clear()
        self.step = 0.0
        self.mark_dirty()
        self.send_graph_cleared(self._id)

    def step_begins(self, time: float) -> None:
        self.step = time
        self.send_step_begins(self._id, time)

    def __repr__(self) -> str:
        return (
            f"GraphicGraph({self._id!r}, nodes={self.node_count()}, "
            f"edges={self.edge_count()}, sprites={self.sprite_count()})"
        )
