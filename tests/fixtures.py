"""
Test Fixtures

Explicit graph builders and recording sinks shared by the test modules.
All fixtures are deterministic - no random generation outside hypothesis.
"""

from __future__ import annotations
import math
from typing import Any, List, Tuple

from graphview.graphic import GraphicGraph, GraphicSprite
from graphview.observability import EventCollector


# =============================================================================
# CONSTANTS
# =============================================================================

GRAPH_ID = "g"
TWO_PI = 2.0 * math.pi


# =============================================================================
# GRAPH BUILDERS
# =============================================================================

def make_graph(graph_id: str = GRAPH_ID) -> GraphicGraph:
    """Empty graph."""
    return GraphicGraph(graph_id)


def make_line_graph() -> GraphicGraph:
    """
    A --ab-- B

    A at (2, 3, 0), B at (5, 1, 0). Dirty flag consumed.
    """
    graph = GraphicGraph(GRAPH_ID)
    a = graph.add_node("A")
    a.move(2, 3, 0)
    b = graph.add_node("B")
    b.move(5, 1, 0)
    graph.add_edge("ab", "A", "B")
    graph.consume_dirty()
    return graph


def make_observed_graph() -> Tuple[GraphicGraph, EventCollector]:
    """Line graph with a collector registered after construction."""
    graph = make_line_graph()
    collector = EventCollector("observer")
    graph.add_sink(collector)
    return graph, collector


def make_sprite_on_node() -> Tuple[GraphicGraph, GraphicSprite, EventCollector]:
    """Sprite s1 attached to node A; collector registered afterwards."""
    graph = make_line_graph()
    sprite = graph.add_sprite("s1")
    sprite.attach_to_node(graph.get_node("A"))
    graph.consume_dirty()
    collector = EventCollector("observer")
    graph.add_sink(collector)
    return graph, sprite, collector


def make_sprite_on_edge() -> Tuple[GraphicGraph, GraphicSprite, EventCollector]:
    """Sprite s1 attached to edge ab; collector registered afterwards."""
    graph = make_line_graph()
    sprite = graph.add_sprite("s1")
    sprite.attach_to_edge(graph.get_edge("ab"))
    graph.consume_dirty()
    collector = EventCollector("observer")
    graph.add_sink(collector)
    return graph, sprite, collector


# =============================================================================
# PREDICATES
# =============================================================================

class RecordingPredicate:
    """Predicate with a fixed verdict that remembers every question."""

    def __init__(self, verdict: bool):
        self.verdict = verdict
        self.calls: List[Tuple[str, Any]] = []

    def matches(self, attribute: str, value: Any) -> bool:
        self.calls.append((attribute, value))
        return self.verdict


class ExplodingPredicate:
    """Predicate that always fails."""

    def matches(self, attribute: str, value: Any) -> bool:
        raise RuntimeError(f"cannot evaluate {attribute}")
