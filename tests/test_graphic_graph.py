"""
Graphic Graph Tests
===================

INVARIANTS TESTED:
1. Attribute mutations of the graph, its nodes and its edges reach the
   attribute sinks with the matching graph/node/edge event
2. Structural mutations reach the element sinks
3. The dirty flag is consumed exactly once
4. Unknown and duplicate ids raise structured errors
"""

import pytest

from graphview.contracts import ElementExistsError, ElementNotFoundError, ErrorCode
from graphview.observability import EventCollector

from .fixtures import GRAPH_ID, make_graph, make_line_graph, make_observed_graph


class TestAttributeEvents:

    def test_graph_attribute_lifecycle(self):
        graph, collector = make_observed_graph()

        graph.add_attribute("title", "a")
        graph.change_attribute("title", "b")
        graph.remove_attribute("title")

        assert collector.calls() == [
            ("graph_attribute_added", GRAPH_ID, "title", "a"),
            ("graph_attribute_changed", GRAPH_ID, "title", "a", "b"),
            ("graph_attribute_removed", GRAPH_ID, "title"),
        ]

    def test_node_attribute_events(self):
        graph, collector = make_observed_graph()
        node = graph.get_node("A")

        node.add_attribute("ui.class")
        node.set_attribute("ui.class", "hub")

        assert collector.calls() == [
            ("node_attribute_added", GRAPH_ID, "A", "ui.class", True),
            ("node_attribute_changed", GRAPH_ID, "A", "ui.class", True, "hub"),
        ]

    def test_edge_attribute_events(self):
        graph, collector = make_observed_graph()
        edge = graph.get_edge("ab")

        edge.change_attribute("weight", 2)
        edge.remove_attribute("weight")
        edge.remove_attribute("weight")

        assert collector.calls() == [
            ("edge_attribute_added", GRAPH_ID, "ab", "weight", 2),
            ("edge_attribute_removed", GRAPH_ID, "ab", "weight"),
        ]

    def test_add_existing_key_is_change(self):
        graph, collector = make_observed_graph()
        graph.add_attribute("title", "a")
        graph.add_attribute("title", "b")

        assert collector.methods() == ["graph_attribute_added", "graph_attribute_changed"]

    def test_clear_attributes_one_event_per_key(self):
        graph, collector = make_observed_graph()
        node = graph.get_node("B")
        node.add_attribute("a", 1)
        node.add_attribute("b", 2)
        collector.clear()

        node.clear_attributes()

        assert node.attribute_count == 0
        assert collector.counts() == {"node_attribute_removed": 2}

    def test_attribute_writes_do_not_mark_dirty(self):
        graph = make_line_graph()
        graph.add_attribute("title", "x")
        assert not graph.is_dirty


class TestStructure:

    def test_add_node_and_edge_events(self):
        graph = make_graph()
        collector = EventCollector()
        graph.add_sink(collector)

        graph.add_node("A")
        graph.add_node("B")
        graph.add_edge("ab", "A", "B", directed=True)

        assert collector.calls() == [
            ("node_added", GRAPH_ID, "A"),
            ("node_added", GRAPH_ID, "B"),
            ("edge_added", GRAPH_ID, "ab", "A", "B", True),
        ]

    def test_node_iteration_follows_insertion(self):
        graph = make_graph()
        for node_id in ("c", "a", "b"):
            graph.add_node(node_id)

        assert [n.id for n in graph.node_iterator()] == ["c", "a", "b"]
        assert graph.node_count() == 3

    def test_parallel_edges_kept_apart(self):
        graph = make_line_graph()
        graph.add_edge("ab2", "A", "B")

        assert graph.edge_count() == 2
        graph.remove_edge("ab")
        assert graph.has_edge("ab2")
        assert not graph.has_edge("ab")

    def test_remove_node_removes_incident_edges(self):
        graph, collector = make_observed_graph()

        graph.remove_node("B")

        assert not graph.has_edge("ab")
        assert collector.calls() == [
            ("edge_removed", GRAPH_ID, "ab"),
            ("node_removed", GRAPH_ID, "B"),
        ]

    def test_edge_endpoints(self):
        graph = make_line_graph()
        edge = graph.get_edge("ab")
        a, b = graph.get_node("A"), graph.get_node("B")

        assert edge.opposite(a) is b
        assert edge.opposite(b) is a
        with pytest.raises(ValueError):
            edge.opposite(graph.add_node("C"))

    def test_unknown_ids(self):
        graph = make_line_graph()
        with pytest.raises(ElementNotFoundError) as info:
            graph.get_node("Z")
        assert info.value.error.code is ErrorCode.ELEMENT_NOT_FOUND
        assert str(info.value) == "node 'Z' not found"

        with pytest.raises(ElementNotFoundError):
            graph.add_edge("az", "A", "Z")
        with pytest.raises(KeyError):
            graph.get_edge("zz")

    def test_duplicate_ids(self):
        graph = make_line_graph()
        with pytest.raises(ElementExistsError) as info:
            graph.add_node("A")
        assert info.value.error.code is ErrorCode.ELEMENT_EXISTS
        assert ("node_id", "A") in info.value.error.context

        with pytest.raises(ElementExistsError):
            graph.add_edge("ab", "B", "A")

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError):
            make_graph().add_node("")


class TestDirtyFlag:

    def test_consumed_once(self):
        graph = make_graph()
        graph.add_node("A")

        assert graph.consume_dirty() is True
        assert graph.consume_dirty() is False

    def test_node_move_marks_dirty(self):
        graph = make_line_graph()
        graph.get_node("A").move(0, 0, 0)
        assert graph.is_dirty


class TestWholeGraph:

    def test_clear_sends_single_event(self):
        graph, collector = make_observed_graph()
        graph.add_attribute("title", "x")
        graph.add_sprite("s1")
        collector.clear()

        graph.clear()

        assert collector.calls() == [("graph_cleared", GRAPH_ID)]
        assert graph.node_count() == 0
        assert graph.edge_count() == 0
        assert graph.sprite_count() == 0
        assert graph.attribute_count == 0
        assert graph.consume_dirty()

    def test_step_begins(self):
        graph, collector = make_observed_graph()
        graph.step_begins(3.0)

        assert graph.step == 3.0
        assert collector.calls() == [("step_begins", GRAPH_ID, 3.0)]

    def test_graph_is_its_own_graph(self):
        graph = make_graph()
        assert graph.graph is graph
        assert graph.selector_type == "graph"
        assert "nodes=0" in repr(graph)
