# -*- coding: utf-8 -*-
"""
Tests for bpgraph Core

Tests cover:
- Pin types and compatibility
- Node pin management
- Graph mutations and their invariants
- JSON serialization
"""
import itertools
import json

import pytest
from pydantic import ValidationError

from src.bpgraph.core.pins import Pin, PinDirection, PinType, are_pins_compatible
from src.bpgraph.core.node import Node
from src.bpgraph.core.connection import Connection
from src.bpgraph.core.graph import Graph


def assert_flags_consistent(graph: Graph):
    """is_connected must equal 'some live connection references the pin'."""
    for node in graph.get_all_nodes():
        for pin in node.pins:
            referenced = any(c.references_pin(pin.pin_id) for c in graph.get_all_connections())
            assert pin.is_connected == referenced, f"{node.title}.{pin.name}"


# =============================================================================
# Test Pins
# =============================================================================

class TestPinTypes:
    """Tests for pin types."""

    def test_pin_type_properties(self):
        """PinType should expose display name, UI type and color."""
        assert PinType.INTEGER.display_name == "Integer"
        assert PinType.INTEGER.ui_type == "number"
        assert PinType.EXEC.color == "#ff4444"

    def test_from_ui_type(self):
        assert PinType.from_ui_type("exec") == PinType.EXEC
        assert PinType.from_ui_type("number") == PinType.INTEGER
        assert PinType.from_ui_type("unknown") == PinType.WILDCARD

    def test_pin_creation(self):
        """Pin should get a unique ID and start disconnected."""
        pin = Pin("then", PinType.EXEC, PinDirection.OUTPUT)
        other = Pin("then", PinType.EXEC, PinDirection.OUTPUT)
        assert pin.pin_id != other.pin_id
        assert not pin.is_connected
        assert not pin.is_input
        assert pin.state_indicator() == "○"

    @pytest.mark.parametrize(
        "a, b",
        list(itertools.product(list(PinType), repeat=2))
    )
    def test_compatibility_rule(self, a, b):
        """Compatible iff equal types or either side is Wildcard."""
        out_pin = Pin("o", a, PinDirection.OUTPUT)
        in_pin = Pin("i", b, PinDirection.INPUT)
        expected = a == b or PinType.WILDCARD in (a, b)
        assert are_pins_compatible(out_pin, in_pin) == expected
        assert out_pin.can_connect_to(in_pin) == expected


# =============================================================================
# Test Node
# =============================================================================

class TestNode:
    """Tests for Node pin management."""

    def test_node_defaults(self):
        node = Node("Print")
        assert node.category == "Default"
        assert node.position == (0.0, 0.0)
        assert (node.width, node.height) == (200.0, 100.0)
        assert node.inputs == [] and node.outputs == []

    def test_node_creation_with_custom_id(self):
        node = Node("Print", node_id="custom-id-123")
        assert node.node_id == "custom-id-123"

    def test_add_and_find_pins(self):
        node = Node("Branch")
        exec_in = node.add_input_pin("execute", PinType.EXEC)
        cond = node.add_input_pin("condition", PinType.BOOLEAN)
        true_out = node.add_output_pin("true", PinType.EXEC)

        assert exec_in.direction == PinDirection.INPUT
        assert true_out.direction == PinDirection.OUTPUT
        assert node.get_pin(cond.pin_id) is cond
        assert node.get_input_pin("condition") is cond
        assert node.get_output_pin("true") is true_out
        assert node.get_output_pin("condition") is None

    def test_remove_pins(self):
        node = Node("N")
        pin = node.add_input_pin("a", PinType.INTEGER)
        assert node.remove_input_pin(pin.pin_id)
        assert not node.remove_input_pin(pin.pin_id)
        assert not node.remove_output_pin("missing")

    def test_set_position(self):
        node = Node("N")
        node.set_position(10, 20)
        assert node.position == (10.0, 20.0)


# =============================================================================
# Test Graph
# =============================================================================

class TestGraphNodes:
    """Tests for Graph node management."""

    def test_add_node(self, graph):
        node = Node("Start")
        result = graph.add_node(node)
        assert result is node
        assert graph.get_node(node.node_id) is node
        assert graph.get_all_nodes() == [node]

    def test_remove_missing_node(self, graph):
        assert graph.remove_node("nope") is False

    def test_remove_node_cascades(self, exec_chain):
        """Removing a node removes every connection touching it."""
        graph, start, a, b = exec_chain
        assert graph.remove_node(a.node_id) is True

        assert a.node_id not in graph.nodes
        assert all(not c.touches_node(a.node_id) for c in graph.get_all_connections())
        assert len(graph.connections) == 0
        assert not start.outputs[0].is_connected
        assert not b.inputs[0].is_connected

    def test_nodes_by_category(self, graph, make_node):
        make_node("A", category="Flow")
        make_node("B", category="Math")
        make_node("C", category="Flow")
        assert [n.title for n in graph.get_nodes_by_category("Flow")] == ["A", "C"]

    def test_clear(self, exec_chain):
        graph, *_ = exec_chain
        graph.clear()
        assert graph.get_statistics().node_count == 0
        assert graph.get_statistics().connection_count == 0


class TestGraphConnections:
    """Tests for Graph connection management."""

    def test_add_connection_marks_pins(self, graph, make_node):
        a = make_node("A", outputs=[("then", PinType.EXEC)])
        b = make_node("B", inputs=[("execute", PinType.EXEC)])
        conn = Connection(a.node_id, a.outputs[0].pin_id, b.node_id, b.inputs[0].pin_id)

        assert graph.add_connection(conn) is True
        assert graph.get_connection(conn.connection_id) is conn
        assert a.outputs[0].is_connected and b.inputs[0].is_connected

    @pytest.mark.parametrize("a_type, b_type", [
        (PinType.EXEC, PinType.BOOLEAN),
        (PinType.INTEGER, PinType.FLOAT),
        (PinType.STRING, PinType.OBJECT),
        (PinType.VECTOR, PinType.EXEC),
    ])
    def test_incompatible_connection_rejected(self, graph, make_node, a_type, b_type):
        """Rejected connection leaves the graph untouched."""
        a = make_node("A", outputs=[("o", a_type)])
        b = make_node("B", inputs=[("i", b_type)])
        conn = Connection(a.node_id, a.outputs[0].pin_id, b.node_id, b.inputs[0].pin_id)

        assert graph.add_connection(conn) is False
        assert graph.connections == {}
        assert not a.outputs[0].is_connected
        assert not b.inputs[0].is_connected

    def test_wildcard_connects_to_anything(self, graph, make_node):
        a = make_node("A", outputs=[("o", PinType.WILDCARD)])
        b = make_node("B", inputs=[("i", PinType.VECTOR)])
        assert graph.connect(a.node_id, a.outputs[0].pin_id, b.node_id, b.inputs[0].pin_id)

    def test_missing_endpoints_rejected(self, graph, make_node):
        a = make_node("A", outputs=[("o", PinType.EXEC)])
        b = make_node("B", inputs=[("i", PinType.EXEC)])

        assert graph.connect("ghost", "x", b.node_id, b.inputs[0].pin_id) is None
        assert graph.connect(a.node_id, "no-such-pin", b.node_id, b.inputs[0].pin_id) is None
        assert graph.connect(a.node_id, a.outputs[0].pin_id, b.node_id, "no-such-pin") is None
        assert graph.connections == {}
        assert_flags_consistent(graph)

    def test_duplicate_connection_id_rejected(self, graph, make_node):
        """A reused ID must not replace the stored connection."""
        a = make_node("A", outputs=[("o", PinType.EXEC)])
        b = make_node("B", inputs=[("i", PinType.EXEC)])
        c = make_node("C", inputs=[("i", PinType.EXEC)])
        first = Connection(a.node_id, a.outputs[0].pin_id, b.node_id, b.inputs[0].pin_id, connection_id="x")
        second = Connection(a.node_id, a.outputs[0].pin_id, c.node_id, c.inputs[0].pin_id, connection_id="x")

        assert graph.add_connection(first) is True
        assert graph.add_connection(second) is False
        assert graph.get_connection("x") is first
        assert not c.inputs[0].is_connected
        assert_flags_consistent(graph)

    def test_fan_in_allowed(self, graph, make_node):
        """Several connections may target the same input pin."""
        a = make_node("A", outputs=[("o", PinType.EXEC)])
        b = make_node("B", outputs=[("o", PinType.EXEC)])
        c = make_node("C", inputs=[("i", PinType.EXEC)])
        assert graph.connect(a.node_id, a.outputs[0].pin_id, c.node_id, c.inputs[0].pin_id)
        assert graph.connect(b.node_id, b.outputs[0].pin_id, c.node_id, c.inputs[0].pin_id)
        assert len(graph.get_connections_to_node(c.node_id)) == 2

    def test_remove_connection_rederives_flags(self, graph, make_node):
        """Shared input stays connected until its last connection goes."""
        a = make_node("A", outputs=[("o", PinType.EXEC)])
        b = make_node("B", outputs=[("o", PinType.EXEC)])
        c = make_node("C", inputs=[("i", PinType.EXEC)])
        first = graph.connect(a.node_id, a.outputs[0].pin_id, c.node_id, c.inputs[0].pin_id)
        second = graph.connect(b.node_id, b.outputs[0].pin_id, c.node_id, c.inputs[0].pin_id)

        assert graph.remove_connection(first.connection_id) is True
        assert c.inputs[0].is_connected
        assert not a.outputs[0].is_connected

        assert graph.remove_connection(second.connection_id) is True
        assert not c.inputs[0].is_connected
        assert graph.remove_connection(second.connection_id) is False

    def test_connections_for_node(self, exec_chain):
        graph, start, a, b = exec_chain
        assert len(graph.get_connections_for_node(a.node_id)) == 2
        assert len(graph.get_connections_from_node(a.node_id)) == 1
        assert len(graph.get_connections_to_node(start.node_id)) == 0


class TestRemovePin:
    """Tests for Graph.remove_pin."""

    def test_remove_connected_input_pin(self, exec_chain):
        """Connections on the pin go first, so no endpoint dangles."""
        graph, start, a, b = exec_chain
        pin_id = b.inputs[0].pin_id

        assert graph.remove_pin(b.node_id, pin_id) is True
        assert b.get_pin(pin_id) is None
        assert len(graph.connections) == 1
        assert not a.outputs[0].is_connected
        for conn in graph.get_all_connections():
            assert graph.get_node(conn.from_node_id).get_pin(conn.from_pin_id) is not None
            assert graph.get_node(conn.to_node_id).get_pin(conn.to_pin_id) is not None
        assert_flags_consistent(graph)

    def test_remove_output_pin_with_fan_out(self, graph, make_node):
        a = make_node("A", outputs=[("o", PinType.EXEC)])
        b = make_node("B", inputs=[("i", PinType.EXEC)])
        c = make_node("C", inputs=[("i", PinType.EXEC)])
        graph.connect(a.node_id, a.outputs[0].pin_id, b.node_id, b.inputs[0].pin_id)
        graph.connect(a.node_id, a.outputs[0].pin_id, c.node_id, c.inputs[0].pin_id)

        assert graph.remove_pin(a.node_id, a.outputs[0].pin_id) is True
        assert a.outputs == []
        assert graph.connections == {}
        assert_flags_consistent(graph)

    def test_remove_missing_pin(self, exec_chain):
        graph, start, a, b = exec_chain
        assert graph.remove_pin(a.node_id, "nope") is False
        assert graph.remove_pin("ghost", a.inputs[0].pin_id) is False
        assert graph.remove_pin(start.node_id, a.inputs[0].pin_id) is False
        assert len(graph.connections) == 2


class TestReconnect:
    """Tests for reconnect_pin."""

    def test_reconnect_success(self, graph, make_node):
        a = make_node("A", outputs=[("o", PinType.INTEGER)])
        b = make_node("B", inputs=[("i", PinType.INTEGER)])
        c = make_node("C", inputs=[("i", PinType.INTEGER)])
        conn = graph.connect(a.node_id, a.outputs[0].pin_id, b.node_id, b.inputs[0].pin_id)

        assert graph.reconnect_pin(conn.connection_id, c.node_id, c.inputs[0].pin_id) is True
        assert conn.to_node_id == c.node_id
        assert not b.inputs[0].is_connected
        assert c.inputs[0].is_connected
        assert_flags_consistent(graph)

    def test_reconnect_keeps_old_pin_if_still_used(self, graph, make_node):
        a = make_node("A", outputs=[("o", PinType.EXEC)])
        z = make_node("Z", outputs=[("o", PinType.EXEC)])
        b = make_node("B", inputs=[("i", PinType.EXEC)])
        c = make_node("C", inputs=[("i", PinType.EXEC)])
        moved = graph.connect(a.node_id, a.outputs[0].pin_id, b.node_id, b.inputs[0].pin_id)
        graph.connect(z.node_id, z.outputs[0].pin_id, b.node_id, b.inputs[0].pin_id)

        assert graph.reconnect_pin(moved.connection_id, c.node_id, c.inputs[0].pin_id)
        assert b.inputs[0].is_connected
        assert_flags_consistent(graph)

    def test_reconnect_incompatible_leaves_connection(self, graph, make_node):
        a = make_node("A", outputs=[("o", PinType.INTEGER)])
        b = make_node("B", inputs=[("i", PinType.INTEGER)])
        c = make_node("C", inputs=[("i", PinType.STRING)])
        conn = graph.connect(a.node_id, a.outputs[0].pin_id, b.node_id, b.inputs[0].pin_id)

        assert graph.reconnect_pin(conn.connection_id, c.node_id, c.inputs[0].pin_id) is False
        assert (conn.to_node_id, conn.to_pin_id) == (b.node_id, b.inputs[0].pin_id)
        assert b.inputs[0].is_connected
        assert not c.inputs[0].is_connected

    def test_reconnect_missing(self, graph, make_node):
        b = make_node("B", inputs=[("i", PinType.EXEC)])
        assert graph.reconnect_pin("nope", b.node_id, b.inputs[0].pin_id) is False


class TestGraphStatistics:

    def test_statistics(self, graph, make_node):
        make_node("A", category="Flow")
        make_node("B", category="Math")
        make_node("C", category="Flow")
        stats = graph.get_statistics()
        assert stats.node_count == 3
        assert stats.connection_count == 0
        assert stats.categories == ["Flow", "Math"]


# =============================================================================
# Test Serialization
# =============================================================================

class TestGraphSerialization:
    """Tests for JSON save/load."""

    def test_to_dict_shape(self, exec_chain):
        graph, start, a, b = exec_chain
        data = graph.to_dict()
        assert set(data) == {"nodes", "connections"}
        assert data["nodes"][0]["outputs"][0]["pin_type"] == "Exec"

    def test_json_round_trip_keeps_ids(self, exec_chain):
        graph, *_ = exec_chain
        restored = Graph.from_json(graph.to_json())

        assert set(restored.nodes) == set(graph.nodes)
        assert set(restored.connections) == set(graph.connections)
        for node_id, node in graph.nodes.items():
            other = restored.nodes[node_id]
            assert other.title == node.title
            assert [p.pin_id for p in other.pins] == [p.pin_id for p in node.pins]
            assert [p.pin_type for p in other.pins] == [p.pin_type for p in node.pins]
        assert_flags_consistent(restored)

    def test_from_dict_skips_invalid_connection(self, exec_chain):
        graph, start, a, b = exec_chain
        data = graph.to_dict()
        data["connections"][0]["to_pin_id"] = "missing"

        restored = Graph.from_dict(data)
        assert len(restored.connections) == 1

    def test_from_dict_duplicate_connection_id(self, exec_chain):
        """Second record with a reused ID is skipped, flags stay derived."""
        graph, start, a, b = exec_chain
        data = graph.to_dict()
        data["connections"][1]["connection_id"] = data["connections"][0]["connection_id"]

        restored = Graph.from_dict(data)
        assert len(restored.connections) == 1
        assert_flags_consistent(restored)

    def test_malformed_json_raises(self):
        with pytest.raises(ValidationError):
            Graph.from_json("{not json")

    def test_missing_fields_raise(self):
        with pytest.raises(ValidationError):
            Graph.from_json(json.dumps({"nodes": [{"title": "no id"}]}))
