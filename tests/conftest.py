import sys
import pytest
from loguru import logger

from src.bpgraph.core.graph import Graph
from src.bpgraph.core.node import Node
from src.bpgraph.core.pins import PinType


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks added by a test (e.g. setup_logging bound to captured stderr)."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def graph():
    return Graph()


@pytest.fixture
def make_node(graph):
    """Factory: make_node("Title", inputs=[("a", PinType.EXEC)], outputs=[...])."""
    def _make(title, inputs=(), outputs=(), category="Test"):
        node = Node(title, category=category)
        for name, pin_type in inputs:
            node.add_input_pin(name, pin_type)
        for name, pin_type in outputs:
            node.add_output_pin(name, pin_type)
        return graph.add_node(node)
    return _make


@pytest.fixture
def exec_chain(graph, make_node):
    """Start -> A -> B with Exec pins, returns (graph, start, a, b)."""
    start = make_node("Start", outputs=[("then", PinType.EXEC)])
    a = make_node("A", inputs=[("execute", PinType.EXEC)], outputs=[("then", PinType.EXEC)])
    b = make_node("B", inputs=[("execute", PinType.EXEC)], outputs=[("then", PinType.EXEC)])
    graph.connect(start.node_id, start.outputs[0].pin_id, a.node_id, a.inputs[0].pin_id)
    graph.connect(a.node_id, a.outputs[0].pin_id, b.node_id, b.inputs[0].pin_id)
    return graph, start, a, b
