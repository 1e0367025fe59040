# -*- coding: utf-8 -*-
"""
Adapters between the Graph model and the UI-friendly view.

The view is a flat `{nodes, connections}` shape with coarse pin
type names and display colors, as consumed by canvas front ends.
"""
from typing import List, Literal

from pydantic import BaseModel, Field

from ..core.connection import Connection
from ..core.graph import Graph
from ..core.node import Node
from ..core.pins import Pin, PinDirection, PinType, UI_TYPE_COLORS


UIPinType = Literal["exec", "bool", "number", "vector", "string", "object", "other"]
NodeColor = Literal["red", "blue", "gray"]


class PinData(BaseModel):
    id: str
    name: str
    type: UIPinType = "other"
    color: str = UI_TYPE_COLORS["other"]
    is_output: bool = False


class NodeData(BaseModel):
    id: str
    title: str
    x: float = 0.0
    y: float = 0.0
    width: float = 200.0
    height: float = 100.0
    color: NodeColor = "gray"
    inputs: List[PinData] = Field(default_factory=list)
    outputs: List[PinData] = Field(default_factory=list)


class ConnectionData(BaseModel):
    id: str
    from_node: str
    from_pin: str
    to_node: str
    to_pin: str
    color: str = UI_TYPE_COLORS["other"]


class GraphView(BaseModel):
    nodes: List[NodeData] = Field(default_factory=list)
    connections: List[ConnectionData] = Field(default_factory=list)


def node_color(title: str) -> NodeColor:
    """Header color by title keyword: events red, accessors blue."""
    t = title.lower()
    if "event" in t or "begin" in t or "end" in t:
        return "red"
    if "set" in t or "get" in t or "location" in t:
        return "blue"
    return "gray"


class GraphToUIAdapter:
    """Graph -> GraphView."""

    @classmethod
    def adapt_graph(cls, graph: Graph) -> GraphView:
        return GraphView(
            nodes=[cls.adapt_node(node) for node in graph.get_all_nodes()],
            connections=[cls.adapt_connection(conn, graph) for conn in graph.get_all_connections()],
        )

    @classmethod
    def adapt_node(cls, node: Node) -> NodeData:
        return NodeData(
            id=node.node_id,
            title=node.title,
            x=node.x,
            y=node.y,
            width=node.width,
            height=node.height,
            color=node_color(node.title),
            inputs=[cls.adapt_pin(pin) for pin in node.inputs],
            outputs=[cls.adapt_pin(pin) for pin in node.outputs],
        )

    @staticmethod
    def adapt_pin(pin: Pin) -> PinData:
        return PinData(
            id=pin.pin_id,
            name=pin.name,
            type=pin.pin_type.ui_type,
            color=pin.pin_type.color,
            is_output=pin.direction == PinDirection.OUTPUT,
        )

    @staticmethod
    def adapt_connection(conn: Connection, graph: Graph) -> ConnectionData:
        from_node = graph.get_node(conn.from_node_id)
        from_pin = from_node.get_pin(conn.from_pin_id) if from_node else None
        return ConnectionData(
            id=conn.connection_id,
            from_node=conn.from_node_id,
            from_pin=conn.from_pin_id,
            to_node=conn.to_node_id,
            to_pin=conn.to_pin_id,
            color=from_pin.pin_type.color if from_pin else UI_TYPE_COLORS["other"],
        )


class UIToGraphAdapter:
    """GraphView -> Graph. IDs are kept; numeric pins come back as Integer."""

    @staticmethod
    def adapt_to_graph(nodes: List[NodeData], connections: List[ConnectionData]) -> Graph:
        graph = Graph()

        for data in nodes:
            node = Node(data.title, category="UI", node_id=data.id)
            node.set_position(data.x, data.y)
            node.width = data.width
            node.height = data.height
            for pin in data.inputs:
                node.add_input_pin(pin.name, PinType.from_ui_type(pin.type), pin_id=pin.id)
            for pin in data.outputs:
                node.add_output_pin(pin.name, PinType.from_ui_type(pin.type), pin_id=pin.id)
            graph.add_node(node)

        for data in connections:
            graph.add_connection(Connection(
                data.from_node, data.from_pin, data.to_node, data.to_pin,
                connection_id=data.id
            ))

        return graph
