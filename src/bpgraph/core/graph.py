# -*- coding: utf-8 -*-
"""
Graph - Container for nodes and connections.

Every mutation validates fully before touching state, so a
rejected call leaves the graph exactly as it was. Rejections are
reported through the return value and logged, never raised.

Example:
    graph = Graph()
    start = graph.add_node(Node("Start"))
    start.add_output_pin("then", PinType.EXEC)
    target = graph.add_node(Node("Print"))
    target.add_input_pin("execute", PinType.EXEC)

    conn = graph.connect(
        start.node_id, start.outputs[0].pin_id,
        target.node_id, target.inputs[0].pin_id
    )

    data = graph.to_json()
"""
from typing import Dict, List, Optional, Tuple
from loguru import logger

from .node import Node
from .pins import Pin, are_pins_compatible
from .connection import Connection
from .schema import GraphDocument, GraphStatistics


class Graph:
    """
    Node and connection container.

    Attributes:
        nodes: Dictionary of node_id -> Node
        connections: Dictionary of connection_id -> Connection
    """

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.connections: Dict[str, Connection] = {}

    # =========================================================================
    # Node Management
    # =========================================================================

    def add_node(self, node: Node) -> Node:
        """
        Add a node to the graph, replacing any node with the same ID.

        Args:
            node: Node instance to add

        Returns:
            The added node (for chaining)
        """
        self.nodes[node.node_id] = node
        logger.debug(f"Added node: {node}")
        return node

    def remove_node(self, node_id: str) -> bool:
        """
        Remove a node and all its connections.

        Args:
            node_id: ID of node to remove

        Returns:
            True if the node existed
        """
        node = self.nodes.get(node_id)
        if node is None:
            return False

        for conn in self.get_connections_for_node(node_id):
            self.remove_connection(conn.connection_id)

        del self.nodes[node_id]
        logger.debug(f"Removed node: {node}")
        return True

    def get_node(self, node_id: str) -> Optional[Node]:
        """Get a node by ID."""
        return self.nodes.get(node_id)

    def get_all_nodes(self) -> List[Node]:
        return list(self.nodes.values())

    def get_nodes_by_category(self, category: str) -> List[Node]:
        return [node for node in self.nodes.values() if node.category == category]

    def clear(self) -> None:
        """Remove all nodes and connections."""
        self.connections.clear()
        self.nodes.clear()

    # =========================================================================
    # Connection Management
    # =========================================================================

    def _resolve_pin(self, node_id: str, pin_id: str) -> Optional[Pin]:
        node = self.nodes.get(node_id)
        if node is None:
            return None
        return node.get_pin(pin_id)

    def _resolve_endpoints(
        self,
        connection: Connection
    ) -> Tuple[Optional[Pin], Optional[Pin]]:
        return (
            self._resolve_pin(connection.from_node_id, connection.from_pin_id),
            self._resolve_pin(connection.to_node_id, connection.to_pin_id),
        )

    def _refresh_pin(self, node_id: str, pin_id: str) -> None:
        """Re-derive is_connected from the live connection set."""
        pin = self._resolve_pin(node_id, pin_id)
        if pin is not None:
            pin.is_connected = any(
                conn.references_pin(pin_id) for conn in self.connections.values()
            )

    def add_connection(self, connection: Connection) -> bool:
        """
        Store a connection after validating both endpoints.

        Args:
            connection: Connection to add

        Returns:
            False (graph unchanged) if the ID is already stored, a node
            or pin is missing, or the pin types are incompatible;
            True otherwise
        """
        if connection.connection_id in self.connections:
            logger.warning(f"Rejected {connection}: duplicate id {connection.connection_id}")
            return False

        if connection.from_node_id not in self.nodes or connection.to_node_id not in self.nodes:
            logger.warning(f"Rejected {connection}: node not found")
            return False

        from_pin, to_pin = self._resolve_endpoints(connection)
        if from_pin is None or to_pin is None:
            logger.warning(f"Rejected {connection}: pin not found")
            return False

        if not are_pins_compatible(from_pin, to_pin):
            logger.warning(
                f"Rejected {connection}: cannot connect "
                f"{from_pin.pin_type.display_name} to {to_pin.pin_type.display_name}"
            )
            return False

        from_pin.is_connected = True
        to_pin.is_connected = True
        self.connections[connection.connection_id] = connection
        logger.debug(f"Connected: {connection}")
        return True

    def connect(
        self,
        from_node_id: str,
        from_pin_id: str,
        to_node_id: str,
        to_pin_id: str
    ) -> Optional[Connection]:
        """
        Create and add a connection between two pins.

        Returns:
            The created connection, or None if it was rejected
        """
        connection = Connection(from_node_id, from_pin_id, to_node_id, to_pin_id)
        if self.add_connection(connection):
            return connection
        return None

    def remove_connection(self, connection_id: str) -> bool:
        """
        Remove a connection and re-derive its endpoint pin flags.

        Args:
            connection_id: ID of connection to remove

        Returns:
            True if the connection existed
        """
        conn = self.connections.pop(connection_id, None)
        if conn is None:
            return False

        self._refresh_pin(conn.from_node_id, conn.from_pin_id)
        self._refresh_pin(conn.to_node_id, conn.to_pin_id)
        logger.debug(f"Disconnected: {conn}")
        return True

    def reconnect_pin(
        self,
        connection_id: str,
        new_to_node_id: str,
        new_to_pin_id: str
    ) -> bool:
        """
        Re-target the destination of an existing connection.

        The unchanged source pin is validated against the new target
        before anything is modified.

        Args:
            connection_id: Connection to re-target
            new_to_node_id: New target node
            new_to_pin_id: New target pin

        Returns:
            True on success, False (connection untouched) otherwise
        """
        conn = self.connections.get(connection_id)
        if conn is None:
            return False

        from_pin = self._resolve_pin(conn.from_node_id, conn.from_pin_id)
        new_to_pin = self._resolve_pin(new_to_node_id, new_to_pin_id)
        if from_pin is None or new_to_pin is None:
            logger.warning(f"Reconnect of {conn} rejected: pin not found")
            return False
        if not are_pins_compatible(from_pin, new_to_pin):
            logger.warning(
                f"Reconnect of {conn} rejected: cannot connect "
                f"{from_pin.pin_type.display_name} to {new_to_pin.pin_type.display_name}"
            )
            return False

        old_to_node_id, old_to_pin_id = conn.to_node_id, conn.to_pin_id
        conn.to_node_id = new_to_node_id
        conn.to_pin_id = new_to_pin_id

        self._refresh_pin(old_to_node_id, old_to_pin_id)
        new_to_pin.is_connected = True
        logger.debug(f"Reconnected: {conn}")
        return True

    def remove_pin(self, node_id: str, pin_id: str) -> bool:
        """
        Remove a pin from a node, dropping every connection that uses it.

        Args:
            node_id: Owning node
            pin_id: Pin to remove

        Returns:
            True if the pin existed on that node
        """
        node = self.nodes.get(node_id)
        if node is None:
            return False
        pin = node.get_pin(pin_id)
        if pin is None:
            return False

        for conn in [c for c in self.connections.values() if c.references_pin(pin_id)]:
            self.remove_connection(conn.connection_id)

        if pin.is_input:
            node.remove_input_pin(pin_id)
        else:
            node.remove_output_pin(pin_id)
        logger.debug(f"Removed pin {pin} from {node}")
        return True

    def get_connection(self, connection_id: str) -> Optional[Connection]:
        return self.connections.get(connection_id)

    def get_all_connections(self) -> List[Connection]:
        return list(self.connections.values())

    def get_connections_for_node(self, node_id: str) -> List[Connection]:
        """Get all connections touching a node in either direction."""
        return [conn for conn in self.connections.values() if conn.touches_node(node_id)]

    def get_connections_from_node(self, node_id: str) -> List[Connection]:
        return [conn for conn in self.connections.values() if conn.from_node_id == node_id]

    def get_connections_to_node(self, node_id: str) -> List[Connection]:
        return [conn for conn in self.connections.values() if conn.to_node_id == node_id]

    # =========================================================================
    # Queries
    # =========================================================================

    def get_statistics(self) -> GraphStatistics:
        """Node count, connection count and distinct categories."""
        categories: List[str] = []
        for node in self.nodes.values():
            if node.category not in categories:
                categories.append(node.category)
        return GraphStatistics(
            node_count=len(self.nodes),
            connection_count=len(self.connections),
            categories=categories,
        )

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict:
        """
        Serialize graph for saving.

        Returns:
            `{nodes: [...], connections: [...]}` dictionary
        """
        return {
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "connections": [conn.to_dict() for conn in self.connections.values()],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return GraphDocument.model_validate(self.to_dict()).model_dump_json(indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> 'Graph':
        """
        Load graph from saved data.

        Args:
            data: Dictionary from to_dict()

        Returns:
            Restored Graph with the saved IDs

        Raises:
            pydantic.ValidationError: If the document is malformed
        """
        return cls._from_document(GraphDocument.model_validate(data))

    @classmethod
    def from_json(cls, text: str) -> 'Graph':
        """Load graph from JSON text. Raises on malformed input."""
        return cls._from_document(GraphDocument.model_validate_json(text))

    @classmethod
    def _from_document(cls, document: GraphDocument) -> 'Graph':
        graph = cls()

        for record in document.nodes:
            node = Node(record.title, category=record.category, node_id=record.node_id)
            node.set_position(record.x, record.y)
            node.width = record.width
            node.height = record.height
            for pin in record.inputs:
                node.add_input_pin(pin.name, pin.pin_type, pin_id=pin.pin_id)
            for pin in record.outputs:
                node.add_output_pin(pin.name, pin.pin_type, pin_id=pin.pin_id)
            graph.add_node(node)

        for record in document.connections:
            conn = Connection(
                record.from_node_id, record.from_pin_id,
                record.to_node_id, record.to_pin_id,
                connection_id=record.connection_id
            )
            if not graph.add_connection(conn):
                logger.warning(f"Failed to restore connection: {record.connection_id}")

        return graph

    def __repr__(self) -> str:
        return f"<Graph nodes={len(self.nodes)} conn={len(self.connections)}>"
