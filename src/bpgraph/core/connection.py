# -*- coding: utf-8 -*-
"""
Connection - A directed link from one pin reference to another.

A connection only stores IDs. Resolution and type validation are
done by the owning Graph, so a Connection is never partially
resolved once it is stored there.

Example:
    conn = Connection(
        start.node_id, start.outputs[0].pin_id,
        print_node.node_id, print_node.inputs[0].pin_id
    )
    graph.add_connection(conn)
"""
from typing import Optional
from uuid import uuid4


class Connection:
    """
    Directed edge: source (from_*) -> target (to_*).

    Attributes:
        connection_id: Unique identifier
        from_node_id / from_pin_id: Source endpoint
        to_node_id / to_pin_id: Target endpoint
    """

    def __init__(
        self,
        from_node_id: str,
        from_pin_id: str,
        to_node_id: str,
        to_pin_id: str,
        connection_id: Optional[str] = None
    ):
        self.connection_id = connection_id or str(uuid4())
        self.from_node_id = from_node_id
        self.from_pin_id = from_pin_id
        self.to_node_id = to_node_id
        self.to_pin_id = to_pin_id

    def touches_node(self, node_id: str) -> bool:
        return self.from_node_id == node_id or self.to_node_id == node_id

    def references_pin(self, pin_id: str) -> bool:
        return self.from_pin_id == pin_id or self.to_pin_id == pin_id

    def to_dict(self) -> dict:
        """
        Serialize connection for saving.

        Returns:
            Dictionary representation of connection
        """
        return {
            "connection_id": self.connection_id,
            "from_node_id": self.from_node_id,
            "from_pin_id": self.from_pin_id,
            "to_node_id": self.to_node_id,
            "to_pin_id": self.to_pin_id,
        }

    def __repr__(self) -> str:
        return (
            f"<Connection {self.from_node_id[:8]}.{self.from_pin_id[:8]} -> "
            f"{self.to_node_id[:8]}.{self.to_pin_id[:8]}>"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Connection):
            return False
        return self.connection_id == other.connection_id

    def __hash__(self) -> int:
        return hash(self.connection_id)
