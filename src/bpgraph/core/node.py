# -*- coding: utf-8 -*-
"""
Node - A titled box owning ordered input and output pins.

Titles are free text and are not unique: several nodes may share
a title. Identity is the node_id alone.

Example:
    node = Node("Branch", category="Flow Control")
    node.add_input_pin("execute", PinType.EXEC)
    node.add_input_pin("condition", PinType.BOOLEAN)
    node.add_output_pin("true", PinType.EXEC)
"""
from typing import List, Optional
from uuid import uuid4

from .pins import Pin, PinDirection, PinType


DEFAULT_WIDTH = 200.0
DEFAULT_HEIGHT = 100.0


class Node:
    """
    Graph node with exclusively owned pins.

    Attributes:
        node_id: Unique identifier for this node instance
        title: Human-readable title (may repeat across nodes)
        category: Free-form grouping label (e.g. parser of origin)
        x, y: Canvas position
        width, height: Canvas size
        inputs: Ordered input pins
        outputs: Ordered output pins
    """

    def __init__(
        self,
        title: str,
        category: str = "Default",
        node_id: Optional[str] = None
    ):
        """
        Initialize a new node.

        Args:
            title: Display title
            category: Grouping label
            node_id: Optional unique ID (generated if not provided)
        """
        self.node_id = node_id or str(uuid4())
        self.title = title
        self.category = category
        self.x = 0.0
        self.y = 0.0
        self.width = DEFAULT_WIDTH
        self.height = DEFAULT_HEIGHT
        self.inputs: List[Pin] = []
        self.outputs: List[Pin] = []

    # =========================================================================
    # Pin Management
    # =========================================================================

    def add_input_pin(
        self,
        name: str,
        pin_type: PinType,
        pin_id: Optional[str] = None
    ) -> Pin:
        """
        Append an input pin.

        Args:
            name: Pin name
            pin_type: Pin type
            pin_id: Optional explicit ID (restoring saved graphs)

        Returns:
            The created pin
        """
        pin = Pin(name, pin_type, PinDirection.INPUT, pin_id=pin_id)
        self.inputs.append(pin)
        return pin

    def add_output_pin(
        self,
        name: str,
        pin_type: PinType,
        pin_id: Optional[str] = None
    ) -> Pin:
        """Append an output pin. See add_input_pin."""
        pin = Pin(name, pin_type, PinDirection.OUTPUT, pin_id=pin_id)
        self.outputs.append(pin)
        return pin

    def remove_input_pin(self, pin_id: str) -> bool:
        return self._remove_pin(self.inputs, pin_id)

    def remove_output_pin(self, pin_id: str) -> bool:
        return self._remove_pin(self.outputs, pin_id)

    @staticmethod
    def _remove_pin(pins: List[Pin], pin_id: str) -> bool:
        for index, pin in enumerate(pins):
            if pin.pin_id == pin_id:
                del pins[index]
                return True
        return False

    def get_pin(self, pin_id: str) -> Optional[Pin]:
        """Find a pin on either side by ID."""
        for pin in self.inputs + self.outputs:
            if pin.pin_id == pin_id:
                return pin
        return None

    def get_input_pin(self, name: str) -> Optional[Pin]:
        """Get the first input pin with this name."""
        return next((p for p in self.inputs if p.name == name), None)

    def get_output_pin(self, name: str) -> Optional[Pin]:
        """Get the first output pin with this name."""
        return next((p for p in self.outputs if p.name == name), None)

    @property
    def pins(self) -> List[Pin]:
        return self.inputs + self.outputs

    # =========================================================================
    # Layout
    # =========================================================================

    def set_position(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict:
        """
        Serialize node and its pins for saving.

        Returns:
            Dictionary representation of node state
        """
        return {
            "node_id": self.node_id,
            "title": self.title,
            "category": self.category,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "inputs": [pin.to_dict() for pin in self.inputs],
            "outputs": [pin.to_dict() for pin in self.outputs],
        }

    def __repr__(self) -> str:
        return f"<Node '{self.title}' ({self.node_id[:8]})>"
