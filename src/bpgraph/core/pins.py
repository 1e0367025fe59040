# -*- coding: utf-8 -*-
"""
Pins - Typed, directional attachment points on a node.

Pin types form a closed set. Two pins are compatible when their
types are equal or when either side is a Wildcard.

Example:
    pin = Pin("then", PinType.EXEC, PinDirection.OUTPUT)
    assert pin.pin_type.ui_type == "exec"
"""
from enum import Enum
from typing import Optional
from uuid import uuid4


class PinDirection(str, Enum):
    """Direction of a pin relative to its node."""
    INPUT = "Input"
    OUTPUT = "Output"


class PinType(str, Enum):
    """
    Closed enumeration of pin data types.

    The value is the canonical name used by every text format.
    """
    EXEC = "Exec"
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    FLOAT = "Float"
    STRING = "String"
    OBJECT = "Object"
    VECTOR = "Vector"
    WILDCARD = "Wildcard"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def ui_type(self) -> str:
        """Coarse type name used by the UI view."""
        return _UI_TYPES[self]

    @property
    def color(self) -> str:
        """Hex color used when drawing pins and wires of this type."""
        return UI_TYPE_COLORS[_UI_TYPES[self]]

    @classmethod
    def from_ui_type(cls, ui_type: str) -> 'PinType':
        """Map a coarse UI type back to a pin type (lossy for numbers)."""
        return _FROM_UI_TYPES.get(ui_type, cls.WILDCARD)


_UI_TYPES = {
    PinType.EXEC: "exec",
    PinType.BOOLEAN: "bool",
    PinType.INTEGER: "number",
    PinType.FLOAT: "number",
    PinType.STRING: "string",
    PinType.OBJECT: "object",
    PinType.VECTOR: "vector",
    PinType.WILDCARD: "other",
}

_FROM_UI_TYPES = {
    "exec": PinType.EXEC,
    "bool": PinType.BOOLEAN,
    "number": PinType.INTEGER,
    "vector": PinType.VECTOR,
    "string": PinType.STRING,
    "object": PinType.OBJECT,
    "other": PinType.WILDCARD,
}

UI_TYPE_COLORS = {
    "exec": "#ff4444",
    "bool": "#ffff00",
    "number": "#4488ff",
    "vector": "#ffff88",
    "string": "#ff88ff",
    "object": "#ff8844",
    "other": "#888888",
}


def are_pins_compatible(from_pin: 'Pin', to_pin: 'Pin') -> bool:
    """Pins connect when types match or either side is a Wildcard."""
    if from_pin.pin_type == PinType.WILDCARD or to_pin.pin_type == PinType.WILDCARD:
        return True
    return from_pin.pin_type == to_pin.pin_type


class Pin:
    """
    A typed attachment point owned by exactly one node.

    Attributes:
        pin_id: Globally unique identifier, immutable once assigned
        name: Display name (not unique)
        pin_type: PinType of carried data or execution
        direction: INPUT or OUTPUT
        is_connected: Derived flag maintained by the owning Graph
    """

    def __init__(
        self,
        name: str,
        pin_type: PinType,
        direction: PinDirection,
        pin_id: Optional[str] = None
    ):
        self._pin_id = pin_id or str(uuid4())
        self.name = name
        self.pin_type = pin_type
        self.direction = direction
        self.is_connected = False

    @property
    def pin_id(self) -> str:
        return self._pin_id

    @property
    def is_input(self) -> bool:
        return self.direction == PinDirection.INPUT

    def can_connect_to(self, other: 'Pin') -> bool:
        """Type compatibility check against another pin."""
        return are_pins_compatible(self, other)

    def state_indicator(self) -> str:
        return "●" if self.is_connected else "○"

    def to_dict(self) -> dict:
        return {
            "pin_id": self.pin_id,
            "name": self.name,
            "pin_type": self.pin_type.value,
            "direction": self.direction.value,
        }

    def __repr__(self) -> str:
        return f"<Pin {self.name}:{self.pin_type.value} {self.direction.value}>"
