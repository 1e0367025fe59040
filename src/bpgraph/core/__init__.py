# -*- coding: utf-8 -*-
"""
bpgraph Core - Typed node, pin and connection model.
"""

from .pins import PinDirection, PinType, Pin, are_pins_compatible
from .node import Node
from .connection import Connection
from .graph import Graph
from .schema import GraphDocument, GraphStatistics

__all__ = [
    "PinDirection",
    "PinType",
    "Pin",
    "are_pins_compatible",
    "Node",
    "Connection",
    "Graph",
    "GraphDocument",
    "GraphStatistics",
]
