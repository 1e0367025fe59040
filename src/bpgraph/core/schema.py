# -*- coding: utf-8 -*-
"""
Schema - pydantic records for the JSON document of a graph.

The document mirrors the model fields one to one, so loading a
saved document reproduces the same node, pin and connection IDs.
"""
from typing import List

from pydantic import BaseModel, Field

from .pins import PinDirection, PinType


class PinRecord(BaseModel):
    pin_id: str
    name: str
    pin_type: PinType = PinType.WILDCARD
    direction: PinDirection


class NodeRecord(BaseModel):
    node_id: str
    title: str
    category: str = "Default"
    x: float = 0.0
    y: float = 0.0
    width: float = 200.0
    height: float = 100.0
    inputs: List[PinRecord] = Field(default_factory=list)
    outputs: List[PinRecord] = Field(default_factory=list)


class ConnectionRecord(BaseModel):
    connection_id: str
    from_node_id: str
    from_pin_id: str
    to_node_id: str
    to_pin_id: str


class GraphDocument(BaseModel):
    """Top level `{nodes: [...], connections: [...]}` document."""
    nodes: List[NodeRecord] = Field(default_factory=list)
    connections: List[ConnectionRecord] = Field(default_factory=list)


class GraphStatistics(BaseModel):
    node_count: int = 0
    connection_count: int = 0
    categories: List[str] = Field(default_factory=list)
