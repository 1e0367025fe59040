# -*- coding: utf-8 -*-
"""
Node identity and pin reuse policies for the colored arrow notation.

A bracketed node name is a key, not necessarily a unique node:
the same title may denote one recurring node or several distinct
nodes. A NodeIdentityPolicy decides which key a mention maps to.

Policies:
- LiteralNameIdentity: one node per literal bracketed name
- WindowedNameIdentity: editor-export heuristic (explicit `#id`,
  Exec pins bind to `#main`, reuse within a line window)

TypeBucketedPins keeps at most one input and one output pin per
resolved pin type on each node.
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from ..core.node import Node
from ..core.pins import Pin, PinType


class NodeIdentityPolicy(ABC):
    """Maps a bracketed mention to a node key and a display title."""

    name: str = "base"

    @abstractmethod
    def resolve(self, raw_name: str, pin_type: Optional[PinType], line_index: int) -> Tuple[str, str]:
        """
        Resolve one mention.

        Args:
            raw_name: Text between the brackets
            pin_type: Type of the pin mentioned alongside, if any
            line_index: Index of the line among content lines

        Returns:
            (key, title) pair; mentions with the same key share a node
        """


class LiteralNameIdentity(NodeIdentityPolicy):
    """The literal bracketed name is the key and the title."""

    name = "literal"

    def resolve(self, raw_name, pin_type, line_index):
        key = raw_name.strip()
        return key, key


class WindowedNameIdentity(NodeIdentityPolicy):
    """
    Heuristic identity used for hand-written editor exports.

    - `Title#id` always maps to that explicit instance.
    - A mention with an Exec pin maps to `Title#main`.
    - Otherwise, a mention within `window` lines of the previous
      mention of the same title reuses that node; else a new
      numbered instance `Title#n` is created.
    """

    name = "windowed"

    def __init__(self, window: int = 3):
        self.window = window
        self._last_use: Dict[str, Tuple[str, int]] = {}
        self._counters: Dict[str, int] = {}

    def resolve(self, raw_name, pin_type, line_index):
        title, sep, explicit_id = raw_name.partition("#")
        title = title.strip()
        explicit_id = explicit_id.strip()

        if sep and explicit_id:
            key = f"{title}#{explicit_id}"
        elif pin_type == PinType.EXEC:
            key = f"{title}#main"
        else:
            last = self._last_use.get(title)
            if last is not None and line_index - last[1] <= self.window:
                key = last[0]
            else:
                self._counters[title] = self._counters.get(title, 0) + 1
                key = f"{title}#{self._counters[title]}"

        self._last_use[title] = (key, line_index)
        return key, title


def make_identity_policy(name: str, window: int = 3) -> NodeIdentityPolicy:
    if name == WindowedNameIdentity.name:
        return WindowedNameIdentity(window)
    return LiteralNameIdentity()


class TypeBucketedPins:
    """
    Per-node pin reuse keyed by (direction, pin type).

    The first mention of a type names the pin; later mentions of
    the same type on the same side share it.
    """

    def __init__(self):
        self._buckets: Dict[Tuple[str, bool, PinType], Pin] = {}

    def ensure_input(self, node: Node, pin_type: PinType, name: str) -> Pin:
        key = (node.node_id, True, pin_type)
        if key not in self._buckets:
            self._buckets[key] = node.add_input_pin(name, pin_type)
        return self._buckets[key]

    def ensure_output(self, node: Node, pin_type: PinType, name: str) -> Pin:
        key = (node.node_id, False, pin_type)
        if key not in self._buckets:
            self._buckets[key] = node.add_output_pin(name, pin_type)
        return self._buckets[key]
