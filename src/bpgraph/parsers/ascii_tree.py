# -*- coding: utf-8 -*-
"""
ASCII Tree Parser - box-drawing tree notation.

Format:
    Start
    ├── Branch
    │   ├── Print (true→execute)
    │   └── Log (false→execute, false→flush)
    └── End

Depth is derived from the leading guide characters
(`len(guides) // 4 + 1`); plain lines are depth 0. Every node gets
an `execute` Exec input and a `then` Exec output. A trailing
`(Out→In, ...)` label creates extra named pins; no label means
`then→execute`.
"""
import re
from typing import Dict, List, Tuple

from loguru import logger

from ..config import AppConfig
from ..core.graph import Graph
from ..core.node import Node
from ..core.pins import PinType
from .base import BaseGraphParser, ParseReport, iter_lines


TREE_LINE = re.compile(r"^([\s│]*)[├└]──\s*(.*?)$")
CONTENT = re.compile(r"^(.*?)(?:\s*\(([^()]*)\))?$")
TRAILING_MARKER = re.compile(r"\s*\[[^\]]*\]$")
MAPPING_SPLIT = re.compile(r"→|->")
GUIDES_ONLY = re.compile(r"^[\s│├└─]*$")

DEFAULT_INPUT = "execute"
DEFAULT_OUTPUT = "then"
GUIDE_WIDTH = 4


def is_pin_label(label: str) -> bool:
    """True when every comma-separated part of `label` is an `out→in` pair."""
    parts = [part for part in label.split(",") if part.strip()]
    return bool(parts) and all(MAPPING_SPLIT.search(part) for part in parts)


def split_title(content: str) -> Tuple[str, List[Tuple[str, str]]]:
    """
    Split `Title (a→b, c→d)` into the title and its pin mappings.

    A trailing group without arrows, as in `Timeline (MyTL)`, is part
    of the title.

    Returns:
        (title, [(output pin, input pin), ...]); mappings default to
        then→execute when no label is given
    """
    match = CONTENT.match(content)
    label = match.group(2) if match else None
    if label is not None and is_pin_label(label):
        title = match.group(1)
    else:
        title, label = content, ""
    title = TRAILING_MARKER.sub("", title.strip()).strip()

    mappings = []
    for mapping in label.split(","):
        if not mapping.strip():
            continue
        parts = MAPPING_SPLIT.split(mapping)
        out_name = parts[0].strip() or DEFAULT_OUTPUT
        in_name = parts[1].strip() if len(parts) > 1 and parts[1].strip() else DEFAULT_INPUT
        mappings.append((out_name, in_name))

    return title, mappings or [(DEFAULT_OUTPUT, DEFAULT_INPUT)]


class AsciiTreeParser(BaseGraphParser):
    """Parser and generator for box-drawing trees."""

    format_name = "tree"
    category = "Tree"

    @classmethod
    def _parse_into(cls, report: ParseReport, text: str, config: AppConfig) -> None:
        graph = report.graph
        layout = config.layout
        stack: List[Tuple[Node, int]] = []
        row = 0

        for line_no, raw in iter_lines(text):
            if GUIDES_ONLY.match(raw):
                continue

            tree_match = TREE_LINE.match(raw)
            if tree_match:
                depth = len(tree_match.group(1)) // GUIDE_WIDTH + 1
                content = tree_match.group(2).strip()
            else:
                depth = 0
                content = raw.strip()

            title, mappings = split_title(content)
            if not title:
                report.skip(line_no, raw, "empty node title")
                continue

            node = Node(title, category=cls.category)
            node.set_position(depth * layout.tree_indent, row * layout.tree_row_height)
            node.width, node.height = layout.node_width, layout.node_height
            node.add_input_pin(DEFAULT_INPUT, PinType.EXEC)
            node.add_output_pin(DEFAULT_OUTPUT, PinType.EXEC)
            graph.add_node(node)
            row += 1

            while stack and stack[-1][1] >= depth:
                stack.pop()

            if stack:
                cls._link(graph, stack[-1][0], node, mappings)

            stack.append((node, depth))

        logger.debug(
            f"Tree parse: {len(graph.nodes)} nodes, {len(graph.connections)} connections, "
            f"{report.skipped_count} skipped"
        )

    @staticmethod
    def _link(graph: Graph, parent: Node, child: Node, mappings: List[Tuple[str, str]]) -> None:
        for out_name, in_name in mappings:
            out_pin = parent.get_output_pin(out_name) or parent.add_output_pin(out_name, PinType.EXEC)
            in_pin = child.get_input_pin(in_name) or child.add_input_pin(in_name, PinType.EXEC)
            graph.connect(parent.node_id, out_pin.pin_id, child.node_id, in_pin.pin_id)

    @classmethod
    def generate(cls, graph: Graph) -> str:
        """
        Generate a box-drawing tree from a graph.

        Roots are nodes without incoming connections. A node is
        emitted at most once per root walk. Non-default pin pairs
        are written back as `(out→in, ...)` labels.
        """
        incoming: Dict[str, int] = {node_id: 0 for node_id in graph.nodes}
        for conn in graph.get_all_connections():
            incoming[conn.to_node_id] = incoming.get(conn.to_node_id, 0) + 1

        roots = [node for node in graph.get_all_nodes() if incoming[node.node_id] == 0]
        lines: List[str] = []

        for index, root in enumerate(roots):
            cls._render(graph, root.node_id, "", "", index == len(roots) - 1, set(), lines)

        return "\n".join(lines)

    @classmethod
    def _render(
        cls,
        graph: Graph,
        node_id: str,
        label: str,
        prefix: str,
        is_last: bool,
        visited: set,
        lines: List[str]
    ) -> None:
        node = graph.get_node(node_id)
        if node is None or node_id in visited:
            return
        visited.add(node_id)

        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{node.title}{label}")

        children = [
            (target_id, child_label)
            for target_id, child_label in cls._child_labels(graph, node_id)
            if target_id not in visited
        ]
        child_prefix = prefix + ("    " if is_last else "│   ")
        for index, (target_id, child_label) in enumerate(children):
            cls._render(
                graph, target_id, child_label, child_prefix,
                index == len(children) - 1, visited, lines
            )

    @staticmethod
    def _child_labels(graph: Graph, node_id: str) -> List[Tuple[str, str]]:
        """Outgoing targets in first-seen order with their label suffix."""
        node = graph.get_node(node_id)
        groups: Dict[str, List[str]] = {}
        for conn in graph.get_connections_from_node(node_id):
            target = graph.get_node(conn.to_node_id)
            from_pin = node.get_pin(conn.from_pin_id) if node else None
            to_pin = target.get_pin(conn.to_pin_id) if target else None
            if from_pin is None or to_pin is None:
                continue
            groups.setdefault(conn.to_node_id, []).append(f"{from_pin.name}→{to_pin.name}")

        result = []
        for target_id, labels in groups.items():
            default = [f"{DEFAULT_OUTPUT}→{DEFAULT_INPUT}"]
            suffix = "" if labels == default else f" ({', '.join(labels)})"
            result.append((target_id, suffix))
        return result
