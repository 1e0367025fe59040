# -*- coding: utf-8 -*-
"""
Legacy Arrow Parser - colored bracket notation.

Format:
    [NodeName] (PinName - ColorName) → [OtherNode] (PinName - ColorName)
    [NodeName] (PinName - ColorName)
    [NodeName]
    // comment

Pin types come from the color word (Russian or English, see
colors.py). Node identity is delegated to a NodeIdentityPolicy and
pins are reused per type through TypeBucketedPins.
"""
import re
from typing import Dict, List, NamedTuple, Optional, Tuple

from loguru import logger

from ..config import AppConfig, get_default_config
from ..core.graph import Graph
from ..core.node import Node
from ..core.pins import PinType
from .base import BaseGraphParser, ParseReport, iter_lines
from .colors import color_to_type, type_to_color
from .identity import NodeIdentityPolicy, TypeBucketedPins, make_identity_policy


CONNECTION = re.compile(
    r"\[([^\]]+)\]\s*\(([^)]+?)\s*-\s*([^)]+?)\)\s*(?:→|->)\s*"
    r"\[([^\]]+)\]\s*\(([^)]+?)\s*-\s*([^)]+?)\)"
)
DECLARATION = re.compile(r"\[([^\]]+)\](?:\s*\(([^)]+?)\s*-\s*([^)]+?)\))?")


class _PendingLink(NamedTuple):
    line_no: int
    raw: str
    from_node: Node
    from_pin: str
    from_type: PinType
    to_node: Node
    to_pin: str
    to_type: PinType


class LegacyArrowParser(BaseGraphParser):
    """Parser and generator for the colored bracket notation."""

    format_name = "legacy"
    category = "Legacy"

    @classmethod
    def _parse_into(cls, report: ParseReport, text: str, config: AppConfig) -> None:
        cls.parse_into_with_policy(
            report, text, config,
            make_identity_policy(config.legacy.identity_policy, config.legacy.reuse_window)
        )

    @classmethod
    def parse_with_policy(
        cls,
        text: str,
        policy: NodeIdentityPolicy,
        config: Optional[AppConfig] = None
    ) -> ParseReport:
        """
        Parse with an explicit identity policy instead of the configured one.

        Args:
            text: Raw notation text
            policy: Identity policy instance (fresh per parse)
            config: Optional settings for layout

        Returns:
            ParseReport with graph and diagnostics
        """
        report = ParseReport(graph=Graph())
        cls.parse_into_with_policy(report, text, config or get_default_config(), policy)
        return report

    @classmethod
    def parse_into_with_policy(
        cls,
        report: ParseReport,
        text: str,
        config: AppConfig,
        policy: NodeIdentityPolicy
    ) -> None:
        graph = report.graph
        nodes: Dict[str, Node] = {}
        pending: List[_PendingLink] = []

        def get_or_create(raw_name: str, pin_type: Optional[PinType], index: int) -> Node:
            key, title = policy.resolve(raw_name, pin_type, index)
            node = nodes.get(key)
            if node is None:
                node = graph.add_node(Node(title, category=cls.category))
                nodes[key] = node
            return node

        content_index = 0
        for line_no, raw in iter_lines(text):
            line = raw.strip()
            if not line or line.startswith("//"):
                continue
            index = content_index
            content_index += 1

            match = CONNECTION.search(line)
            if match:
                from_name, from_pin, from_color, to_name, to_pin, to_color = match.groups()
                from_type, to_type = color_to_type(from_color), color_to_type(to_color)
                pending.append(_PendingLink(
                    line_no, raw,
                    get_or_create(from_name, from_type, index), from_pin.strip(), from_type,
                    get_or_create(to_name, to_type, index), to_pin.strip(), to_type,
                ))
                continue

            match = DECLARATION.fullmatch(line)
            if match:
                name, _pin, color = match.groups()
                get_or_create(name, color_to_type(color) if color else None, index)
                continue

            report.skip(line_no, raw, "not a colored connection or node declaration")

        # Resolve connections once every node exists
        pins = TypeBucketedPins()
        for link in pending:
            from_pin = pins.ensure_output(link.from_node, link.from_type, link.from_pin)
            to_pin = pins.ensure_input(link.to_node, link.to_type, link.to_pin)
            conn = graph.connect(
                link.from_node.node_id, from_pin.pin_id,
                link.to_node.node_id, to_pin.pin_id
            )
            if conn is None:
                report.skip(
                    link.line_no, link.raw,
                    f"cannot connect {link.from_type.value} to {link.to_type.value}"
                )

        layout = config.layout
        for index, node in enumerate(nodes.values()):
            node.set_position(layout.legacy_origin + index * layout.legacy_spacing, layout.legacy_origin)
            node.width, node.height = layout.node_width, layout.node_height

        logger.debug(
            f"Legacy parse ({policy.name}): {len(graph.nodes)} nodes, "
            f"{len(graph.connections)} connections, {report.skipped_count} skipped"
        )

    @classmethod
    def generate(cls, graph: Graph) -> str:
        """
        Generate colored notation from a graph.

        Unconnected nodes become `[Title]` declarations; every
        connection becomes one colored arrow line.
        """
        lines: List[str] = []

        for node in graph.get_all_nodes():
            if not graph.get_connections_for_node(node.node_id):
                lines.append(f"[{node.title}]")

        for conn in graph.get_all_connections():
            endpoints = cls._endpoints(graph, conn)
            if endpoints is None:
                continue
            (from_title, from_pin), (to_title, to_pin) = endpoints
            lines.append(
                f"[{from_title}] ({from_pin.name} - {type_to_color(from_pin.pin_type)}) → "
                f"[{to_title}] ({to_pin.name} - {type_to_color(to_pin.pin_type)})"
            )

        return "\n".join(lines)

    @staticmethod
    def _endpoints(graph: Graph, conn) -> Optional[Tuple[tuple, tuple]]:
        from_node = graph.get_node(conn.from_node_id)
        to_node = graph.get_node(conn.to_node_id)
        if from_node is None or to_node is None:
            return None
        from_pin = from_node.get_pin(conn.from_pin_id)
        to_pin = to_node.get_pin(conn.to_pin_id)
        if from_pin is None or to_pin is None:
            return None
        return (from_node.title, from_pin), (to_node.title, to_pin)
