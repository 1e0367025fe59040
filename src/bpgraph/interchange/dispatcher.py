# -*- coding: utf-8 -*-
"""
Universal Dispatcher - format sniffing and export helpers.

Detection is a fixed priority chain, first match wins:
1. `Begin Object`            -> Unreal clipboard
2. `├──` or `└──`            -> ASCII tree
3. `[` and `(` plus an arrow -> colored (legacy) arrow
4. anything else             -> arrow

Example:
    view = parse_universal(text)
    print(build_ascii_tree_exec(view.nodes, view.connections))
"""
from enum import Enum
from typing import Dict, List, Optional, Type

from loguru import logger

from ..config import AppConfig
from ..core.graph import Graph
from ..parsers.arrow import ArrowParser
from ..parsers.ascii_tree import AsciiTreeParser
from ..parsers.base import BaseGraphParser, ParseReport
from ..parsers.legacy_arrow import LegacyArrowParser
from ..parsers.unreal_clipboard import UnrealClipboardParser, looks_like_unreal_clipboard
from .adapter import ConnectionData, GraphToUIAdapter, GraphView, NodeData, UIToGraphAdapter
from .exec_tree import ExecutionTreeBuilder


class GraphFormat(str, Enum):
    UNREAL = "unreal"
    TREE = "tree"
    LEGACY = "legacy"
    ARROW = "arrow"
    JSON = "json"


PARSERS: Dict[GraphFormat, Type[BaseGraphParser]] = {
    GraphFormat.UNREAL: UnrealClipboardParser,
    GraphFormat.TREE: AsciiTreeParser,
    GraphFormat.LEGACY: LegacyArrowParser,
    GraphFormat.ARROW: ArrowParser,
}


def _has_arrow(text: str) -> bool:
    return "→" in text or "->" in text


def detect_format(text: str) -> GraphFormat:
    """Sniff the notation of raw text. Never fails; arrow is the fallback."""
    if looks_like_unreal_clipboard(text):
        return GraphFormat.UNREAL
    if "├──" in text or "└──" in text:
        return GraphFormat.TREE
    if "[" in text and "(" in text and _has_arrow(text):
        return GraphFormat.LEGACY
    return GraphFormat.ARROW


def parse_with_report(text: str, config: Optional[AppConfig] = None) -> ParseReport:
    fmt = detect_format(text)
    logger.debug(f"Detected format: {fmt.value}")
    return PARSERS[fmt].parse_with_report(text, config)


def parse_graph(text: str, config: Optional[AppConfig] = None) -> Graph:
    """Detect the notation and parse it into a Graph."""
    return parse_with_report(text, config).graph


def parse_universal(text: str, config: Optional[AppConfig] = None) -> GraphView:
    """Detect the notation and return the UI-friendly view."""
    return GraphToUIAdapter.adapt_graph(parse_graph(text, config))


def build_ascii_tree_exec(nodes: List[NodeData], connections: List[ConnectionData]) -> str:
    """Execution tree for a UI view (Exec-typed flow only)."""
    graph = UIToGraphAdapter.adapt_to_graph(nodes, connections)
    return ExecutionTreeBuilder(graph).build()


def generate(graph: Graph, fmt: GraphFormat) -> str:
    """Serialize a graph to one of the writable notations."""
    if fmt == GraphFormat.JSON:
        return graph.to_json()
    if fmt == GraphFormat.UNREAL:
        raise ValueError("Unreal clipboard export is not supported")
    return PARSERS[fmt].generate(graph)


def export_to_arrow(nodes: List[NodeData], connections: List[ConnectionData]) -> str:
    return ArrowParser.generate(UIToGraphAdapter.adapt_to_graph(nodes, connections))


def export_to_tree(nodes: List[NodeData], connections: List[ConnectionData]) -> str:
    return AsciiTreeParser.generate(UIToGraphAdapter.adapt_to_graph(nodes, connections))


def export_to_legacy(nodes: List[NodeData], connections: List[ConnectionData]) -> str:
    return LegacyArrowParser.generate(UIToGraphAdapter.adapt_to_graph(nodes, connections))


def export_to_json(nodes: List[NodeData], connections: List[ConnectionData]) -> str:
    return GraphView(nodes=nodes, connections=connections).model_dump_json(indent=2)


def import_from_json(text: str) -> GraphView:
    """Load a UI view from JSON. Raises pydantic.ValidationError on malformed input."""
    return GraphView.model_validate_json(text)
