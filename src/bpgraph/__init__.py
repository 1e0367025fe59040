# -*- coding: utf-8 -*-
"""
bpgraph - Blueprint graph notations.

Parses node-and-pin execution graphs written in several plain-text
notations into a typed in-memory graph, validates connections by
pin type, and renders them back as text or as an execution tree.
"""

from .core import (
    PinDirection,
    PinType,
    Pin,
    Node,
    Connection,
    Graph,
    GraphStatistics,
)
from .parsers import (
    ArrowParser,
    AsciiTreeParser,
    LegacyArrowParser,
    UnrealClipboardParser,
    ParseReport,
    StrictParseError,
)
from .interchange import (
    GraphFormat,
    GraphView,
    detect_format,
    parse_graph,
    parse_universal,
    build_ascii_tree_exec,
    build_exec_tree,
)
from .config import AppConfig, ConfigManager
from .logging import setup_logging

__all__ = [
    "PinDirection",
    "PinType",
    "Pin",
    "Node",
    "Connection",
    "Graph",
    "GraphStatistics",
    "ArrowParser",
    "AsciiTreeParser",
    "LegacyArrowParser",
    "UnrealClipboardParser",
    "ParseReport",
    "StrictParseError",
    "GraphFormat",
    "GraphView",
    "detect_format",
    "parse_graph",
    "parse_universal",
    "build_ascii_tree_exec",
    "build_exec_tree",
    "AppConfig",
    "ConfigManager",
    "setup_logging",
]
