# -*- coding: utf-8 -*-
"""
bpgraph Interchange - Format dispatch, UI view and execution tree.
"""

from .adapter import (
    PinData,
    NodeData,
    ConnectionData,
    GraphView,
    GraphToUIAdapter,
    UIToGraphAdapter,
)
from .exec_tree import ExecutionTreeBuilder, build_exec_tree, NO_EXEC_FLOW
from .dispatcher import (
    GraphFormat,
    detect_format,
    parse_graph,
    parse_with_report,
    parse_universal,
    build_ascii_tree_exec,
    generate,
    export_to_arrow,
    export_to_tree,
    export_to_legacy,
    export_to_json,
    import_from_json,
)

__all__ = [
    "PinData",
    "NodeData",
    "ConnectionData",
    "GraphView",
    "GraphToUIAdapter",
    "UIToGraphAdapter",
    "ExecutionTreeBuilder",
    "build_exec_tree",
    "NO_EXEC_FLOW",
    "GraphFormat",
    "detect_format",
    "parse_graph",
    "parse_with_report",
    "parse_universal",
    "build_ascii_tree_exec",
    "generate",
    "export_to_arrow",
    "export_to_tree",
    "export_to_legacy",
    "export_to_json",
    "import_from_json",
]
