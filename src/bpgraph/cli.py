#!/usr/bin/env python3
"""
bpgraph - Console front end.

Converts between graph notations and prints the execution tree.

Usage:
    bpgraph convert graph.txt --to tree
    bpgraph tree graph.txt
    bpgraph stats graph.txt
    bpgraph info graph.txt Branch
    cat graph.txt | bpgraph tree -
"""
import sys
import argparse
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .config import AppConfig, ConfigManager
from .core.graph import Graph
from .interchange.dispatcher import GraphFormat, generate, parse_with_report
from .interchange.exec_tree import build_exec_tree
from .logging import setup_logging
from .parsers.base import StrictParseError


def read_source(path: str) -> str:
    """Read notation text from a file, or stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def load_graph(path: str, config: AppConfig, strict: bool = False) -> Graph:
    text = read_source(path)
    if path.endswith(".json"):
        return Graph.from_json(text)

    report = parse_with_report(text, config)
    for diagnostic in report.diagnostics:
        logger.info(f"Skipped line {diagnostic.line_no}: {diagnostic.reason}")
    if strict:
        report.raise_if_strict()
    return report.graph


def format_stats(graph: Graph) -> str:
    stats = graph.get_statistics()
    return "\n".join([
        "Graph Statistics:",
        "=" * 50,
        f"  Nodes: {stats.node_count}",
        f"  Connections: {stats.connection_count}",
        f"  Categories: {', '.join(stats.categories) or 'None'}",
        "=" * 50,
    ])


def format_node_info(graph: Graph, key: str) -> Optional[str]:
    """Pin listing for the first node whose ID or title matches key."""
    node = graph.get_node(key) or next(
        (n for n in graph.get_all_nodes() if n.title == key), None
    )
    if node is None:
        return None

    lines = [
        f"Node: {node.title}",
        f"  ID: {node.node_id}",
        f"  Category: {node.category}",
        f"  Position: ({node.x:g}, {node.y:g})",
    ]
    for label, pins in (("Input Pins", node.inputs), ("Output Pins", node.outputs)):
        if not pins:
            lines.append(f"  {label}: none")
            continue
        lines.append(f"  {label}:")
        for pin in pins:
            lines.append(f"    {pin.state_indicator()} {pin.name} ({pin.pin_type.value})")
    return "\n".join(lines)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bpgraph",
        description="Blueprint graph notation converter"
    )
    parser.add_argument("--config", help="Path to JSON or TOML settings")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--strict", action="store_true", help="Fail if any line is skipped")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    convert_parser = subparsers.add_parser("convert", help="Convert to another notation")
    convert_parser.add_argument("path", help="Input file or '-' for stdin")
    convert_parser.add_argument(
        "--to", dest="target", required=True,
        choices=[f.value for f in GraphFormat if f != GraphFormat.UNREAL]
    )

    tree_parser = subparsers.add_parser("tree", help="Print the execution tree")
    tree_parser.add_argument("path", help="Input file or '-' for stdin")

    stats_parser = subparsers.add_parser("stats", help="Show statistics")
    stats_parser.add_argument("path", help="Input file or '-' for stdin")

    info_parser = subparsers.add_parser("info", help="Show one node")
    info_parser.add_argument("path", help="Input file or '-' for stdin")
    info_parser.add_argument("node", help="Node ID or title")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for console application."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = ConfigManager(args.config).data if args.config else AppConfig()
    setup_logging(debug_mode=args.debug or config.general.debug_mode, log_dir=config.general.log_dir)

    try:
        graph = load_graph(args.path, config, strict=args.strict)

        if args.command == "convert":
            print(generate(graph, GraphFormat(args.target)))

        elif args.command == "tree":
            print(build_exec_tree(graph))

        elif args.command == "stats":
            print(format_stats(graph))

        elif args.command == "info":
            info = format_node_info(graph, args.node)
            if info is None:
                print(f"Node not found: {args.node}")
                return 1
            print(info)

        return 0

    except StrictParseError as e:
        print(f"Error: {e}")
        return 2

    except (OSError, ValueError) as e:
        logger.error(f"Command failed: {e}")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
