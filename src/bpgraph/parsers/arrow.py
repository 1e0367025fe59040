# -*- coding: utf-8 -*-
"""
Arrow Parser - `A -> B` notation with optional pin type lists.

Supported lines:
    Start -> Branch -> Print
    Branch[in:Exec,Bool|out:Exec,Exec]
    Add[in:Int,Int|out:Int] -> Print[in:Int]

Identifiers that never carry a pin spec get one Exec input and one
Exec output pin, so plain `A -> B` chains connect. Each arrow
connects the first output pin of the source to the first input
pin of the target.
"""
import re
from typing import Dict, List, Optional, Tuple

from loguru import logger

from ..config import AppConfig
from ..core.graph import Graph
from ..core.node import Node
from ..core.pins import PinType
from .base import BaseGraphParser, ParseReport, iter_lines


ARROW_SPLIT = re.compile(r"\s*(?:->|→)\s*")
SEGMENT = re.compile(r"(\w+)\s*(?:\[([^\]]*)\])?")
PIN_SPEC_IN = re.compile(r"in:\s*([^|]*)")
PIN_SPEC_OUT = re.compile(r"out:\s*([^|]*)")

TYPE_KEYWORDS = {
    "EXEC": PinType.EXEC,
    "BOOL": PinType.BOOLEAN,
    "BOOLEAN": PinType.BOOLEAN,
    "INT": PinType.INTEGER,
    "INTEGER": PinType.INTEGER,
    "FLOAT": PinType.FLOAT,
    "STRING": PinType.STRING,
    "OBJECT": PinType.OBJECT,
    "VECTOR": PinType.VECTOR,
    "WILDCARD": PinType.WILDCARD,
}

PinSpec = Tuple[List[PinType], List[PinType]]


def parse_type(keyword: str) -> PinType:
    """Case-insensitive type keyword lookup; unknown words are Wildcard."""
    return TYPE_KEYWORDS.get(keyword.strip().upper(), PinType.WILDCARD)


def parse_pin_spec(spec: str) -> Optional[PinSpec]:
    """
    Parse the inside of `[in:T1,T2|out:T3]`.

    Returns:
        (input types, output types), or None if the brackets hold
        a plain label rather than a pin spec
    """
    in_match = PIN_SPEC_IN.search(spec)
    out_match = PIN_SPEC_OUT.search(spec)
    if in_match is None and out_match is None:
        return None

    def _types(match) -> List[PinType]:
        if match is None:
            return []
        return [parse_type(part) for part in match.group(1).split(",") if part.strip()]

    return _types(in_match), _types(out_match)


class ArrowParser(BaseGraphParser):
    """Parser and generator for the simple and typed arrow notation."""

    format_name = "arrow"
    category = "Arrow"

    @classmethod
    def _parse_into(cls, report: ParseReport, text: str, config: AppConfig) -> None:
        graph = report.graph
        specs: Dict[str, Optional[PinSpec]] = {}
        pairs: List[Tuple[int, str, str, str]] = []

        # First pass: collect identifiers, pin specs and arrow pairs
        for line_no, raw in iter_lines(text):
            line = raw.strip()
            if not line or line.startswith("//"):
                continue

            segments = ARROW_SPLIT.split(line)
            idents: List[Optional[str]] = []
            for segment in segments:
                match = SEGMENT.fullmatch(segment)
                if match is None:
                    report.skip(line_no, raw, f"unrecognized node reference '{segment}'")
                    idents.append(None)
                    continue

                ident, spec_text = match.group(1), match.group(2)
                spec = parse_pin_spec(spec_text) if spec_text is not None else None
                if len(segments) == 1 and spec is None:
                    report.skip(line_no, raw, "no arrow or pin spec")
                    idents.append(None)
                    continue

                cls._record_spec(report, specs, ident, spec, line_no, raw)
                idents.append(ident)

            for source, target in zip(idents, idents[1:]):
                if source is not None and target is not None:
                    pairs.append((line_no, raw, source, target))

        # Materialize one node per identifier
        layout = config.layout
        nodes: Dict[str, Node] = {}
        for index, (ident, spec) in enumerate(specs.items()):
            node = Node(ident, category=cls.category)
            node.set_position(index * layout.arrow_spacing, 0)
            node.width, node.height = layout.node_width, layout.node_height

            inputs, outputs = spec if spec is not None else ([PinType.EXEC], [PinType.EXEC])
            for idx, pin_type in enumerate(inputs):
                node.add_input_pin(f"in_{idx}", pin_type)
            for idx, pin_type in enumerate(outputs):
                node.add_output_pin(f"out_{idx}", pin_type)

            nodes[ident] = graph.add_node(node)

        # Second pass: first output -> first input
        for line_no, raw, source, target in pairs:
            from_node, to_node = nodes[source], nodes[target]
            if not from_node.outputs or not to_node.inputs:
                report.skip(line_no, raw, f"{source} -> {target}: missing pin")
                continue
            conn = graph.connect(
                from_node.node_id, from_node.outputs[0].pin_id,
                to_node.node_id, to_node.inputs[0].pin_id
            )
            if conn is None:
                report.skip(line_no, raw, f"{source} -> {target}: incompatible pin types")

        logger.debug(
            f"Arrow parse: {len(graph.nodes)} nodes, {len(graph.connections)} connections, "
            f"{report.skipped_count} skipped"
        )

    @staticmethod
    def _record_spec(report, specs, ident, spec, line_no, raw) -> None:
        if ident not in specs or specs[ident] is None:
            specs[ident] = spec
        elif spec is not None and spec != specs[ident]:
            report.skip(line_no, raw, f"conflicting pin spec for {ident} ignored")

    @classmethod
    def generate(cls, graph: Graph) -> str:
        """
        Generate arrow text from a graph.

        Node lines carry bracketed type lists; connection lines use
        titles, so pin pairing beyond the first pin is not kept.
        """
        lines: List[str] = []

        for node in graph.get_all_nodes():
            line = node.title
            parts = []
            if node.inputs:
                parts.append("in:" + ",".join(pin.pin_type.value for pin in node.inputs))
            if node.outputs:
                parts.append("out:" + ",".join(pin.pin_type.value for pin in node.outputs))
            if parts:
                line += f"[{'|'.join(parts)}]"
            lines.append(line)

        for conn in graph.get_all_connections():
            from_node = graph.get_node(conn.from_node_id)
            to_node = graph.get_node(conn.to_node_id)
            if from_node and to_node:
                lines.append(f"{from_node.title} -> {to_node.title}")

        return "\n".join(lines)
