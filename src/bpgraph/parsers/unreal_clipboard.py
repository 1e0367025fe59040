# -*- coding: utf-8 -*-
"""
Unreal Clipboard Parser - best-effort reader for `Begin Object` dumps.

Reads the text Unreal Editor puts on the clipboard when Blueprint or
Material nodes are copied. Only what is needed for the graph view
is extracted: node name, title, position, pins and LinkedTo links.
Anything unrecognized is ignored.
"""
import re
from typing import Dict, List, Tuple

from loguru import logger

from ..config import AppConfig
from ..core.connection import Connection
from ..core.graph import Graph
from ..core.node import Node
from ..core.pins import PinType
from .base import BaseGraphParser, ParseReport


BEGIN_MARKER = "Begin Object"
END_MARKER = "End Object"

NAME = re.compile(r'Name="(.*?)"')
POS_X = re.compile(r"NodePosX=(-?\d+)")
POS_Y = re.compile(r"NodePosY=(-?\d+)")
CLASS = re.compile(r"Class=\S*?\.(\w+)")
PIN_LINE = re.compile(r"CustomProperties Pin \((.*)\)\s*$")

PIN_ID = re.compile(r"PinId=([0-9A-Fa-f\-]+)")
PIN_NAME = re.compile(r'PinName="(.*?)"')
DIRECTION = re.compile(r'Direction="(.*?)"')
PIN_CATEGORY = re.compile(r'PinType\.PinCategory="(.*?)"')
PIN_SUB_OBJECT = re.compile(r'PinType\.PinSubCategoryObject=(\S*?)[,)]')
LINKED_TO = re.compile(r"LinkedTo=\((.*?)\)")

NUMBER_CATEGORIES = {"int": PinType.INTEGER, "int64": PinType.INTEGER, "byte": PinType.INTEGER,
                     "real": PinType.FLOAT, "float": PinType.FLOAT, "double": PinType.FLOAT}


def unreal_pin_type(category: str, sub_category_object: str = "") -> PinType:
    """Map Unreal PinCategory (+ struct object) to a pin type."""
    cat = category.lower()
    if cat == "exec":
        return PinType.EXEC
    if cat == "bool":
        return PinType.BOOLEAN
    if cat in NUMBER_CATEGORIES:
        return NUMBER_CATEGORIES[cat]
    if cat in ("string", "name", "text"):
        return PinType.STRING
    if cat == "struct":
        sub = sub_category_object.lower()
        if "vector" in sub or "rotator" in sub or "transform" in sub:
            return PinType.VECTOR
        return PinType.OBJECT
    if cat in ("object", "class", "softobject", "interface"):
        return PinType.OBJECT
    return PinType.WILDCARD


def split_blocks(text: str) -> List[str]:
    """Top-level `Begin Object ... End Object` blocks (nested ones kept inside)."""
    blocks: List[str] = []
    current: List[str] = []
    depth = 0
    for line in text.splitlines():
        if BEGIN_MARKER in line:
            depth += 1
            current.append(line)
        elif END_MARKER in line:
            if depth == 0:
                continue
            depth -= 1
            current.append(line)
            if depth == 0:
                blocks.append("\n".join(current))
                current = []
        elif depth > 0:
            current.append(line)
    return blocks


def _camel_words(name: str) -> str:
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", name).strip()


def node_title(internal_id: str, block: str) -> str:
    """Best-effort human title for one object block."""
    if internal_id.startswith("MaterialGraphNode"):
        expr = re.search(r"MaterialExpression=\S*?MaterialExpression(\w+)", block)
        if not expr:
            return internal_id
        param = re.search(r'ParameterName="(.*?)"', block)
        return f"{expr.group(1)} ({param.group(1)})" if param else expr.group(1)

    event = re.search(r'EventReference=\(.*?MemberName="(.*?)"', block)
    if event:
        return _camel_words(event.group(1).replace("Receive", "Event", 1))

    custom = re.search(r'CustomFunctionName="(.*?)"', block)
    if custom:
        return custom.group(1)

    timeline = re.search(r'TimelineName="(.*?)"', block)
    if timeline:
        return f"Timeline ({timeline.group(1)})"

    if "MacroGraphReference" in block:
        macro = re.search(r"MacroGraph=\S*?:(\w+)", block)
        return macro.group(1) if macro else "Macro"

    function = re.search(r'FunctionReference=\(.*?MemberName="(.*?)"', block)
    if function:
        return re.sub(r"^K2_", "", function.group(1))

    variable = re.search(r'VariableReference=\(.*?MemberName="(.*?)"', block)
    if variable:
        verb = "Set" if "K2Node_VariableSet" in block else "Get"
        return f"{verb} {variable.group(1)}"

    cls = CLASS.search(block)
    return cls.group(1).replace("K2Node_", "") if cls else internal_id


def _first(pattern: re.Pattern, text: str, default: str = "") -> str:
    match = pattern.search(text)
    return match.group(1) if match else default


class UnrealClipboardParser(BaseGraphParser):
    """Best-effort `Begin Object` importer. Generation is not supported."""

    format_name = "unreal"

    @classmethod
    def _parse_into(cls, report: ParseReport, text: str, config: AppConfig) -> None:
        graph = report.graph
        nodes: Dict[str, Node] = {}
        links: List[Tuple[str, str, str, str]] = []

        for index, block in enumerate(split_blocks(text)):
            internal_id = _first(NAME, block, f"Node_{index}")
            category = "Material" if internal_id.startswith("MaterialGraphNode") else "Blueprint"
            node = Node(node_title(internal_id, block), category=category, node_id=internal_id)
            node.set_position(int(_first(POS_X, block, "0")), int(_first(POS_Y, block, "0")))

            for line in block.splitlines():
                pin_match = PIN_LINE.search(line)
                if pin_match:
                    links.extend(cls._add_pin(node, internal_id, pin_match.group(1)))

            rows = max(len(node.inputs), len(node.outputs), 1)
            node.width = max(config.layout.node_width, len(node.title) * 9 + 80)
            node.height = 40 + rows * 26 + 10
            nodes[internal_id] = graph.add_node(node)

        for from_id, from_guid, to_id, to_guid in links:
            from_node, to_node = nodes.get(from_id), nodes.get(to_id)
            if from_node is None or to_node is None:
                continue
            to_pin = to_node.get_pin(f"{to_id}:{to_guid}")
            if to_pin is None or not to_pin.is_input:
                continue
            conn = Connection(
                from_id, f"{from_id}:{from_guid}", to_id, to_pin.pin_id,
                connection_id=f"c_{from_id}_{from_guid}_{to_id}_{to_guid}"
            )
            graph.add_connection(conn)

        logger.debug(f"Unreal clipboard parse: {len(graph.nodes)} nodes, {len(graph.connections)} connections")

    @staticmethod
    def _add_pin(node: Node, internal_id: str, props: str) -> List[Tuple[str, str, str, str]]:
        guid = _first(PIN_ID, props, "pin")
        name = _first(PIN_NAME, props, guid)
        is_output = _first(DIRECTION, props) == "EGPD_Output"
        pin_type = unreal_pin_type(_first(PIN_CATEGORY, props, "other"), _first(PIN_SUB_OBJECT, props))

        pin_id = f"{internal_id}:{guid}"
        if is_output:
            node.add_output_pin(name, pin_type, pin_id=pin_id)
        else:
            node.add_input_pin(name, pin_type, pin_id=pin_id)
            return []

        links = []
        for link in _first(LINKED_TO, props).split(","):
            parts = link.strip().split()
            if len(parts) >= 2:
                links.append((internal_id, guid, parts[0], parts[1].strip('"')))
        return links

    @classmethod
    def generate(cls, graph: Graph) -> str:
        raise ValueError("Unreal clipboard export is not supported")


def looks_like_unreal_clipboard(text: str) -> bool:
    return BEGIN_MARKER in text
