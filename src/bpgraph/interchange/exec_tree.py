# -*- coding: utf-8 -*-
"""
Execution Tree - ASCII view of the Exec-typed control flow.

Only connections whose source pin is Exec take part; data
connections stay in the graph but are not shown.

Example output:
    Start
    └── Branch (then→execute)
        ├── Print (true→execute)
        └── Start [loop] (false→execute)
"""
from typing import Dict, List, Set, Tuple

from ..core.connection import Connection
from ..core.graph import Graph
from ..core.pins import PinType


NO_EXEC_FLOW = "No execution flow detected."


class ExecutionTreeBuilder:
    """
    Builds a deterministic, cycle-safe tree per Exec root.

    Roots are nodes with no incoming and at least one outgoing Exec
    connection. Each root is rendered with its own seen set, so a
    node may appear under several roots. A node already on the
    current path renders as `[loop]`, one already rendered under
    the same root as `[seen]`.
    """

    def __init__(self, graph: Graph):
        self.graph = graph
        self._outgoing: Dict[str, List[Connection]] = {node_id: [] for node_id in graph.nodes}
        self._incoming: Dict[str, int] = {node_id: 0 for node_id in graph.nodes}

        for conn in graph.get_all_connections():
            if self._is_exec(conn):
                self._outgoing[conn.from_node_id].append(conn)
                self._incoming[conn.to_node_id] += 1

    def _is_exec(self, conn: Connection) -> bool:
        node = self.graph.get_node(conn.from_node_id)
        if node is None or conn.to_node_id not in self.graph.nodes:
            return False
        pin = next((p for p in node.outputs if p.pin_id == conn.from_pin_id), None)
        return pin is not None and pin.pin_type == PinType.EXEC

    def roots(self) -> List[str]:
        return [
            node_id for node_id in self.graph.nodes
            if self._incoming[node_id] == 0 and self._outgoing[node_id]
        ]

    def build(self) -> str:
        blocks = []
        for root_id in self.roots():
            lines = [self.graph.nodes[root_id].title]
            self._render_children(root_id, "", {root_id}, set(), lines)
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks) if blocks else NO_EXEC_FLOW

    def _children(self, node_id: str) -> List[Tuple[str, List[str]]]:
        """Targets with their `from→to` labels, sorted by (title, labels)."""
        node = self.graph.nodes[node_id]
        groups: Dict[str, List[str]] = {}
        for conn in self._outgoing[node_id]:
            target = self.graph.nodes[conn.to_node_id]
            from_pin = next((p for p in node.outputs if p.pin_id == conn.from_pin_id), None)
            to_pin = next((p for p in target.inputs if p.pin_id == conn.to_pin_id), None)
            if from_pin is None or to_pin is None:
                continue
            groups.setdefault(conn.to_node_id, []).append(f"{from_pin.name}→{to_pin.name}")

        children = [(target_id, sorted(labels)) for target_id, labels in groups.items()]
        return sorted(
            children,
            key=lambda item: (self.graph.nodes[item[0]].title, ", ".join(item[1]))
        )

    def _render_children(
        self,
        node_id: str,
        prefix: str,
        path: Set[str],
        seen: Set[str],
        lines: List[str]
    ) -> None:
        children = self._children(node_id)
        for index, (target_id, labels) in enumerate(children):
            is_last = index == len(children) - 1
            connector = "└── " if is_last else "├── "
            title = self.graph.nodes[target_id].title
            label = f" ({', '.join(labels)})"

            if target_id in path:
                lines.append(f"{prefix}{connector}{title} [loop]{label}")
                continue
            if target_id in seen:
                lines.append(f"{prefix}{connector}{title} [seen]{label}")
                continue

            lines.append(f"{prefix}{connector}{title}{label}")
            seen.add(target_id)
            child_prefix = prefix + ("    " if is_last else "│   ")
            self._render_children(target_id, child_prefix, path | {target_id}, seen, lines)


def build_exec_tree(graph: Graph) -> str:
    return ExecutionTreeBuilder(graph).build()
