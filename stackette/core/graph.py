from __future__ import annotations
"""Light-weight DAG utilities.

Used both to order the steps of a build plan and to order resources when
a stack is rendered.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Iterator, Optional, Set

__all__ = ["GraphNode", "GraphEdge", "Graph"]


@dataclass(eq=False)
class GraphNode:  # noqa: D101 – tiny data holder
    id: str
    ref: object  # Pointer to the actual build step / resource
    downstream: List["GraphNode"] = field(default_factory=list)

    # Convenience --------------------------------------------------------- #
    def connect(self, *targets: "GraphNode") -> "GraphNode":
        """Add *targets* to *self.downstream* and return *self* to allow chaining."""
        self.downstream.extend(targets)
        return self

    # Iteration ----------------------------------------------------------- #
    def __iter__(self) -> Iterator["GraphNode"]:  # depth-first iteration
        yield self
        for child in self.downstream:
            yield from child


@dataclass
class GraphEdge:  # noqa: D101
    src: GraphNode
    dst: GraphNode


class Graph:  # noqa: D101
    def __init__(self, roots: Optional[List[GraphNode]] = None):
        self.roots: List[GraphNode] = roots or []
        self._registered: Dict[str, GraphNode] = {}

    # -------------------------------------------------- #
    def add_root(self, node: GraphNode):
        self.roots.append(node)

    def add_node(self, node: GraphNode) -> GraphNode:
        """Register *node* so it takes part in ordering even without edges."""
        if node.id in self._registered:
            raise ValueError(f"Duplicate graph node '{node.id}'")
        self._registered[node.id] = node
        return node

    def get(self, node_id: str) -> GraphNode:
        return self._registered[node_id]

    # -------------------------------------------------- #
    def nodes(self) -> List[GraphNode]:
        """Return nodes in depth-first order (duplicates removed)."""
        seen: Set[str] = set()
        ordered: List[GraphNode] = []
        starts = list(self.roots) + list(self._registered.values())
        for root in starts:
            for n in root:
                if n.id not in seen:
                    seen.add(n.id)
                    ordered.append(n)
        return ordered

    # -------------------------------------------------- #
    def edges(self) -> List[GraphEdge]:
        es: List[GraphEdge] = []
        for node in self.nodes():
            for child in node.downstream:
                es.append(GraphEdge(node, child))
        return es

    # -------------------------------------------------- #
    def validate_dag(self) -> None:
        """Ensure the graph has no cycles (simple DFS). Raises ValueError otherwise."""
        visited: Set[str] = set()
        stack: Set[str] = set()

        def _visit(n: GraphNode):
            if n.id in stack:
                raise ValueError(f"Cycle detected at node '{n.id}'")
            if n.id in visited:
                return
            stack.add(n.id)
            for c in n.downstream:
                _visit(c)
            stack.remove(n.id)
            visited.add(n.id)

        for r in list(self.roots) + list(self._registered.values()):
            _visit(r)

    # -------------------------------------------------- #
    def topological_order(self) -> List[GraphNode]:
        """Return nodes so that every edge points forward (Kahn).

        Ties are broken by registration order, which keeps the output stable
        for a given construction sequence.
        """
        self.validate_dag()
        nodes = self.nodes()
        position: Dict[str, int] = {}
        for i, n in enumerate(list(self._registered.values()) + nodes):
            position.setdefault(n.id, i)
        indegree: Dict[str, int] = {n.id: 0 for n in nodes}
        for edge in self.edges():
            indegree[edge.dst.id] += 1

        ready = [n for n in nodes if indegree[n.id] == 0]
        ordered: List[GraphNode] = []
        while ready:
            ready.sort(key=lambda n: position[n.id])
            current = ready.pop(0)
            ordered.append(current)
            for child in current.downstream:
                indegree[child.id] -= 1
                if indegree[child.id] == 0:
                    ready.append(child)
        return ordered
