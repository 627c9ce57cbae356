from __future__ import annotations

"""Dependency-ordered build sequence.

A *BuildPlan* is a handful of named :class:`BuildStep` objects.  Each step
declares the steps it needs; the plan runs them in topological order and
hands every step the results built so far.  A step returning ``None`` is
considered skipped: its name maps to ``None`` and nothing was constructed.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

from stackette.core.graph import Graph, GraphNode
from stackette.utils.logging import log

__all__ = ["BuildStep", "BuildPlan"]


@dataclass(frozen=True)
class BuildStep:  # noqa: D101
    name: str
    fn: Callable[[Mapping[str, Any]], Any]
    requires: Tuple[str, ...] = ()


class BuildPlan:  # noqa: D101
    def __init__(self, steps: Sequence[BuildStep]):
        self.steps = list(steps)
        self.graph = self._build_graph()

    # ------------------------------------------------------------------ #
    def _build_graph(self) -> Graph:
        graph = Graph()
        for step in self.steps:
            graph.add_node(GraphNode(id=step.name, ref=step))

        for step in self.steps:
            for dep in step.requires:
                try:
                    upstream = graph.get(dep)
                except KeyError:
                    raise ValueError(
                        f"Build step '{step.name}' requires unknown step '{dep}'"
                    ) from None
                upstream.connect(graph.get(step.name))

        graph.validate_dag()
        return graph

    # ------------------------------------------------------------------ #
    def order(self) -> List[str]:
        return [n.id for n in self.graph.topological_order()]

    def run(self) -> Dict[str, Any]:
        """Execute every step once, in dependency order; return results by name."""
        built: Dict[str, Any] = {}
        for node in self.graph.topological_order():
            step: BuildStep = node.ref  # type: ignore[assignment]
            built[step.name] = step.fn(built)
            if built[step.name] is None:
                log.debug("build step '%s' skipped", step.name)
        return built
