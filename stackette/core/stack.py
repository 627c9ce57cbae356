from __future__ import annotations

"""Stack and App: the roots that turn a construct tree into templates."""

from pathlib import Path
from typing import Any, Dict, List

from stackette.core.construct import Construct
from stackette.core.graph import Graph, GraphNode
from stackette.core.node import CfnResource
from stackette.core.tokens import references, resolve
from stackette.io.writer import TemplateWriter
from stackette.utils.events import publish, StackSynthesized
from stackette.utils.ids import logical_id

__all__ = ["Stack", "App", "CfnOutput"]


class CfnOutput(Construct):  # noqa: D101
    def __init__(self, scope: Construct, id: str, *, value: Any, description: str | None = None) -> None:
        super().__init__(scope, id)
        self.value = value
        self.description = description
        self.logical_id = self.stack.allocate_logical_id(self)

    def to_cfn(self) -> Dict[str, Any]:
        rendered: Dict[str, Any] = {"Value": resolve(self.value)}
        if self.description:
            rendered["Description"] = self.description
        return rendered


class Stack(Construct):
    """A deployable unit: owns the logical id namespace of its resources."""

    def __init__(self, scope: "App | None" = None, id: str = "Stack", *, description: str | None = None) -> None:
        super().__init__(scope, id)
        self.description = description
        self._logical_ids: Dict[str, Construct] = {}

    # -------------------------------------------------- #
    def allocate_logical_id(self, construct: Construct) -> str:
        scopes = construct.scopes
        components = [c.id for c in scopes[scopes.index(self) + 1:]]
        lid = logical_id(components)
        if lid in self._logical_ids:
            raise ValueError(
                f"Logical id '{lid}' of '{construct.path}' is already used by "
                f"'{self._logical_ids[lid].path}'"
            )
        self._logical_ids[lid] = construct
        return lid

    def resources(self) -> List[CfnResource]:
        return [c for c in self.walk() if isinstance(c, CfnResource)]

    def outputs(self) -> List[CfnOutput]:
        return [c for c in self.walk() if isinstance(c, CfnOutput)]

    # -------------------------------------------------- #
    def resource_graph(self) -> Graph:
        """Return the graph of resources, edges pointing from a resource to its dependents."""
        graph = Graph()
        for res in self.resources():
            graph.add_node(GraphNode(id=res.logical_id, ref=res))

        for res in self.resources():
            for dep in sorted(res.dependencies()):
                try:
                    upstream = graph.get(dep)
                except KeyError:
                    raise ValueError(f"'{res.path}' references unknown resource '{dep}'") from None
                upstream.connect(graph.get(res.logical_id))
        return graph

    def to_template(self) -> Dict[str, Any]:
        """Render the stack; resources are listed in dependency order."""
        ordered = self.resource_graph().topological_order()

        template: Dict[str, Any] = {}
        if self.description:
            template["Description"] = self.description
        template["Resources"] = {n.id: n.ref.to_cfn() for n in ordered}  # type: ignore[attr-defined]

        outputs = self.outputs()
        if outputs:
            known = set(template["Resources"])
            for out in outputs:
                missing = [t for t in references(out.value) if t not in known]
                if missing:
                    raise ValueError(f"Output '{out.path}' references unknown resource '{missing[0]}'")
            template["Outputs"] = {out.logical_id: out.to_cfn() for out in outputs}

        publish(StackSynthesized(stack=self.id, resource_count=len(ordered)))
        return template


class App(Construct):
    """Root of the construct tree; synthesizes every stack it contains."""

    def __init__(self, *, name: str = "app", outdir: str | Path | None = None) -> None:
        super().__init__(None, "")
        self.name = name
        self.outdir = Path(outdir) if outdir is not None else None

    @property
    def stacks(self) -> List[Stack]:
        return [c for c in self.children.values() if isinstance(c, Stack)]

    def synth(self, outdir: str | Path | None = None) -> Dict[str, Dict[str, Any]]:
        """Render all stacks; write them to *outdir* (or ``self.outdir``) when set."""
        templates = {stack.id: stack.to_template() for stack in self.stacks}

        target = Path(outdir) if outdir is not None else self.outdir
        if target is not None:
            writer = TemplateWriter(target)
            for name, template in templates.items():
                writer.write_stack(name, template)
            writer.finalize(self.name)

        return templates
