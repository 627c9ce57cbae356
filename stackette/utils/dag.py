from __future__ import annotations

"""Construct tree helpers (no side-effects).

iter_constructs(root) yields (depth, construct) depth-first.
build_rich_tree(root) returns a Rich *Tree* ready for printing.
"""
from typing import Any, Iterator, Tuple

from stackette.utils.constants import STYLE, SYMBOLS

__all__ = [
    "iter_constructs",
    "build_rich_tree",
]


def iter_constructs(root: Any) -> Iterator[Tuple[int, Any]]:  # noqa: D401
    """Yield *(depth, construct)* for *root* and everything below it (DFS)."""

    def _walk(obj: Any, depth: int):
        yield depth, obj
        for child in obj.children.values():
            yield from _walk(child, depth + 1)

    yield from _walk(root, 0)


def _label(obj: Any) -> str:
    # Local imports keep this module importable from the logging setup.
    from stackette.core.stack import App, CfnOutput, Stack
    from stackette.core.node import CfnResource

    if isinstance(obj, App):
        return f"{SYMBOLS['app']}[{STYLE['header']}]App[/]"
    if isinstance(obj, Stack):
        return f"{SYMBOLS['stack']}[{STYLE['node_stack']}]{obj.id}[/]"
    if isinstance(obj, CfnResource):
        return (
            f"{SYMBOLS['resource']}[{STYLE['node_resource']}]{obj.id}[/] "
            f"[{STYLE['resource_type']}]{obj.resource_type}[/] "
            f"[{STYLE['logical_id']}]{obj.logical_id}[/]"
        )
    if isinstance(obj, CfnOutput):
        return f"{SYMBOLS['output']}[{STYLE['node_resource']}]{obj.id}[/] [{STYLE['dim']}]output[/]"
    return f"{SYMBOLS['construct']}[{STYLE['node_construct']}]{obj.id}[/]"


def build_rich_tree(root: Any):  # noqa: D401 – return type is Tree but avoid import
    """Return a *rich.tree.Tree* visualisation of *root* (side-effect-free)."""
    from rich.tree import Tree  # local import keeps this module lightweight

    tree = Tree("[bold]Construct Tree[/]")

    def _add(parent: "Tree", obj: Any):
        node = parent.add(_label(obj))
        for child in obj.children.values():
            _add(node, child)

    _add(tree, root)
    return tree
