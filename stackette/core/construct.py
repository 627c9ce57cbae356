from __future__ import annotations

"""Base Construct class for the Stackette construct tree."""

from typing import Dict, Iterator, List

__all__ = ["Construct"]


class Construct:
    """A node in the construct tree.

    Every construct is created inside a *scope* (``None`` only for the tree
    root) under an *id* that is unique among its siblings.
    """

    def __init__(self, scope: "Construct | None", id: str) -> None:
        self.scope = scope
        self.id = id
        self.children: Dict[str, Construct] = {}

        if scope is not None:
            if not id:
                raise ValueError(f"Only the root construct may have an empty id (scope '{scope.path}')")
            if id in scope.children:
                raise ValueError(f"There is already a construct named '{id}' in '{scope.path or '<root>'}'")
            scope.children[id] = self

    # -------------------------------------------------- #
    @property
    def scopes(self) -> List["Construct"]:
        """Return the chain of constructs from the root down to *self*."""
        chain: List[Construct] = []
        node: Construct | None = self
        while node is not None:
            chain.append(node)
            node = node.scope
        return list(reversed(chain))

    @property
    def path(self) -> str:
        return "/".join(c.id for c in self.scopes if c.id)

    @property
    def stack(self):
        """Return the nearest enclosing Stack."""
        from stackette.core.stack import Stack

        for node in reversed(self.scopes):
            if isinstance(node, Stack):
                return node
        raise ValueError(f"Construct '{self.path}' is not defined within a Stack")

    # -------------------------------------------------- #
    def walk(self) -> Iterator["Construct"]:
        """Depth-first iteration, *self* first."""
        yield self
        for child in self.children.values():
            yield from child.walk()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.path or '<root>'}>"
