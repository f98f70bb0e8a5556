"""Binary directed rooted acyclic graphs (DRAGs) with shared subgraphs."""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass, field
from typing import Any

from dragforge.condition_action import Conact


@dataclass(eq=False)
class Node:
    """A DRAG node; a leaf has neither child."""

    data: Any = field(default_factory=Conact)
    left: "Node | None" = None
    right: "Node | None" = None

    def isleaf(self) -> bool:
        """Tell whether the node has no children."""
        return self.left is None and self.right is None


class BinaryDrag:
    """A possibly multi-rooted binary DRAG owning all of its nodes."""

    def __init__(self) -> None:
        self.nodes: list[Node] = []
        self.roots: list[Node] = []

    def make_node(self, data: Any = None, left: Node | None = None,
                  right: Node | None = None) -> Node:
        """Create a node owned by this DRAG and return it."""
        node = Node(Conact() if data is None else data, left, right)
        self.nodes.append(node)
        return node

    def add_root(self, root: Node) -> None:
        """Append a root."""
        self.roots.append(root)

    def get_root(self) -> Node:
        """Return the first root."""
        if not self.roots:
            raise IndexError("the drag has no roots")
        return self.roots[0]

    def make_root(self) -> Node:
        """Create a new empty node and register it as a root."""
        node = self.make_node()
        self.roots.append(node)
        return node

    def _copy_with_map(self) -> tuple["BinaryDrag", dict[int, Node]]:
        result = BinaryDrag()
        copies: dict[int, Node] = {}

        def visit(n: Node | None) -> Node | None:
            if n is None:
                return None
            done = copies.get(id(n))
            if done is not None:
                return done
            nn = result.make_node(_copy.copy(n.data))
            nn.left = visit(n.left)
            nn.right = visit(n.right)
            copies[id(n)] = nn
            return nn

        for root in self.roots:
            result.roots.append(visit(root))
        return result, copies

    def copy(self) -> "BinaryDrag":
        """Return a deep copy that keeps the sharing of subgraphs."""
        return self._copy_with_map()[0]

    def __copy__(self) -> "BinaryDrag":
        return self.copy()

    def copy_tracked(self, tracked_nodes) -> tuple["BinaryDrag", list[Node | None]]:
        """Copy the DRAG and report where each tracked node went.

        Nodes not reachable from the roots map to ``None``.
        """
        result, copies = self._copy_with_map()
        return result, [copies.get(id(n)) if n is not None else None
                        for n in tracked_nodes]