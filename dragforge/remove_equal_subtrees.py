"""Sharing of identical subtrees inside a DRAG."""

from __future__ import annotations

from dragforge.drag import BinaryDrag, Node


class RemoveEqualSubtrees:
    """Relink a DRAG so that identical subtrees are shared.

    Links are updated in place; nodes are not deleted from the DRAG.
    ``nodes`` and ``leaves`` count the distinct inner nodes and leaves left.
    """

    def __init__(self, bd: BinaryDrag) -> None:
        self.sp: dict[str, Node] = {}
        self.ps: dict[Node, str] = {}
        self.nodes = 0
        self.leaves = 0
        bd.roots = [self._visit(root)[1] for root in bd.roots]

    def _visit(self, n: Node) -> tuple[str, Node]:
        known = self.ps.get(n)
        if known is not None:
            return known, n

        if n.isleaf():
            self.leaves += 1
            actions = ",".join(str(a) for a in n.data.actions())
            s = f".{actions}-{n.data.next}"
        else:
            self.nodes += 1
            sl, n.left = self._visit(n.left)
            sr, n.right = self._visit(n.right)
            s = n.data.condition + sl + sr

        existing = self.sp.get(s)
        if existing is None:
            self.sp[s] = n
            self.ps[n] = s
            return s, n
        if existing.isleaf():
            self.leaves -= 1
        else:
            self.nodes -= 1
        return s, existing


def remove_equal_subtrees(bd: BinaryDrag) -> RemoveEqualSubtrees:
    """Share identical subtrees of ``bd`` and return the counts."""
    return RemoveEqualSubtrees(bd)