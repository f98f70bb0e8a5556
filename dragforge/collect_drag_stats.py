"""Per-subtree properties and parent links of a DRAG."""

from __future__ import annotations

from dataclasses import dataclass, field

from dragforge.drag import BinaryDrag, Node


@dataclass(eq=False)
class SubtreeProps:
    """Preorder condition string and leaves of a subtree rooted at ``node``."""

    conditions: str = ""
    leaves: list[Node] = field(default_factory=list)
    node: Node | None = None

    def extend(self, other: "SubtreeProps") -> "SubtreeProps":
        """Append the conditions and leaves of ``other``."""
        self.conditions += other.conditions
        self.leaves.extend(other.leaves)
        return self

    __iadd__ = extend

    def equivalent(self, other: "SubtreeProps") -> bool:
        """Same shape and conditions, and leaves with equal next and
        intersecting actions."""
        if self.conditions != other.conditions:
            return False
        return all(
            a.data.next == b.data.next and (a.data.action & b.data.action) != 0
            for a, b in zip(self.leaves, other.leaves)
        )


class CollectDragStatistics:
    """Properties of every subtree and parents of every node of a DRAG."""

    def __init__(self, bd: BinaryDrag | None = None) -> None:
        self.np: dict[Node, SubtreeProps] = {}
        self.parents: dict[Node, list[Node]] = {}
        if bd is not None:
            for root in bd.roots:
                self.collect(root)

    def collect(self, node: Node) -> SubtreeProps:
        """Compute (once) and return the properties of the subtree at ``node``."""
        known = self.np.get(node)
        if known is not None:
            return known
        sp = SubtreeProps(node=node)
        if node.isleaf():
            sp.conditions = "."
            sp.leaves.append(node)
        else:
            self.parents.setdefault(node.left, []).append(node)
            self.parents.setdefault(node.right, []).append(node)
            sp.conditions = node.data.condition
            sp.extend(self.collect(node.left))
            sp.extend(self.collect(node.right))
        self.np[node] = sp
        return sp