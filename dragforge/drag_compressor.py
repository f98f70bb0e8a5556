"""Exhaustive compression of a decision tree or forest into a smaller DRAG."""

from __future__ import annotations

import copy
import enum
import sys
from typing import TextIO

from dragforge.collect_drag_stats import CollectDragStatistics, SubtreeProps
from dragforge.drag import BinaryDrag, Node
from dragforge.remove_equal_subtrees import RemoveEqualSubtrees


def _count(bd: BinaryDrag) -> tuple[int, int]:
    """Count the distinct inner nodes and leaves reachable from the roots."""
    inner: set[Node] = set()
    leaves: set[Node] = set()
    stack = list(bd.roots)
    while stack:
        n = stack.pop()
        if n.isleaf():
            leaves.add(n)
        elif n not in inner:
            inner.add(n)
            stack.append(n.left)
            stack.append(n.right)
    return len(inner), len(leaves)


class MergeSpecialLeaves:
    """Turn every inner node whose two leaves are equivalent into one leaf.

    The new leaf keeps the intersection of the two action sets, so that::

            b                b
           /                /
          a       becomes  2
         / \\
        2  2,3
    """

    def __init__(self, bd: BinaryDrag) -> None:
        self.visited: set[Node] = set()
        self.removed = True
        while self.removed:
            self.removed = False
            for root in bd.roots:
                self._merge(root)

    def _merge(self, n: Node) -> None:
        if n.isleaf():
            return
        left, right = n.left, n.right
        if left.isleaf() and right.isleaf() and left.data.eq(right.data):
            n.data = copy.copy(left.data)
            n.data.action &= right.data.action
            n.left = n.right = None
            self.removed = True
            return
        if n not in self.visited:
            self.visited.add(n)
            self._merge(n.left)
            self._merge(n.right)


class MergeLeaves:
    """Redirect parents of leaves compatible with a single-action leaf to it."""

    def __init__(self, bd: BinaryDrag) -> None:
        self.bd = bd
        self.visited_nodes: set[Node] = set()
        self.visited_leaves: dict[Node, None] = {}
        self.parents: dict[Node, list[Node]] = {}
        for root in bd.roots:
            self._collect(root)
        self.compress_leaves()

    def _collect(self, n: Node) -> None:
        if n.isleaf():
            self.visited_leaves[n] = None
            return
        if n in self.visited_nodes:
            return
        self.visited_nodes.add(n)
        self.parents.setdefault(n.left, []).append(n)
        self.parents.setdefault(n.right, []).append(n)
        self._collect(n.left)
        self._collect(n.right)

    def serialize_visited_leaves(self, stream: TextIO | None = None) -> None:
        """Write each visited leaf as its action numbers, "- ", its next id."""
        out = sys.stdout if stream is None else stream
        for leaf in self.visited_leaves:
            actions = "".join(str(a) for a in leaf.data.actions())
            out.write(f"{actions}- {leaf.data.next}\n")

    def compress_leaves(self) -> None:
        """Point the parents of every compatible leaf at a single-action leaf."""
        updated: set[Node] = set()
        for i in self.visited_leaves:
            if len(i.data.actions()) != 1 or i in updated:
                continue
            for j in self.visited_leaves:
                if j is i or j in updated:
                    continue
                if (i.data.action & j.data.action) == 0 or i.data.next != j.data.next:
                    continue
                updated.add(j)
                for parent in self.parents.get(j, []):
                    if parent.left is j:
                        parent.left = i
                    elif parent.right is j:
                        parent.right = i
                    else:
                        raise RuntimeError("inconsistent parent links while merging leaves")


class DragCompressorFlags(enum.IntFlag):
    """Options of :class:`DragCompressor`.

    SAVE_INTERMEDIATE_RESULTS is accepted but no drawings are produced.
    """

    NONE = 0
    PRINT_STATUS_BAR = 1
    IGNORE_LEAVES = 2
    SAVE_INTERMEDIATE_RESULTS = 4


_DEFAULT_FLAGS = DragCompressorFlags.PRINT_STATUS_BAR | DragCompressorFlags.IGNORE_LEAVES


def _merge_equivalent_and_update(a: Node, b: Node,
                                 parents: dict[Node, list[Node]]) -> None:
    """Make the parents of subtree ``b`` point to ``a``, intersecting leaf actions."""
    visited: set[Node] = set()

    def merge(x: Node, y: Node) -> None:
        if x in visited:
            return
        visited.add(x)
        for parent in parents.get(y, []):
            if parent.left is y:
                parent.left = x
            else:
                parent.right = x
        if x.isleaf():
            x.data.action &= y.data.action
        else:
            merge(x.left, y.left)
            merge(x.right, y.right)

    merge(a, b)


class DragCompressor:
    """Compress a DRAG in place by trying every merge of equivalent subtrees.

    ``iterations`` is an early stopping criterion: the number of explored
    solutions after the last improvement; -1 disables it.
    """

    def __init__(self, bd: BinaryDrag, iterations: int = -1,
                 flags: DragCompressorFlags = _DEFAULT_FLAGS,
                 stream: TextIO | None = None) -> None:
        self.stream = sys.stdout if stream is None else stream
        self.early_stopping_active = iterations != -1
        self.early_stopping_reached = False
        self.iterations_max = iterations
        self.iterations_left = iterations
        self.progress_counter = 0
        self.best_nodes = float("inf")
        self.best_leaves = float("inf")
        self.best_bd = BinaryDrag()
        self.changes = False

        RemoveEqualSubtrees(bd)
        while True:
            self.changes = False
            self._optimize(bd, DragCompressorFlags(flags))
            best = self.best_bd.copy()
            bd.roots, bd.nodes = best.roots, best.nodes
            self.reset_iterations()
            if not self.changes:
                break
        if flags & DragCompressorFlags.PRINT_STATUS_BAR:
            self.stream.write(f"\r{self.progress_counter}\n")

    def reset_iterations(self) -> None:
        """Restart the early stopping countdown."""
        self.iterations_left = self.iterations_max
        self.early_stopping_reached = False

    def _candidates(self, bd: BinaryDrag, ignore_leaves: bool) -> list[SubtreeProps]:
        trees = list(CollectDragStatistics(bd).np.values())
        i = 0
        while i < len(trees):
            t = trees[i]
            if (ignore_leaves and t.conditions == ".") or not any(
                    o is not t and t.equivalent(o) for o in trees):
                del trees[i]
            else:
                i += 1
        trees.sort(key=lambda t: len(t.conditions), reverse=True)
        return trees

    def _optimize(self, bd: BinaryDrag, flags: DragCompressorFlags) -> None:
        if self.early_stopping_reached and self.early_stopping_active:
            return
        print_status = bool(flags & DragCompressorFlags.PRINT_STATUS_BAR)
        trees = self._candidates(bd, bool(flags & DragCompressorFlags.IGNORE_LEAVES))

        no_eq = True
        for i, a in enumerate(trees):
            for b in trees[i + 1:]:
                if not a.equivalent(b):
                    continue
                no_eq = False
                bd_copy, (na, nb) = bd.copy_tracked([a.node, b.node])
                cds = CollectDragStatistics(bd_copy)
                _merge_equivalent_and_update(na, nb, cds.parents)
                RemoveEqualSubtrees(bd_copy)
                self._optimize(bd_copy, flags)

        if not no_eq:
            return

        self.progress_counter += 1
        if print_status and self.progress_counter % 1000 == 0:
            self.stream.write(f"\r{self.progress_counter}")
            self.stream.flush()

        self.iterations_left -= 1
        if self.iterations_left <= 0:
            self.early_stopping_reached = True

        nodes, _ = _count(bd)
        if nodes < self.best_nodes:
            self.changes = True
            self.iterations_left = self.iterations_max
            MergeSpecialLeaves(bd)
            MergeLeaves(bd)
            nodes, leaves = _count(bd)
            self.best_nodes = nodes
            self.best_leaves = leaves
            self.best_bd = bd.copy()
            if print_status:
                self.stream.write(
                    f"\r{self.progress_counter} - nodes: {nodes}; leaves: {leaves}\n")


def compress_drag(bd: BinaryDrag, iterations: int = -1,
                  flags: DragCompressorFlags = _DEFAULT_FLAGS) -> BinaryDrag:
    """Compress ``bd`` in place and return it."""
    DragCompressor(bd, iterations, flags)
    return bd