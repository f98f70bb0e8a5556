"""Search of the smallest DRAG among all single-action choices of the leaves."""

from __future__ import annotations

import math
import sys
import threading
from typing import TextIO

from dragforge.drag import BinaryDrag, Node
from dragforge.remove_equal_subtrees import RemoveEqualSubtrees
from dragforge.thread_pool import ThreadPool

_PROGRESS_STEP = 79626


class FindOptimalDrag:
    """Try every way of keeping one action per multi-action leaf.

    Each resulting tree is reduced by sharing equal subtrees; the one with
    the fewest inner nodes (then fewest leaves) is kept in ``best_tree``.
    """

    def __init__(self, drag: BinaryDrag, stream: TextIO | None = None,
                 threads: int = 8, queue_depth: int = 8) -> None:
        self.t = drag
        self.stream = sys.stdout if stream is None else stream
        self.threads = threads
        self.queue_depth = queue_depth
        self.lma: list[Node] = []
        self.visited: set[Node] = set()
        self.best_tree = BinaryDrag()
        self.counter = 0
        self.best_nodes: float = math.inf
        self.best_leaves: float = math.inf
        self._lock = threading.Lock()
        self._collect_multi_action_leaves(self.t.get_root())

    def _collect_multi_action_leaves(self, n: Node) -> None:
        stack = [n]
        order: list[Node] = []
        while stack:
            cur = stack.pop()
            if cur in self.visited:
                continue
            self.visited.add(cur)
            if cur.isleaf():
                if bin(cur.data.action).count("1") > 1:
                    order.append(cur)
                continue
            stack.append(cur.right)
            stack.append(cur.left)
        self.lma.extend(order)

    def reduce_and_update_best(self, drag: BinaryDrag) -> None:
        """Reduce ``drag`` and keep it if it beats the best found so far."""
        sc = RemoveEqualSubtrees(drag)
        with self._lock:
            if self.best_nodes > sc.nodes or (
                    self.best_nodes == sc.nodes and self.best_leaves > sc.leaves):
                self.best_nodes = sc.nodes
                self.best_leaves = sc.leaves
                self.best_tree = drag
                self.stream.write(
                    f"\rbest_nodes = {self.best_nodes} - best_leaves = {self.best_leaves}\n")
            if self.counter == 0:
                self.stream.write("  0%")
            self.counter += 1
            if self.counter % _PROGRESS_STEP == 0:
                self.stream.write(f"\r{self.counter // _PROGRESS_STEP:3d}%")

    def _generate(self, pool: ThreadPool, cur_leaf: int) -> None:
        if cur_leaf == len(self.lma):
            pool.enqueue_work(self.reduce_and_update_best, self.t.copy())
            return
        leaf = self.lma[cur_leaf]
        original = leaf.data.action
        for a in leaf.data.actions():
            leaf.data.action = 1 << (a - 1)
            self._generate(pool, cur_leaf + 1)
        leaf.data.action = original

    def generate_all_trees(self) -> BinaryDrag:
        """Explore every combination and return the best tree."""
        with ThreadPool(self.queue_depth, self.threads) as pool:
            self._generate(pool, 0)
        return self.best_tree