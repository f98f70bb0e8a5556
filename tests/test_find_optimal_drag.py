import io

from dragforge.condition_action import Conact
from dragforge.drag import BinaryDrag
from dragforge.find_optimal_drag import FindOptimalDrag


def _two_leaf_tree(left_action, right_action):
    bd = BinaryDrag()
    left = bd.make_node(Conact.from_action(left_action, 0))
    right = bd.make_node(Conact.from_action(right_action, 0))
    root = bd.make_node(Conact.from_condition("a"), left, right)
    bd.add_root(root)
    return bd, left, right


def test_finds_shared_leaf_solution():
    bd, left, _ = _two_leaf_tree(0b11, 0b01)
    out = io.StringIO()
    fod = FindOptimalDrag(bd, stream=out, threads=2, queue_depth=2)
    assert fod.lma == [left]
    best = fod.generate_all_trees()
    assert fod.counter == 2
    assert fod.best_nodes == 1
    assert fod.best_leaves == 1
    root = best.get_root()
    assert root.left is root.right
    assert root.left.data.actions() == [1]
    assert "best_nodes = 1 - best_leaves = 1" in out.getvalue()


def test_original_tree_is_restored():
    bd, left, _ = _two_leaf_tree(0b110, 0b001)
    fod = FindOptimalDrag(bd, stream=io.StringIO(), threads=1, queue_depth=1)
    fod.generate_all_trees()
    assert left.data.action == 0b110
    assert fod.counter == 2


def test_no_multi_action_leaves_gives_one_tree():
    bd, _, _ = _two_leaf_tree(0b01, 0b10)
    fod = FindOptimalDrag(bd, stream=io.StringIO())
    assert fod.lma == []
    best = fod.generate_all_trees()
    assert fod.counter == 1
    assert fod.best_leaves == 2
    root = best.get_root()
    assert root.left.data.actions() == [1]
    assert root.right.data.actions() == [2]


def test_every_combination_is_tried():
    bd, _, _ = _two_leaf_tree(0b111, 0b11)
    fod = FindOptimalDrag(bd, stream=io.StringIO(), threads=3, queue_depth=2)
    fod.generate_all_trees()
    assert fod.counter == 6
    assert fod.best_leaves == 1
    assert fod.best_tree.get_root().left is fod.best_tree.get_root().right
    assert bd.get_root().left is not bd.get_root().right