import pytest

from dragforge.condition_action import Conact
from dragforge.drag import BinaryDrag, Node


def _shared_leaf_drag():
    bd = BinaryDrag()
    leaf = bd.make_node(Conact.from_action(1, 0))
    root = bd.make_node(Conact.from_condition("a"), leaf, leaf)
    bd.add_root(root)
    return bd, root, leaf


def test_isleaf():
    bd, root, leaf = _shared_leaf_drag()
    assert leaf.isleaf()
    assert not root.isleaf()
    assert Node().isleaf()


def test_make_node_registers_node():
    bd = BinaryDrag()
    n = bd.make_node(Conact.from_condition("x"))
    assert bd.nodes == [n]
    assert n.data == Conact.from_condition("x")


def test_get_root_returns_first_root():
    bd = BinaryDrag()
    r1 = bd.make_root()
    r2 = bd.make_root()
    assert bd.get_root() is r1
    assert bd.roots == [r1, r2]


def test_get_root_empty_raises():
    with pytest.raises(IndexError):
        BinaryDrag().get_root()


def test_copy_preserves_sharing():
    bd, root, leaf = _shared_leaf_drag()
    cp = bd.copy()
    croot = cp.get_root()
    assert croot is not root
    assert croot.left is croot.right
    assert croot.left is not leaf
    assert croot.data == root.data
    assert croot.left.data == leaf.data
    assert len(cp.nodes) == 2


def test_copy_data_is_independent():
    bd, root, leaf = _shared_leaf_drag()
    cp = bd.copy()
    cp.get_root().left.data.action = 0
    assert leaf.data.action == 1


def test_copy_shares_across_roots():
    bd = BinaryDrag()
    shared = bd.make_node(Conact.from_action(1, 0))
    bd.add_root(bd.make_node(Conact.from_condition("a"), shared,
                             bd.make_node(Conact.from_action(2, 0))))
    bd.add_root(bd.make_node(Conact.from_condition("b"), shared,
                             bd.make_node(Conact.from_action(2, 0))))
    cp = bd.copy()
    assert cp.roots[0].left is cp.roots[1].left
    assert cp.roots[0].right is not cp.roots[1].right


def test_copy_tracked_maps_nodes():
    bd, root, leaf = _shared_leaf_drag()
    orphan = Node(Conact.from_action(4, 0))
    cp, tracked = bd.copy_tracked([leaf, root, orphan])
    assert tracked[0] is cp.get_root().left
    assert tracked[1] is cp.get_root()
    assert tracked[2] is None


def test_copy_of_empty_drag():
    cp = BinaryDrag().copy()
    assert cp.roots == []
    assert cp.nodes == []