from dragforge.connectivity_mat import ConnectivityMat
from dragforge.merge_set import MergeSet, MultiMergeSet


def _mat(names, links):
    con = ConnectivityMat(names)
    for a, b in links:
        con.set(a, b, True)
    return con


def test_two_unconnected_neighbours_give_one_merge_set():
    con = _mat(["a", "b", "x"], [("x", "a"), ("x", "b")])
    ms = MergeSet(con)
    ms.build_merge_set()
    assert ms.mergesets == {("a", "b")}


def test_connected_neighbours_are_reduced_and_expanded():
    con = _mat(["a", "b", "x"], [("x", "a"), ("x", "b"), ("a", "b")])
    ms = MergeSet(con)
    ms.build_merge_set()
    assert ms.mergesets == {("a",), ("b",)}


def test_no_neighbours_gives_empty_merge_set():
    con = _mat(["a", "x"], [])
    ms = MergeSet(con)
    ms.build_merge_set()
    assert ms.mergesets == {()}


def test_reduce_merge_set_keeps_first_of_connected():
    con = _mat(["a", "b", "c", "x"], [("a", "c")])
    ms = MergeSet(con)
    assert ms.reduce_merge_set(["a", "b", "c"]) == ["a", "b"]


def test_merge_sets_are_sorted_tuples():
    con = _mat(["b", "a", "x"], [("x", "a"), ("x", "b")])
    ms = MergeSet(con)
    ms.build_merge_set()
    for entry in ms.mergesets:
        assert list(entry) == sorted(entry)


def test_multi_merge_set_excludes_pixel_list():
    con = _mat(["a", "b", "x", "y"], [("x", "a"), ("x", "y"), ("y", "b")])
    mms = MultiMergeSet(con, ["x", "y"], "x")
    assert mms.is_in_pixel_list("y") is True
    assert mms.is_in_pixel_list("a") is False
    mms.build_merge_set()
    assert mms.mergesets == {("a",)}


def test_multi_merge_set_expands_equivalences():
    con = _mat(["a", "b", "x", "y"], [("y", "a"), ("y", "b"), ("a", "b")])
    mms = MultiMergeSet(con, ["x", "y"], "y")
    mms.build_merge_set()
    assert mms.mergesets == {("a",), ("b",)}