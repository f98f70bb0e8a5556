import pytest

from dragforge.thinning import (
    ChenHsuRuleSet,
    GuoHallRuleSet,
    HscpRuleSet,
    ZhangSuenRuleSet,
    kernel3x3_mask,
    survives_hscp,
)

KERNEL_CLASSES = [ZhangSuenRuleSet, GuoHallRuleSet, ChenHsuRuleSet]


def _index(rs, values):
    return sum(1 << rs.conditions_pos[name] for name, v in values.items() if v)


def _action_of(rs, i):
    actions = rs.rules[i].actions
    return [a for a in rs.actions if actions >> (rs.actions_pos[a] - 1) & 1]


@pytest.fixture(scope="module")
def kernel_rule_sets(tmp_path_factory):
    base = tmp_path_factory.mktemp("rs")
    return {cls: cls(base / f"{cls.__name__}.yaml").get_rule_set()
            for cls in KERNEL_CLASSES}


def test_kernel_mask_names():
    mask = kernel3x3_mask()
    assert [p.name for p in mask] == ["P9", "P2", "P3", "P8", "P1", "P4", "P7", "P6", "P5"]
    assert mask["P1"].coords == [0, 0]


@pytest.mark.parametrize("cls", KERNEL_CLASSES)
def test_kernel_rule_count_and_single_action(kernel_rule_sets, cls):
    rs = kernel_rule_sets[cls]
    assert rs.conditions[:-1] == [p.name for p in kernel3x3_mask()]
    assert rs.conditions[-1] == "iter"
    assert len(rs.rules) == 1 << 10
    for i in range(len(rs.rules)):
        names = _action_of(rs, i)
        assert len(names) == 1
        if not rs.get_condition("P1", i):
            assert names == ["keep0"]
        else:
            assert names[0] in ("keep1", "change0")


@pytest.mark.parametrize("cls", KERNEL_CLASSES)
def test_interior_and_isolated_pixels_kept(kernel_rule_sets, cls):
    rs = kernel_rule_sets[cls]
    full = {p.name: 1 for p in kernel3x3_mask()}
    alone = {"P1": 1}
    for it in (0, 1):
        assert _action_of(rs, _index(rs, {**full, "iter": it})) == ["keep1"]
        assert _action_of(rs, _index(rs, {**alone, "iter": it})) == ["keep1"]


def test_zhang_suen_removes_corner(tmp_path):
    rs = ZhangSuenRuleSet(tmp_path / "zs_corner.yaml").get_rule_set()
    i = _index(rs, {"P1": 1, "P2": 1, "P3": 1, "iter": 0})
    assert _action_of(rs, i) == ["change0"]


def test_saved_rule_set_reloads(tmp_path, kernel_rule_sets):
    path = tmp_path / "zs.yaml"
    generated = ZhangSuenRuleSet(path).get_rule_set()
    loaded = ZhangSuenRuleSet(path, allow_generation=False).get_rule_set()
    assert loaded.serialize() == generated.serialize()
    assert generated.serialize() == kernel_rule_sets[ZhangSuenRuleSet].serialize()


def test_survives_hscp_simple_blocks():
    assert survives_hscp(0)
    assert survives_hscp(1 << 5)
    assert survives_hscp(0xFFFF)


def test_hscp_rule_set(tmp_path):
    rs = HscpRuleSet(tmp_path / "hscp.yaml").get_rule_set()
    assert len(rs.rules) == 1 << 16
    f_bit = rs.conditions_pos["f"]
    for i in range(0, len(rs.rules), 97):
        names = _action_of(rs, i)
        if not (i >> f_bit) & 1:
            assert names == ["keep0"]
        elif survives_hscp(i):
            assert names == ["keep1"]
        else:
            assert names == ["change0"]