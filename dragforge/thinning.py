"""Rule sets of thinning algorithms: Zhang-Suen, Guo-Hall, Chen-Hsu and HSCP."""

from __future__ import annotations

from dragforge.base_ruleset import BaseRuleSet
from dragforge.pixel_set import Pixel, PixelSet
from dragforge.rule_set import RuleSet, RuleWrapper

_THINNING_ACTIONS = ("keep0", "keep1", "change0")


def kernel3x3_mask() -> PixelSet:
    """The 3x3 neighbourhood, P1 in the centre and P2..P9 clockwise from north."""
    return PixelSet([
        Pixel("P9", [-1, -1]), Pixel("P2", [0, -1]), Pixel("P3", [1, -1]),
        Pixel("P8", [-1, 0]), Pixel("P1", [0, 0]), Pixel("P4", [1, 0]),
        Pixel("P7", [-1, 1]), Pixel("P6", [0, 1]), Pixel("P5", [1, 1]),
    ])


def _kernel3x3_rule_set(decide) -> RuleSet:
    rs = RuleSet()
    rs.init_conditions(kernel3x3_mask())
    rs.add_condition("iter")
    rs.init_actions(_THINNING_ACTIONS)

    def fill(rs_: RuleSet, i: int) -> None:
        r = RuleWrapper(rs_, i)
        p = {k: int(r[f"P{k}"]) for k in range(1, 10)}
        if not p[1]:
            r << "keep0"
            return
        r << ("change0" if decide(p, int(r["iter"])) else "keep1")

    rs.generate_rules(fill)
    return rs


def _transitions(p: dict[int, int]) -> int:
    ring = [p[k] for k in (2, 3, 4, 5, 6, 7, 8, 9, 2)]
    return sum(a == 0 and b == 1 for a, b in zip(ring, ring[1:]))


def _zhang_suen(p: dict[int, int], it: int) -> bool:
    a = _transitions(p)
    b = sum(p[k] for k in range(2, 10))
    if it == 0:
        m1 = p[2] * p[4] * p[6]
        m2 = p[4] * p[6] * p[8]
    else:
        m1 = p[2] * p[4] * p[8]
        m2 = p[2] * p[6] * p[8]
    return 2 <= b <= 6 and a == 1 and m1 == 0 and m2 == 0


def _guo_hall(p: dict[int, int], it: int) -> bool:
    c = (((1 - p[2]) & (p[3] | p[4])) + ((1 - p[4]) & (p[5] | p[6]))
         + ((1 - p[6]) & (p[7] | p[8])) + ((1 - p[8]) & (p[9] | p[2])))
    n1 = (p[9] | p[2]) + (p[3] | p[4]) + (p[5] | p[6]) + (p[7] | p[8])
    n2 = (p[2] | p[3]) + (p[4] | p[5]) + (p[6] | p[7]) + (p[8] | p[9])
    n = min(n1, n2)
    if it == 0:
        m = (p[6] | p[7] | (1 - p[9])) & p[8]
    else:
        m = (p[2] | p[3] | (1 - p[5])) & p[4]
    return c == 1 and 2 <= n <= 3 and m == 0


def _chen_hsu(p: dict[int, int], it: int) -> bool:
    a = _transitions(p)
    b = sum(p[k] for k in range(2, 10))
    if it == 0:
        c = p[2] * p[4] * p[6] == 0
        d = p[4] * p[6] * p[8] == 0
        f = p[2] * p[4] == 1 and p[6] + p[7] + p[8] == 0
        g = p[4] * p[6] == 1 and p[2] + p[8] + p[9] == 0
    else:
        c = p[2] * p[4] * p[8] == 0
        d = p[2] * p[6] * p[8] == 0
        f = p[2] * p[8] == 1 and p[4] + p[5] + p[6] == 0
        g = p[6] * p[8] == 1 and p[2] + p[3] + p[4] == 0
    return 2 <= b <= 7 and ((a == 1 and c and d) or (a == 2 and (f or g)))


class ZhangSuenRuleSet(BaseRuleSet):
    """Zhang-Suen two-subiteration thinning."""

    def generate_rule_set(self) -> RuleSet:
        return _kernel3x3_rule_set(_zhang_suen)


class GuoHallRuleSet(BaseRuleSet):
    """Guo-Hall two-subiteration thinning."""

    def generate_rule_set(self) -> RuleSet:
        return _kernel3x3_rule_set(_guo_hall)


class ChenHsuRuleSet(BaseRuleSet):
    """Chen-Hsu two-subiteration thinning."""

    def generate_rule_set(self) -> RuleSet:
        return _kernel3x3_rule_set(_chen_hsu)


def _bit(block: int, pos: int) -> bool:
    return bool((block >> pos) & 1)


def _edge(block: int) -> bool:
    block &= 0xFFFF
    nw, n, ne = _bit(block, 0x0), _bit(block, 0x1), _bit(block, 0x2)
    w, c, e = _bit(block, 0x4), _bit(block, 0x5), _bit(block, 0x6)
    sw, s, se = _bit(block, 0x8), _bit(block, 0x9), _bit(block, 0xA)

    t00 = t01 = t01s = t11 = False
    for v1, v2, v3 in ((nw, n, ne), (ne, e, se), (se, s, sw), (sw, w, nw)):
        if not v2 and (not v1 or not v3):
            t00 = True
        if v2 and (v1 or v3):
            t11 = True
        if (not v1 and v2) or (not v2 and v3):
            t01s = t01
            t01 = True
    return c and t00 and t11 and not t01s


def survives_hscp(block: int) -> bool:
    """Tell whether the centre pixel of a 4x4 block survives an HSCP pass.

    Bit ``4 * row + col`` of ``block`` holds the pixel at that position,
    the centre being at row 1, column 1.
    """
    block &= 0xFFFF
    v_n, v_w = _bit(block, 0x1), _bit(block, 0x4)
    v_e, v_s = _bit(block, 0x6), _bit(block, 0x9)

    edge_c = _edge(block)
    edge_e = _edge(block >> 1)
    edge_s = _edge(block >> 4)
    edge_se = _edge(block >> 5)

    return (not edge_c
            or (edge_e and v_n and v_s)
            or (edge_s and v_w and v_e)
            or (edge_e and edge_se and edge_s))


def _hscp_mask() -> PixelSet:
    names = "abcdefghijklmnop"
    return PixelSet([
        Pixel(names[4 * row + col], [col - 1, row - 1])
        for row in range(4) for col in range(4)
    ])


class HscpRuleSet(BaseRuleSet):
    """Holt-Stewart-Clint-Perrott thinning on a 4x4 block."""

    def generate_rule_set(self) -> RuleSet:
        rs = RuleSet()
        rs.init_conditions(_hscp_mask())
        rs.init_actions(_THINNING_ACTIONS)

        def fill(rs_: RuleSet, i: int) -> None:
            r = RuleWrapper(rs_, i)
            if not r["f"]:
                r << "keep0"
            elif survives_hscp(i):
                r << "keep1"
            else:
                r << "change0"

        rs.generate_rules(fill)
        return rs