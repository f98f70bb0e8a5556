# dragforge

`dragforge` builds decision tables ("rule sets") for neighbourhood-based image
algorithms and works with binary decision DRAGs (directed rooted acyclic
graphs): copying them, sharing identical subtrees and compressing them.

## What is in the package

- **Rule sets** (`dragforge.rule_set`): `RuleSet` holds conditions, actions and
  one `Rule` per combination of conditions. `generate_rules(fn)` calls
  `fn(rule_set, i)` for every rule index; `RuleWrapper` reads conditions
  (`r["P1"]`) and allows actions (`r << "keep1"`). A rule set can be turned
  into a YAML-ready mapping with `serialize()` and read back with
  `RuleSet.deserialize()`; `store_frequencies()` and `load_frequencies()` write
  and read one rule frequency per line of a text file. `print_rules()` writes a
  table of the rules.
- **Cached rule sets** (`dragforge.base_ruleset`): subclass `BaseRuleSet`,
  write `generate_rule_set()`, and call `get_rule_set()`. The rule set is read
  from the YAML file given to the constructor when it can be loaded, and is
  generated and written there otherwise (or always, with
  `force_generation=True`). With `allow_generation=False` a file that cannot be
  loaded raises `RuleSetLoadError`.
- **Thinning rule sets** (`dragforge.thinning`): `ZhangSuenRuleSet`,
  `GuoHallRuleSet` and `ChenHsuRuleSet` on the 3x3 mask of `kernel3x3_mask()`
  plus an `iter` condition, and `HscpRuleSet` on a 4x4 block (see
  `survives_hscp()`). Their actions are `keep0`, `keep1` and `change0`.
- **Masks** (`dragforge.pixel_set`): `Pixel`, `PixelSet` and
  `chebyshev_distance()`.
- **DRAGs** (`dragforge.drag`): `BinaryDrag` of `Node`s whose data are
  `dragforge.condition_action.Conact` payloads — a condition at inner nodes, a
  bitmap of allowed actions and a next-tree index at leaves. `copy()` keeps the
  sharing of subgraphs; `copy_tracked()` also reports where given nodes went.
- **Reduction and compression**:
  - `dragforge.remove_equal_subtrees.remove_equal_subtrees(bd)` relinks identical
    subtrees to one copy and reports the remaining inner nodes and leaves.
  - `dragforge.drag_compressor.compress_drag(bd, iterations, flags)` tries every
    merge of equivalent subtrees and keeps the DRAG with the fewest inner nodes;
    `MergeSpecialLeaves` and `MergeLeaves` merge compatible leaves.
  - `dragforge.collect_drag_stats.CollectDragStatistics` gathers subtree
    properties and parent links.
  - `dragforge.find_optimal_drag.FindOptimalDrag` tries every single-action
    choice for multi-action leaves on a `dragforge.thread_pool.ThreadPool`.
- **Labelling helpers**: `dragforge.connectivity_mat.ConnectivityMat`,
  `dragforge.merge_set.MergeSet` and `MultiMergeSet`.
- **Utilities**: `dragforge.thread_pool.BlockingQueue` and `ThreadPool`,
  and `dragforge.performance.PerformanceEvaluator` for millisecond timings.

## Examples

```python
from dragforge.thinning import ZhangSuenRuleSet

rs = ZhangSuenRuleSet("zs_rules.yaml").get_rule_set()
print(rs.number_of_rules())  # 1024: nine pixels plus the "iter" condition
```

Writing your own rule set:

```python
from dragforge.base_ruleset import BaseRuleSet
from dragforge.pixel_set import Pixel, PixelSet
from dragforge.rule_set import RuleSet, RuleWrapper


class Copy(BaseRuleSet):
    def generate_rule_set(self):
        rs = RuleSet()
        rs.init_conditions(PixelSet([Pixel("x", [0, 0])]))
        rs.init_actions(["set0", "set1"])

        def rule(rule_set, i):
            r = RuleWrapper(rule_set, i)
            r << ("set1" if r["x"] else "set0")

        rs.generate_rules(rule)
        return rs
```

Compressing a DRAG in place:

```python
from dragforge.drag_compressor import DragCompressorFlags, compress_drag

compress_drag(drag, -1, DragCompressorFlags.IGNORE_LEAVES)
```

## What it does not do

The package does not build a decision tree from a rule set, does not split a
tree into per-line forests, and does not emit source code or draw DRAGs; you
build the `BinaryDrag` yourself. The `SAVE_INTERMEDIATE_RESULTS` flag of
`DragCompressorFlags` is accepted but produces no files. There is no command
line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```