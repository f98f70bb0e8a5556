"""Rule sets: every combination of conditions mapped to its allowed actions."""

from __future__ import annotations

import copy
import sys
from dataclasses import dataclass
from typing import Any, Callable, TextIO

from dragforge.pixel_set import PixelSet


def binary(u: int, nbits: int, separator: str = "") -> str:
    """Write the ``nbits`` low bits of ``u``, most significant first.

    ``separator`` follows every digit.
    """
    return "".join(f"{(u >> bit) & 1}{separator}" for bit in reversed(range(nbits)))


@dataclass
class Rule:
    """The actions allowed for one combination of conditions.

    Bit ``k - 1`` of ``actions`` set means that action ``k`` is allowed.
    """

    frequency: int = 1
    actions: int = 0


class RuleSet:
    """Conditions, actions and one rule for each combination of conditions."""

    def __init__(self) -> None:
        self.conditions: list[str] = []
        self.conditions_pos: dict[str, int] = {}
        self.actions: list[str] = []
        self.actions_pos: dict[str, int] = {}
        self.rules: list[Rule] = []
        self.ps = PixelSet()

    def add_condition(self, name: str) -> None:
        """Append a condition; its bit is its position in the list."""
        self.conditions.append(name)
        self.conditions_pos[name] = len(self.conditions) - 1

    def clear_conditions(self) -> None:
        """Drop every condition."""
        self.conditions.clear()
        self.conditions_pos.clear()

    def init_conditions(self, ps: PixelSet) -> None:
        """Use the pixels of a mask as the conditions."""
        self.ps = copy.deepcopy(ps)
        self.clear_conditions()
        for pixel in ps:
            self.add_condition(pixel.name)

    def add_action(self, action: str) -> None:
        """Append an action; actions are numbered from 1."""
        self.actions.append(action)
        self.actions_pos[action] = len(self.actions)

    def clear_actions(self) -> None:
        """Drop every action."""
        self.actions.clear()
        self.actions_pos.clear()

    def init_actions(self, actions) -> None:
        """Replace the actions with ``actions``, numbered from 1."""
        self.actions = list(actions)
        self.actions_pos = {a: i for i, a in enumerate(self.actions, start=1)}

    def number_of_rules(self) -> int:
        """Number of combinations of the conditions."""
        return 1 << len(self.conditions)

    def generate_rules(self, fn: Callable[["RuleSet", int], Any]) -> None:
        """Size the rule list and call ``fn(self, i)`` for every rule index."""
        nrules = self.number_of_rules()
        del self.rules[nrules:]
        self.rules.extend(Rule() for _ in range(nrules - len(self.rules)))
        for i in range(nrules):
            fn(self, i)

    def print_rules(self, stream: TextIO | None = None) -> None:
        """Print a table of the rules and their actions."""
        out = sys.stdout if stream is None else stream
        out.write("".join(f"{c}\t" for c in reversed(self.conditions)) + "\n")
        for i, rule in enumerate(self.rules):
            allowed = "".join(
                f"{a}({self.actions_pos[a]}), "
                for j, a in enumerate(self.actions)
                if rule.actions >> j & 1
            )
            out.write(f"{binary(i, len(self.conditions), chr(9))}: {allowed}\n")

    def get_condition(self, name: str, rule: int) -> int:
        """Value (0 or 1) of condition ``name`` in rule ``rule``."""
        return (rule >> self.conditions_pos[name]) & 1

    def set_action(self, name: str, rule: int) -> None:
        """Allow action ``name`` in rule ``rule``."""
        self.rules[rule].actions |= 1 << (self.actions_pos[name] - 1)

    def set_frequency(self, rule: int, frequency: int) -> None:
        """Set how often rule ``rule`` occurs."""
        self.rules[rule].frequency = frequency

    def store_frequencies(self, path) -> bool:
        """Write one frequency per line; return False if the file cannot be opened."""
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.writelines(f"{r.frequency}\n" for r in self.rules)
        except OSError:
            return False
        return True

    def load_frequencies(self, path) -> bool:
        """Read frequencies written by :meth:`store_frequencies`.

        Reading stops at the first token that is not a number. Returns False
        if the file cannot be opened.
        """
        try:
            with open(path, encoding="utf-8") as f:
                text = f.read()
        except OSError:
            return False
        for i, token in enumerate(text.split()):
            if not token.isdigit():
                break
            self.rules[i].frequency = int(token)
        return True

    def serialize(self) -> dict[str, Any]:
        """Return a YAML-ready mapping; frequencies are kept only if any is not 1."""
        node: dict[str, Any] = {
            "pixel_set": self.ps.serialize(),
            "conditions": list(self.conditions),
            "actions": list(self.actions),
            "rules": [
                [self.actions_pos[a] for j, a in enumerate(self.actions)
                 if rule.actions >> j & 1]
                for rule in self.rules
            ],
        }
        if any(rule.frequency != 1 for rule in self.rules):
            node["frequencies"] = [rule.frequency for rule in self.rules]
        return node

    @classmethod
    def deserialize(cls, node: dict[str, Any]) -> "RuleSet":
        """Build a rule set from a mapping produced by :meth:`serialize`."""
        rs = cls()
        rs.ps = PixelSet.deserialize(node.get("pixel_set") or {})
        for c in node.get("conditions") or []:
            rs.add_condition(str(c))
        for a in node.get("actions") or []:
            rs.add_action(str(a))
        frequencies = node.get("frequencies")
        for i, actions in enumerate(node.get("rules") or []):
            rule = Rule()
            for a in actions or []:
                rule.actions |= 1 << (int(a) - 1)
            if frequencies:
                rule.frequency = int(frequencies[i])
            rs.rules.append(rule)
        return rs


class RuleWrapper:
    """Convenient access to one rule of a rule set while generating it."""

    def __init__(self, rs: RuleSet, i: int) -> None:
        self.rs = rs
        self.i = i

    def __getitem__(self, name: str) -> bool:
        """Value of condition ``name`` in this rule."""
        return self.rs.get_condition(name, self.i) != 0

    def __lshift__(self, name: str) -> "RuleWrapper":
        """Allow action ``name`` in this rule."""
        self.rs.set_action(name, self.i)
        return self

    def has_actions(self) -> bool:
        """Tell whether any action is allowed in this rule."""
        return self.rs.rules[self.i].actions != 0