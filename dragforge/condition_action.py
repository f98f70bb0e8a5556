"""Node payloads of a decision DRAG: either a condition or a set of actions."""

from __future__ import annotations

import enum
from dataclasses import dataclass

ACTION_BITS = 131
"""Number of action bits a leaf can carry."""

_ACTION_MASK = (1 << ACTION_BITS) - 1


class ConactType(enum.Enum):
    """Whether a payload tests a condition or holds actions."""

    CONDITION = "condition"
    ACTION = "action"


@dataclass(eq=False)
class Conact:
    """A condition (inner node) or a bitmapped action list (leaf).

    Bit ``k - 1`` of ``action`` set means that action ``k`` may be performed.
    ``next`` is the id of the tree to jump to after the leaf.
    """

    t: ConactType = ConactType.CONDITION
    condition: str = ""
    action: int = 0
    next: int = 0

    def __post_init__(self) -> None:
        self.action &= _ACTION_MASK

    @classmethod
    def from_condition(cls, condition: str) -> "Conact":
        """Build a condition payload."""
        return cls(t=ConactType.CONDITION, condition=condition)

    @classmethod
    def from_action(cls, action: int, next: int) -> "Conact":  # noqa: A002
        """Build an action payload from a bitmap and a next-tree id."""
        return cls(t=ConactType.ACTION, action=action, next=next)

    def actions(self) -> list[int]:
        """Return the 1-based numbers of the actions set in the bitmap."""
        bits = self.action
        return [i + 1 for i in range(bits.bit_length()) if bits >> i & 1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Conact):
            return NotImplemented
        if self.t != other.t:
            return False
        if self.t is ConactType.CONDITION:
            return self.condition == other.condition
        return self.action == other.action and self.next == other.next

    def eq(self, other: "Conact") -> bool:
        """Equivalence: conditions match, or actions intersect with equal next."""
        if self.t != other.t:
            return False
        if self.t is ConactType.CONDITION:
            return self.condition == other.condition
        return (self.action & other.action) != 0 and self.next == other.next

    def neq(self, other: "Conact") -> bool:
        """Negation of :meth:`eq`."""
        return not self.eq(other)