"""Rule sets cached in a YAML file and generated on demand."""

from __future__ import annotations

import abc
from pathlib import Path

import yaml

from dragforge.rule_set import RuleSet


class RuleSetLoadError(RuntimeError):
    """The rule set file could not be loaded and generation is disabled."""


class BaseRuleSet(abc.ABC):
    """Base for user rule sets: load from ``path`` or generate and save there."""

    def __init__(self, path, force_generation: bool = False,
                 allow_generation: bool = True) -> None:
        self.path = Path(path)
        self.force_generation = force_generation
        self.allow_generation = allow_generation
        self.rs = RuleSet()

    def _load(self) -> bool:
        try:
            with open(self.path, encoding="utf-8") as f:
                node = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            return False
        if not isinstance(node, dict):
            return False
        try:
            self.rs = RuleSet.deserialize(node)
        except (KeyError, TypeError, ValueError, IndexError):
            return False
        return True

    def _save(self) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump(self.rs.serialize(), f, default_flow_style=None,
                               sort_keys=False)
        except OSError:
            pass

    def get_rule_set(self) -> RuleSet:
        """Load the rule set, generating and saving it when needed."""
        if self.force_generation or not self._load():
            if not self.allow_generation:
                raise RuleSetLoadError(
                    f"Could not load rule set {self.path} from file (generation disabled)."
                )
            self.rs = self.generate_rule_set()
            self._save()
        return self.rs

    @abc.abstractmethod
    def generate_rule_set(self) -> RuleSet:
        """Build the rule set from scratch."""