"""Base classes for the rewrite rule catalog."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from ..classifier import normalize_language
from ..schemas import OptimizationType

logger = logging.getLogger(__name__)

# Languages matched by rules that apply everywhere
ANY_LANGUAGE = "*"


class Rule(ABC):
    """Base class for rewrite rules.

    A rule pairs a detector (a pure predicate over the raw source text) with
    a textual rewrite and fixed display metadata. Rules hold no state, so a
    single instance is shared by every analysis.
    """

    optimization_type: ClassVar[OptimizationType]
    languages: ClassVar[frozenset[str]] = frozenset()

    technique: ClassVar[str] = ""
    impact: ClassVar[str] = ""

    performance_score: ClassVar[int | None] = None
    security_score: ClassVar[int | None] = None
    readability_score: ClassVar[int | None] = None
    improvement_percentage: ClassVar[int] = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name for this rule."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the rewrite this rule performs."""
        ...

    @abstractmethod
    def detect(self, source: str) -> bool:
        """Check whether the source has the textual shape this rule rewrites.

        Args:
            source: Raw source text.

        Returns:
            True if the rewrite applies.
        """
        ...

    @abstractmethod
    def rewrite(self, source: str) -> str:
        """Rewrite the source.

        Args:
            source: Raw source text.

        Returns:
            The rewritten text; unchanged text if nothing matched.
        """
        ...

    def applies_to(self, language: str) -> bool:
        """Check if this rule is declared for the given language."""
        if ANY_LANGUAGE in self.languages:
            return True
        return normalize_language(language) in self.languages

    def score_for(self, opt_type: OptimizationType) -> int | None:
        """Declared score on an axis, or None if the rule does not score it."""
        return getattr(self, f"{opt_type.value}_score")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class RuleRegistry:
    """Ordered catalog of rewrite rules.

    Rules are tried in registration order; the fallback rule is kept apart
    from the per-type lists and only used when nothing else fires.
    """

    def __init__(self) -> None:
        self._rules: list[Rule] = []
        self._fallback: Rule | None = None

    def register(self, rule: Rule) -> None:
        """Register a rule at the end of the catalog.

        Args:
            rule: The rule instance to register.
        """
        self._rules.append(rule)

    def set_fallback(self, rule: Rule) -> None:
        """Set the last-resort rule used when no other rule fires."""
        self._fallback = rule

    @property
    def fallback(self) -> Rule | None:
        return self._fallback

    def get_rules(self) -> list[Rule]:
        """Get all registered rules (fallback excluded)."""
        return list(self._rules)

    def rules_for(self, language: str, opt_type: OptimizationType) -> list[Rule]:
        """Get the rules for a language and optimization type, in priority order.

        An unknown language simply yields no rules.
        """
        return [
            rule
            for rule in self._rules
            if rule.optimization_type is opt_type and rule.applies_to(language)
        ]

    def first_match(
        self, source: str, language: str, opt_type: OptimizationType
    ) -> Rule | None:
        """Return the first rule for the type whose detector matches the source."""
        for rule in self.rules_for(language, opt_type):
            if rule.detect(source):
                logger.debug("Rule %s matched for %s", rule.name, opt_type.value)
                return rule
        return None
