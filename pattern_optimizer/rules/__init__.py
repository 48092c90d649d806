"""Rewrite rule catalog.

Each rule:
1. Declares the languages and optimization type it belongs to
2. Detects a fixed textual shape with regular expressions
3. Rewrites that shape and carries the scores and narrative shown to users

Registration order is priority order: for each optimization type the first
registered rule that detects a match is the one applied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ANY_LANGUAGE, Rule, RuleRegistry
from .memoization import FibonacciMemoizationRule
from .nested_loops import NestedLoopFlatteningRule
from .comprehension import ListComprehensionRule
from .xss import InnerHtmlRule
from .style import CodeStyleRule, NamingConventionsRule

if TYPE_CHECKING:
    from ..schemas import OptimizationType

# Register all rules
_registry = RuleRegistry()
_registry.register(FibonacciMemoizationRule())
_registry.register(NestedLoopFlatteningRule())
_registry.register(ListComprehensionRule())
_registry.register(InnerHtmlRule())
_registry.register(CodeStyleRule())
_registry.set_fallback(NamingConventionsRule())


def get_registry() -> RuleRegistry:
    """Get the global rule registry."""
    return _registry


def rules_for(language: str, opt_type: OptimizationType) -> list[Rule]:
    """Get the registered rules for a language and optimization type."""
    return _registry.rules_for(language, opt_type)


__all__ = [
    "ANY_LANGUAGE",
    "Rule",
    "RuleRegistry",
    "get_registry",
    "rules_for",
    "FibonacciMemoizationRule",
    "NestedLoopFlatteningRule",
    "ListComprehensionRule",
    "InnerHtmlRule",
    "CodeStyleRule",
    "NamingConventionsRule",
]
