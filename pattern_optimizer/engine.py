"""Rewrite engine - applies catalog rules to source text.

Rewrites run one after another, each on the output of the previous one.
The engine also tracks which lines of the final text each rule touched,
carrying earlier line numbers through later rewrites so they stay valid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from difflib import SequenceMatcher
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .rules.base import Rule

logger = logging.getLogger(__name__)


@dataclass
class RewriteOutcome:
    """Result of applying one rule during an analysis."""

    rule: "Rule"

    # False when the rewrite failed or left the text unchanged
    changed: bool = False

    # 1-based line numbers in the final text touched by this rule
    lines: list[int] = field(default_factory=list)


def apply(rule: "Rule", source: str) -> str:
    """Apply a single rule's rewrite.

    A rewrite that raises or returns something other than text is discarded
    and the original source is returned.

    Args:
        rule: The rule to apply.
        source: Source text to rewrite.

    Returns:
        The rewritten text, or the original text on failure.
    """
    try:
        rewritten = rule.rewrite(source)
    except Exception:
        logger.warning("Rewrite %s failed; keeping original source", rule.name, exc_info=True)
        return source

    if not isinstance(rewritten, str):
        logger.warning(
            "Rewrite %s returned %s instead of text; keeping original source",
            rule.name,
            type(rewritten).__name__,
        )
        return source

    return rewritten


def _opcodes(before: str, after: str) -> list[tuple[str, int, int, int, int]]:
    matcher = SequenceMatcher(None, before.splitlines(), after.splitlines(), autojunk=False)
    return matcher.get_opcodes()


def touched_lines(before: str, after: str) -> list[int]:
    """Get the 1-based lines of `after` that differ from `before`.

    Pure deletions are attributed to the line that now sits at the deletion
    point.
    """
    line_count = len(after.splitlines())
    lines: set[int] = set()

    for tag, _i1, _i2, j1, j2 in _opcodes(before, after):
        if tag in ("replace", "insert"):
            lines.update(range(j1 + 1, j2 + 1))
        elif tag == "delete" and line_count:
            lines.add(min(j1 + 1, line_count))

    return sorted(lines)


def carry_lines(lines: list[int], before: str, after: str) -> list[int]:
    """Map line numbers of `before` onto `after`.

    Lines that a later rewrite deleted are dropped; lines inside a replaced
    block map onto the replacement.
    """
    if not lines or before == after:
        return list(lines)

    mapped: set[int] = set()
    opcodes = _opcodes(before, after)

    for line in lines:
        index = line - 1
        for tag, i1, i2, j1, j2 in opcodes:
            if not i1 <= index < i2:
                continue
            if tag == "equal":
                mapped.add(j1 + (index - i1) + 1)
            elif tag == "replace" and j2 > j1:
                mapped.add(j1 + min(index - i1, j2 - j1 - 1) + 1)
            break

    return sorted(mapped)


def apply_all(source: str, rules: list["Rule"]) -> tuple[str, list[RewriteOutcome]]:
    """Apply rules in order, each to the output of the previous one.

    Args:
        source: Original source text.
        rules: Rules to apply, in application order.

    Returns:
        The final text and one RewriteOutcome per rule, in the same order.
    """
    current = source
    outcomes: list[RewriteOutcome] = []

    for rule in rules:
        rewritten = apply(rule, current)
        changed = rewritten != current

        if changed:
            for outcome in outcomes:
                outcome.lines = carry_lines(outcome.lines, current, rewritten)

        outcome = RewriteOutcome(
            rule=rule,
            changed=changed,
            lines=touched_lines(current, rewritten) if changed else [],
        )
        outcomes.append(outcome)
        logger.debug(
            "Rule %s %s (lines %s)",
            rule.name,
            "rewrote source" if changed else "made no change",
            outcome.lines,
        )
        current = rewritten

    return current, outcomes
