"""Rule: Accumulator loop → list comprehension (Python).

Pattern detection:
- acc = []
  for x in iterable:
      acc.append(expr)
- The same with a single `if cond:` guard around the append.
- The append must be the last statement of the loop body: the next
  non-blank line dedents to the loop's level or further and is not an
  `else:` clause.
"""

from __future__ import annotations

import re

from .base import Rule
from ..schemas import OptimizationType


ACCUMULATOR_LOOP_PATTERN = re.compile(
    r"^(?P<indent>[ \t]*)(?P<acc>[A-Za-z_]\w*)[ \t]*=[ \t]*\[\][ \t]*\n"
    r"(?P=indent)for[ \t]+(?P<var>[A-Za-z_][\w, ]*?)[ \t]+in[ \t]+(?P<iter>[^\n:]+?)[ \t]*:[ \t]*\n"
    r"(?:[ \t]+if[ \t]+(?P<cond>[^\n:]+?)[ \t]*:[ \t]*\n)?"
    r"[ \t]+(?P=acc)\.append\((?P<expr>[^\n]+)\)[ \t]*$",
    re.MULTILINE,
)

ELSE_CLAUSE = re.compile(r"else[ \t]*:")


def _loop_is_closed(source: str, match: re.Match) -> bool:
    """Check that nothing after the append still belongs to the loop."""
    indent = len(match.group("indent"))
    for line in source[match.end():].splitlines():
        stripped = line.lstrip(" \t")
        if not stripped:
            continue
        if len(line) - len(stripped) > indent:
            return False
        return not ELSE_CLAUSE.match(stripped)
    return True


def _to_comprehension(match: re.Match) -> str:
    if not _loop_is_closed(match.string, match):
        return match.group(0)
    guard = f" if {match.group('cond')}" if match.group("cond") else ""
    return (
        f"{match.group('indent')}{match.group('acc')} = "
        f"[{match.group('expr')} for {match.group('var')} in {match.group('iter')}{guard}]"
    )


class ListComprehensionRule(Rule):
    """Replace list building loops with list comprehensions."""

    optimization_type = OptimizationType.PERFORMANCE
    languages = frozenset({"python"})

    technique = "Pythonic Patterns"
    impact = "Improves performance by reducing interpreter overhead"
    performance_score = 85
    improvement_percentage = 40

    @property
    def name(self) -> str:
        return "python_list_comprehension"

    @property
    def description(self) -> str:
        return "Replaced inefficient list building with list comprehension"

    def detect(self, source: str) -> bool:
        return any(
            _loop_is_closed(source, m) for m in ACCUMULATOR_LOOP_PATTERN.finditer(source)
        )

    def rewrite(self, source: str) -> str:
        return ACCUMULATOR_LOOP_PATTERN.sub(_to_comprehension, source)
