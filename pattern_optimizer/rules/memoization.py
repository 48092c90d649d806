"""Rule: Naive recursive Fibonacci → memoized recursion.

Detects a `function fibonacci(n)` whose body recurses on n - 1 and n - 2
without a cache and rewrites every such declaration to thread a memo object
through the calls.

Pattern detection:
- function fibonacci(n) { ... return fibonacci(n - 1) + fibonacci(n - 2); }
- Already memoized functions take a second parameter and no longer match.
"""

from __future__ import annotations

import re

from .base import Rule
from ..schemas import OptimizationType


# Signature up to and including the doubly recursive return statement.
# The closing brace of the function is left in place.
FIBONACCI_PATTERN = re.compile(
    r"function\s+fibonacci\s*\(\s*n\s*\)\s*\{[\s\S]*?"
    r"return\s+fibonacci\s*\(\s*n\s*-\s*1\s*\)\s*\+\s*fibonacci\s*\(\s*n\s*-\s*2\s*\)\s*;?"
)

MEMOIZED_FIBONACCI = """function fibonacci(n, memo = {}) {
  // Base cases
  if (n <= 0) return 0;
  if (n === 1) return 1;

  // Reuse previously computed values
  if (memo[n] !== undefined) return memo[n];

  memo[n] = fibonacci(n - 1, memo) + fibonacci(n - 2, memo);
  return memo[n];"""


class FibonacciMemoizationRule(Rule):
    """Add memoization to a naive recursive Fibonacci function."""

    optimization_type = OptimizationType.PERFORMANCE
    languages = frozenset({"javascript", "typescript"})

    technique = "Dynamic Programming"
    impact = (
        "Reduces time complexity from O(2^n) to O(n), making it approximately "
        "1000x faster for large inputs"
    )
    performance_score = 87
    improvement_percentage = 95

    @property
    def name(self) -> str:
        return "fibonacci_memoization"

    @property
    def description(self) -> str:
        return "Added memoization to store previously calculated Fibonacci values"

    def detect(self, source: str) -> bool:
        return FIBONACCI_PATTERN.search(source) is not None

    def rewrite(self, source: str) -> str:
        return FIBONACCI_PATTERN.sub(lambda _: MEMOIZED_FIBONACCI, source)
