"""Rules: readability rewrites for declarations and names.

- CodeStyleRule: `var` → `const`, and camelCase names the source declares
  itself → snake_case.
- NamingConventionsRule: the catalog's last resort. It always matches and
  swaps well-known ambiguous declarations (`var i = `, `var tmp = `) for
  descriptive names.
"""

from __future__ import annotations

import re

from .base import ANY_LANGUAGE, Rule
from ..schemas import OptimizationType


VAR_DECLARATION = re.compile(r"(?<![\w$.])var\s+([A-Za-z_$][\w$]*)")
MIXED_CASE = re.compile(r"[a-z][A-Z]")
DECLARED_CAMEL_CASE = re.compile(
    r"(?<![\w$.])(?:var|let|const)\s+([a-z][a-z0-9]*[A-Z][A-Za-z0-9]*)\b"
)
UPPER_LETTER = re.compile(r"[A-Z]")

AMBIGUOUS_NAMES = {
    "var i = ": "const index = ",
    "var j = ": "const position = ",
    "var a = ": "const array = ",
    "var s = ": "const string = ",
    "var str = ": "const inputString = ",
    "var arr = ": "const elements = ",
    "var e = ": "const event = ",
    "var x = ": "const xPosition = ",
    "var y = ": "const yPosition = ",
    "var fn = ": "const callback = ",
    "var tmp = ": "const temporary = ",
}

AMBIGUOUS_PATTERNS = [
    (re.compile(r"(?<![\w$.])" + re.escape(original)), replacement)
    for original, replacement in AMBIGUOUS_NAMES.items()
]


def to_snake_case(name: str) -> str:
    """Convert a camelCase identifier to snake_case."""
    return UPPER_LETTER.sub(lambda m: f"_{m.group(0).lower()}", name)


class CodeStyleRule(Rule):
    """Standardize declarations and local identifier casing."""

    optimization_type = OptimizationType.READABILITY
    languages = frozenset({"javascript", "typescript"})

    technique = "Code Style Standardization"
    impact = "Makes code easier to understand and maintain"
    readability_score = 78
    improvement_percentage = 30

    @property
    def name(self) -> str:
        return "code_style_standardization"

    @property
    def description(self) -> str:
        return "Improved variable naming and code structure for better readability"

    def detect(self, source: str) -> bool:
        return (
            VAR_DECLARATION.search(source) is not None
            or MIXED_CASE.search(source) is not None
        )

    def rewrite(self, source: str) -> str:
        # Only names declared in this source are re-cased; properties and
        # library calls like getElementById keep their spelling.
        declared = {m.group(1) for m in DECLARED_CAMEL_CASE.finditer(source)}

        improved = VAR_DECLARATION.sub(r"const \1", source)
        for name in sorted(declared, key=len, reverse=True):
            improved = re.sub(
                rf"(?<![\w$.]){re.escape(name)}(?![\w$])", to_snake_case(name), improved
            )
        return improved


class NamingConventionsRule(Rule):
    """Replace ambiguous single-letter declarations with descriptive names."""

    optimization_type = OptimizationType.READABILITY
    languages = frozenset({ANY_LANGUAGE})

    technique = "Naming Conventions"
    impact = "Improves code readability and maintainability"
    readability_score = 75
    improvement_percentage = 15

    @property
    def name(self) -> str:
        return "naming_conventions"

    @property
    def description(self) -> str:
        return "Suggested more descriptive variable names"

    def detect(self, source: str) -> bool:
        return True

    def rewrite(self, source: str) -> str:
        improved = source
        for pattern, replacement in AMBIGUOUS_PATTERNS:
            improved = pattern.sub(replacement, improved)
        return improved
