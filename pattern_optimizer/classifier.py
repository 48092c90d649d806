"""Request classifier - infers languages and normalizes request fields.

Turns loosely specified input (file names, language aliases, comma lists of
optimization types) into the canonical values the rule catalog matches on.
"""

from __future__ import annotations

import re
from pathlib import PurePath

from .schemas import AnalysisRequest, OptimizationType


UNKNOWN_LANGUAGE = "unknown"

# Extension -> canonical language name
LANGUAGE_EXTENSIONS = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".mts": "typescript",
    ".py": "python",
    ".pyi": "python",
}

LANGUAGE_ALIASES = {
    "js": "javascript",
    "node": "javascript",
    "ts": "typescript",
    "py": "python",
    "python3": "python",
}

TYPE_SEPARATOR = re.compile(r"[,\s]+")


def normalize_language(language: str | None) -> str:
    """Lowercase a language name and resolve common aliases."""
    if not language:
        return UNKNOWN_LANGUAGE
    name = language.strip().lower()
    return LANGUAGE_ALIASES.get(name, name) or UNKNOWN_LANGUAGE


def detect_language(filename: str) -> str:
    """Infer the language of a file from its extension.

    Args:
        filename: File name or path.

    Returns:
        Canonical language name, or "unknown".
    """
    suffix = PurePath(filename).suffix.lower()
    return LANGUAGE_EXTENSIONS.get(suffix, UNKNOWN_LANGUAGE)


def parse_optimization_types(value: str | list[str] | None) -> list[OptimizationType]:
    """Parse optimization type names.

    Args:
        value: A comma/space separated string or a list of names.
               None or empty means all types.

    Returns:
        Types in application priority order.

    Raises:
        ValueError: If a name is not a known optimization type.
    """
    if not value:
        return list(OptimizationType)

    names = TYPE_SEPARATOR.split(value) if isinstance(value, str) else value
    types = []
    for name in names:
        name = name.strip().lower()
        if not name:
            continue
        try:
            types.append(OptimizationType(name))
        except ValueError:
            valid = ", ".join(t.value for t in OptimizationType)
            raise ValueError(f"Unknown optimization type '{name}' (expected one of: {valid})") from None

    return OptimizationType.ordered(types)


def parse_domain_filter(value: str | None) -> list[str] | None:
    """Parse a comma separated domain filter; empty means no filter."""
    if not value:
        return None
    names = [name.strip() for name in value.split(",")]
    return [name for name in names if name] or None


def build_request(
    code: str,
    filename: str,
    language: str | None = None,
    optimization_types: list[OptimizationType] | None = None,
    applicable_domains: list[str] | None = None,
) -> AnalysisRequest:
    """Build an AnalysisRequest, inferring the language when not given."""
    resolved = normalize_language(language) if language else detect_language(filename)
    return AnalysisRequest(
        code=code,
        filename=filename,
        language=resolved,
        optimization_types=OptimizationType.ordered(
            optimization_types if optimization_types is not None else list(OptimizationType)
        ),
        applicable_domains=applicable_domains,
    )
