"""Pattern-based code optimization analysis.

Scans source text against a fixed catalog of rewrite rules, applies the
matching rewrites and scores the result on performance, security and
readability.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .analyzer import analyze, select_rules
from .schemas import AnalysisRequest, AnalysisResult, OptimizationType

__all__ = [
    "__version__",
    "analyze",
    "select_rules",
    "AnalysisRequest",
    "AnalysisResult",
    "OptimizationType",
]
