"""Entry point tying the catalog, rewrite engine and composer together."""

from __future__ import annotations

import logging
from typing import Iterable

from .composer import compose
from .engine import apply_all
from .rules import get_registry
from .rules.base import Rule, RuleRegistry
from .schemas import AnalysisRequest, AnalysisResult, Domain, OptimizationType
from .scoring import ScoreSampler

logger = logging.getLogger(__name__)


def select_rules(request: AnalysisRequest, registry: RuleRegistry) -> list[Rule]:
    """Pick the first matching rule for each requested optimization type.

    Types are evaluated independently against the original source and
    returned in application priority (performance, security, readability).
    """
    selected = []
    for opt_type in OptimizationType.ordered(request.optimization_types):
        rule = registry.first_match(request.code or "", request.language, opt_type)
        if rule is not None:
            selected.append(rule)
    return selected


def analyze(
    request: AnalysisRequest,
    registry: RuleRegistry | None = None,
    domains: Iterable[Domain] | None = None,
    sampler: ScoreSampler | None = None,
) -> AnalysisResult:
    """Analyze a request and produce the optimization result.

    Args:
        request: The request to analyze.
        registry: Rule catalog (defaults to the global registry).
        domains: Knowledge domains for tagging (defaults to the seed table).
        sampler: Placeholder score source (defaults to an unseeded sampler).

    Returns:
        The composed AnalysisResult.
    """
    registry = registry or get_registry()
    code = request.code or ""

    rules = select_rules(request, registry)
    logger.debug(
        "Analyzing %s (%s): matched %s",
        request.filename,
        request.language,
        [rule.name for rule in rules] or "no rules",
    )

    optimized_code, outcomes = apply_all(code, rules)
    return compose(
        request,
        outcomes,
        optimized_code,
        fallback=registry.fallback,
        domains=domains,
        sampler=sampler,
    )
