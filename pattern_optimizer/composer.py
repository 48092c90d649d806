"""Scoring & insight composer - turns rewrite outcomes into an AnalysisResult."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from .engine import RewriteOutcome, apply_all
from .knowledge import DEFAULT_DOMAINS, tags_for
from .schemas import (
    AnalysisRequest,
    AnalysisResult,
    Domain,
    DomainTag,
    Insight,
    Metrics,
    OptimizationType,
)
from .scoring import ScoreSampler, clamp_score

if TYPE_CHECKING:
    from .rules.base import Rule

logger = logging.getLogger(__name__)


def build_insight(rule: "Rule") -> Insight:
    """Create the insight for a fired rule from its narrative fields."""
    return Insight(
        type=rule.optimization_type.value,
        description=rule.description,
        applied_technique=rule.technique,
        impact=rule.impact,
    )


def tag_domains(
    rules: Iterable["Rule"],
    domains: Iterable[Domain],
    applicable_domains: list[str] | None = None,
) -> list[DomainTag]:
    """Tag fired rules with knowledge domains.

    Rules tagging the same domain share one entry, in first-seen order.
    Domains outside `applicable_domains` (when given) are left out.
    """
    domains = list(domains)
    tags: dict[str, DomainTag] = {}

    for rule in rules:
        domain = tags_for(rule.technique, domains)
        if domain is None:
            continue
        if applicable_domains is not None and domain.name not in applicable_domains:
            continue
        tag = tags.setdefault(domain.name, DomainTag(name=domain.name))
        if rule.technique not in tag.algorithms:
            tag.algorithms.append(rule.technique)

    return list(tags.values())


def compose(
    request: AnalysisRequest,
    outcomes: list[RewriteOutcome],
    optimized_code: str,
    fallback: "Rule | None" = None,
    domains: Iterable[Domain] | None = None,
    sampler: ScoreSampler | None = None,
) -> AnalysisResult:
    """Assemble the analysis result for a request.

    Args:
        request: The analysis request.
        outcomes: Outcomes of the matched rules, in application order.
        optimized_code: Source after all rewrites.
        fallback: Rule applied when no outcome changed anything.
        domains: Knowledge domains for tagging (defaults to DEFAULT_DOMAINS).
        sampler: Placeholder score source for unscored axes.

    Returns:
        A complete AnalysisResult; never raises for missing optional data.
    """
    domains = DEFAULT_DOMAINS if domains is None else domains
    sampler = sampler or ScoreSampler()

    fired = [o for o in outcomes if o.changed]
    if not fired and fallback is not None:
        # Recorded even when the fallback rewrite is a no-op so there is
        # always at least one insight.
        optimized_code, fallback_outcomes = apply_all(optimized_code, [fallback])
        fired = fallback_outcomes

    scores: dict[OptimizationType, int] = {}
    improvement = 0
    insights: list[Insight] = []

    for outcome in fired:
        rule = outcome.rule
        score = rule.score_for(rule.optimization_type)
        if score is not None:
            scores[rule.optimization_type] = clamp_score(score)
        # Last applied rule sets the headline improvement
        improvement = clamp_score(rule.improvement_percentage)
        insights.append(build_insight(rule))

    for opt_type in OptimizationType:
        if opt_type not in scores:
            scores[opt_type] = clamp_score(sampler.placeholder())

    line_count = len(optimized_code.splitlines())
    optimized_lines = sorted(
        {line for o in fired for line in o.lines if 1 <= line <= line_count}
    )

    metrics = Metrics(
        performance_score=scores[OptimizationType.PERFORMANCE],
        security_score=scores[OptimizationType.SECURITY],
        readability_score=scores[OptimizationType.READABILITY],
        improvement_percentage=improvement,
        optimized_lines=optimized_lines,
    )

    result = AnalysisResult(
        original_code=request.code,
        optimized_code=optimized_code,
        filename=request.filename,
        language=request.language,
        metrics=metrics,
        insights=insights,
        domains=tag_domains(
            (o.rule for o in fired), domains, request.applicable_domains
        ),
    )
    logger.debug(
        "Composed result for %s: %d insight(s), %d domain(s)",
        request.filename,
        len(result.insights),
        len(result.domains),
    )
    return result
