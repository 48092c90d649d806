"""In-memory result store and dashboard aggregation.

The store is created and owned by the caller; nothing here is module-level
state. Ids come from an explicit allocator so callers can share or reset the
sequence.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Iterable

from .knowledge import DEFAULT_DOMAINS
from .schemas import (
    AnalysisResult,
    DashboardStats,
    Domain,
    OptimizationRecord,
    OptimizationType,
)

logger = logging.getLogger(__name__)


# Dashboard averages used before any record of a type exists
DEFAULT_AVERAGES = {
    OptimizationType.PERFORMANCE: 87,
    OptimizationType.SECURITY: 92,
    OptimizationType.READABILITY: 78,
}

RECENT_LIMIT = 5


class IdAllocator:
    """Hands out increasing integer ids, starting at `start`."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)


def improvement_label(record: OptimizationRecord) -> str:
    """Short dashboard label for an optimization record."""
    if record.type == OptimizationType.PERFORMANCE.value:
        return f"{record.improvement_percentage}% faster"
    if record.type == OptimizationType.SECURITY.value:
        return "Security improved"
    if record.type == OptimizationType.READABILITY.value:
        return "Better readability"
    return "Optimized"


class ResultStore:
    """Keeps analysis results and one optimization record per insight."""

    def __init__(
        self,
        result_ids: IdAllocator | None = None,
        record_ids: IdAllocator | None = None,
    ) -> None:
        self._result_ids = result_ids or IdAllocator()
        self._record_ids = record_ids or IdAllocator()
        self._results: dict[int, AnalysisResult] = {}
        self._records: dict[int, OptimizationRecord] = {}

    def save(self, result: AnalysisResult) -> int:
        """Store a result and record its insights.

        Returns:
            The id assigned to the result.
        """
        result_id = self._result_ids.next_id()
        self._results[result_id] = result

        domain = result.domains[0].name if result.domains else None
        for insight in result.insights:
            try:
                score = result.metrics.score_for(OptimizationType(insight.type))
            except ValueError:
                score = 0
            record = OptimizationRecord(
                id=self._record_ids.next_id(),
                result_id=result_id,
                filename=result.filename,
                type=insight.type,
                score=score,
                improvement_percentage=result.metrics.improvement_percentage,
                technique=insight.applied_technique,
                description=insight.description,
                domain=domain,
            )
            self._records[record.id] = record

        logger.debug("Saved result %d for %s", result_id, result.filename)
        return result_id

    def get(self, result_id: int) -> AnalysisResult | None:
        return self._results.get(result_id)

    def results(self) -> list[AnalysisResult]:
        return list(self._results.values())

    def records(self) -> list[OptimizationRecord]:
        return list(self._records.values())

    def recent_records(self, limit: int = RECENT_LIMIT) -> list[OptimizationRecord]:
        """Most recent records first; ties broken by newest id."""
        ordered = sorted(
            self._records.values(), key=lambda r: (r.created_at, r.id), reverse=True
        )
        return ordered[:limit]

    def dashboard_stats(self, domains: Iterable[Domain] = DEFAULT_DOMAINS) -> DashboardStats:
        """Aggregate stored records for the dashboard.

        Args:
            domains: Knowledge domains to report on.

        Returns:
            Average scores per axis, recent optimizations and domain usage.
        """
        averages: dict[OptimizationType, int] = {}
        for opt_type in OptimizationType:
            scores = [
                r.score for r in self._records.values() if r.type == opt_type.value and r.score
            ]
            averages[opt_type] = (
                round(sum(scores) / len(scores)) if scores else DEFAULT_AVERAGES[opt_type]
            )

        recent = [
            {
                "id": r.id,
                "filename": r.filename,
                "type": r.type,
                "date": r.created_at.isoformat(),
                "improvement": improvement_label(r),
                "domain": r.domain or "General",
            }
            for r in self.recent_records()
        ]

        domain_rows: list[dict[str, Any]] = []
        for domain in domains:
            applied = sum(1 for r in self._records.values() if r.domain == domain.name)
            applications = []
            for entry in domain.algorithms[:2]:
                technique, _, description = entry.partition(":")
                applications.append(
                    {
                        "technique": technique,
                        "description": description or f"Applied {technique} to optimize code",
                    }
                )
            domain_rows.append(
                {
                    "name": domain.name,
                    "algorithmsApplied": applied,
                    "recentApplications": applications,
                    "learningAccuracy": domain.learning_accuracy,
                }
            )

        return DashboardStats(
            performance_score=averages[OptimizationType.PERFORMANCE],
            security_score=averages[OptimizationType.SECURITY],
            readability_score=averages[OptimizationType.READABILITY],
            recent_optimizations=recent,
            domains=domain_rows,
            analysis_count=len(self._results),
        )
