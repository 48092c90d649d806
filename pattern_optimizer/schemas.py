"""Data models for code optimization analysis."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class OptimizationType(Enum):
    """Axes an analysis is scored on.

    Declaration order is the order rewrites are applied in.
    """

    PERFORMANCE = "performance"
    SECURITY = "security"
    READABILITY = "readability"

    @classmethod
    def ordered(cls, types: list["OptimizationType"] | None) -> list["OptimizationType"]:
        """Deduplicate and sort types into application priority."""
        return [t for t in cls if t in (types or [])]


@dataclass
class AnalysisRequest:
    """A single request to analyze a piece of source code."""

    code: str
    filename: str
    language: str
    optimization_types: list[OptimizationType] = field(default_factory=list)

    # None means "include all domains"
    applicable_domains: list[str] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisRequest":
        """Build a request from the camelCase wire shape.

        Unknown optimization type names are dropped.
        """
        names = data.get("optimizationTypes") or []
        if isinstance(names, str):
            names = [names]

        types: list[OptimizationType] = []
        for name in names:
            try:
                types.append(OptimizationType(str(name).lower()))
            except ValueError:
                logger.warning("Dropping unknown optimization type %r", name)

        domains = data.get("applicableDomains")
        return cls(
            code=data.get("code", "") or "",
            filename=data.get("filename", "") or "",
            language=data.get("language", "") or "",
            optimization_types=types,
            applicable_domains=list(domains) if domains is not None else None,
        )


@dataclass
class Metrics:
    """Numeric scores for an analysis."""

    performance_score: int = 0
    security_score: int = 0
    readability_score: int = 0
    improvement_percentage: int = 0
    optimized_lines: list[int] = field(default_factory=list)

    def score_for(self, opt_type: OptimizationType) -> int:
        return getattr(self, f"{opt_type.value}_score")

    def to_dict(self) -> dict[str, Any]:
        return {
            "performanceScore": self.performance_score,
            "securityScore": self.security_score,
            "readabilityScore": self.readability_score,
            "improvementPercentage": self.improvement_percentage,
            "optimizedLines": self.optimized_lines,
        }


@dataclass
class Insight:
    """Human-readable explanation of one applied rewrite."""

    type: str
    description: str
    applied_technique: str
    impact: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "description": self.description,
            "appliedTechnique": self.applied_technique,
            "impact": self.impact,
        }


@dataclass
class DomainTag:
    """A knowledge domain attached to a result, with the techniques it matched."""

    name: str
    algorithms: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "algorithms": self.algorithms}


@dataclass
class AnalysisResult:
    """Complete result of analyzing one request."""

    original_code: str
    optimized_code: str
    filename: str
    language: str
    metrics: Metrics = field(default_factory=Metrics)
    insights: list[Insight] = field(default_factory=list)
    domains: list[DomainTag] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalCode": self.original_code,
            "optimizedCode": self.optimized_code,
            "filename": self.filename,
            "language": self.language,
            "metrics": self.metrics.to_dict(),
            "insights": [i.to_dict() for i in self.insights],
            "domains": [d.to_dict() for d in self.domains],
        }


@dataclass(frozen=True)
class Domain:
    """Static knowledge-domain reference data.

    Algorithm entries are "Technique:description" strings.
    """

    name: str
    description: str
    algorithms: tuple[str, ...] = ()
    learning_accuracy: int = 0
    active: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Domain":
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            algorithms=tuple(data.get("algorithms", [])),
            learning_accuracy=int(data.get("learningAccuracy", 0)),
            active=bool(data.get("active", True)),
        )

    def techniques(self) -> list[str]:
        """Technique names of the algorithm entries, without descriptions."""
        return [entry.split(":", 1)[0].strip() for entry in self.algorithms]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "algorithms": list(self.algorithms),
            "learningAccuracy": self.learning_accuracy,
            "active": self.active,
        }


@dataclass
class OptimizationRecord:
    """Stored summary of one insight from a saved analysis."""

    id: int
    result_id: int
    filename: str
    type: str
    score: int
    improvement_percentage: int
    technique: str
    description: str
    domain: str | None = None
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "resultId": self.result_id,
            "filename": self.filename,
            "type": self.type,
            "score": self.score,
            "improvementPercentage": self.improvement_percentage,
            "technique": self.technique,
            "description": self.description,
            "domain": self.domain,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass
class DashboardStats:
    """Aggregate view over stored analyses."""

    performance_score: int
    security_score: int
    readability_score: int
    recent_optimizations: list[dict[str, Any]] = field(default_factory=list)
    domains: list[dict[str, Any]] = field(default_factory=list)
    analysis_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "performanceScore": self.performance_score,
            "securityScore": self.security_score,
            "readabilityScore": self.readability_score,
            "recentOptimizations": self.recent_optimizations,
            "domains": self.domains,
            "analysisCount": self.analysis_count,
        }
