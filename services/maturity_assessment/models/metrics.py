"""
Derived Metrics
===============

Result records produced by the scoring engine. They are regenerated on
every scoring pass and never persisted.

Scores and coverage are fractions in [0, 1].

Version: 0.1.0
"""

from dataclasses import dataclass, field
from enum import Enum

from services.maturity_assessment.models.reference import (
    Criticality,
    GovernanceFunction,
    MaturityLevel,
    OwnershipRole,
)


class RoadmapPriority(str, Enum):
    """Remediation horizon buckets, in execution order."""

    IMMEDIATE = "immediate"
    SHORT = "short"
    MEDIUM = "medium"

    @property
    def rank(self) -> int:
        return list(RoadmapPriority).index(self)


class EffortLevel(str, Enum):
    """Heuristic remediation effort label."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class QuestionScore:
    """Effective score of a single question."""

    question_id: str
    response_score: float | None
    evidence_multiplier: float | None
    effective_score: float | None
    is_applicable: bool


@dataclass
class SubcategoryMetrics:
    """
    Aggregated metrics of one subcategory.

    `answered_questions` counts every response including NA;
    `scored_questions` only the applicable answered ones, which coverage uses.
    """

    subcat_id: str
    subcat_name: str
    domain_id: str
    score: float
    maturity_level: MaturityLevel
    total_questions: int
    answered_questions: int
    applicable_questions: int
    scored_questions: int
    coverage: float
    criticality: Criticality
    weight: float
    critical_gaps: int
    ownership_role: OwnershipRole | None = None

    @property
    def has_signal(self) -> bool:
        """Whether the subcategory takes part in weighted averages."""
        return self.applicable_questions > 0 and self.answered_questions > 0


@dataclass
class DomainMetrics:
    """Weighted aggregate of the subcategories of one domain."""

    domain_id: str
    domain_name: str
    score: float
    maturity_level: MaturityLevel
    total_questions: int
    answered_questions: int
    applicable_questions: int
    scored_questions: int
    coverage: float
    critical_gaps: int
    governance_function: GovernanceFunction | None = None
    subcategory_metrics: list[SubcategoryMetrics] = field(default_factory=list)

    @property
    def has_signal(self) -> bool:
        return self.applicable_questions > 0 and self.answered_questions > 0

    @property
    def average_subcategory_weight(self) -> float:
        """Weight of the domain in the overall aggregation."""
        if not self.subcategory_metrics:
            return 0.0
        return sum(sm.weight for sm in self.subcategory_metrics) / len(self.subcategory_metrics)


@dataclass
class GovernanceFunctionMetrics:
    """Metrics of the domains tagged with one governance function."""

    function: GovernanceFunction
    score: float
    maturity_level: MaturityLevel
    total_questions: int
    answered_questions: int
    coverage: float
    domain_count: int


@dataclass
class OwnershipMetrics:
    """Metrics of the questions owned by one organizational role."""

    ownership_role: OwnershipRole
    score: float
    maturity_level: MaturityLevel
    total_questions: int
    answered_questions: int
    coverage: float


@dataclass
class FrameworkCategoryMetrics:
    """Metrics of the questions mapped onto one framework category."""

    category_id: str
    category_name: str
    score: float
    maturity_level: MaturityLevel
    total_questions: int
    answered_questions: int
    coverage: float


@dataclass
class OverallMetrics:
    """Platform-wide metrics plus the cross-cutting views."""

    overall_score: float
    maturity_level: MaturityLevel
    total_questions: int
    answered_questions: int
    applicable_questions: int
    scored_questions: int
    coverage: float
    evidence_readiness: float
    critical_gaps: int
    domain_metrics: list[DomainMetrics] = field(default_factory=list)
    governance_function_metrics: list[GovernanceFunctionMetrics] = field(default_factory=list)
    ownership_metrics: list[OwnershipMetrics] = field(default_factory=list)
    framework_category_metrics: list[FrameworkCategoryMetrics] = field(default_factory=list)


@dataclass
class CriticalGap:
    """A question in a High/Critical subcategory that is unanswered or scores low."""

    question_id: str
    question_text: str
    subcat_id: str
    subcat_name: str
    domain_id: str
    domain_name: str
    criticality: Criticality
    effective_score: float
    response: str
    evidence_ok: str
    is_answered: bool
    ownership_role: OwnershipRole | None = None
    governance_function: GovernanceFunction | None = None


@dataclass
class FrameworkCoverage:
    """Coverage and mean score of the questions tagged with one framework."""

    framework: str
    total_questions: int
    answered_questions: int
    average_score: float
    coverage: float


@dataclass
class RoadmapItem:
    """One remediation action of the roadmap."""

    priority: RoadmapPriority
    timeframe: str
    domain_id: str
    domain: str
    action: str
    impact: str
    effort: EffortLevel
    ownership_role: OwnershipRole
    question_id: str
