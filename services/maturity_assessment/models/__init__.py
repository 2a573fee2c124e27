"""
Maturity Assessment Models
==========================

Reference data, answers and derived metrics of the maturity assessment.

Version: 0.1.0
"""

from services.maturity_assessment.models.answer import (
    Answer,
    AnswerUpdate,
    ResponseValue,
    normalize_response_value,
)
from services.maturity_assessment.models.metrics import (
    CriticalGap,
    DomainMetrics,
    EffortLevel,
    FrameworkCategoryMetrics,
    FrameworkCoverage,
    GovernanceFunctionMetrics,
    OverallMetrics,
    OwnershipMetrics,
    QuestionScore,
    RoadmapItem,
    RoadmapPriority,
    SubcategoryMetrics,
)
from services.maturity_assessment.models.reference import (
    Criticality,
    CriticalityLevel,
    Domain,
    EvidenceOption,
    FrameworkCategory,
    GovernanceFunction,
    MaturityLevel,
    OwnershipRole,
    Question,
    ResponseOption,
    Subcategory,
)

__all__ = [
    # Answers
    "Answer",
    "AnswerUpdate",
    "ResponseValue",
    "normalize_response_value",
    # Reference data
    "Criticality",
    "CriticalityLevel",
    "Domain",
    "EvidenceOption",
    "FrameworkCategory",
    "GovernanceFunction",
    "MaturityLevel",
    "OwnershipRole",
    "Question",
    "ResponseOption",
    "Subcategory",
    # Metrics
    "CriticalGap",
    "DomainMetrics",
    "EffortLevel",
    "FrameworkCategoryMetrics",
    "FrameworkCoverage",
    "GovernanceFunctionMetrics",
    "OverallMetrics",
    "OwnershipMetrics",
    "QuestionScore",
    "RoadmapItem",
    "RoadmapPriority",
    "SubcategoryMetrics",
]
