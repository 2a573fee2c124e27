"""
Assessment Report
=================

Runs every engine component over one answer snapshot.

Version: 0.1.0
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from services.maturity_assessment.catalog.catalog import Catalog
from services.maturity_assessment.catalog.defaults import CRITICAL_GAP_THRESHOLD
from services.maturity_assessment.catalog.frameworks import FrameworkPolicy
from services.maturity_assessment.models.answer import Answer
from services.maturity_assessment.models.metrics import (
    CriticalGap,
    FrameworkCoverage,
    OverallMetrics,
    RoadmapItem,
)
from services.maturity_assessment.models.reference import Question
from services.maturity_assessment.services.framework_coverage import FrameworkCoverageService
from services.maturity_assessment.services.gaps import GapService
from services.maturity_assessment.services.roadmap import RoadmapService
from services.maturity_assessment.services.scoring import ScoringService
from shared.logging import get_logger


logger = get_logger(__name__)


@dataclass
class AssessmentReport:
    """Complete scoring output for one snapshot."""

    generated_at: datetime
    metrics: OverallMetrics
    critical_gaps: list[CriticalGap] = field(default_factory=list)
    framework_coverage: list[FrameworkCoverage] = field(default_factory=list)
    roadmap: list[RoadmapItem] = field(default_factory=list)


def build_report(
    catalog: Catalog,
    answers: Mapping[str, Answer],
    active_questions: Sequence[Question] | None = None,
    gap_threshold: float = CRITICAL_GAP_THRESHOLD,
    roadmap_max_items: int = 10,
    roadmap_per_domain: int = 3,
    framework_policy: FrameworkPolicy | None = None,
) -> AssessmentReport:
    """
    Score a snapshot end to end.

    The roadmap is built from the gaps at `gap_threshold`; the overall
    coverage uses the active question count when an active set is given.
    """
    scoring = ScoringService(catalog, framework_policy)
    metrics = scoring.overall_metrics(
        answers,
        active_question_count=len(active_questions) if active_questions is not None else None,
    )
    gaps = GapService(catalog).critical_gaps(
        answers,
        threshold=gap_threshold,
        active_questions=active_questions,
    )
    coverage = FrameworkCoverageService(catalog, framework_policy).coverage(
        answers,
        active_questions=active_questions,
    )
    roadmap = RoadmapService(catalog).generate(
        gaps,
        max_items=roadmap_max_items,
        per_domain=roadmap_per_domain,
    )

    logger.info(
        "assessment_report_built",
        overall_score=round(metrics.overall_score, 4),
        maturity_level=metrics.maturity_level.level,
        coverage=round(metrics.coverage, 4),
        critical_gaps=len(gaps),
        roadmap_items=len(roadmap),
    )

    return AssessmentReport(
        generated_at=datetime.now(UTC),
        metrics=metrics,
        critical_gaps=gaps,
        framework_coverage=coverage,
        roadmap=roadmap,
    )
