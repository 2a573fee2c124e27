"""
Assessment Report Routes
========================

API endpoints for critical gaps, framework coverage, the remediation
roadmap and the complete assessment report.

Version: 0.1.0
"""

from fastapi import APIRouter, Depends, Query

from services.maturity_assessment.catalog import Catalog
from services.maturity_assessment.dependencies import (
    get_active_questions,
    get_answer_store,
    get_catalog,
    get_scoring_settings,
)
from services.maturity_assessment.models.metrics import (
    CriticalGap,
    FrameworkCoverage,
    RoadmapItem,
)
from services.maturity_assessment.models.reference import Question
from services.maturity_assessment.services.answers import AnswerStore
from services.maturity_assessment.services.framework_coverage import FrameworkCoverageService
from services.maturity_assessment.services.gaps import GapService
from services.maturity_assessment.services.report import AssessmentReport, build_report
from services.maturity_assessment.services.roadmap import RoadmapService
from shared.config import ScoringSettings
from shared.logging import get_logger


logger = get_logger(__name__)

router = APIRouter()


@router.get("/gaps", response_model=list[CriticalGap])
async def get_critical_gaps(
    threshold: float | None = Query(
        default=None,
        ge=0.0,
        le=1.0,
        description="Effective score under which a question is a gap",
    ),
    catalog: Catalog = Depends(get_catalog),
    store: AnswerStore = Depends(get_answer_store),
    active_questions: list[Question] | None = Depends(get_active_questions),
    scoring: ScoringSettings = Depends(get_scoring_settings),
) -> list[CriticalGap]:
    """
    List critical gaps.

    Questions in High or Critical subcategories that are unanswered or
    score below the threshold, most critical and lowest scoring first.
    """
    return GapService(catalog).critical_gaps(
        store.snapshot(),
        threshold=threshold if threshold is not None else scoring.gap_threshold,
        active_questions=active_questions,
    )


@router.get("/frameworks", response_model=list[FrameworkCoverage])
async def get_framework_coverage(
    catalog: Catalog = Depends(get_catalog),
    store: AnswerStore = Depends(get_answer_store),
    active_questions: list[Question] | None = Depends(get_active_questions),
) -> list[FrameworkCoverage]:
    """Coverage and mean score per authoritative framework."""
    return FrameworkCoverageService(catalog).coverage(
        store.snapshot(),
        active_questions=active_questions,
    )


@router.get("/roadmap", response_model=list[RoadmapItem])
async def get_roadmap(
    max_items: int | None = Query(default=None, ge=1, description="Maximum roadmap items"),
    catalog: Catalog = Depends(get_catalog),
    store: AnswerStore = Depends(get_answer_store),
    active_questions: list[Question] | None = Depends(get_active_questions),
    scoring: ScoringSettings = Depends(get_scoring_settings),
) -> list[RoadmapItem]:
    """Remediation roadmap built from the critical gaps."""
    gaps = GapService(catalog).critical_gaps(
        store.snapshot(),
        threshold=scoring.gap_threshold,
        active_questions=active_questions,
    )
    return RoadmapService(catalog).generate(
        gaps,
        max_items=max_items or scoring.roadmap_max_items,
        per_domain=scoring.roadmap_items_per_domain,
    )


@router.get("", response_model=AssessmentReport)
async def get_report(
    catalog: Catalog = Depends(get_catalog),
    store: AnswerStore = Depends(get_answer_store),
    active_questions: list[Question] | None = Depends(get_active_questions),
    scoring: ScoringSettings = Depends(get_scoring_settings),
) -> AssessmentReport:
    """Complete assessment report for the current answers."""
    return build_report(
        catalog,
        store.snapshot(),
        active_questions=active_questions,
        gap_threshold=scoring.gap_threshold,
        roadmap_max_items=scoring.roadmap_max_items,
        roadmap_per_domain=scoring.roadmap_items_per_domain,
    )
