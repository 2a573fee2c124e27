"""
Maturity Scores Routes
======================

API endpoints for maturity scores at every aggregation level.

Each request scores one snapshot of the answer store against the current
catalog snapshot.

Version: 0.1.0
"""

from fastapi import APIRouter, Depends

from services.maturity_assessment.catalog import Catalog
from services.maturity_assessment.dependencies import (
    get_active_questions,
    get_answer_store,
    get_catalog,
)
from services.maturity_assessment.models.metrics import (
    DomainMetrics,
    OverallMetrics,
    QuestionScore,
    SubcategoryMetrics,
)
from services.maturity_assessment.models.reference import Question
from services.maturity_assessment.services.answers import AnswerStore
from services.maturity_assessment.services.scoring import ScoringService
from shared.logging import get_logger


logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=OverallMetrics)
async def get_overall_score(
    catalog: Catalog = Depends(get_catalog),
    store: AnswerStore = Depends(get_answer_store),
    active_questions: list[Question] | None = Depends(get_active_questions),
) -> OverallMetrics:
    """
    Get the overall maturity score.

    Includes the per-domain breakdown and the governance function,
    ownership and framework category views. When a framework filter is
    given, coverage is measured against the active question set.
    """
    answers = store.snapshot()
    metrics = ScoringService(catalog).overall_metrics(
        answers,
        active_question_count=len(active_questions) if active_questions is not None else None,
    )

    logger.debug(
        "overall_score_served",
        score=metrics.overall_score,
        answered=metrics.answered_questions,
    )
    return metrics


@router.get("/domains/{domain_id}", response_model=DomainMetrics)
async def get_domain_score(
    domain_id: str,
    catalog: Catalog = Depends(get_catalog),
    store: AnswerStore = Depends(get_answer_store),
) -> DomainMetrics:
    """Get the weighted score of one domain."""
    return ScoringService(catalog).domain_metrics(domain_id, store.snapshot())


@router.get("/subcategories/{subcat_id}", response_model=SubcategoryMetrics)
async def get_subcategory_score(
    subcat_id: str,
    catalog: Catalog = Depends(get_catalog),
    store: AnswerStore = Depends(get_answer_store),
) -> SubcategoryMetrics:
    """Get the score of one subcategory."""
    return ScoringService(catalog).subcategory_metrics(subcat_id, store.snapshot())


@router.get("/questions/{question_id}", response_model=QuestionScore)
async def get_question_score(
    question_id: str,
    catalog: Catalog = Depends(get_catalog),
    store: AnswerStore = Depends(get_answer_store),
) -> QuestionScore:
    """Get the effective score of one question."""
    catalog.get_question(question_id)
    return ScoringService(catalog).score_question(question_id, store.snapshot())
