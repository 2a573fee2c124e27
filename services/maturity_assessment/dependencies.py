"""
Route Dependencies
==================

FastAPI dependencies shared by the maturity assessment routes: the catalog
snapshot, the answer store and the active question selection.

Version: 0.1.0
"""

from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Query

from services.maturity_assessment.catalog import (
    Catalog,
    CatalogCache,
    load_catalog,
    select_active_questions,
)
from services.maturity_assessment.models.reference import Question
from services.maturity_assessment.services.answers import AnswerStore
from shared.config import ScoringSettings, settings
from shared.logging import get_logger


logger = get_logger(__name__)

BUNDLED_CATALOG_PATH = Path(__file__).parent / "data" / "catalog.json"


def catalog_path() -> Path:
    """Configured catalog file, falling back to the bundled sample catalog."""
    return settings.catalog.path or BUNDLED_CATALOG_PATH


@lru_cache
def get_catalog_cache() -> CatalogCache:
    path = catalog_path()
    logger.debug("catalog_cache_created", path=str(path))
    return CatalogCache(
        lambda: load_catalog(path),
        ttl_seconds=settings.catalog.cache_ttl_seconds,
    )


@lru_cache
def get_answer_store() -> AnswerStore:
    return AnswerStore()


def get_catalog(cache: CatalogCache = Depends(get_catalog_cache)) -> Catalog:
    """Resolve the current catalog snapshot for one request."""
    return cache.get()


def get_scoring_settings() -> ScoringSettings:
    return settings.scoring


def get_active_questions(
    frameworks: list[str] | None = Query(
        default=None,
        description="Restrict scoring to questions mapped to these framework ids",
    ),
    disabled: list[str] = Query(
        default=[],
        description="Question ids excluded from scoring",
    ),
    catalog: Catalog = Depends(get_catalog),
) -> list[Question] | None:
    """
    Active question set for the request.

    Returns None when no filter is given, meaning the whole catalog.
    """
    if frameworks is None and not disabled:
        return None
    return select_active_questions(
        catalog,
        framework_ids=frameworks,
        disabled_question_ids=disabled,
    )
