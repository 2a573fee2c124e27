"""
Reference Catalog
=================

Taxonomy lookup tables, scoring policy defaults, framework classification
rules and catalog loading.

Version: 0.1.0
"""

from services.maturity_assessment.catalog.catalog import Catalog, CatalogLookupError
from services.maturity_assessment.catalog.defaults import (
    CRITICAL_GAP_THRESHOLD,
    FALLBACK_EVIDENCE_VALUE,
)
from services.maturity_assessment.catalog.frameworks import (
    AUTHORITATIVE_FRAMEWORKS,
    DEFAULT_FRAMEWORK_POLICY,
    FrameworkPolicy,
    FrameworkRule,
    framework_category,
    normalize_framework_name,
    question_belongs_to_frameworks,
    select_active_questions,
)
from services.maturity_assessment.catalog.loader import (
    CatalogCache,
    catalog_from_dict,
    load_catalog,
)

__all__ = [
    "Catalog",
    "CatalogLookupError",
    "CatalogCache",
    "catalog_from_dict",
    "load_catalog",
    "CRITICAL_GAP_THRESHOLD",
    "FALLBACK_EVIDENCE_VALUE",
    "AUTHORITATIVE_FRAMEWORKS",
    "DEFAULT_FRAMEWORK_POLICY",
    "FrameworkPolicy",
    "FrameworkRule",
    "framework_category",
    "normalize_framework_name",
    "question_belongs_to_frameworks",
    "select_active_questions",
]
