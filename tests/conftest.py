"""
Test Configuration
==================

Pytest fixtures for Bastion tests.
"""

import os
from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"

from services.maturity_assessment.catalog import Catalog, CatalogCache  # noqa: E402
from services.maturity_assessment.models import (  # noqa: E402
    Answer,
    Criticality,
    Domain,
    GovernanceFunction,
    OwnershipRole,
    Question,
    Subcategory,
)
from services.maturity_assessment.services.answers import AnswerStore  # noqa: E402


AnswerFactory = Callable[..., dict[str, Answer]]


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


# =============================================================================
# Catalog
# =============================================================================


@pytest.fixture
def catalog() -> Catalog:
    """
    Small three-domain catalog.

    D1 (GOVERN): S1 High w=2 [Q1, Q2], S2 Medium w=1 [Q3]
    D2 (MANAGE): S3 Critical w=3 [Q4, Q5]
    D3 (MAP):    S4 Low w=1 [Q6]
    """
    return Catalog(
        domains=[
            Domain(
                domain_id="D1",
                domain_name="Governance",
                order=1,
                governance_function=GovernanceFunction.GOVERN,
            ),
            Domain(
                domain_id="D2",
                domain_name="Engineering Security",
                order=2,
                governance_function=GovernanceFunction.MANAGE,
            ),
            Domain(
                domain_id="D3",
                domain_name="Privacy",
                order=3,
                governance_function=GovernanceFunction.MAP,
            ),
        ],
        subcategories=[
            Subcategory(
                subcat_id="S1",
                domain_id="D1",
                subcat_name="AI Policy",
                criticality=Criticality.HIGH,
                weight=2.0,
                ownership_role=OwnershipRole.GRC,
                framework_refs=["NIST AI RMF GOVERN 1.1"],
            ),
            Subcategory(
                subcat_id="S2",
                domain_id="D1",
                subcat_name="Risk Register",
                criticality=Criticality.MEDIUM,
                weight=1.0,
            ),
            Subcategory(
                subcat_id="S3",
                domain_id="D2",
                subcat_name="Prompt Injection",
                criticality=Criticality.CRITICAL,
                weight=3.0,
                ownership_role=OwnershipRole.ENGINEERING,
            ),
            Subcategory(
                subcat_id="S4",
                domain_id="D3",
                subcat_name="Data Inventory",
                criticality=Criticality.LOW,
                weight=1.0,
            ),
        ],
        questions=[
            Question(
                question_id="Q1",
                subcat_id="S1",
                domain_id="D1",
                question_text="Is there an approved AI policy?",
                frameworks=["NIST AI RMF GOVERN 1.1"],
                ownership_role=OwnershipRole.GRC,
            ),
            Question(
                question_id="Q2",
                subcat_id="S1",
                domain_id="D1",
                question_text="Is the AI policy reviewed annually?",
                frameworks=["ISO 27001 A.5.1"],
                ownership_role=OwnershipRole.GRC,
            ),
            Question(
                question_id="Q3",
                subcat_id="S2",
                domain_id="D1",
                question_text="Are AI risks in the risk register?",
                frameworks=["ISO/IEC 23894"],
                ownership_role=OwnershipRole.EXECUTIVE,
            ),
            Question(
                question_id="Q4",
                subcat_id="S3",
                domain_id="D2",
                question_text="Are prompts filtered for injection payloads?",
                frameworks=["OWASP LLM01"],
                ownership_role=OwnershipRole.ENGINEERING,
            ),
            Question(
                question_id="Q5",
                subcat_id="S3",
                domain_id="D2",
                question_text="Are tool calls restricted to an allow-list?",
                frameworks=["MITRE ATLAS"],
                ownership_role=OwnershipRole.ENGINEERING,
            ),
            Question(
                question_id="Q6",
                subcat_id="S4",
                domain_id="D3",
                question_text="Is there a personal data inventory?",
                frameworks=["LGPD Art. 46"],
            ),
        ],
    )


# =============================================================================
# Answers
# =============================================================================


@pytest.fixture
def make_answers() -> AnswerFactory:
    """
    Build an answer map from (response, evidence) pairs.

    Example:
        make_answers(Q1=("Sim", "Sim"), Q2=("Parcial", None))
    """

    def factory(**pairs: tuple[str | None, str | None]) -> dict[str, Answer]:
        return {
            qid: Answer(question_id=qid, response=response, evidence_ok=evidence)
            for qid, (response, evidence) in pairs.items()
        }

    return factory


@pytest.fixture
def sample_answers(make_answers: AnswerFactory) -> dict[str, Answer]:
    """
    Mixed answer set.

    Q1 1.0, Q2 0.35, Q3 0.0, Q4 0.7 (unset evidence), Q5 NA, Q6 unanswered.
    """
    return make_answers(
        Q1=("Sim", "Sim"),
        Q2=("Parcial", "Não"),
        Q3=("Não", "Sim"),
        Q4=("Sim", None),
        Q5=("NA", None),
    )


@pytest.fixture
def answer_store() -> AnswerStore:
    return AnswerStore()


# =============================================================================
# API Client
# =============================================================================


@pytest_asyncio.fixture
async def maturity_assessment_client(
    catalog: Catalog,
    answer_store: AnswerStore,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for Maturity Assessment Service."""
    from services.maturity_assessment.dependencies import get_answer_store, get_catalog_cache
    from services.maturity_assessment.main import app

    cache = CatalogCache(lambda: catalog, ttl_seconds=0)
    app.dependency_overrides[get_catalog_cache] = lambda: cache
    app.dependency_overrides[get_answer_store] = lambda: answer_store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
