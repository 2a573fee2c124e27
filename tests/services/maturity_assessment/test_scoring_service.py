"""
Scoring Service Tests
=====================

Tests for subcategory, domain and overall aggregation and the
cross-cutting views.

Version: 0.1.0
"""

import pytest

from services.maturity_assessment.catalog import Catalog, CatalogLookupError
from services.maturity_assessment.models import (
    Answer,
    Criticality,
    GovernanceFunction,
    OwnershipRole,
    Question,
    Subcategory,
)
from services.maturity_assessment.services.scoring import ScoringService


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def scoring_service(catalog: Catalog) -> ScoringService:
    return ScoringService(catalog)


# =============================================================================
# Subcategory Aggregation
# =============================================================================


class TestSubcategoryMetrics:
    """Tests for subcategory aggregation."""

    def test_mean_over_applicable(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        metrics = scoring_service.subcategory_metrics("S1", sample_answers)

        assert metrics.score == pytest.approx(0.675)
        assert metrics.maturity_level.level == 2
        assert metrics.total_questions == 2
        assert metrics.answered_questions == 2
        assert metrics.applicable_questions == 2
        assert metrics.coverage == pytest.approx(1.0)
        assert metrics.weight == 2.0
        assert metrics.ownership_role == OwnershipRole.GRC

    def test_critical_gap_count_in_high_subcategory(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        """Q2 scores 0.35 in a High subcategory."""
        metrics = scoring_service.subcategory_metrics("S1", sample_answers)

        assert metrics.critical_gaps == 1

    def test_medium_subcategory_never_counts_gaps(
        self,
        scoring_service: ScoringService,
        make_answers,
    ) -> None:
        answers = make_answers(Q3=("Parcial", "Não"))

        metrics = scoring_service.subcategory_metrics("S2", answers)

        assert metrics.score == pytest.approx(0.35)
        assert metrics.critical_gaps == 0

    def test_na_excluded_from_score_and_coverage(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        """Q5 is NA: S3 scores Q4 alone."""
        metrics = scoring_service.subcategory_metrics("S3", sample_answers)

        assert metrics.applicable_questions == 1
        assert metrics.answered_questions == 2
        assert metrics.scored_questions == 1
        assert metrics.score == pytest.approx(0.7)
        assert metrics.coverage == pytest.approx(1.0)

    def test_na_overrides_prior_answer(
        self,
        scoring_service: ScoringService,
        make_answers,
    ) -> None:
        before = scoring_service.subcategory_metrics(
            "S1", make_answers(Q1=("Sim", "Sim"), Q2=("Não", "Sim"))
        )
        after = scoring_service.subcategory_metrics(
            "S1", make_answers(Q1=("Sim", "Sim"), Q2=("NA", None))
        )

        assert before.score == pytest.approx(0.5)
        assert after.score == pytest.approx(1.0)
        assert after.applicable_questions == 1

    def test_unanswered_subcategory_scores_zero(
        self,
        scoring_service: ScoringService,
    ) -> None:
        metrics = scoring_service.subcategory_metrics("S4", {})

        assert metrics.score == 0.0
        assert metrics.coverage == 0.0
        assert metrics.answered_questions == 0
        assert metrics.applicable_questions == 1
        assert metrics.has_signal is False

    def test_unanswered_questions_dilute_score(
        self,
        scoring_service: ScoringService,
        make_answers,
    ) -> None:
        """Unanswered questions stay in the applicable denominator."""
        metrics = scoring_service.subcategory_metrics("S1", make_answers(Q1=("Sim", "Sim")))

        assert metrics.score == pytest.approx(0.5)
        assert metrics.coverage == pytest.approx(0.5)

    def test_coverage_is_monotonic(
        self,
        scoring_service: ScoringService,
        make_answers,
    ) -> None:
        one = scoring_service.subcategory_metrics("S1", make_answers(Q1=("Não", None)))
        two = scoring_service.subcategory_metrics(
            "S1", make_answers(Q1=("Não", None), Q2=("Não", None))
        )

        assert two.answered_questions > one.answered_questions
        assert two.coverage >= one.coverage

    def test_unknown_subcategory(self, scoring_service: ScoringService) -> None:
        with pytest.raises(CatalogLookupError) as exc_info:
            scoring_service.subcategory_metrics("NOPE", {})

        assert exc_info.value.kind == "Subcategory"
        assert exc_info.value.key == "NOPE"


# =============================================================================
# Domain Aggregation
# =============================================================================


class TestDomainMetrics:
    """Tests for weighted domain aggregation."""

    def test_weighted_by_subcategory_weight(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        """(0.675 x 2 + 0.0 x 1) / 3."""
        metrics = scoring_service.domain_metrics("D1", sample_answers)

        assert metrics.score == pytest.approx(0.45)
        assert metrics.maturity_level.level == 1
        assert metrics.total_questions == 3
        assert metrics.answered_questions == 3
        assert metrics.applicable_questions == 3
        assert metrics.coverage == pytest.approx(1.0)
        assert metrics.critical_gaps == 1
        assert metrics.governance_function == GovernanceFunction.GOVERN
        assert [sm.subcat_id for sm in metrics.subcategory_metrics] == ["S1", "S2"]

    def test_zero_signal_subcategory_excluded(
        self,
        scoring_service: ScoringService,
        make_answers,
    ) -> None:
        """An unanswered subcategory does not pull the domain toward zero."""
        metrics = scoring_service.domain_metrics("D1", make_answers(Q1=("Sim", "Sim")))

        # S1 = 0.5 (Q2 unanswered); S2 has no signal
        assert metrics.score == pytest.approx(0.5)

    def test_heavy_unanswered_subcategory_does_not_change_score(
        self,
        catalog: Catalog,
        make_answers,
    ) -> None:
        answers = make_answers(Q1=("Sim", "Sim"), Q2=("Sim", "Sim"))
        baseline = ScoringService(catalog).domain_metrics("D1", answers)

        extended = Catalog(
            domains=catalog.domains,
            subcategories=[
                *catalog.subcategories,
                Subcategory(
                    subcat_id="S9",
                    domain_id="D1",
                    subcat_name="Heavy",
                    criticality=Criticality.CRITICAL,
                    weight=100.0,
                ),
            ],
            questions=[
                *catalog.questions,
                Question(question_id="Q9", subcat_id="S9", domain_id="D1", question_text="?"),
            ],
        )
        result = ScoringService(extended).domain_metrics("D1", answers)

        assert result.score == pytest.approx(baseline.score)
        assert result.coverage < baseline.coverage

    def test_domain_without_signal(self, scoring_service: ScoringService) -> None:
        metrics = scoring_service.domain_metrics("D3", {})

        assert metrics.score == 0.0
        assert metrics.has_signal is False

    def test_unknown_domain(self, scoring_service: ScoringService) -> None:
        with pytest.raises(CatalogLookupError):
            scoring_service.domain_metrics("NOPE", {})


# =============================================================================
# Overall Aggregation
# =============================================================================


class TestOverallMetrics:
    """Tests for the platform-wide aggregate."""

    def test_domains_weighted_by_average_subcategory_weight(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        """D1 0.45 (weight 1.5), D2 0.7 (weight 3), D3 no signal."""
        metrics = scoring_service.overall_metrics(sample_answers)

        assert metrics.overall_score == pytest.approx(2.775 / 4.5)
        assert metrics.maturity_level.level == 2
        assert [dm.domain_id for dm in metrics.domain_metrics] == ["D1", "D2", "D3"]

    def test_counts_and_coverage(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        metrics = scoring_service.overall_metrics(sample_answers)

        assert metrics.total_questions == 6
        assert metrics.answered_questions == 5
        assert metrics.applicable_questions == 5
        assert metrics.scored_questions == 4
        assert metrics.coverage == pytest.approx(0.8)
        assert metrics.critical_gaps == 1

    def test_evidence_readiness(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        """Mean of 1.0, 0.7, 1.0, 0.7; the NA answer is left out."""
        metrics = scoring_service.overall_metrics(sample_answers)

        assert metrics.evidence_readiness == pytest.approx(0.85)

    def test_evidence_readiness_skips_na_evidence(
        self,
        scoring_service: ScoringService,
        make_answers,
    ) -> None:
        answers = make_answers(Q1=("Sim", "Sim"), Q2=("Sim", "NA"))

        assert scoring_service.evidence_readiness(answers) == pytest.approx(1.0)

    def test_active_question_count_override(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        metrics = scoring_service.overall_metrics(sample_answers, active_question_count=8)

        assert metrics.total_questions == 8
        assert metrics.coverage == pytest.approx(0.5)

    def test_override_coverage_capped(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        metrics = scoring_service.overall_metrics(sample_answers, active_question_count=2)

        assert metrics.coverage == 1.0

    def test_empty_answers(self, scoring_service: ScoringService) -> None:
        metrics = scoring_service.overall_metrics({})

        assert metrics.overall_score == 0.0
        assert metrics.coverage == 0.0
        assert metrics.evidence_readiness == 0.0
        assert metrics.maturity_level.level == 0

    def test_empty_catalog(self) -> None:
        metrics = ScoringService(Catalog()).overall_metrics({})

        assert metrics.overall_score == 0.0
        assert metrics.total_questions == 0
        assert metrics.domain_metrics == []

    def test_answers_for_unknown_questions_ignored(
        self,
        scoring_service: ScoringService,
        make_answers,
    ) -> None:
        metrics = scoring_service.overall_metrics(make_answers(GHOST=("Não", None)))

        assert metrics.answered_questions == 0
        assert metrics.overall_score == 0.0

    def test_idempotent(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        first = scoring_service.overall_metrics(sample_answers)
        second = scoring_service.overall_metrics(sample_answers)

        assert first == second

    def test_all_scores_bounded(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        metrics = scoring_service.overall_metrics(sample_answers)

        values = [metrics.overall_score, metrics.coverage, metrics.evidence_readiness]
        for dm in metrics.domain_metrics:
            values += [dm.score, dm.coverage]
            for sm in dm.subcategory_metrics:
                values += [sm.score, sm.coverage]
        assert all(0.0 <= v <= 1.0 for v in values)


# =============================================================================
# Cross-cutting Views
# =============================================================================


class TestGovernanceFunctionMetrics:
    """Tests for the governance function view."""

    def test_groups_domains_by_function(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        metrics = scoring_service.overall_metrics(sample_answers)
        by_function = {m.function: m for m in metrics.governance_function_metrics}

        assert list(by_function) == list(GovernanceFunction)
        assert by_function[GovernanceFunction.GOVERN].score == pytest.approx(0.45)
        assert by_function[GovernanceFunction.MANAGE].score == pytest.approx(0.7)
        assert by_function[GovernanceFunction.MANAGE].coverage == pytest.approx(1.0)

    def test_unanswered_domain_has_zero_coverage(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        metrics = scoring_service.overall_metrics(sample_answers)
        mapped = next(
            m for m in metrics.governance_function_metrics if m.function == GovernanceFunction.MAP
        )

        assert mapped.score == 0.0
        assert mapped.total_questions == 1
        assert mapped.coverage == 0.0
        assert mapped.domain_count == 1

    def test_function_without_domains(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        metrics = scoring_service.overall_metrics(sample_answers)
        measure = next(
            m
            for m in metrics.governance_function_metrics
            if m.function == GovernanceFunction.MEASURE
        )

        assert measure.domain_count == 0
        assert measure.score == 0.0


class TestOwnershipMetrics:
    """Tests for the ownership role view."""

    def test_scores_per_role(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        by_role = {m.ownership_role: m for m in scoring_service.ownership_metrics(sample_answers)}

        assert by_role[OwnershipRole.GRC].score == pytest.approx(0.675)
        assert by_role[OwnershipRole.GRC].total_questions == 2
        assert by_role[OwnershipRole.EXECUTIVE].score == 0.0
        assert by_role[OwnershipRole.EXECUTIVE].answered_questions == 1

    def test_na_excluded_from_role_coverage(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        by_role = {m.ownership_role: m for m in scoring_service.ownership_metrics(sample_answers)}
        engineering = by_role[OwnershipRole.ENGINEERING]

        assert engineering.total_questions == 2
        assert engineering.score == pytest.approx(0.7)
        assert engineering.coverage == pytest.approx(1.0)


class TestFrameworkCategoryMetrics:
    """Tests for the framework category view."""

    def test_inherited_tags_count(self, scoring_service: ScoringService) -> None:
        """Q2 joins NIST AI RMF through its subcategory's framework refs."""
        questions = scoring_service.questions_for_framework_category("NIST_AI_RMF")

        assert [q.question_id for q in questions] == ["Q1", "Q2"]

    def test_question_in_several_categories(self, scoring_service: ScoringService) -> None:
        counts = scoring_service.question_count_by_framework_category()

        assert counts["NIST_AI_RMF"] == 2
        assert counts["SECURITY_BASELINE"] == 1
        assert counts["AI_RISK_MGMT"] == 1
        assert counts["THREAT_EXPOSURE"] == 1
        assert counts["PRIVACY_LGPD"] == 1
        assert counts["SECURE_DEVELOPMENT"] == 0

    def test_scores_per_category(
        self,
        scoring_service: ScoringService,
        sample_answers: dict[str, Answer],
    ) -> None:
        by_category = {
            m.category_id: m for m in scoring_service.framework_category_metrics(sample_answers)
        }

        assert by_category["NIST_AI_RMF"].score == pytest.approx(0.675)
        assert by_category["SECURITY_BASELINE"].score == pytest.approx(0.35)
        assert by_category["THREAT_EXPOSURE"].score == pytest.approx(0.7)
        assert by_category["PRIVACY_LGPD"].coverage == 0.0
        assert by_category["SECURE_DEVELOPMENT"].total_questions == 0
        assert by_category["SECURE_DEVELOPMENT"].score == 0.0
