"""
Maturity Scoring Service
========================

Deterministic pipeline turning answers into scores, maturity levels,
coverage and critical-gap counts.

Aggregation Levels:
- Question: response score x evidence multiplier
- Subcategory: mean effective score over applicable questions
- Domain: subcategory scores weighted by subcategory weight
- Overall: domain scores weighted by average subcategory weight

Cross-cutting views:
- Governance function (domain tag)
- Ownership role (question tag)
- Framework category (question + inherited subcategory framework tags)

Every function is pure over the catalog snapshot and the answer mapping
it receives.

Version: 0.1.0
"""

from collections.abc import Mapping

from services.maturity_assessment.catalog.catalog import Catalog
from services.maturity_assessment.catalog.defaults import (
    CRITICAL_GAP_THRESHOLD,
    FALLBACK_EVIDENCE_VALUE,
)
from services.maturity_assessment.catalog.frameworks import (
    DEFAULT_FRAMEWORK_POLICY,
    FrameworkPolicy,
)
from services.maturity_assessment.models.answer import Answer, ResponseValue
from services.maturity_assessment.models.metrics import (
    DomainMetrics,
    FrameworkCategoryMetrics,
    GovernanceFunctionMetrics,
    OverallMetrics,
    OwnershipMetrics,
    QuestionScore,
    SubcategoryMetrics,
)
from services.maturity_assessment.models.reference import (
    GovernanceFunction,
    OwnershipRole,
    Question,
)
from shared.logging import get_logger


logger = get_logger(__name__)


AnswerMap = Mapping[str, Answer]


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


# =============================================================================
# Question Scorer
# =============================================================================


def calculate_question_score(
    answer: Answer | None,
    catalog: Catalog,
    question_id: str | None = None,
) -> QuestionScore:
    """
    Compute the effective score of one answer.

    - No answer, or no response: applicable, every score None
    - NA response: not applicable, every score None
    - Otherwise: response score x evidence multiplier, where unset or NA
      evidence falls back to the "no evidence" multiplier
    """
    qid = question_id or (answer.question_id if answer else "")

    if answer is None or answer.response is None:
        return QuestionScore(
            question_id=qid,
            response_score=None,
            evidence_multiplier=None,
            effective_score=None,
            is_applicable=True,
        )

    if answer.response == ResponseValue.NOT_APPLICABLE:
        return QuestionScore(
            question_id=qid,
            response_score=None,
            evidence_multiplier=None,
            effective_score=None,
            is_applicable=False,
        )

    response_score = catalog.response_score(answer.response)

    multiplier = None
    if answer.evidence_ok is not None:
        multiplier = catalog.evidence_multiplier(answer.evidence_ok)
    if multiplier is None:
        multiplier = catalog.evidence_multiplier(FALLBACK_EVIDENCE_VALUE)
    if multiplier is None:
        multiplier = 0.7

    effective = response_score * multiplier if response_score is not None else None

    return QuestionScore(
        question_id=qid,
        response_score=response_score,
        evidence_multiplier=multiplier,
        effective_score=effective,
        is_applicable=True,
    )


# =============================================================================
# Scoring Service
# =============================================================================


class ScoringService:
    """
    Aggregates question scores up the taxonomy.

    The service holds only the catalog snapshot and the framework policy;
    answers are passed to every call.
    """

    def __init__(
        self,
        catalog: Catalog,
        framework_policy: FrameworkPolicy | None = None,
    ) -> None:
        """
        Initialize the scoring service.

        Args:
            catalog: Resolved reference catalog
            framework_policy: Framework classification rules
        """
        self.catalog = catalog
        self.framework_policy = framework_policy or DEFAULT_FRAMEWORK_POLICY

    def score_question(self, question_id: str, answers: AnswerMap) -> QuestionScore:
        return calculate_question_score(answers.get(question_id), self.catalog, question_id)

    def subcategory_metrics(self, subcat_id: str, answers: AnswerMap) -> SubcategoryMetrics:
        """
        Aggregate the questions of one subcategory.

        Raises:
            CatalogLookupError: Unknown subcategory id
        """
        subcat = self.catalog.get_subcategory(subcat_id)
        questions = self.catalog.questions_for_subcategory(subcat_id)

        total_effective = 0.0
        applicable = 0
        answered = 0
        scored = 0
        critical_gaps = 0

        for question in questions:
            answer = answers.get(question.question_id)
            score = calculate_question_score(answer, self.catalog, question.question_id)

            if answer is not None and answer.is_answered:
                answered += 1

            if not score.is_applicable:
                continue
            applicable += 1

            if score.effective_score is not None:
                scored += 1
                total_effective += score.effective_score
                if score.effective_score < CRITICAL_GAP_THRESHOLD and subcat.criticality.is_high_impact:
                    critical_gaps += 1

        # All-unanswered subcategories score 0; coverage tells them apart
        score_value = total_effective / applicable if applicable > 0 and answered > 0 else 0.0

        return SubcategoryMetrics(
            subcat_id=subcat.subcat_id,
            subcat_name=subcat.subcat_name,
            domain_id=subcat.domain_id,
            score=score_value,
            maturity_level=self.catalog.maturity_level_for(score_value),
            total_questions=len(questions),
            answered_questions=answered,
            applicable_questions=applicable,
            scored_questions=scored,
            coverage=_ratio(scored, applicable),
            criticality=subcat.criticality,
            weight=subcat.weight,
            critical_gaps=critical_gaps,
            ownership_role=subcat.ownership_role,
        )

    def domain_metrics(self, domain_id: str, answers: AnswerMap) -> DomainMetrics:
        """
        Weighted aggregate of the subcategories of one domain.

        Subcategories without any applicable and answered question carry
        no weight.

        Raises:
            CatalogLookupError: Unknown domain id
        """
        domain = self.catalog.get_domain(domain_id)
        subcategory_metrics = [
            self.subcategory_metrics(s.subcat_id, answers)
            for s in self.catalog.subcategories_for_domain(domain_id)
        ]

        weighted_sum = 0.0
        total_weight = 0.0
        answered = 0
        applicable = 0
        scored = 0
        critical_gaps = 0

        for sm in subcategory_metrics:
            if sm.has_signal:
                weighted_sum += sm.score * sm.weight
                total_weight += sm.weight
            answered += sm.answered_questions
            applicable += sm.applicable_questions
            scored += sm.scored_questions
            critical_gaps += sm.critical_gaps

        score_value = _ratio(weighted_sum, total_weight)

        return DomainMetrics(
            domain_id=domain.domain_id,
            domain_name=domain.domain_name,
            governance_function=domain.governance_function,
            score=score_value,
            maturity_level=self.catalog.maturity_level_for(score_value),
            total_questions=len(self.catalog.questions_for_domain(domain_id)),
            answered_questions=answered,
            applicable_questions=applicable,
            scored_questions=scored,
            coverage=_ratio(scored, applicable),
            critical_gaps=critical_gaps,
            subcategory_metrics=subcategory_metrics,
        )

    def overall_metrics(
        self,
        answers: AnswerMap,
        active_question_count: int | None = None,
    ) -> OverallMetrics:
        """
        Platform-wide metrics and cross-cutting views.

        Args:
            answers: Answer snapshot keyed by question id
            active_question_count: Size of the enabled question set; when
                given, coverage is scored / this count, capped at 1.0

        Returns:
            OverallMetrics with domain, governance-function, ownership and
            framework-category breakdowns
        """
        domain_metrics = [
            self.domain_metrics(d.domain_id, answers) for d in self.catalog.ordered_domains()
        ]

        weighted_sum = 0.0
        total_weight = 0.0
        answered = 0
        applicable = 0
        scored = 0
        critical_gaps = 0

        for dm in domain_metrics:
            if dm.has_signal:
                domain_weight = dm.average_subcategory_weight
                weighted_sum += dm.score * domain_weight
                total_weight += domain_weight
            answered += dm.answered_questions
            applicable += dm.applicable_questions
            scored += dm.scored_questions
            critical_gaps += dm.critical_gaps

        overall_score = _ratio(weighted_sum, total_weight)
        coverage_base = active_question_count if active_question_count is not None else applicable
        coverage = min(_ratio(scored, coverage_base), 1.0)

        result = OverallMetrics(
            overall_score=overall_score,
            maturity_level=self.catalog.maturity_level_for(overall_score),
            total_questions=(
                active_question_count
                if active_question_count is not None
                else len(self.catalog.questions)
            ),
            answered_questions=answered,
            applicable_questions=applicable,
            scored_questions=scored,
            coverage=coverage,
            evidence_readiness=self.evidence_readiness(answers),
            critical_gaps=critical_gaps,
            domain_metrics=domain_metrics,
            governance_function_metrics=self.governance_function_metrics(domain_metrics),
            ownership_metrics=self.ownership_metrics(answers),
            framework_category_metrics=self.framework_category_metrics(answers),
        )

        logger.debug(
            "overall_metrics_calculated",
            overall_score=round(overall_score, 4),
            coverage=round(coverage, 4),
            answered=answered,
            critical_gaps=critical_gaps,
        )

        return result

    def evidence_readiness(self, answers: AnswerMap) -> float:
        """
        Mean evidence multiplier over answers with a non-NA response.

        Unset evidence counts as "no evidence"; evidence explicitly marked
        NA has no multiplier and is left out.
        """
        total = 0.0
        count = 0

        for answer in answers.values():
            if not answer.is_answered or answer.is_not_applicable:
                continue
            multiplier = self.catalog.evidence_multiplier(answer.evidence_ok or FALLBACK_EVIDENCE_VALUE)
            if multiplier is not None:
                total += multiplier
                count += 1

        return _ratio(total, count)

    # -------------------------------------------------------------------------
    # Cross-cutting views
    # -------------------------------------------------------------------------

    def governance_function_metrics(
        self,
        domain_metrics: list[DomainMetrics],
    ) -> list[GovernanceFunctionMetrics]:
        """Average domain scores per governance function."""
        results = []

        for function in GovernanceFunction:
            members = [dm for dm in domain_metrics if dm.governance_function == function]

            score_sum = 0.0
            scored = 0
            answered = 0
            total = 0
            for dm in members:
                if dm.answered_questions > 0:
                    score_sum += dm.score
                    scored += 1
                answered += dm.answered_questions
                total += dm.total_questions

            score_value = _ratio(score_sum, scored)
            results.append(
                GovernanceFunctionMetrics(
                    function=function,
                    score=score_value,
                    maturity_level=self.catalog.maturity_level_for(score_value),
                    total_questions=total,
                    answered_questions=answered,
                    coverage=_ratio(answered, total),
                    domain_count=len(members),
                )
            )

        return results

    def ownership_metrics(self, answers: AnswerMap) -> list[OwnershipMetrics]:
        """Metrics over the questions tagged with each ownership role."""
        results = []

        for role in OwnershipRole:
            questions = self.catalog.questions_for_ownership(role)
            score_value, answered, applicable = self._mean_effective_score(questions, answers)
            results.append(
                OwnershipMetrics(
                    ownership_role=role,
                    score=score_value,
                    maturity_level=self.catalog.maturity_level_for(score_value),
                    total_questions=len(questions),
                    answered_questions=answered,
                    coverage=_ratio(answered, applicable),
                )
            )

        return results

    def framework_category_metrics(self, answers: AnswerMap) -> list[FrameworkCategoryMetrics]:
        """
        Metrics per framework category.

        A question belongs to every category any of its framework tags
        (own or inherited) classifies into.
        """
        results = []

        for category in self.catalog.framework_categories:
            questions = self.questions_for_framework_category(category.category_id)
            score_value, answered, applicable = self._mean_effective_score(questions, answers)
            results.append(
                FrameworkCategoryMetrics(
                    category_id=category.category_id,
                    category_name=category.name,
                    score=score_value,
                    maturity_level=self.catalog.maturity_level_for(score_value),
                    total_questions=len(questions),
                    answered_questions=answered,
                    coverage=_ratio(answered, applicable),
                )
            )

        return results

    def questions_for_framework_category(self, category_id: str) -> list[Question]:
        return [
            q
            for q in self.catalog.questions
            if any(
                self.framework_policy.category_of(tag) == category_id
                for tag in self.catalog.framework_tags_for(q)
            )
        ]

    def question_count_by_framework_category(self) -> dict[str, int]:
        return {
            c.category_id: len(self.questions_for_framework_category(c.category_id))
            for c in self.catalog.framework_categories
        }

    def _mean_effective_score(
        self,
        questions: list[Question],
        answers: AnswerMap,
    ) -> tuple[float, int, int]:
        """Return (mean effective score, scored count, applicable count)."""
        total = 0.0
        scored = 0
        applicable = 0

        for question in questions:
            score = calculate_question_score(
                answers.get(question.question_id), self.catalog, question.question_id
            )
            if not score.is_applicable:
                continue
            applicable += 1
            if score.effective_score is not None:
                total += score.effective_score
                scored += 1

        return _ratio(total, scored), scored, applicable
