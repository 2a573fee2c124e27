"""
Critical Gap Extraction
=======================

Lists the questions that represent governance risk: questions in High or
Critical subcategories that are unanswered or score below a threshold.

Ordering: Critical before High, then lowest effective score first.
Unanswered questions sort and display as score 0.

Version: 0.1.0
"""

from collections.abc import Iterable, Mapping

from services.maturity_assessment.catalog.catalog import Catalog
from services.maturity_assessment.catalog.defaults import CRITICAL_GAP_THRESHOLD
from services.maturity_assessment.models.answer import Answer
from services.maturity_assessment.models.metrics import CriticalGap
from services.maturity_assessment.models.reference import Question
from services.maturity_assessment.services.scoring import calculate_question_score
from shared.logging import get_logger


logger = get_logger(__name__)


NOT_ANSWERED = "Não respondido"
NO_EVIDENCE = "N/A"


def gap_sort_key(gap: CriticalGap) -> tuple[int, float]:
    return (-gap.criticality.rank, gap.effective_score)


class GapService:
    """Extracts and orders critical gaps for an answer snapshot."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    def critical_gaps(
        self,
        answers: Mapping[str, Answer],
        threshold: float = CRITICAL_GAP_THRESHOLD,
        active_questions: Iterable[Question] | None = None,
    ) -> list[CriticalGap]:
        """
        Find critical gaps.

        Args:
            answers: Answer snapshot keyed by question id
            threshold: Effective score below which an answered question is a gap
            active_questions: Enabled question set; defaults to the catalog's
                questions. Questions whose subcategory or domain is not in
                the catalog are skipped.

        Returns:
            Gaps sorted by criticality (desc) then effective score (asc)
        """
        questions = self.catalog.questions if active_questions is None else active_questions
        gaps: list[CriticalGap] = []
        skipped = 0

        for question in questions:
            subcat = self.catalog.find_subcategory(question.subcat_id)
            domain = self.catalog.find_domain(question.domain_id)
            if subcat is None or domain is None:
                skipped += 1
                continue

            if not subcat.criticality.is_high_impact:
                continue

            answer = answers.get(question.question_id)
            score = calculate_question_score(answer, self.catalog, question.question_id)
            if not score.is_applicable:
                continue

            if score.effective_score is not None and score.effective_score >= threshold:
                continue

            answered = answer is not None and answer.response is not None
            gaps.append(
                CriticalGap(
                    question_id=question.question_id,
                    question_text=question.question_text,
                    subcat_id=subcat.subcat_id,
                    subcat_name=subcat.subcat_name,
                    domain_id=domain.domain_id,
                    domain_name=domain.domain_name,
                    criticality=subcat.criticality,
                    effective_score=score.effective_score or 0.0,
                    response=answer.response.value if answered else NOT_ANSWERED,
                    evidence_ok=(
                        answer.evidence_ok.value
                        if answer is not None and answer.evidence_ok is not None
                        else NO_EVIDENCE
                    ),
                    is_answered=answered,
                    ownership_role=question.ownership_role,
                    governance_function=domain.governance_function,
                )
            )

        if skipped:
            logger.debug("gap_questions_skipped", count=skipped)

        gaps.sort(key=gap_sort_key)
        return gaps
