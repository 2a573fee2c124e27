"""
Framework Coverage Service
==========================

Coverage and mean score per external framework. Free-text framework tags
are normalized to canonical names first; only names on the authoritative
allow-list are reported.

Version: 0.1.0
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from services.maturity_assessment.catalog.catalog import Catalog
from services.maturity_assessment.catalog.frameworks import (
    DEFAULT_FRAMEWORK_POLICY,
    FrameworkPolicy,
)
from services.maturity_assessment.models.answer import Answer
from services.maturity_assessment.models.metrics import FrameworkCoverage
from services.maturity_assessment.models.reference import Question
from services.maturity_assessment.services.scoring import calculate_question_score
from shared.logging import get_logger


logger = get_logger(__name__)


@dataclass
class _FrameworkTally:
    total: int = 0
    answered: int = 0
    scores: list[float] = field(default_factory=list)


class FrameworkCoverageService:
    """Computes per-framework coverage for an answer snapshot."""

    def __init__(
        self,
        catalog: Catalog,
        policy: FrameworkPolicy | None = None,
    ) -> None:
        self.catalog = catalog
        self.policy = policy or DEFAULT_FRAMEWORK_POLICY

    def coverage(
        self,
        answers: Mapping[str, Answer],
        active_questions: Iterable[Question] | None = None,
    ) -> list[FrameworkCoverage]:
        """
        Aggregate coverage per canonical framework.

        A question counts once per tag that normalizes to a framework, so a
        question tagged twice for the same framework is counted twice.

        Returns:
            Authoritative frameworks sorted by tagged question count (desc)
        """
        questions = self.catalog.questions if active_questions is None else active_questions
        tallies: dict[str, _FrameworkTally] = {}

        for question in questions:
            answer = answers.get(question.question_id)
            for tag in self.catalog.framework_tags_for(question):
                name = self.policy.normalize_name(tag)
                if name is None:
                    continue

                tally = tallies.setdefault(name, _FrameworkTally())
                tally.total += 1

                if answer is None or not answer.is_answered or answer.is_not_applicable:
                    continue
                tally.answered += 1
                score = calculate_question_score(answer, self.catalog, question.question_id)
                if score.effective_score is not None:
                    tally.scores.append(score.effective_score)

        suppressed = [name for name in tallies if not self.policy.is_authoritative(name)]
        if suppressed:
            logger.debug("framework_coverage_suppressed", frameworks=suppressed)

        results = [
            FrameworkCoverage(
                framework=name,
                total_questions=tally.total,
                answered_questions=tally.answered,
                average_score=sum(tally.scores) / len(tally.scores) if tally.scores else 0.0,
                coverage=tally.answered / tally.total if tally.total > 0 else 0.0,
            )
            for name, tally in tallies.items()
            if self.policy.is_authoritative(name)
        ]
        results.sort(key=lambda fc: fc.total_questions, reverse=True)
        return results
