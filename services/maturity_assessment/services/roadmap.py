"""
Remediation Roadmap Service
===========================

Turns critical gaps into a time-boxed remediation plan.

Priority Rules:
- immediate: Critical subcategory and effective score < 0.25
- short: Critical subcategory or effective score < 0.25
- medium: everything else

Each domain contributes at most `per_domain` items (its worst gaps), so a
single domain cannot monopolize the plan.

Version: 0.1.0
"""

from collections.abc import Iterable, Mapping

from services.maturity_assessment.catalog.catalog import Catalog
from services.maturity_assessment.catalog.defaults import CRITICAL_GAP_THRESHOLD
from services.maturity_assessment.models.answer import Answer
from services.maturity_assessment.models.metrics import (
    CriticalGap,
    EffortLevel,
    RoadmapItem,
    RoadmapPriority,
)
from services.maturity_assessment.models.reference import Criticality, OwnershipRole, Question
from services.maturity_assessment.services.gaps import GapService
from shared.logging import get_logger


logger = get_logger(__name__)


SEVERE_SCORE_THRESHOLD = 0.25

TIMEFRAMES: dict[RoadmapPriority, str] = {
    RoadmapPriority.IMMEDIATE: "0-30 days",
    RoadmapPriority.SHORT: "30-60 days",
    RoadmapPriority.MEDIUM: "60-90 days",
}


def assign_priority(gap: CriticalGap) -> RoadmapPriority:
    is_critical = gap.criticality == Criticality.CRITICAL
    is_severe = gap.effective_score < SEVERE_SCORE_THRESHOLD

    if is_critical and is_severe:
        return RoadmapPriority.IMMEDIATE
    if is_critical or is_severe:
        return RoadmapPriority.SHORT
    return RoadmapPriority.MEDIUM


def estimate_effort(gap: CriticalGap) -> EffortLevel:
    """Heuristic: unanswered controls need discovery, very low scores need build-out."""
    if not gap.is_answered:
        return EffortLevel.MEDIUM
    if gap.effective_score < SEVERE_SCORE_THRESHOLD:
        return EffortLevel.HIGH
    return EffortLevel.LOW


class RoadmapService:
    """Builds remediation roadmaps from critical gaps."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    def generate(
        self,
        gaps: list[CriticalGap],
        max_items: int = 10,
        per_domain: int = 3,
    ) -> list[RoadmapItem]:
        """
        Build the roadmap.

        Args:
            gaps: Critical gaps, already in gap order
            max_items: Maximum number of roadmap items
            per_domain: Maximum items taken from one domain

        Returns:
            Items ordered immediate, short, medium; domain-grouped insertion
            order is kept within a bucket
        """
        by_domain: dict[str, list[CriticalGap]] = {}
        for gap in gaps:
            by_domain.setdefault(gap.domain_id, []).append(gap)

        items: list[RoadmapItem] = []
        for domain_id, domain_gaps in by_domain.items():
            if len(items) >= max_items:
                break

            domain = self.catalog.find_domain(domain_id)
            if domain is None:
                continue

            for gap in domain_gaps[:per_domain]:
                if len(items) >= max_items:
                    break

                priority = assign_priority(gap)
                items.append(
                    RoadmapItem(
                        priority=priority,
                        timeframe=TIMEFRAMES[priority],
                        domain_id=domain.domain_id,
                        domain=domain.domain_name,
                        action=f"Implement control: {gap.subcat_name}",
                        impact=(
                            "High risk impact"
                            if gap.criticality == Criticality.CRITICAL
                            else "Medium risk impact"
                        ),
                        effort=estimate_effort(gap),
                        ownership_role=gap.ownership_role or OwnershipRole.GRC,
                        question_id=gap.question_id,
                    )
                )

        items.sort(key=lambda item: item.priority.rank)

        logger.debug(
            "roadmap_generated",
            items=len(items),
            gaps=len(gaps),
            domains=len(by_domain),
        )

        return items

    def roadmap_for_answers(
        self,
        answers: Mapping[str, Answer],
        max_items: int = 10,
        per_domain: int = 3,
        active_questions: Iterable[Question] | None = None,
    ) -> list[RoadmapItem]:
        """Extract gaps at the standard threshold, then build the roadmap."""
        gaps = GapService(self.catalog).critical_gaps(
            answers,
            threshold=CRITICAL_GAP_THRESHOLD,
            active_questions=active_questions,
        )
        return self.generate(gaps, max_items=max_items, per_domain=per_domain)
