"""
Reference Catalog
=================

Immutable snapshot of the assessment taxonomy and scoring policy tables.

The catalog is validated once when it is built (reference integrity,
unique ids) and indexed once. Lookups by id after construction
always resolve or raise CatalogLookupError.

Version: 0.1.0
"""

from collections import Counter
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from services.maturity_assessment.catalog.defaults import (
    DEFAULT_CRITICALITY_LEVELS,
    DEFAULT_EVIDENCE_OPTIONS,
    DEFAULT_FRAMEWORK_CATEGORIES,
    DEFAULT_MATURITY_LEVELS,
    DEFAULT_RESPONSE_OPTIONS,
)
from services.maturity_assessment.models.answer import ResponseValue
from services.maturity_assessment.models.reference import (
    Criticality,
    CriticalityLevel,
    Domain,
    EvidenceOption,
    FrameworkCategory,
    GovernanceFunction,
    MaturityLevel,
    OwnershipRole,
    Question,
    ResponseOption,
    Subcategory,
)


class CatalogLookupError(LookupError):
    """A domain, subcategory or question id has no catalog entry."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")


def _ensure_unique(kind: str, ids: Iterable[str]) -> None:
    duplicates = sorted(key for key, count in Counter(ids).items() if count > 1)
    if duplicates:
        raise ValueError(f"Duplicate {kind} ids: {', '.join(duplicates)}")


class Catalog(BaseModel):
    """
    Static reference data supplied to the scoring engine.

    Policy tables default to the platform's standard scoring policy and can
    be overridden per catalog.
    """

    model_config = ConfigDict(frozen=True)

    domains: list[Domain] = Field(default_factory=list)
    subcategories: list[Subcategory] = Field(default_factory=list)
    questions: list[Question] = Field(default_factory=list)

    maturity_levels: list[MaturityLevel] = Field(
        default_factory=lambda: list(DEFAULT_MATURITY_LEVELS),
        min_length=1,
    )
    response_options: list[ResponseOption] = Field(
        default_factory=lambda: list(DEFAULT_RESPONSE_OPTIONS),
    )
    evidence_options: list[EvidenceOption] = Field(
        default_factory=lambda: list(DEFAULT_EVIDENCE_OPTIONS),
    )
    criticality_levels: list[CriticalityLevel] = Field(
        default_factory=lambda: list(DEFAULT_CRITICALITY_LEVELS),
    )
    framework_categories: list[FrameworkCategory] = Field(
        default_factory=lambda: list(DEFAULT_FRAMEWORK_CATEGORIES),
    )

    _domains_by_id: dict[str, Domain] = PrivateAttr(default_factory=dict)
    _subcategories_by_id: dict[str, Subcategory] = PrivateAttr(default_factory=dict)
    _questions_by_id: dict[str, Question] = PrivateAttr(default_factory=dict)
    _subcategories_by_domain: dict[str, list[Subcategory]] = PrivateAttr(default_factory=dict)
    _questions_by_subcategory: dict[str, list[Question]] = PrivateAttr(default_factory=dict)
    _questions_by_domain: dict[str, list[Question]] = PrivateAttr(default_factory=dict)
    _response_scores: dict[ResponseValue, float | None] = PrivateAttr(default_factory=dict)
    _evidence_multipliers: dict[ResponseValue, float | None] = PrivateAttr(default_factory=dict)
    _sorted_levels: list[MaturityLevel] = PrivateAttr(default_factory=list)

    @model_validator(mode="after")
    def _validate_and_index(self) -> "Catalog":
        _ensure_unique("domain", (d.domain_id for d in self.domains))
        _ensure_unique("subcategory", (s.subcat_id for s in self.subcategories))
        _ensure_unique("question", (q.question_id for q in self.questions))

        domains_by_id = {d.domain_id: d for d in self.domains}
        subcategories_by_id = {s.subcat_id: s for s in self.subcategories}

        for subcat in self.subcategories:
            if subcat.domain_id not in domains_by_id:
                raise ValueError(
                    f"Subcategory {subcat.subcat_id} references unknown domain {subcat.domain_id}"
                )

        for question in self.questions:
            subcat = subcategories_by_id.get(question.subcat_id)
            if subcat is None:
                raise ValueError(
                    f"Question {question.question_id} references unknown "
                    f"subcategory {question.subcat_id}"
                )
            if question.domain_id != subcat.domain_id:
                raise ValueError(
                    f"Question {question.question_id} is in domain {question.domain_id} "
                    f"but its subcategory belongs to {subcat.domain_id}"
                )

        for level in self.maturity_levels:
            if level.min_score > level.max_score:
                raise ValueError(f"Maturity level {level.level} has min_score > max_score")

        self._domains_by_id = domains_by_id
        self._subcategories_by_id = subcategories_by_id
        self._questions_by_id = {q.question_id: q for q in self.questions}

        by_domain: dict[str, list[Subcategory]] = {d.domain_id: [] for d in self.domains}
        for subcat in self.subcategories:
            by_domain[subcat.domain_id].append(subcat)
        self._subcategories_by_domain = by_domain

        by_subcat: dict[str, list[Question]] = {s.subcat_id: [] for s in self.subcategories}
        questions_by_domain: dict[str, list[Question]] = {d.domain_id: [] for d in self.domains}
        for question in self.questions:
            by_subcat[question.subcat_id].append(question)
            questions_by_domain[question.domain_id].append(question)
        self._questions_by_subcategory = by_subcat
        self._questions_by_domain = questions_by_domain

        self._response_scores = {o.value: o.score for o in self.response_options}
        self._evidence_multipliers = {o.value: o.multiplier for o in self.evidence_options}
        self._sorted_levels = sorted(self.maturity_levels, key=lambda lvl: lvl.min_score)
        return self

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_domain(self, domain_id: str) -> Domain | None:
        return self._domains_by_id.get(domain_id)

    def find_subcategory(self, subcat_id: str) -> Subcategory | None:
        return self._subcategories_by_id.get(subcat_id)

    def find_question(self, question_id: str) -> Question | None:
        return self._questions_by_id.get(question_id)

    def get_domain(self, domain_id: str) -> Domain:
        """Return the domain or raise CatalogLookupError."""
        domain = self.find_domain(domain_id)
        if domain is None:
            raise CatalogLookupError("Domain", domain_id)
        return domain

    def get_subcategory(self, subcat_id: str) -> Subcategory:
        """Return the subcategory or raise CatalogLookupError."""
        subcat = self.find_subcategory(subcat_id)
        if subcat is None:
            raise CatalogLookupError("Subcategory", subcat_id)
        return subcat

    def get_question(self, question_id: str) -> Question:
        """Return the question or raise CatalogLookupError."""
        question = self.find_question(question_id)
        if question is None:
            raise CatalogLookupError("Question", question_id)
        return question

    def subcategories_for_domain(self, domain_id: str) -> list[Subcategory]:
        return list(self._subcategories_by_domain.get(domain_id, ()))

    def questions_for_subcategory(self, subcat_id: str) -> list[Question]:
        return list(self._questions_by_subcategory.get(subcat_id, ()))

    def questions_for_domain(self, domain_id: str) -> list[Question]:
        return list(self._questions_by_domain.get(domain_id, ()))

    def questions_for_ownership(self, role: OwnershipRole) -> list[Question]:
        return [q for q in self.questions if q.ownership_role == role]

    def domains_for_function(self, function: GovernanceFunction) -> list[Domain]:
        return [d for d in self.domains if d.governance_function == function]

    def ordered_domains(self) -> list[Domain]:
        """Domains in display order (stable for equal order values)."""
        return sorted(self.domains, key=lambda d: d.order)

    def framework_tags_for(self, question: Question) -> list[str]:
        """
        Framework tags of a question, including those inherited from its
        subcategory. Duplicates and blanks are dropped; order is preserved.
        """
        subcat = self.find_subcategory(question.subcat_id)
        inherited = subcat.framework_refs if subcat else []

        tags: dict[str, None] = {}
        for tag in [*question.frameworks, *inherited]:
            if tag:
                tags.setdefault(tag, None)
        return list(tags)

    # -------------------------------------------------------------------------
    # Policy tables
    # -------------------------------------------------------------------------

    def maturity_level_for(self, score: float) -> MaturityLevel:
        """
        Classify a score into a maturity band.

        Bands are inclusive at both ends. A score that falls between two
        published bands resolves to the highest band whose floor it reaches.
        """
        reached = self._sorted_levels[0]
        for level in self._sorted_levels:
            if level.contains(score):
                return level
            if score >= level.min_score:
                reached = level
        return reached

    def response_score(self, value: ResponseValue) -> float | None:
        return self._response_scores.get(value)

    def evidence_multiplier(self, value: ResponseValue) -> float | None:
        return self._evidence_multipliers.get(value)

    def criticality_weight(self, criticality: Criticality) -> float:
        for level in self.criticality_levels:
            if level.name == criticality:
                return level.weight
        return 1.0

    def framework_category(self, category_id: str) -> FrameworkCategory | None:
        for category in self.framework_categories:
            if category.category_id == category_id:
                return category
        return None

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def question_count_by_domain(self) -> dict[str, int]:
        return {d.domain_id: len(self._questions_by_domain[d.domain_id]) for d in self.domains}

    def question_count_by_subcategory(self) -> dict[str, int]:
        return {
            s.subcat_id: len(self._questions_by_subcategory[s.subcat_id])
            for s in self.subcategories
        }

    def question_count_by_function(self) -> dict[GovernanceFunction, int]:
        counts = {function: 0 for function in GovernanceFunction}
        for domain in self.domains:
            if domain.governance_function is not None:
                counts[domain.governance_function] += len(self._questions_by_domain[domain.domain_id])
        return counts

    def question_count_by_ownership(self) -> dict[OwnershipRole, int]:
        counts = {role: 0 for role in OwnershipRole}
        for question in self.questions:
            if question.ownership_role is not None:
                counts[question.ownership_role] += 1
        return counts
