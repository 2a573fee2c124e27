"""
Reference Data Models
=====================

Immutable taxonomy records consumed by the scoring engine: domains,
subcategories, questions and the policy tables that turn answers into
scores (maturity bands, response values, evidence multipliers).

Version: 0.1.0
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from services.maturity_assessment.models.answer import ResponseValue


class Criticality(str, Enum):
    """Subcategory criticality, ordered from least to most important."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        """Position in the ordering (Low=0 ... Critical=3)."""
        return _CRITICALITY_ORDER.index(self)

    @property
    def is_high_impact(self) -> bool:
        """High and Critical subcategories are the ones that generate gaps."""
        return self in (Criticality.HIGH, Criticality.CRITICAL)


_CRITICALITY_ORDER = list(Criticality)


class GovernanceFunction(str, Enum):
    """NIST AI RMF core functions used to group domains."""

    GOVERN = "GOVERN"
    MAP = "MAP"
    MEASURE = "MEASURE"
    MANAGE = "MANAGE"


class OwnershipRole(str, Enum):
    """Organizational function accountable for a control."""

    EXECUTIVE = "Executive"
    GRC = "GRC"
    ENGINEERING = "Engineering"


class ReferenceModel(BaseModel):
    """Base for catalog records: frozen, unknown keys ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Domain(ReferenceModel):
    """Top-level security area."""

    domain_id: str = Field(..., min_length=1)
    domain_name: str
    order: int = 1
    governance_function: GovernanceFunction | None = None
    description: str | None = None
    strategic_question: str | None = None


class Subcategory(ReferenceModel):
    """Control area inside exactly one domain."""

    subcat_id: str = Field(..., min_length=1)
    domain_id: str
    subcat_name: str
    criticality: Criticality = Criticality.MEDIUM
    weight: float = Field(default=1.0, gt=0)
    ownership_role: OwnershipRole | None = None
    framework_refs: list[str] = Field(default_factory=list)
    definition: str | None = None
    objective: str | None = None
    risk_summary: str | None = None


class Question(ReferenceModel):
    """Atomic assessable item. Custom questions share this shape."""

    question_id: str = Field(..., min_length=1)
    subcat_id: str
    domain_id: str
    question_text: str
    frameworks: list[str] = Field(default_factory=list)
    ownership_role: OwnershipRole | None = None
    expected_evidence: str = ""
    risk_summary: str = ""


class MaturityLevel(ReferenceModel):
    """One band of the maturity scale. Scores are fractions in [0, 1]."""

    level: int
    name: str
    description: str = ""
    min_score: float = Field(..., ge=0.0, le=1.0)
    max_score: float = Field(..., ge=0.0, le=1.0)

    def contains(self, score: float) -> bool:
        return self.min_score <= score <= self.max_score


class ResponseOption(ReferenceModel):
    """Score attached to a response value (None for NA)."""

    value: ResponseValue
    score: float | None
    label: str = ""


class EvidenceOption(ReferenceModel):
    """Multiplier attached to an evidence-confidence value (None for NA)."""

    value: ResponseValue
    multiplier: float | None
    label: str = ""


class CriticalityLevel(ReferenceModel):
    """Relative weight of a criticality level."""

    name: Criticality
    weight: float = Field(..., gt=0)


class FrameworkCategory(ReferenceModel):
    """Editorial grouping of external standards for coverage reporting."""

    category_id: str
    name: str
    description: str = ""
    frameworks: list[str] = Field(default_factory=list)
