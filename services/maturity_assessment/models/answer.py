"""
Answer Models
=============

Per-question response records. Answers are the only mutable entity of the
assessment; they are validated here, at the store/API boundary, so the
scoring engine can assume well-formed input.

Version: 0.1.0
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class ResponseValue(str, Enum):
    """Four-state answer used for both the response and the evidence axis."""

    YES = "Sim"
    PARTIAL = "Parcial"
    NO = "Não"
    NOT_APPLICABLE = "NA"


# Spellings accepted from imports and API clients
_RESPONSE_ALIASES: dict[str, ResponseValue] = {
    "sim": ResponseValue.YES,
    "yes": ResponseValue.YES,
    "s": ResponseValue.YES,
    "y": ResponseValue.YES,
    "1": ResponseValue.YES,
    "parcial": ResponseValue.PARTIAL,
    "partial": ResponseValue.PARTIAL,
    "p": ResponseValue.PARTIAL,
    "0.5": ResponseValue.PARTIAL,
    "não": ResponseValue.NO,
    "nao": ResponseValue.NO,
    "no": ResponseValue.NO,
    "n": ResponseValue.NO,
    "0": ResponseValue.NO,
    "na": ResponseValue.NOT_APPLICABLE,
    "n/a": ResponseValue.NOT_APPLICABLE,
    "-": ResponseValue.NOT_APPLICABLE,
}


def normalize_response_value(value: Any) -> ResponseValue | None:
    """
    Coerce a raw response/evidence value into a ResponseValue.

    Blank values mean "unset". Unknown spellings raise ValueError so that
    pydantic reports them as validation errors.
    """
    if value is None or isinstance(value, ResponseValue):
        return value

    text = str(value).strip()
    if not text:
        return None

    normalized = _RESPONSE_ALIASES.get(text.lower())
    if normalized is None:
        raise ValueError(f"Unrecognized response value: {value!r}")
    return normalized


class AnswerUpdate(BaseModel):
    """Partial update of an answer; unset fields keep their current value."""

    response: ResponseValue | None = None
    evidence_ok: ResponseValue | None = None
    notes: str | None = None
    evidence_links: list[str] | None = None
    framework_id: str | None = None

    @field_validator("response", "evidence_ok", mode="before")
    @classmethod
    def normalize_choice(cls, v: Any) -> ResponseValue | None:
        return normalize_response_value(v)


class Answer(BaseModel):
    """A user's response to one question."""

    question_id: str = Field(..., min_length=1)
    framework_id: str | None = Field(
        default=None,
        description="Framework association when answers are keyed per framework",
    )
    response: ResponseValue | None = None
    evidence_ok: ResponseValue | None = None
    notes: str = ""
    evidence_links: list[str] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("response", "evidence_ok", mode="before")
    @classmethod
    def normalize_choice(cls, v: Any) -> ResponseValue | None:
        return normalize_response_value(v)

    @property
    def is_answered(self) -> bool:
        """Any response, including NA, counts as answered."""
        return self.response is not None

    @property
    def is_not_applicable(self) -> bool:
        return self.response == ResponseValue.NOT_APPLICABLE

    def merged(self, update: AnswerUpdate) -> "Answer":
        """Return a copy with the fields present in `update` applied."""
        changes = update.model_dump(exclude_unset=True)
        if "notes" in changes and changes["notes"] is None:
            changes["notes"] = ""
        if "evidence_links" in changes and changes["evidence_links"] is None:
            changes["evidence_links"] = []
        changes["updated_at"] = datetime.now(UTC)
        return self.model_copy(update=changes)
