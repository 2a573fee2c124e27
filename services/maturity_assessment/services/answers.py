"""
Answer Store
============

In-memory answer store keyed by question id. Every mutation commits before
the next read, and scoring passes work on `snapshot()` copies so a pass
never observes a half-applied change.

Version: 0.1.0
"""

import threading
from collections.abc import Iterable
from datetime import UTC, datetime

from services.maturity_assessment.models.answer import Answer, AnswerUpdate
from shared.logging import get_logger


logger = get_logger(__name__)


class AnswerStore:
    """Thread-safe mutable store of the live answer per question."""

    def __init__(self, answers: Iterable[Answer] = ()) -> None:
        self._lock = threading.Lock()
        self._answers: dict[str, Answer] = {a.question_id: a for a in answers}
        self._last_updated: datetime | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._answers)

    def __contains__(self, question_id: object) -> bool:
        with self._lock:
            return question_id in self._answers

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    def get(self, question_id: str) -> Answer | None:
        with self._lock:
            return self._answers.get(question_id)

    def all(self) -> list[Answer]:
        with self._lock:
            return list(self._answers.values())

    def snapshot(self) -> dict[str, Answer]:
        """Independent copy of the current answers for one scoring pass."""
        with self._lock:
            return dict(self._answers)

    def set_answer(self, question_id: str, update: AnswerUpdate) -> Answer:
        """
        Create or update the answer of a question.

        Fields not set in `update` keep their current value.
        """
        with self._lock:
            current = self._answers.get(question_id) or Answer(question_id=question_id)
            answer = current.merged(update)
            self._answers[question_id] = answer
            self._touch()

        logger.info(
            "answer_saved",
            question_id=question_id,
            response=answer.response.value if answer.response else None,
            evidence_ok=answer.evidence_ok.value if answer.evidence_ok else None,
        )
        return answer

    def import_answers(self, answers: Iterable[Answer]) -> int:
        """Replace every stored answer with `answers`. Returns the new count."""
        replacement = {a.question_id: a for a in answers}
        with self._lock:
            self._answers = replacement
            self._touch()

        logger.info("answers_imported", count=len(replacement))
        return len(replacement)

    def delete_for_question(self, question_id: str) -> bool:
        """Drop the answer of a deleted question. Returns whether one existed."""
        with self._lock:
            removed = self._answers.pop(question_id, None) is not None
            if removed:
                self._touch()

        if removed:
            logger.info("answer_deleted", question_id=question_id)
        return removed

    def clear(self) -> None:
        with self._lock:
            count = len(self._answers)
            self._answers = {}
            self._touch()

        logger.info("answers_cleared", count=count)

    def _touch(self) -> None:
        self._last_updated = datetime.now(UTC)
