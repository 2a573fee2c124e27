"""
Answer Routes
=============

API endpoints for recording and managing assessment answers.

Version: 0.1.0
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from services.maturity_assessment.dependencies import get_answer_store
from services.maturity_assessment.models.answer import Answer, AnswerUpdate
from services.maturity_assessment.services.answers import AnswerStore
from shared.logging import get_logger


logger = get_logger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================


class AnswerImportRequest(BaseModel):
    """Bulk replacement of every stored answer."""

    answers: list[Answer] = Field(default=[], description="Answers to import")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "answers": [
                        {"question_id": "GOV-01-Q01", "response": "Sim", "evidence_ok": "Sim"},
                        {"question_id": "DATA-01-Q01", "response": "Parcial"},
                    ]
                }
            ]
        }
    }


class AnswerImportResponse(BaseModel):
    """Result of a bulk import."""

    imported: int


# =============================================================================
# Routes
# =============================================================================


@router.get("", response_model=list[Answer])
async def list_answers(
    store: AnswerStore = Depends(get_answer_store),
) -> list[Answer]:
    """List every stored answer."""
    return store.all()


@router.get("/{question_id}", response_model=Answer)
async def get_answer(
    question_id: str,
    store: AnswerStore = Depends(get_answer_store),
) -> Answer:
    """Get the answer of one question."""
    answer = store.get(question_id)
    if answer is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Answer not found: {question_id}",
        )
    return answer


@router.put("/{question_id}", response_model=Answer)
async def set_answer(
    question_id: str,
    update: AnswerUpdate,
    store: AnswerStore = Depends(get_answer_store),
) -> Answer:
    """
    Create or update the answer of a question.

    Only the fields present in the body change; an explicit null clears a field.
    """
    return store.set_answer(question_id, update)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_answer(
    question_id: str,
    store: AnswerStore = Depends(get_answer_store),
) -> Response:
    """Delete the answer of one question."""
    if not store.delete_for_question(question_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Answer not found: {question_id}",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_answers(
    store: AnswerStore = Depends(get_answer_store),
) -> Response:
    """Delete every stored answer."""
    store.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/import", response_model=AnswerImportResponse)
async def import_answers(
    request: AnswerImportRequest,
    store: AnswerStore = Depends(get_answer_store),
) -> AnswerImportResponse:
    """Replace all stored answers with the given set."""
    imported = store.import_answers(request.answers)
    return AnswerImportResponse(imported=imported)
