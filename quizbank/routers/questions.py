# quizbank/routers/questions.py
from __future__ import annotations
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from quizbank.core.body import read_json_object
from quizbank.core.categories import resolve_category
from quizbank.core.db import get_session
from quizbank.core.errors import Unexpected
from quizbank.core.sampler import quiz_kind_for, sample_quiz

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["questions"])


async def _questions_body(request: Request) -> Dict[str, Any]:
    return await read_json_object(request, "Subject and grade are required")


@router.post("/questions")
def questions(
    body: Dict[str, Any] = Depends(_questions_body),
    session: Session = Depends(get_session),
) -> List[Dict[str, Any]]:
    """
    Body: {"subject": "English", "grade": "3"}
    Returns a random quiz for the category without answer keys:
    comprehension sets for English, single-answer questions otherwise.
    """
    subject = body.get("subject")
    grade = body.get("grade")

    try:
        category_id = resolve_category(session, subject, grade)
        kind = quiz_kind_for(subject)
        views = sample_quiz(session, category_id, kind)
    except SQLAlchemyError as e:
        logger.exception("[questions] store failure subject=%s grade=%s", subject, grade)
        raise Unexpected(str(e)) from e

    return [v.model_dump(by_alias=True, exclude_none=True) for v in views]
