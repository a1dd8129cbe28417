# quizbank/routers/results.py
from __future__ import annotations
import logging

from fastapi import APIRouter, Request

from quizbank.core.body import read_json_object
from quizbank.core.errors import QuizBankError, Unexpected
from quizbank.core.results import fetch_quiz_results, parse_submissions
from quizbank.models.schemas import QuizResultReport

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["results"])


@router.post("/fetch_quiz_results", response_model=QuizResultReport)
async def quiz_results(request: Request) -> QuizResultReport:
    """
    Body:
      {
        "questionAnswers": [
          {"id": "<single-answer id>", "answer": "B"},
          {"id": "<comprehension id>", "answer": ["A", "C", "D"]}
        ]
      }
    """
    body = await read_json_object(request, "Invalid input format")
    submissions = parse_submissions(body.get("questionAnswers"))

    try:
        return await fetch_quiz_results(submissions)
    except QuizBankError:
        raise
    except Exception as e:
        logger.exception("[results] failed submitted=%d", len(submissions))
        raise Unexpected(str(e)) from e
