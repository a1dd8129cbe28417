"""Quiz result assembly.

Takes the answers a client submitted for a sampled quiz, loads the full
question records (answer keys included) from both question tables and
scores them:

- single-answer questions score 1 point when the submitted letter equals the
  stored key exactly (case-sensitive, no trimming); a missing or non-string
  answer is "".
- comprehension sets are all-or-nothing on shape: the submission must be a
  list with exactly one answer per sub-question, otherwise the whole set is
  left out of the report and out of the totals. A well-formed submission is
  scored per sub-question by position; a sub-answer that is not a string
  (``null``, a number) is wrong and is echoed back as ``None``.

Only a non-list payload is refused. Items without a string ``id`` match no
question. Records come out in the order the store returned them, not request
order. Ids matching neither table are dropped without error.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from sqlmodel import Session, select
from starlette.concurrency import run_in_threadpool

from quizbank.core.db import get_engine
from quizbank.core.errors import InvalidInput
from quizbank.models.questions import ComprehensionQuestionSet, SingleAnswerQuestion
from quizbank.models.schemas import (
    ComprehensionQuestionResult,
    NormalQuestionResult,
    QuizResultReport,
    SubmittedAnswer,
)

logger = logging.getLogger(__name__)


def parse_submissions(raw: Any) -> List[SubmittedAnswer]:
    """Read the ``questionAnswers`` payload, one entry per item.

    Raises:
        InvalidInput: ``raw`` is not a list.
    """
    if not isinstance(raw, list):
        raise InvalidInput("Invalid input format")

    parsed: List[SubmittedAnswer] = []
    for item in raw:
        if not isinstance(item, dict):
            parsed.append(SubmittedAnswer())
            continue
        qid = item.get("id")
        parsed.append(SubmittedAnswer(id=qid if isinstance(qid, str) else None, answer=item.get("answer")))
    return parsed


def _first_by_id(submissions: Iterable[SubmittedAnswer]) -> Dict[str, SubmittedAnswer]:
    by_id: Dict[str, SubmittedAnswer] = {}
    for s in submissions:
        if s.id is not None:
            by_id.setdefault(s.id, s)
    return by_id


def _sub_answer(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _fetch(model, ids: Set[str]) -> list:
    # one session per worker thread, sessions are not shared across threads
    with Session(get_engine()) as session:
        return list(session.exec(select(model).where(model.id.in_(sorted(ids)))).all())


async def fetch_questions(
    ids: Set[str],
) -> Tuple[List[SingleAnswerQuestion], List[ComprehensionQuestionSet]]:
    """Load both question kinds for ``ids`` concurrently."""
    if not ids:
        return [], []
    singles, sets = await asyncio.gather(
        run_in_threadpool(_fetch, SingleAnswerQuestion, ids),
        run_in_threadpool(_fetch, ComprehensionQuestionSet, ids),
    )
    return singles, sets


def assemble(
    submissions: Sequence[SubmittedAnswer],
    single_questions: Iterable[SingleAnswerQuestion],
    comprehension_sets: Iterable[ComprehensionQuestionSet],
) -> QuizResultReport:
    """Score fetched questions against the submissions and build the report."""
    by_id = _first_by_id(submissions)
    report = QuizResultReport()

    for q in single_questions:
        submitted = by_id.get(q.id)
        user_answer = submitted.answer if submitted is not None and isinstance(submitted.answer, str) else ""

        if user_answer == q.correct_answer:
            report.correct_answers += 1
        report.total_questions += 1

        report.normal_questions.append(
            NormalQuestionResult(
                id=q.id,
                question=q.question,
                options=q.options,
                correct_answer=q.correct_answer,
                user_answer=user_answer,
                explanation=q.explanation,
            )
        )

    for cq in comprehension_sets:
        submitted = by_id.get(cq.id)
        user_answers = submitted.answer if submitted is not None else None

        if not isinstance(user_answers, list) or len(user_answers) != cq.size:
            got = len(user_answers) if isinstance(user_answers, list) else None
            logger.warning("[results] answer count mismatch set=%s expected=%d got=%s", cq.id, cq.size, got)
            continue

        keys = list(cq.correct_answers or [])
        if len(keys) < cq.size:
            logger.warning("[results] set=%s has %d keys for %d questions", cq.id, len(keys), cq.size)

        user_answers = [_sub_answer(a) for a in user_answers]
        for i in range(cq.size):
            key = keys[i] if i < len(keys) else None
            if key is not None and user_answers[i] == key:
                report.correct_answers += 1
            report.total_questions += 1

        report.comprehension_questions.append(
            ComprehensionQuestionResult(
                id=cq.id,
                comprehension=cq.comprehension,
                questions=[q["question"] for q in cq.questions],
                options=[q["options"] for q in cq.questions],
                correct_answers=keys,
                user_answers=user_answers,
                explanations=list(cq.explanations or []),
            )
        )

    return report


async def fetch_quiz_results(submissions: Sequence[SubmittedAnswer]) -> QuizResultReport:
    ids = {s.id for s in submissions if s.id is not None}
    singles, sets = await fetch_questions(ids)
    report = assemble(submissions, singles, sets)
    logger.info(
        "[results] submitted=%d singles=%d sets=%d correct=%d total=%d",
        len(submissions), len(report.normal_questions), len(report.comprehension_questions),
        report.correct_answers, report.total_questions,
    )
    return report
