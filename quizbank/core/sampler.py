# quizbank/core/sampler.py
from __future__ import annotations
import logging
from typing import List, Literal, Union

from sqlalchemy import func
from sqlmodel import Session, select

from quizbank.core.settings import settings
from quizbank.models.questions import ComprehensionQuestionSet, SingleAnswerQuestion
from quizbank.models.schemas import ComprehensionView, SingleAnswerView, SubQuestionView

logger = logging.getLogger(__name__)

QuizKind = Literal["single", "comprehension"]
QuestionView = Union[SingleAnswerView, ComprehensionView]

# Fixed quiz sizes per kind
SAMPLE_SIZES = {
    "single": 15,
    "comprehension": 3,
}

# Subject served as comprehension sets; everything else is single-answer
COMPREHENSION_SUBJECT = "english"


def quiz_kind_for(subject: str) -> QuizKind:
    return "comprehension" if str(subject).lower() == COMPREHENSION_SUBJECT else "single"


def _single_view(q: SingleAnswerQuestion) -> SingleAnswerView:
    return SingleAnswerView(id=q.id, question=q.question, options=q.options)


def _comprehension_view(cq: ComprehensionQuestionSet, expose_answers: bool) -> ComprehensionView:
    view = ComprehensionView(
        id=cq.id,
        comprehension=cq.comprehension,
        questions=[SubQuestionView(question=q["question"], options=q["options"]) for q in cq.questions],
    )
    if expose_answers:
        view.correct_answers = list(cq.correct_answers)
        view.explanations = list(cq.explanations)
    return view


def sample_quiz(
    session: Session,
    category_id: str,
    kind: QuizKind,
    expose_answers: bool | None = None,
) -> List[QuestionView]:
    """
    Uniform random sample without replacement from the category's pool.
    Pools smaller than the cap come back whole.
    """
    size = SAMPLE_SIZES[kind]
    if expose_answers is None:
        expose_answers = settings.EXPOSE_COMPREHENSION_ANSWERS

    if kind == "comprehension":
        stmt = (
            select(ComprehensionQuestionSet)
            .where(ComprehensionQuestionSet.category_id == category_id)
            .order_by(func.random())
            .limit(size)
        )
        views: List[QuestionView] = [_comprehension_view(cq, expose_answers) for cq in session.exec(stmt).all()]
    else:
        stmt = (
            select(SingleAnswerQuestion)
            .where(SingleAnswerQuestion.category_id == category_id)
            .order_by(func.random())
            .limit(size)
        )
        views = [_single_view(q) for q in session.exec(stmt).all()]

    logger.info("[sample] category=%s kind=%s requested=%d returned=%d", category_id, kind, size, len(views))
    return views
