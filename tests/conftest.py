"""
Shared fixtures: every test gets its own file-backed SQLite database
installed as the process engine, with the schema created.
"""
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from quizbank.core import db
from quizbank.main import app
from quizbank.models.category import Category
from quizbank.models.questions import ComprehensionQuestionSet, SingleAnswerQuestion

OPTIONS = {"A": "alpha", "B": "bravo", "C": "charlie", "D": "delta"}


@pytest.fixture
def engine(tmp_path):
    engine = db.make_engine(f"sqlite:///{tmp_path / 'quizbank-test.db'}")
    db.set_engine(engine)
    db.init_db()
    yield engine
    db.set_engine(None)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def client(engine):
    return TestClient(app)


def add_category(session: Session, subject: str = "Mathematics", grade: str = "3") -> str:
    category = Category(subject=subject, grade=grade)
    session.add(category)
    session.commit()
    return category.id


def add_single(
    session: Session,
    category_id: str,
    correct_answer: str = "B",
    question: str = "What is 1 + 1?",
    id: Optional[str] = None,
) -> str:
    q = SingleAnswerQuestion(
        category_id=category_id,
        question=question,
        options=dict(OPTIONS),
        correct_answer=correct_answer,
        explanation=f"the answer is {correct_answer}",
    )
    if id is not None:
        q.id = id
    session.add(q)
    session.commit()
    return q.id


def add_set(
    session: Session,
    category_id: str,
    correct_answers: List[str],
    id: Optional[str] = None,
) -> str:
    cq = ComprehensionQuestionSet(
        category_id=category_id,
        comprehension="A short passage.",
        questions=[{"question": f"sub question {i}", "options": dict(OPTIONS)} for i in range(len(correct_answers))],
        correct_answers=list(correct_answers),
        explanations=[f"because {a}" for a in correct_answers],
    )
    if id is not None:
        cq.id = id
    session.add(cq)
    session.commit()
    return cq.id
