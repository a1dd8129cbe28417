# quizbank/core/db.py
from __future__ import annotations
from typing import Generator
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine
from quizbank.core.settings import settings

# Register every table on SQLModel.metadata
from quizbank.models.category import Category  # noqa: F401
from quizbank.models.questions import ComprehensionQuestionSet, SingleAnswerQuestion  # noqa: F401

# Process-wide engine (singleton)
_engine = None


def make_engine(db_url: str) -> Engine:
    connect_args = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        db_url,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = make_engine(settings.DATABASE_URL)
    return _engine


def set_engine(engine: Engine | None) -> None:
    """Swap the process engine (tests and offline scripts point it elsewhere)."""
    global _engine
    _engine = engine


def init_db() -> None:
    """
    Create all tables that do not exist yet.
    Runs at startup; production schemas are managed by the alembic migrations.
    """
    SQLModel.metadata.create_all(get_engine())


def get_session() -> Generator[Session, None, None]:
    """
    FastAPI dependency, injected with Depends(get_session)
    """
    with Session(get_engine()) as session:
        yield session
