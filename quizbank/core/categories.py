# quizbank/core/categories.py
from __future__ import annotations
import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from quizbank.core.errors import InvalidInput, NotFound
from quizbank.models.category import Category

logger = logging.getLogger(__name__)


def _as_key(value: Any) -> Optional[str]:
    """JSON numbers are accepted for subject/grade and compared as strings.

    Integral floats lose their fraction first, so grade 3.0 reads as "3".
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value:
        return value
    return None


def _find(session: Session, subject: str, grade: str) -> Optional[Category]:
    stmt = select(Category).where(Category.subject == subject, Category.grade == grade)
    return session.exec(stmt).first()


def resolve_category(session: Session, subject: Any, grade: Any) -> str:
    """Exact (subject, grade) lookup; returns the category id."""
    subject_key, grade_key = _as_key(subject), _as_key(grade)
    if not subject_key or not grade_key:
        raise InvalidInput("Subject and grade are required")

    category = _find(session, subject_key, grade_key)
    if category is None:
        raise NotFound("Category not found")
    return category.id


def get_or_create_category(session: Session, subject: str, grade: str) -> str:
    """
    Returns the id of the exact (subject, grade) category, creating it on first use.
    A concurrent creator that wins the unique constraint is re-read instead.
    """
    category = _find(session, subject, grade)
    if category is not None:
        return category.id

    category = Category(subject=subject, grade=grade)
    session.add(category)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        existing = _find(session, subject, grade)
        if existing is None:
            raise
        logger.info("[category] lost create race subject=%s grade=%s id=%s", subject, grade, existing.id)
        return existing.id

    session.refresh(category)
    logger.info("[category] created subject=%s grade=%s id=%s", subject, grade, category.id)
    return category.id
