# quizbank/core/importer.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError
from sqlmodel import Session

from quizbank.core.categories import get_or_create_category
from quizbank.core.errors import ImportFailed
from quizbank.models.questions import ComprehensionQuestionSet, SingleAnswerQuestion
from quizbank.models.schemas import (
    ComprehensionEntryIn,
    ComprehensionFileIn,
    ComprehensionSetIn,
    ImportSummary,
    LocalizedFileIn,
    LocalizedQuestionIn,
    SubQuestionView,
)

logger = logging.getLogger(__name__)

COMPREHENSION_CATEGORY = ("English", "3")
LOCALIZED_CATEGORY = ("Mathematics", "3")
OPTION_KEYS = ("A", "B", "C", "D")


def _load_json(path: Path, summary: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ImportFailed(f"failed to read {path}: {e}", summary) from e


def build_comprehension_set(entry: ComprehensionEntryIn, category_id: str) -> ComprehensionQuestionSet:
    """Split an import entry into the parallel sequences a set is stored as."""
    parts = ComprehensionSetIn(
        comprehension=entry.comprehension,
        questions=[SubQuestionView(question=q.question, options=q.options.model_dump()) for q in entry.questions],
        correct_answers=[q.correct_answer for q in entry.questions],
        explanations=[q.explanation for q in entry.questions],
    )
    return ComprehensionQuestionSet(
        category_id=category_id,
        comprehension=parts.comprehension,
        questions=[q.model_dump() for q in parts.questions],
        correct_answers=parts.correct_answers,
        explanations=parts.explanations,
    )


def build_localized_question(item: LocalizedQuestionIn, category_id: str, lang: str = "en") -> SingleAnswerQuestion:
    try:
        options: Dict[str, str] = {k: item.options[k][lang] for k in OPTION_KEYS}
        return SingleAnswerQuestion(
            category_id=category_id,
            question=item.question[lang],
            options=options,
            correct_answer=item.correct_answer[lang],
            explanation=item.explanation[lang],
        )
    except KeyError as e:
        raise ValueError(f"missing '{lang}' text or option {e}") from e


def import_comprehension_file(
    session: Session,
    path: Path,
    subject: str = COMPREHENSION_CATEGORY[0],
    grade: str = COMPREHENSION_CATEGORY[1],
) -> ImportSummary:
    """
    Reads {"comprehensions": [...]} and stores one comprehension set per entry.
    Each set is committed on its own, so a failure midway keeps the earlier ones.
    """
    summary = "Error importing data"
    raw = _load_json(path, summary)
    try:
        data = ComprehensionFileIn.model_validate(raw)
    except ValidationError as e:
        raise ImportFailed(f"invalid comprehension file {path}: {e}", summary) from e

    category_id = get_or_create_category(session, subject, grade)
    imported = 0
    try:
        for entry in data.comprehensions:
            session.add(build_comprehension_set(entry, category_id))
            session.commit()
            imported += 1
    except Exception as e:
        session.rollback()
        logger.exception("[import] comprehension failed path=%s imported=%d", path, imported)
        raise ImportFailed(str(e), summary) from e

    logger.info("[import] comprehension path=%s category=%s imported=%d", path, category_id, imported)
    return ImportSummary(category_id=category_id, imported=imported)


def import_localized_questions_file(
    session: Session,
    path: Path,
    subject: str = LOCALIZED_CATEGORY[0],
    grade: str = LOCALIZED_CATEGORY[1],
    lang: str = "en",
) -> ImportSummary:
    """
    Reads {"questions": [...]} where every text is keyed by language and
    stores single-answer questions in `lang` only, one commit per question.
    """
    summary = "Error importing questions"
    raw = _load_json(path, summary)
    try:
        data = LocalizedFileIn.model_validate(raw)
    except ValidationError as e:
        raise ImportFailed(f"invalid questions file {path}: {e}", summary) from e

    category_id = get_or_create_category(session, subject, grade)
    imported = 0
    try:
        for item in data.questions:
            session.add(build_localized_question(item, category_id, lang))
            session.commit()
            imported += 1
    except Exception as e:
        session.rollback()
        logger.exception("[import] questions failed path=%s imported=%d", path, imported)
        raise ImportFailed(str(e), summary) from e

    logger.info("[import] questions path=%s category=%s lang=%s imported=%d", path, category_id, lang, imported)
    return ImportSummary(category_id=category_id, imported=imported)
