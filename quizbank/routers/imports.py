# quizbank/routers/imports.py
from __future__ import annotations
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlmodel import Session

from quizbank.core.db import get_session
from quizbank.core.errors import ImportFailed
from quizbank.core.importer import import_comprehension_file, import_localized_questions_file
from quizbank.core.settings import settings

logger = logging.getLogger(__name__)

# Offline tooling exposed over HTTP; both routes read a fixed file under IMPORT_DIR
router = APIRouter(prefix="", tags=["import"])


@router.post("/import-json")
def import_json(session: Session = Depends(get_session)) -> Dict[str, Any]:
    path = settings.comprehension_import_path
    try:
        summary = import_comprehension_file(session, path)
    except ImportFailed:
        raise
    except Exception as e:
        logger.exception("[import-json] failed path=%s", path)
        raise ImportFailed(str(e), "Error importing data") from e
    return {"message": "Data imported successfully!", **summary.model_dump()}


@router.post("/import-math-questions")
def import_math_questions(session: Session = Depends(get_session)) -> Dict[str, Any]:
    path = settings.math_import_path
    try:
        summary = import_localized_questions_file(session, path)
    except ImportFailed:
        raise
    except Exception as e:
        logger.exception("[import-math-questions] failed path=%s", path)
        raise ImportFailed(str(e), "Error importing questions") from e
    return {"message": "Math questions imported successfully!", **summary.model_dump()}
