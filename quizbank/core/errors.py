"""Error taxonomy for the quiz API.

Every failure a route can report is a ``QuizBankError``; the exception
handler in ``quizbank.main`` renders it as ``{"error": message}`` with the
class's ``status_code``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class QuizBankError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class InvalidInput(QuizBankError):
    """Missing or malformed request fields."""

    status_code = 400


class NotFound(QuizBankError):
    """A lookup that the request depends on came back empty."""

    status_code = 404


class Unexpected(QuizBankError):
    """Store, parse or I/O failure that the caller cannot fix."""

    status_code = 500


class ImportFailed(Unexpected):
    """Bulk import failure.

    Import routes historically answered ``{"message", "error"}``; both keys
    are kept so older clients keep working.
    """

    def __init__(self, message: str, summary: Optional[str] = None) -> None:
        super().__init__(message)
        self.summary = summary

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.summary:
            payload["message"] = self.summary
        return payload
