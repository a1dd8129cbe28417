# quizbank/core/body.py
from __future__ import annotations
from typing import Any, Dict

from fastapi import Request

from quizbank.core.errors import InvalidInput


async def read_json_object(request: Request, message: str) -> Dict[str, Any]:
    """Parse the request body as a JSON object or fail with InvalidInput(message)."""
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidInput(message) from e
    if not isinstance(body, dict):
        raise InvalidInput(message)
    return body
