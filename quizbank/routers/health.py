from fastapi import APIRouter

from quizbank.core.settings import settings

router = APIRouter(prefix="", tags=["health"])


@router.get("/health")
def health():
    return {"ok": True, "service": settings.PROJECT_NAME, "version": settings.VERSION}
