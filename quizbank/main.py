# quizbank/main.py
from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum

# --- Settings / DB ---
from quizbank.core.settings import settings
from quizbank.core.db import init_db
from quizbank.core.errors import QuizBankError
from quizbank.core.logging import configure_logging

# --- Routers ---
from quizbank.routers.health import router as health_router
from quizbank.routers.imports import router as imports_router
from quizbank.routers.questions import router as questions_router
from quizbank.routers.results import router as results_router

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FastAPI app
# -----------------------------------------------------------------------------
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
)

# -----------------------------------------------------------------------------
# CORS
# -----------------------------------------------------------------------------
ALLOWED_ORIGINS = settings.allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

# -----------------------------------------------------------------------------
# JSON responses always name their charset
# -----------------------------------------------------------------------------
JSON_UTF8 = "application/json; charset=utf-8"


@app.middleware("http")
async def json_charset(request: Request, call_next):
    response = await call_next(request)
    media_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type == "application/json":
        response.headers["content-type"] = JSON_UTF8
    return response

# -----------------------------------------------------------------------------
# Register routers
# -----------------------------------------------------------------------------
app.include_router(health_router)
app.include_router(questions_router)
app.include_router(results_router)
app.include_router(imports_router)

# -----------------------------------------------------------------------------
# Exception handlers
# -----------------------------------------------------------------------------
@app.exception_handler(QuizBankError)
async def quizbank_error_handler(request: Request, exc: QuizBankError):
    if exc.status_code >= 500:
        logger.error("[error] %s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("[error] unhandled %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or "An unexpected error occurred"})

# -----------------------------------------------------------------------------
# Startup
# -----------------------------------------------------------------------------
@app.on_event("startup")
def on_startup():
    configure_logging(settings.LOG_LEVEL)
    init_db()
    logger.info("[boot] %s %s origins=%s", settings.PROJECT_NAME, settings.VERSION, ALLOWED_ORIGINS)

# -----------------------------------------------------------------------------
# Lambda handler
# -----------------------------------------------------------------------------
handler = Mangum(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
