# quizbank/core/settings.py
from __future__ import annotations

from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env is optional; values already present in the environment win
load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Basics
    PROJECT_NAME: str = "quizbank-api"
    VERSION: str = "1.0.0"
    DATABASE_URL: str = "sqlite:///quizbank.db"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Comma separated list, "*" allows every origin
    CORS_ORIGINS: str = "http://localhost:3000,https://firstbench-ai-react.vercel.app"

    # Comprehension views ship correctAnswers/explanations unless turned off
    EXPOSE_COMPREHENSION_ANSWERS: bool = True

    # Bulk import sources
    IMPORT_DIR: str = "data"
    COMPREHENSION_IMPORT_FILE: str = "2.json"
    MATH_IMPORT_FILE: str = "M319.json"

    @property
    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def comprehension_import_path(self) -> Path:
        return Path(self.IMPORT_DIR) / self.COMPREHENSION_IMPORT_FILE

    @property
    def math_import_path(self) -> Path:
        return Path(self.IMPORT_DIR) / self.MATH_IMPORT_FILE


# Settings singleton imported by the rest of the package
settings = Settings()
