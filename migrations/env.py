"""Alembic environment for the quiz tables.

The database URL comes from the service settings (``DATABASE_URL`` in the
environment or ``.env``), so migrations and the app always target the same
store; ``sqlalchemy.url`` in alembic.ini is only used when settings leave it
empty.
"""
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlmodel import SQLModel

from quizbank.core.settings import settings
from quizbank.models.category import Category  # noqa: F401
from quizbank.models.questions import ComprehensionQuestionSet, SingleAnswerQuestion  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata
database_url = settings.DATABASE_URL or config.get_main_option("sqlalchemy.url")


def run_offline(url: str) -> None:
    """Emit SQL to stdout instead of connecting."""
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online(url: str) -> None:
    engine = engine_from_config({"sqlalchemy.url": url}, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with engine.connect() as connection:
        # SQLite cannot ALTER most constraints in place
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline(database_url)
else:
    run_online(database_url)
