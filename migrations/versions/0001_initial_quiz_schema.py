"""initial quiz schema

Revision ID: 000000000001
Revises: 
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "000000000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # categories, one per exact (subject, grade)
    op.create_table(
        "category",
        sa.Column("id", sa.String(length=32), primary_key=True, nullable=False),
        sa.Column("subject", sa.String(), nullable=False),
        sa.Column("grade", sa.String(), nullable=False),
        sa.UniqueConstraint("subject", "grade", name="uq_category_subject_grade"),
    )
    op.create_index("ix_category_subject", "category", ["subject"])

    # single-answer questions
    op.create_table(
        "single_answer_question",
        sa.Column("id", sa.String(length=32), primary_key=True, nullable=False),
        sa.Column("category_id", sa.String(length=32), sa.ForeignKey("category.id"), nullable=False),
        sa.Column("question", sa.String(), nullable=False),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("correct_answer", sa.String(), nullable=False),
        sa.Column("explanation", sa.String(), nullable=False),
    )
    op.create_index("ix_single_answer_question_category_id", "single_answer_question", ["category_id"])

    # comprehension sets, questions/correct_answers/explanations are co-indexed
    op.create_table(
        "comprehension_question_set",
        sa.Column("id", sa.String(length=32), primary_key=True, nullable=False),
        sa.Column("category_id", sa.String(length=32), sa.ForeignKey("category.id"), nullable=False),
        sa.Column("comprehension", sa.String(), nullable=False),
        sa.Column("questions", sa.JSON(), nullable=False),
        sa.Column("correct_answers", sa.JSON(), nullable=False),
        sa.Column("explanations", sa.JSON(), nullable=False),
    )
    op.create_index("ix_comprehension_question_set_category_id", "comprehension_question_set", ["category_id"])


def downgrade() -> None:
    op.drop_index("ix_comprehension_question_set_category_id", table_name="comprehension_question_set")
    op.drop_table("comprehension_question_set")
    op.drop_index("ix_single_answer_question_category_id", table_name="single_answer_question")
    op.drop_table("single_answer_question")
    op.drop_index("ix_category_subject", table_name="category")
    op.drop_table("category")
