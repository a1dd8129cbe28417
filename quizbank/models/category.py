# quizbank/models/category.py
from __future__ import annotations
from uuid import uuid4
from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint


def new_id() -> str:
    return uuid4().hex


class Category(SQLModel, table=True):
    __tablename__ = "category"
    # one row per exact (subject, grade) pair; no case folding
    __table_args__ = (UniqueConstraint("subject", "grade", name="uq_category_subject_grade"),)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    subject: str = Field(index=True)
    grade: str
