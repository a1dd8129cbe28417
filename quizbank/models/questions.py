# quizbank/models/questions.py
from __future__ import annotations
from typing import Any, Dict, List
from sqlmodel import SQLModel, Field, Column, JSON

from quizbank.models.category import new_id


class SingleAnswerQuestion(SQLModel, table=True):
    __tablename__ = "single_answer_question"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    category_id: str = Field(foreign_key="category.id", index=True)

    question: str
    # {"A": "...", "B": "...", "C": "...", "D": "..."}
    options: Dict[str, str] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    correct_answer: str
    explanation: str


class ComprehensionQuestionSet(SQLModel, table=True):
    __tablename__ = "comprehension_question_set"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    category_id: str = Field(foreign_key="category.id", index=True)

    comprehension: str
    # [{"question": "...", "options": {"A": ..., "D": ...}}, ...]
    questions: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    # parallel to `questions`, index i answers/explains questions[i]
    correct_answers: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    explanations: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    @property
    def size(self) -> int:
        return len(self.questions or [])

    def __init__(self, **data: Any) -> None:
        super().__init__(**data)
        self.check_parallel()

    def check_parallel(self) -> None:
        """Raise ValueError unless questions, keys and explanations line up."""
        n = self.size
        keys, notes = len(self.correct_answers or []), len(self.explanations or [])
        if keys != n or notes != n:
            raise ValueError(
                f"comprehension set {self.id}: questions/correct_answers/explanations "
                f"length mismatch {n}/{keys}/{notes}"
            )
