from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class Options(BaseModel):
    A: str
    B: str
    C: str
    D: str


# ============================== Submissions ==============================
class SubmittedAnswer(BaseModel):
    # None when the client sent no usable id; such an answer matches nothing
    id: Optional[str] = None
    # one letter for a single-answer question, a list for a comprehension set;
    # anything else is kept as sent and scored as a wrong answer
    answer: Any = None


# ============================== Quiz views ==============================
class SingleAnswerView(BaseModel):
    id: str = Field(serialization_alias="_id")
    question: str
    options: Dict[str, str]


class SubQuestionView(BaseModel):
    question: str
    options: Dict[str, str]


class ComprehensionView(BaseModel):
    id: str = Field(serialization_alias="_id")
    comprehension: str
    questions: List[SubQuestionView]
    correct_answers: Optional[List[str]] = Field(default=None, serialization_alias="correctAnswers")
    explanations: Optional[List[str]] = None


# ============================== Results ==============================
class NormalQuestionResult(BaseModel):
    id: str
    question: str
    options: Dict[str, str]
    correct_answer: str
    user_answer: str
    explanation: str


class ComprehensionQuestionResult(BaseModel):
    id: str
    comprehension: str
    questions: List[str]
    options: List[Dict[str, str]]
    correct_answers: List[str]
    user_answers: List[Optional[str]]
    explanations: List[str]


class QuizResultReport(BaseModel):
    normal_questions: List[NormalQuestionResult] = Field(default_factory=list)
    comprehension_questions: List[ComprehensionQuestionResult] = Field(default_factory=list)
    correct_answers: int = 0
    total_questions: int = 0


# ============================== Import files ==============================
class ComprehensionItemIn(BaseModel):
    question: str
    options: Options
    correct_answer: str
    explanation: str


class ComprehensionEntryIn(BaseModel):
    comprehension: str
    questions: List[ComprehensionItemIn]


class ComprehensionFileIn(BaseModel):
    comprehensions: List[ComprehensionEntryIn]


class LocalizedQuestionIn(BaseModel):
    """One question with every text keyed by language, e.g. {"en": "..."}."""

    question: Dict[str, str]
    options: Dict[str, Dict[str, str]]
    correct_answer: Dict[str, str]
    explanation: Dict[str, str]


class LocalizedFileIn(BaseModel):
    questions: List[LocalizedQuestionIn]


class ComprehensionSetIn(BaseModel):
    """Validated parts of a comprehension set before it is stored."""

    comprehension: str
    questions: List[SubQuestionView]
    correct_answers: List[str]
    explanations: List[str]

    @model_validator(mode="after")
    def _parallel_lengths(self) -> "ComprehensionSetIn":
        n = len(self.questions)
        if len(self.correct_answers) != n or len(self.explanations) != n:
            raise ValueError(
                f"questions/correct_answers/explanations length mismatch: "
                f"{n}/{len(self.correct_answers)}/{len(self.explanations)}"
            )
        return self


class ImportSummary(BaseModel):
    category_id: str
    imported: int
