from typing import List, Optional
import enum

from pydantic import Field

from smartschool.models.base import CamelModel


class QuestionType(str, enum.Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    SHORT_ANSWER = "short_answer"
    ESSAY = "essay"


class ExamStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    ENDED = "ended"


class ExamQuestion(CamelModel):
    """A question owned by exactly one exam."""
    id: str
    type: QuestionType
    text: str
    options: Optional[List[str]] = None  # Required for multiple_choice
    correct_answer: Optional[str] = None
    points: int = Field(default=1, gt=0)
    is_auto_grade: bool = False
    rubric: Optional[str] = None


class ActiveExam(CamelModel):
    """Teacher-authored exam definition with its lifecycle status"""
    id: str
    title: str
    status: ExamStatus = ExamStatus.SCHEDULED
    duration: int = 60  # Minutes
    questions: List[ExamQuestion] = Field(default_factory=list)
    teacher_id: Optional[str] = None
