from datetime import datetime
from typing import Dict, Optional
import enum

from pydantic import Field

from smartschool.models.base import CamelModel


class SessionStatus(str, enum.Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    SUBMITTED = "submitted"


class ExamSession(CamelModel):
    """One student's attempt at one exam"""
    id: str
    exam_id: str
    student_id: str
    status: SessionStatus = SessionStatus.NOT_STARTED
    progress: int = Field(default=0, ge=0, le=100)
    score: Optional[float] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    answers: Dict[str, str] = Field(default_factory=dict)  # {question_id: answer}


class ProctoringAlert(CamelModel):
    """Anomaly reported by the proctoring oracle for a student's exam session"""
    id: str
    exam_id: str
    student_id: str
    description: str
    created_at: datetime
