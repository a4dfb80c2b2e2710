import datetime as dt
from typing import Any, Dict, Literal, Optional, Union

from pydantic import Field

from smartschool.models.base import CamelModel
from smartschool.models.user import UserRole


Scalar = Union[str, int, float]

AttendanceStatus = Literal["Present", "Absent", "Late", "Excused"]


class Assessment(CamelModel):
    """Continuous assessment scores for one student in one subject and term."""
    id: str
    student_id: str
    student_name: str = ""
    subject_id: str
    term: str
    ca1: float = 0
    ca2: float = 0
    ca3: float = 0
    exam: float = 0
    extensions: Dict[str, Scalar] = Field(default_factory=dict)  # School-specific extra columns


class ResultData(CamelModel):
    id: str
    student_id: str
    student_name: str = ""
    subject_name: str = "General Studies"
    term: str = "Term 1"
    average: float = 0
    grade: str = ""
    status: Literal["Published", "Draft", "withheld"] = "Published"
    remarks: Optional[str] = None
    details: Dict[str, Optional[float]] = Field(default_factory=dict)


class AttendanceRecord(CamelModel):
    student_id: str
    status: AttendanceStatus
    date: dt.date


class AIActivity(CamelModel):
    """Audit entry for a call made to one of the AI oracles."""
    id: str
    action: str
    scope: Literal["grading", "proctoring", "general"] = "general"
    status: Literal["success", "failure"] = "success"
    actor_id: Optional[str] = None
    actor_role: Optional[UserRole] = None
    school_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: dt.datetime
