from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field

from smartschool.models.base import CamelModel
from smartschool.models.user import Gender


class School(CamelModel):
    """A tenant: every student, subject and exam belongs to one school."""
    id: str
    name: str
    code: str
    region: str = ""
    admin_name: str = ""
    status: Literal["Active", "Inactive"] = "Active"
    student_count: int = 0
    motto: str = ""
    logo_url: str = ""
    address: str = ""
    contact: str = ""


class Student(CamelModel):
    id: str
    name: str
    gender: Gender
    grade: str
    house: str = "Unassigned"
    enrollment_date: date
    status: Literal["Active", "Inactive", "Suspended"] = "Active"
    gpa: float = 0.0
    attendance: int = 0  # Attendance counter, decremented on each Absent mark
    school_id: str
    access_code: str
    enrolled_subjects: List[str] = Field(default_factory=list)


class Subject(CamelModel):
    id: str
    name: str
    teacher_id: Optional[str] = None
    schedule: str = "TBD"
    room: str = "TBD"
    school_id: Optional[str] = None


class SchemeSubmission(CamelModel):
    """Scheme-of-work document uploaded by a teacher for review."""
    id: str
    subject_id: Optional[str] = None
    subject_name: str
    term: str
    upload_date: datetime
    status: Literal["Pending", "Approved", "Rejected"] = "Pending"
    file_name: str


class Announcement(CamelModel):
    id: str
    title: str
    message: str
    target_audience: Literal["all", "teachers", "students"] = "all"
    source: str
    created_at: datetime
