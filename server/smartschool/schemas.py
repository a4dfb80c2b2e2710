from datetime import date, datetime
from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, Field, model_validator

from smartschool.models import ExamStatus, QuestionType, UserRole
from smartschool.models.base import CamelModel
from smartschool.models.records import AttendanceStatus, Scalar
from smartschool.models.user import Gender


T = TypeVar("T")


# =============================================================================
# Response envelope
# =============================================================================

class ApiResponse(BaseModel, Generic[T]):
    """Uniform envelope returned by every service operation."""
    ok: bool
    data: T
    message: Optional[str] = None


def success(data: Any, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(ok=True, data=data, message=message)


def failure(message: str, data: Any = None) -> ApiResponse:
    return ApiResponse(ok=False, data=data, message=message)


# =============================================================================
# Auth / users
# =============================================================================

class VerifyStudentRequest(CamelModel):
    school_code: str = Field(min_length=1)
    student_code: str = Field(min_length=1)


class UserUpdate(CamelModel):
    """Editable profile fields plus optional staff assignments."""
    name: Optional[str] = None
    avatar: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    gender: Optional[Gender] = None
    form_class: Optional[str] = None
    subject_ids: Optional[List[str]] = None


class ProfileUpdateRequest(CamelModel):
    user_id: str = Field(min_length=1)
    updates: UserUpdate


class CreateTeacherRequest(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    role: Optional[Literal["SUPER_ADMIN", "ADMIN", "TEACHER"]] = None
    avatar: Optional[str] = None
    gender: Optional[Gender] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    school_id: Optional[str] = None
    form_class: Optional[str] = None
    subject_ids: Optional[List[str]] = None


# =============================================================================
# Schools / students / subjects
# =============================================================================

class CreateSchoolRequest(CamelModel):
    name: str = Field(min_length=1)
    code: Optional[str] = None
    region: Optional[str] = None
    admin_name: Optional[str] = None
    student_count: Optional[int] = None
    motto: Optional[str] = None
    logo_url: Optional[str] = None
    address: Optional[str] = None
    contact: Optional[str] = None


class SchoolStatusRequest(CamelModel):
    status: Literal["Active", "Inactive"]


class CreateStudentRequest(CamelModel):
    name: str = Field(min_length=1)
    gender: Gender
    grade: str = Field(min_length=1)
    house: str = "Unassigned"
    status: Optional[Literal["Active", "Inactive", "Suspended"]] = None
    gpa: Optional[float] = None
    attendance: Optional[int] = None
    school_id: Optional[str] = None
    enrollment_date: Optional[date] = None
    enrolled_subjects: Optional[List[str]] = None


class StudentUpdate(CamelModel):
    name: Optional[str] = None
    gender: Optional[Gender] = None
    grade: Optional[str] = None
    house: Optional[str] = None
    status: Optional[Literal["Active", "Inactive", "Suspended"]] = None
    gpa: Optional[float] = None
    attendance: Optional[int] = None
    enrollment_date: Optional[date] = None
    enrolled_subjects: Optional[List[str]] = None


class AssignClassMasterRequest(CamelModel):
    grade: str = Field(min_length=1)
    teacher_id: str = Field(min_length=1)


class CreateSubjectRequest(CamelModel):
    name: str = Field(min_length=1)
    teacher_id: Optional[str] = None


class SubjectUpdate(CamelModel):
    """Shallow update; an explicit null teacherId unassigns the teacher."""
    name: Optional[str] = None
    teacher_id: Optional[str] = None
    schedule: Optional[str] = None
    room: Optional[str] = None


class UploadSchemeRequest(CamelModel):
    file_name: str = "upload.bin"
    subject_name: str = "Unknown Subject"
    term: str = "Term 1"


# =============================================================================
# Assessments / results / attendance / announcements
# =============================================================================

class AssessmentInput(CamelModel):
    id: Optional[str] = None
    student_id: str = Field(min_length=1)
    student_name: str = ""
    subject_id: str = Field(min_length=1)
    term: str = Field(min_length=1)
    ca1: float = 0
    ca2: float = 0
    ca3: float = 0
    exam: float = 0
    extensions: Dict[str, Scalar] = Field(default_factory=dict)


class ResultInput(CamelModel):
    id: Optional[str] = None
    student_id: str = Field(min_length=1)
    student_name: Optional[str] = None
    subject_name: Optional[str] = None
    term: Optional[str] = None
    average: Optional[float] = None
    grade: Optional[str] = None
    status: Optional[Literal["Published", "Draft", "withheld"]] = None
    remarks: Optional[str] = None
    details: Optional[Dict[str, Optional[float]]] = None


class AttendanceInput(CamelModel):
    student_id: str = Field(min_length=1)
    status: AttendanceStatus
    date: date


class CreateAnnouncementRequest(CamelModel):
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    target_audience: Literal["all", "teachers", "students"] = "all"
    source: str = "Administration"


class AIActivityRequest(CamelModel):
    action: str = Field(min_length=1)
    scope: Literal["grading", "proctoring", "general"] = "general"
    status: Literal["success", "failure"] = "success"
    actor_id: Optional[str] = None
    actor_role: Optional[UserRole] = None
    school_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Exams and sessions
# =============================================================================

class ExamQuestionInput(CamelModel):
    """Question as authored in the exam builder; id is generated when absent."""
    id: Optional[str] = None
    type: QuestionType
    text: str = Field(min_length=1)
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    points: int = Field(default=1, gt=0)
    is_auto_grade: bool = False
    rubric: Optional[str] = None

    @model_validator(mode="after")
    def _options_for_multiple_choice(self):
        if self.type == QuestionType.MULTIPLE_CHOICE and not self.options:
            raise ValueError("multiple_choice questions require options")
        return self


class ExamBuilderRequest(CamelModel):
    exam_id: Optional[str] = None
    teacher_id: Optional[str] = None
    title: str = Field(min_length=1)
    questions: List[ExamQuestionInput] = Field(min_length=1)


class ExamStatusRequest(CamelModel):
    status: ExamStatus


class StudentRequest(CamelModel):
    """Body carrying only the acting student (start / reset)."""
    student_id: str = Field(min_length=1)


class SessionProgressRequest(CamelModel):
    student_id: str = Field(min_length=1)
    progress: int = Field(ge=0, le=100)
    answers: Optional[Dict[str, str]] = None


class SubmitExamRequest(CamelModel):
    student_id: str = Field(min_length=1)
    answers: Dict[str, str]
    score: float = Field(ge=0)
    exam_id: Optional[str] = None


class ScoreAnswersRequest(CamelModel):
    answers: Dict[str, str]


class GradeEssayRequest(CamelModel):
    question_text: str = Field(min_length=1)
    essay: str
    rubric: str = ""
    max_points: int = Field(gt=0)


class ProctorFrameRequest(CamelModel):
    exam_id: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    frame_data: str = Field(min_length=1)


# =============================================================================
# Live classes
# =============================================================================

class CreateLiveClassRequest(CamelModel):
    subject_id: Optional[str] = None
    teacher_id: Optional[str] = None
    scheduled_time: datetime
    meeting_link: str = Field(min_length=1)


class LiveClassUserRequest(CamelModel):
    user_id: str = Field(min_length=1)


class ParticipantStatusRequest(CamelModel):
    user_id: str = Field(min_length=1)
    camera_on: bool = False
    microphone_on: bool = False


class RaiseHandRequest(CamelModel):
    user_id: str = Field(min_length=1)
    raised: bool = True


class LiveClassMessageRequest(CamelModel):
    user_id: str = Field(min_length=1)
    message: str = Field(min_length=1)


class StartRecordingRequest(CamelModel):
    recording_url: str = Field(min_length=1)


class StopRecordingRequest(CamelModel):
    duration: int = Field(default=0, ge=0)
