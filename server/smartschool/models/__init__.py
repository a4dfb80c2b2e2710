"""
Models package initialization
Import all entities here so services and routes share one namespace
"""

from smartschool.models.user import User, UserRole, avatar_from_name
from smartschool.models.school import School, Student, Subject, SchemeSubmission, Announcement
from smartschool.models.records import Assessment, ResultData, AttendanceRecord, AIActivity
from smartschool.models.exam import ActiveExam, ExamQuestion, ExamStatus, QuestionType
from smartschool.models.session import ExamSession, SessionStatus, ProctoringAlert
from smartschool.models.live_class import (
    LiveClass,
    LiveClassParticipant,
    LiveClassMessage,
    LiveClassRecording,
)

__all__ = [
    "User",
    "UserRole",
    "avatar_from_name",
    "School",
    "Student",
    "Subject",
    "SchemeSubmission",
    "Announcement",
    "Assessment",
    "ResultData",
    "AttendanceRecord",
    "AIActivity",
    "ActiveExam",
    "ExamQuestion",
    "ExamStatus",
    "QuestionType",
    "ExamSession",
    "SessionStatus",
    "ProctoringAlert",
    "LiveClass",
    "LiveClassParticipant",
    "LiveClassMessage",
    "LiveClassRecording",
]
