"""
In-memory entity store.

One EntityStore owns every collection for a process (or a test). Collections
with a natural composite key are keyed by it, so "at most one record per key"
holds by construction. All find-then-write sequences must run under `lock`.
"""
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Tuple
import threading
import uuid

from smartschool.models import (
    AIActivity,
    ActiveExam,
    Announcement,
    Assessment,
    AttendanceRecord,
    ExamSession,
    LiveClass,
    LiveClassMessage,
    LiveClassParticipant,
    LiveClassRecording,
    ProctoringAlert,
    ResultData,
    SchemeSubmission,
    School,
    Student,
    Subject,
    User,
)


def new_id(prefix: str) -> str:
    """Short unique id with a readable prefix, e.g. ``exam_3f9a1c2e``."""
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntityStore:
    """Owns all mutable application state."""

    def __init__(self):
        self.lock = threading.RLock()

        self.schools: Dict[str, School] = {}
        self.users: Dict[str, User] = {}
        self.students: Dict[str, Student] = {}
        self.subjects: Dict[str, Subject] = {}
        self.schemes: Dict[str, SchemeSubmission] = {}
        self.assessments: Dict[str, Assessment] = {}
        self.announcements: Dict[str, Announcement] = {}

        # (student_id, subject_name) -> result
        self.results: Dict[Tuple[str, str], ResultData] = {}
        # (date, student_id) -> record
        self.attendance: Dict[Tuple[date, str], AttendanceRecord] = {}
        # grade -> teacher_id
        self.class_masters: Dict[str, str] = {}

        self.exams: Dict[str, ActiveExam] = {}
        # (exam_id, student_id) -> session
        self.exam_sessions: Dict[Tuple[str, str], ExamSession] = {}
        self.proctoring_alerts: List[ProctoringAlert] = []
        self.ai_activities: List[AIActivity] = []

        self.live_classes: Dict[str, LiveClass] = {}
        # (live_class_id, user_id) -> participant
        self.live_class_participants: Dict[Tuple[str, str], LiveClassParticipant] = {}
        # live_class_id -> messages, oldest first
        self.live_class_messages: Dict[str, List[LiveClassMessage]] = {}
        # live_class_id -> recording
        self.live_class_recordings: Dict[str, LiveClassRecording] = {}

    def default_school_id(self) -> Optional[str]:
        """First school by name; the fallback tenant for unscoped writes."""
        if not self.schools:
            return None
        return min(self.schools.values(), key=lambda s: s.name).id

    def school_id_for_user(self, user_id: Optional[str]) -> Optional[str]:
        user = self.users.get(user_id) if user_id else None
        if user and user.school_id:
            return user.school_id
        return self.default_school_id()

    def is_empty(self) -> bool:
        return not (self.schools or self.users or self.students or self.exams)

    def counts(self) -> Dict[str, int]:
        return {
            "schools": len(self.schools),
            "users": len(self.users),
            "students": len(self.students),
            "subjects": len(self.subjects),
            "schemes": len(self.schemes),
            "assessments": len(self.assessments),
            "results": len(self.results),
            "exams": len(self.exams),
            "exam_sessions": len(self.exam_sessions),
            "attendance": len(self.attendance),
            "live_classes": len(self.live_classes),
        }
