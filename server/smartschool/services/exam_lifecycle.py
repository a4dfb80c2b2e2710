"""
Exam Lifecycle Manager.

Owns exam status transitions and the per-student session state machine:

    (none) -> not-started -> in-progress -> submitted
    reset: any session -> (none)

Submitted sessions are terminal for progress updates. Exam status changes
are unconditional and do not touch existing sessions.
"""
import logging
from typing import Dict, Iterable, Optional, Union

from smartschool.models import ActiveExam, ExamQuestion, ExamSession, ExamStatus, SessionStatus
from smartschool.schemas import ApiResponse, ExamQuestionInput, failure, success
from smartschool.storage import EntityStore, new_id, utcnow

logger = logging.getLogger(__name__)

QuestionLike = Union[ExamQuestionInput, ExamQuestion]


class ExamLifecycleManager:
    def __init__(self, store: EntityStore, default_duration: int = 60):
        self.store = store
        self.default_duration = default_duration

    # ------------------------------------------------------------------
    # Exams
    # ------------------------------------------------------------------

    def get_exams(self) -> ApiResponse:
        return success([e.model_copy(deep=True) for e in self.store.exams.values()])

    def get_exam(self, exam_id: str) -> ApiResponse:
        exam = self.store.exams.get(exam_id)
        if not exam:
            return failure("Exam not found")
        return success(exam.model_copy(deep=True))

    def list_available(self) -> ApiResponse:
        """Active exams in insertion order."""
        return success(
            [e.model_copy(deep=True) for e in self.store.exams.values() if e.status == ExamStatus.ACTIVE]
        )

    def create_or_update_exam(
        self,
        questions: Iterable[QuestionLike],
        title: str,
        exam_id: Optional[str] = None,
        teacher_id: Optional[str] = None,
    ) -> ApiResponse:
        """
        Upsert an exam definition.

        An existing exam gets its title and questions replaced while status,
        duration and teacher are kept (teacher only changes when a new one is
        given). An unknown or missing exam_id creates a scheduled exam.
        """
        built = [self._build_question(q) for q in questions]

        with self.store.lock:
            exam = self.store.exams.get(exam_id) if exam_id else None
            if exam:
                exam.title = title
                exam.questions = built
                if teacher_id:
                    exam.teacher_id = teacher_id
                logger.info("📝 Exam updated: %s (%d questions)", exam.id, len(built))
            else:
                exam = ActiveExam(
                    id=new_id("exam"),
                    title=title,
                    status=ExamStatus.SCHEDULED,
                    duration=self.default_duration,
                    questions=built,
                    teacher_id=teacher_id,
                )
                self.store.exams[exam.id] = exam
                logger.info("📝 Exam created: %s '%s'", exam.id, title)
            return success(exam.model_copy(deep=True))

    def set_status(self, exam_id: str, status: Union[ExamStatus, str]) -> ApiResponse:
        with self.store.lock:
            exam = self.store.exams.get(exam_id)
            if not exam:
                return failure("Exam not found", False)
            previous = exam.status
            exam.status = ExamStatus(status)
        logger.info("🔁 Exam %s: %s -> %s", exam_id, previous.value, exam.status.value)
        return success(True)

    @staticmethod
    def _build_question(question: QuestionLike) -> ExamQuestion:
        data = question.model_dump()
        data["id"] = data.get("id") or new_id("q")
        return ExamQuestion(**data)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def get_sessions(self, exam_id: str) -> ApiResponse:
        sessions = [s.model_copy(deep=True) for (eid, _), s in self.store.exam_sessions.items() if eid == exam_id]
        return success(sessions)

    def get_session(self, exam_id: str, student_id: str) -> Optional[ExamSession]:
        session = self.store.exam_sessions.get((exam_id, student_id))
        return session.model_copy(deep=True) if session else None

    def start_session(self, exam_id: str, student_id: str) -> ApiResponse:
        """
        Start (or resume) a student's attempt.

        Creates the session in-progress when none exists and promotes a
        not-started one. In-progress and submitted sessions come back as-is.
        """
        key = (exam_id, student_id)
        with self.store.lock:
            session = self.store.exam_sessions.get(key)
            if session is None:
                session = ExamSession(
                    id=new_id("sess"),
                    exam_id=exam_id,
                    student_id=student_id,
                    status=SessionStatus.IN_PROGRESS,
                    progress=0,
                    start_time=utcnow(),
                    answers={},
                )
                self.store.exam_sessions[key] = session
                logger.info("▶️ Session started: exam=%s student=%s", exam_id, student_id)
            elif session.status == SessionStatus.NOT_STARTED:
                session.status = SessionStatus.IN_PROGRESS
                session.start_time = utcnow()
                logger.info("▶️ Session promoted: exam=%s student=%s", exam_id, student_id)
            return success(session.model_copy(deep=True))

    def update_progress(
        self,
        exam_id: str,
        student_id: str,
        progress: int,
        answers: Optional[Dict[str, str]] = None,
    ) -> ApiResponse:
        """Set progress and, when given, replace the whole answers map."""
        with self.store.lock:
            session = self.store.exam_sessions.get((exam_id, student_id))
            if session is None or session.status == SessionStatus.SUBMITTED:
                return failure("Session not found", False)
            session.progress = progress
            if answers is not None:
                session.answers = dict(answers)
        return success(True)

    def submit(
        self,
        student_id: str,
        answers: Dict[str, str],
        score: float,
        exam_id: Optional[str] = None,
    ) -> ApiResponse:
        """
        Submit an attempt with a caller-computed score.

        Without exam_id the first active exam is used.
        """
        with self.store.lock:
            exam = self._resolve_exam(exam_id)
            if exam is None:
                return failure("No active exam found", False)

            key = (exam.id, student_id)
            now = utcnow()
            session = self.store.exam_sessions.get(key)
            if session is None:
                session = ExamSession(
                    id=new_id("sess"),
                    exam_id=exam.id,
                    student_id=student_id,
                    start_time=now,
                )
                self.store.exam_sessions[key] = session

            session.status = SessionStatus.SUBMITTED
            session.progress = 100
            session.score = score
            session.end_time = now
            session.answers = dict(answers)

        logger.info("✅ Session submitted: exam=%s student=%s score=%s", exam.id, student_id, score)
        return success(True)

    def reset(self, exam_id: str, student_id: str) -> ApiResponse:
        with self.store.lock:
            if self.store.exam_sessions.pop((exam_id, student_id), None) is None:
                return failure("Session not found", False)
        logger.info("↩️ Session reset: exam=%s student=%s", exam_id, student_id)
        return success(True)

    def _resolve_exam(self, exam_id: Optional[str]) -> Optional[ActiveExam]:
        if exam_id:
            return self.store.exams.get(exam_id)
        return next((e for e in self.store.exams.values() if e.status == ExamStatus.ACTIVE), None)
