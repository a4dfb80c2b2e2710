from fastapi import APIRouter, Depends

from smartschool.dependencies import get_exam_manager, get_grading_service
from smartschool.schemas import (
    ExamBuilderRequest,
    ExamStatusRequest,
    ScoreAnswersRequest,
    SessionProgressRequest,
    StudentRequest,
    SubmitExamRequest,
    success,
)
from smartschool.services.exam_lifecycle import ExamLifecycleManager
from smartschool.services.grading_service import GradingService
from smartschool.services.scoring import calculate_score

router = APIRouter(prefix="/exams", tags=["Exams"])


@router.get("")
async def list_exams(manager: ExamLifecycleManager = Depends(get_exam_manager)):
    return manager.get_exams()


@router.get("/available")
async def list_available_exams(manager: ExamLifecycleManager = Depends(get_exam_manager)):
    """Exams students can sit right now."""
    return manager.list_available()


@router.post("/builder")
async def save_exam(request: ExamBuilderRequest, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    """Create an exam, or replace the questions of an existing one."""
    return manager.create_or_update_exam(request.questions, request.title, request.exam_id, request.teacher_id)


@router.post("/submit")
async def submit_active_exam(request: SubmitExamRequest, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    """Submit against request.exam_id, or the first active exam when it is omitted."""
    return manager.submit(request.student_id, request.answers, request.score, request.exam_id)


@router.get("/{exam_id}")
async def get_exam(exam_id: str, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    return manager.get_exam(exam_id)


@router.patch("/{exam_id}/status")
async def set_exam_status(
    exam_id: str,
    request: ExamStatusRequest,
    manager: ExamLifecycleManager = Depends(get_exam_manager),
):
    return manager.set_status(exam_id, request.status)


@router.get("/{exam_id}/sessions")
async def list_sessions(exam_id: str, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    return manager.get_sessions(exam_id)


@router.post("/{exam_id}/sessions/start")
async def start_session(
    exam_id: str,
    request: StudentRequest,
    manager: ExamLifecycleManager = Depends(get_exam_manager),
):
    return manager.start_session(exam_id, request.student_id)


@router.post("/{exam_id}/sessions/progress")
async def update_progress(
    exam_id: str,
    request: SessionProgressRequest,
    manager: ExamLifecycleManager = Depends(get_exam_manager),
):
    return manager.update_progress(exam_id, request.student_id, request.progress, request.answers)


@router.post("/{exam_id}/sessions/submit")
async def submit_exam(
    exam_id: str,
    request: SubmitExamRequest,
    manager: ExamLifecycleManager = Depends(get_exam_manager),
):
    return manager.submit(request.student_id, request.answers, request.score, exam_id)


@router.post("/{exam_id}/sessions/reset")
async def reset_session(
    exam_id: str,
    request: StudentRequest,
    manager: ExamLifecycleManager = Depends(get_exam_manager),
):
    return manager.reset(exam_id, request.student_id)


@router.post("/{exam_id}/sessions/score")
async def score_answers(
    exam_id: str,
    request: ScoreAnswersRequest,
    manager: ExamLifecycleManager = Depends(get_exam_manager),
    grading: GradingService = Depends(get_grading_service),
):
    """Compute the score for a set of answers without submitting them."""
    found = manager.get_exam(exam_id)
    if not found.ok:
        return found
    exam = found.data
    score = await calculate_score(exam, request.answers, grading)
    return success({"score": score, "maxScore": sum(q.points for q in exam.questions)})
