from fastapi import APIRouter, Depends

from smartschool.dependencies import get_grading_service
from smartschool.schemas import GradeEssayRequest, success
from smartschool.services.grading_service import GradingService

router = APIRouter(prefix="/grading", tags=["Grading"])


@router.post("/essay")
async def grade_essay(request: GradeEssayRequest, grading: GradingService = Depends(get_grading_service)):
    """
    Grade one essay answer.

    Always succeeds; if the model cannot be reached the answer gets half marks.
    """
    result = await grading.grade_essay(request.question_text, request.essay, request.rubric, request.max_points)
    return success(result)
