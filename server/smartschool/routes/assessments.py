from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from smartschool.dependencies import get_app_service
from smartschool.schemas import AssessmentInput
from smartschool.services.app_service import AppService

router = APIRouter(prefix="/assessments", tags=["Assessments"])


@router.get("")
async def list_assessments(
    subject_id: Optional[str] = Query(None, alias="subjectId"),
    term: Optional[str] = None,
    student_id: Optional[str] = Query(None, alias="studentId"),
    service: AppService = Depends(get_app_service),
):
    return service.get_assessments(subject_id, term, student_id)


@router.post("/save")
async def save_assessments(assessments: List[AssessmentInput], service: AppService = Depends(get_app_service)):
    return service.save_assessments(assessments)
