from typing import Optional

from fastapi import APIRouter, Depends, Query

from smartschool.dependencies import get_app_service
from smartschool.schemas import CreateSubjectRequest, SubjectUpdate
from smartschool.services.app_service import AppService

router = APIRouter(prefix="/subjects", tags=["Subjects"])


@router.get("")
async def list_subjects(
    school_id: Optional[str] = Query(None, alias="schoolId"),
    service: AppService = Depends(get_app_service),
):
    return service.get_subjects(school_id)


@router.post("")
async def create_subject(request: CreateSubjectRequest, service: AppService = Depends(get_app_service)):
    return service.create_subject(request.name, request.teacher_id)


@router.put("/{subject_id}")
async def update_subject(subject_id: str, updates: SubjectUpdate, service: AppService = Depends(get_app_service)):
    return service.update_subject(subject_id, updates)
