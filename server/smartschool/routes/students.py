from typing import Optional

from fastapi import APIRouter, Depends, Query

from smartschool.dependencies import get_app_service
from smartschool.schemas import AssignClassMasterRequest, CreateStudentRequest, StudentUpdate
from smartschool.services.app_service import AppService

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("")
async def list_students(
    school_id: Optional[str] = Query(None, alias="schoolId"),
    service: AppService = Depends(get_app_service),
):
    return service.get_students(school_id)


@router.post("")
async def create_student(request: CreateStudentRequest, service: AppService = Depends(get_app_service)):
    return service.create_student(request)


# Registered before /{student_id} so "form-masters" is not taken as an id
@router.get("/form-masters")
async def list_form_masters(service: AppService = Depends(get_app_service)):
    return service.get_class_masters()


@router.post("/form-masters")
async def assign_form_master(request: AssignClassMasterRequest, service: AppService = Depends(get_app_service)):
    return service.assign_class_master(request.grade, request.teacher_id)


@router.put("/{student_id}")
async def update_student(student_id: str, updates: StudentUpdate, service: AppService = Depends(get_app_service)):
    return service.update_student(student_id, updates)


@router.delete("/{student_id}")
async def delete_student(student_id: str, service: AppService = Depends(get_app_service)):
    return service.delete_student(student_id)
