from fastapi import APIRouter, Depends

from smartschool.dependencies import get_app_service
from smartschool.schemas import ProfileUpdateRequest, VerifyStudentRequest
from smartschool.services.app_service import AppService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/student")
@router.post("/verify-student")
async def verify_student(request: VerifyStudentRequest, service: AppService = Depends(get_app_service)):
    """Student login with school code + access code."""
    return service.verify_student(request.school_code, request.student_code)


@router.put("/profile")
async def update_profile(request: ProfileUpdateRequest, service: AppService = Depends(get_app_service)):
    return service.update_user_profile(request.user_id, request.updates)
