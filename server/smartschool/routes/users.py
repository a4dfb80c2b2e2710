from fastapi import APIRouter, Depends

from smartschool.dependencies import get_app_service
from smartschool.schemas import CreateTeacherRequest, UserUpdate
from smartschool.services.app_service import AppService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("")
async def list_users(service: AppService = Depends(get_app_service)):
    """Staff plus students (as STUDENT users)."""
    return service.get_all_users()


@router.post("")
async def create_staff(request: CreateTeacherRequest, service: AppService = Depends(get_app_service)):
    return service.create_teacher(request)


@router.put("/{user_id}")
async def update_user(user_id: str, updates: UserUpdate, service: AppService = Depends(get_app_service)):
    return service.update_user_profile(user_id, updates)


@router.delete("/{user_id}")
async def delete_user(user_id: str, service: AppService = Depends(get_app_service)):
    return service.delete_user(user_id)
