from typing import Optional

from fastapi import APIRouter, Depends

from smartschool.dependencies import get_app_service
from smartschool.models import UserRole
from smartschool.schemas import CreateAnnouncementRequest
from smartschool.services.app_service import AppService

router = APIRouter(prefix="/announcements", tags=["Announcements"])


@router.get("")
async def list_announcements(role: Optional[UserRole] = None, service: AppService = Depends(get_app_service)):
    return service.get_announcements(role)


@router.post("")
async def create_announcement(request: CreateAnnouncementRequest, service: AppService = Depends(get_app_service)):
    return service.create_announcement(request.title, request.message, request.target_audience, request.source)
