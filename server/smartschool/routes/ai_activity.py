from typing import Optional

from fastapi import APIRouter, Depends, Query

from smartschool.dependencies import get_app_service
from smartschool.schemas import AIActivityRequest
from smartschool.services.app_service import AppService

router = APIRouter(prefix="/ai-activity", tags=["AI Activity"])


@router.get("")
async def list_activity(
    limit: int = 25,
    scope: Optional[str] = None,
    status: Optional[str] = None,
    actor_id: Optional[str] = Query(None, alias="actorId"),
    school_id: Optional[str] = Query(None, alias="schoolId"),
    service: AppService = Depends(get_app_service),
):
    return service.get_ai_activities(limit, scope=scope, status=status, actor_id=actor_id, school_id=school_id)


@router.post("")
async def log_activity(request: AIActivityRequest, service: AppService = Depends(get_app_service)):
    return service.log_ai_activity(request)
