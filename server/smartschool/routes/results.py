from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from smartschool.dependencies import get_app_service
from smartschool.schemas import ResultInput
from smartschool.services.app_service import AppService

router = APIRouter(prefix="/results", tags=["Results"])


@router.get("")
async def list_results(
    student_id: Optional[str] = Query(None, alias="studentId"),
    service: AppService = Depends(get_app_service),
):
    return service.get_results(student_id)


@router.post("/publish")
async def publish_results(results: List[ResultInput], service: AppService = Depends(get_app_service)):
    return service.publish_results(results)
