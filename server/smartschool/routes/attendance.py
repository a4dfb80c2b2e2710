from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from smartschool.dependencies import get_app_service
from smartschool.schemas import AttendanceInput
from smartschool.services.app_service import AppService

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.get("")
async def get_attendance(
    on: date = Query(..., alias="date"),
    grade: Optional[str] = None,
    service: AppService = Depends(get_app_service),
):
    return service.get_attendance(on, grade)


@router.post("")
async def mark_attendance(updates: List[AttendanceInput], service: AppService = Depends(get_app_service)):
    return service.mark_attendance(updates)
