from typing import Optional

from fastapi import APIRouter, Depends, Query

from smartschool.dependencies import get_proctoring_service
from smartschool.schemas import ProctorFrameRequest
from smartschool.services.proctoring_service import ProctoringService

router = APIRouter(prefix="/proctoring", tags=["Proctoring"])


@router.post("/frame")
async def record_frame(request: ProctorFrameRequest, service: ProctoringService = Depends(get_proctoring_service)):
    """Analyse one webcam frame; anomalies are stored as alerts."""
    return await service.record_frame(request.exam_id, request.student_id, request.frame_data)


@router.get("/alerts")
async def list_alerts(
    exam_id: Optional[str] = Query(None, alias="examId"),
    service: ProctoringService = Depends(get_proctoring_service),
):
    return service.get_alerts(exam_id)
