from fastapi import APIRouter, Depends

from smartschool.dependencies import get_app_service
from smartschool.schemas import CreateSchoolRequest, SchoolStatusRequest
from smartschool.services.app_service import AppService

router = APIRouter(prefix="/schools", tags=["Schools"])


@router.get("")
async def list_schools(service: AppService = Depends(get_app_service)):
    return service.get_schools()


@router.post("")
async def create_school(request: CreateSchoolRequest, service: AppService = Depends(get_app_service)):
    return service.create_school(request)


@router.delete("/{school_id}")
async def delete_school(school_id: str, service: AppService = Depends(get_app_service)):
    return service.delete_school(school_id)


@router.patch("/{school_id}/status")
async def update_school_status(
    school_id: str,
    request: SchoolStatusRequest,
    service: AppService = Depends(get_app_service),
):
    return service.update_school_status(school_id, request.status)
