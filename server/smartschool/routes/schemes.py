from fastapi import APIRouter, Depends

from smartschool.dependencies import get_app_service
from smartschool.schemas import UploadSchemeRequest
from smartschool.services.app_service import AppService

router = APIRouter(prefix="/schemes", tags=["Schemes of Work"])


@router.get("")
async def list_schemes(service: AppService = Depends(get_app_service)):
    return service.get_schemes()


@router.post("")
async def upload_scheme(request: UploadSchemeRequest, service: AppService = Depends(get_app_service)):
    return service.upload_scheme(request.file_name, request.subject_name, request.term)
