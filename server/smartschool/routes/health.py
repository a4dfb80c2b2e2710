from fastapi import APIRouter, Depends

from smartschool.dependencies import get_app_service
from smartschool.services.app_service import AppService

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(service: AppService = Depends(get_app_service)):
    """Health check endpoint"""
    return service.health()
