"""
Service container and FastAPI dependency getters.

One `Services` instance is built per app by `create_app` and kept on
`app.state`; routes reach it through `Depends(...)`.
"""
from dataclasses import dataclass

from fastapi import Request

from smartschool.services.app_service import AppService
from smartschool.services.exam_lifecycle import ExamLifecycleManager
from smartschool.services.grading_service import GradingService
from smartschool.services.live_class_service import LiveClassService
from smartschool.services.proctoring_service import ProctoringService
from smartschool.storage import EntityStore


@dataclass
class Services:
    store: EntityStore
    app: AppService
    exams: ExamLifecycleManager
    live_classes: LiveClassService
    grading: GradingService
    proctoring: ProctoringService


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_app_service(request: Request) -> AppService:
    return get_services(request).app


def get_exam_manager(request: Request) -> ExamLifecycleManager:
    return get_services(request).exams


def get_live_class_service(request: Request) -> LiveClassService:
    return get_services(request).live_classes


def get_grading_service(request: Request) -> GradingService:
    return get_services(request).grading


def get_proctoring_service(request: Request) -> ProctoringService:
    return get_services(request).proctoring
