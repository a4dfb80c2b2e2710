import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from smartschool.config import Settings, settings as default_settings
from smartschool.dependencies import Services
from smartschool.routes import ROUTERS
from smartschool.seed import seed_store
from smartschool.services.app_service import AppService
from smartschool.services.exam_lifecycle import ExamLifecycleManager
from smartschool.services.grading_service import GradingService
from smartschool.services.live_class_service import LiveClassService
from smartschool.services.proctoring_service import ProctoringService
from smartschool.storage import EntityStore

logger = logging.getLogger(__name__)


def _envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "data": None, "message": message})


def _first_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    location = ".".join(str(part) for part in error.get("loc", ())[1:])
    return f"{location}: {error['msg']}" if location else error["msg"]


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _envelope(422, _first_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return _envelope(404, "Route not found")
        return _envelope(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("❌ Unhandled error on %s %s", request.method, request.url.path)
        return _envelope(500, str(exc) or "Internal server error")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[EntityStore] = None,
    grading: Optional[GradingService] = None,
    proctoring: Optional[ProctoringService] = None,
) -> FastAPI:
    """Build the API with its own store and services."""
    settings = settings or default_settings
    store = store if store is not None else EntityStore()

    if settings.seed_on_startup:
        seed_store(store, settings.mock_student_count, settings.mock_seed)

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        debug=settings.debug,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.services = Services(
        store=store,
        app=AppService(store),
        exams=ExamLifecycleManager(store, settings.default_exam_duration),
        live_classes=LiveClassService(store),
        grading=grading or GradingService(
            api_key=settings.openai_api_key,
            model=settings.grading_model,
            timeout=settings.oracle_timeout_seconds,
        ),
        proctoring=proctoring or ProctoringService(
            store,
            api_key=settings.openai_api_key,
            model=settings.proctoring_model,
            timeout=settings.oracle_timeout_seconds,
        ),
    )

    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        logger.info("🚀 %s is starting...", settings.app_name)
        logger.info("🤖 AI oracles: %s", "OpenAI" if settings.openai_api_key else "fallback only (no API key)")

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "status": "running",
        }

    for router in ROUTERS:
        app.include_router(router, prefix="/api")

    return app


logging.basicConfig(level=default_settings.log_level)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("smartschool.main:app", host=default_settings.host, port=default_settings.port)
