from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobcost.api.domains.catalog.router import router as catalog_router
from jobcost.api.domains.checkins.router import router as checkins_router
from jobcost.api.domains.dashboard.router import router as dashboard_router
from jobcost.api.domains.projects.router import router as projects_router
from jobcost.api.domains.tasks.router import router as tasks_router
from jobcost.api.routes import health
from jobcost.checkin import CheckInLog
from jobcost.core.config import Settings, get_settings
from jobcost.core.logging import configure_logging, get_logger
from jobcost.core.monitoring import configure_error_monitoring
from jobcost.engine import DashboardEngine
from jobcost.errors import ProjectNotFoundError, UnknownReferenceError, ValidationError
from jobcost.mutations import MutationGateway
from jobcost.seed import demo_store
from jobcost.storage import RecordStore

logger = get_logger(__name__)


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def load_store(settings: Settings) -> RecordStore:
    if settings.dataset_path:
        return RecordStore.from_file(settings.dataset_path)
    return demo_store()


def create_app(settings: Settings | None = None, store: RecordStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    configure_error_monitoring(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "startup_complete",
            env=settings.env,
            projects=len(app.state.store.projects),
            records=app.state.store.record_count(),
        )
        yield

    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store if store is not None else load_store(settings)
    app.state.engine = DashboardEngine(app.state.store)
    app.state.gateway = MutationGateway(app.state.store, engine=app.state.engine)
    app.state.checkins = CheckInLog(app.state.store.workers.keys())

    @app.exception_handler(ProjectNotFoundError)
    async def project_not_found(request: Request, exc: ProjectNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(UnknownReferenceError)
    async def unknown_reference(request: Request, exc: UnknownReferenceError) -> JSONResponse:
        if exc.kind == "task":
            return _error(status.HTTP_404_NOT_FOUND, exc)
        return _error(422, exc)

    @app.exception_handler(ValidationError)
    async def invalid_input(request: Request, exc: ValidationError) -> JSONResponse:
        logger.info("mutation_rejected", path=request.url.path, reason=str(exc))
        return _error(422, exc)

    app.include_router(health.router)
    app.include_router(projects_router)
    app.include_router(tasks_router)
    app.include_router(catalog_router)
    app.include_router(dashboard_router)
    app.include_router(checkins_router)

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "Job cost dashboard API running", "environment": settings.env}

    return app


app = create_app()
