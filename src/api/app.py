from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel
from .error import ERROR_STATUS, ClientError, ServerError
from src.adapter.services.event_sink import LoggingEventSink
from src.adapter.services.scheduler import install_maintenance_jobs
from src.adapter.services.store_errors import STORE_UNAVAILABLE, classify_store_error
from src.app.services.presence_tracker import PresenceTracker
from src.domain.errors import LifecycleError
import logging

logger = logging.getLogger(__name__)


def error_body(code: str, message: str, details: dict = None) -> dict:
    error_dict = {"code": code, "message": message}
    if details:
        error_dict["details"] = details
    return {"error": error_dict}


async def handle_client_error(request: Request, exc: ClientError):
    error = exc.base_error
    logger.warning(f"Client error: {error.code} {error.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(error.code, error.message, error.details),
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(exc.base_error.code, "Internal server error"),
    )


async def handle_lifecycle_error(request: Request, exc: LifecycleError):
    status_code = ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST)
    logger.warning(f"Lifecycle error: {exc.code} {exc.message}")
    return JSONResponse(status_code=status_code, content=error_body(exc.code, exc.message))


async def handle_store_error(request: Request, exc: SQLAlchemyError):
    error = classify_store_error(exc)
    logger.error(f"Store error ({error.reason}): {type(exc).__name__}")
    status_code = (
        status.HTTP_503_SERVICE_UNAVAILABLE
        if error.code == STORE_UNAVAILABLE
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return JSONResponse(status_code=status_code, content=error_body(error.code, error.message))


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", "Internal server error"),
    )


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from src.depends import AsyncSessionLocal, engine

        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        scheduler = AsyncIOScheduler()
        install_maintenance_jobs(
            scheduler,
            AsyncSessionLocal,
            app.state.presence,
            app.state.events,
            purge_interval_minutes=ApplicationConfig.PURGE_INTERVAL_MINUTES,
            retention_overrides=ApplicationConfig.RETENTION_DAYS,
            enable_purge=ApplicationConfig.ENABLE_PURGE_SCHEDULER,
        )
        scheduler.start()
        logger.info("Application started")
        yield
        scheduler.shutdown(wait=False)
        app.state.presence.clear()
        logger.info("Application stopped")

    app = FastAPI(title="Task Manager API", version="0.1.0", lifespan=lifespan)

    # Process-wide collaborators, shared by every request
    app.state.presence = PresenceTracker(auto_away_minutes=ApplicationConfig.AUTO_AWAY_MINUTES)
    app.state.events = LoggingEventSink()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, organizations, presence, resources

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(organizations.router, prefix=prefix, tags=["Organizations"])
    app.include_router(presence.router, prefix=prefix, tags=["Presence"])
    for router in resources.routers():
        app.include_router(router, prefix=prefix)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(LifecycleError, handle_lifecycle_error)
    app.add_exception_handler(SQLAlchemyError, handle_store_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
