from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import health
from app.core.config import settings
from app.core.logging import configure_logging, get_logger
from app.core.monitoring import configure_error_monitoring
from app.core.observability import configure_observability
from app.db.session import init_db, session_scope
from app.domains.auth.router import router as auth_router
from app.domains.calendar.router import router as calendar_router
from app.domains.export.router import router as export_router
from app.domains.orders.router import router as orders_router
from app.domains.reporting.router import router as reporting_router
from app.domains.time_entries.router import router as entries_router
from app.domains.users.router import router as users_router
from app.seed.seed_data import seed_users
from timerecording.errors import PersistenceError, ValidationError

configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.auto_init_db:
        init_db()
        with session_scope() as db:
            seed_users(db)
    logger.info("startup_complete", env=settings.env, version=settings.app_version)
    yield
    logger.info("shutdown_complete")


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin).rstrip("/") for origin in settings.cors_origins] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, reason=str(exc))
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(PersistenceError)
def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("persistence_failed", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"detail": "System error"})


app.include_router(health.router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(calendar_router)
app.include_router(entries_router)
app.include_router(orders_router)
app.include_router(reporting_router)
app.include_router(export_router)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": f"{settings.app_name} running", "environment": settings.env, "version": settings.app_version}
