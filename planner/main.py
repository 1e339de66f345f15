import asyncio
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from planner.api.v1.endpoints.auth import router as auth_router
from planner.api.v1.endpoints.tasks import router as task_router
from planner.api.v1.endpoints.feedback import router as feedback_router
from planner.api.v1.endpoints.notifications import router as notification_router
from planner.api.v1.endpoints.calendar import router as calendar_router
from planner.constants.constants import StoreStatus
from planner.core.database import StoreUnavailableError, session_manager
from planner.core.limiter import limiter
from planner.utils.schedulers.tasknotifications import task_notification_scheduler

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import logging
from contextlib import asynccontextmanager
from planner.core.config import settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

scheduler_tasks = []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Async context manager for app lifespan events"""

    try:
        logger.info("🚀 Starting Daily Planner application...")

        logger.info("🔌 Initializing database connection pool...")
        await session_manager.init()
        logger.info(f"✅ Store status: {session_manager.status.value}")

        if settings.NOTIFICATION_SWEEP_ENABLED:
            logger.info("📅 Starting task notification scheduler...")
            task = asyncio.create_task(task_notification_scheduler())
            scheduler_tasks.append(task)

    except Exception as e:
        logger.critical(f"🔥 Application startup failed: {str(e)}")
        raise

    try:
        logger.info("🏁 Daily Planner application startup complete")
        yield
    finally:
        logger.info("🛑 Beginning application shutdown...")

        for task in scheduler_tasks:
            if not task.done():
                logger.info("⏹️ Stopping scheduler...")
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    logger.info("✅ Scheduler stopped")
        scheduler_tasks.clear()

        logger.info("🔌 Closing database connections...")
        await session_manager.close()
        logger.info("👋 Application shutdown complete")


app = FastAPI(
    title="Daily Planner API",
    description="Personal task planner: dated tasks, reminders and feedback",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET_KEY,
    max_age=3600,
    same_site="none" if settings.ENVIRONMENT == "production" else "lax",
    https_only=True if settings.ENVIRONMENT == "production" else False
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Request: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(f"Response status: {response.status_code}")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation Error: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Strip the non-serialisable `ctx`/`url` entries pydantic attaches to errors."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    logger.warning(f"Store unavailable for {request.method} {request.url.path}")
    return JSONResponse(
        status_code=503,
        content={"detail": str(exc)},
    )


@app.get("/", tags=["Health Check"])
async def health_check():
    if session_manager.status is StoreStatus.unconfigured:
        return {
            "status": "degraded",
            "service": "Daily Planner API",
            "database": StoreStatus.unconfigured.value,
            "schedulers_running": len([t for t in scheduler_tasks if not t.done()])
        }
    try:
        async with session_manager.get_session() as db:
            await db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "service": "Daily Planner API",
            "database": "connected",
            "schedulers_running": len([t for t in scheduler_tasks if not t.done()])
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return {
            "status": "unhealthy",
            "service": "Daily Planner API",
            "database": "disconnected",
            "error": str(e)
        }


app.include_router(auth_router, prefix="/api/v1", tags=["Authentication"])
app.include_router(task_router, prefix="/api/v1", tags=["Tasks"])
app.include_router(feedback_router, prefix="/api/v1", tags=["Feedback"])
app.include_router(notification_router, prefix="/api/v1", tags=["Notifications"])
app.include_router(calendar_router, prefix="/api/v1", tags=["Calendar"])

logger.info(f"✅ Loaded {len(app.routes)} routes")
