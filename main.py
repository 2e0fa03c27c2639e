"""
FastAPI Application Entry Point
"""
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mycore import __version__
from mycore.core.config import settings
from mycore.core.exceptions import NotConfiguredError
from mycore.routes import auth, habits, health, tasks, users
from mycore.services.scheduler import start_scheduler, stop_scheduler

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Silence noisy third-party loggers
logging.getLogger('httpx').setLevel(logging.WARNING)
logging.getLogger('httpcore').setLevel(logging.WARNING)
logging.getLogger('apscheduler.scheduler').setLevel(logging.WARNING)
logging.getLogger('apscheduler.executors').setLevel(logging.WARNING)
logging.getLogger('apscheduler.executors.default').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for startup/shutdown events
    """
    # Startup
    if settings.ENABLE_SCHEDULER:
        try:
            start_scheduler()
            logger.info("✓ Reminder scheduler started")
        except Exception as e:
            logger.warning(f"Could not start scheduler: {e}")

    yield

    # Shutdown
    if settings.ENABLE_SCHEDULER:
        try:
            stop_scheduler()
            logger.info("✓ Reminder scheduler stopped")
        except Exception as e:
            logger.warning(f"Error stopping scheduler: {e}")


# Initialize FastAPI app with lifespan
app = FastAPI(
    title="myCORE API",
    version=__version__,
    lifespan=lifespan
)


@app.exception_handler(NotConfiguredError)
async def not_configured_handler(request: Request, exc: NotConfiguredError):
    logger.error(f"Backend not configured: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


# Register routes
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(habits.router)
app.include_router(tasks.router)
