# taskmanager/backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskmanager.backend.core.config import get_settings
from taskmanager.backend.core.errors import register_exception_handlers
from taskmanager.backend.core.logging_config import setup_logging
from taskmanager.backend.db.session import create_all_tables

# routers
from taskmanager.backend.routers import health, task

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.db_auto_create:
        create_all_tables()
        logger.info("Tables ensured")
    yield


app = FastAPI(
    title="TaskManager API",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(task.router, prefix=settings.api_prefix)
