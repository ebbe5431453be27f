"""Main FastAPI application entry point"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app
import logging

from scafflow.api.auth import router as auth_router
from scafflow.api.projects import router as projects_router
from scafflow.api.tasks import router as tasks_router
from scafflow.api.budget_items import router as budget_items_router
from scafflow.api.change_orders import router as change_orders_router
from scafflow.api.progress_draws import router as progress_draws_router
from scafflow.api.safety_incidents import router as safety_incidents_router
from scafflow.api.admin import router as admin_router
from scafflow.api.health import router as health_router
from scafflow.api.errors import register_exception_handlers
from scafflow.config import settings
from scafflow.database import dispose_engine
from scafflow.services.redis_service import RedisService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting Scafflow API ({settings.environment})")
    yield
    logger.info("Shutting down Scafflow API")
    await RedisService.close()
    await dispose_engine()


app = FastAPI(
    title="Scafflow API",
    description="Construction project management API with ownership-scoped access",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)

register_exception_handlers(app)

# Include routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(projects_router)
app.include_router(tasks_router)
app.include_router(budget_items_router)
app.include_router(change_orders_router)
app.include_router(progress_draws_router)
app.include_router(safety_incidents_router)
app.include_router(admin_router)

# Prometheus scrape endpoint
app.mount("/metrics", make_asgi_app())


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Scafflow API",
        "version": "1.0.0",
        "status": "running",
    }
