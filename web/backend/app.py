"""
FastAPI app for the guild member count service.

Exposes:
- GET /api/membercount: member/online counts for the configured guild
- /api/health/*: operational probes
"""

from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.config_loader import ConfigLoader
from utils.logging import get_logger, setup_logging
from web.backend.core.dependencies import initialize_services, shutdown_services
from web.backend.core.request_id import RequestIDMiddleware
from web.backend.routes import health, membercount

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Load environment variables from project root .env file
env_path = _PROJECT_ROOT / ".env"
load_dotenv(env_path)

ConfigLoader.load_config()
setup_logging()
logger = get_logger(__name__)
logger.info("Backend environment loaded from %s", env_path)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup services on app startup/shutdown."""
    await initialize_services()
    yield
    await shutdown_services()


app = FastAPI(
    title="Guild Member Count API",
    description="Discord guild member and presence counts with caching",
    version="1.0.0",
    lifespan=lifespan,
)

# Add request ID middleware for correlation tracking
app.add_middleware(RequestIDMiddleware)

app.include_router(membercount.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "guild-membercount"}


@app.exception_handler(405)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Return the member count 405 body for methods the route does not register."""
    if request.url.path.rstrip("/") == membercount.MEMBERCOUNT_PATH:
        return membercount.method_not_allowed()
    return await http_exception_handler(request, exc)
