"""Maze Runner API - Main FastAPI Application."""

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from maze_runner.config import get_settings
from maze_runner.api.routes import explore, maze

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("maze_runner")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with a short ID, plus the search summary for explorations."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        start_time = time.perf_counter()

        request.state.request_id = request_id
        logger.info(f"[{request_id}] --> {request.method} {request.url.path}")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"[{request_id}] <-- ERROR: {type(e).__name__}: {e} "
                f"({(time.perf_counter() - start_time) * 1000:.2f}ms)"
            )
            raise

        total_ms = (time.perf_counter() - start_time) * 1000
        strategy = response.headers.get(explore.STRATEGY_HEADER)
        if strategy is not None:
            logger.info(
                f"[{request_id}] <-- {response.status_code} {strategy} "
                f"found={response.headers.get(explore.OUTCOME_HEADER)} "
                f"search={response.headers.get(explore.ELAPSED_HEADER)}ms "
                f"total={total_ms:.2f}ms"
            )
        else:
            logger.info(f"[{request_id}] <-- {response.status_code} ({total_ms:.2f}ms)")

        response.headers["X-Request-ID"] = request_id
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        f"Starting Maze Runner API (strategy={settings.strategy}, "
        f"workers={settings.worker_count})"
    )
    yield
    logger.info("Shutting down Maze Runner API...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Concurrent maze exploration service",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


# Include routers
app.include_router(explore.router, prefix="/v1")
app.include_router(maze.router, prefix="/v1")
