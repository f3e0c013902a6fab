#!/usr/bin/env python3
"""
Billtrack - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Runs the API server

All business logic is in the modules, following black box principles.
This is the only place that reads the clock; core modules receive "now".
"""

import logging
import logging.config as log_config
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import List, Optional

import redis.asyncio as redis
import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from billtrack import __version__
from billtrack.logging_config import get_logging_config

# Import modules through their black box interfaces
from billtrack.modules.api import CreateSessionRequest, ErrorResponse, SessionResponse
from billtrack.modules.config import get_config
from billtrack.modules.session import SessionModule, SessionStoreError
from billtrack.modules.storage import StorageModule
from billtrack.modules.view import to_view

# Get configuration
config = get_config()

log_config.dictConfig(get_logging_config(config.get("log_level")))
logger = logging.getLogger(__name__)

# Module instances (initialized at startup)
storage: Optional[StorageModule] = None
session_module: Optional[SessionModule] = None
redis_client: Optional[redis.Redis] = None


def utcnow() -> datetime:
    """Current time handed to the core modules."""
    return datetime.now(UTC)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - initialize and cleanup resources.
    """
    global storage, session_module, redis_client

    # Startup
    logger.info("Starting Billtrack API...")

    storage = StorageModule(config.redis_url, password=config.get("redis_password"))
    redis_client = await storage.connect()
    session_module = SessionModule(redis_client)

    logger.info("Billtrack API started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Billtrack API...")

    if storage:
        await storage.disconnect()
    redis_client = None
    session_module = None
    logger.info("Billtrack API shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Billtrack API",
    description="Billtrack - Billable work session tracking",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("cors_origins"),
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type"],
)

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Session not found"}}


def require_session_module() -> SessionModule:
    if not session_module:
        raise HTTPException(503, "Service not initialized")
    return session_module


# Session Endpoints


@app.get("/sessions", response_model=List[SessionResponse], response_model_exclude_none=True)
async def list_sessions():
    """
    List every session, running and stopped.

    Returns:
        200: Sessions in creation order
    """
    sessions = await require_session_module().list_sessions()
    now = utcnow()
    return [to_view(session, now) for session in sessions]


@app.post(
    "/sessions",
    response_model=SessionResponse,
    response_model_exclude_none=True,
    status_code=201,
)
async def create_session(request: CreateSessionRequest):
    """
    Start a new work session.

    Returns:
        201: Session created
        422: Invalid title, category or rate
    """
    module = require_session_module()

    now = utcnow()
    session = await module.create_session(
        title=request.title,
        category=request.category,
        rate=request.rate,
        now=now,
    )
    return to_view(session, now)


@app.get(
    "/sessions/{session_id}",
    response_model=SessionResponse,
    response_model_exclude_none=True,
    responses=NOT_FOUND,
)
async def get_session(session_id: str):
    """
    Get a session with its current amount owed.

    Returns:
        200: Session details
        404: Session not found
    """
    session = await require_session_module().get_session(session_id)
    if not session:
        raise HTTPException(404, "session not found")

    return to_view(session, utcnow())


@app.patch(
    "/sessions/{session_id}/stop",
    response_model=SessionResponse,
    response_model_exclude_none=True,
    responses=NOT_FOUND,
)
async def stop_session(session_id: str):
    """
    Stop a running session. Stopping a stopped session returns it unchanged.

    Returns:
        200: Stopped session
        404: Session not found
    """
    module = require_session_module()

    now = utcnow()
    result = await module.stop_session(session_id, now=now)
    if result is None:
        raise HTTPException(404, "session not found")

    session, stopped_now = result
    if not stopped_now:
        logger.info(f"Stop request for already stopped session {session_id}")

    return to_view(session, now)


# Health/Monitoring Endpoints


@app.get("/healthz")
async def healthz():
    """
    Minimal health check endpoint for readiness/liveness probes.

    Returns:
        200: Service is running
    """
    return {"status": "ok"}


@app.get("/health")
async def health_check():
    """
    Health check including the Redis connection.

    Returns:
        200: Service healthy
        503: Service unhealthy
    """
    try:
        if redis_client:
            await redis_client.ping()
            redis_status = "connected"
        else:
            redis_status = "disconnected"

        if redis_status == "connected" and session_module:
            return {"status": "healthy", "redis": redis_status, "version": __version__}

        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "redis": redis_status, "version": __version__},
        )
    except redis.RedisError as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "unhealthy", "error": str(e)})


# Error handlers


@app.exception_handler(HTTPException)
async def http_error_handler(request, exc):
    """Render HTTP errors as {"error": ...}."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request, exc):
    """Report invalid bodies without echoing the rejected values, which may not be valid JSON."""
    errors = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": errors})


@app.exception_handler(redis.ConnectionError)
async def redis_error_handler(request, exc):
    """Handle Redis connection errors."""
    logger.error(f"Redis connection error: {exc}")
    return JSONResponse(status_code=503, content={"error": "Database connection failed"})


@app.exception_handler(SessionStoreError)
async def store_error_handler(request, exc):
    """Handle unreadable session records."""
    logger.error(f"Session store error: {exc}")
    return JSONResponse(status_code=500, content={"error": "failed to retrieve session"})


if __name__ == "__main__":
    uvicorn.run(
        "billtrack.main:app",
        host=config.get("host"),
        port=config.get("port"),
        log_level=config.get("log_level").lower(),
        reload=config.get("debug"),
        log_config=get_logging_config(config.get("log_level")),
    )
