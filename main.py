# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Worship Service
===============
Manages a volunteer worship group: members (admin / common access), the
song repertoire, and scales assigning songs and soloists to service dates.

All state lives in an in-memory store that is rebuilt from a fixed seed
on every start. Reads need a bearer token; writes need an admin token.

Port: 3000
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from worship_api.controllers import (
    auth_controller,
    member_controller,
    music_controller,
    scale_controller,
    system_controller,
)
from worship_api.core.config import settings
from worship_api.core.dependencies import (
    get_member_service,
    get_song_service,
    get_store,
)
from worship_api.core.logging import get_logger
from worship_api.middleware import (
    MetricsMiddleware,
    RateLimitMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
)
from worship_api.services.seed import seed_default_data

logger = get_logger("worship-service")


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Seed the store before serving; report record counts on shutdown."""
    if settings.SEED_DEFAULT_DATA:
        get_store().reset()
        seed_default_data(get_member_service(), get_song_service())
    logger.info("Worship service starting on port %d", settings.SERVICE_PORT)
    yield
    logger.info("Worship service shutting down — records=%s", get_store().counts())


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Worship Management API",
    description="Members, repertoire and rotation scales for a worship group, "
                "with JWT authentication and admin-gated writes.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


# ── Global exception handler ─────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": "Internal server error", "request_id": req_id},
    )


app.include_router(system_controller.router)
app.include_router(auth_controller.router)
app.include_router(member_controller.router)
app.include_router(music_controller.router)
app.include_router(scale_controller.router)
