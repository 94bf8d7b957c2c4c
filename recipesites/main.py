"""FastAPI application entrypoint."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from recipesites.api.deps import resolve_site_context
from recipesites.api.v1 import v1_router
from recipesites.core.config import get_settings
from recipesites.core.errors import ApiError, api_error_handler
from recipesites.sites.registry import build_registry

_settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    logging.basicConfig(
        level=_settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Newsletter tables are provisioned lazily on first use, so a database
    # outage never blocks page data from being served.
    yield


app = FastAPI(
    title="Recipe Sites",
    version="0.1.0",
    description="Multi-site recipe backend: host-based site resolution and newsletter signup",
    lifespan=lifespan,
)

# ── Site registry (built once, read-only for the process lifetime) ──
app.state.registry = build_registry(_settings)

app.add_exception_handler(ApiError, api_error_handler)

# ── CORS ─────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _settings.allowed_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def site_context_middleware(request: Request, call_next):
    """Resolve the site once per request and expose it as ``x-site-id``."""
    site = resolve_site_context(request.app.state.registry, request.headers.get("host"))
    request.state.site = site
    response = await call_next(request)
    response.headers["x-site-id"] = site.site_id
    return response


# ── API routes ───────────────────────────────────────────────
app.include_router(v1_router)


@app.get("/health", tags=["system"])
async def health_check() -> dict:
    return {"status": "ok"}
