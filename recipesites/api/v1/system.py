"""System health endpoint — database round-trip plus registry summary."""

import time
from urllib.parse import urlparse, urlunparse

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from recipesites.api.deps import Registry, Session
from recipesites.core.config import get_settings

router = APIRouter(prefix="/system", tags=["system"])

settings = get_settings()


class ServiceHealth(BaseModel):
    status: str  # "ok" or "error"
    detail: str | None = None
    latency_ms: int | None = None


class RegistrySummary(BaseModel):
    sites: int
    hostnames: int
    default_site_id: str


class HealthResponse(BaseModel):
    status: str
    database: ServiceHealth
    database_url: str
    registry: RegistrySummary


@router.get("/health", response_model=HealthResponse)
async def system_health(session: Session, registry: Registry) -> HealthResponse:
    db = await _check_database(session)
    return HealthResponse(
        status="ok" if db.status == "ok" else "degraded",
        database=db,
        database_url=_mask_url(settings.database_url),
        registry=RegistrySummary(
            sites=len(registry.site_ids()),
            hostnames=len(registry.hostnames()),
            default_site_id=registry.default_site_id,
        ),
    )


def _mask_url(url: str) -> str:
    """Mask credentials in database URLs."""
    parsed = urlparse(url)
    if not parsed.password:
        return url
    netloc = f"{parsed.username}:***@{parsed.hostname}"
    if parsed.port:
        netloc += f":{parsed.port}"
    return urlunparse(parsed._replace(netloc=netloc))


async def _check_database(session) -> ServiceHealth:
    try:
        t0 = time.monotonic()
        await session.execute(text("SELECT 1"))
        latency = int((time.monotonic() - t0) * 1000)
        return ServiceHealth(status="ok", latency_ms=latency)
    except SQLAlchemyError as exc:
        return ServiceHealth(status="error", detail=str(exc)[:200])
