"""FastAPI dependencies for site (tenant) resolution and DB sessions."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from recipesites.core.database import get_session
from recipesites.models.site import SiteConfig
from recipesites.sites.registry import SiteRegistry

DEFAULT_HOST = "localhost:3000"


@dataclass(frozen=True, slots=True)
class SiteContext:
    """Resolved site carried through a request."""

    site_id: str
    hostname: str
    config: SiteConfig


def resolve_site_context(registry: SiteRegistry, hostname: str | None) -> SiteContext:
    host = hostname or DEFAULT_HOST
    site_id = registry.resolve(host)
    return SiteContext(site_id=site_id, hostname=host, config=registry.get_config(site_id))


def get_registry(request: Request) -> SiteRegistry:
    return request.app.state.registry


def get_site_context(request: Request) -> SiteContext:
    """Context set by the site middleware; resolved once per request."""
    return request.state.site


# Typed shorthand for use in route signatures
CurrentSite = Annotated[SiteContext, Depends(get_site_context)]
Registry = Annotated[SiteRegistry, Depends(get_registry)]
Session = Annotated[AsyncSession, Depends(get_session)]
