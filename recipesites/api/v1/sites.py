"""Registry introspection — which hostnames are routed where."""

from fastapi import APIRouter
from pydantic import BaseModel

from recipesites.api.deps import Registry

router = APIRouter(prefix="/sites", tags=["sites"])


class DomainsResponse(BaseModel):
    domains: list[str]
    site_ids: list[str]
    default_site_id: str


class ResolveResponse(BaseModel):
    host: str
    site_id: str
    known: bool  # False means the default site was used as a fallback


@router.get("/domains", response_model=DomainsResponse)
async def list_domains(registry: Registry) -> DomainsResponse:
    return DomainsResponse(
        domains=list(registry.hostnames()),
        site_ids=list(registry.site_ids()),
        default_site_id=registry.default_site_id,
    )


@router.get("/resolve", response_model=ResolveResponse)
async def resolve_host(host: str, registry: Registry) -> ResolveResponse:
    return ResolveResponse(
        host=host,
        site_id=registry.resolve(host),
        known=registry.is_known_host(host),
    )
