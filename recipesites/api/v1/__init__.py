"""V1 API router aggregation."""

from fastapi import APIRouter

from recipesites.api.v1.newsletter import router as newsletter_router
from recipesites.api.v1.site import router as site_router
from recipesites.api.v1.sites import router as sites_router
from recipesites.api.v1.system import router as system_router

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(site_router)
v1_router.include_router(sites_router)
v1_router.include_router(newsletter_router)
v1_router.include_router(system_router)
