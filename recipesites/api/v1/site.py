"""Read-only view of the current site's configuration and recipes."""

from fastapi import APIRouter, status

from recipesites.api.deps import CurrentSite
from recipesites.core.errors import ApiError
from recipesites.models.site import Recipe, SiteConfig

router = APIRouter(prefix="/site", tags=["site"])


@router.get("", response_model=SiteConfig)
async def get_current_site(site: CurrentSite) -> SiteConfig:
    """The full configuration of the site the Host resolved to."""
    return site.config


@router.get("/recipes", response_model=list[Recipe])
async def list_recipes(site: CurrentSite, category: str | None = None) -> list[Recipe]:
    if category:
        return site.config.recipes_in_category(category)
    return list(site.config.recipes)


@router.get("/recipes/{slug}", response_model=Recipe)
async def get_recipe(slug: str, site: CurrentSite) -> Recipe:
    recipe = site.config.recipe_by_slug(slug)
    if recipe is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Recipe not found")
    return recipe
