"""Shared test fixtures — async SQLite in-memory DB, site factory, test client."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recipesites.core.database import get_session
from recipesites.main import app
from recipesites.models.site import SiteConfig
from recipesites.sites.registry import SiteRegistry


def _site_payload(site_id: str, domain: str, recipes: list[dict] | None = None) -> dict:
    return {
        "id": site_id,
        "domain": domain,
        "branding": {
            "name": f"Brand {site_id}",
            "tagline": "Tagline",
            "logo": "/logo.svg",
            "favicon": "/favicon.ico",
        },
        "theme": {
            "colors": {
                "primary": "#000",
                "primaryDark": "#000",
                "primaryLight": "#fff",
                "secondary": "#111",
                "accent": "#222",
                "background": "#fff",
                "surface": "#fff",
                "text": "#000",
                "textMuted": "#666",
            },
            "fonts": {"heading": "Serif", "body": "Sans"},
        },
        "meta": {
            "title": f"{site_id} title",
            "description": "desc",
            "keywords": ["recipes"],
            "ogImage": "/og.jpg",
        },
        "recipes": recipes or [],
    }


def _recipe_payload(slug: str, category: str = "Dinner", **overrides) -> dict:
    payload = {
        "id": slug,
        "slug": slug,
        "title": slug.replace("-", " ").title(),
        "description": "Tasty.",
        "image": f"/img/{slug}.jpg",
        "prepTime": 10,
        "cookTime": 20,
        "totalTime": 30,
        "servings": 2,
        "difficulty": "Easy",
        "category": category,
        "tags": ["quick"],
        "ingredients": [{"item": "salt", "amount": "1", "unit": "tsp"}],
        "instructions": [
            {"step": 1, "instruction": "Prep."},
            {"step": 2, "instruction": "Cook.", "tip": "Low heat."},
        ],
        "nutrition": {"calories": 300, "protein": 20, "carbs": 30, "fat": 10},
        "datePublished": "2025-01-01",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def site_payload():
    return _site_payload


@pytest.fixture
def recipe_payload():
    return _recipe_payload


@pytest.fixture
def make_site():
    def _make(site_id: str, domain: str, recipes: list[dict] | None = None) -> SiteConfig:
        return SiteConfig.model_validate(_site_payload(site_id, domain, recipes))

    return _make


@pytest.fixture
def scenario_registry(make_site) -> SiteRegistry:
    """Two sites: siteA (default) on a.example.com, siteB on b.example.com."""
    return SiteRegistry(
        domains={
            "a.example.com": "siteA",
            "a.example.com:3000": "siteA",
            "b.example.com": "siteB",
        },
        configs={
            "siteA": make_site(
                "siteA",
                "a.example.com",
                [
                    _recipe_payload("shakshuka", category="Breakfast"),
                    _recipe_payload("chili"),
                ],
            ),
            "siteB": make_site("siteB", "b.example.com", [_recipe_payload("chili")]),
        },
        default_site_id="siteA",
    )


@pytest.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield eng
    await eng.dispose()


@pytest.fixture
def test_session_factory(engine):
    """Session factory bound to the test SQLite engine."""
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with test_session_factory() as sess:
        yield sess
        await sess.rollback()


@pytest.fixture
async def client(session) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async test client with DB session override (production registry)."""

    async def _override_session():
        yield session

    app.dependency_overrides[get_session] = _override_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def scenario_client(client, scenario_registry) -> AsyncGenerator[AsyncClient, None]:
    """Test client routed through the two-site scenario registry."""
    original = app.state.registry
    app.state.registry = scenario_registry
    yield client
    app.state.registry = original
