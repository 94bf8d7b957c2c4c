"""Per-site configuration records — branding, theme, SEO meta, recipes, content."""

from enum import StrEnum

from pydantic import Field, field_validator, model_validator

from recipesites.models.base import FrozenModel

# ── Branding / theme ─────────────────────────────────────────


class ThemeColors(FrozenModel):
    primary: str
    primary_dark: str
    primary_light: str
    secondary: str
    accent: str
    background: str
    surface: str
    text: str
    text_muted: str


class ThemeFonts(FrozenModel):
    heading: str
    body: str


class Theme(FrozenModel):
    colors: ThemeColors
    fonts: ThemeFonts


class Branding(FrozenModel):
    name: str
    tagline: str
    logo: str
    favicon: str
    hero_image: str | None = None


class SiteMeta(FrozenModel):
    title: str
    description: str
    keywords: tuple[str, ...] = ()
    og_image: str
    twitter_handle: str | None = None


class SocialLinks(FrozenModel):
    instagram: str | None = None
    pinterest: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    youtube: str | None = None


# ── Recipes ──────────────────────────────────────────────────


class Difficulty(StrEnum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class NutritionInfo(FrozenModel):
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float | None = Field(default=None, ge=0)
    sugar: float | None = Field(default=None, ge=0)


class Ingredient(FrozenModel):
    item: str
    amount: str
    unit: str | None = None
    notes: str | None = None


class InstructionStep(FrozenModel):
    step: int
    instruction: str
    tip: str | None = None
    duration: str | None = None


class Recipe(FrozenModel):
    id: str
    slug: str = Field(min_length=1)
    title: str
    description: str
    image: str
    prep_time: int = Field(ge=0)  # minutes
    cook_time: int = Field(ge=0)
    total_time: int = Field(ge=0)  # advisory, not checked against prep + cook
    servings: int = Field(ge=1)
    difficulty: Difficulty
    category: str
    tags: tuple[str, ...] = ()
    ingredients: tuple[Ingredient, ...]
    instructions: tuple[InstructionStep, ...]
    nutrition: NutritionInfo
    tips: tuple[str, ...] | None = None
    date_published: str
    date_modified: str | None = None

    @field_validator("instructions")
    @classmethod
    def _steps_are_sequential(
        cls, steps: tuple[InstructionStep, ...]
    ) -> tuple[InstructionStep, ...]:
        for expected, step in enumerate(steps, start=1):
            if step.step != expected:
                raise ValueError(
                    f"instruction steps must be numbered 1..n, got {step.step} at position {expected}"
                )
        return steps

    @property
    def computed_total_time(self) -> int:
        return self.prep_time + self.cook_time


# ── Tenant content blocks ────────────────────────────────────


class HeroContent(FrozenModel):
    headline: str
    subheadline: str = ""
    cta_label: str | None = None


class FaqEntry(FrozenModel):
    question: str
    answer: str


class GuideSection(FrozenModel):
    heading: str
    body: tuple[str, ...] = ()


class Guide(FrozenModel):
    title: str
    intro: str = ""
    sections: tuple[GuideSection, ...] = ()


class SiteContent(FrozenModel):
    hero: HeroContent | None = None
    faq: tuple[FaqEntry, ...] = ()
    guide: Guide | None = None


# ── Site ─────────────────────────────────────────────────────


class SiteConfig(FrozenModel):
    id: str = Field(min_length=1)
    domain: str = Field(min_length=1)
    branding: Branding
    theme: Theme
    meta: SiteMeta
    social: SocialLinks | None = None
    recipes: tuple[Recipe, ...] = ()
    content: SiteContent = SiteContent()

    @model_validator(mode="after")
    def _unique_slugs(self) -> "SiteConfig":
        seen: set[str] = set()
        for recipe in self.recipes:
            if recipe.slug in seen:
                raise ValueError(f"duplicate recipe slug '{recipe.slug}' in site '{self.id}'")
            seen.add(recipe.slug)
        return self

    def recipe_by_slug(self, slug: str) -> Recipe | None:
        for recipe in self.recipes:
            if recipe.slug == slug:
                return recipe
        return None

    def recipes_in_category(self, category: str) -> list[Recipe]:
        wanted = category.casefold()
        return [r for r in self.recipes if r.category.casefold() == wanted]

    def categories(self) -> list[str]:
        """Distinct categories in recipe order."""
        return list(dict.fromkeys(r.category for r in self.recipes))
