"""Import all models so SQLModel.metadata picks them up."""

from recipesites.models.newsletter import (
    NewsletterSubscriber,
    SubscribeRequest,
    SubscribeResponse,
    SubscriberList,
    SubscriberRead,
    SubscriberStatus,
)
from recipesites.models.site import (
    Branding,
    Difficulty,
    FaqEntry,
    Guide,
    GuideSection,
    HeroContent,
    Ingredient,
    InstructionStep,
    NutritionInfo,
    Recipe,
    SiteConfig,
    SiteContent,
    SiteMeta,
    SocialLinks,
    Theme,
    ThemeColors,
    ThemeFonts,
)

__all__ = [
    "Branding",
    "Difficulty",
    "FaqEntry",
    "Guide",
    "GuideSection",
    "HeroContent",
    "Ingredient",
    "InstructionStep",
    "NewsletterSubscriber",
    "NutritionInfo",
    "Recipe",
    "SiteConfig",
    "SiteContent",
    "SiteMeta",
    "SocialLinks",
    "SubscribeRequest",
    "SubscribeResponse",
    "SubscriberList",
    "SubscriberRead",
    "SubscriberStatus",
    "Theme",
    "ThemeColors",
    "ThemeFonts",
]
