"""Newsletter subscriber model — one row per (email, site_domain)."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field as PydanticField
from sqlalchemy import DateTime, Index, Text, UniqueConstraint
from sqlmodel import Column, Field, SQLModel

from recipesites.models.base import utcnow


class SubscriberStatus(StrEnum):
    ACTIVE = "active"
    UNSUBSCRIBED = "unsubscribed"


class NewsletterSubscriber(SQLModel, table=True):
    __tablename__ = "newsletter_subscribers"
    __table_args__ = (
        UniqueConstraint("email", "site_domain", name="uq_newsletter_email_site"),
        Index("idx_newsletter_site_domain", "site_domain"),
    )

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, nullable=False)  # stored lowercased
    site_domain: str = Field(max_length=255, nullable=False)
    site_name: str | None = Field(default=None, max_length=255)
    subscribed_at: datetime = Field(
        default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False
    )
    status: str = Field(default=SubscriberStatus.ACTIVE.value, max_length=50)
    ip_address: str | None = Field(default=None, max_length=45)
    user_agent: str | None = Field(default=None, sa_column=Column(Text, nullable=True))


# ── Pydantic schemas ─────────────────────────────────────────


class SubscribeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str | None = None
    site_name: str | None = PydanticField(default=None, alias="siteName")


class SubscribeResponse(BaseModel):
    success: bool = True


class SubscriberRead(SQLModel):
    email: str
    site_domain: str
    subscribed_at: datetime
    status: str


class SubscriberList(BaseModel):
    subscribers: list[SubscriberRead]
