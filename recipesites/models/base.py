"""Shared helpers for models."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FrozenModel(BaseModel):
    """Immutable config record read from camelCase JSON.

    Attributes stay snake_case in Python; both spellings validate.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
