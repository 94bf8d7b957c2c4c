"""Newsletter subscription store — idempotent per (email, site_domain)."""

import logging

from sqlalchemy import text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.schema import CreateIndex, CreateTable
from sqlmodel import select

from recipesites.core.errors import (
    AlreadySubscribedError,
    InvalidEmailError,
    SubscriptionStoreError,
)
from recipesites.models.base import utcnow
from recipesites.models.newsletter import NewsletterSubscriber, SubscriberStatus

logger = logging.getLogger(__name__)

subscribers_table = NewsletterSubscriber.__table__

# Arbitrary constant shared by every process provisioning the table
_SCHEMA_LOCK_KEY = 7_301_452_001

# Dialects with a native INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def validate_email(email: str | None) -> str:
    """Minimal syntactic check; returns the lowercased address."""
    candidate = (email or "").strip()
    if not candidate or "@" not in candidate:
        raise InvalidEmailError()
    return candidate.lower()


def extract_client_ip(forwarded_for: str | None) -> str | None:
    """First hop of an ``X-Forwarded-For`` list, or None."""
    if not forwarded_for:
        return None
    first = forwarded_for.split(",")[0].strip()
    return first or None


async def ensure_schema(session: AsyncSession) -> None:
    """Create the subscribers table and its index if they are missing.

    Runs before every read and write in its own committed transaction, so
    the DDL locks are released before any row is written. IF NOT EXISTS
    makes it idempotent; on PostgreSQL a transaction-scoped advisory lock
    also serializes concurrent first-time creation, which can otherwise
    collide in the system catalogs.
    """
    conn = await session.connection()
    if conn.dialect.name == "postgresql":
        await conn.execute(
            text("SELECT pg_advisory_xact_lock(:key)"), {"key": _SCHEMA_LOCK_KEY}
        )
    await conn.execute(CreateTable(subscribers_table, if_not_exists=True))
    for index in subscribers_table.indexes:
        await conn.execute(CreateIndex(index, if_not_exists=True))
    await session.commit()


async def _provision(session: AsyncSession) -> None:
    try:
        await ensure_schema(session)
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Newsletter schema setup failed")
        raise SubscriptionStoreError("Subscription storage is unavailable") from exc


def _upsert_statement(dialect_name: str, values: dict):
    insert = _UPSERT_INSERTS.get(dialect_name)
    if insert is None:
        raise SubscriptionStoreError(f"Upsert not supported on dialect '{dialect_name}'")
    stmt = insert(subscribers_table).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=["email", "site_domain"],
        set_={
            "subscribed_at": stmt.excluded.subscribed_at,
            "status": SubscriberStatus.ACTIVE.value,
        },
    )


async def subscribe(
    session: AsyncSession,
    email: str | None,
    site_domain: str,
    site_name: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> None:
    """Record (or re-activate) a subscription for one site.

    A repeat call for the same pair refreshes ``subscribed_at`` and forces the
    status back to active. Raises InvalidEmailError before touching storage.
    """
    normalized = validate_email(email)

    await _provision(session)

    try:
        conn = await session.connection()
        stmt = _upsert_statement(
            conn.dialect.name,
            {
                "email": normalized,
                "site_domain": site_domain,
                "site_name": site_name,
                "subscribed_at": utcnow(),
                "status": SubscriberStatus.ACTIVE.value,
                "ip_address": ip_address,
                "user_agent": user_agent,
            },
        )
        await session.execute(stmt)
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.warning("Conflicting subscription write for site %s", site_domain)
        raise AlreadySubscribedError(normalized, site_domain) from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Newsletter subscribe failed for site %s", site_domain)
        raise SubscriptionStoreError("Subscription could not be stored") from exc

    logger.info("Newsletter subscription stored for site %s", site_domain)


async def list_subscribers(
    session: AsyncSession,
    domain: str | None = None,
) -> list[NewsletterSubscriber]:
    """All subscriptions, newest first, optionally for one site domain."""
    await _provision(session)

    try:
        stmt = select(NewsletterSubscriber)
        if domain:
            stmt = stmt.where(NewsletterSubscriber.site_domain == domain)
        stmt = stmt.order_by(
            NewsletterSubscriber.subscribed_at.desc(),  # type: ignore[attr-defined]
            NewsletterSubscriber.id.desc(),  # type: ignore[union-attr]
        )
        result = await session.execute(stmt.execution_options(populate_existing=True))
        return list(result.scalars().all())
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Listing newsletter subscribers failed")
        raise SubscriptionStoreError("Subscribers could not be read") from exc
