"""Newsletter signup + subscriber listing, partitioned by site domain."""

from fastapi import APIRouter, Request, status

from recipesites.api.deps import CurrentSite, Session
from recipesites.core.errors import (
    AlreadySubscribedError,
    ApiError,
    InvalidEmailError,
    SubscriptionStoreError,
)
from recipesites.models.newsletter import (
    SubscribeRequest,
    SubscribeResponse,
    SubscriberList,
    SubscriberRead,
)
from recipesites.services import newsletter

router = APIRouter(prefix="/newsletter", tags=["newsletter"])


@router.post("", response_model=SubscribeResponse)
async def subscribe(
    body: SubscribeRequest,
    request: Request,
    site: CurrentSite,
    session: Session,
) -> SubscribeResponse:
    """Subscribe an email to the current site's newsletter.

    The site domain comes from the resolved Host, never from the body.
    Resubmitting an address refreshes its timestamp and re-activates it.
    """
    try:
        await newsletter.subscribe(
            session,
            body.email,
            site_domain=site.config.domain,
            site_name=body.site_name or site.config.branding.name,
            ip_address=newsletter.extract_client_ip(request.headers.get("x-forwarded-for")),
            user_agent=request.headers.get("user-agent"),
        )
    except (InvalidEmailError, AlreadySubscribedError) as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(exc)) from exc
    except SubscriptionStoreError as exc:
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Something went wrong. Please try again.",
        ) from exc

    return SubscribeResponse(success=True)


# No auth on this listing yet; it must sit behind an admin gateway in production.
@router.get("", response_model=SubscriberList)
async def list_subscribers(
    session: Session,
    domain: str | None = None,
) -> SubscriberList:
    try:
        rows = await newsletter.list_subscribers(session, domain=domain)
    except SubscriptionStoreError as exc:
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to retrieve subscribers",
        ) from exc
    return SubscriberList(subscribers=[SubscriberRead.model_validate(r) for r in rows])
