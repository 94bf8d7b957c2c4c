"""Domain exceptions and the HTTP error envelope."""

from fastapi import Request
from fastapi.responses import JSONResponse


class RegistryConfigError(Exception):
    """Domain table and site configurations disagree. Raised at startup."""


class NewsletterError(Exception):
    pass


class InvalidEmailError(NewsletterError):
    def __init__(self, message: str = "Please provide a valid email address"):
        super().__init__(message)


class AlreadySubscribedError(NewsletterError):
    def __init__(self, email: str, site_domain: str):
        super().__init__("This email is already subscribed")
        self.email = email
        self.site_domain = site_domain


class SubscriptionStoreError(NewsletterError):
    """The subscription table could not be read or written."""


class ApiError(Exception):
    """Rendered as ``{"error": message}`` with the given status code."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
