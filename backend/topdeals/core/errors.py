from typing import Optional


class TopDealsError(Exception):
    """Base class for every error this service raises on purpose."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class QuerySpecError(TopDealsError, ValueError):
    """Neither or both of collection/query were supplied."""


class ConfigurationError(TopDealsError):
    """The Storefront client cannot be built (missing domain or token)."""


class ApiError(TopDealsError):
    """Already-translated failure; rendered as {"error": ..., "detail": ...}."""

    def __init__(self, status_code: int, error: str, detail: Optional[str] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.detail = detail


class UpstreamError(TopDealsError):
    """
    Shopify answered with a non-2xx status or a GraphQL `errors` array.
    `status_code` / `body` are kept for diagnostics.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
