"""
Custom exception types for the iTwins API client.

These exceptions are raised inside the request pipeline.  The public
client methods never let them escape: they are translated into
:class:`~itwins_client.types.APIResponse` envelopes before returning.
"""


class ITwinsError(Exception):
    """Base exception for all iTwins client errors."""


class ITwinsRequestError(ITwinsError):
    """Raised when a request cannot be built (missing token or URL)."""


class ITwinsResponseError(ITwinsError):
    """Raised when the service returns a response the client cannot use."""


class ITwinsRedirectError(ITwinsError):
    """Raised when a redirect target fails validation."""
