"""Environment-driven configuration using Pydantic Settings."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.bentley.com/itwins"


class ITwinsSettings(BaseSettings):
    """Client settings read from the environment.

    ``IMJS_URL_PREFIX`` selects a deployment environment by prefixing
    the host of the default base URL (``"dev-"`` targets
    ``dev-api.bentley.com``).  ``ITWINS_TIMEOUT`` sets a request
    timeout in seconds; requests applies none when it is unset.
    """

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    url_prefix: str = Field(default="", validation_alias="IMJS_URL_PREFIX")
    timeout: Optional[float] = Field(default=None, validation_alias="ITWINS_TIMEOUT")

    def resolve_base_url(self, base_url: str = DEFAULT_BASE_URL) -> str:
        if not self.url_prefix:
            return base_url
        parts = urlsplit(base_url)
        netloc = f"{self.url_prefix}{parts.netloc}"
        return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))
