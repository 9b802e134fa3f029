"""
Python client for the iTwins REST API.

This package provides the :class:`ITwinsClient` class, which wraps
every operation of the iTwins service (iTwins, favorites, recents,
images, exports, repositories and repository resources) in a method
that performs exactly one HTTP request.

Every method returns an :class:`APIResponse` envelope instead of
raising.  ``status`` holds the HTTP status, ``data`` the parsed body
and ``error`` the service's error object.  Network failures and
server errors become a ``500`` envelope with the code
``InternalServerError``.

Examples
--------

```python
from itwins_client import ITwinsClient

client = ITwinsClient()

created = client.create_itwin(
    "Bearer <token>",
    {"displayName": "Test A", "class": "Thing", "subClass": "Asset"},
)
itwin_id = created.data["iTwin"]["id"]

repo = client.create_repository(
    "Bearer <token>",
    itwin_id,
    {
        "class": "GeographicInformationSystem",
        "subClass": "WebMapService",
        "uri": "https://example.com/wms",
    },
)
print(repo.status, repo.data["repository"]["uri"])
```

Set ``IMJS_URL_PREFIX`` (for example ``dev-``) to target another
deployment of the service.
"""

import logging

from .access import ITwinsAccessClient
from .base import BaseBentleyAPIClient, BaseITwinsApiClient
from .client import ITwinsClient
from .config import ITwinsSettings
from .exceptions import (
    ITwinsError,
    ITwinsRedirectError,
    ITwinsRequestError,
    ITwinsResponseError,
)
from .types import APIResponse, ApimError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "APIResponse",
    "ApimError",
    "BaseBentleyAPIClient",
    "BaseITwinsApiClient",
    "ITwinsAccessClient",
    "ITwinsClient",
    "ITwinsSettings",
    "ITwinsError",
    "ITwinsRedirectError",
    "ITwinsRequestError",
    "ITwinsResponseError",
]
