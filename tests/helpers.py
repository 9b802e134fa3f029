"""Response builders shared by the test modules."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import requests

TOKEN = "Bearer test-token"
BASE_URL = "https://api.bentley.com/itwins"


def make_response(
    status: int,
    body: Any = None,
    *,
    headers: Optional[Dict[str, str]] = None,
    raw: Optional[bytes] = None,
) -> requests.Response:
    """Build a real :class:`requests.Response` carrying ``body`` as JSON."""
    response = requests.Response()
    response.status_code = status
    if raw is not None:
        response._content = raw
    elif body is None:
        response._content = b""
    else:
        response._content = json.dumps(body).encode("utf-8")
    response.headers.update(headers or {})
    return response
