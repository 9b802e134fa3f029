"""
Request pipeline shared by the iTwins clients.

:class:`BaseBentleyAPIClient` turns a logical request (access token,
HTTP verb, URL, optional body and headers) into a single call to
:func:`requests.request` and reshapes whatever comes back into an
:class:`~itwins_client.types.APIResponse`.  Nothing raised while
building, sending or decoding a request reaches the caller: business
errors reported by the service are passed through in the envelope and
everything else collapses into a generic ``InternalServerError``.

:class:`BaseITwinsApiClient` adds base URL resolution and the iTwins
``prefer`` / ``x-itwin-query-scope`` headers on top of that pipeline.

Redirects are never followed automatically by requests.  A ``302``
is only honoured for calls that opt in, and only towards HTTPS
``api.bentley.com`` hosts.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import urlsplit

import requests

from .config import DEFAULT_BASE_URL, ITwinsSettings
from .exceptions import ITwinsRedirectError, ITwinsRequestError, ITwinsResponseError
from .types import APIResponse, ApimError, ITwinsQueryArg, Method, ResultMode

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal exception happened while calling iTwins Service"


def _is_valid_error(error: Any) -> bool:
    return (
        isinstance(error, dict)
        and isinstance(error.get("code"), str)
        and isinstance(error.get("message"), str)
    )


def error_response(status: int, code: str, message: str) -> APIResponse:
    """Build an envelope for an error synthesized by the client."""
    error: ApimError = {"code": code, "message": message}
    return APIResponse(status=status, error=error)


def internal_server_error() -> APIResponse:
    return error_response(500, "InternalServerError", INTERNAL_ERROR_MESSAGE)


class BaseBentleyAPIClient:
    """Common request handling for Bentley API clients.

    Parameters
    ----------
    timeout : float, optional
        Timeout in seconds for every underlying HTTP request.  When
        omitted, requests applies no timeout.
    """

    MAX_REDIRECTS = 5

    # Headers set by the client itself; callers cannot override them.
    _FIXED_HEADERS = frozenset({"authorization", "content-type"})

    # Headers copied from a redirect response onto the follow-up request.
    _REDIRECT_AUTH_HEADERS = ("authorization", "x-api-key", "x-auth-token", "api-key")

    _TRUSTED_DOMAINS = ("api.bentley.com",)

    def __init__(self, *, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------
    def create_request_options(
        self,
        access_token: str,
        method: Method,
        url: str,
        data: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
        content_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Build the keyword arguments passed to :func:`requests.request`.

        The access token is sent verbatim in the ``authorization``
        header.  ``content-type`` is ``application/json`` unless
        ``content_type`` is given.  Extra ``headers`` are merged in,
        but entries that collide with either fixed header are dropped.

        Raw ``bytes`` payloads are sent unchanged; any other payload is
        serialised as JSON.

        Raises
        ------
        ITwinsRequestError
            If the access token or the URL is empty.
        """
        if not access_token:
            raise ITwinsRequestError("Access token is required")
        if not url:
            raise ITwinsRequestError("URL is required")

        req_headers = {
            "authorization": access_token,
            "content-type": content_type or "application/json",
        }
        if headers:
            for key, value in headers.items():
                if key.lower() in self._FIXED_HEADERS:
                    continue
                req_headers[key] = value

        options: Dict[str, Any] = {"method": method, "url": url, "headers": req_headers}
        if isinstance(data, (bytes, bytearray)):
            options["data"] = data
        elif data is not None:
            options["json"] = data
        return options

    def _perform(
        self,
        access_token: str,
        method: Method,
        url: str,
        data: Optional[Any],
        headers: Optional[Mapping[str, str]],
        content_type: Optional[str],
    ) -> requests.Response:
        options = self.create_request_options(
            access_token, method, url, data=data, headers=headers, content_type=content_type
        )
        logger.debug("%s %s", method, url)
        response = requests.request(**options, timeout=self.timeout, allow_redirects=False)
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------
    def send_generic_api_request(
        self,
        access_token: str,
        method: Method,
        url: str,
        data: Optional[Any] = None,
        *,
        property_name: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        content_type: Optional[str] = None,
        allow_redirects: bool = False,
    ) -> APIResponse:
        """Send one request and normalise the result.

        Parameters
        ----------
        access_token : str
            Token placed in the ``authorization`` header.
        method : str
            HTTP verb.
        url : str
            Fully built request URL, including any query string.
        data : object, optional
            JSON-serialisable payload, or ``bytes`` for binary uploads.
        property_name : str, optional
            Top-level property of the response body to return as
            ``data`` (for example ``"iTwins"``).
        headers : dict, optional
            Additional request headers.
        content_type : str, optional
            Overrides the default ``application/json`` content type.
        allow_redirects : bool, optional
            Follow ``302`` responses to trusted hosts.  When false a
            ``302`` yields a ``403 RedirectsNotAllowed`` envelope.

        Returns
        -------
        APIResponse
        """
        try:
            response = self._perform(access_token, method, url, data, headers, content_type)
            if response.status_code == 302:
                if not allow_redirects:
                    return error_response(
                        403,
                        "RedirectsNotAllowed",
                        "Redirects are not allowed for this request.",
                    )
                return self._follow_redirects(
                    response,
                    access_token,
                    method,
                    data,
                    headers,
                    content_type,
                    property_name,
                )
            return self.process_response(response, property_name)
        except Exception:
            logger.warning("Request %s %s failed", method, url, exc_info=True)
            return internal_server_error()

    def _follow_redirects(
        self,
        response: requests.Response,
        access_token: str,
        method: Method,
        data: Optional[Any],
        headers: Optional[Mapping[str, str]],
        content_type: Optional[str],
        property_name: Optional[str],
    ) -> APIResponse:
        redirect_count = 0
        while response.status_code == 302:
            redirect_url, error = self.check_redirect_validity(response, redirect_count)
            if error is not None:
                return error
            merged_headers = dict(headers or {})
            merged_headers.update(self.extract_redirect_auth_headers(response))
            response = self._perform(
                access_token, method, redirect_url, data, merged_headers, content_type
            )
            redirect_count += 1
        return self.process_response(response, property_name)

    # ------------------------------------------------------------------
    # Response normalisation
    # ------------------------------------------------------------------
    def process_response(
        self, response: requests.Response, property_name: Optional[str] = None
    ) -> APIResponse:
        """Reshape a transport response into an :class:`APIResponse`.

        Raises
        ------
        ITwinsResponseError
            For ``5xx`` responses and for failed responses that carry no
            valid error object.
        """
        status = response.status_code
        if status >= 500:
            raise ITwinsResponseError(f"Service responded with status {status}")

        if status == 204 or not response.content:
            body = None
        else:
            body = response.json()

        succeeded = 200 <= status < 300
        if isinstance(body, dict) and "error" in body:
            if _is_valid_error(body["error"]):
                return APIResponse(status=status, error=body["error"])
            if succeeded:
                return APIResponse(status=status)
        if not succeeded:
            raise ITwinsResponseError(
                f"Service responded with status {status} and no error details"
            )

        if body is None or body == "":
            return APIResponse(status=status)
        if property_name and isinstance(body, dict) and property_name in body:
            return APIResponse(status=status, data=body[property_name])
        return APIResponse(status=status, data=body)

    # ------------------------------------------------------------------
    # Redirect helpers
    # ------------------------------------------------------------------
    def check_redirect_validity(
        self, response: requests.Response, redirect_count: int
    ) -> Tuple[str, Optional[APIResponse]]:
        """Validate a ``302`` response before following it.

        Returns the redirect target and ``None``, or an empty string and
        the error envelope to hand back to the caller.
        """
        if redirect_count >= self.MAX_REDIRECTS:
            return "", error_response(
                508,
                "TooManyRedirects",
                f"Maximum redirect limit ({self.MAX_REDIRECTS}) exceeded. "
                "Possible redirect loop detected.",
            )

        redirect_url = response.headers.get("location")
        if not redirect_url:
            return "", error_response(
                502, "InvalidRedirect", "302 redirect response missing Location header"
            )

        try:
            self.validate_redirect_url(redirect_url)
        except ITwinsRedirectError as exc:
            logger.warning("Rejected redirect: %s", exc)
            return "", error_response(502, "InvalidRedirectUrl", str(exc))
        return redirect_url, None

    def validate_redirect_url(self, url: str) -> bool:
        """Check that ``url`` is an HTTPS URL on a trusted Bentley host.

        Accepted hosts are ``api.bentley.com`` and environment-prefixed
        variants such as ``dev-api.bentley.com``.

        Raises
        ------
        ITwinsRedirectError
            If the URL is malformed, not HTTPS, or points elsewhere.
        """
        try:
            parts = urlsplit(url)
            hostname = parts.hostname
        except ValueError as exc:
            raise ITwinsRedirectError(f'Invalid redirect URL: malformed URL "{url}"') from exc
        if not parts.scheme:
            raise ITwinsRedirectError(f'Invalid redirect URL: malformed URL "{url}"')

        if parts.scheme.lower() != "https":
            raise ITwinsRedirectError(
                f'Invalid redirect URL: HTTPS required, but URL uses "{parts.scheme}:" '
                f"protocol. URL: {url}"
            )
        if not hostname:
            raise ITwinsRedirectError(f'Invalid redirect URL: malformed URL "{url}"')

        hostname = hostname.lower()
        trusted = any(
            hostname == domain or hostname.endswith(f"-{domain}")
            for domain in self._TRUSTED_DOMAINS
        )
        if not trusted:
            raise ITwinsRedirectError(
                f'Invalid redirect URL: domain "{hostname}" is not a trusted Bentley domain. '
                "Only api.bentley.com and its subdomains are allowed."
            )
        return True

    def extract_redirect_auth_headers(self, response: requests.Response) -> Dict[str, str]:
        """Return the authentication headers of a redirect response, lowercased."""
        auth_headers: Dict[str, str] = {}
        for key, value in response.headers.items():
            lower_key = key.lower()
            if lower_key in self._REDIRECT_AUTH_HEADERS:
                auth_headers[lower_key] = value
        return auth_headers


class BaseITwinsApiClient(BaseBentleyAPIClient):
    """Base URL resolution and iTwins request headers.

    Parameters
    ----------
    base_url : str, optional
        Override the API base URL.  When provided it is used as-is and
        ``IMJS_URL_PREFIX`` is ignored.
    settings : ITwinsSettings, optional
        Settings to use instead of reading them from the environment.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        settings: Optional[ITwinsSettings] = None,
    ) -> None:
        settings = settings or ITwinsSettings()
        super().__init__(timeout=settings.timeout)
        if base_url is not None:
            self.base_url = base_url
        else:
            self.base_url = settings.resolve_base_url(DEFAULT_BASE_URL)

    def _url(self, *segments: str) -> str:
        base = self.base_url.rstrip("/")
        if not segments:
            return base
        return "/".join([base, *(segment.strip("/") for segment in segments)])

    @staticmethod
    def _get_result_mode_headers(result_mode: Optional[ResultMode] = None) -> Dict[str, str]:
        return {"prefer": f"return={result_mode or 'minimal'}"}

    @staticmethod
    def _get_query_scope_headers(query_scope: Optional[str] = None) -> Dict[str, str]:
        return {"x-itwin-query-scope": query_scope or "memberOfItwin"}

    def _get_headers(self, arg: Optional[ITwinsQueryArg] = None) -> Dict[str, str]:
        """Headers carrying the result mode and query scope of ``arg``."""
        arg = arg or {}
        headers = self._get_query_scope_headers(arg.get("queryScope"))
        headers.update(self._get_result_mode_headers(arg.get("resultMode")))
        return headers

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"
