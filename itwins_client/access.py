"""Query-style access to iTwins that returns the unwrapped payload.

:class:`ITwinsAccessClient` offers the older, narrower set of lookups.
It is not an :class:`~itwins_client.client.ITwinsClient`; the two only
share URL and header handling through
:class:`~itwins_client.base.BaseITwinsApiClient`.  Where the full client
returns the whole response body, these methods hand back the named
property directly: a list of iTwins, a list of repositories, or a single
iTwin.  Pagination links are not available through this interface.

The ``query*`` lookups send the same ``prefer`` and
``x-itwin-query-scope`` headers as the full client, so ``resultMode`` and
``queryScope`` in the query argument behave identically in both.
"""

from __future__ import annotations

from typing import Optional

from .base import BaseITwinsApiClient
from .query import ITWINS_QUERY_PARAM_MAPPING, REPOSITORY_PARAM_MAPPING, append_query_string
from .types import APIResponse, ITwinsQueryArg, ITwinSubClass, RepositoriesQueryArg


class ITwinsAccessClient(BaseITwinsApiClient):
    """Client returning iTwins and repositories without their envelopes."""

    def _query_itwins(
        self,
        access_token: str,
        url: str,
        sub_class: ITwinSubClass,
        arg: Optional[ITwinsQueryArg],
    ) -> APIResponse:
        # subClass is mandatory here and already in the URL
        url = f"{url}?subClass={sub_class}"
        if arg:
            arg = {key: value for key, value in arg.items() if key != "subClass"}
        url = append_query_string(url, ITWINS_QUERY_PARAM_MAPPING, arg)
        return self.send_generic_api_request(
            access_token, "GET", url, property_name="iTwins", headers=self._get_headers(arg)
        )

    def query(
        self,
        access_token: str,
        sub_class: ITwinSubClass,
        arg: Optional[ITwinsQueryArg] = None,
    ) -> APIResponse:
        """Get iTwins of ``sub_class`` accessible to the user.

        ``data`` is the list of iTwins, possibly empty.
        """
        return self._query_itwins(access_token, self._url(), sub_class, arg)

    def query_favorites(
        self,
        access_token: str,
        sub_class: ITwinSubClass,
        arg: Optional[ITwinsQueryArg] = None,
    ) -> APIResponse:
        return self._query_itwins(access_token, self._url("favorites"), sub_class, arg)

    def query_recents(
        self,
        access_token: str,
        sub_class: ITwinSubClass,
        arg: Optional[ITwinsQueryArg] = None,
    ) -> APIResponse:
        return self._query_itwins(access_token, self._url("recents"), sub_class, arg)

    def query_repositories(
        self,
        access_token: str,
        itwin_id: str,
        arg: Optional[RepositoriesQueryArg] = None,
    ) -> APIResponse:
        """Get the repositories of an iTwin.  ``data`` is the list of repositories."""
        url = append_query_string(
            self._url(itwin_id, "repositories"), REPOSITORY_PARAM_MAPPING, arg
        )
        return self.send_generic_api_request(
            access_token, "GET", url, property_name="repositories"
        )

    def get(self, access_token: str, itwin_id: str) -> APIResponse:
        return self.send_generic_api_request(
            access_token, "GET", self._url(itwin_id), property_name="iTwin"
        )

    def get_primary_account(self, access_token: str) -> APIResponse:
        """Get the user's primary account.  ``data`` is the account iTwin."""
        return self.send_generic_api_request(
            access_token, "GET", self._url("myprimaryaccount"), property_name="iTwin"
        )
