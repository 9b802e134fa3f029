"""
Client implementation for the iTwins REST API.

This module defines the :class:`ITwinsClient` class which exposes one
method per iTwins service operation.  Each method builds the request
URL, sends a single request through
:meth:`~itwins_client.base.BaseBentleyAPIClient.send_generic_api_request`
and returns the resulting :class:`~itwins_client.types.APIResponse`.

Usage
-----

.. code-block:: python

    from itwins_client import ITwinsClient

    client = ITwinsClient()

    response = client.get_itwins(
        access_token,
        {"subClass": "Project", "top": 10, "resultMode": "representation"},
    )
    if response.error is None:
        for itwin in response.data["iTwins"]:
            print(itwin["displayName"])
        next_page = response.data["_links"].get("next")

The client does not follow pagination links.  Callers request the
``_links.next.href`` URL themselves when they want the next page.
"""

from __future__ import annotations

from typing import Optional

from .base import BaseITwinsApiClient
from .query import (
    ITWINS_GET_QUERY_PARAM_MAPPING,
    ITWINS_QUERY_PARAM_MAPPING,
    ODATA_PARAM_MAPPING,
    REPOSITORY_PARAM_MAPPING,
    append_query_string,
)
from .types import (
    APIResponse,
    ImageContentType,
    ITwinCreate,
    ITwinExportRequestInfo,
    ITwinsGetQueryArg,
    ITwinsQueryArg,
    ITwinUpdate,
    NewRepositoryConfig,
    NewRepositoryResource,
    ODataQueryArg,
    RepositoriesQueryArg,
    RepositoryUpdate,
    ResultMode,
)


class ITwinsClient(BaseITwinsApiClient):
    """A client for the iTwins REST API.

    Parameters
    ----------
    base_url : str, optional
        Override the API base URL.  When provided it is used as-is and
        ``IMJS_URL_PREFIX`` is ignored.
    settings : ITwinsSettings, optional
        Settings to use instead of reading them from the environment.

    Notes
    -----
    The access token is supplied on every call and sent verbatim in the
    ``authorization`` header, so it must already include its scheme
    (``"Bearer ..."``).  The client neither refreshes nor validates it.
    """

    # ------------------------------------------------------------------
    # Exports
    # ------------------------------------------------------------------
    def create_export(self, access_token: str, args: ITwinExportRequestInfo) -> APIResponse:
        """Queue a new iTwins export.  ``data`` holds the ``export``."""
        return self.send_generic_api_request(access_token, "POST", self._url("exports"), args)

    def get_export(self, access_token: str, export_id: str) -> APIResponse:
        return self.send_generic_api_request(access_token, "GET", self._url("exports", export_id))

    def get_exports(self, access_token: str) -> APIResponse:
        return self.send_generic_api_request(access_token, "GET", self._url("exports"))

    # ------------------------------------------------------------------
    # Favorites and recents
    # ------------------------------------------------------------------
    def get_favorites_itwins(
        self, access_token: str, arg: Optional[ITwinsQueryArg] = None
    ) -> APIResponse:
        """List the user's favorite iTwins.

        ``arg`` filters and pages the list; its ``resultMode`` and
        ``queryScope`` travel as headers.
        """
        url = append_query_string(self._url("favorites"), ITWINS_QUERY_PARAM_MAPPING, arg)
        return self.send_generic_api_request(
            access_token, "GET", url, headers=self._get_headers(arg)
        )

    def add_itwin_to_favorites(self, access_token: str, itwin_id: str) -> APIResponse:
        return self.send_generic_api_request(
            access_token, "POST", self._url("favorites", itwin_id)
        )

    def remove_itwin_from_favorites(self, access_token: str, itwin_id: str) -> APIResponse:
        return self.send_generic_api_request(
            access_token, "DELETE", self._url("favorites", itwin_id)
        )

    def add_itwin_to_my_recents(self, access_token: str, itwin_id: str) -> APIResponse:
        return self.send_generic_api_request(access_token, "POST", self._url("recents", itwin_id))

    def get_recent_used_itwins(
        self, access_token: str, arg: Optional[ITwinsQueryArg] = None
    ) -> APIResponse:
        """List recently used iTwins, most recent first (at most 25)."""
        url = append_query_string(self._url("recents"), ITWINS_QUERY_PARAM_MAPPING, arg)
        return self.send_generic_api_request(
            access_token, "GET", url, headers=self._get_headers(arg)
        )

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------
    def upload_itwin_image(
        self,
        access_token: str,
        itwin_id: str,
        image: bytes,
        content_type: ImageContentType,
    ) -> APIResponse:
        """Upload a PNG or JPEG image for an iTwin.

        Parameters
        ----------
        access_token : str
            The caller's access token.
        itwin_id : str
            Identifier of the iTwin.
        image : bytes
            Raw image content, sent unchanged as the request body.
        content_type : {"image/png", "image/jpeg"}
            MIME type of ``image``.
        """
        return self.send_generic_api_request(
            access_token,
            "PUT",
            self._url(itwin_id, "image"),
            image,
            content_type=content_type,
        )

    def get_itwin_image(self, access_token: str, itwin_id: str) -> APIResponse:
        return self.send_generic_api_request(access_token, "GET", self._url(itwin_id, "image"))

    def delete_itwin_image(self, access_token: str, itwin_id: str) -> APIResponse:
        return self.send_generic_api_request(
            access_token, "DELETE", self._url(itwin_id, "image")
        )

    # ------------------------------------------------------------------
    # Repositories
    # ------------------------------------------------------------------
    def create_repository(
        self, access_token: str, itwin_id: str, repository: NewRepositoryConfig
    ) -> APIResponse:
        """Register a repository for an iTwin.  ``data`` holds the ``repository``."""
        return self.send_generic_api_request(
            access_token, "POST", self._url(itwin_id, "repositories"), repository
        )

    def delete_repository(self, access_token: str, itwin_id: str, repository_id: str) -> APIResponse:
        return self.send_generic_api_request(
            access_token, "DELETE", self._url(itwin_id, "repositories", repository_id)
        )

    def get_repositories(
        self, access_token: str, itwin_id: str, arg: Optional[RepositoriesQueryArg] = None
    ) -> APIResponse:
        """List the repositories of an iTwin, optionally filtered by class.

        Filtering by ``subClass`` requires ``class`` as well; the service
        rejects a lone ``subClass``.
        """
        url = append_query_string(
            self._url(itwin_id, "repositories"), REPOSITORY_PARAM_MAPPING, arg
        )
        return self.send_generic_api_request(access_token, "GET", url)

    def get_repository(self, access_token: str, itwin_id: str, repository_id: str) -> APIResponse:
        return self.send_generic_api_request(
            access_token, "GET", self._url(itwin_id, "repositories", repository_id)
        )

    def update_repository(
        self,
        access_token: str,
        itwin_id: str,
        repository_id: str,
        repository: RepositoryUpdate,
    ) -> APIResponse:
        return self.send_generic_api_request(
            access_token,
            "PATCH",
            self._url(itwin_id, "repositories", repository_id),
            repository,
        )

    # ------------------------------------------------------------------
    # Repository resources
    # ------------------------------------------------------------------
    def create_repository_resource(
        self,
        access_token: str,
        itwin_id: str,
        repository_id: str,
        resource: NewRepositoryResource,
    ) -> APIResponse:
        """Add a resource to a ``GeographicInformationSystem`` repository."""
        return self.send_generic_api_request(
            access_token,
            "POST",
            self._url(itwin_id, "repositories", repository_id, "resources"),
            resource,
        )

    def delete_repository_resource(
        self, access_token: str, itwin_id: str, repository_id: str, resource_id: str
    ) -> APIResponse:
        return self.send_generic_api_request(
            access_token,
            "DELETE",
            self._url(itwin_id, "repositories", repository_id, "resources", resource_id),
        )

    def get_repository_resource(
        self,
        access_token: str,
        itwin_id: str,
        repository_id: str,
        resource_id: str,
        result_mode: Optional[ResultMode] = None,
    ) -> APIResponse:
        return self.send_generic_api_request(
            access_token,
            "GET",
            self._url(itwin_id, "repositories", repository_id, "resources", resource_id),
            headers=self._get_result_mode_headers(result_mode),
        )

    def get_repository_resources(
        self,
        access_token: str,
        itwin_id: str,
        repository_id: str,
        args: Optional[ODataQueryArg] = None,
        result_mode: Optional[ResultMode] = None,
    ) -> APIResponse:
        url = append_query_string(
            self._url(itwin_id, "repositories", repository_id, "resources"),
            ODATA_PARAM_MAPPING,
            args,
        )
        return self.send_generic_api_request(
            access_token, "GET", url, headers=self._get_result_mode_headers(result_mode)
        )

    def get_repository_resources_by_uri(
        self,
        access_token: str,
        uri: str,
        args: Optional[ODataQueryArg] = None,
        result_mode: Optional[ResultMode] = None,
    ) -> APIResponse:
        """List resources through a repository's ``capabilities.resources.uri``.

        The capability URI may redirect to a federated host; redirects to
        trusted Bentley hosts are followed.
        """
        url = append_query_string(uri, ODATA_PARAM_MAPPING, args)
        return self.send_generic_api_request(
            access_token,
            "GET",
            url,
            headers=self._get_result_mode_headers(result_mode),
            allow_redirects=True,
        )

    def get_repository_resource_by_uri(
        self, access_token: str, uri: str, result_mode: Optional[ResultMode] = None
    ) -> APIResponse:
        return self.send_generic_api_request(
            access_token,
            "GET",
            uri,
            headers=self._get_result_mode_headers(result_mode),
            allow_redirects=True,
        )

    def get_resource_graphics(
        self, access_token: str, itwin_id: str, repository_id: str, resource_id: str
    ) -> APIResponse:
        return self.send_generic_api_request(
            access_token,
            "GET",
            self._url(
                itwin_id, "repositories", repository_id, "resources", resource_id, "graphics"
            ),
        )

    def get_resource_graphics_by_uri(self, access_token: str, uri: str) -> APIResponse:
        """Fetch graphics metadata through a resource's ``capabilities.graphics.uri``."""
        return self.send_generic_api_request(access_token, "GET", uri, allow_redirects=True)

    # ------------------------------------------------------------------
    # iTwins
    # ------------------------------------------------------------------
    def get_itwins(self, access_token: str, arg: Optional[ITwinsGetQueryArg] = None) -> APIResponse:
        """List the iTwins visible to the user.

        Besides the common filters, ``arg`` accepts the OData ``filter``,
        ``orderby`` and ``select`` options.
        """
        url = append_query_string(self._url(), ITWINS_GET_QUERY_PARAM_MAPPING, arg)
        return self.send_generic_api_request(
            access_token, "GET", url, headers=self._get_headers(arg)
        )

    def get_itwin(
        self, access_token: str, itwin_id: str, result_mode: Optional[ResultMode] = None
    ) -> APIResponse:
        return self.send_generic_api_request(
            access_token,
            "GET",
            self._url(itwin_id),
            headers=self._get_result_mode_headers(result_mode),
        )

    def get_primary_account(self, access_token: str) -> APIResponse:
        return self.send_generic_api_request(access_token, "GET", self._url("myprimaryaccount"))

    def get_itwin_account(
        self, access_token: str, itwin_id: str, result_mode: Optional[ResultMode] = None
    ) -> APIResponse:
        """Get the account iTwin that owns ``itwin_id``."""
        return self.send_generic_api_request(
            access_token,
            "GET",
            self._url(itwin_id, "account"),
            headers=self._get_result_mode_headers(result_mode),
        )

    def create_itwin(self, access_token: str, itwin: ITwinCreate) -> APIResponse:
        return self.send_generic_api_request(access_token, "POST", self._url(), itwin)

    def update_itwin(self, access_token: str, itwin_id: str, itwin: ITwinUpdate) -> APIResponse:
        return self.send_generic_api_request(access_token, "PATCH", self._url(itwin_id), itwin)

    def delete_itwin(self, access_token: str, itwin_id: str) -> APIResponse:
        return self.send_generic_api_request(access_token, "DELETE", self._url(itwin_id))
