"""Unit tests for the unwrapping ITwinsAccessClient."""

from unittest.mock import patch

from itwins_client import BaseITwinsApiClient, ITwinsClient
from itwins_client.types import APIResponse

from .helpers import BASE_URL, TOKEN, make_response

LINKS = {"self": {"href": f"{BASE_URL}?$skip=0"}, "next": {"href": f"{BASE_URL}?$skip=10"}}


@patch("requests.request")
def test_query_unwraps_itwins(mock_request, access_client):
    itwins = [{"id": "a", "displayName": "A"}, {"id": "b", "displayName": "B"}]
    mock_request.return_value = make_response(200, {"iTwins": itwins, "_links": LINKS})

    result = access_client.query(TOKEN, "Project", {"top": 10, "displayName": "A"})

    assert result == APIResponse(status=200, data=itwins)
    sent = mock_request.call_args.kwargs
    assert sent["url"] == f"{BASE_URL}?subClass=Project&$top=10&displayName=A"
    assert sent["headers"]["prefer"] == "return=minimal"


@patch("requests.request")
def test_query_ignores_duplicate_sub_class(mock_request, access_client):
    mock_request.return_value = make_response(200, {"iTwins": []})
    access_client.query(TOKEN, "Asset", {"subClass": "Project"})
    assert mock_request.call_args.kwargs["url"] == f"{BASE_URL}?subClass=Asset"


@patch("requests.request")
def test_query_favorites_and_recents(mock_request, access_client):
    mock_request.return_value = make_response(200, {"iTwins": []})

    assert access_client.query_favorites(TOKEN, "Asset").data == []
    assert mock_request.call_args.kwargs["url"] == f"{BASE_URL}/favorites?subClass=Asset"

    access_client.query_recents(TOKEN, "Project", {"resultMode": "representation"})
    sent = mock_request.call_args.kwargs
    assert sent["url"] == f"{BASE_URL}/recents?subClass=Project"
    assert sent["headers"]["prefer"] == "return=representation"


@patch("requests.request")
def test_query_repositories_unwraps_list(mock_request, access_client):
    repositories = [{"id": "r1", "uri": "https://example.com/wms"}]
    mock_request.return_value = make_response(
        200, {"repositories": repositories, "_links": LINKS}
    )

    result = access_client.query_repositories(TOKEN, "tw1", {"class": "Construction"})

    assert result.data == repositories
    assert mock_request.call_args.kwargs["url"] == f"{BASE_URL}/tw1/repositories?class=Construction"


@patch("requests.request")
def test_get_and_primary_account_unwrap_itwin(mock_request, access_client):
    mock_request.return_value = make_response(200, {"iTwin": {"id": "tw1"}})

    assert access_client.get(TOKEN, "tw1").data == {"id": "tw1"}
    assert mock_request.call_args.kwargs["url"] == f"{BASE_URL}/tw1"

    assert access_client.get_primary_account(TOKEN).data == {"id": "tw1"}
    assert mock_request.call_args.kwargs["url"] == f"{BASE_URL}/myprimaryaccount"


@patch("requests.request")
def test_error_body_is_not_unwrapped(mock_request, access_client):
    error = {"code": "iTwinNotFound", "message": "Requested iTwin is not available."}
    mock_request.return_value = make_response(404, {"error": error})

    result = access_client.get(TOKEN, "missing")

    assert result.data is None
    assert result.error == error


def test_is_a_separate_client_from_itwins_client(access_client):
    assert isinstance(access_client, BaseITwinsApiClient)
    assert not isinstance(access_client, ITwinsClient)
    assert not hasattr(access_client, "get_itwins")
    assert repr(access_client) == f"ITwinsAccessClient(base_url='{BASE_URL}')"


@patch("requests.request")
def test_primary_account_shape_differs_only_by_client(mock_request, client, access_client):
    mock_request.return_value = make_response(200, {"iTwin": {"id": "x"}})

    assert client.get_primary_account(TOKEN).data == {"iTwin": {"id": "x"}}
    assert access_client.get_primary_account(TOKEN).data == {"id": "x"}
