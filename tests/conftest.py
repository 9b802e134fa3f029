"""Shared fixtures for the iTwins client tests."""

import pytest

from itwins_client import ITwinsAccessClient, ITwinsClient, ITwinsSettings


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv("IMJS_URL_PREFIX", raising=False)
    monkeypatch.delenv("ITWINS_TIMEOUT", raising=False)


@pytest.fixture
def client():
    return ITwinsClient(settings=ITwinsSettings())


@pytest.fixture
def access_client():
    return ITwinsAccessClient(settings=ITwinsSettings())
