"""Unit tests for the OAuth refresh client."""

from unittest import mock

import pytest
import requests

from claude_profiles.constants import OAUTH_CLIENT_ID, OAUTH_ENDPOINT
from claude_profiles.core.errors import TokenRefreshFailed
from claude_profiles.core.models import CredentialRecord
from claude_profiles.infrastructure.oauth import OAuthClient

from conftest import NOW_MS, make_creds


def _response(status=200, payload=None):
    response = mock.Mock(status_code=status)
    response.json.return_value = payload if payload is not None else {}
    return response


@pytest.fixture
def client():
    return OAuthClient(clock=lambda: NOW_MS)


@pytest.fixture
def record():
    return CredentialRecord.from_dict(make_creds(refresh="rt-old", organizationUuid="org-1"))


def test_refresh_success(client, record):
    payload = {"access_token": "at-new", "refresh_token": "rt-new", "expires_in": 7200}
    with mock.patch("claude_profiles.infrastructure.oauth.requests.post", return_value=_response(payload=payload)) as post:
        refreshed = client.refresh(record)

    post.assert_called_once_with(
        OAUTH_ENDPOINT,
        json={"grant_type": "refresh_token", "refresh_token": "rt-old", "client_id": OAUTH_CLIENT_ID},
        timeout=10,
    )
    assert refreshed.access_token == "at-new"
    assert refreshed.refresh_token == "rt-new"
    assert refreshed.expires_at == NOW_MS + 7_200_000
    assert refreshed.extra["organizationUuid"] == "org-1"
    assert record.access_token == "at-alice"


def test_keeps_refresh_token_when_not_rotated(client, record):
    with mock.patch("claude_profiles.infrastructure.oauth.requests.post", return_value=_response(payload={"access_token": "a"})):
        refreshed = client.refresh(record)

    assert refreshed.refresh_token == "rt-old"
    assert refreshed.expires_at == NOW_MS + 3_600_000


def test_http_error(client, record):
    with mock.patch("claude_profiles.infrastructure.oauth.requests.post", return_value=_response(status=400)):
        with pytest.raises(TokenRefreshFailed, match="400"):
            client.refresh(record)


def test_network_error(client, record):
    with mock.patch(
        "claude_profiles.infrastructure.oauth.requests.post", side_effect=requests.ConnectionError("down")
    ):
        with pytest.raises(TokenRefreshFailed, match="request failed"):
            client.refresh(record)


def test_missing_access_token(client, record):
    with mock.patch("claude_profiles.infrastructure.oauth.requests.post", return_value=_response(payload={})):
        with pytest.raises(TokenRefreshFailed, match="no access token"):
            client.refresh(record)


def test_no_refresh_token(client):
    with pytest.raises(TokenRefreshFailed):
        client.refresh(CredentialRecord(access_token="x"))
