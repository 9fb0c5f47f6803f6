from urllib.parse import parse_qs, urlparse

import pytest
import requests

from spoti_web.config import SCOPES, SPOTIFY_REDIRECT_URI, SPOTIFY_TOKEN_URL
from spoti_web.core import CredentialContext
from spoti_web.spotify import (
    AuthError,
    ValidationError,
    build_spotify_auth_url,
    exchange_code_for_token,
    refresh_credentials,
)
from tests.spotify_fakes import FakeResponse


@pytest.fixture
def token_endpoint(monkeypatch):
    """Capture token requests and answer with the queued responses."""
    posted = []
    responses = []

    def fake_post(url, data=None, timeout=None):
        posted.append((url, data))
        response = responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr("spoti_web.spotify.auth.requests.post", fake_post)
    return posted, responses


def test_auth_url_carries_scopes_and_redirect() -> None:
    url = build_spotify_auth_url(state="abc123")
    query = parse_qs(urlparse(url).query)

    assert url.startswith("https://accounts.spotify.com/authorize?")
    assert query["response_type"] == ["code"]
    assert query["redirect_uri"] == [SPOTIFY_REDIRECT_URI]
    assert query["scope"] == [" ".join(SCOPES)]
    assert query["state"] == ["abc123"]


def test_auth_url_generates_state_when_missing() -> None:
    first = parse_qs(urlparse(build_spotify_auth_url()).query)["state"][0]
    second = parse_qs(urlparse(build_spotify_auth_url()).query)["state"][0]

    assert first and second and first != second


def test_exchange_code_posts_authorization_grant(token_endpoint) -> None:
    posted, responses = token_endpoint
    responses.append(
        FakeResponse(200, {"access_token": "a1", "refresh_token": "r1", "expires_in": 3600})
    )

    token_info = exchange_code_for_token("the-code")

    assert token_info["access_token"] == "a1"
    url, data = posted[0]
    assert url == SPOTIFY_TOKEN_URL
    assert data["grant_type"] == "authorization_code"
    assert data["code"] == "the-code"


def test_exchange_requires_code(token_endpoint) -> None:
    posted, _ = token_endpoint

    with pytest.raises(ValidationError):
        exchange_code_for_token("")
    assert posted == []


def test_refresh_keeps_refresh_token_when_not_rotated(token_endpoint) -> None:
    posted, responses = token_endpoint
    responses.append(FakeResponse(200, {"access_token": "new-access"}))

    refreshed = refresh_credentials(CredentialContext("old-access", "keep-me"))

    assert refreshed == CredentialContext("new-access", "keep-me")
    assert posted[0][1]["grant_type"] == "refresh_token"
    assert posted[0][1]["refresh_token"] == "keep-me"


def test_refresh_adopts_rotated_refresh_token(token_endpoint) -> None:
    _, responses = token_endpoint
    responses.append(
        FakeResponse(200, {"access_token": "new-access", "refresh_token": "rotated"})
    )

    refreshed = refresh_credentials(CredentialContext("old-access", "old-refresh"))

    assert refreshed.refresh_token == "rotated"


def test_rejected_refresh_raises_auth_error_with_status(token_endpoint) -> None:
    _, responses = token_endpoint
    responses.append(FakeResponse(400, {"error": "invalid_grant"}))

    with pytest.raises(AuthError) as excinfo:
        refresh_credentials(CredentialContext("old-access", "revoked"))

    assert excinfo.value.status == 400


def test_unreachable_token_endpoint_raises_auth_error(token_endpoint) -> None:
    _, responses = token_endpoint
    responses.append(requests.ConnectionError("down"))

    with pytest.raises(AuthError) as excinfo:
        refresh_credentials(CredentialContext("old-access", "r"))

    assert excinfo.value.status is None


def test_refresh_without_access_token_in_response_fails(token_endpoint) -> None:
    _, responses = token_endpoint
    responses.append(FakeResponse(200, {"token_type": "Bearer"}))

    with pytest.raises(AuthError):
        refresh_credentials(CredentialContext("old-access", "r"))


def test_refresh_requires_refresh_token(token_endpoint) -> None:
    posted, _ = token_endpoint

    with pytest.raises(AuthError) as excinfo:
        refresh_credentials(CredentialContext("old-access", ""))

    assert excinfo.value.status == 401
    assert posted == []
