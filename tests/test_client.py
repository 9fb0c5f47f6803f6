import pytest
import requests

from spoti_web.core import CredentialContext
from spoti_web.spotify import (
    AuthError,
    RetryPolicy,
    SpotifySession,
    VendorError,
    is_token_expired,
)
from tests.spotify_fakes import expired_error, server_error


def _flaky(failures, result="ok"):
    """Callable failing with each of ``failures`` in turn, then returning ``result``."""
    attempts = []

    def call(sp):
        attempts.append(sp.current_token)
        if len(attempts) <= len(failures):
            raise failures[len(attempts) - 1]
        return result

    return call, attempts


def test_call_retries_non_auth_failures_then_returns_third_result(
    credentials, fake_spotify, refresh_calls
) -> None:
    session = SpotifySession(credentials)
    fn, attempts = _flaky([server_error(), server_error()], result={"id": "me"})

    assert session.call("me", fn) == {"id": "me"}
    assert len(attempts) == 3
    assert refresh_calls == []
    assert session.credentials == credentials


def test_call_raises_vendor_error_after_max_attempts(
    credentials, fake_spotify, refresh_calls
) -> None:
    session = SpotifySession(credentials)
    fn, attempts = _flaky([server_error(503)] * 5)

    with pytest.raises(VendorError) as excinfo:
        session.call("devices", fn)

    assert len(attempts) == 3
    assert excinfo.value.operation == "devices"
    assert excinfo.value.status == 503
    assert excinfo.value.cause is not None
    assert "devices" in str(excinfo.value)


def test_expired_token_refreshes_once_before_next_attempt(
    credentials, fake_spotify, refresh_calls
) -> None:
    session = SpotifySession(credentials)
    fn, attempts = _flaky([expired_error()], result="played")

    assert session.call("start_playback", fn) == "played"

    assert len(refresh_calls) == 1
    assert refresh_calls[0] == credentials
    # first attempt with the stale token, second with the refreshed one
    assert attempts == ["stale-access", "fresh-access-1"]
    assert session.credentials == CredentialContext("fresh-access-1", "refresh-1")
    assert session.result().credentials.access_token == "fresh-access-1"


def test_failure_after_refresh_is_final(credentials, fake_spotify, refresh_calls) -> None:
    session = SpotifySession(credentials)
    fn, attempts = _flaky([expired_error(), expired_error(), expired_error()])

    with pytest.raises(AuthError) as excinfo:
        session.call("me", fn)

    assert len(attempts) == 2
    assert len(refresh_calls) == 1
    assert excinfo.value.status == 401


def test_non_auth_failure_after_refresh_surfaces_vendor_error(
    credentials, fake_spotify, refresh_calls
) -> None:
    session = SpotifySession(credentials)
    fn, attempts = _flaky([expired_error(), server_error(502), server_error(502)])

    with pytest.raises(VendorError) as excinfo:
        session.call("queue", fn)

    assert len(attempts) == 2
    assert excinfo.value.status == 502


def test_rejected_refresh_propagates_without_more_attempts(
    credentials, fake_spotify, monkeypatch
) -> None:
    def reject(current):
        raise AuthError("Token refresh rejected", status=400)

    monkeypatch.setattr("spoti_web.spotify.client.refresh_credentials", reject)
    session = SpotifySession(credentials)
    fn, attempts = _flaky([expired_error()])

    with pytest.raises(AuthError) as excinfo:
        session.call("me", fn)

    assert len(attempts) == 1
    assert excinfo.value.status == 400


def test_connection_errors_are_retried(credentials, fake_spotify, refresh_calls) -> None:
    session = SpotifySession(credentials)
    fn, attempts = _flaky([requests.ConnectionError("reset")], result=[1, 2])

    assert session.call("devices", fn) == [1, 2]
    assert len(attempts) == 2
    assert refresh_calls == []


def test_retry_policy_bounds_attempts(credentials, fake_spotify, refresh_calls) -> None:
    session = SpotifySession(credentials)
    fn, attempts = _flaky([server_error()] * 3)

    with pytest.raises(VendorError):
        session.call("me", fn, policy=RetryPolicy(max_attempts=1))

    assert len(attempts) == 1


def test_arguments_are_forwarded_to_the_callable(
    credentials, fake_spotify, refresh_calls
) -> None:
    session = SpotifySession(credentials)

    result = session.call(
        "playlist_add_items",
        lambda sp, items, position=None: (items, position),
        ["spotify:track:A"],
        position=2,
    )

    assert result == (["spotify:track:A"], 2)


def test_is_token_expired_classification() -> None:
    response = requests.Response()
    response.status_code = 401

    assert is_token_expired(expired_error()) is True
    assert is_token_expired(server_error(401)) is True
    assert is_token_expired(requests.HTTPError(response=response)) is True
    assert is_token_expired(RuntimeError("token expired")) is True
    assert is_token_expired(server_error(500)) is False
    assert is_token_expired(requests.ConnectionError("reset")) is False


def test_policy_without_refresh_retries_expired_token_as_is(
    credentials, fake_spotify, refresh_calls
) -> None:
    session = SpotifySession(credentials, RetryPolicy(refresh_on_expiry=False))
    fn, attempts = _flaky([expired_error()] * 3)

    with pytest.raises(AuthError) as excinfo:
        session.call("me", fn)

    assert refresh_calls == []
    assert attempts == ["stale-access"] * 3
    assert excinfo.value.status == 401
    assert session.credentials == credentials
