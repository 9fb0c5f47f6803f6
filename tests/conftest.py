from typing import List

import pytest

from spoti_web.core import CredentialContext
from tests.spotify_fakes import FakeSpotify


@pytest.fixture(autouse=True)
def _no_party_delays(monkeypatch):
    """Party-play pacing delays are irrelevant in tests."""
    monkeypatch.setattr("spoti_web.spotify.party.DRAIN_DELAY_SECONDS", 0)
    monkeypatch.setattr("spoti_web.spotify.party.PLAY_SETTLE_DELAY_SECONDS", 0)


@pytest.fixture
def credentials() -> CredentialContext:
    return CredentialContext(access_token="stale-access", refresh_token="refresh-1")


@pytest.fixture
def fake_spotify(monkeypatch) -> FakeSpotify:
    """Route every SpotifySession to an in-memory FakeSpotify."""
    fake = FakeSpotify()
    monkeypatch.setattr(
        "spoti_web.spotify.client.build_spotify_client",
        fake.for_token,
        raising=True,
    )
    return fake


@pytest.fixture
def refresh_calls(monkeypatch) -> List[CredentialContext]:
    """
    Replace the token refresh with a local one that hands out
    "fresh-access-<n>" and records the credentials it was given.
    """
    calls: List[CredentialContext] = []

    def fake_refresh(current: CredentialContext) -> CredentialContext:
        calls.append(current)
        return CredentialContext(
            access_token=f"fresh-access-{len(calls)}",
            refresh_token=current.refresh_token,
        )

    monkeypatch.setattr(
        "spoti_web.spotify.client.refresh_credentials", fake_refresh, raising=True
    )
    return calls
