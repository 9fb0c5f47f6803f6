"""Request-scoped Spotify client with bounded retry and token refresh.

Every core operation opens its own SpotifySession from the caller's
CredentialContext. The session owns the spotipy client built for that token
pair, so concurrent requests for different users never share credentials.

All outbound calls go through SpotifySession.call(), which:
  - retries any vendor failure up to RetryPolicy.max_attempts (sequentially);
  - on an expired/unauthorized failure, refreshes the token pair, rebuilds the
    client and makes exactly one more attempt whose outcome is final;
  - raises AuthError or VendorError tagged with the operation name once the
    budget is spent.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests
import spotipy
from spotipy.exceptions import SpotifyException

from spoti_web.config import MAX_CALL_ATTEMPTS, SPOTIFY_REQUESTS_TIMEOUT
from spoti_web.core import (
    CredentialContext,
    OperationResult,
    log_error,
    log_retry,
)

from .auth import refresh_credentials
from .errors import AuthError, VendorError

VENDOR_ERRORS = (SpotifyException, requests.RequestException)

EXPIRED_MARKER = "expired"


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = MAX_CALL_ATTEMPTS
    refresh_on_expiry: bool = True


def build_spotify_client(access_token: str) -> spotipy.Spotify:
    # spotipy's own retry layer is disabled: RetryPolicy is the only bound.
    return spotipy.Spotify(
        auth=access_token,
        requests_timeout=SPOTIFY_REQUESTS_TIMEOUT,
        retries=0,
        status_retries=0,
    )


def error_status(error: BaseException) -> Optional[int]:
    """HTTP status carried by a vendor error, if any."""
    if isinstance(error, SpotifyException):
        return error.http_status
    if isinstance(error, requests.HTTPError) and error.response is not None:
        return error.response.status_code
    return getattr(error, "status", None)


def is_token_expired(error: BaseException) -> bool:
    """
    True when the failure means the access token is no longer accepted:
    HTTP 401, or an error message mentioning expiry.
    """
    if error_status(error) == 401:
        return True
    message = error.msg if isinstance(error, SpotifyException) else str(error)
    return EXPIRED_MARKER in str(message).lower()


class SpotifySession:
    def __init__(
        self,
        credentials: CredentialContext,
        policy: Optional[RetryPolicy] = None,
    ) -> None:
        self.credentials = credentials
        self.policy = policy or RetryPolicy()
        self._client: Optional[spotipy.Spotify] = None

    @property
    def client(self) -> spotipy.Spotify:
        if self._client is None:
            self._client = build_spotify_client(self.credentials.access_token)
        return self._client

    def refresh(self) -> CredentialContext:
        """Swap in a refreshed token pair; AuthError propagates untouched."""
        self.credentials = refresh_credentials(self.credentials)
        self._client = None
        return self.credentials

    def call(
        self,
        name: str,
        fn: Callable[..., Any],
        *args: Any,
        policy: Optional[RetryPolicy] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Invoke ``fn(client, *args, **kwargs)`` under the retry policy.

        ``name`` only labels logs and errors; it never changes dispatch.
        """
        policy = policy or self.policy
        attempt = 0
        refreshed = False

        while True:
            attempt += 1
            try:
                return fn(self.client, *args, **kwargs)
            except VENDOR_ERRORS as e:
                expired = is_token_expired(e)

                if refreshed or attempt >= policy.max_attempts:
                    log_error(f"{name} failed after {attempt} attempt(s): {e}")
                    if expired:
                        raise AuthError(
                            f"{name} failed: access token could not be renewed",
                            status=error_status(e),
                            cause=e,
                        ) from e
                    raise VendorError(name, cause=e, status=error_status(e)) from e

                log_retry(name, attempt, policy.max_attempts, e)
                if expired and policy.refresh_on_expiry:
                    self.refresh()
                    refreshed = True

    def result(self, data: Any = None) -> OperationResult:
        return OperationResult(credentials=self.credentials, data=data)
