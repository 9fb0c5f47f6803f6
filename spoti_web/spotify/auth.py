import secrets
from typing import Dict, Optional
from urllib.parse import urlencode

import requests

from spoti_web.config import (
    SCOPES,
    SPOTIFY_AUTH_URL,
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_REDIRECT_URI,
    SPOTIFY_REQUESTS_TIMEOUT,
    SPOTIFY_TOKEN_URL,
)
from spoti_web.core import CredentialContext, log_step, log_success, log_warning

from .errors import AuthError, ValidationError


def generate_oauth_state(length: int = 16) -> str:
    return secrets.token_urlsafe(length)


def build_spotify_auth_url(state: Optional[str] = None) -> str:
    """
    Build the Spotify authorize URL the browser is redirected to on /login.
    """
    auth_query_parameters = {
        "response_type": "code",
        "redirect_uri": SPOTIFY_REDIRECT_URI,
        "scope": " ".join(SCOPES),
        "client_id": SPOTIFY_CLIENT_ID,
        "state": state or generate_oauth_state(),
    }
    return f"{SPOTIFY_AUTH_URL}?{urlencode(auth_query_parameters)}"


def _post_token_request(token_data: Dict, failure_message: str) -> Dict:
    try:
        r = requests.post(
            SPOTIFY_TOKEN_URL, data=token_data, timeout=SPOTIFY_REQUESTS_TIMEOUT
        )
        r.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise AuthError(failure_message, status=status, cause=e) from e
    except requests.RequestException as e:
        raise AuthError(failure_message, cause=e) from e
    return r.json()


def exchange_code_for_token(code: str) -> Dict:
    """
    Exchange the authorization code from the /callback redirect for a token
    payload ({access_token, refresh_token, expires_in, scope, token_type}).
    """
    if not code:
        raise ValidationError("Error: missing code")

    token_data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": SPOTIFY_REDIRECT_URI,
        "client_id": SPOTIFY_CLIENT_ID,
        "client_secret": SPOTIFY_CLIENT_SECRET,
    }
    token_info = _post_token_request(token_data, "Callback error")
    log_success("Authorization code exchanged for a token pair.")
    return token_info


def refresh_credentials(credentials: CredentialContext) -> CredentialContext:
    """
    Exchange the refresh token for a new access token.

    Spotify may rotate the refresh token; when the response omits one, the
    current refresh token stays valid. A rejected refresh (revoked or
    malformed token) raises AuthError and is not retried.
    """
    if not credentials.refresh_token:
        raise AuthError("Missing refresh token", status=401)

    log_step("Refreshing Spotify access token...")
    token_data = {
        "grant_type": "refresh_token",
        "refresh_token": credentials.refresh_token,
        "client_id": SPOTIFY_CLIENT_ID,
        "client_secret": SPOTIFY_CLIENT_SECRET,
    }
    try:
        token_info = _post_token_request(token_data, "Token refresh rejected")
    except AuthError as e:
        log_warning(f"Token refresh failed (status={e.status}).")
        raise

    access_token = token_info.get("access_token")
    if not access_token:
        raise AuthError("Token refresh returned no access token")

    log_success("Spotify access token refreshed.")
    return CredentialContext(
        access_token=access_token,
        refresh_token=token_info.get("refresh_token") or credentials.refresh_token,
    )
