"""Credential transport between the front end and the API.

The front end sends its token pair in the ``access_token`` and
``refresh_token`` request headers and must pick the (possibly refreshed)
pair back up from the same response headers.
"""

from typing import Dict

from fastapi import Header

from spoti_web.core import CredentialContext
from spoti_web.spotify import AuthError

ACCESS_TOKEN_HEADER = "access_token"
REFRESH_TOKEN_HEADER = "refresh_token"


def credentials_from_headers(
    access_token: str | None = Header(default=None, convert_underscores=False),
    refresh_token: str | None = Header(default=None, convert_underscores=False),
) -> CredentialContext:
    # A lone refresh token is enough: the first call gets a 401 and refreshes.
    if not access_token and not refresh_token:
        raise AuthError("Error: Missing credentials headers", status=401)
    return CredentialContext(
        access_token=access_token or "",
        refresh_token=refresh_token or "",
    )


def credential_headers(credentials: CredentialContext) -> Dict[str, str]:
    return {
        ACCESS_TOKEN_HEADER: credentials.access_token,
        REFRESH_TOKEN_HEADER: credentials.refresh_token,
    }
