from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from spoti_web.core import CredentialContext, log_step
from spoti_web.spotify import (
    build_spotify_auth_url,
    exchange_code_for_token,
    refresh_credentials,
)

from ..credentials import credential_headers, credentials_from_headers

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def auth_status(status: str | None = Query(default=None)):
    """
    Landing page the front end opens after its own auth round-trip.
    """
    if status == "success":
        return PlainTextResponse("Success! You can close this page.")
    return PlainTextResponse("An error occured", status_code=500)


@router.get("/login")
def login() -> RedirectResponse:
    """
    Redirect the browser to the Spotify consent page.
    """
    log_step("Redirecting to Spotify authorization...")
    return RedirectResponse(build_spotify_auth_url())


@router.get("/callback")
def auth_callback(code: str | None = Query(default=None)) -> dict:
    """
    Redirect Spotify → exchange the code for a token pair and hand it back.
    """
    return exchange_code_for_token(code or "")


@router.get("/refresh")
def refresh(
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> JSONResponse:
    refreshed = refresh_credentials(credentials)
    return JSONResponse(
        content=refreshed.to_dict(), headers=credential_headers(refreshed)
    )
