from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from spoti_web.core import CredentialContext, log_info
from spoti_web.spotify import (
    get_me,
    get_playlist,
    get_playlist_tracks,
    get_recently_played,
    get_saved_tracks,
    get_user_playlists,
    get_username,
    replace_playlist_items,
    search_tracks,
)

from ..credentials import credentials_from_headers
from ..responses import credentials_response, data_response
from .schemas import ReplaceItemsRequest, SearchRequest

router = APIRouter()


@router.get("/me")
def me(credentials: CredentialContext = Depends(credentials_from_headers)):
    return data_response(get_me(credentials))


@router.get("/user-name")
def user_name(credentials: CredentialContext = Depends(credentials_from_headers)):
    result = get_username(credentials)
    return data_response(result, {"displayName": result.data})


@router.get("/user-playlists")
def user_playlists(
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> JSONResponse:
    """
    List the current user's playlists (the reserved queue playlist is hidden).
    """
    return data_response(get_user_playlists(credentials))


@router.get("/playlist")
def playlist(
    playlist_id: str | None = Query(default=None, alias="playlist"),
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> JSONResponse:
    return data_response(get_playlist(credentials, playlist_id))


@router.get("/playlist-tracks")
def playlist_tracks(
    playlist_id: str | None = Query(default=None, alias="playlist"),
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> JSONResponse:
    result = get_playlist_tracks(credentials, playlist_id)
    log_info(f"Playlist {playlist_id}: {len(result.data)} tracks.")
    return data_response(result)


@router.get("/saved-tracks")
def saved_tracks(
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> JSONResponse:
    return data_response(get_saved_tracks(credentials))


@router.get("/recent-tracks")
def recent_tracks(
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> JSONResponse:
    return data_response(get_recently_played(credentials))


@router.post("/search")
def search(
    body: SearchRequest,
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> JSONResponse:
    return data_response(search_tracks(credentials, body.searchQuery))


@router.post("/replace-playlist-items")
def replace_items(
    body: ReplaceItemsRequest,
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> JSONResponse:
    result = replace_playlist_items(credentials, body.playlistId, body.uris)
    return credentials_response(result)
