from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from spoti_web.core import CredentialContext
from spoti_web.spotify import (
    add_to_queue,
    change_device,
    get_devices,
    get_playback_state,
    get_queue,
    next_track,
    pause,
    play,
    previous_track,
    set_shuffle,
    toggle_play,
)

from ..credentials import credentials_from_headers
from ..responses import data_response, empty_response

router = APIRouter()


def _parse_flag(value: str | None) -> bool | None:
    if value == "true":
        return True
    if value == "false":
        return False
    return None


@router.get("/get-queue")
def player_queue(
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> JSONResponse:
    return data_response(get_queue(credentials))


@router.post("/add-to-queue")
def player_add_to_queue(
    track: str | None = Query(default=None),
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> Response:
    return empty_response(add_to_queue(credentials, track))


@router.post("/change-device")
def player_change_device(
    device: str | None = Query(default=None),
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> Response:
    return empty_response(change_device(credentials, device))


@router.put("/set-shuffle")
def player_set_shuffle(
    shuffle: str | None = Query(default=None),
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> Response:
    return empty_response(set_shuffle(credentials, _parse_flag(shuffle)))


@router.get("/play")
def player_play(
    tracks: str | None = Query(default=None),
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> Response:
    """
    Start or resume playback. ``tracks`` is an optional JSON play context
    ({device_id, context_uri, uris, offset, position_ms}).
    """
    return empty_response(play(credentials, tracks))


@router.put("/toggle-play")
def player_toggle(
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> Response:
    return empty_response(toggle_play(credentials))


@router.put("/pause")
def player_pause(
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> Response:
    return empty_response(pause(credentials))


@router.put("/next")
def player_next(
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> Response:
    return empty_response(next_track(credentials))


@router.put("/prev")
def player_prev(
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> Response:
    return empty_response(previous_track(credentials))


@router.get("/devices")
def player_devices(
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> JSONResponse:
    return data_response(get_devices(credentials))


@router.get("/playback-state")
def player_state(
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> JSONResponse:
    return data_response(get_playback_state(credentials))
