"""Playback control: play/pause, skipping, shuffle, devices and the player queue."""

import json
from typing import Any, Dict, Optional

from spoti_web.config import PARTY_DEVICE_ID
from spoti_web.core import CredentialContext, OperationResult, PlaybackState

from .client import SpotifySession
from .errors import ValidationError
from .normalize import normalize_playback_state, track_uri

# Keyword arguments accepted by spotipy's start_playback()
PLAY_CONTEXT_KEYS = ("device_id", "context_uri", "uris", "offset", "position_ms")


def parse_play_context(raw: Optional[str]) -> Dict[str, Any]:
    """
    Decode the serialized play context sent by the front end, e.g.
    '{"context_uri": "spotify:playlist:x", "offset": {"position": 3},
      "position_ms": 0, "device_id": "abc"}'.

    An empty value means "resume whatever is loaded".
    """
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Error: Invalid play context ({e.msg})") from e
    if not isinstance(payload, dict):
        raise ValidationError("Error: Play context must be a JSON object")
    return {key: payload[key] for key in PLAY_CONTEXT_KEYS if key in payload}


def start_playback(session: SpotifySession, play_context: Dict[str, Any]) -> None:
    session.call("start_playback", lambda sp: sp.start_playback(**play_context))


def fetch_playback_state(session: SpotifySession) -> PlaybackState:
    body = session.call("current_playback", lambda sp: sp.current_playback())
    return normalize_playback_state(body)


def play(
    credentials: CredentialContext, play_context: Optional[str] = None
) -> OperationResult:
    session = SpotifySession(credentials)
    start_playback(session, parse_play_context(play_context))
    return session.result()


def pause(credentials: CredentialContext) -> OperationResult:
    session = SpotifySession(credentials)
    session.call("pause_playback", lambda sp: sp.pause_playback())
    return session.result()


def toggle_play(credentials: CredentialContext) -> OperationResult:
    session = SpotifySession(credentials)
    state = fetch_playback_state(session)

    if state.is_playing:
        session.call("pause_playback", lambda sp: sp.pause_playback())
    else:
        start_playback(session, {})
    return session.result()


def next_track(credentials: CredentialContext) -> OperationResult:
    session = SpotifySession(credentials)
    session.call("next_track", lambda sp: sp.next_track())
    return session.result()


def previous_track(credentials: CredentialContext) -> OperationResult:
    session = SpotifySession(credentials)
    session.call("previous_track", lambda sp: sp.previous_track())
    return session.result()


def set_shuffle(
    credentials: CredentialContext, state: Optional[bool]
) -> OperationResult:
    if state is None:
        raise ValidationError("Error: Missing toggle flag in query parameter")

    session = SpotifySession(credentials)
    session.call("shuffle", lambda sp: sp.shuffle(state))
    return session.result()


def change_device(
    credentials: CredentialContext, device_id: Optional[str]
) -> OperationResult:
    if not device_id:
        raise ValidationError("Error: Missing device id in query parameter")

    session = SpotifySession(credentials)
    session.call(
        "transfer_playback",
        lambda sp: sp.transfer_playback(device_id, force_play=False),
    )
    return session.result()


def get_devices(credentials: CredentialContext) -> OperationResult:
    session = SpotifySession(credentials)
    body = session.call("devices", lambda sp: sp.devices()) or {}
    return session.result(body.get("devices") or [])


def get_playback_state(credentials: CredentialContext) -> OperationResult:
    session = SpotifySession(credentials)
    return session.result(fetch_playback_state(session))


def get_queue(credentials: CredentialContext) -> OperationResult:
    session = SpotifySession(credentials)
    body = session.call("queue", lambda sp: sp.queue()) or {}
    return session.result(body.get("queue") or [])


def add_to_queue(
    credentials: CredentialContext, track_id: Optional[str]
) -> OperationResult:
    """Append a track to the party device's player queue (not the playlist)."""
    if not track_id:
        raise ValidationError("Error: Missing track uri in query parameter")

    session = SpotifySession(credentials)
    session.call(
        "add_to_queue",
        lambda sp: sp.add_to_queue(track_uri(track_id), device_id=PARTY_DEVICE_ID),
    )
    return session.result()
