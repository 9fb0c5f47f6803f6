"""Party-queue workflows on top of the shared party playlist.

The party playlist (PARTY_PLAYLIST_ID) is the group's play queue: its track
order is the play order, and "play next" inserts land right after the track
that is currently playing.

party_play() runs its steps strictly in sequence:
  1. fetch_queue    - list the current party playlist
  2. drain          - remove its tracks in batches of PLAYLIST_BATCH_SIZE
  3. insert         - add the requested tracks
  4. resolve_start  - re-list the playlist and find the start track's position
  5. play           - start the party device at that position

A failing step aborts the run. Nothing is rolled back: the raised
PartyPlayError names the failing step and the steps already completed, so the
caller knows whether the playlist was left drained or half-filled.
"""

import time
from typing import Callable, List, Optional, TypeVar

from spoti_web.config import (
    PLAYLIST_BATCH_SIZE,
    DRAIN_DELAY_SECONDS,
    PARTY_DEVICE_ID,
    PARTY_PLAYLIST_ID,
    PLAY_SETTLE_DELAY_SECONDS,
)
from spoti_web.core import (
    CredentialContext,
    NormalizedTrack,
    OperationResult,
    log_error,
    log_step,
    log_success,
)

from .client import SpotifySession
from .errors import AuthError, PartyPlayError, ValidationError, VendorError
from .library import fetch_playlist_tracks
from .normalize import track_uri
from .player import fetch_playback_state, start_playback

T = TypeVar("T")


def _batches(items: List[str], size: int) -> List[List[str]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


def _add_to_party_playlist(
    session: SpotifySession, uris: List[str], position: Optional[int] = None
) -> None:
    session.call(
        "playlist_add_items",
        lambda sp, items: sp.playlist_add_items(
            PARTY_PLAYLIST_ID, items, position=position
        ),
        uris,
    )


def position_after(tracks: List[NormalizedTrack], current_uri: Optional[str]) -> int:
    """
    Insert position for a "play next" track: right after the currently
    playing track, or 0 when that track cannot be located in the queue.
    """
    if not current_uri:
        return 0
    for track in tracks:
        position = track.play_context.offset.position
        if track.uri == current_uri and position is not None:
            return position + 1
    return 0


def enqueue(
    credentials: CredentialContext, track_id: Optional[str], play_next: bool = False
) -> OperationResult:
    """
    Add one track to the party playlist: at the end, or right after the
    current track when ``play_next`` is set.
    """
    if not track_id:
        raise ValidationError("Error: Missing track id(s)")

    session = SpotifySession(credentials)
    uri = track_uri(track_id)

    if not play_next:
        log_step(f"Appending {track_id} to the party queue...")
        _add_to_party_playlist(session, [uri])
        return session.result()

    state = fetch_playback_state(session)
    queue = fetch_playlist_tracks(session, PARTY_PLAYLIST_ID)
    position = position_after(queue, state.item.uri)

    log_step(f"Queueing {track_id} next at position {position}...")
    _add_to_party_playlist(session, [uri], position=position)
    return session.result()


def _run_step(step: str, completed: List[str], action: Callable[[], T]) -> T:
    log_step(f"Party play step: {step}")
    try:
        result = action()
    except (AuthError, VendorError) as e:
        log_error(f"Party play stopped at '{step}' after {completed or 'no steps'}.")
        raise PartyPlayError(
            step,
            completed,
            cause=e.cause,
            status=e.status,
            auth=isinstance(e, AuthError),
        ) from e
    completed.append(step)
    return result


def _drain(session: SpotifySession, tracks: List[NormalizedTrack]) -> None:
    # Local files cannot be addressed by uri in a removal request
    uris = [t.uri for t in tracks if t.uri and not t.local]
    for batch in _batches(uris, PLAYLIST_BATCH_SIZE):
        session.call(
            "playlist_remove_all_occurrences_of_items",
            lambda sp, items: sp.playlist_remove_all_occurrences_of_items(
                PARTY_PLAYLIST_ID, items
            ),
            batch,
        )
        time.sleep(DRAIN_DELAY_SECONDS)


def _insert(session: SpotifySession, track_ids: List[str]) -> None:
    uris = [track_uri(tid) for tid in track_ids]
    for batch in _batches(uris, PLAYLIST_BATCH_SIZE):
        _add_to_party_playlist(session, batch)


def _resolve_start(session: SpotifySession, start_track_id: str) -> NormalizedTrack:
    for track in fetch_playlist_tracks(session, PARTY_PLAYLIST_ID):
        if track.id == start_track_id:
            return track
    raise VendorError(
        "resolve_start", cause=LookupError(f"{start_track_id} not in party playlist")
    )


def _play_from(session: SpotifySession, start_track: NormalizedTrack) -> None:
    time.sleep(PLAY_SETTLE_DELAY_SECONDS)
    start_playback(
        session,
        {
            "context_uri": start_track.play_context.context_uri,
            "offset": {"position": start_track.play_context.offset.position},
            "position_ms": start_track.play_context.position_ms,
            "device_id": PARTY_DEVICE_ID,
        },
    )


def party_play(
    credentials: CredentialContext,
    track_ids: Optional[List[str]],
    start_track_id: Optional[str],
) -> OperationResult:
    """
    Replace the party playlist with ``track_ids`` and start playing it on the
    party device from ``start_track_id``.
    """
    if not track_ids or not start_track_id:
        raise ValidationError("Error: Missing options in body")
    if start_track_id not in track_ids:
        raise ValidationError("Error: startAt must be one of the tracks")

    session = SpotifySession(credentials)
    completed: List[str] = []

    log_step(f"Party play: {len(track_ids)} tracks, starting at {start_track_id}")
    current = _run_step(
        "fetch_queue",
        completed,
        lambda: fetch_playlist_tracks(session, PARTY_PLAYLIST_ID),
    )
    _run_step("drain", completed, lambda: _drain(session, current))
    _run_step("insert", completed, lambda: _insert(session, track_ids))
    start_track = _run_step(
        "resolve_start", completed, lambda: _resolve_start(session, start_track_id)
    )
    _run_step("play", completed, lambda: _play_from(session, start_track))

    log_success(
        f"Party play started at position {start_track.play_context.offset.position}."
    )
    return session.result()
