"""Read-side library operations: profile, playlists, tracks, search.

Public functions take the caller's CredentialContext and return an
OperationResult; the ``fetch_*`` helpers take an open SpotifySession so that
multi-step workflows reuse one session (and one refresh) across calls.
"""

from typing import Any, Callable, Dict, List, Optional, TypeVar

from spoti_web.config import (
    PLAYLISTS_PAGE_SIZE,
    RECENT_TRACKS_LIMIT,
    RESERVED_PLAYLIST_NAME,
    TRACKS_PAGE_SIZE,
)
from spoti_web.core import (
    CredentialContext,
    NormalizedPlaylist,
    NormalizedTrack,
    OperationResult,
    log_info,
    log_step,
)

from .client import SpotifySession
from .errors import ValidationError
from .normalize import (
    listable_tracks,
    normalize_playlist,
    normalize_playlists,
    normalize_search_track,
    normalize_track_items,
    playlist_context_uri,
)

T = TypeVar("T")


def fetch_all_pages(
    fetch_page: Callable[[int, int], Optional[Dict[str, Any]]],
    normalize_page: Callable[[List[Dict[str, Any]], int], List[T]],
    page_size: int,
) -> List[T]:
    """
    Collect every page of an offset-paginated Spotify collection.

    The next offset is the number of items collected so far, so pages never
    overlap and vendor order is preserved. The loop stops once the collected
    count reaches the page's reported ``total``; a page without ``total``
    counts as its own total, which ends the loop after that page.
    """
    collected: List[T] = []
    while True:
        offset = len(collected)
        body = fetch_page(offset, page_size) or {}
        items = body.get("items") or []

        total = body.get("total")
        if total is None:
            total = len(items)

        collected.extend(normalize_page(items, offset))

        if not items or len(collected) >= total:
            return collected


def fetch_playlist_tracks(
    session: SpotifySession, playlist_id: str
) -> List[NormalizedTrack]:
    """
    Every entry of a playlist, local and nameless ones included, each with
    its absolute position in the playlist.
    """
    context_uri = playlist_context_uri(playlist_id)

    def fetch_page(offset: int, limit: int) -> Dict[str, Any]:
        return session.call(
            "playlist_items",
            lambda sp: sp.playlist_items(playlist_id, limit=limit, offset=offset),
        )

    return fetch_all_pages(
        fetch_page,
        lambda items, offset: normalize_track_items(items, offset, context_uri),
        TRACKS_PAGE_SIZE,
    )


def get_me(credentials: CredentialContext) -> OperationResult:
    session = SpotifySession(credentials)
    profile = session.call("me", lambda sp: sp.me())
    return session.result(profile or {})


def get_username(credentials: CredentialContext) -> OperationResult:
    session = SpotifySession(credentials)
    profile = session.call("me", lambda sp: sp.me()) or {}
    return session.result(profile.get("display_name") or "unknown")


def get_user_playlists(credentials: CredentialContext) -> OperationResult:
    """
    All playlists of the current user, minus the reserved queue playlist.
    """
    session = SpotifySession(credentials)

    def fetch_page(offset: int, limit: int) -> Dict[str, Any]:
        return session.call(
            "current_user_playlists",
            lambda sp: sp.current_user_playlists(limit=limit, offset=offset),
        )

    playlists: List[NormalizedPlaylist] = fetch_all_pages(
        fetch_page,
        lambda items, offset: normalize_playlists(items),
        PLAYLISTS_PAGE_SIZE,
    )
    playlists = [p for p in playlists if p.name != RESERVED_PLAYLIST_NAME]

    log_info(f"{len(playlists)} playlists found.")
    return session.result(playlists)


def get_playlist(
    credentials: CredentialContext, playlist_id: Optional[str]
) -> OperationResult:
    if not playlist_id:
        raise ValidationError("Error: Missing playlist id in query parameter")

    session = SpotifySession(credentials)
    playlist = session.call("playlist", lambda sp: sp.playlist(playlist_id))
    return session.result(normalize_playlist(playlist) if playlist else {})


def get_playlist_tracks(
    credentials: CredentialContext, playlist_id: Optional[str]
) -> OperationResult:
    if not playlist_id:
        raise ValidationError("Error: Missing playlist id in query parameter")

    session = SpotifySession(credentials)
    log_step(f"Fetching tracks of playlist {playlist_id}...")
    tracks = listable_tracks(fetch_playlist_tracks(session, playlist_id))
    return session.result(tracks)


def get_saved_tracks(credentials: CredentialContext) -> OperationResult:
    session = SpotifySession(credentials)

    def fetch_page(offset: int, limit: int) -> Dict[str, Any]:
        return session.call(
            "current_user_saved_tracks",
            lambda sp: sp.current_user_saved_tracks(limit=limit, offset=offset),
        )

    tracks = fetch_all_pages(
        fetch_page,
        lambda items, offset: normalize_track_items(items, offset),
        TRACKS_PAGE_SIZE,
    )
    return session.result(listable_tracks(tracks))


def get_recently_played(credentials: CredentialContext) -> OperationResult:
    session = SpotifySession(credentials)
    body = session.call(
        "current_user_recently_played",
        lambda sp: sp.current_user_recently_played(limit=RECENT_TRACKS_LIMIT),
    ) or {}
    tracks = normalize_track_items(body.get("items") or [])
    return session.result(listable_tracks(tracks))


def search_tracks(
    credentials: CredentialContext, search_term: Optional[str]
) -> OperationResult:
    if not search_term:
        raise ValidationError("Error: Missing search term in query parameter")

    session = SpotifySession(credentials)
    body = session.call(
        "search", lambda sp: sp.search(q=search_term, type="track")
    ) or {}
    items = (body.get("tracks") or {}).get("items") or []
    tracks = [normalize_search_track(item) for item in items]
    return session.result(listable_tracks(tracks))


def replace_playlist_items(
    credentials: CredentialContext,
    playlist_id: Optional[str],
    uris: Optional[List[str]],
) -> OperationResult:
    if not playlist_id or uris is None:
        raise ValidationError("Error: Invalid request")

    session = SpotifySession(credentials)
    session.call(
        "playlist_replace_items",
        lambda sp: sp.playlist_replace_items(playlist_id, uris),
    )
    return session.result()
