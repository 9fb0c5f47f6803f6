"""Mapping of Spotify response bodies onto the UI-facing records.

All functions are pure: they read a vendor dict and return pydantic records,
substituting None/empty defaults for anything Spotify leaves out.
"""

from typing import Any, Dict, Iterable, List, Optional
import uuid

from spoti_web.core import (
    Album,
    Artist,
    NormalizedPlaylist,
    NormalizedTrack,
    PlaybackState,
    PlayContext,
    PlayOffset,
    SearchTrack,
)


def _first_image_url(images: Optional[List[Optional[Dict]]]) -> Optional[str]:
    for image in images or []:
        if image is not None:
            return image.get("url")
    return None


def _spotify_url(entity: Dict[str, Any]) -> Optional[str]:
    return (entity.get("external_urls") or {}).get("spotify")


def _artists(track: Dict[str, Any]) -> List[Artist]:
    return [
        Artist(id=a.get("id"), name=a.get("name"), href=a.get("href"))
        for a in track.get("artists") or []
        if a
    ]


def _album(track: Dict[str, Any]) -> Album:
    album = track.get("album") or {}
    return Album(
        id=album.get("id"),
        name=album.get("name"),
        image=_first_image_url(album.get("images")),
    )


def playlist_context_uri(playlist_id: str) -> str:
    return f"spotify:playlist:{playlist_id}"


def track_uri(track_id: str) -> str:
    return f"spotify:track:{track_id}"


def normalize_playlist(item: Dict[str, Any]) -> NormalizedPlaylist:
    item = item or {}
    return NormalizedPlaylist(
        name=item.get("name"),
        image=_first_image_url(item.get("images")),
        type=item.get("type"),
        id=item.get("id"),
        description=item.get("description"),
        url=_spotify_url(item),
        uri=item.get("uri"),
        owner=(item.get("owner") or {}).get("display_name"),
        snapshot_id=item.get("snapshot_id"),
    )


def normalize_playlists(items: Iterable[Dict[str, Any]]) -> List[NormalizedPlaylist]:
    return [normalize_playlist(item) for item in items]


def _track_record(
    track: Dict[str, Any],
    *,
    local: bool,
    date_added: Optional[str],
    position: Optional[int],
    context_uri: Optional[str],
) -> NormalizedTrack:
    return NormalizedTrack(
        local=local,
        name=track.get("name"),
        artists=_artists(track),
        album=_album(track),
        # Local files carry no Spotify id
        id=track.get("id") or str(uuid.uuid4()),
        uri=track.get("uri"),
        date_added=date_added,
        href=track.get("href"),
        url=_spotify_url(track),
        play_context=PlayContext(
            context_uri=context_uri,
            offset=PlayOffset(position=position),
            position_ms=0,
        ),
        duration_ms=track.get("duration_ms"),
    )


def normalize_track_item(
    item: Dict[str, Any],
    index: int,
    offset: int = 0,
    context_uri: Optional[str] = None,
) -> NormalizedTrack:
    """
    Normalize one entry of a paged track collection.

    ``item`` is the wrapper Spotify returns in playlist, saved-tracks and
    recently-played pages ({track, added_at | played_at, is_local}).
    The position is ``index + offset``: the track's absolute position in its
    source collection.
    """
    item = item or {}
    track = item.get("track") or {}
    return _track_record(
        track,
        local=bool(item.get("is_local", track.get("is_local", False))),
        date_added=item.get("added_at") or item.get("played_at"),
        position=index + offset,
        context_uri=context_uri,
    )


def normalize_track_items(
    items: Iterable[Dict[str, Any]],
    offset: int = 0,
    context_uri: Optional[str] = None,
) -> List[NormalizedTrack]:
    return [
        normalize_track_item(item, index, offset, context_uri)
        for index, item in enumerate(items)
    ]


def normalize_search_track(track: Dict[str, Any]) -> SearchTrack:
    """
    Normalize a bare track object from a search page.

    Search hits are played in the context of their album, at
    ``track_number - 1``.
    """
    track = track or {}
    album = track.get("album") or {}
    track_number = track.get("track_number")
    album_image = _first_image_url(album.get("images"))
    return SearchTrack(
        local=bool(track.get("is_local", False)),
        name=track.get("name"),
        artists=_artists(track),
        album=Album(id=album.get("id"), name=album.get("name"), image=album_image),
        id=track.get("id") or str(uuid.uuid4()),
        uri=track.get("uri"),
        href=track.get("href"),
        url=_spotify_url(track),
        play_context=PlayContext(
            context_uri=f"spotify:album:{album.get('id')}" if album.get("id") else None,
            offset=PlayOffset(
                position=track_number - 1 if isinstance(track_number, int) else None
            ),
            position_ms=0,
        ),
        duration_ms=track.get("duration_ms"),
        image=album_image,
    )


def empty_track() -> NormalizedTrack:
    """Placeholder item for a player with nothing loaded."""
    return NormalizedTrack(
        name="",
        artists=[Artist(id="", name="", href="")],
        album=Album(id="", name="", image=""),
        id="",
        uri="",
        href="",
        url="",
    )


def normalize_playback_state(body: Optional[Dict[str, Any]]) -> PlaybackState:
    """
    Normalize /me/player. Spotify answers 204 (no body) when no device is
    active; that maps to a stopped state with an empty item.
    """
    body = body or {}
    raw_item = body.get("item")
    if raw_item:
        item = _track_record(
            raw_item,
            local=bool(raw_item.get("is_local", False)),
            date_added=None,
            position=None,
            context_uri=(body.get("context") or {}).get("uri"),
        )
    else:
        item = empty_track()

    return PlaybackState(
        current_type=body.get("currently_playing_type"),
        device=body.get("device"),
        is_playing=bool(body.get("is_playing", False)),
        item=item,
        repeat=body.get("repeat_state"),
        shuffle=body.get("shuffle_state"),
        image=_first_image_url(((raw_item or {}).get("album") or {}).get("images")),
        progress_ms=body.get("progress_ms") or 0,
    )


def is_listable(track: NormalizedTrack) -> bool:
    """Listings only show streamable tracks that have a name."""
    return bool(track.name) and not track.local


def listable_tracks(tracks: Iterable[NormalizedTrack]) -> List[NormalizedTrack]:
    return [t for t in tracks if is_listable(t)]
