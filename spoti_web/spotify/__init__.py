"""Public façade for the spoti_web.spotify package.

This module exposes the Spotify Web API integration: authentication, the
retrying request-scoped session, library and playback operations, and the
party-queue workflows. Callers should import these symbols from this façade
instead of the internal modules.
"""

from .auth import (
    build_spotify_auth_url,
    exchange_code_for_token,
    refresh_credentials,
)
from .client import RetryPolicy, SpotifySession, is_token_expired
from .errors import (
    AuthError,
    PartyPlayError,
    SpotiWebError,
    ValidationError,
    VendorError,
)
from .library import (
    fetch_all_pages,
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
from .party import enqueue, party_play
from .player import (
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

__all__ = [
    "build_spotify_auth_url",
    "exchange_code_for_token",
    "refresh_credentials",
    "RetryPolicy",
    "SpotifySession",
    "is_token_expired",
    "SpotiWebError",
    "ValidationError",
    "AuthError",
    "VendorError",
    "PartyPlayError",
    "fetch_all_pages",
    "get_me",
    "get_username",
    "get_user_playlists",
    "get_playlist",
    "get_playlist_tracks",
    "get_saved_tracks",
    "get_recently_played",
    "search_tracks",
    "replace_playlist_items",
    "enqueue",
    "party_play",
    "play",
    "pause",
    "toggle_play",
    "next_track",
    "previous_track",
    "set_shuffle",
    "change_device",
    "get_devices",
    "get_playback_state",
    "get_queue",
    "add_to_queue",
]
