"""Public façade for the spoti_web.core package.

This module exposes logging helpers and the data records shared by the
Spotify integration and the HTTP layer. Callers should import these
cross-cutting concerns from this façade instead of the internal submodules.
"""

from .logging_config import configure_logging
from .logging_utils import (
    log_error,
    log_retry,
    log_info,
    log_step,
    log_success,
    log_warning,
)
from .models import (
    Album,
    Artist,
    CredentialContext,
    NormalizedPlaylist,
    NormalizedTrack,
    OperationResult,
    PlaybackState,
    PlayContext,
    PlayOffset,
    SearchTrack,
)

__all__ = [
    "configure_logging",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_retry",
    "CredentialContext",
    "OperationResult",
    "Artist",
    "Album",
    "PlayOffset",
    "PlayContext",
    "NormalizedPlaylist",
    "NormalizedTrack",
    "SearchTrack",
    "PlaybackState",
]
