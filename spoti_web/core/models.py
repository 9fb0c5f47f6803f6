from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class CredentialContext:
    """
    Access/refresh token pair for one Spotify session.

    Instances are never mutated: a token refresh produces a new
    CredentialContext that must be handed back to the caller.
    """

    access_token: str
    refresh_token: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
        }


@dataclass
class OperationResult:
    """
    Outcome of a core operation: the credentials to use for the next request
    and an optional JSON-serializable payload.
    """

    credentials: CredentialContext
    data: Any = None


class Artist(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    href: Optional[str] = None


class Album(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None


class PlayOffset(BaseModel):
    position: Optional[int] = None


class PlayContext(BaseModel):
    context_uri: Optional[str] = None
    offset: PlayOffset = Field(default_factory=PlayOffset)
    position_ms: int = 0


class NormalizedPlaylist(BaseModel):
    name: Optional[str] = None
    image: Optional[str] = None
    type: Optional[str] = None
    id: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    uri: Optional[str] = None
    owner: Optional[str] = None
    snapshot_id: Optional[str] = None


class NormalizedTrack(BaseModel):
    """
    UI-facing track record.

    play_context.offset.position is the absolute position of the track in the
    collection it was listed from; party-queue inserts and seeks rely on it.
    """

    local: bool = False
    name: Optional[str] = None
    artists: List[Artist] = Field(default_factory=list)
    album: Album = Field(default_factory=Album)
    id: str
    uri: Optional[str] = None
    date_added: Optional[str] = None
    href: Optional[str] = None
    url: Optional[str] = None
    play_context: PlayContext = Field(default_factory=PlayContext)
    duration_ms: Optional[int] = None


class SearchTrack(NormalizedTrack):
    image: Optional[str] = None


class PlaybackState(BaseModel):
    current_type: Optional[str] = None
    device: Optional[Dict[str, Any]] = None
    is_playing: bool = False
    item: NormalizedTrack
    repeat: Optional[str] = None
    shuffle: Optional[bool] = None
    image: Optional[str] = None
    progress_ms: int = 0
