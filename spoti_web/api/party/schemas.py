from typing import List, Optional

from pydantic import BaseModel


class EnqueueRequest(BaseModel):
    track: Optional[str] = None
    next: bool = False


class PartyPlayRequest(BaseModel):
    tracks: Optional[List[str]] = None
    startAt: Optional[str] = None
