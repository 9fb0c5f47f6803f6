from typing import List, Optional

from pydantic import BaseModel


class SearchRequest(BaseModel):
    searchQuery: Optional[str] = None


class ReplaceItemsRequest(BaseModel):
    playlistId: Optional[str] = None
    uris: Optional[List[str]] = None
