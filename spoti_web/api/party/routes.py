from fastapi import APIRouter, Depends, Response

from spoti_web.core import CredentialContext
from spoti_web.spotify import enqueue, party_play

from ..credentials import credentials_from_headers
from ..responses import empty_response
from .schemas import EnqueueRequest, PartyPlayRequest

router = APIRouter()


@router.post("/enqueue")
def party_enqueue(
    body: EnqueueRequest,
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> Response:
    """
    Add a track to the party playlist, either at the end or (next=true)
    right after the track that is playing now.
    """
    return empty_response(enqueue(credentials, body.track, play_next=body.next))


@router.post("/party-play")
def party_start(
    body: PartyPlayRequest,
    credentials: CredentialContext = Depends(credentials_from_headers),
) -> Response:
    """
    Refill the party playlist with ``tracks`` and play it from ``startAt``.
    """
    return empty_response(party_play(credentials, body.tracks, body.startAt))
