"""Exceptions raised by the Spotify integration.

The HTTP layer maps each of these onto a status code: ``status`` is used
when set, otherwise the response is a 500.
"""

from typing import List, Optional


class SpotiWebError(Exception):
    """Base class for every error surfaced to the HTTP layer."""

    status: Optional[int] = None


class ValidationError(SpotiWebError):
    """A required input is missing or malformed."""

    status = 400


class AuthError(SpotiWebError):
    """The session cannot be (re)authenticated against Spotify."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.cause = cause


class VendorError(SpotiWebError):
    """A Spotify call failed after the retry budget was spent."""

    def __init__(
        self,
        operation: str,
        cause: Optional[BaseException] = None,
        status: Optional[int] = None,
    ) -> None:
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.operation = operation
        self.cause = cause
        self.status = status


class PartyPlayError(VendorError):
    """
    The party-play sequence stopped part-way.

    The party playlist is not rolled back; ``completed_steps`` tells how far
    the sequence got before ``step`` failed. ``auth`` is set when the step
    failed because the session could not be (re)authenticated.
    """

    def __init__(
        self,
        step: str,
        completed_steps: List[str],
        cause: Optional[BaseException] = None,
        status: Optional[int] = None,
        auth: bool = False,
    ) -> None:
        super().__init__(f"party_play:{step}", cause=cause, status=status)
        self.step = step
        self.completed_steps = list(completed_steps)
        self.auth = auth
