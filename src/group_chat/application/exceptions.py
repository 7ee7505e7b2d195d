from __future__ import annotations


class AppError(Exception):
    """Base application error; ``detail`` is what the client gets to see."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class ValidationError(AppError):
    """Missing, blank or oversized input, on HTTP or on the socket."""


class NotJoinedError(AppError):
    """Chat event received on a connection that has not joined."""


class AlreadyJoinedError(AppError):
    pass
