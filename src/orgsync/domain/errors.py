"""Errors raised by the reconciliation core and its remote collaborators."""

from __future__ import annotations


class PreconditionError(RuntimeError):
    """Raised when a gated operation runs before the phase it depends on."""


class RemoteError(RuntimeError):
    """Raised when the remote platform fails a read or write."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
