"""Error types and the shared failure-message mapping."""

from __future__ import annotations

from typing import Any


class FiledeckError(Exception):
    """Base class for filedeck errors."""


class RemoteRequestError(FiledeckError):
    """A request to the items API failed.

    ``status_code`` is None for transport failures (connection refused,
    timeout). ``body`` is the decoded JSON error body when the server sent
    one, else None.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def detail(self) -> str:
        """Human-readable description carried by the error body, if any."""
        return error_detail(self.body)


def error_detail(body: Any) -> str:
    """Pull ``desc`` (preferred) or ``message`` out of an error body."""
    if not isinstance(body, dict):
        return ""
    for key in ("desc", "message"):
        value = body.get(key)
        if value:
            return str(value)
    return ""


def describe_failure(fallback: str, error: BaseException | None = None) -> str:
    """Build the user-facing message for a failed operation.

    ``fallback`` is the operation's own message. A server-supplied
    description is appended after a single space when present.
    """
    detail = error.detail if isinstance(error, RemoteRequestError) else ""
    return f"{fallback} {detail}" if detail else fallback
