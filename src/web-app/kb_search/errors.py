"""Remote call failures and user-facing message selection."""

from __future__ import annotations

from typing import Any


class RemoteCallError(Exception):
    """A remote procedure rejected or could not be reached.

    ``body`` holds the decoded JSON error payload when the server sent one.
    """

    def __init__(
        self,
        message: str | None = None,
        body: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message or "")
        self.message = message
        self.body = body
        self.status_code = status_code


def error_message(error: BaseException, fallback: str) -> str:
    """Pick the message to show for *error*.

    Precedence: server body message, then the error's own message, then
    *fallback*.
    """
    body = getattr(error, "body", None)
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    own = getattr(error, "message", None) or str(error)
    return own or fallback
