"""Errors raised by the Core.

There is a single failure kind: a request (root, homeworld or film) that
could not be completed. Its message is the original transport/parse message,
untouched, so callers see exactly what went wrong on the wire.
"""

from __future__ import annotations


class FetchError(Exception):
    """A request failed; the whole aggregation is aborted.

    `str(error)` is the original error message. Raise it `from` the original
    exception so the transport error stays available as `__cause__`.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
