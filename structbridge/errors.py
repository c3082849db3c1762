"""Error types raised by the value classes.

The dispatch engine itself never raises for a failed match or conversion;
it reports those as ``(value, False)`` results.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base error for structbridge."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class NoSuchElementError(BridgeError, LookupError):
    """Payload requested from an empty Option or from the wrong Either side."""
