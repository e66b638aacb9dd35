from __future__ import annotations


class BGPViewError(Exception):
    """Base class for every error raised by the client."""


class URLConstructionError(BGPViewError, ValueError):
    """The base address or a path segment could not form a valid request URL."""


class TransportError(BGPViewError):
    """The request never produced a response (DNS, connect, read, deadline)."""


class RemoteError(BGPViewError):
    """The service answered with a status other than 200.

    ``body`` is the raw response text. Error bodies are not guaranteed to
    follow the success schema, so it is never decoded.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"{status_code}: {body}")
        self.status_code = status_code
        self.body = body


class DecodeError(BGPViewError):
    """A 200 response whose body does not match the expected shape."""
