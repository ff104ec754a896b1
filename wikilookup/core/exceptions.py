"""Exceptions raised by the API clients and lookups."""


class WikiLookupError(Exception):
    """Base class for every failure a lookup can report."""


class InvalidReferenceError(WikiLookupError, ValueError):
    """The input is not a usable ``"language:Title"`` reference or keyword."""


class TransportError(WikiLookupError):
    """The HTTP request failed or returned an error status."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class ResponseFormatError(WikiLookupError, ValueError):
    """The response body could not be parsed or lacks an expected element."""
