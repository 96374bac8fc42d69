"""Exception hierarchy for manifest fetching.

Registry lookups never raise; a failed lookup becomes a
``LookupStatus.LOOKUP_FAILED`` outcome instead.
"""


class DepRadarError(Exception):
    """Base class for all DepRadar errors."""


class FetchError(DepRadarError):
    """A manifest URL could not be turned into a ``Manifest``.

    Attributes:
        url: The manifest URL that failed.
        message: Human-readable reason.
    """

    def __init__(self, url: str, message: str):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.message = message


class TransportError(FetchError):
    """Connection, DNS, timeout or invalid-URL failure."""


class HTTPStatusError(FetchError):
    """The manifest endpoint answered with a status other than 200."""

    def __init__(self, url: str, status: int):
        super().__init__(url, f"non-200 response: {status}")
        self.status = status


class DecodeError(FetchError):
    """The manifest body is not a JSON document of the expected shape."""
