"""Exception taxonomy for the generation-and-scoring pipeline.

Only configuration and transport problems surface to callers. Parse
failures and empty extractions are handled inside the pipeline and never
raise past it.
"""

from typing import Optional


class CastSentimentError(Exception):
    """Base class for all errors raised by this package."""


class InvalidRequest(CastSentimentError, ValueError):
    """A generation request is malformed (empty subject, non-positive count)."""


class ConfigurationError(CastSentimentError):
    """Required generation-endpoint configuration is missing or invalid."""


class TransportError(CastSentimentError):
    """The generation endpoint did not return a usable response.

    Attributes:
        status: HTTP status code, or ``None`` when the request never completed.
        body: Response body (or the underlying network error text).
    """

    def __init__(self, message: str, status: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body
