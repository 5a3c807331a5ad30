class FeedError(Exception):
    """Base class for every failure that aborts a feed run."""


class FetchError(FeedError):
    """Raised when the source page cannot be retrieved.

    ``status_code`` is None for timeouts and transport failures.
    """

    def __init__(self, url: str, status_code: int | None, reason: str) -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        if status_code is None:
            message = f"Failed to fetch source: {url} ({reason})"
        else:
            message = f"Failed to fetch source: {status_code} {reason} ({url})"
        super().__init__(message)


class ParseError(FeedError):
    """Raised when the HTML document tree cannot be built."""


class WriteError(FeedError):
    """Raised when the output directory or file cannot be written."""


class EmptyFeedError(FeedError):
    """Raised when no items were extracted and the run requires at least one."""


class RenderError(FeedError):
    """Raised when the items cannot be serialized as an RSS document."""
