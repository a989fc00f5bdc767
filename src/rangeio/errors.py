"""Exceptions raised by rangeio readers and sources."""


class RangeIOError(OSError):
    """Base class for rangeio errors."""


class ReadModifiedError(RangeIOError):
    """
    Raised when the remote object changed after the reader captured its baseline.

    The reader remembers the condition: once raised, every later non-empty read on
    the same reader raises it again, including after ``rewind()``.
    """

    def __init__(self, uri: str, message: str | None = None) -> None:
        self.uri = uri
        super().__init__(message or f"{uri} was modified after the reader was opened")


class SourceFetchError(RangeIOError):
    """Raised when a range source fails for any reason other than a precondition."""
