"""rangeio: Sequential, file-like reads over S3, HTTP, and local range-addressable objects."""

from rangeio.errors import RangeIOError, ReadModifiedError, SourceFetchError
from rangeio.reader import RangeReader, open_reader

__all__ = [
    "RangeIOError",
    "RangeReader",
    "ReadModifiedError",
    "SourceFetchError",
    "open_reader",
]
