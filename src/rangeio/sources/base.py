"""Abstract base class for range-addressable data sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class PreconditionFailed:
    """Fetch result returned when the object no longer matches the expected timestamp."""

    uri: str
    expected: datetime | None = None


FetchResult = bytes | PreconditionFailed


class RangeSource(ABC):
    """
    Abstract base class for range-addressable data sources.

    Provides a unified interface over objects that can only be read by byte range
    (S3 objects, HTTP resources, local files) so a reader can stream them without
    knowing how the bytes are transferred.
    """

    source_type = "unknown"

    @abstractmethod
    def fetch(
        self,
        start: int,
        end: int,
        if_unmodified_since: datetime | None = None,
    ) -> FetchResult:
        """
        Fetch the half-open byte range ``[start, end)``.

        Args:
            start: Offset of the first byte to fetch.
            end: Offset just past the last byte to fetch. Callers keep it within the
                object size.
            if_unmodified_since: Expected last-modified timestamp. When given and the
                object no longer matches it, no data is returned.

        Returns:
            FetchResult: The bytes in the range, or a PreconditionFailed marker.

        Raises:
            SourceFetchError: If the range cannot be fetched.
        """
        ...

    @abstractmethod
    def size(self) -> int:
        """
        Return the current size of the object in bytes.

        Raises:
            SourceFetchError: If the size cannot be determined.
        """
        ...

    @abstractmethod
    def last_modified(self) -> datetime | None:
        """
        Return the object's last-modified timestamp, or None if the source has none.

        Raises:
            SourceFetchError: If the timestamp cannot be determined.
        """
        ...

    @abstractmethod
    def uri(self) -> str:
        """Return an identifier for the object, used in log and error messages."""
        ...

    def get_metadata(self) -> dict[str, Any]:
        """
        Return metadata about the object.

        Returns:
            dict[str, Any]: Metadata containing:
                - 'uri': Object identifier
                - 'size': Size in bytes
                - 'last_modified': Last-modified timestamp (or None)
                - 'source_type': Type of source ('s3', 'http', 'local', ...)
        """
        return {
            "uri": self.uri(),
            "size": self.size(),
            "last_modified": self.last_modified(),
            "source_type": self.source_type,
        }
