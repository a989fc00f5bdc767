"""Shared fixtures: an in-memory range source that records how it is called."""

from datetime import datetime, timedelta, timezone

import pytest
from typing_extensions import override

from rangeio.sources.base import FetchResult, PreconditionFailed, RangeSource

NAMES = ["alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf", "hotel"]

# Header plus eight rows, every line exactly 25 bytes including the newline
CSV_DATA = b"id  ,name      ,   value\n" + b"".join(
    f"{i:04d},{name:<10},{i * 1.5:>8.2f}\n".encode() for i, name in enumerate(NAMES, 1)
)


class MemorySource(RangeSource):
    """RangeSource over a bytes object with a settable last-modified timestamp."""

    source_type = "memory"

    def __init__(self, body: bytes = b"") -> None:
        self.body = body
        self.modified_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.fetches: list[tuple[int, int]] = []
        self.fail_with: Exception | None = None

    @override
    def uri(self) -> str:
        return "memory://test/file/name"

    @override
    def size(self) -> int:
        return len(self.body)

    @override
    def last_modified(self) -> datetime:
        return self.modified_at

    @override
    def fetch(
        self,
        start: int,
        end: int,
        if_unmodified_since: datetime | None = None,
    ) -> FetchResult:
        if self.fail_with is not None:
            raise self.fail_with
        if if_unmodified_since is not None and if_unmodified_since != self.modified_at:
            return PreconditionFailed(self.uri(), if_unmodified_since)
        self.fetches.append((start, end))
        return self.body[start:end]

    def change_last_modified(self) -> None:
        self.modified_at = self.modified_at + timedelta(seconds=1)


def split_keep(data: bytes, separator: bytes) -> list[bytes]:
    """Split ``data`` after every separator, keeping it; no empty trailing piece."""
    parts = []
    start = 0
    while True:
        index = data.find(separator, start)
        if index < 0:
            break
        parts.append(data[start : index + len(separator)])
        start = index + len(separator)
    if start < len(data):
        parts.append(data[start:])
    return parts


@pytest.fixture
def csv_source() -> MemorySource:
    return MemorySource(CSV_DATA)
