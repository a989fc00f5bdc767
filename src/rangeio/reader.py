"""Buffered, file-like reader over range-addressable objects."""

from collections.abc import Callable, Iterator
import io
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from rangeio.errors import ReadModifiedError
from rangeio.sources.base import PreconditionFailed, RangeSource
from rangeio.sources.http import HTTPSource
from rangeio.sources.local import LocalFileSource
from rangeio.sources.s3 import S3Source

logger = logging.getLogger(__name__)

DEFAULT_LINE_BUFFER_SIZE = 5 * 1024 * 1024


def _as_separator(separator: bytes | str) -> bytes:
    if isinstance(separator, str):
        separator = separator.encode("utf-8")
    if not separator:
        raise ValueError("separator must be non-empty")
    return separator


class RangeReader:
    """
    Sequential, file-like reader over a RangeSource.

    Keeps a cursor over the remote object and turns reads and line iteration into
    byte-range fetches. Every fetch is conditional on the last-modified timestamp
    captured when the reader was created, so reading an object that changed
    underneath the cursor raises ReadModifiedError instead of mixing versions.

    The cursor may sit past the end of the object: a read that extends beyond the
    end delivers the available bytes and still moves the cursor to the requested
    end position.

    Instances are not thread-safe. Independent readers may share a source.
    """

    def __init__(
        self,
        source: RangeSource,
        line_buffer_size: int = DEFAULT_LINE_BUFFER_SIZE,
        read_ahead: int = 0,
    ) -> None:
        """
        Initialize the reader.

        Args:
            source: RangeSource to read from.
            line_buffer_size: Bytes fetched per refill while splitting lines
                (default: 5MB).
            read_ahead: Minimum number of bytes fetched by a read. Reads that fall
                inside previously fetched data are then served without a fetch
                (default: 0, fetch exactly what is requested).

        Raises:
            ValueError: If line_buffer_size is not positive or read_ahead is negative.
            SourceFetchError: If the source's last-modified timestamp cannot be read.
        """
        if line_buffer_size <= 0:
            raise ValueError("line_buffer_size must be positive")
        if read_ahead < 0:
            raise ValueError("read_ahead must be non-negative")

        self.source = source
        self.line_buffer_size = line_buffer_size
        self.read_ahead = read_ahead

        self._pos = 0
        self._buffer = b""
        self._buffer_start = 0
        self._line_buffer = bytearray()
        self._modified = False
        self._last_modified = source.last_modified()

        logger.info(
            "RangeReader initialized (source=%s, last_modified=%s, line_buffer_size=%d)",
            source.uri(),
            self._last_modified,
            line_buffer_size,
        )

    @property
    def pos(self) -> int:
        """Current cursor position in bytes. May be past the end of the object."""
        return self._pos

    @pos.setter
    def pos(self, value: int) -> None:
        if value < 0:
            raise ValueError("position must be non-negative")
        self._pos = value
        # Repositioning drops both buffers; the next read fetches again.
        self._buffer = b""
        self._buffer_start = 0
        self._line_buffer = bytearray()

    def tell(self) -> int:
        return self._pos

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """
        Change the cursor position.

        Args:
            offset: Offset in bytes.
            whence: io.SEEK_SET, io.SEEK_CUR or io.SEEK_END.

        Returns:
            int: The new absolute position.

        Raises:
            ValueError: If whence is invalid or the resulting position is negative.
        """
        if whence == io.SEEK_SET:
            new_pos = offset
        elif whence == io.SEEK_CUR:
            new_pos = self._pos + offset
        elif whence == io.SEEK_END:
            new_pos = self.source.size() + offset
        else:
            raise ValueError(f"Invalid whence value: {whence}")

        self.pos = new_pos
        return self._pos

    def rewind(self) -> None:
        """
        Move the cursor back to the start of the object.

        The last-modified baseline is kept, so a modification that was already
        detected keeps failing reads.
        """
        self.pos = 0

    def eof(self) -> bool:
        """
        Return True if no data is left to deliver.

        Lines already fetched for line splitting but not yet returned by
        ``gets()`` count as remaining data.
        """
        return not self._line_buffer and self._pos >= self.source.size()

    def read(self, size: int | None = None, out: bytearray | None = None) -> bytes:
        """
        Read up to ``size`` bytes from the cursor.

        Args:
            size: Number of bytes to read. None or a negative value reads to the
                end of the object. Zero returns immediately without a fetch.
            out: Optional bytearray that receives the bytes of this call, replacing
                its previous content.

        Returns:
            bytes: The data read. Shorter than ``size`` when the range extends past
            the end of the object.

        Raises:
            ReadModifiedError: If the object changed since the reader was created.
            SourceFetchError: If the source fails to deliver the range.
        """
        if size is not None and size < 0:
            size = None

        data = b"" if size == 0 else self._read(size)
        if out is not None:
            out[:] = data
        return data

    def readinto(self, b: bytearray | memoryview) -> int:
        """
        Read bytes into a pre-allocated, writable buffer.

        Returns:
            int: Number of bytes read (0 at EOF).
        """
        data = self.read(len(b))
        n = len(data)
        b[:n] = data
        return n

    def _read(self, size: int | None, advance_past_eof: bool = True) -> bytes:
        if self._modified:
            raise ReadModifiedError(self.source.uri())

        start = self._pos
        object_size = self.source.size()
        end = max(start, object_size) if size is None else start + size
        stop = min(end, object_size)

        data = self._load(start, stop, object_size) if start < stop else b""

        self._pos = end if advance_past_eof else start + len(data)
        return data

    def _load(self, start: int, stop: int, object_size: int) -> bytes:
        """Return ``[start, stop)``, serving what the buffer holds and fetching the rest."""
        buffer_end = self._buffer_start + len(self._buffer)
        if self._buffer_start <= start and stop <= buffer_end:
            offset = start - self._buffer_start
            return self._buffer[offset : offset + stop - start]

        head = b""
        fetch_start = start
        if self._buffer_start <= start < buffer_end:
            head = self._buffer[start - self._buffer_start :]
            fetch_start = buffer_end
        fetch_end = min(max(stop, fetch_start + self.read_ahead), object_size)

        logger.debug("Fetching %s bytes %d-%d", self.source.uri(), fetch_start, fetch_end)
        result = self.source.fetch(
            fetch_start,
            fetch_end,
            if_unmodified_since=self._last_modified,
        )
        if isinstance(result, PreconditionFailed):
            self._modified = True
            logger.warning(
                "%s was modified since %s, refusing to read", result.uri, self._last_modified
            )
            raise ReadModifiedError(result.uri)

        result = result[: fetch_end - fetch_start]
        self._buffer = result
        self._buffer_start = fetch_start
        return head + result[: stop - fetch_start]

    def _next_line(self, separator: bytes) -> bytes | None:
        search_from = 0
        while True:
            index = self._line_buffer.find(separator, search_from)
            if index >= 0:
                cut = index + len(separator)
                line = bytes(self._line_buffer[:cut])
                del self._line_buffer[:cut]
                return line

            search_from = max(len(self._line_buffer) - len(separator) + 1, 0)
            chunk = self._read(max(self.line_buffer_size, 1), advance_past_eof=False)
            if not chunk:
                break
            self._line_buffer += chunk

        # EOF: flush an unterminated tail, never an empty line
        if not self._line_buffer:
            return None
        line = bytes(self._line_buffer)
        self._line_buffer = bytearray()
        return line

    def gets(self, separator: bytes | str = b"\n") -> bytes | None:
        """
        Return the next line including its separator, or None at end of data.

        Raises:
            ValueError: If separator is empty.
            ReadModifiedError: If the object changed since the reader was created.
        """
        return self._next_line(_as_separator(separator))

    def readline(self, size: int | None = -1, *, separator: bytes | str = b"\n") -> bytes:
        """
        Return the next line, or ``b""`` at end of data.

        Args:
            size: Maximum number of bytes to return, as for io objects. The rest of
                a longer line is returned by the next call. None or a negative value
                means no limit.
            separator: Line separator (default: newline).
        """
        sep = _as_separator(separator)
        if size == 0:
            return b""

        line = self._next_line(sep) or b""
        if size is not None and 0 < size < len(line):
            self._line_buffer[:0] = line[size:]
            line = line[:size]
        return line

    def lines(self, separator: bytes | str = b"\n") -> Iterator[bytes]:
        """
        Iterate over the lines of the object from the current cursor.

        The iterator shares the reader's cursor. Iterating again without
        ``rewind()`` continues where the previous iteration stopped, and calling
        ``read()`` while iterating reads from the raw cursor, past any bytes
        already fetched for line splitting.

        Args:
            separator: Line separator (default: newline). A str is UTF-8 encoded.

        Yields:
            bytes: Each line including its separator. The last line has no
            separator if the object does not end with one.

        Raises:
            ValueError: If separator is empty.
        """
        sep = _as_separator(separator)

        def _iterate() -> Iterator[bytes]:
            while True:
                line = self._next_line(sep)
                if line is None:
                    return
                yield line

        return _iterate()

    def each(self, callback: Callable[[bytes], Any], separator: bytes | str = b"\n") -> None:
        """Call ``callback`` with every remaining line."""
        for line in self.lines(separator):
            callback(line)

    def __iter__(self) -> Iterator[bytes]:
        return self.lines()

    def get_metadata(self) -> dict[str, Any]:
        """
        Get metadata about the underlying object.

        Returns:
            dict[str, Any]: Source metadata including uri, size and last_modified.
        """
        return self.source.get_metadata()


def _create_source(source_str: str, options: dict[str, Any]) -> RangeSource:
    """
    Create a RangeSource from a URI string.

    Args:
        source_str: Source URI (s3://, http://, https://, or local path)
        options: Source-specific options

    Returns:
        RangeSource: Appropriate source implementation

    Raises:
        ValueError: If an S3 URI has no bucket or key
    """
    parsed = urlparse(source_str)

    if parsed.scheme == "s3":
        bucket = parsed.netloc
        key = parsed.path.lstrip("/")

        if not bucket or not key:
            raise ValueError(f"Invalid S3 URI: {source_str}. Expected: s3://bucket/key")

        logger.info("Creating S3Source for s3://%s/%s", bucket, key)
        return S3Source(
            bucket=bucket,
            key=key,
            **{k: v for k, v in options.items() if k in ("client", "region", "profile")},
        )

    elif parsed.scheme in ("http", "https"):
        logger.info("Creating HTTPSource for %s", source_str)
        return HTTPSource(
            url=source_str,
            **{k: v for k, v in options.items() if k in ("headers", "auth", "timeout")},
        )

    else:
        logger.info("Creating LocalFileSource for %s", source_str)
        return LocalFileSource(file_path=source_str)


def open_reader(
    source: str | Path | RangeSource,
    line_buffer_size: int = DEFAULT_LINE_BUFFER_SIZE,
    read_ahead: int = 0,
    **source_options: Any,
) -> RangeReader:
    """
    Open a RangeReader over a source object or URI.

    Args:
        source: Data source. Can be:
            - RangeSource instance
            - S3 URI: 's3://bucket/key'
            - HTTP URL: 'https://example.com/data.csv'
            - Local path: '/path/to/data.csv'
        line_buffer_size: Bytes fetched per refill while splitting lines.
        read_ahead: Minimum number of bytes fetched by a read.
        **source_options: Additional options for specific source types:
            - For S3: client, region, profile
            - For HTTP: headers, auth, timeout

    Returns:
        RangeReader: Reader positioned at the start of the object.

    Raises:
        ValueError: If the source URI is invalid.
        ImportError: If the library required by the source type is missing.
    """
    if isinstance(source, (str, Path)):
        source = _create_source(str(source), source_options)

    return RangeReader(source, line_buffer_size=line_buffer_size, read_ahead=read_ahead)
