"""Local file system range source implementation."""

from datetime import datetime, timezone
import logging
from pathlib import Path

from typing_extensions import override

from rangeio.errors import SourceFetchError
from rangeio.sources.base import FetchResult, PreconditionFailed, RangeSource

logger = logging.getLogger(__name__)


class LocalFileSource(RangeSource):
    """
    Read byte ranges of a file on the local file system.

    Emulates a remote object: the file's mtime plays the role of the
    last-modified timestamp.
    """

    source_type = "local"

    def __init__(self, file_path: str | Path) -> None:
        """
        Initialize LocalFileSource.

        Args:
            file_path: Path to the local file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the path is not a regular file.
        """
        self.file_path = Path(file_path)

        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not self.file_path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        logger.info("LocalFileSource initialized for: %s", self.file_path)

    @override
    def uri(self) -> str:
        return str(self.file_path)

    @override
    def size(self) -> int:
        try:
            return self.file_path.stat().st_size
        except OSError as e:
            raise SourceFetchError(f"Failed to stat file {self.file_path}: {e}") from e

    @override
    def last_modified(self) -> datetime:
        try:
            mtime = self.file_path.stat().st_mtime
        except OSError as e:
            raise SourceFetchError(f"Failed to stat file {self.file_path}: {e}") from e
        return datetime.fromtimestamp(mtime, tz=timezone.utc)

    @override
    def fetch(
        self,
        start: int,
        end: int,
        if_unmodified_since: datetime | None = None,
    ) -> FetchResult:
        if if_unmodified_since is not None and self.last_modified() != if_unmodified_since:
            return PreconditionFailed(self.uri(), if_unmodified_since)

        try:
            with self.file_path.open("rb") as f:
                f.seek(start)
                return f.read(end - start)
        except Exception as e:
            logger.exception("Error reading file %s: %s", self.file_path, e)
            raise SourceFetchError(f"Failed to read file {self.file_path}: {e}") from e
