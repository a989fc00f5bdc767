"""HTTP/HTTPS range source implementation."""

from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
import logging
from typing import Any

from typing_extensions import override

from rangeio.errors import SourceFetchError
from rangeio.sources.base import FetchResult, PreconditionFailed, RangeSource

logger = logging.getLogger(__name__)


class HTTPSource(RangeSource):
    """
    Read byte ranges of an HTTP/HTTPS resource.

    Uses httpx ``HEAD`` requests for size and timestamp, and ``GET`` requests with
    ``Range`` and ``If-Unmodified-Since`` headers for data.
    """

    source_type = "http"

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        timeout: int = 30,
    ) -> None:
        """
        Initialize HTTPSource.

        Args:
            url: HTTP/HTTPS URL of the resource.
            headers: Optional custom HTTP headers sent with every request.
            auth: Optional tuple of (username, password) for basic auth.
            timeout: Request timeout in seconds (default: 30).

        Raises:
            ImportError: If httpx is not installed.
            ValueError: If URL is invalid.
        """
        try:
            import httpx  # noqa: F401
        except ImportError as e:
            raise ImportError(
                "httpx is required for HTTPSource. Install with: pip install rangeio[http]"
            ) from e

        if not url or not url.startswith(("http://", "https://")):
            raise ValueError("url must be a valid HTTP/HTTPS URL")

        self.url = url
        self.headers = headers or {}
        self.auth = auth
        self.timeout = timeout

        logger.info("HTTPSource initialized for %s", url)

    @override
    def uri(self) -> str:
        return self.url

    def _request_headers(self) -> dict[str, str]:
        # Length and byte offsets must refer to the unencoded body
        headers = dict(self.headers)
        headers["Accept-Encoding"] = "identity"
        return headers

    def _head(self) -> Any:
        import httpx

        try:
            response = httpx.head(
                self.url,
                headers=self._request_headers(),
                auth=self.auth,
                timeout=self.timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
            return response
        except Exception as e:
            logger.exception("Error reading metadata of %s: %s", self.url, e)
            raise SourceFetchError(f"Failed to read metadata of {self.url}: {e}") from e

    @override
    def size(self) -> int:
        size = self._head().headers.get("content-length")
        if not size:
            raise SourceFetchError(f"No Content-Length in HEAD response from {self.url}")
        try:
            return int(size)
        except ValueError as e:
            raise SourceFetchError(f"Invalid Content-Length from {self.url}: {size}") from e

    @override
    def last_modified(self) -> datetime | None:
        value = self._head().headers.get("last-modified")
        if not value:
            logger.warning("%s has no Last-Modified header; modifications go undetected", self.url)
            return None
        try:
            modified = parsedate_to_datetime(value)
        except (TypeError, ValueError) as e:
            raise SourceFetchError(f"Invalid Last-Modified header from {self.url}: {value}") from e
        if modified.tzinfo is None:
            # "-0000" dates parse as naive; they are still UTC
            modified = modified.replace(tzinfo=timezone.utc)
        return modified

    @override
    def fetch(
        self,
        start: int,
        end: int,
        if_unmodified_since: datetime | None = None,
    ) -> FetchResult:
        """
        Fetch ``[start, end)`` with a ranged, conditional GET.

        Returns:
            FetchResult: Response bytes, or PreconditionFailed on HTTP 412.

        Raises:
            SourceFetchError: If the request fails.
        """
        import httpx

        headers = self._request_headers()
        headers["Range"] = f"bytes={start}-{end - 1}"
        if if_unmodified_since is not None:
            headers["If-Unmodified-Since"] = format_datetime(
                if_unmodified_since.astimezone(timezone.utc), usegmt=True
            )

        try:
            response = httpx.get(
                self.url,
                headers=headers,
                auth=self.auth,
                timeout=self.timeout,
                follow_redirects=True,
            )
            if response.status_code == 412:
                return PreconditionFailed(self.url, if_unmodified_since)
            response.raise_for_status()
        except Exception as e:
            logger.exception("Error reading from %s: %s", self.url, e)
            raise SourceFetchError(f"Failed to read from {self.url}: {e}") from e

        if response.status_code == 206:
            return response.content

        # Server ignored the Range header and sent the whole resource
        logger.debug("%s ignored Range header, slicing full response", self.url)
        return response.content[start:end]
