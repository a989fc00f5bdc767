"""AWS S3 range source implementation."""

from datetime import datetime
import logging
from typing import Any

from typing_extensions import override

from rangeio.errors import SourceFetchError
from rangeio.sources.base import FetchResult, PreconditionFailed, RangeSource

logger = logging.getLogger(__name__)

PRECONDITION_FAILED_CODES = ("PreconditionFailed", "412")


class S3Source(RangeSource):
    """
    Read byte ranges of an AWS S3 object.

    Uses the boto3 S3 client: ``head_object`` for size and timestamp,
    ``get_object`` with ``Range`` and ``IfUnmodifiedSince`` for data.
    """

    source_type = "s3"

    def __init__(
        self,
        bucket: str,
        key: str,
        client: Any = None,
        region: str | None = None,
        profile: str | None = None,
    ) -> None:
        """
        Initialize S3Source.

        Args:
            bucket: S3 bucket name.
            key: S3 object key (file path).
            client: Boto3 S3 client instance. If None, one is created from the
                default session (or from ``profile``/``region`` when given).
            region: AWS region used when creating the client.
            profile: AWS profile name used when creating the client.

        Raises:
            ImportError: If boto3 is not installed.
            ValueError: If bucket or key is empty.
        """
        try:
            import boto3
        except ImportError as e:
            raise ImportError(
                "boto3 is required for S3Source. Install with: pip install rangeio[s3]"
            ) from e

        if not bucket or not key:
            raise ValueError("bucket and key must be non-empty")

        self.bucket = bucket
        self.key = key
        if client is None:
            session = boto3.session.Session(profile_name=profile, region_name=region)
            client = session.client("s3")
        self.client = client

        logger.info("S3Source initialized for %s", self.uri())

    @override
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"

    def _head(self) -> dict[str, Any]:
        try:
            return self.client.head_object(Bucket=self.bucket, Key=self.key)
        except Exception as e:
            logger.exception("Error reading metadata of %s: %s", self.uri(), e)
            raise SourceFetchError(f"Failed to read metadata of {self.uri()}: {e}") from e

    @override
    def size(self) -> int:
        return int(self._head().get("ContentLength", 0))

    @override
    def last_modified(self) -> datetime | None:
        return self._head().get("LastModified")

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
            FetchResult: Object bytes, or PreconditionFailed when S3 answers 412.

        Raises:
            SourceFetchError: If the object cannot be read.
        """
        from botocore.exceptions import ClientError

        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": self.key,
            "Range": f"bytes={start}-{end - 1}",
        }
        if if_unmodified_since is not None:
            params["IfUnmodifiedSince"] = if_unmodified_since

        try:
            response = self.client.get_object(**params)
            return response["Body"].read()
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in PRECONDITION_FAILED_CODES:
                return PreconditionFailed(self.uri(), if_unmodified_since)
            logger.exception("Error reading S3 object %s: %s", self.uri(), e)
            raise SourceFetchError(f"Failed to read S3 object {self.uri()}: {e}") from e
        except Exception as e:
            logger.exception("Error reading S3 object %s: %s", self.uri(), e)
            raise SourceFetchError(f"Failed to read S3 object {self.uri()}: {e}") from e
