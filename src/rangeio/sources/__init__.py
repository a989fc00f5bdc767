"""Range source abstraction layer."""

from rangeio.sources.base import FetchResult, PreconditionFailed, RangeSource
from rangeio.sources.http import HTTPSource
from rangeio.sources.local import LocalFileSource
from rangeio.sources.s3 import S3Source

__all__ = [
    "FetchResult",
    "HTTPSource",
    "LocalFileSource",
    "PreconditionFailed",
    "RangeSource",
    "S3Source",
]
