"""Tests for open_reader source detection."""

from pathlib import Path
import tempfile
from unittest.mock import Mock

from conftest import CSV_DATA, MemorySource
import pytest

from rangeio.reader import RangeReader, _create_source, open_reader
from rangeio.sources.http import HTTPSource
from rangeio.sources.local import LocalFileSource
from rangeio.sources.s3 import S3Source


def test_open_reader_with_source_object(csv_source: MemorySource) -> None:
    """Test open_reader with a RangeSource instance."""
    reader = open_reader(csv_source, line_buffer_size=25, read_ahead=50)

    assert isinstance(reader, RangeReader)
    assert reader.source is csv_source
    assert reader.line_buffer_size == 25
    assert reader.read_ahead == 50
    assert reader.read() == CSV_DATA


def test_open_reader_with_local_path() -> None:
    """Test that open_reader detects local file paths."""
    with tempfile.NamedTemporaryFile(mode="wb", delete=False, suffix=".csv") as f:
        f.write(b"line 1\nline 2\n")
        temp_path = f.name

    try:
        reader = open_reader(temp_path)
        assert isinstance(reader.source, LocalFileSource)
        assert list(reader.lines()) == [b"line 1\n", b"line 2\n"]

        reader = open_reader(Path(temp_path))
        assert isinstance(reader.source, LocalFileSource)
    finally:
        Path(temp_path).unlink()


def test_create_source_s3() -> None:
    """Test _create_source with S3 URI."""
    client = Mock()
    source = _create_source("s3://my-bucket/path/to/data.csv", {"client": client, "timeout": 5})

    assert isinstance(source, S3Source)
    assert source.bucket == "my-bucket"
    assert source.key == "path/to/data.csv"
    assert source.client is client


def test_create_source_http() -> None:
    """Test _create_source with HTTP URL."""
    source = _create_source("https://example.com/data.csv", {"timeout": 5, "client": None})

    assert isinstance(source, HTTPSource)
    assert source.url == "https://example.com/data.csv"
    assert source.timeout == 5


def test_create_source_invalid_s3_uri() -> None:
    """Test _create_source with S3 URI missing the key."""
    with pytest.raises(ValueError, match="Invalid S3 URI"):
        _create_source("s3://my-bucket", {})


def test_open_reader_missing_local_file() -> None:
    """Test open_reader with a path that does not exist."""
    with pytest.raises(FileNotFoundError):
        open_reader("/nonexistent/path/data.csv")
