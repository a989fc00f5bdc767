"""Tests for LocalFileSource."""

from datetime import datetime
import os
from pathlib import Path
import tempfile

import pytest

from rangeio.errors import ReadModifiedError
from rangeio.reader import RangeReader
from rangeio.sources.base import PreconditionFailed
from rangeio.sources.local import LocalFileSource


def test_local_file_source_with_valid_file() -> None:
    """Test LocalFileSource with valid file."""
    with tempfile.NamedTemporaryFile(mode="wb", delete=False, suffix=".csv") as f:
        f.write(b"test content")
        temp_path = f.name

    try:
        source = LocalFileSource(temp_path)

        assert source.size() == 12
        assert source.fetch(0, 4) == b"test"
        assert source.fetch(5, 12) == b"content"
        assert isinstance(source.last_modified(), datetime)
        assert source.uri() == temp_path
    finally:
        Path(temp_path).unlink()


def test_local_file_source_with_nonexistent_file() -> None:
    """Test LocalFileSource with nonexistent file."""
    with pytest.raises(FileNotFoundError):
        LocalFileSource("/nonexistent/path/file.csv")


def test_local_file_source_with_directory() -> None:
    """Test LocalFileSource with directory path."""
    with tempfile.TemporaryDirectory() as tmpdir, pytest.raises(ValueError, match="not a file"):
        LocalFileSource(tmpdir)


def test_local_file_source_precondition() -> None:
    """Test that a changed mtime fails the precondition."""
    with tempfile.NamedTemporaryFile(mode="wb", delete=False, suffix=".csv") as f:
        f.write(b"0123456789")
        temp_path = f.name

    try:
        source = LocalFileSource(temp_path)
        baseline = source.last_modified()

        assert source.fetch(0, 3, if_unmodified_since=baseline) == b"012"

        stat = os.stat(temp_path)
        os.utime(temp_path, (stat.st_atime, stat.st_mtime + 10))

        result = source.fetch(0, 3, if_unmodified_since=baseline)
        assert isinstance(result, PreconditionFailed)
        assert result.expected == baseline
    finally:
        Path(temp_path).unlink()


def test_local_file_source_with_reader() -> None:
    """Test reading a local file through RangeReader until it is modified."""
    with tempfile.NamedTemporaryFile(mode="wb", delete=False, suffix=".csv") as f:
        f.write(b"a,b\n1,2\n3,4\n")
        temp_path = f.name

    try:
        reader = RangeReader(LocalFileSource(temp_path), line_buffer_size=3)

        assert reader.gets() == b"a,b\n"

        stat = os.stat(temp_path)
        os.utime(temp_path, (stat.st_atime, stat.st_mtime + 10))

        with pytest.raises(ReadModifiedError):
            list(reader.lines())
    finally:
        Path(temp_path).unlink()


def test_local_file_source_metadata() -> None:
    """Test LocalFileSource metadata."""
    with tempfile.NamedTemporaryFile(mode="wb", delete=False, suffix=".csv") as f:
        f.write(b"content")
        temp_path = f.name

    try:
        source = LocalFileSource(temp_path)
        metadata = source.get_metadata()

        assert metadata["source_type"] == "local"
        assert metadata["size"] == 7
        assert metadata["uri"] == temp_path
        assert metadata["last_modified"] == source.last_modified()
    finally:
        Path(temp_path).unlink()
