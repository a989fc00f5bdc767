"""Command-line interface for streaming range-addressable objects."""

import logging
import sys

import typer

from rangeio.errors import ReadModifiedError
from rangeio.reader import DEFAULT_LINE_BUFFER_SIZE, open_reader

app = typer.Typer(add_completion=False)


@app.command()
def main(
    source: str = typer.Argument(
        ...,
        help="Data source: s3://bucket/key, https://url, or /path/to/file",
    ),
    offset: int = typer.Option(
        0,
        min=0,
        help="Byte offset to start reading from",
    ),
    length: int | None = typer.Option(
        None,
        min=0,
        help="Number of bytes to read (default: to end of object)",
    ),
    lines: bool = typer.Option(
        False,
        "--lines",
        help="Stream the object line by line instead of in one read",
    ),
    separator: str = typer.Option(
        "\n",
        help="Line separator used with --lines",
    ),
    line_buffer_size: int = typer.Option(
        DEFAULT_LINE_BUFFER_SIZE,
        min=1,
        help="Bytes fetched per refill while splitting lines",
    ),
    read_ahead: int = typer.Option(
        0,
        min=0,
        help="Minimum number of bytes fetched per read",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Stream an object, or a byte window of it, to stdout.

    Sources:
    - Local files: /path/to/file
    - S3: s3://bucket/key
    - HTTP/HTTPS: https://example.com/file
    """
    # Configure logging
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    try:
        reader = open_reader(source, line_buffer_size=line_buffer_size, read_ahead=read_ahead)
        reader.pos = offset

        if lines:
            for line in reader.lines(separator):
                sys.stdout.buffer.write(line)
        else:
            sys.stdout.buffer.write(reader.read(length))
        sys.stdout.buffer.flush()

    except FileNotFoundError as e:
        typer.echo(f"Error: File not found: {e}", err=True)
        raise typer.Exit(code=1) from None
    except ReadModifiedError as e:
        typer.echo(f"Error: Object changed while reading: {e}", err=True)
        raise typer.Exit(code=1) from None
    except ImportError as e:
        typer.echo(
            f"Error: Missing dependency: {e}\nInstall with: pip install rangeio[all]",
            err=True,
        )
        raise typer.Exit(code=1) from None
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        if verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        raise typer.Exit(code=1) from None


if __name__ == "__main__":
    app()
