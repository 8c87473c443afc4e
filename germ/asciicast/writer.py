"""Document writer — streams serialized documents onto a byte stream.

Every write failure is surfaced as :class:`~germ.exceptions.IOFailureError`.
Bytes flushed before a failure are not retracted.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from germ.exceptions import IOFailureError
from germ.logging import get_logger

if TYPE_CHECKING:
    from germ.asciicast.models import Event, Header

log = get_logger(__name__)

STDIO_TARGET = "-"


class DocumentWriter:
    """Writes raw bytes, or a cast header followed by its events."""

    def __init__(self, stream: BinaryIO, target: str = "<stream>") -> None:
        self._stream = stream
        self.target = target
        self.bytes_written = 0

    def write_bytes(self, data: bytes) -> None:
        try:
            self._stream.write(data)
        except OSError as exc:
            raise IOFailureError(self.target, exc) from exc
        self.bytes_written += len(data)

    def write_line(self, text: str) -> None:
        self.write_bytes(text.encode("utf-8") + b"\n")

    def write_header(self, header: "Header") -> None:
        self.write_line(header.to_json())

    def write_event(self, event: "Event") -> None:
        self.write_line(event.to_json())

    def write_cast(self, header: "Header", events: Iterable["Event"]) -> None:
        self.write_header(header)
        for event in events:
            self.write_event(event)

    def flush(self) -> None:
        try:
            self._stream.flush()
        except OSError as exc:
            raise IOFailureError(self.target, exc) from exc


@contextmanager
def open_writer(path: Path | str | None) -> Iterator[DocumentWriter]:
    """Yield a writer for *path*, or for standard output when *path* is
    ``None`` or ``"-"``.  Standard output is flushed but never closed."""
    if path is None or str(path) == STDIO_TARGET:
        writer = DocumentWriter(sys.stdout.buffer, target="<stdout>")
        yield writer
        writer.flush()
        return

    try:
        stream = open(path, "wb")
    except OSError as exc:
        raise IOFailureError(str(path), exc) from exc

    with stream:
        writer = DocumentWriter(stream, target=str(path))
        yield writer
        writer.flush()
    log.info("document_written", path=str(path), bytes=writer.bytes_written)
