"""Asciicast v2 playback format.

Encoding runs the :class:`~germ.asciicast.generator.EventGenerator` and writes
the header line followed by one event record per line.

Decoding is lossy: command boundaries, comments, prompts and timings cannot
be recovered from a flat event stream.  The printed text is concatenated and
returned as the outputs of a single command with an empty prompt and input.
"""

from __future__ import annotations

import io
from typing import Any

from pydantic import ValidationError

from germ.asciicast.generator import EventGenerator, split_lines
from germ.asciicast.models import ASCIICAST_VERSION, Event, EventKind, Header
from germ.asciicast.writer import DocumentWriter
from germ.exceptions import MalformedDocumentError
from germ.formats.base import BaseFormat, DocumentFormat
from germ.logging import get_logger
from germ.sequence.models import Command, Sequence

log = get_logger(__name__)

_EVENT_KINDS = {kind.value: kind for kind in EventKind}


class AsciicastFormat(BaseFormat):
    FORMAT = DocumentFormat.ASCIICAST
    OPTIONS = frozenset({"header", "stdin_echo"})

    def __init__(self, header: Header | None = None, stdin_echo: bool = False) -> None:
        self.header = header if header is not None else Header()
        self.stdin_echo = stdin_echo

    def encode(self, sequence: Sequence) -> bytes:
        buffer = io.BytesIO()
        self.write_to(sequence, DocumentWriter(buffer))
        return buffer.getvalue()

    def write_to(self, sequence: Sequence, writer: DocumentWriter) -> None:
        """Stream the header and events straight onto *writer*."""
        timeline = EventGenerator(stdin_echo=self.stdin_echo).generate(sequence)
        writer.write_cast(self.header, timeline)

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def decode(self, data: bytes | str) -> Sequence:
        _header, events = self.decode_cast(data)

        printed = "".join(e.payload for e in events if e.kind is EventKind.PRINTED)
        lines = split_lines(printed.replace("\r\n", "\n"))
        if not lines:
            return Sequence()
        return Sequence.from_commands([Command(prompt="", input="", outputs=lines)])

    def decode_cast(self, data: bytes | str) -> tuple[Header, list[Event]]:
        """Parse *data* into its header and event records."""
        lines = [line for line in self._text(data).split("\n") if line.strip()]
        if not lines:
            raise MalformedDocumentError("document is empty", self.FORMAT.value)

        header = self._parse_header(lines[0])
        events = [
            self._parse_event(line, number)
            for number, line in enumerate(lines[1:], start=2)
        ]
        log.debug("document_decoded", format=self.FORMAT.value, events=len(events))
        return header, events

    def _parse_header(self, line: str) -> Header:
        raw = self._load_json(line)
        if not isinstance(raw, dict):
            raise MalformedDocumentError(
                f"header must be a JSON object, got {type(raw).__name__}",
                self.FORMAT.value,
            )
        version = raw.get("version")
        if type(version) is not int or version != ASCIICAST_VERSION:
            raise MalformedDocumentError(
                f"unsupported asciicast version {version!r}",
                self.FORMAT.value,
            )
        try:
            return Header.model_validate_json(line, strict=True)
        except ValidationError as exc:
            raise self._validation_failure(exc) from exc

    def _parse_event(self, line: str, number: int) -> Event:
        raw: Any = self._load_json(line)
        if (
            not isinstance(raw, list)
            or len(raw) != 3
            or isinstance(raw[0], bool)
            or not isinstance(raw[0], (int, float))
            or not isinstance(raw[1], str)
            or raw[1] not in _EVENT_KINDS
            or not isinstance(raw[2], str)
        ):
            raise MalformedDocumentError(
                f"line {number} is not a [time, \"o\"|\"i\", data] record",
                self.FORMAT.value,
            )
        return Event(float(raw[0]), _EVENT_KINDS[raw[1]], raw[2])
