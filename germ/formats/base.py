"""Document formats — base class.

Every persisted document shape is a :class:`BaseFormat` subclass that knows
how to ``encode`` a :class:`~germ.sequence.models.Sequence` to bytes and
``decode`` bytes back into one.  The sequence is the shared intermediate form;
only the native ``germ`` format round-trips without loss.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from germ.exceptions import MalformedDocumentError
from germ.sequence.models import Sequence, invalid_timing

if TYPE_CHECKING:
    from germ.asciicast.writer import DocumentWriter


class DocumentFormat(str, Enum):
    """Tag selecting one of the persisted document shapes."""

    GERM = "germ"
    ASCIICAST = "asciicast"
    TERMSHEETS = "termsheets"


class BaseFormat(ABC):
    """Bidirectional converter between a :class:`Sequence` and document bytes."""

    FORMAT: DocumentFormat
    LOSSLESS: bool = False
    # Constructor keywords understood by this format.
    OPTIONS: frozenset[str] = frozenset()

    @classmethod
    def from_options(cls, **options: Any) -> "BaseFormat":
        """Instantiate with the subset of *options* named in ``OPTIONS``.

        Callers pass every option they know about; each format picks its own.
        """
        return cls(**{k: v for k, v in options.items() if k in cls.OPTIONS})

    @abstractmethod
    def encode(self, sequence: Sequence) -> bytes:
        """Serialise *sequence* into this format."""

    @abstractmethod
    def decode(self, data: bytes | str) -> Sequence:
        """Parse *data* into a :class:`Sequence`.

        Raises:
            MalformedDocumentError: *data* is not a valid document.
            InvalidTimingValueError: timings are present but out of range.
        """

    def write_to(self, sequence: Sequence, writer: "DocumentWriter") -> None:
        """Write the encoded document to *writer*, newline-terminated."""
        writer.write_bytes(self.encode(sequence) + b"\n")

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _text(self, data: bytes | str) -> str:
        if isinstance(data, str):
            return data
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDocumentError(
                f"not valid UTF-8 ({exc.reason} at byte {exc.start})",
                self.FORMAT.value,
            ) from exc

    def _load_json(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedDocumentError(
                f"invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}",
                self.FORMAT.value,
            ) from exc

    def _validation_failure(self, exc: ValidationError) -> Exception:
        """Map a pydantic failure onto the germ error family.

        Out-of-range values under ``timings`` become
        :class:`InvalidTimingValueError`; everything else is malformed.
        """
        timing_error = invalid_timing(exc)
        if timing_error is not None:
            return timing_error
        errors = exc.errors(include_url=False)
        messages = "; ".join(
            f"{'.'.join(str(p) for p in e['loc']) or '<root>'}: {e['msg']}" for e in errors
        )
        return MalformedDocumentError(messages, self.FORMAT.value, errors=errors)

    @staticmethod
    def _dump_json(value: Any) -> bytes:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
