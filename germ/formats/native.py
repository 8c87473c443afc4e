"""Native ``germ`` format — the lossless sequence document.

    {"version":1,"timings":{...},"commands":[{"comment"?,"prompt","input","outputs"}]}
"""

from __future__ import annotations

from pydantic import ValidationError

from germ.exceptions import MalformedDocumentError
from germ.formats.base import BaseFormat, DocumentFormat
from germ.logging import get_logger
from germ.sequence.models import Sequence

log = get_logger(__name__)


class NativeFormat(BaseFormat):
    FORMAT = DocumentFormat.GERM
    LOSSLESS = True

    def encode(self, sequence: Sequence) -> bytes:
        return sequence.model_dump_json(exclude_none=True).encode("utf-8")

    def decode(self, data: bytes | str) -> Sequence:
        text = self._text(data)
        raw = self._load_json(text)
        if not isinstance(raw, dict):
            raise MalformedDocumentError(
                f"expected a JSON object at the top level, got {type(raw).__name__}",
                self.FORMAT.value,
            )
        try:
            # Strict JSON validation: no string-to-number or float-to-int coercion.
            sequence = Sequence.model_validate_json(
                text, strict=True, context={"document": True}
            )
        except ValidationError as exc:
            raise self._validation_failure(exc) from exc

        log.debug("document_decoded", format=self.FORMAT.value, commands=len(sequence))
        return sequence
