"""TermSheets flat-pairs format.

    [{"input": "echo hi", "output": ["hi\\n"]}, ...]

Comments, prompts and timings are not represented.  On decode every command
gets the prompt this format was configured with, never the original one.
"""

from __future__ import annotations

from pydantic import BaseModel, TypeAdapter, ValidationError

from germ.exceptions import MalformedDocumentError
from germ.formats.base import BaseFormat, DocumentFormat
from germ.logging import get_logger
from germ.sequence.constants import DEFAULT_PROMPT
from germ.sequence.models import Command, Sequence

log = get_logger(__name__)


class FlatCommand(BaseModel):
    input: str
    output: list[str]

    @classmethod
    def from_command(cls, command: Command) -> "FlatCommand":
        return cls(input=command.input, output=list(command.outputs))

    def to_command(self, prompt: str) -> Command:
        return Command(prompt=prompt, input=self.input, outputs=list(self.output))


_FlatCommands = TypeAdapter(list[FlatCommand])


class TermsheetsFormat(BaseFormat):
    FORMAT = DocumentFormat.TERMSHEETS
    OPTIONS = frozenset({"prompt"})

    def __init__(self, prompt: str = DEFAULT_PROMPT) -> None:
        self.prompt = prompt

    def encode(self, sequence: Sequence) -> bytes:
        return self._dump_json(
            [FlatCommand.from_command(c).model_dump() for c in sequence.iter_commands()]
        )

    def decode(self, data: bytes | str) -> Sequence:
        text = self._text(data)
        raw = self._load_json(text)
        if not isinstance(raw, list):
            raise MalformedDocumentError(
                f"expected a JSON array at the top level, got {type(raw).__name__}",
                self.FORMAT.value,
            )
        try:
            flat = _FlatCommands.validate_json(text, strict=True)
        except ValidationError as exc:
            raise self._validation_failure(exc) from exc

        sequence = Sequence.from_commands([item.to_command(self.prompt) for item in flat])
        log.debug("document_decoded", format=self.FORMAT.value, commands=len(sequence))
        return sequence
