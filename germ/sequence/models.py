"""Sequence model — canonical data shapes.

A :class:`Sequence` is the in-memory form of a scripted terminal session: the
pacing knobs (:class:`TimingConfig`), an ordered list of :class:`Command`
objects, and a format version tag.  It is also, field for field, the native
``germ`` document, so every persisted format converts through it.

Models are validated through Pydantic v2.  Do not add generation logic here,
only data shapes, their invariants, and the delay arithmetic derived from the
timings.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    model_validator,
)

from germ.exceptions import InvalidTimingValueError
from germ.sequence.constants import (
    DEFAULT_BEGIN_DELAY,
    DEFAULT_DELAY_OUTPUT_LINE,
    DEFAULT_DELAY_TYPE_CHAR,
    DEFAULT_DELAY_TYPE_START,
    DEFAULT_DELAY_TYPE_SUBMIT,
    DEFAULT_END_DELAY,
    DEFAULT_PROMPT,
    DEFAULT_SPEED,
    MILLISECONDS_IN_A_SECOND,
    SEQUENCE_VERSION,
)

Seconds = Annotated[float, Field(ge=0.0, allow_inf_nan=False)]
Milliseconds = Annotated[int, Field(ge=0)]


class DocumentModel(BaseModel):
    """Base for models that double as persisted document nodes.

    Python callers may rely on field defaults, but a document being decoded
    (validation context ``{"document": True}``) must spell out every field
    except the ones listed in ``document_optional``.
    """

    document_optional: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def require_document_fields(cls, data: Any, info: ValidationInfo) -> Any:
        if not (info.context and info.context.get("document")):
            return data
        if isinstance(data, dict):
            missing = [
                name
                for name in cls.model_fields
                if name not in data and name not in cls.document_optional
            ]
            if missing:
                raise ValueError(f"missing required field(s): {', '.join(missing)}")
        return data


# ---------------------------------------------------------------------------
# Timings
# ---------------------------------------------------------------------------

# Pydantic error types that mean "value out of range" rather than "wrong shape".
_RANGE_ERROR_TYPES = frozenset({"greater_than", "greater_than_equal", "finite_number"})


def _timing_value_error(errors: list[Any]) -> InvalidTimingValueError:
    messages = "; ".join(
        f"{'.'.join(str(p) for p in e['loc']) or '<root>'}: {e['msg']}" for e in errors
    )
    return InvalidTimingValueError(messages, errors=errors)


def invalid_timing(
    exc: ValidationError, prefix: tuple[str, ...] = ("timings",)
) -> InvalidTimingValueError | None:
    """Return the timing error *exc* stands for, or ``None`` for a shape error.

    Only failures where every error is an out-of-range value located under
    *prefix* count as invalid timings.
    """
    errors = exc.errors(include_url=False)
    if errors and all(
        tuple(e["loc"][: len(prefix)]) == prefix and e["type"] in _RANGE_ERROR_TYPES
        for e in errors
    ):
        return _timing_value_error(errors)
    return None


class TimingConfig(DocumentModel):
    """Pacing parameters for the simulated typing and output reveal.

    ``begin`` and ``end`` are in seconds, the ``type_*`` and ``output_line``
    delays in milliseconds.  ``speed`` divides every delay.

    Instances are immutable; use :meth:`replace` to derive a new one.
    """

    model_config = ConfigDict(frozen=True)

    begin: Seconds = DEFAULT_BEGIN_DELAY
    end: Seconds = DEFAULT_END_DELAY
    type_start: Milliseconds = DEFAULT_DELAY_TYPE_START
    type_char: Milliseconds = DEFAULT_DELAY_TYPE_CHAR
    type_submit: Milliseconds = DEFAULT_DELAY_TYPE_SUBMIT
    output_line: Milliseconds = DEFAULT_DELAY_OUTPUT_LINE
    speed: Annotated[float, Field(gt=0.0, allow_inf_nan=False)] = DEFAULT_SPEED

    @classmethod
    def create(cls, **values: Any) -> "TimingConfig":
        """Build a validated instance from keyword *values*.

        Raises:
            InvalidTimingValueError: a value is out of range or of the wrong type.
        """
        try:
            return cls(**values)
        except ValidationError as exc:
            raise _timing_value_error(exc.errors(include_url=False)) from exc

    def replace(self, **changes: Any) -> "TimingConfig":
        """Return a validated copy with *changes* applied."""
        return TimingConfig.create(**{**self.model_dump(), **changes})

    # ------------------------------------------------------------------
    # Delay arithmetic (all results in seconds)
    # ------------------------------------------------------------------

    def scaled(self, milliseconds: float) -> float:
        """Apply the speed factor to *milliseconds* and convert to seconds."""
        return milliseconds / self.speed / MILLISECONDS_IN_A_SECOND

    def input_time(self, text: str) -> float:
        """Time spent typing and submitting *text*, one slot per code point."""
        return self.scaled(self.type_start + self.type_char * len(text) + self.type_submit)

    def char_offset(self, index: int) -> float:
        """Offset of the *index*-th typed character from the command start."""
        return self.scaled(self.type_start + self.type_char * index)

    def output_offset(self, index: int) -> float:
        """Offset of the *index*-th output from the end of typing."""
        return self.scaled(self.output_line * (index + 1))

    def outputs_time(self, count: int) -> float:
        return self.scaled(self.output_line * count)

    def end_hold_milliseconds(self) -> int:
        return int(self.end * MILLISECONDS_IN_A_SECOND)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class Command(DocumentModel):
    """One simulated prompt / typed input / revealed outputs unit."""

    document_optional: ClassVar[frozenset[str]] = frozenset({"comment"})

    comment: str | None = None
    prompt: str = DEFAULT_PROMPT
    input: str
    outputs: list[str] = Field(default_factory=list)

    @classmethod
    def from_input(cls, text: str, prompt: str = DEFAULT_PROMPT) -> "Command":
        return cls(prompt=prompt, input=text)

    def add(self, output: str) -> "Command":
        """Append one output; outputs are revealed in insertion order."""
        self.outputs.append(output)
        return self

    def append(self, outputs: list[str]) -> "Command":
        """Append every item of *outputs*, draining the given list."""
        self.outputs.extend(outputs)
        outputs.clear()
        return self


# ---------------------------------------------------------------------------
# Sequence
# ---------------------------------------------------------------------------


class Sequence(DocumentModel):
    """Ordered commands plus the timings used to play them back.

    Commands are only ever appended.  Once built, a sequence is handed
    read-only to the event generator.
    """

    version: int = SEQUENCE_VERSION
    timings: TimingConfig = Field(default_factory=TimingConfig)
    commands: list[Command] = Field(default_factory=list)

    @classmethod
    def from_input(cls, text: str, prompt: str = DEFAULT_PROMPT) -> "Sequence":
        return cls(commands=[Command.from_input(text, prompt=prompt)])

    @classmethod
    def from_commands(cls, commands: list[Command]) -> "Sequence":
        return cls(commands=list(commands))

    @classmethod
    def from_timings(cls, timings: TimingConfig) -> "Sequence":
        return cls(timings=timings)

    def __len__(self) -> int:
        return len(self.commands)

    def iter_commands(self):
        return iter(self.commands)

    def add(self, command: Command) -> "Sequence":
        self.commands.append(command)
        return self

    def append(self, commands: list[Command]) -> "Sequence":
        """Bulk-append *commands*, draining the given list."""
        self.commands.extend(commands)
        commands.clear()
        return self

    def append_from(self, other: "Sequence") -> "Sequence":
        """Merge the commands of *other*; its timings are discarded."""
        for command in other.commands:
            self.add(command)
        return self
