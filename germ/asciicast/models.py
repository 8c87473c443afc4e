"""Asciicast v2 — header and event shapes.

The header is the single JSON object on the first line of a cast file.  Every
following line is one event record ``[timestamp, kind, data]``.

Reference: https://github.com/asciinema/asciinema/blob/develop/doc/asciicast-v2.md
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from germ.sequence.constants import MILLISECONDS_IN_A_SECOND

ASCIICAST_VERSION = 2
DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24
DEFAULT_SHELL = "/bin/bash"
DEFAULT_TERM = "xterm-256color"

CRLF = "\r\n"


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------


class Env(BaseModel):
    """Recorded environment.  Values are supplied by the caller, never read
    from ``os.environ`` here."""

    model_config = ConfigDict(populate_by_name=True)

    shell: str = Field(alias="SHELL")
    term: str = Field(alias="TERM")


class Theme(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    foreground: str = Field(alias="fg")
    background: str = Field(alias="bg")
    palette: str


class Header(BaseModel):
    """Cast file metadata, built once at write time."""

    version: int = ASCIICAST_VERSION
    width: int = Field(default=DEFAULT_WIDTH, ge=1)
    height: int = Field(default=DEFAULT_HEIGHT, ge=1)
    timestamp: int | None = None
    duration: float | None = None
    idle_time_limit: float | None = None
    command: str | None = None
    title: str | None = None
    env: Env | None = None
    theme: Theme | None = None

    def to_json(self) -> str:
        return json.dumps(
            self.model_dump(mode="json", by_alias=True, exclude_none=True),
            ensure_ascii=False,
            separators=(",", ":"),
        )


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class EventKind(str, Enum):
    PRINTED = "o"
    KEYPRESS = "i"


def truncate_timestamp(seconds: float) -> float:
    """Truncate *seconds* to millisecond resolution."""
    return math.floor(seconds * MILLISECONDS_IN_A_SECOND) / MILLISECONDS_IN_A_SECOND


@dataclass(frozen=True)
class Event:
    """One timestamped unit of printed text or keystroke.

    ``timestamp`` holds the raw generator time; it is truncated only when the
    event is rendered for writing.
    """

    timestamp: float
    kind: EventKind
    payload: str

    def to_record(self) -> list[Any]:
        return [truncate_timestamp(self.timestamp), self.kind.value, self.payload]

    def to_json(self) -> str:
        return json.dumps(self.to_record(), ensure_ascii=False, separators=(",", ":"))


@dataclass
class Timeline:
    """Result of one generator run: ordered events plus the final cursor."""

    events: list[Event] = field(default_factory=list)
    end_time: float = 0.0

    def __iter__(self):
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)
