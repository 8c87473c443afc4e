"""Asciicast v2 — cast headers, events, the event generator and the writer."""

from germ.asciicast.generator import EventGenerator
from germ.asciicast.models import (
    ASCIICAST_VERSION,
    Env,
    Event,
    EventKind,
    Header,
    Theme,
    Timeline,
    truncate_timestamp,
)
from germ.asciicast.writer import DocumentWriter, open_writer

__all__ = [
    "ASCIICAST_VERSION",
    "DocumentWriter",
    "Env",
    "Event",
    "EventGenerator",
    "EventKind",
    "Header",
    "Theme",
    "Timeline",
    "open_writer",
    "truncate_timestamp",
]
