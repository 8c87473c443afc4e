"""Asciicast — event generator.

Walks a :class:`~germ.sequence.models.Sequence` and turns it into an ordered
stream of timestamped events.  A running cursor starts at ``timings.begin``;
each command is laid out relative to the cursor and then advances it by the
time spent typing plus the time spent revealing its outputs:

    prompt          at cursor
    char i          at cursor + (type_start + type_char * i) / speed
    output j        at cursor + input_time + output_line * (j + 1) / speed
    next cursor     =  cursor + input_time + output_line * len(outputs) / speed

where ``input_time = (type_start + type_char * len(input) + type_submit) / speed``.
A trailing empty event holds the final frame for ``timings.end`` seconds.

Generation is pure: the same sequence always yields the same events.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from germ.asciicast.models import CRLF, Event, EventKind, Timeline
from germ.logging import get_logger

if TYPE_CHECKING:
    from germ.sequence.models import Command, Sequence, TimingConfig

log = get_logger(__name__)


class EventGenerator:
    """Lays out the events of a sequence on a simulated timeline.

    Usage::

        timeline = EventGenerator(stdin_echo=True).generate(sequence)
        for event in timeline:
            ...
    """

    def __init__(self, stdin_echo: bool = False) -> None:
        self.stdin_echo = stdin_echo

    def generate(self, sequence: "Sequence") -> Timeline:
        timings = sequence.timings
        timeline = Timeline()

        cursor = timings.begin
        for command in sequence.iter_commands():
            cursor = self._add_command(timeline.events, command, timings, cursor)

        if timings.end_hold_milliseconds() != 0:
            timeline.events.append(Event(cursor + timings.end, EventKind.PRINTED, ""))

        timeline.end_time = cursor
        log.debug(
            "timeline_generated",
            commands=len(sequence),
            events=len(timeline.events),
            end_time=cursor,
        )
        return timeline

    def _add_command(
        self,
        events: list[Event],
        command: "Command",
        timings: "TimingConfig",
        start: float,
    ) -> float:
        """Append the events of one command and return the next cursor."""
        if command.comment is not None:
            events.append(Event(start, EventKind.PRINTED, command.comment + CRLF))
        events.append(Event(start, EventKind.PRINTED, command.prompt))

        input_time = timings.input_time(command.input)

        for i, char in enumerate(command.input):
            char_delay = start + timings.char_offset(i)
            if self.stdin_echo:
                events.append(Event(char_delay, EventKind.KEYPRESS, char))
            events.append(Event(char_delay, EventKind.PRINTED, char))

        for j, output in enumerate(command.outputs):
            show_delay = start + input_time + timings.output_offset(j)
            if j == 0:
                events.append(Event(show_delay, EventKind.PRINTED, CRLF))
            for line in split_lines(output):
                events.append(Event(show_delay, EventKind.PRINTED, line + CRLF))

        return start + input_time + timings.outputs_time(len(command.outputs))


def split_lines(text: str) -> list[str]:
    """Split *text* on ``\\n`` or ``\\r\\n``.

    Only those two breaks count (``str.splitlines`` would also split on form
    feeds and other separators), and a trailing break does not yield an extra
    empty line.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
