"""Interactive entry — builds commands one line at a time.

Each round reads an input line.  Its outputs come either from running it
through a :class:`~germ.capture.ShellRunner` or, when no runner is given, from
further lines typed until an empty one.  An empty input line or end of input
(Ctrl-D) finishes the session.
"""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console

from germ.capture import ShellRunner
from germ.logging import get_logger
from germ.sequence.constants import DEFAULT_PROMPT
from germ.sequence.models import Command

log = get_logger(__name__)

LineReader = Callable[[str], str]


class InteractiveSession:
    def __init__(
        self,
        runner: ShellRunner | None = None,
        prompt: str = DEFAULT_PROMPT,
        read_line: LineReader | None = None,
        console: Console | None = None,
    ) -> None:
        self.runner = runner
        self.prompt = prompt
        self.console = console or Console(stderr=True)
        self._read_line = read_line or self._console_input

    def _console_input(self, prompt: str) -> str:
        return self.console.input(prompt, markup=False, emoji=False)

    def collect(self) -> list[Command]:
        """Read commands until an empty line or end of input."""
        commands: list[Command] = []
        while True:
            text = self._read(self.prompt)
            if not text:
                break
            if self.runner is not None:
                command = self.runner.record(text, prompt=self.prompt)
            else:
                command = Command(prompt=self.prompt, input=text, outputs=self._read_outputs())
            commands.append(command)
            log.debug("interactive_command_added", input=text, outputs=len(command.outputs))

        self.console.print(f"[dim]{len(commands)} command(s) recorded[/dim]")
        return commands

    def _read_outputs(self) -> list[str]:
        lines: list[str] = []
        while line := self._read("> "):
            lines.append(line)
        return lines

    def _read(self, prompt: str) -> str:
        try:
            return self._read_line(prompt)
        except EOFError:
            return ""
