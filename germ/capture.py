"""Shell capture — runs a typed input for real to obtain its output.

Only standard output is captured; standard error passes through to the
caller's terminal.  A non-zero exit status is logged but does not abort the
capture, the same way a recorded session would simply show the output.
"""

from __future__ import annotations

import subprocess

from germ.exceptions import CaptureTimeoutError, EncodingFailureError, IOFailureError
from germ.logging import get_logger
from germ.sequence.constants import DEFAULT_PROMPT
from germ.sequence.models import Command

log = get_logger(__name__)


class ShellRunner:
    """Executes commands through ``<shell> -c <input>``.

    Args:
        shell:   Path of the shell binary, e.g. ``/bin/bash``.
        timeout: Seconds before the child is killed.  ``None`` waits forever.
    """

    def __init__(self, shell: str, timeout: float | None = None) -> None:
        self.shell = shell
        self.timeout = timeout

    def capture(self, command: str) -> str:
        """Run *command* and return its standard output as text.

        Raises:
            IOFailureError: the shell could not be started.
            CaptureTimeoutError: the command outlived ``timeout``.
            EncodingFailureError: the output is not valid UTF-8.
        """
        try:
            proc = subprocess.run(
                [self.shell, "-c", command],
                stdout=subprocess.PIPE,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise CaptureTimeoutError(command, self.timeout or 0.0) from exc
        except OSError as exc:
            raise IOFailureError(self.shell, exc) from exc

        if proc.returncode != 0:
            log.warning("command_failed", command=command, return_code=proc.returncode)

        try:
            output = proc.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingFailureError(command, exc) from exc

        log.info("command_captured", command=command, bytes=len(proc.stdout))
        return output

    def record(
        self,
        text: str,
        prompt: str = DEFAULT_PROMPT,
        comment: str | None = None,
    ) -> Command:
        """Build a command whose single output is the captured stdout of *text*."""
        command = Command(comment=comment, prompt=prompt, input=text)
        return command.add(self.capture(text))
