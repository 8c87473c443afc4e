"""germ CLI — Entry point.

Usage:
    germ "echo Hello World" "Hello World" > hello.cast
    germ "ls -1"                                  # runs ls to capture its output
    germ -G "echo one" | germ -f - "echo two"     # chain commands via germ JSON
    germ -i -o demo.cast                          # enter commands interactively
    germ -f demo.json -O termsheets -p "~$ "
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from germ import __version__
from germ.asciicast.models import DEFAULT_SHELL, DEFAULT_TERM, Env, Header
from germ.asciicast.writer import STDIO_TARGET, open_writer
from germ.capture import ShellRunner
from germ.config import Settings, override_settings
from germ.exceptions import GermError, IOFailureError
from germ.formats import DocumentFormat, get_format
from germ.interactive import InteractiveSession
from germ.logging import configure_logging, get_logger
from germ.sequence.models import Command, Sequence, TimingConfig

app = typer.Typer(
    name="germ",
    help="Generate terminal session recordings from scripted inputs and outputs.",
    add_completion=False,
    pretty_exceptions_enable=False,
)

console = Console(stderr=True)
log = get_logger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"germ {__version__}")
        raise typer.Exit()


@app.command()
def record(
    input_text: Annotated[
        str | None,
        typer.Argument(metavar="INPUT", help="Text typed at the prompt."),
    ] = None,
    outputs: Annotated[
        list[str] | None,
        typer.Argument(
            metavar="OUTPUTS...",
            help="Outputs shown after INPUT. When omitted, INPUT is run in a shell "
            "and its standard output is used.",
        ),
    ] = None,
    comment: Annotated[
        str | None, typer.Option("--comment", "-c", help="Line printed before the prompt.")
    ] = None,
    prompt: Annotated[
        str | None,
        typer.Option("--prompt", "-p", help="Prompt shown before each input. [default: '$ ']"),
    ] = None,
    no_exec: Annotated[
        bool, typer.Option("--no-exec", help="Never run inputs to capture their output.")
    ] = False,
    input_file: Annotated[
        Path | None,
        typer.Option("--input-file", "-f", help="Read a source document. Use - for stdin."),
    ] = None,
    input_format: Annotated[
        DocumentFormat,
        typer.Option("--input-format", "-I", case_sensitive=False, help="Format of --input-file."),
    ] = DocumentFormat.GERM,
    interactive: Annotated[
        bool, typer.Option("--interactive", "-i", help="Enter commands one at a time.")
    ] = False,
    output_file: Annotated[
        Path | None,
        typer.Option("--output-file", "-o", help="Write to this file instead of stdout."),
    ] = None,
    output_format: Annotated[
        DocumentFormat | None,
        typer.Option(
            "--output-format",
            "-O",
            case_sensitive=False,
            help="Document format to write. [default: asciicast]",
        ),
    ] = None,
    germ_output: Annotated[
        bool, typer.Option("-G", help="Shortcut for --output-format germ.")
    ] = False,
    begin_delay: Annotated[
        float | None,
        typer.Option(
            "--begin-delay", "-b", envvar="GERM_BEGIN_DELAY", metavar="SECS",
            help="Delay before the animation starts.",
        ),
    ] = None,
    end_delay: Annotated[
        float | None,
        typer.Option(
            "--end-delay", "-e", envvar="GERM_END_DELAY", metavar="SECS",
            help="Hold at the end of the animation. 0 disables the hold frame.",
        ),
    ] = None,
    delay_type_start: Annotated[
        int | None,
        typer.Option(
            "--delay-type-start", envvar="GERM_DELAY_TYPE_START", metavar="MS",
            help="Delay before typing of each input starts.",
        ),
    ] = None,
    delay_type_char: Annotated[
        int | None,
        typer.Option(
            "--delay-type-char", envvar="GERM_DELAY_TYPE_CHAR", metavar="MS",
            help="Delay between typed characters.",
        ),
    ] = None,
    delay_type_submit: Annotated[
        int | None,
        typer.Option(
            "--delay-type-submit", envvar="GERM_DELAY_TYPE_SUBMIT", metavar="MS",
            help="Delay between the last typed character and the first output.",
        ),
    ] = None,
    delay_output_line: Annotated[
        int | None,
        typer.Option(
            "--delay-output-line", envvar="GERM_DELAY_OUTPUT_LINE", metavar="MS",
            help="Delay between outputs.",
        ),
    ] = None,
    speed: Annotated[
        float | None,
        typer.Option("--speed", "-s", metavar="FACTOR", help="Speed up (>1) or slow down (<1)."),
    ] = None,
    width: Annotated[
        int | None, typer.Option("--width", "-W", metavar="COLS", help="Terminal columns.")
    ] = None,
    height: Annotated[
        int | None, typer.Option("--height", "-H", metavar="ROWS", help="Terminal rows.")
    ] = None,
    title: Annotated[str | None, typer.Option("--title", "-t", help="Recording title.")] = None,
    idle_time_limit: Annotated[
        float | None,
        typer.Option("--idle-time-limit", metavar="SECS", help="Player idle time limit."),
    ] = None,
    timestamp: Annotated[
        int | None,
        typer.Option("--timestamp", metavar="UNIX", help="Recording time written to the header."),
    ] = None,
    now: Annotated[
        bool, typer.Option("--now", help="Use the current time as the header timestamp.")
    ] = False,
    shell: Annotated[
        str, typer.Option("--shell", "-S", envvar="SHELL", help="SHELL recorded in the header.")
    ] = DEFAULT_SHELL,
    term: Annotated[
        str, typer.Option("--term", "-T", envvar="TERM", help="TERM recorded in the header.")
    ] = DEFAULT_TERM,
    stdin: Annotated[
        bool, typer.Option("--stdin", help="Also emit keypress events for typed input.")
    ] = False,
    config: Annotated[
        Path | None, typer.Option("--config", help="Path to an extra config.yaml.")
    ] = None,
    log_level: Annotated[str | None, typer.Option("--log-level", help="Log level.")] = None,
    log_format: Annotated[
        str | None, typer.Option("--log-format", help="console or json.")
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version."),
    ] = None,
) -> None:
    """Create an asciicast recording without recording a session."""
    try:
        settings = Settings.load(config_file=config)
    except (GermError, ValidationError) as exc:
        _fail(exc)
    override_settings(settings)

    configure_logging(
        level=log_level or settings.logging.level,
        format=log_format or settings.logging.format,
        log_file=str(settings.logging.file) if settings.logging.file else None,
    )

    if input_text is None and input_file is None and not interactive:
        console.print("[red]Nothing to record: give an INPUT, --input-file or --interactive.[/red]")
        raise typer.Exit(2)

    prompt_text = prompt if prompt is not None else settings.prompt
    target_format = DocumentFormat.GERM if germ_output else (output_format or settings.output_format)
    overrides = {
        "begin": begin_delay,
        "end": end_delay,
        "type_start": delay_type_start,
        "type_char": delay_type_char,
        "type_submit": delay_type_submit,
        "output_line": delay_output_line,
        "speed": speed,
    }
    runner = None if no_exec else ShellRunner(shell, timeout=settings.capture.timeout)

    try:
        source = (
            _load_source(input_file, input_format, prompt_text)
            if input_file is not None
            else None
        )
        base_timings = (
            source.timings
            if source is not None and input_format is DocumentFormat.GERM
            else settings.timings
        )
        sequence = Sequence.from_timings(_resolve_timings(base_timings, overrides))
        if source is not None:
            sequence.append_from(source)

        if input_text is not None:
            sequence.add(_positional_command(input_text, outputs, comment, prompt_text, runner))

        if interactive:
            session = InteractiveSession(runner=runner, prompt=prompt_text)
            sequence.append(session.collect())

        header = Header(
            width=_pick(width, settings.header.width),
            height=_pick(height, settings.header.height),
            timestamp=int(time.time()) if now else timestamp,
            idle_time_limit=_pick(idle_time_limit, settings.header.idle_time_limit),
            title=_pick(title, settings.header.title),
            env=Env(shell=shell, term=term),
            theme=settings.header.theme,
        )
        document = get_format(
            target_format,
            header=header,
            stdin_echo=stdin or settings.stdin,
            prompt=prompt_text,
        )

        with open_writer(output_file) as writer:
            document.write_to(sequence, writer)
    except (GermError, ValidationError) as exc:
        _fail(exc)

    log.info(
        "recording_written",
        format=target_format.value,
        commands=len(sequence),
        target=str(output_file) if output_file else "<stdout>",
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fail(exc: Exception) -> NoReturn:
    message = exc.message if isinstance(exc, GermError) else str(exc)
    console.print(f"[red]Error: {escape(message)}[/red]", highlight=False)
    raise typer.Exit(1)


def _pick(value: Any, default: Any) -> Any:
    return default if value is None else value


def _resolve_timings(base: TimingConfig, overrides: dict[str, Any]) -> TimingConfig:
    changes = {k: v for k, v in overrides.items() if v is not None}
    return base.replace(**changes) if changes else base


def _read_source(path: Path) -> bytes:
    if str(path) == STDIO_TARGET:
        return sys.stdin.buffer.read()
    try:
        return path.read_bytes()
    except OSError as exc:
        raise IOFailureError(str(path), exc) from exc


def _load_source(path: Path, input_format: DocumentFormat, prompt: str) -> Sequence:
    source = get_format(input_format, prompt=prompt).decode(_read_source(path))
    log.info("source_loaded", path=str(path), format=input_format.value, commands=len(source))
    return source


def _positional_command(
    text: str,
    outputs: list[str] | None,
    comment: str | None,
    prompt: str,
    runner: ShellRunner | None,
) -> Command:
    if outputs or runner is None:
        return Command(comment=comment, prompt=prompt, input=text, outputs=list(outputs or []))
    return runner.record(text, prompt=prompt, comment=comment)


if __name__ == "__main__":
    app()
