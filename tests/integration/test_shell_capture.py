"""Integration tests — ShellRunner against a real /bin/sh."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from germ.capture import ShellRunner
from germ.cli.main import app
from germ.exceptions import (
    CaptureError,
    CaptureTimeoutError,
    EncodingFailureError,
    IOFailureError,
)

SHELL = "/bin/sh"

pytestmark = pytest.mark.skipif(not Path(SHELL).exists(), reason="requires /bin/sh")

runner = CliRunner()


@pytest.mark.integration
class TestShellRunnerCapture:
    def test_captures_stdout(self) -> None:
        assert ShellRunner(SHELL).capture("echo hello") == "hello\n"

    def test_multi_line_output(self) -> None:
        assert ShellRunner(SHELL).capture("printf 'a\\nb\\n'") == "a\nb\n"

    def test_stderr_is_not_captured(self) -> None:
        assert ShellRunner(SHELL).capture("echo out; echo err >&2") == "out\n"

    def test_empty_output(self) -> None:
        assert ShellRunner(SHELL).capture("true") == ""

    def test_non_zero_exit_still_returns_output(self) -> None:
        assert ShellRunner(SHELL).capture("echo partial; exit 3") == "partial\n"

    def test_utf8_output(self) -> None:
        assert ShellRunner(SHELL).capture("printf 'h\\303\\251llo'") == "héllo"

    def test_invalid_utf8(self) -> None:
        with pytest.raises(EncodingFailureError) as exc_info:
            ShellRunner(SHELL).capture("printf 'ok\\377'")
        assert exc_info.value.command == "printf 'ok\\377'"
        assert exc_info.value.context["position"] == 2
        assert isinstance(exc_info.value, CaptureError)

    def test_missing_shell(self, tmp_path: Path) -> None:
        with pytest.raises(IOFailureError) as exc_info:
            ShellRunner(str(tmp_path / "no-such-shell")).capture("echo hi")
        assert "no-such-shell" in exc_info.value.target

    def test_timeout(self) -> None:
        with pytest.raises(CaptureTimeoutError) as exc_info:
            ShellRunner(SHELL, timeout=0.2).capture("exec sleep 5")
        assert exc_info.value.timeout_seconds == 0.2


@pytest.mark.integration
class TestShellRunnerRecord:
    def test_record_builds_command(self) -> None:
        command = ShellRunner(SHELL).record("echo hi", prompt="% ", comment="# greet")
        assert command.comment == "# greet"
        assert command.prompt == "% "
        assert command.input == "echo hi"
        assert command.outputs == ["hi\n"]

    def test_record_keeps_empty_output(self) -> None:
        assert ShellRunner(SHELL).record("true").outputs == [""]


@pytest.mark.integration
class TestCliCapture:
    def test_input_is_executed_when_no_outputs_given(self) -> None:
        result = runner.invoke(app, ["echo hi", "-S", SHELL, "-T", "dumb", "-O", "termsheets"])
        assert result.exit_code == 0, result.output
        assert result.stdout == '[{"input":"echo hi","output":["hi\\n"]}]\n'

    def test_captured_output_in_cast(self) -> None:
        result = runner.invoke(app, ["echo hi", "-S", SHELL, "-T", "dumb", "-e", "0"])
        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert json.loads(lines[0])["env"] == {"SHELL": SHELL, "TERM": "dumb"}
        assert [json.loads(line)[2] for line in lines[-2:]] == ["\r\n", "hi\r\n"]

    def test_interactive_with_capture(self, tmp_path: Path) -> None:
        target = tmp_path / "session.json"
        result = runner.invoke(
            app,
            ["-i", "-S", SHELL, "-G", "-o", str(target)],
            input="echo one\necho two\n\n",
        )
        assert result.exit_code == 0, result.output
        doc = json.loads(target.read_text())
        assert [c["outputs"] for c in doc["commands"]] == [["one\n"], ["two\n"]]

    def test_encoding_failure_exits_with_error(self) -> None:
        result = runner.invoke(app, ["printf '\\377'", "-S", SHELL, "-T", "dumb"])
        assert result.exit_code == 1
        assert "UTF-8" in result.output
