"""Unit tests — asciicast v2 playback format."""

from __future__ import annotations

import io
import json

import pytest

from germ.asciicast.models import EventKind, Header
from germ.asciicast.writer import DocumentWriter
from germ.exceptions import MalformedDocumentError
from germ.formats.asciicast import AsciicastFormat
from germ.sequence.models import Command, Sequence

HELLO_CAST = """\
{"version":2,"width":80,"height":24,"env":{"SHELL":"/usr/bin/zsh","TERM":"xterm-256color"}}
[0.0,"o","$ "]
[0.75,"o","e"]
[0.785,"o","c"]
[0.82,"o","h"]
[0.855,"o","o"]
[0.89,"o"," "]
[0.925,"o","H"]
[0.96,"o","e"]
[0.995,"o","l"]
[1.03,"o","l"]
[1.065,"o","o"]
[1.1,"o"," "]
[1.135,"o","W"]
[1.17,"o","o"]
[1.205,"o","r"]
[1.24,"o","l"]
[1.275,"o","d"]
[2.16,"o","\\r\\n"]
[2.16,"o","Hello World\\r\\n"]
[3.16,"o",""]
"""


@pytest.mark.unit
class TestAsciicastEncode:
    def test_hello_world_cast(self, hello_sequence: Sequence, header: Header) -> None:
        data = AsciicastFormat(header=header).encode(hello_sequence)
        assert data.decode("utf-8") == HELLO_CAST

    def test_default_header(self, hello_sequence: Sequence) -> None:
        first = AsciicastFormat().encode(hello_sequence).split(b"\n", 1)[0]
        assert first == b'{"version":2,"width":80,"height":24}'

    def test_write_to_streams_onto_writer(self, hello_sequence: Sequence, header: Header) -> None:
        buffer = io.BytesIO()
        writer = DocumentWriter(buffer)
        AsciicastFormat(header=header).write_to(hello_sequence, writer)
        assert buffer.getvalue().decode("utf-8") == HELLO_CAST
        assert writer.bytes_written == len(HELLO_CAST.encode("utf-8"))

    def test_stdin_echo_adds_keypress_records(self) -> None:
        data = AsciicastFormat(stdin_echo=True).encode(Sequence.from_input("a"))
        records = [json.loads(line) for line in data.decode().splitlines()[1:]]
        assert records[1:3] == [[0.75, "i", "a"], [0.75, "o", "a"]]

    def test_every_line_is_valid_json(self, demo_sequence: Sequence) -> None:
        lines = AsciicastFormat(stdin_echo=True).encode(demo_sequence).decode().splitlines()
        assert json.loads(lines[0])["version"] == 2
        for line in lines[1:]:
            timestamp, kind, payload = json.loads(line)
            assert isinstance(timestamp, float)
            assert kind in ("o", "i")
            assert isinstance(payload, str)


@pytest.mark.unit
class TestAsciicastDecode:
    def test_decode_cast(self) -> None:
        header, events = AsciicastFormat().decode_cast(HELLO_CAST)
        assert header.env is not None
        assert header.env.shell == "/usr/bin/zsh"
        assert len(events) == 20
        assert events[1].timestamp == 0.75
        assert events[-1].payload == ""

    def test_decode_is_one_command_of_printed_lines(self) -> None:
        seq = AsciicastFormat().decode(HELLO_CAST.encode())
        assert seq.commands == [
            Command(prompt="", input="", outputs=["$ echo Hello World", "Hello World"])
        ]

    def test_decode_ignores_keypress_events(self) -> None:
        cast = '{"version":2,"width":80,"height":24}\n[0.1,"i","x"]\n[0.1,"o","y"]\n'
        _, events = AsciicastFormat().decode_cast(cast)
        assert [e.kind for e in events] == [EventKind.KEYPRESS, EventKind.PRINTED]
        assert AsciicastFormat().decode(cast).commands[0].outputs == ["y"]

    def test_decode_header_only(self) -> None:
        seq = AsciicastFormat().decode('{"version":2,"width":80,"height":24}\n')
        assert len(seq) == 0

    def test_integer_timestamps_are_accepted(self) -> None:
        _, events = AsciicastFormat().decode_cast('{"version":2,"width":1,"height":1}\n[1,"o","x"]')
        assert events[0].timestamp == 1.0

    def test_empty_document(self) -> None:
        with pytest.raises(MalformedDocumentError, match="empty"):
            AsciicastFormat().decode(b"\n\n")

    def test_header_must_be_object(self) -> None:
        with pytest.raises(MalformedDocumentError, match="header"):
            AsciicastFormat().decode('[0.0,"o","x"]\n')

    def test_unsupported_version(self) -> None:
        with pytest.raises(MalformedDocumentError, match="version"):
            AsciicastFormat().decode('{"version":1,"width":80,"height":24}\n')

    @pytest.mark.parametrize("version", ["2.0", '"2"', "true"])
    def test_version_must_be_integer(self, version: str) -> None:
        cast = '{"version":' + version + ',"width":80,"height":24}\n'
        with pytest.raises(MalformedDocumentError, match="version"):
            AsciicastFormat().decode(cast)

    @pytest.mark.parametrize(
        "header",
        [
            '{"version":2,"width":"80","height":24}',
            '{"version":2,"width":80,"height":24.0}',
            '{"version":2,"width":80,"height":24,"timestamp":"1700000000"}',
        ],
    )
    def test_header_types_are_not_coerced(self, header: str) -> None:
        with pytest.raises(MalformedDocumentError):
            AsciicastFormat().decode(header + "\n")

    def test_header_rejects_zero_width(self) -> None:
        cast = '{"version":2,"width":0,"height":24}\n'
        with pytest.raises(MalformedDocumentError):
            AsciicastFormat().decode(cast)

    @pytest.mark.parametrize(
        "record",
        [
            '{"t":0}',
            '[0.0,"o"]',
            '[true,"o","x"]',
            '["0.0","o","x"]',
            '[0.0,"x","x"]',
            '[0.0,["o"],"x"]',
            '[0.0,"o",1]',
            "not json",
        ],
    )
    def test_malformed_event(self, record: str) -> None:
        cast = '{"version":2,"width":80,"height":24}\n' + record + "\n"
        with pytest.raises(MalformedDocumentError) as exc_info:
            AsciicastFormat().decode(cast)
        assert exc_info.value.document_format == "asciicast"
