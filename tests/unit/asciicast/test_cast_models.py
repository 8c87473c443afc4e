"""Unit tests — asciicast header and event records."""

from __future__ import annotations

import json

import pytest

from germ.asciicast.models import (
    Env,
    Event,
    EventKind,
    Header,
    Theme,
    Timeline,
    truncate_timestamp,
)


@pytest.mark.unit
class TestHeader:
    def test_minimal_header(self) -> None:
        assert Header().to_json() == '{"version":2,"width":80,"height":24}'

    def test_env_uses_upper_case_keys(self, header: Header) -> None:
        assert header.to_json() == (
            '{"version":2,"width":80,"height":24,'
            '"env":{"SHELL":"/usr/bin/zsh","TERM":"xterm-256color"}}'
        )

    def test_optional_fields_are_written_when_set(self) -> None:
        header = Header(
            width=120,
            height=40,
            timestamp=1700000000,
            idle_time_limit=2.5,
            title="démo",
            theme=Theme(foreground="#fff", background="#000", palette="#000:#111"),
        )
        data = json.loads(header.to_json())
        assert data["width"] == 120
        assert data["timestamp"] == 1700000000
        assert data["idle_time_limit"] == 2.5
        assert data["theme"] == {"fg": "#fff", "bg": "#000", "palette": "#000:#111"}
        assert "démo" in header.to_json()

    def test_none_fields_are_omitted(self) -> None:
        data = json.loads(Header(title=None, duration=None).to_json())
        assert set(data) == {"version", "width", "height"}

    def test_env_accepts_aliases(self) -> None:
        env = Env.model_validate({"SHELL": "/bin/sh", "TERM": "dumb"})
        assert env.shell == "/bin/sh"
        assert env.term == "dumb"

    def test_rejects_zero_width(self) -> None:
        with pytest.raises(ValueError):
            Header(width=0)


@pytest.mark.unit
class TestEvent:
    def test_record_shape(self) -> None:
        assert Event(0.75, EventKind.PRINTED, "e").to_record() == [0.75, "o", "e"]

    def test_keypress_kind(self) -> None:
        assert Event(1.0, EventKind.KEYPRESS, "x").to_json() == '[1.0,"i","x"]'

    def test_json_is_compact_and_keeps_unicode(self) -> None:
        assert Event(0.0, EventKind.PRINTED, "é\r\n").to_json() == '[0.0,"o","é\\r\\n"]'

    def test_record_truncates_timestamp(self) -> None:
        assert Event(1.23456, EventKind.PRINTED, "").to_record()[0] == 1.234

    def test_events_are_immutable(self) -> None:
        event = Event(0.0, EventKind.PRINTED, "")
        with pytest.raises(AttributeError):
            event.payload = "x"  # type: ignore[misc]


@pytest.mark.unit
class TestTruncateTimestamp:
    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0.0, 0.0),
            (0.0009, 0.0),
            (1.9999, 1.999),
            (2.16, 2.16),
            (12.3456789, 12.345),
        ],
    )
    def test_truncates_toward_zero(self, seconds: float, expected: float) -> None:
        assert truncate_timestamp(seconds) == expected

    def test_never_rounds_up(self) -> None:
        for value in (0.1234, 0.5678, 3.14159, 7.0005):
            assert truncate_timestamp(value) <= value


@pytest.mark.unit
class TestTimeline:
    def test_iterates_events(self) -> None:
        events = [Event(0.0, EventKind.PRINTED, "a"), Event(0.1, EventKind.PRINTED, "b")]
        timeline = Timeline(events=events, end_time=0.1)
        assert list(timeline) == events
        assert len(timeline) == 2
