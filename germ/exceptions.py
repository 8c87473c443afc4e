"""germ — Exception hierarchy.

All exceptions raised by germ inherit from GermError so that callers (the CLI
in particular) can catch the full family with a single except clause.

Hierarchy:
    GermError
    ├── DocumentError
    │   └── MalformedDocumentError
    ├── InvalidTimingValueError
    ├── IOFailureError
    └── CaptureError
        ├── EncodingFailureError
        └── CaptureTimeoutError
"""

from __future__ import annotations

from typing import Any


class GermError(Exception):
    """Base exception for all germ errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context})"


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class DocumentError(GermError):
    """Base for all document format errors."""


class MalformedDocumentError(DocumentError):
    """A germ, asciicast or termsheets document could not be parsed."""

    def __init__(
        self,
        message: str,
        document_format: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(
            f"Malformed {document_format} document: {message}",
            context={"format": document_format, "errors": errors or []},
        )
        self.document_format = document_format
        self.errors = errors or []


# ---------------------------------------------------------------------------
# Timings
# ---------------------------------------------------------------------------


class InvalidTimingValueError(GermError):
    """A timing value is invalid (non-positive speed, negative delay)."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            f"Invalid timing value: {message}",
            context={"validation_errors": errors or []},
        )
        self.errors = errors or []


# ---------------------------------------------------------------------------
# I/O
# ---------------------------------------------------------------------------


class IOFailureError(GermError):
    """Opening, creating, reading or writing the underlying stream failed."""

    def __init__(self, target: str, cause: Exception) -> None:
        super().__init__(
            f"I/O failure on '{target}': {cause}",
            context={"target": target, "cause": str(cause)},
        )
        self.target = target
        self.cause = cause


# ---------------------------------------------------------------------------
# Shell capture
# ---------------------------------------------------------------------------


class CaptureError(GermError):
    """Base for errors raised while capturing real command output."""


class EncodingFailureError(CaptureError):
    """Captured subprocess output is not valid UTF-8 text."""

    def __init__(self, command: str, cause: UnicodeDecodeError) -> None:
        super().__init__(
            f"Output of '{command}' is not valid UTF-8: {cause.reason} "
            f"at byte {cause.start}",
            context={"command": command, "position": cause.start},
        )
        self.command = command
        self.cause = cause


class CaptureTimeoutError(CaptureError):
    """A captured command exceeded the configured timeout."""

    def __init__(self, command: str, timeout_seconds: float) -> None:
        super().__init__(
            f"Command '{command}' timed out after {timeout_seconds}s",
            context={"command": command, "timeout_seconds": timeout_seconds},
        )
        self.command = command
        self.timeout_seconds = timeout_seconds
