"""Document formats — registry.

Maps a :class:`DocumentFormat` tag to the class that handles it, so callers
pick a format by tag instead of branching on it.

Usage::

    fmt = get_format(DocumentFormat.ASCIICAST, header=header, stdin_echo=True)
    data = fmt.encode(sequence)
"""

from __future__ import annotations

from typing import Any, Type

from germ.formats.asciicast import AsciicastFormat
from germ.formats.base import BaseFormat, DocumentFormat
from germ.formats.native import NativeFormat
from germ.formats.termsheets import TermsheetsFormat
from germ.logging import get_logger

log = get_logger(__name__)


class FormatRegistry:
    """Runtime registry of document format classes."""

    def __init__(self) -> None:
        self._classes: dict[DocumentFormat, Type[BaseFormat]] = {}

    def register(self, format_class: Type[BaseFormat]) -> None:
        tag = getattr(format_class, "FORMAT", None)
        if tag is None:
            raise ValueError(f"Format class {format_class.__name__} has no FORMAT tag.")
        self._classes[DocumentFormat(tag)] = format_class
        log.debug("format_registered", format=tag.value, cls=format_class.__name__)

    def create(self, tag: DocumentFormat | str, **options: Any) -> BaseFormat:
        """Instantiate the format registered under *tag*.

        Each format picks the *options* it understands and ignores the rest.
        """
        try:
            format_class = self._classes[DocumentFormat(tag)]
        except (KeyError, ValueError):
            known = ", ".join(t.value for t in self._classes)
            raise ValueError(f"Unknown document format {tag!r}; expected one of: {known}") from None
        return format_class.from_options(**options)

    def list_formats(self) -> list[DocumentFormat]:
        return list(self._classes)

    def is_registered(self, tag: DocumentFormat | str) -> bool:
        try:
            return DocumentFormat(tag) in self._classes
        except ValueError:
            return False


def default_registry() -> FormatRegistry:
    registry = FormatRegistry()
    registry.register(NativeFormat)
    registry.register(AsciicastFormat)
    registry.register(TermsheetsFormat)
    return registry


_registry = default_registry()


def get_format(tag: DocumentFormat | str, **options: Any) -> BaseFormat:
    return _registry.create(tag, **options)
