"""Document formats — native ``germ``, asciicast playback, termsheets pairs."""

from germ.formats.asciicast import AsciicastFormat
from germ.formats.base import BaseFormat, DocumentFormat
from germ.formats.native import NativeFormat
from germ.formats.registry import FormatRegistry, default_registry, get_format
from germ.formats.termsheets import FlatCommand, TermsheetsFormat

__all__ = [
    "AsciicastFormat",
    "BaseFormat",
    "DocumentFormat",
    "FlatCommand",
    "FormatRegistry",
    "NativeFormat",
    "TermsheetsFormat",
    "default_registry",
    "get_format",
]
