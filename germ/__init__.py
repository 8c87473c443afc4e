"""germ — Terminal session recordings without recording a session.

germ turns a scripted list of inputs and their outputs into an asciicast v2
document that asciinema can replay, with consistent pacing and no rehearsal.

Architecture layers (bottom to top):
    1. Sequence  — Command / Sequence / TimingConfig models (Pydantic)
    2. Asciicast — header and event shapes, the event generator, the writer
    3. Formats   — native germ JSON, asciicast playback, termsheets pairs
    4. Capture   — shell execution and the interactive entry loop
    5. CLI       — Typer entry point, layered settings, structlog logging
"""

__version__ = "0.1.0"
__author__ = "germ contributors"
__license__ = "GPL-3.0-or-later"

from germ.sequence.models import Command, Sequence, TimingConfig

__all__ = [
    "__version__",
    "Command",
    "Sequence",
    "TimingConfig",
]
