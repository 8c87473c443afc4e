"""Sequence model — scripted commands plus the timings used to play them."""

from germ.sequence.constants import DEFAULT_PROMPT, SEQUENCE_VERSION
from germ.sequence.models import Command, Sequence, TimingConfig

__all__ = [
    "Command",
    "DEFAULT_PROMPT",
    "SEQUENCE_VERSION",
    "Sequence",
    "TimingConfig",
]
