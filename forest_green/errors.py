"""Exception hierarchy for the forest-green frame synthesizer."""

from __future__ import annotations


class ForestGreenError(Exception):
    """Base class for every error raised by the frame synthesizer."""


class ConfigurationError(ForestGreenError):
    """Invalid configuration, input directory or output directory."""


class MalformedName(ForestGreenError):
    """A source file name does not carry a parseable capture timestamp."""

    def __init__(self, name: str, reason: str | None = None) -> None:
        message = f'File: "{name}" has wrong name format'
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.name = name


class DecodeError(ForestGreenError):
    """A source image could not be read or decoded."""


class EncodeError(ForestGreenError):
    """A synthesized frame could not be encoded or written."""


class FontError(ForestGreenError):
    """The caption font file is unreadable or cannot be parsed."""


__all__ = [
    "ConfigurationError",
    "DecodeError",
    "EncodeError",
    "FontError",
    "ForestGreenError",
    "MalformedName",
]
