"""Exception hierarchy for deck generation.

WHY: A deck is only useful when every card has its audio and image, so
the pipeline fails fast. Callers (the CLI, tests) need to tell apart a
broken subtitle file from a failed ffmpeg run, and to know which export
stage failed.

HOW: One base class, SubdeckError, with a subclass per failure kind.
ExportError carries a ``stage`` string naming the step that failed.
The underlying exception is always chained with ``raise ... from exc``.

RULES:
- No local recovery or retry anywhere in the pipeline
- Stage names: "schedule_media", "write_data_file", "finish_exports"
"""

from __future__ import annotations

from typing import Optional


class SubdeckError(Exception):
    """Base exception for subdeck errors."""


class SubtitleParseError(SubdeckError):
    """Raised when a subtitle file cannot be parsed."""


class SerializationError(SubdeckError):
    """Raised when the deck table cannot be encoded."""


class ExportError(SubdeckError):
    """Raised when an exporter operation fails.

    Attributes:
        stage: Name of the export step that failed, or None if unknown.
    """

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.stage = stage


class MediaExtractionError(ExportError):
    """Raised when ffmpeg fails to extract an image or audio clip."""

    def __init__(self, message: str) -> None:
        super().__init__(message, stage="finish_exports")
