"""Abstract exporter — the collaborator every deck format writes through.

WHY: Deck formats (the Anki CSV today) decide *what* goes in a deck:
which rows, which columns, which clips. Where files land, how media is
named, and how ffmpeg is driven are a separate concern. Keeping them
behind one interface lets the CSV builder stay free of paths and
processes, and lets tests swap in a recording fake.

HOW: Exporter is an ABC. Metadata is exposed as read-only properties,
media extraction is two-phase (schedule now, materialize in
finish_exports), and the encoded table is handed over as bytes.

RULES:
- schedule_*() return a reference usable immediately in card text
- No media is extracted before finish_exports() is called
- finish_exports() is called exactly once, after all scheduling
- Implementations wrap their failures in ExportError with a stage name

To add a new exporter:
1. Subclass Exporter
2. Implement every abstract member below
3. Pass an instance to any function in EXPORT_FORMATS
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from subdeck.core.ir import AlignedPair, Period


class Exporter(ABC):
    """Owns naming, media scheduling, and file writes for one export."""

    @property
    @abstractmethod
    def foreign_language(self) -> str:
        """Language code of the foreign track, e.g. 'es'."""

    @property
    @abstractmethod
    def title(self) -> str:
        """Human-readable source title shown on every card."""

    @property
    @abstractmethod
    def file_stem(self) -> str:
        """Source video filename without extension."""

    @abstractmethod
    def align(self) -> List[AlignedPair]:
        """Return both subtitle tracks merged into aligned positions."""

    @abstractmethod
    def schedule_image_export(self, instant: float) -> str:
        """Register a screenshot at ``instant`` seconds; return its reference."""

    @abstractmethod
    def schedule_audio_export(self, language: str, period: Period) -> str:
        """Register an audio clip covering ``period``; return its reference."""

    @abstractmethod
    def export_data_file(self, name: str, data: bytes) -> None:
        """Persist an encoded data file under the logical ``name``."""

    @abstractmethod
    def finish_exports(self) -> None:
        """Extract every scheduled media file.

        Returns only after all extractions completed; raises on the first
        failure.
        """
