"""Exporter that writes a deck directory next to the source video.

WHY: Anki's CSV import expects the table, and the media files its rows
reference must be copied into Anki's flat media folder. Putting all of
one export in a single directory (``<stem>_csv/``) makes that a single
select-all-and-copy for the user.

HOW: FilesystemExporter implements the Exporter ABC. It holds the loaded
subtitle tracks and aligns them on demand, names media files from the
video stem and timestamps, delegates extraction to a MediaQueue, and
writes data files into the output directory, creating it on first use.

RULES:
- Output directory: <output_dir or video dir>/<stem>_<label>/
- Image reference: <stem>_<HH.MM.SS.mmm>.jpg
- Audio reference: <stem>_<begin>-<end>.<lang>.mp3
- References are bare file names (Anki's media folder is flat)
- OSError on write is wrapped in ExportError(stage="write_data_file")
- finish_exports() may be called only once
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from subdeck.core.align import align_tracks
from subdeck.core.ir import AlignedPair, Period, Subtitle
from subdeck.core.timecode import seconds_to_filename_time
from subdeck.errors import ExportError
from subdeck.exporters.base import Exporter
from subdeck.exporters.media import AudioRequest, ImageRequest, MediaQueue

logger = logging.getLogger(__name__)


class FilesystemExporter(Exporter):
    """Export one video and its subtitle tracks into a deck directory.

    Args:
        video_path: Source video; also the input for media extraction.
        foreign: Cues of the foreign-language track.
        native: Cues of the native-language track, or None.
        foreign_language: Language code of the foreign track.
        title: Card "source" text; defaults to the video stem.
        output_dir: Parent of the deck directory; defaults to the video's directory.
        label: Suffix of the deck directory name.
        media_queue: Queue to schedule media on; one is created for the video if omitted.
    """

    def __init__(
        self,
        video_path: str | Path,
        foreign: Sequence[Subtitle],
        native: Optional[Sequence[Subtitle]] = None,
        *,
        foreign_language: str,
        title: Optional[str] = None,
        output_dir: Optional[str | Path] = None,
        label: str = "csv",
        media_queue: Optional[MediaQueue] = None,
    ) -> None:
        self.video_path = Path(video_path)
        self._foreign = list(foreign)
        self._native = list(native) if native is not None else None
        self._foreign_language = foreign_language
        self._title = title or self.video_path.stem
        parent = Path(output_dir) if output_dir is not None else self.video_path.parent
        self.deck_dir = parent / "{}_{}".format(self.video_path.stem, label)
        self.media_queue = media_queue or MediaQueue(self.video_path)
        self._finished = False

    @property
    def foreign_language(self) -> str:
        return self._foreign_language

    @property
    def title(self) -> str:
        return self._title

    @property
    def file_stem(self) -> str:
        return self.video_path.stem

    def align(self) -> List[AlignedPair]:
        return align_tracks(self._foreign, self._native)

    def _ensure_deck_dir(self) -> Path:
        self.deck_dir.mkdir(parents=True, exist_ok=True)
        return self.deck_dir

    def schedule_image_export(self, instant: float) -> str:
        name = "{}_{}.jpg".format(self.file_stem, seconds_to_filename_time(instant))
        self.media_queue.schedule(ImageRequest(instant=instant, output_path=self.deck_dir / name))
        return name

    def schedule_audio_export(self, language: str, period: Period) -> str:
        name = "{}_{}-{}.{}.mp3".format(
            self.file_stem,
            seconds_to_filename_time(period.begin),
            seconds_to_filename_time(period.end),
            language,
        )
        self.media_queue.schedule(
            AudioRequest(language=language, period=period, output_path=self.deck_dir / name)
        )
        return name

    def export_data_file(self, name: str, data: bytes) -> None:
        path = self.deck_dir / name
        try:
            self._ensure_deck_dir()
            path.write_bytes(data)
        except OSError as exc:
            raise ExportError("could not write {}: {}".format(path, exc), stage="write_data_file") from exc
        logger.info("Wrote %s (%d bytes)", path, len(data))

    def finish_exports(self) -> None:
        if self._finished:
            raise ExportError("exports already finished", stage="finish_exports")
        self._finished = True
        logger.info("Finishing export: %d media files queued", self.media_queue.pending)
        try:
            self._ensure_deck_dir()
        except OSError as exc:
            raise ExportError(
                "could not create {}: {}".format(self.deck_dir, exc), stage="finish_exports"
            ) from exc
        self.media_queue.flush()
