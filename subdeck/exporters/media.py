"""Deferred media extraction with ffmpeg.

WHY: Every card needs a screenshot and an audio clip cut from the source
video. Decoding is slow, while building the deck table is fast, so the
deck builder only *registers* media requests and gets a file name back
immediately. The actual ffmpeg runs happen once, at the end, where they
can be deduplicated and run in parallel.

HOW: Two request dataclasses describe the work:
  ImageRequest — one frame at an instant, scaled to IMAGE_HEIGHT
  AudioRequest — the audio of a Period, encoded as MP3
MediaQueue collects requests keyed by output path. flush() turns each
into an ffmpeg command and runs them on a ThreadPoolExecutor; the first
failure is re-raised after all workers finished.

RULES:
- schedule() is idempotent per output path
- Nothing runs before flush(); flush() runs at most once
- Scheduling after flush() raises ExportError
- A missing ffmpeg, non-zero exit, or timeout raises MediaExtractionError
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from subdeck.config import FFMPEG_BINARY, FFMPEG_TIMEOUT_S, IMAGE_HEIGHT, MEDIA_WORKERS
from subdeck.core.ir import Period
from subdeck.errors import ExportError, MediaExtractionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageRequest:
    """A screenshot of the video at ``instant`` seconds."""

    instant: float
    output_path: Path


@dataclass(frozen=True)
class AudioRequest:
    """An audio clip of the video covering ``period``.

    ``language`` is recorded for naming and logging; the clip is taken
    from the video's first audio stream.
    """

    language: str
    period: Period
    output_path: Path


MediaRequest = Union[ImageRequest, AudioRequest]

Runner = Callable[[List[str], int], None]


def run_ffmpeg(command: List[str], timeout: int) -> None:
    """Run one ffmpeg command, raising MediaExtractionError on failure."""
    binary = command[0]
    if shutil.which(binary) is None:
        raise MediaExtractionError(
            "ffmpeg not found ({!r}). Install FFmpeg and make sure it is on PATH, "
            "or set SUBDECK_FFMPEG.".format(binary)
        )
    try:
        result = subprocess.run(command, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        raise MediaExtractionError(
            "ffmpeg timed out after {}s: {}".format(timeout, " ".join(command))
        ) from exc
    if result.returncode != 0:
        raise MediaExtractionError(
            "ffmpeg exited with code {}: {}\n{}".format(
                result.returncode, " ".join(command), result.stderr.strip()
            )
        )


def _seconds_arg(seconds: float) -> str:
    return "{:.3f}".format(seconds)


class MediaQueue:
    """Collects media requests for one video and extracts them on flush()."""

    def __init__(
        self,
        video_path: str | Path,
        ffmpeg_binary: str = FFMPEG_BINARY,
        max_workers: int = MEDIA_WORKERS,
        image_height: int = IMAGE_HEIGHT,
        timeout_s: int = FFMPEG_TIMEOUT_S,
        runner: Optional[Runner] = None,
    ) -> None:
        self.video_path = Path(video_path)
        self.ffmpeg_binary = ffmpeg_binary
        self.max_workers = max_workers
        self.image_height = image_height
        self.timeout_s = timeout_s
        self._runner = runner
        self._requests: Dict[Path, MediaRequest] = {}
        self._flushed = False

    @property
    def pending(self) -> int:
        """Number of distinct requests waiting for flush()."""
        return len(self._requests)

    def schedule(self, request: MediaRequest) -> Path:
        """Register a request and return its output path.

        Raises:
            ExportError: If the queue was already flushed.
        """
        if self._flushed:
            raise ExportError("media queue already flushed", stage="schedule_media")
        self._requests.setdefault(request.output_path, request)
        return request.output_path

    def build_command(self, request: MediaRequest) -> List[str]:
        """Return the ffmpeg argument list for one request."""
        base = [self.ffmpeg_binary, "-y", "-hide_banner", "-loglevel", "error"]
        if isinstance(request, ImageRequest):
            return base + [
                "-ss", _seconds_arg(request.instant),
                "-i", str(self.video_path),
                "-frames:v", "1",
                "-vf", "scale=-2:{}".format(self.image_height),
                str(request.output_path),
            ]
        return base + [
            "-ss", _seconds_arg(request.period.begin),
            "-i", str(self.video_path),
            "-t", _seconds_arg(request.period.duration),
            "-vn",
            "-map", "0:a:0",
            "-c:a", "libmp3lame",
            "-q:a", "4",
            str(request.output_path),
        ]

    def flush(self) -> None:
        """Run every scheduled extraction.

        WHY: Extraction is the slow part of an export; running it in one
        batch lets independent ffmpeg processes overlap.

        HOW: One job per request on a ThreadPoolExecutor. Every job is
        waited for, then the first failure (in scheduling order) is raised.

        Raises:
            ExportError: If called twice.
            MediaExtractionError: If any extraction failed.
        """
        if self._flushed:
            raise ExportError("media queue already flushed", stage="finish_exports")
        self._flushed = True

        requests = list(self._requests.values())
        if not requests:
            return

        runner = self._runner or run_ffmpeg
        commands = [self.build_command(request) for request in requests]
        logger.info(
            "Extracting %d media files with %d workers", len(commands), self.max_workers
        )

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(runner, command, self.timeout_s) for command in commands]

        errors = [future.exception() for future in futures]
        failures = [error for error in errors if error is not None]
        if failures:
            logger.error("%d of %d media extractions failed", len(failures), len(commands))
            raise failures[0]
        logger.info("Extracted %d media files", len(commands))
