"""Load SRT subtitle files into Subtitle cues.

WHY: Both tracks arrive as SRT files, usually downloaded from different
sources with different cue numbering and occasional sloppiness (a BOM,
out-of-order cues). The rest of the pipeline wants clean, time-ordered
Subtitle objects.

HOW: The ``srt`` library does the parsing. Each srt.Subtitle becomes a
Subtitle with a Period in float seconds. Cues are sorted by start time
(then end, then index) before being returned.

RULES:
- Files are read as UTF-8; a leading BOM is tolerated
- Raw cue text is kept as-is; markup is stripped later by plain_text()
- Parse failures and impossible timings raise SubtitleParseError
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import srt

from subdeck.core.ir import Period, Subtitle
from subdeck.errors import SubtitleParseError

logger = logging.getLogger(__name__)


def parse_subtitles(content: str, source: str = "<string>") -> List[Subtitle]:
    """Parse SRT content into Subtitle cues sorted by start time.

    Args:
        content: Full SRT file content.
        source: Name used in error messages.

    Returns:
        List of Subtitle objects ordered by (begin, end, index).

    Raises:
        SubtitleParseError: If the content is not valid SRT.
    """
    try:
        parsed = list(srt.parse(content))
    except (srt.SRTParseError, ValueError) as exc:
        raise SubtitleParseError("Could not parse {}: {}".format(source, exc)) from exc

    cues: List[Subtitle] = []
    for item in parsed:
        try:
            period = Period(item.start.total_seconds(), item.end.total_seconds())
        except ValueError as exc:
            raise SubtitleParseError(
                "Bad timing in {} cue {}: {}".format(source, item.index, exc)
            ) from exc
        cues.append(Subtitle(period=period, text=item.content, index=item.index or 0))

    cues.sort(key=lambda cue: (cue.period.begin, cue.period.end, cue.index))
    return cues


def load_subtitles(path: str | Path) -> List[Subtitle]:
    """Load an SRT file from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SubtitleParseError: If the file is not valid UTF-8 SRT.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise SubtitleParseError("{} is not valid UTF-8: {}".format(path, exc)) from exc

    cues = parse_subtitles(content, source=str(path))
    logger.debug("Loaded %d cues from %s", len(cues), path)
    return cues
