"""Data model for subtitle cues and aligned subtitle pairs.

WHY: Every stage of the pipeline talks about the same three things: a
span of time in the video, a subtitle cue shown during that span, and a
pair of cues (one per language) that belong together. Giving them typed,
immutable shapes keeps the loader, aligner, and exporters decoupled.

HOW: Three types form the model:
  Period      — immutable [begin, end) interval in float seconds
  Subtitle    — one cue: its period, raw text, and source index
  AlignedPair — (foreign, native) named tuple, either side may be None

RULES:
- begin <= end and begin >= 0, validated on construction
- grow() pads proportionally to the period's own duration; begin clamps at 0
- Subtitle.text is the raw cue text, markup included
- plain_text() is the only place markup is stripped
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional

# HTML-style tags (<i>, </b>, <font color="...">) and ASS override blocks ({\an8}).
_TAG_RE = re.compile(r"<[^>]*>|\{\\[^}]*\}")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class Period:
    """A span of time in the source video.

    RULES:
    - begin and end are float seconds from the start of the video
    - begin <= end (zero-length periods are allowed)
    - begin >= 0
    """

    begin: float
    end: float

    def __post_init__(self) -> None:
        if self.begin < 0:
            raise ValueError("Period begin must be non-negative, got {}".format(self.begin))
        if self.end < self.begin:
            raise ValueError(
                "Period end ({}) must not be before begin ({})".format(self.end, self.begin)
            )

    @property
    def duration(self) -> float:
        return self.end - self.begin

    def midpoint(self) -> float:
        """Return the instant halfway through the period."""
        return (self.begin + self.end) / 2.0

    def grow(self, before: float, after: float) -> Period:
        """Return a new period padded proportionally to this one's duration.

        WHY: A subtitle's timing hugs the spoken line tightly. Audio clips
        cut exactly on those bounds sound clipped, so cards get some lead-in
        and lead-out around the line.

        HOW: Subtract ``before * duration`` from begin and add
        ``after * duration`` to end.

        RULES:
        - Factors are multiples of the duration, not seconds
        - The new begin is clamped at 0
        - A zero-length period stays zero-length

        Args:
            before: Padding before the period, as a multiple of its duration.
            after: Padding after the period, as a multiple of its duration.
        """
        duration = self.duration
        return Period(
            begin=max(0.0, self.begin - before * duration),
            end=self.end + after * duration,
        )


@dataclass(frozen=True)
class Subtitle:
    """A single subtitle cue.

    Attributes:
        period: When the cue is on screen.
        text: Raw cue text, possibly multi-line and with markup.
        index: 1-based cue number from the source file (0 when unknown).
    """

    period: Period
    text: str
    index: int = 0

    def plain_text(self) -> str:
        """Return the cue text with markup removed and lines joined.

        Tags like ``<i>`` and ``{\\an8}`` are dropped, line breaks become
        single spaces, and runs of whitespace collapse.
        """
        stripped = _TAG_RE.sub("", self.text)
        return _WHITESPACE_RE.sub(" ", stripped).strip()


class AlignedPair(NamedTuple):
    """One aligned position: at most one cue from each track."""

    foreign: Optional[Subtitle]
    native: Optional[Subtitle]
