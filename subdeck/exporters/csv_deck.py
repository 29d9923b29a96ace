"""Anki-compatible CSV deck export.

WHY: Anki imports plain CSV files through its "Import" dialog, mapping
columns to note fields. A card is most useful with the line's audio, a
screenshot, both languages, and the surrounding lines for context. This
module turns aligned subtitle pairs into exactly that table.

HOW: build_notes() drops positions without foreign text, windows the
rest twice (once per language) with items_in_context(), and builds one
AnkiNote per position while scheduling its audio clip and screenshot
with the exporter. serialize_notes() encodes the notes as CSV bytes in
memory. export_csv() ties it together: align, build, serialize, write
the table, then let the exporter extract the media.

RULES:
- A row exists iff its position has a foreign cue
- Clips are padded by CONTEXT_PADDING x duration on both sides
- Sort key: episode prefix + HH:MM:SS.mmm of the padded clip start
- Keys follow cue order only for cues of similar length; a long cue
  padded back past 0 sorts before an earlier short one
- Column order is fixed (see FIELDNAMES) for import compatibility
- The table is written only after every row succeeded; media is
  extracted only after the table was written
"""

from __future__ import annotations

import csv
import dataclasses
import io
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from subdeck.config import CONTEXT_PADDING, DECK_DATA_FILENAME
from subdeck.core.contexts import items_in_context
from subdeck.core.ir import AlignedPair, Subtitle
from subdeck.core.timecode import seconds_to_hhmmss_sss
from subdeck.errors import ExportError, SerializationError
from subdeck.exporters.base import Exporter

logger = logging.getLogger(__name__)

# Trailing numeric group of a filename stem, e.g. "01_02" in "series_01_02".
_EPISODE_RE = re.compile(r"[0-9][-_.0-9]+$")


def episode_prefix(file_stem: str) -> str:
    """Guess an episode number from a filename stem, for use in sort keys.

    WHY: Cards from several episodes end up in one Anki deck. Prefixing
    the timestamp sort key with the episode number keeps them in viewing
    order without asking the user for the number explicitly.

    HOW: Take the trailing run of digits and separators, turn ``-`` and
    ``_`` into ``.``, and add a space so the result can be glued in front
    of a timestamp.

    RULES:
    - Only the trailing group counts ("s01_e02_03" → "02.03 ")
    - No trailing group → "" (not an error)
    - The pattern is kept as is for sort-key compatibility across decks

    Examples:
        >>> episode_prefix("series_01_02")
        '01.02 '
        >>> episode_prefix("film")
        ''
    """
    match = _EPISODE_RE.search(file_stem)
    if match is None:
        return ""
    return "{} ".format(match.group(0).replace("-", ".").replace("_", "."))


@dataclass
class AnkiNote:
    """One row of the exported deck.

    Attributes:
        sound: Anki sound tag, e.g. ``[sound:ep_00.00.07.000-00.00.15.000.es.mp3]``.
        time: Sort key, e.g. ``"03 00:00:07.000"``.
        source: Title of the source video.
        image: HTML image tag for the screenshot.
        foreign_curr .. native_next: Plain text of the current, previous
            and next lines in each language; None when there is no line.
    """

    sound: str
    time: str
    source: str
    image: str
    foreign_curr: Optional[str] = None
    native_curr: Optional[str] = None
    foreign_prev: Optional[str] = None
    native_prev: Optional[str] = None
    foreign_next: Optional[str] = None
    native_next: Optional[str] = None


FIELDNAMES: List[str] = [f.name for f in dataclasses.fields(AnkiNote)]
"""CSV header, in column order."""


def _text(subtitle: Optional[Subtitle]) -> Optional[str]:
    return subtitle.plain_text() if subtitle is not None else None


def build_notes(
    aligned: Sequence[AlignedPair],
    foreign_language: str,
    file_stem: str,
    title: str,
    exporter: Exporter,
) -> List[AnkiNote]:
    """Build one AnkiNote per aligned position that has a foreign cue.

    Scheduling failures abort the whole build; there is no per-row
    recovery because a card without its audio is useless.

    Args:
        aligned: Aligned positions in time order.
        foreign_language: Language code passed along with audio requests.
        file_stem: Source filename stem, used for the episode prefix.
        title: Value of the "source" column.
        exporter: Receives the image and audio scheduling requests.

    Returns:
        Notes in input order.

    Raises:
        ExportError: If the exporter refuses a media request.
    """
    prefix = episode_prefix(file_stem)

    # Lines with no foreign text make poor cards.
    with_foreign = [pair for pair in aligned if pair.foreign is not None]

    foreign_views = items_in_context(with_foreign, lambda pair: pair.foreign)
    native_views = items_in_context(with_foreign, lambda pair: pair.native)

    notes: List[AnkiNote] = []
    for foreign, native in zip(foreign_views, native_views):
        # Present by construction of with_foreign.
        curr = foreign.curr
        period = curr.period.grow(CONTEXT_PADDING, CONTEXT_PADDING)

        try:
            image_path = exporter.schedule_image_export(period.midpoint())
            audio_path = exporter.schedule_audio_export(foreign_language, period)
        except Exception as exc:
            raise ExportError(
                "error scheduling media for cue {} at {}".format(
                    curr.index, seconds_to_hhmmss_sss(curr.period.begin)
                ),
                stage="schedule_media",
            ) from exc

        notes.append(AnkiNote(
            sound="[sound:{}]".format(audio_path),
            time="{}{}".format(prefix, seconds_to_hhmmss_sss(period.begin)),
            source=title,
            image='<img src="{}" />'.format(image_path),
            foreign_curr=_text(foreign.curr),
            native_curr=_text(native.curr),
            foreign_prev=_text(foreign.prev),
            native_prev=_text(native.prev),
            foreign_next=_text(foreign.next),
            native_next=_text(native.next),
        ))

    return notes


def serialize_notes(notes: Iterable[AnkiNote]) -> bytes:
    """Encode notes as a UTF-8 CSV table with a header row.

    RULES:
    - Header lists FIELDNAMES in order
    - Minimal quoting; embedded commas, quotes and newlines are quoted
    - None becomes an empty cell
    - Rows end with "\\n"

    Raises:
        SerializationError: If a row cannot be encoded.
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=FIELDNAMES, lineterminator="\n")
    try:
        writer.writeheader()
        for note in notes:
            writer.writerow(dataclasses.asdict(note))
    except csv.Error as exc:
        raise SerializationError("error serializing to RAM") from exc
    return buffer.getvalue().encode("utf-8")


def export_csv(exporter: Exporter) -> None:
    """Export the exporter's video and subtitles as an Anki CSV deck.

    Raises:
        ExportError: If media scheduling, the table write, or media
            extraction fails. Nothing is extracted after a failed write.
        SerializationError: If the table cannot be encoded.
    """
    notes = build_notes(
        exporter.align(),
        exporter.foreign_language,
        exporter.file_stem,
        exporter.title,
        exporter,
    )
    buffer = serialize_notes(notes)
    logger.info("Serialized %d notes (%d bytes)", len(notes), len(buffer))

    try:
        exporter.export_data_file(DECK_DATA_FILENAME, buffer)
    except Exception as exc:
        raise ExportError(
            "error writing {}".format(DECK_DATA_FILENAME), stage="write_data_file"
        ) from exc

    try:
        exporter.finish_exports()
    except Exception as exc:
        raise ExportError("error extracting media files", stage="finish_exports") from exc
