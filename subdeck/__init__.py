"""subdeck — build Anki decks from bilingual subtitles and a video.

WHY: Watching a show with subtitles in two languages produces thousands of
little sentence pairs. Turned into flashcards, each with its audio clip and
a screenshot, they make excellent spaced-repetition material. Doing that by
hand is tedious; this package does it from a video and two SRT files.

HOW: Three-stage pipeline — load (SRT parsing and track alignment), assemble
(context windows, sort keys, media scheduling), export (CSV table plus
ffmpeg-extracted media). Each stage is independently testable.

RULES:
- The core never touches the filesystem; exporters own paths and media
- One row per aligned position that has foreign-language text
- The CSV column schema is fixed for Anki import compatibility
"""

__version__ = "0.1.0"
