"""Configuration constants and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The ffmpeg binary, media worker count, and image
size depend on the machine the deck is built on, so they are read from
the environment rather than hardcoded in the exporters.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values. Integer settings go through _env_positive_int()
so a typo in .env fails loudly instead of silently falling back.

RULES:
- All environment variables are prefixed with SUBDECK_
- DECK_DATA_FILENAME and the column schema are fixed (Anki import)
- CONTEXT_PADDING is a fraction of the subtitle's own duration
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()


def _env_positive_int(name: str, default: int) -> int:
    """Read a positive integer from the environment.

    RULES:
    - Missing or blank variable → default
    - Anything that is not a positive integer raises ValueError naming the variable
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError("{} must be a positive integer, got {!r}".format(name, raw)) from None
    if value <= 0:
        raise ValueError("{} must be a positive integer, got {!r}".format(name, raw))
    return value


# ---------------------------------------------------------------------------
# Deck layout
# ---------------------------------------------------------------------------

DECK_DATA_FILENAME = "cards.csv"
"""Logical name of the table handed to the exporter."""

CONTEXT_PADDING = 1.5
"""Padding before and after each card's clip, as a multiple of the cue duration."""

SUBTITLE_EXTENSIONS: set[str] = {".srt"}
"""Subtitle file extensions accepted by the loader (lowercase, with dot)."""

# ---------------------------------------------------------------------------
# Media extraction
# ---------------------------------------------------------------------------

FFMPEG_BINARY = os.getenv("SUBDECK_FFMPEG", "ffmpeg")
MEDIA_WORKERS = _env_positive_int("SUBDECK_MEDIA_WORKERS", 4)
IMAGE_HEIGHT = _env_positive_int("SUBDECK_IMAGE_HEIGHT", 240)
FFMPEG_TIMEOUT_S = _env_positive_int("SUBDECK_FFMPEG_TIMEOUT", 120)

# ---------------------------------------------------------------------------
# CLI defaults
# ---------------------------------------------------------------------------

DEFAULT_FOREIGN_LANGUAGE = os.getenv("SUBDECK_FOREIGN_LANGUAGE", "es")
