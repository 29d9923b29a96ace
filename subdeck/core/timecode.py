"""Timestamp formatting for sort keys and media file names.

WHY: Anki sorts the "time" column as plain text. A fixed-width,
zero-padded HH:MM:SS.mmm string sorts lexicographically in the same order
as the underlying seconds, so cards from one episode stay chronological.

HOW: Round to whole milliseconds first, then split with divmod. Working
on an integer avoids float artifacts like 6.999 for 7.0.

RULES:
- Hours are at least two digits (longer videos simply widen the field)
- Milliseconds are always three digits
- Negative inputs are a programming error (ValueError)
"""

from __future__ import annotations


def _split_millis(seconds: float) -> tuple[int, int, int, int]:
    if seconds < 0:
        raise ValueError("Timestamp must be non-negative, got {}".format(seconds))
    total_ms = int(round(seconds * 1000))
    total_s, millis = divmod(total_ms, 1000)
    minutes_total, secs = divmod(total_s, 60)
    hours, minutes = divmod(minutes_total, 60)
    return hours, minutes, secs, millis


def seconds_to_hhmmss_sss(seconds: float) -> str:
    """Convert seconds to a sortable timestamp: HH:MM:SS.mmm"""
    hours, minutes, secs, millis = _split_millis(seconds)
    return "{:02d}:{:02d}:{:02d}.{:03d}".format(hours, minutes, secs, millis)


def seconds_to_filename_time(seconds: float) -> str:
    """Convert seconds to a filename-safe timestamp: HH.MM.SS.mmm"""
    hours, minutes, secs, millis = _split_millis(seconds)
    return "{:02d}.{:02d}.{:02d}.{:03d}".format(hours, minutes, secs, millis)
