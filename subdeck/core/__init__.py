"""Core data model and pure helpers.

WHY: The core package holds the parts of the pipeline that have no side
effects — the subtitle data model, timecode formatting, context windows,
SRT parsing, and track alignment. Exporters build on these.

HOW: ir.py defines the data structures, timecode.py formats sort-key
timestamps, contexts.py provides previous/current/next views over a
sequence, srt_loader.py reads SRT files, align.py pairs the two tracks.

RULES:
- Nothing in core writes files or spawns processes
- Periods are in float seconds throughout
"""
