"""Command-line interface for building Anki decks from subtitles.

WHY: Users need a simple way to turn a video plus its subtitle files into
an importable deck from the terminal. The CLI runs the whole pipeline,
from input validation to media extraction, behind a single command.

HOW: Uses argparse to accept the video, the foreign SRT, an optional
native SRT, language/title options, the output directory and the export
format. Status messages go to stderr; library modules log through the
standard logging module, configured here.

RULES:
- Positional arguments: video, foreign subtitles, optional native subtitles
- Subtitle files must have an extension in SUBTITLE_EXTENSIONS
- Output lands in <output-dir or video dir>/<stem>_<format>/
- Status output goes to stderr (not stdout)
- Exit code 1 on any validation, parse, or export error
- Error messages include the chain of underlying causes
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from subdeck.config import DEFAULT_FOREIGN_LANGUAGE, SUBTITLE_EXTENSIONS
from subdeck.core.srt_loader import load_subtitles
from subdeck.errors import SubdeckError
from subdeck.exporters import EXPORT_FORMATS
from subdeck.exporters.filesystem import FilesystemExporter


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _describe(exc: BaseException) -> str:
    """Join an exception message with the messages of its causes."""
    parts = [str(exc)]
    cause = exc.__cause__
    while cause is not None:
        parts.append(str(cause))
        cause = cause.__cause__
    return ": ".join(parts)


def _check_input(path: Path, what: str, subtitle: bool = False) -> None:
    if not path.is_file():
        _fail("{} not found: {}".format(what, path))
    if subtitle and path.suffix.lower() not in SUBTITLE_EXTENSIONS:
        _fail("Unsupported subtitle type '{}'. Supported formats: {}".format(
            path.suffix, ", ".join(sorted(SUBTITLE_EXTENSIONS))
        ))


def _run(args: argparse.Namespace) -> None:
    """Execute the full export pipeline.

    RULES:
    - Validate every input before loading anything
    - The deck directory is only created once the table is ready to write
    """
    video_path = Path(args.video).resolve()
    foreign_path = Path(args.foreign_subtitles).resolve()
    native_path = Path(args.native_subtitles).resolve() if args.native_subtitles else None

    _check_input(video_path, "Video file")
    _check_input(foreign_path, "Foreign subtitle file", subtitle=True)
    if native_path is not None:
        _check_input(native_path, "Native subtitle file", subtitle=True)

    output_dir = Path(args.output_dir).resolve() if args.output_dir else video_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    try:
        _status("Loading subtitles...")
        foreign = load_subtitles(foreign_path)
        _status("  Foreign: {} ({} cues)".format(foreign_path.name, len(foreign)))
        native = None
        if native_path is not None:
            native = load_subtitles(native_path)
            _status("  Native: {} ({} cues)".format(native_path.name, len(native)))

        exporter = FilesystemExporter(
            video_path,
            foreign,
            native,
            foreign_language=args.foreign_language,
            title=args.title,
            output_dir=output_dir,
            label=args.format,
        )

        _status("Exporting {} deck...".format(args.format))
        EXPORT_FORMATS[args.format](exporter)
    except (SubdeckError, ValueError) as e:
        _fail(_describe(e))

    _status("")
    _status("Done! Deck saved to {}".format(exporter.deck_dir))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="subdeck",
        description="Build an Anki-importable deck (CSV + audio clips + screenshots) "
                    "from a video and its foreign/native subtitle files.",
    )

    parser.add_argument("video", help="Path to the source video file.")
    parser.add_argument(
        "foreign_subtitles",
        help="Subtitles in the language being studied (.srt).",
    )
    parser.add_argument(
        "native_subtitles",
        nargs="?",
        default=None,
        help="Subtitles in your own language (.srt). Optional.",
    )

    parser.add_argument(
        "--foreign-language",
        default=DEFAULT_FOREIGN_LANGUAGE,
        help="Language code of the foreign subtitles (default: %(default)s).",
    )

    parser.add_argument(
        "--title",
        default=None,
        help="Source title shown on each card (default: video file name).",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory in which to create the deck folder (default: next to the video).",
    )

    parser.add_argument(
        "--format",
        default="csv",
        choices=sorted(EXPORT_FORMATS.keys()),
        help="Export format (default: %(default)s).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _run(args)


if __name__ == "__main__":
    main()
