"""Package entry point for ``python -m subdeck``.

WHY: Users run the exporter as ``python -m subdeck video.mkv es.srt en.srt``
without installing the console script.

HOW: Delegates to the CLI's main() function.
"""

from subdeck.cli import main

if __name__ == "__main__":
    main()
