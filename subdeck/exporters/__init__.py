"""Export format registry.

WHY: The CLI needs a single lookup to find the right deck builder by
name. A central dict makes it trivial to add new formats: write the
function, import it here, add one line.

HOW: EXPORT_FORMATS maps string keys to functions taking an Exporter.
Callers run them as ``EXPORT_FORMATS["csv"](exporter)``.

RULES:
- Keys are snake_case identifiers (used in the --format CLI flag)
- Values take an Exporter and return None, raising on failure
"""

from __future__ import annotations

from typing import Callable, Dict

from subdeck.exporters.base import Exporter
from subdeck.exporters.csv_deck import export_csv

EXPORT_FORMATS: Dict[str, Callable[[Exporter], None]] = {
    "csv": export_csv,
}
