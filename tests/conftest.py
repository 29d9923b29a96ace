"""Shared test fixtures for the subdeck test suite.

WHY: Most test modules need the same small bilingual lesson and an
exporter that records what the deck builder asked of it. Centralizing
them here keeps the scenario identical across modules.

HOW: Pytest fixtures provide a cue factory, the three-position lesson
(foreign at every position, native only in the middle), a recording
fake Exporter, and a fake ffmpeg runner.

RULES:
- All times are exact binary fractions so float math stays exact
- RecordingExporter never touches the filesystem
- The fake runner records commands and never spawns processes
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pytest

from subdeck.core.ir import AlignedPair, Period, Subtitle
from subdeck.exporters.base import Exporter


def _cue(begin: float, end: float, text: str, index: int = 0) -> Subtitle:
    return Subtitle(period=Period(begin, end), text=text, index=index)


class RecordingExporter(Exporter):
    """Fake exporter recording every call in order.

    ``fail_on`` names a method ("schedule_image_export",
    "schedule_audio_export", "export_data_file", "finish_exports") that
    raises OSError instead of doing its work.
    """

    def __init__(
        self,
        pairs: List[AlignedPair],
        file_stem: str = "lesson_03",
        title: str = "Lesson 3",
        foreign_language: str = "es",
        fail_on: Optional[str] = None,
    ) -> None:
        self._pairs = pairs
        self._file_stem = file_stem
        self._title = title
        self._foreign_language = foreign_language
        self.fail_on = fail_on
        self.calls: List[Tuple[Any, ...]] = []
        self.data_files: Dict[str, bytes] = {}

    @property
    def foreign_language(self) -> str:
        return self._foreign_language

    @property
    def title(self) -> str:
        return self._title

    @property
    def file_stem(self) -> str:
        return self._file_stem

    def _maybe_fail(self, method: str) -> None:
        if self.fail_on == method:
            raise OSError("{} failed".format(method))

    def align(self) -> List[AlignedPair]:
        return list(self._pairs)

    def schedule_image_export(self, instant: float) -> str:
        self._maybe_fail("schedule_image_export")
        self.calls.append(("image", instant))
        return "img_{:.3f}.jpg".format(instant)

    def schedule_audio_export(self, language: str, period: Period) -> str:
        self._maybe_fail("schedule_audio_export")
        self.calls.append(("audio", language, period))
        return "aud_{:.3f}-{:.3f}.{}.mp3".format(period.begin, period.end, language)

    def export_data_file(self, name: str, data: bytes) -> None:
        self._maybe_fail("export_data_file")
        self.calls.append(("data", name))
        self.data_files[name] = data

    def finish_exports(self) -> None:
        self._maybe_fail("finish_exports")
        self.calls.append(("finish",))

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def cue():
    """Factory: cue(begin, end, text, index=0) -> Subtitle."""
    return _cue


@pytest.fixture
def lesson_pairs() -> List[AlignedPair]:
    """Three aligned positions; foreign at all three, native only at the second."""
    return [
        AlignedPair(_cue(10.0, 12.0, "<i>Hola</i>", 1), None),
        AlignedPair(_cue(20.0, 22.0, "¿Qué tal?", 2), _cue(20.0, 22.0, "How are you?", 1)),
        AlignedPair(_cue(30.0, 32.0, "Adiós,\namigo", 3), None),
    ]


@pytest.fixture
def make_exporter():
    """Factory: make_exporter(pairs, **kwargs) -> RecordingExporter."""

    def _make(pairs: List[AlignedPair], **kwargs: Any) -> RecordingExporter:
        return RecordingExporter(pairs, **kwargs)

    return _make


class FakeRunner:
    """Stand-in for run_ffmpeg that records commands.

    Commands whose output path ends with ``fail_suffix`` raise OSError.
    """

    def __init__(self, fail_suffix: Optional[str] = None) -> None:
        self.fail_suffix = fail_suffix
        self.commands: List[List[str]] = []
        self.timeouts: List[int] = []

    def __call__(self, command: List[str], timeout: int) -> None:
        self.commands.append(command)
        self.timeouts.append(timeout)
        if self.fail_suffix and command[-1].endswith(self.fail_suffix):
            raise OSError("extraction failed for {}".format(command[-1]))


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def failing_runner() -> FakeRunner:
    """Runner that fails every audio extraction."""
    return FakeRunner(fail_suffix=".mp3")
