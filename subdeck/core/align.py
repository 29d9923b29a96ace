"""Pair the cues of a foreign and a native subtitle track.

WHY: Two SRT files for the same video rarely line up 1:1. One track may
split a sentence in two, the other may skip a song lyric or add a sign
translation. The deck builder needs a single list of positions with at
most one cue per language at each.

HOW: Overlap-based mutual best match. For every foreign cue, find the
native cue it overlaps the most, and vice versa. When the choice is
mutual the two cues share a position. Every cue left over gets a
position of its own with the other side empty. Positions are ordered by
the begin time of their cue (the foreign cue when both are present).

RULES:
- Overlap is measured in seconds of shared screen time; zero means no match
- Ties go to the earlier cue
- Every input cue appears exactly once in the output
- Foreign cues keep their relative order
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from subdeck.core.ir import AlignedPair, Period, Subtitle


def _cue_key(cue: Subtitle) -> Tuple[float, float, int]:
    return (cue.period.begin, cue.period.end, cue.index)


def _overlap(a: Period, b: Period) -> float:
    return max(0.0, min(a.end, b.end) - max(a.begin, b.begin))


def _best_match(cue: Subtitle, candidates: Sequence[Subtitle]) -> Optional[int]:
    """Index of the candidate overlapping ``cue`` the most, or None.

    ``candidates`` must be sorted by begin time.
    """
    best_index: Optional[int] = None
    best_overlap = 0.0
    for index, candidate in enumerate(candidates):
        if candidate.period.begin >= cue.period.end:
            break
        overlap = _overlap(cue.period, candidate.period)
        if overlap > best_overlap:
            best_overlap = overlap
            best_index = index
    return best_index


def align_tracks(
    foreign: Sequence[Subtitle],
    native: Optional[Sequence[Subtitle]] = None,
) -> List[AlignedPair]:
    """Merge two subtitle tracks into aligned positions.

    Args:
        foreign: Cues in the language being studied.
        native: Cues in the learner's language, or None for a
                foreign-only deck.

    Returns:
        AlignedPair list in time order.
    """
    foreign_cues = sorted(foreign, key=_cue_key)
    native_cues = sorted(native or [], key=_cue_key)

    native_for_foreign = [_best_match(cue, native_cues) for cue in foreign_cues]
    foreign_for_native = [_best_match(cue, foreign_cues) for cue in native_cues]

    entries: List[Tuple[Tuple[float, int, int], AlignedPair]] = []
    matched_native = set()

    for f_index, cue in enumerate(foreign_cues):
        n_index = native_for_foreign[f_index]
        partner: Optional[Subtitle] = None
        if n_index is not None and foreign_for_native[n_index] == f_index:
            partner = native_cues[n_index]
            matched_native.add(n_index)
        entries.append(((cue.period.begin, 0, f_index), AlignedPair(cue, partner)))

    for n_index, cue in enumerate(native_cues):
        if n_index not in matched_native:
            entries.append(((cue.period.begin, 1, n_index), AlignedPair(None, cue)))

    entries.sort(key=lambda entry: entry[0])
    return [pair for _, pair in entries]
