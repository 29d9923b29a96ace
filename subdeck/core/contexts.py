"""Previous/current/next views over a sequence.

WHY: A flashcard shows the line being studied plus the lines just before
and after it, in both languages. The two subtitle tracks are stored as a
list of aligned pairs where either side may be missing, so "the previous
foreign line" may not exist for two reasons: there is no previous
position, or the previous position has no foreign cue. Callers should
not have to care which.

HOW: items_in_context() walks the sequence by index. For each offset
(-1, 0, +1) a lookup returns a two-layer result: whether a neighbour
exists, and what the projection made of it. _join() collapses both
layers into a single optional value for the Context.

RULES:
- One Context per input position; an empty sequence yields nothing
- The first Context has prev=None, the last has next=None
- A projection returning None is indistinguishable from a missing neighbour
- Read-only: the input sequence is never copied or mutated
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterator, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Context(Generic[T]):
    """Read-only neighbourhood of one position in a sequence."""

    prev: Optional[T]
    curr: Optional[T]
    next: Optional[T]

    def map(self, func: Callable[[T], Optional[U]]) -> Context[U]:
        """Apply ``func`` to every present slot; absent slots stay absent."""
        return Context(
            prev=_join(_apply(func, self.prev)),
            curr=_join(_apply(func, self.curr)),
            next=_join(_apply(func, self.next)),
        )


# A lookup result: (neighbour exists, projected value).
_Lookup = Tuple[bool, Optional[U]]


def _apply(func: Callable[[T], Optional[U]], value: Optional[T]) -> _Lookup:
    if value is None:
        return (False, None)
    return (True, func(value))


def _lookup(
    items: Sequence[T],
    index: int,
    project: Callable[[T], Optional[U]],
) -> _Lookup:
    if index < 0 or index >= len(items):
        return (False, None)
    return (True, project(items[index]))


def _join(lookup: _Lookup) -> Optional[U]:
    """Flatten a two-layer lookup into a single optional."""
    present, value = lookup
    if not present:
        return None
    return value


def _identity(item: T) -> T:
    return item


def items_in_context(
    items: Sequence[T],
    project: Callable[[T], Optional[U]] = _identity,
) -> Iterator[Context[U]]:
    """Yield a Context for every position of ``items``.

    Args:
        items: Any indexable sequence (list, tuple, ...).
        project: Applied to each neighbour before it lands in the Context.
                 May return None to mean "nothing at this position".

    Yields:
        Context objects, one per position, in order.
    """
    for index in range(len(items)):
        yield Context(
            prev=_join(_lookup(items, index - 1, project)),
            curr=_join(_lookup(items, index, project)),
            next=_join(_lookup(items, index + 1, project)),
        )
