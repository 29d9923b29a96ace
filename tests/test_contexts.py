"""Unit tests for the context windower.

WHY: Every card's previous/next lines come from these views. An
off-by-one here silently puts the wrong sentence on thousands of cards;
an out-of-range access crashes on the first or last cue.

HOW: Tests cover empty and single-element sequences, interior and edge
positions, projections that return None (joined with "no neighbour"),
and Context.map().
"""

from subdeck.core.contexts import Context, items_in_context


class TestSequenceLengths:
    """Edge cases at both ends of the sequence."""

    def test_empty_sequence_yields_nothing(self):
        assert list(items_in_context([])) == []

    def test_single_element(self):
        views = list(items_in_context(["a"]))
        assert views == [Context(prev=None, curr="a", next=None)]

    def test_two_elements(self):
        views = list(items_in_context(["a", "b"]))
        assert views == [
            Context(prev=None, curr="a", next="b"),
            Context(prev="a", curr="b", next=None),
        ]

    def test_interior_positions_have_both_neighbours(self):
        items = list(range(6))
        views = list(items_in_context(items))
        assert len(views) == len(items)
        for index in range(1, len(items) - 1):
            assert views[index].prev == items[index - 1]
            assert views[index].curr == items[index]
            assert views[index].next == items[index + 1]

    def test_works_on_tuples(self):
        views = list(items_in_context(("x", "y", "z")))
        assert views[1] == Context(prev="x", curr="y", next="z")


class TestProjection:
    """Projections are applied per neighbour and None collapses to absent."""

    def test_projection_applied_to_each_slot(self):
        views = list(items_in_context([1, 2, 3], lambda n: n * 10))
        assert views[1] == Context(prev=10, curr=20, next=30)

    def test_projection_returning_none_is_absent(self):
        pairs = [("a", None), ("b", "B"), ("c", None)]
        native = list(items_in_context(pairs, lambda pair: pair[1]))
        assert native[0] == Context(prev=None, curr=None, next="B")
        assert native[1] == Context(prev=None, curr="B", next=None)
        assert native[2] == Context(prev="B", curr=None, next=None)

    def test_projection_matches_neighbour_values(self):
        pairs = [("a", 1), ("b", 2), ("c", 3), ("d", 4)]
        for index, view in enumerate(items_in_context(pairs, lambda pair: pair[0])):
            assert view.curr == pairs[index][0]
            assert view.prev == (pairs[index - 1][0] if index > 0 else None)
            assert view.next == (pairs[index + 1][0] if index + 1 < len(pairs) else None)

    def test_input_not_mutated(self):
        items = [[1], [2]]
        list(items_in_context(items, lambda item: item[0]))
        assert items == [[1], [2]]


class TestContextMap:
    """Context.map() transforms present slots only."""

    def test_map_skips_absent_slots(self):
        view = Context(prev=None, curr="hola", next="adiós")
        assert view.map(str.upper) == Context(prev=None, curr="HOLA", next="ADIÓS")

    def test_map_result_none_is_absent(self):
        view = Context(prev=("a", None), curr=("b", "B"), next=None)
        assert view.map(lambda pair: pair[1]) == Context(prev=None, curr="B", next=None)
