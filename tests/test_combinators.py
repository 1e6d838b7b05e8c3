"""Tests for the combinator pipeline: mapping, filtering, joining, ordering."""

import pytest

from dazzlechain import InvalidArgument, Sequence
from dazzlechain.testing import CountingSource


class TestTransform:
    """transform / transform_and_flatten / replace."""

    def test_transform_is_one_to_one(self):
        assert Sequence.of(1, 2, 3).transform(lambda n: n * n).to_list() == [1, 4, 9]

    def test_transform_is_lazy(self):
        calls = []
        sequence = Sequence.of(1, 2, 3).transform(lambda n: calls.append(n) or n)
        assert calls == []
        assert sequence.first() == 1
        assert calls == [1]

    def test_transform_never_called_on_exhausted_source(self):
        calls = []
        cursor = Sequence.of(1).transform(lambda n: calls.append(n) or n).cursor()
        cursor.advance()
        assert not cursor.has_more()
        assert not cursor.has_more()
        assert calls == [1]

    def test_flatten_is_outer_major_inner_minor(self):
        result = Sequence.of("ab", "", "cde").transform_and_flatten(list).to_list()
        assert result == ["a", "b", "c", "d", "e"]

    def test_flatten_skips_empty_and_none_expansions(self):
        result = Sequence.of(1, 2, 3, 4).transform_and_flatten(
            lambda n: [n] * n if n % 2 == 0 else None).to_list()
        assert result == [2, 2, 4, 4, 4, 4]

    def test_flatten_accepts_sequences(self):
        result = Sequence.of(1, 2).transform_and_flatten(
            lambda n: Sequence.of(n, n * 10)).to_list()
        assert result == [1, 10, 2, 20]

    def test_flatten_pulls_outer_lazily(self):
        source = CountingSource([1, 2, 3])
        first = source.transform_and_flatten(lambda n: [n, n]).first()
        assert first == 1
        assert source.pulled == [0]

    def test_replace_drops_items_replaced_by_none(self):
        result = Sequence.of("a", "b", "c").replace(
            lambda s: None if s == "b" else [s, s.upper()]).to_list()
        assert result == ["a", "A", "c", "C"]


class TestFiltering:
    """where / where_either / not_where / without_none / of_type / distinct."""

    def test_where(self):
        assert Sequence.of(1, 2, 3, 4).where(lambda n: n % 2 == 0).to_list() == [2, 4]

    def test_where_either_is_disjunctive(self):
        result = Sequence.from_iterable(range(10)).where_either(
            lambda n: n < 2,
            lambda n: n > 7,
        ).to_list()
        assert result == [0, 1, 8, 9]

    def test_where_either_without_predicates_passes_everything(self):
        assert Sequence.of(1, None, 3).where_either().to_list() == [1, None, 3]

    def test_not_where(self):
        assert Sequence.of("a", "bb", "c").not_where(lambda s: len(s) > 1).to_list() == ["a", "c"]

    def test_without_none(self):
        assert Sequence.of(None, 0, None, "", False).without_none().to_list() == [0, "", False]

    def test_of_type(self):
        items = Sequence.of(1, "a", 2.5, "b", None)
        assert items.of_type(str).to_list() == ["a", "b"]
        assert items.of_type((int, float)).to_list() == [1, 2.5]

    def test_of_type_rejects_non_classes(self):
        with pytest.raises(InvalidArgument):
            Sequence.of(1).of_type("str")

    def test_distinct(self):
        assert Sequence.of(3, 1, 3, 2, 1).distinct().to_list() == [3, 1, 2]

    def test_distinct_with_key(self):
        words = Sequence.of("apple", "avocado", "banana", "blueberry", "cherry")
        assert words.distinct(key=lambda w: w[0]).to_list() == ["apple", "banana", "cherry"]

    def test_distinct_seen_set_is_per_traversal(self):
        sequence = Sequence.of(1, 1, 2).distinct()
        assert sequence.to_list() == [1, 2]
        assert sequence.to_list() == [1, 2]


class TestJoining:
    """concat / concat_items / splice_after / interleave."""

    def test_concat_in_argument_order(self):
        result = Sequence.of(1, 2).concat([3], Sequence.of(4, 5), (6,)).to_list()
        assert result == [1, 2, 3, 4, 5, 6]

    def test_concat_treats_none_as_empty(self):
        assert Sequence.of(1).concat(None, [2], None).to_list() == [1, 2]

    def test_concat_creates_later_cursors_lazily(self):
        later = CountingSource(["x"])
        first = Sequence.of("a", "b").concat(later).take(2).to_list()
        assert first == ["a", "b"]
        assert later.traversals == 0

    def test_concat_items(self):
        assert Sequence.of("a").concat_items("b", "c").to_list() == ["a", "b", "c"]

    def test_splice_after(self):
        result = Sequence.of("a", "b", "c").splice_after(
            lambda s: [1, 2, 3] if s != "b" else None).to_list()
        assert "".join(str(x) for x in result) == "a123bc123"

    def test_interleave(self):
        result = Sequence.of(1, 3, 5, 7).interleave([2, 4, 6, 8, 10, 12]).to_list()
        assert result == [1, 2, 3, 4, 5, 6, 7, 8, 10, 12]

    def test_interleave_three_way(self):
        result = Sequence.of(1, 3, 5, 7).interleave(
            [0, 0, 0], [2, 4, 6, 8, 10, 12]).to_list()
        assert result == [1, 0, 2, 3, 0, 4, 5, 0, 6, 7, 8, 10, 12]

    def test_interleave_with_empty_and_none(self):
        assert Sequence.empty().interleave(None, [1, 2]).to_list() == [1, 2]

    def test_interleave_with_infinite_source(self):
        naturals = Sequence.generate(lambda n: 0 if n is None else n + 1)
        result = Sequence.of("a", "b").interleave(naturals).take(6).to_list()
        assert result == ["a", 0, "b", 1, 2, 3]


class TestOrdering:
    """reverse / ascending / descending / take_last."""

    def test_reverse(self):
        assert Sequence.of(1, 2, 3).reverse().to_list() == [3, 2, 1]

    def test_ascending_and_descending(self):
        numbers = Sequence.of(3, 1, 2)
        assert numbers.ascending().to_list() == [1, 2, 3]
        assert numbers.descending().to_list() == [3, 2, 1]

    def test_sort_by_key(self):
        words = Sequence.of("ccc", "a", "bb")
        assert words.ascending(key=len).to_list() == ["a", "bb", "ccc"]
        assert words.descending(key=len).to_list() == ["ccc", "bb", "a"]

    def test_ordering_buffers_per_traversal(self):
        items = [2, 1]
        sequence = Sequence.from_iterable(items).ascending()
        assert sequence.to_list() == [1, 2]
        items.append(0)
        assert sequence.to_list() == [0, 1, 2]

    def test_ordering_drains_parent_on_first_pull(self):
        source = CountingSource([5, 4, 3])
        cursor = source.reverse().cursor()
        assert source.pull_count == 0
        assert cursor.advance() == 3
        assert source.pulled == [0, 1, 2]

    def test_take_last(self):
        assert Sequence.of(1, 2, 3, 4).take_last(2).to_list() == [3, 4]
        assert Sequence.of(1, 2).take_last(5).to_list() == [1, 2]
        assert Sequence.of(1, 2).take_last(0).to_list() == []


class TestSideEffects:
    """apply_as_you_go / collect_into / apply."""

    def test_apply_as_you_go_runs_per_pull(self):
        seen = []
        sequence = Sequence.of(1, 2, 3).apply_as_you_go(seen.append)
        assert seen == []
        sequence.take(2).to_list()
        assert seen == [1, 2]
        sequence.to_list()
        assert seen == [1, 2, 1, 2, 3]

    def test_collect_into_list_and_set(self):
        as_list = []
        as_set = set()
        Sequence.of(1, 2, 2).collect_into(as_list).collect_into(as_set).to_list()
        assert as_list == [1, 2, 2]
        assert as_set == {1, 2}

    def test_collect_into_rejects_other_targets(self):
        with pytest.raises(InvalidArgument):
            Sequence.of(1).collect_into(42)

    def test_apply_is_eager_and_runs_once(self):
        seen = []
        applied = Sequence.of("x", "y").apply(seen.append)
        assert seen == ["x", "y"]
        assert applied.to_list() == ["x", "y"]
        assert applied.to_list() == ["x", "y"]
        assert seen == ["x", "y"]

    def test_action_errors_propagate(self):
        def explode(item):
            raise RuntimeError(f"bad {item}")

        with pytest.raises(RuntimeError, match="bad 1"):
            Sequence.of(1).apply_as_you_go(explode).to_list()
