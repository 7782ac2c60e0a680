from __future__ import annotations

import pytest

from effcheck.domains import IntRange
from effcheck.path import make_path
from effcheck.recording import Decision, Recording
from effcheck.shrink.trie import ShrinkTrie

SCOPE = make_path([("lists", 0)])
A = SCOPE + make_path([("a", 0)])
B = SCOPE + make_path([("b", 0)])
DOMAIN = IntRange(0, 10)


def recording(**values: int) -> Recording:
    paths = {"a": A, "b": B}
    return Recording(
        size=5,
        decisions=tuple(Decision(paths[name], DOMAIN, value) for name, value in values.items()),
    )


class TestTried:
    def test_mark_and_query(self):
        trie = ShrinkTrie()
        assert not trie.was_tried(A, 3)
        trie.mark_tried(A, 3)
        assert trie.was_tried(A, 3)
        assert not trie.was_tried(A, 4)
        assert not trie.was_tried(B, 3)

    def test_next_untried_follows_candidate_order(self):
        trie = ShrinkTrie()
        trie.mark_tried(A, 0)
        trie.mark_tried(A, 5)
        assert trie.next_untried(A, [0, 5, 8, 9]) == 8

    def test_next_untried_none_when_all_tried(self):
        trie = ShrinkTrie()
        for candidate in [0, 1]:
            trie.mark_tried(A, candidate)
        assert trie.next_untried(A, [0, 1]) is None

    def test_next_untried_on_unknown_path(self):
        assert ShrinkTrie().next_untried(A, [4, 2]) == 4


class TestExhaustion:
    def test_exhaustion_propagates_when_all_children_exhausted(self):
        trie = ShrinkTrie()
        trie.refresh(recording(a=1))
        trie.mark_exhausted(A, 1)
        assert trie.is_exhausted(A)
        assert trie.is_exhausted(SCOPE)
        assert trie.is_exhausted(SCOPE + make_path([("unseen", 0)]))

    def test_exhaustion_stops_at_parent_with_live_children(self):
        trie = ShrinkTrie()
        trie.refresh(recording(a=1, b=2))
        trie.mark_exhausted(A, 1)
        assert trie.is_exhausted(A)
        assert not trie.is_exhausted(SCOPE)
        assert not trie.is_exhausted(B)
        trie.mark_exhausted(B, 2)
        assert trie.is_exhausted(SCOPE)

    def test_unknown_path_is_not_exhausted(self):
        assert not ShrinkTrie().is_exhausted(A)

    def test_records_value_exhausted_at(self):
        trie = ShrinkTrie()
        trie.refresh(recording(a=4))
        trie.mark_exhausted(A)
        assert trie.node(trie.find(A)).exhausted_at == 4


class TestRefresh:
    def test_value_change_clears_exhaustion(self):
        trie = ShrinkTrie()
        trie.refresh(recording(a=3))
        trie.mark_exhausted(A, 3)
        trie.refresh(recording(a=2))
        assert not trie.is_exhausted(A)
        assert not trie.is_exhausted(SCOPE)

    def test_unchanged_value_stays_exhausted(self):
        trie = ShrinkTrie()
        trie.refresh(recording(a=3))
        trie.mark_exhausted(A, 3)
        trie.refresh(recording(a=3))
        assert trie.is_exhausted(A)

    def test_new_path_resets_exhaustion(self):
        trie = ShrinkTrie()
        trie.refresh(recording(a=3))
        trie.mark_exhausted(A, 3)
        assert trie.is_exhausted(SCOPE)
        trie.refresh(recording(a=3, b=1))
        assert not trie.is_exhausted(SCOPE)
        assert not trie.is_exhausted(A)
        assert not trie.is_exhausted(B)

    def test_tried_survives_refresh(self):
        trie = ShrinkTrie()
        trie.refresh(recording(a=3))
        trie.mark_tried(A, 0)
        trie.refresh(recording(a=2))
        assert trie.was_tried(A, 0)

    def test_change_elsewhere_forgets_tried(self):
        trie = ShrinkTrie()
        trie.refresh(recording(a=3, b=5))
        trie.mark_tried(A, 0)
        trie.mark_tried(B, 0)
        trie.refresh(recording(a=3, b=4))
        assert not trie.was_tried(A, 0)
        assert trie.was_tried(B, 0)
        assert trie.next_untried(A, [0, 2]) == 0

    def test_wide_change_forgets_everything(self):
        trie = ShrinkTrie()
        trie.refresh(recording(a=3, b=5))
        trie.mark_tried(A, 0)
        trie.mark_tried(B, 0)
        trie.refresh(recording(a=2, b=4))
        assert not trie.was_tried(A, 0)
        assert not trie.was_tried(B, 0)

    def test_same_recording_keeps_state(self):
        trie = ShrinkTrie()
        trie.refresh(recording(a=3, b=5))
        trie.mark_tried(A, 0)
        trie.refresh(recording(a=3, b=5))
        assert trie.was_tried(A, 0)


class TestArena:
    def test_nodes_are_shared_by_prefix(self):
        trie = ShrinkTrie()
        trie.insert(A)
        trie.insert(B)
        assert len(trie) == 4
        assert trie.find(A) != trie.find(B)
        assert trie.node(trie.find(A)).parent == trie.find(SCOPE)

    def test_retain_copies_path_state(self):
        trie = ShrinkTrie()
        trie.refresh(recording(a=7))
        trie.mark_tried(A, 0)
        retained = trie.retain(A)
        assert retained.path == A
        assert retained.value == 7
        assert retained.tried == frozenset({0})
        assert not retained.exhausted
        assert str(retained) == "lists#0/a#0=7"

    def test_retain_unknown_path(self):
        with pytest.raises(KeyError):
            ShrinkTrie().retain(A)
