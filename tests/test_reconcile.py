import itertools

from core.models import UNSET, LyricEntry, Synced
from core.reconcile import reconcile_entries, split_lyric_lines

from helpers import assert_invariants, snapshot


def _ids(start=100):
    counter = itertools.count(start)
    return lambda: next(counter)


def test_split_drops_blank_lines_and_trims():
    assert split_lyric_lines("  A \n\n   \nB\r\n") == ["A", "B"]
    assert split_lyric_lines("") == []


def test_unchanged_text_preserves_every_entry():
    prior = [LyricEntry(1, "A", Synced(1.0)), LyricEntry(2, "B"), LyricEntry(3, "C", Synced(3.5))]
    out = reconcile_entries("A\nB\nC", prior, _ids())
    assert snapshot(out) == snapshot(prior)


def test_reorder_keeps_identity_and_timestamp_per_line():
    prior = [LyricEntry(1, "A", Synced(5.0)), LyricEntry(2, "B")]
    out = reconcile_entries("B\nA", prior, _ids())
    assert snapshot(out) == [(2, "B", None), (1, "A", 5.0)]


def test_insertion_above_synced_line():
    prior = [LyricEntry(1, "A", Synced(5.0))]
    out = reconcile_entries("X\nA", prior, _ids())
    assert snapshot(out) == [(100, "X", None), (1, "A", 5.0)]


def test_duplicates_are_claimed_first_come():
    prior = [LyricEntry(1, "A", Synced(1.0)), LyricEntry(2, "A", Synced(2.0))]
    out = reconcile_entries("A\nA\nA", prior, _ids())
    assert snapshot(out) == [(1, "A", 1.0), (2, "A", 2.0), (100, "A", None)]
    assert_invariants(out)


def test_fewer_duplicates_keep_the_earliest():
    prior = [LyricEntry(1, "A", Synced(1.0)), LyricEntry(2, "A", Synced(2.0))]
    out = reconcile_entries("A", prior, _ids())
    assert snapshot(out) == [(1, "A", 1.0)]


def test_deleted_and_changed_lines():
    prior = [LyricEntry(1, "A", Synced(1.0)), LyricEntry(2, "B", Synced(2.0)), LyricEntry(3, "C")]
    out = reconcile_entries("A\nB changed", prior, _ids())
    assert snapshot(out) == [(1, "A", 1.0), (100, "B changed", None)]
    assert out[1].timestamp is UNSET


def test_match_uses_trimmed_text():
    prior = [LyricEntry(1, "Hello", Synced(4.0))]
    out = reconcile_entries("   Hello   ", prior, _ids())
    assert snapshot(out) == [(1, "Hello", 4.0)]


def test_empty_text_yields_empty_collection():
    prior = [LyricEntry(1, "A", Synced(1.0))]
    assert reconcile_entries("\n \n", prior, _ids()) == []
