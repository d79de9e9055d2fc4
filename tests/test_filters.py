import pytest

from core.filters import count_entries, filter_entries
from core.models import FilterMode, LyricEntry, Synced


def _mixed():
    return [
        LyricEntry(1, "a", Synced(1.0)),
        LyricEntry(2, "b"),
        LyricEntry(3, "c", Synced(0.5)),
        LyricEntry(4, "d"),
    ]


def test_all_is_identity():
    entries = _mixed()
    assert filter_entries(entries, FilterMode.ALL) == entries


def test_unsynced_and_synced_keep_order():
    entries = _mixed()
    assert [e.id for e in filter_entries(entries, FilterMode.UNSYNCED)] == [2, 4]
    assert [e.id for e in filter_entries(entries, FilterMode.SYNCED)] == [1, 3]


@pytest.mark.parametrize("entries", [[], _mixed(), [LyricEntry(1, "x")], [LyricEntry(1, "x", Synced(0))]])
def test_partition_is_disjoint_and_exhaustive(entries):
    unsynced = {e.id for e in filter_entries(entries, FilterMode.UNSYNCED)}
    synced = {e.id for e in filter_entries(entries, FilterMode.SYNCED)}
    everything = {e.id for e in filter_entries(entries, FilterMode.ALL)}
    assert unsynced.isdisjoint(synced)
    assert unsynced | synced == everything

    counts = count_entries(entries)
    assert counts.all == counts.unsynced + counts.synced
    assert counts.unsynced == len(unsynced)
    assert counts.synced == len(synced)


def test_filter_does_not_mutate_input():
    entries = _mixed()
    before = list(entries)
    filter_entries(entries, FilterMode.SYNCED)
    assert entries == before
