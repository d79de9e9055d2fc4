import pytest

from core.errors import IncompleteSync
from core.models import FilterMode, TrackMeta
from core.session import SyncSession

from helpers import assert_invariants, snapshot


def _load(session, text):
    session.set_lyrics_text(text)
    session.scheduler.flush()


def test_lyrics_text_is_reconciled_debounced(session):
    session.set_lyrics_text("A\nB")
    assert len(session.store) == 0
    session.scheduler.flush()
    assert [e.text for e in session.store.entries()] == ["A", "B"]


def test_sync_next_uses_cursor(session):
    _load(session, "A\nB")
    session.clock.set_current_time(1.25)
    first = session.sync_next()
    session.clock.set_current_time(2.5)
    second = session.sync_next()
    assert session.store.entry(first).seconds == 1.25
    assert session.store.entry(second).seconds == 2.5
    assert session.sync_next() is None


def test_sync_next_applies_pending_edit_first(session):
    session.set_lyrics_text("A")
    session.clock.set_current_time(3.0)
    eid = session.sync_next()
    assert session.store.entry(eid).text == "A"


def test_unsync_last(session):
    _load(session, "A\nB")
    session.sync_next()
    second = session.sync_next()
    assert session.unsync_last() == second
    assert session.counts().synced == 1


def test_edit_line_rewrites_editor_text(session):
    _load(session, "A\nB")
    texts = []
    session.lyricsTextChanged.connect(texts.append)
    b = session.store.entries()[1].id
    session.edit_line(b, "B2")
    assert session.lyrics_text == "A\nB2"
    assert texts == ["A\nB2"]


def test_edit_line_is_not_overwritten_by_pending_reconcile(session):
    _load(session, "A")
    a = session.store.entries()[0].id
    session.set_lyrics_text("A\nB")
    session.edit_line(a, "A2")
    session.scheduler.flush()
    assert [e.text for e in session.store.entries()] == ["A2", "B"]


def test_nudge_and_reset(session):
    _load(session, "A")
    session.clock.set_current_time(1.0)
    eid = session.sync_next()
    session.nudge(eid, -0.03)
    assert session.store.entry(eid).seconds == pytest.approx(0.97)
    session.reset_all_timestamps()
    session.reset_all_timestamps()
    assert session.counts().unsynced == 1


def test_filter_mode_and_active_index(session):
    _load(session, "A\nB\nC")
    a, b, c = (e.id for e in session.store.entries())
    session.store.set_timestamp(a, 1.0)
    session.store.set_timestamp(c, 3.0)

    session.clock.set_current_time(3.5)
    assert session.active_index == 2

    modes = []
    session.filterModeChanged.connect(modes.append)
    session.set_filter_mode(FilterMode.SYNCED)
    assert modes == [FilterMode.SYNCED]
    assert [e.id for e in session.visible_entries()] == [a, c]
    assert session.active_index == 1

    session.set_filter_mode(FilterMode.UNSYNCED)
    assert [e.id for e in session.visible_entries()] == [b]
    assert session.active_index is None


def test_active_index_signal_follows_cursor(session):
    _load(session, "A\nB")
    a, b = (e.id for e in session.store.entries())
    session.store.set_timestamp(a, 0.0)
    session.store.set_timestamp(b, 2.0)
    seen = []
    session.activeIndexChanged.connect(seen.append)
    for t in (0.5, 1.0, 2.0, 2.5, 1.0):
        session.clock.set_current_time(t)
    assert seen == [1, 0]


def test_play_from_seeks_and_plays(session, player):
    _load(session, "A\nB")
    a, b = (e.id for e in session.store.entries())
    session.store.set_timestamp(a, 1.5)
    assert session.play_from(a) is True
    assert player.calls == [("seek", 1500), ("play",)]
    assert session.clock.current_time == 1.5
    assert session.play_from(b) is False


def test_play_from_does_not_restart_when_playing(session, player):
    _load(session, "A")
    a = session.store.entries()[0].id
    session.store.set_timestamp(a, 2.0)
    session.clock.on_playing_changed(True)
    session.play_from(a)
    assert player.calls == [("seek", 2000)]


def test_seek_is_clamped_to_duration(session, player):
    session.clock.on_duration_ms(10000)
    session.seek_to(42.0)
    assert player.calls == [("seek", 10000)]
    assert session.clock.current_time == 10.0


def test_export_gate_and_output(session):
    _load(session, "Hi\nThere")
    hi, there = (e.id for e in session.store.entries())
    session.store.set_timestamp(hi, 1.5)
    with pytest.raises(IncompleteSync):
        session.export()
    session.store.set_timestamp(there, 0.25)
    assert session.export() == "[00:00.25]There\n[00:01.50]Hi"


def test_save_writes_file_named_after_track(session, tmp_path):
    _load(session, "Hi")
    session.sync_next()
    session.set_track(TrackMeta(title="Song", artist="Band"))
    target = tmp_path / session.suggested_filename()
    session.save(target)
    assert target.name == "Song.lrc"
    assert target.read_text(encoding="utf-8") == "[00:00.00]Hi"


def test_save_does_not_write_when_incomplete(session, tmp_path):
    _load(session, "Hi")
    target = tmp_path / "x.lrc"
    with pytest.raises(IncompleteSync):
        session.save(target)
    assert not target.exists()


def test_clear_lyrics(session):
    _load(session, "A\nB")
    session.set_lyrics_text("A\nB\nC")
    session.clear_lyrics()
    assert len(session.store) == 0
    assert session.lyrics_text == ""
    assert not session.scheduler.is_pending()


def test_session_without_player():
    session = SyncSession()
    _load(session, "A")
    a = session.store.entries()[0].id
    session.store.set_timestamp(a, 1.0)
    assert session.play_from(a) is True
    assert session.clock.current_time == 1.0


def test_long_editing_session_keeps_invariants(session):
    _load(session, "A\nB\nC\nA")
    session.sync_next()
    session.sync_next()
    _load(session, "C\nA\nA\nNew\nB")
    assert_invariants(session.store.entries())
    _load(session, "")
    _load(session, "A\nB")
    assert_invariants(session.store.entries())
    assert snapshot(session.store.entries())[0][2] is None


def test_skip_is_clamped_at_both_ends(session, player):
    session.clock.on_duration_ms(10000)
    session.clock.set_current_time(1.0)
    session.skip(-3.0)
    assert session.clock.current_time == 0.0

    session.clock.set_current_time(9.0)
    session.skip(3.0)
    assert session.clock.current_time == 10.0

    session.clock.set_current_time(4.0)
    session.skip(3.0)
    assert player.calls == [("seek", 0), ("seek", 10000), ("seek", 7000)]


def test_blank_line_edit_is_ignored(session):
    _load(session, "A\nB")
    a, b = (e.id for e in session.store.entries())
    session.store.set_timestamp(a, 1.0)
    texts = []
    session.lyricsTextChanged.connect(texts.append)

    session.edit_line(a, "   ")

    assert snapshot(session.store.entries()) == [(a, "A", 1.0), (b, "B", None)]
    assert session.lyrics_text == "A\nB"
    assert texts == []
    session.store.set_timestamp(b, 2.0)
    assert session.export() == "[00:01.00]A\n[00:02.00]B"


def test_remove_line_rewrites_editor_text(session):
    _load(session, "A\nB\nC")
    b = session.store.entries()[1].id
    texts = []
    session.lyricsTextChanged.connect(texts.append)
    session.remove_line(b)
    assert [e.text for e in session.store.entries()] == ["A", "C"]
    assert texts == ["A\nC"]
