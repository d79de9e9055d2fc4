from PySide6.QtCore import QEventLoop, QTimer

from core.scheduler import ReconcileScheduler

from helpers import snapshot


def _wait(ms):
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()


def test_burst_of_edits_reconciles_once_with_last_text(store):
    scheduler = ReconcileScheduler(store, delay_ms=10_000)
    runs = []
    scheduler.reconciled.connect(lambda: runs.append(store.as_text()))

    scheduler.schedule("A")
    scheduler.schedule("A\nB")
    scheduler.schedule("A\nB\nC")
    assert scheduler.is_pending()
    assert len(store) == 0

    assert scheduler.flush() is True
    assert runs == ["A\nB\nC"]
    assert scheduler.flush() is False
    assert runs == ["A\nB\nC"]


def test_cancel_drops_pending_run(store):
    scheduler = ReconcileScheduler(store, delay_ms=10_000)
    scheduler.schedule("A")
    scheduler.cancel()
    assert not scheduler.is_pending()
    assert scheduler.flush() is False
    assert len(store) == 0


def test_run_uses_store_state_at_fire_time(store):
    scheduler = ReconcileScheduler(store, delay_ms=10_000)
    scheduler.schedule("A\nB")
    scheduler.flush()
    a = store.entries()[0].id
    scheduler.schedule("B\nA")
    # sync happens between the edit and the debounced run
    store.set_timestamp(a, 4.0)
    scheduler.flush()
    assert snapshot(store.entries())[1] == (a, "A", 4.0)


def test_timer_fires_after_delay(store):
    scheduler = ReconcileScheduler(store, delay_ms=10)
    runs = []
    scheduler.reconciled.connect(lambda: runs.append(len(store)))
    scheduler.schedule("A")
    scheduler.schedule("A\nB")
    _wait(200)
    assert runs == [2]
    assert not scheduler.is_pending()
