from types import SimpleNamespace

import pytest
from PySide6.QtCore import QCoreApplication

from core.clock import PlaybackClock
from core.config import AppConfig
from core.entry_store import EntryStore
from core.session import SyncSession


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def clock():
    return PlaybackClock()


@pytest.fixture
def store(clock):
    return EntryStore(clock, strict_ids=True)


def make_player():
    calls = []
    player = SimpleNamespace(calls=calls)
    player.seek_ms = lambda ms: calls.append(("seek", ms))
    player.play = lambda: calls.append(("play",))
    return player


@pytest.fixture
def player():
    return make_player()


@pytest.fixture
def session(player):
    return SyncSession(AppConfig(debounce_ms=10, strict_ids=True), player=player)
