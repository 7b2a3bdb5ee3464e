"""Pytest configuration and fixtures for dlspace tests."""

import pytest

from dlspace.config.manager import ConfigManager


class FakeTimerHandle:
    """Stand-in for asyncio.TimerHandle."""

    def __init__(self, when: float, callback, args: tuple):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeLoop:
    """Minimal event loop with a manually advanced clock (in seconds)."""

    def __init__(self):
        self.now = 0.0
        self.handles: list[FakeTimerHandle] = []

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback, *args) -> FakeTimerHandle:
        handle = FakeTimerHandle(self.now + delay, callback, args)
        self.handles.append(handle)
        return handle

    def advance_to(self, when: float) -> None:
        """Run every due, uncancelled callback in schedule order."""
        for handle in sorted(self.handles, key=lambda h: h.when):
            if handle.when > when:
                break
            if not handle.cancelled:
                self.now = handle.when
                handle.cancelled = True
                handle.callback(*handle.args)
        self.now = when


@pytest.fixture
def fake_loop():
    """Create a FakeLoop starting at t=0."""
    return FakeLoop()


@pytest.fixture
def download_tree(tmp_path):
    """Create a small download directory tree.

    Layout (sizes in bytes):
        game.bin          1000
        data/level1.pak    200
        data/deep/x.dat     30
        empty/
    """
    (tmp_path / "game.bin").write_bytes(b"\0" * 1000)
    (tmp_path / "data" / "deep").mkdir(parents=True)
    (tmp_path / "data" / "level1.pak").write_bytes(b"\0" * 200)
    (tmp_path / "data" / "deep" / "x.dat").write_bytes(b"\0" * 30)
    (tmp_path / "empty").mkdir()
    return tmp_path


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Point ConfigManager at a temporary config file."""
    path = tmp_path / "config" / "config.json"
    monkeypatch.setattr(ConfigManager, "DEFAULT_CONFIG_PATH", path)
    return path
