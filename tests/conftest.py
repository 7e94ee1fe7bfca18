import os
import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from primordialis_save_manager.config import LauncherConfig  # noqa: E402
from primordialis_save_manager.store import SaveStore  # noqa: E402


@pytest.fixture
def config(tmp_path: Path) -> LauncherConfig:
    root = tmp_path / "Primordialis"
    root.mkdir()
    return LauncherConfig(save_root=root, poll_interval=2.0)


@pytest.fixture
def store(config) -> SaveStore:
    return SaveStore(config)


@pytest.fixture
def make_save(config):
    """Create a save folder with an optional world.run and an explicit mtime."""

    def _make(name: str, world: bytes | None = b"world", mtime: float | None = None, extra: dict | None = None):
        folder = config.path_for(name)
        folder.mkdir(parents=True, exist_ok=True)
        if world is not None:
            (folder / config.artifact_name).write_bytes(world)
        for rel, content in (extra or {}).items():
            target = folder / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        if mtime is not None:
            os.utime(folder, (mtime, mtime))
        return folder

    return _make


class FakeSleep:
    """Records requested sleeps and runs hooks keyed by sleep count."""

    def __init__(self):
        self.calls: list[float] = []
        self.hooks: dict[int, callable] = {}

    @property
    def elapsed(self) -> float:
        return sum(self.calls)

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        hook = self.hooks.get(len(self.calls))
        if hook:
            hook()


class ScriptedMonitor:
    """is_running answers from a predicate on the poll number (1-based)."""

    def __init__(self, running):
        self._running = running
        self.polls = 0

    def is_running(self, process_name: str) -> bool:
        self.polls += 1
        return bool(self._running(self.polls))


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def scripted_monitor():
    return ScriptedMonitor
