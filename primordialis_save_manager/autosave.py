"""
Content-based autosave into a fixed ring of slots.

The game writes to the active save whenever it likes, so change detection
compares the raw bytes of the state artifact against the last bytes seen.
"""

import logging
from pathlib import Path

from .config import LauncherConfig
from .slots import SlotInfo, acquire
from .store import SaveStore

logger = logging.getLogger(__name__)


def read_artifact(path: Path) -> bytes | None:
    """Bytes of the artifact at *path*, or None when it cannot be read."""
    try:
        return path.read_bytes()
    except OSError as exc:
        logger.debug("State artifact %s unavailable: %s", path, exc)
        return None


class AutosaveEngine:

    def __init__(self, config: LauncherConfig, store: SaveStore):
        self.config = config
        self.store  = store
        self.last_snapshot: bytes | None = None

    def prime(self, active_path: Path | None = None) -> None:
        """Remember the current artifact as the baseline for later checks."""
        folder = active_path or self.config.active_path
        self.last_snapshot = read_artifact(self.config.artifact_in(folder))

    def existing_slots(self) -> list[SlotInfo]:
        """Occupied slots: only a directory on a slot name counts."""
        slots: list[SlotInfo] = []
        for index in range(1, self.config.slot_count + 1):
            path = self.config.path_for(self.config.slot_name(index))
            if not path.is_dir():
                continue
            try:
                slots.append(SlotInfo(index, self.store.mtime(path)))
            except FileNotFoundError:
                continue
        return slots

    def check(self, active_path: Path | None = None) -> int | None:
        """
        Autosave if the artifact changed since the last snapshot.

        Returns the slot index written, or None when nothing was saved.
        A vanished artifact never triggers and leaves the snapshot alone.
        """
        folder  = active_path or self.config.active_path
        current = read_artifact(self.config.artifact_in(folder))

        if current is None:
            return None
        if self.last_snapshot is None:
            logger.info("Save file created, creating autosave...")
        elif current == self.last_snapshot:
            return None
        else:
            logger.info("Save file changed, creating autosave...")

        try:
            index = self._write_slot(folder)
        except OSError as exc:
            logger.error("Error creating autosave: %s", exc)
            return None

        self.last_snapshot = current
        return index

    def _write_slot(self, folder: Path) -> int:
        index = acquire(self.existing_slots(), self.config.slot_count)
        name  = self.config.slot_name(index)
        dest  = self.config.path_for(name)

        self.store.delete(dest)
        self.store.copy(folder, dest)
        logger.info("Autosave created: %s", name)
        return index
