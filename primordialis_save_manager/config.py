"""
Launcher configuration.

Every component receives a LauncherConfig at construction; nothing here is
read from module-level state once the config has been built.
"""

import os
import platform
from dataclasses import dataclass
from pathlib import Path


APP_NAME   = "PrimordialisSaveManager"
GAME_DIR   = "Primordialis"

ACTIVE_SAVE_NAME = "save"
ARTIFACT_NAME    = "world.run"
AUTOSAVE_SLOTS   = 10

POLL_INTERVAL    = 2.0    # seconds between liveness polls
START_ATTEMPTS   = 15     # 15 x 2s = 30s to detect the game
AUTOSAVE_EVERY   = 15     # polls between autosave checks (~30s)


def default_save_root() -> Path:
    """Return the directory the game keeps its save folders in."""
    if platform.system() == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        xdg  = os.environ.get("XDG_DATA_HOME")
        base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / GAME_DIR


def process_name_for(executable: Path) -> str:
    """primordialis.exe -> primordialis"""
    return Path(executable).stem.lower()


@dataclass(frozen=True)
class LauncherConfig:
    save_root:      Path
    active_name:    str   = ACTIVE_SAVE_NAME
    artifact_name:  str   = ARTIFACT_NAME
    slot_count:     int   = AUTOSAVE_SLOTS
    poll_interval:  float = POLL_INTERVAL
    start_attempts: int   = START_ATTEMPTS
    autosave_every: int   = AUTOSAVE_EVERY
    process_name:   str   = "primordialis"
    staged_swap:    bool  = True

    def __post_init__(self):
        if self.slot_count < 1:
            raise ValueError("slot_count must be at least 1")
        if self.start_attempts < 1 or self.autosave_every < 1:
            raise ValueError("start_attempts and autosave_every must be positive")
        object.__setattr__(self, "save_root", Path(self.save_root))

    @property
    def active_path(self) -> Path:
        return self.save_root / self.active_name

    def path_for(self, name: str) -> Path:
        return self.save_root / name

    def artifact_in(self, folder: Path) -> Path:
        return folder / self.artifact_name

    def slot_name(self, index: int) -> str:
        return f"{self.active_name} - autosave {index}"

    def save_name(self, label: str) -> str:
        return f"{self.active_name} - {label}"
