"""
Filesystem primitives for save folders.

Nothing in here is transactional.  A failure half-way through copy() leaves
the destination partially populated, and a crash between delete() and
copy() leaves it absent.  replace() narrows that window to two renames.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .config import LauncherConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveFolder:
    name:  str
    mtime: datetime

    @property
    def label(self) -> str:
        return f"{self.name} ({self.mtime:%d.%m.%Y, %H:%M:%S})"


class SaveStore:

    def __init__(self, config: LauncherConfig):
        self.config = config

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def copy(self, source: Path, destination: Path) -> None:
        """
        Recursively copy *source* into *destination* (merging if it exists).

        The destination folder is stamped with the copy time, not the source
        folder's mtime, so slot eviction and listings see when it was written.
        """
        try:
            shutil.copytree(source, destination, dirs_exist_ok=True)
            os.utime(destination)
        except OSError as exc:
            logger.error("Error copying folder from %s to %s: %s", source, destination, exc)
            raise

    def delete(self, path: Path) -> None:
        """
        Recursively remove *path*; a missing path is not an error.

        A plain file sitting on a save folder name is unlinked.
        """
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.error("Error deleting folder %s: %s", path, exc)
            raise

    def replace(self, source: Path, destination: Path) -> None:
        """
        Put a copy of *source* at *destination*.

        The copy is staged in a hidden sibling first, so *destination* is
        only ever missing between two renames rather than for the whole copy.
        """
        staging  = destination.with_name(f".{destination.name}.staging")
        previous = destination.with_name(f".{destination.name}.previous")

        self.delete(staging)
        self.copy(source, staging)

        try:
            self.delete(previous)
            if destination.exists():
                destination.rename(previous)
            try:
                staging.rename(destination)
            except OSError:
                if previous.exists() and not destination.exists():
                    previous.rename(destination)
                raise
        except OSError:
            self.delete(staging)
            raise
        self.delete(previous)

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def mtime(self, path: Path) -> float:
        return path.stat().st_mtime

    def list_saves(self) -> list[SaveFolder]:
        """All save folders under the root, newest first."""
        root   = self.config.save_root
        prefix = self.config.active_name
        try:
            entries = [
                d for d in root.iterdir()
                if d.is_dir() and d.name.startswith(prefix)
            ]
        except OSError as exc:
            logger.error("Error reading save directory %s: %s", root, exc)
            return []

        folders: list[SaveFolder] = []
        for entry in entries:
            try:
                ts = self.mtime(entry)
            except OSError:
                ts = 0.0
            folders.append(SaveFolder(entry.name, datetime.fromtimestamp(ts)))

        folders.sort(key=lambda f: f.mtime, reverse=True)
        return folders
