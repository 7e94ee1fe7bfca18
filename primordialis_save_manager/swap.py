"""
Moving saves in and out of the active slot around a game run.
"""

import logging
from typing import Callable

from .autosave import read_artifact
from .config import LauncherConfig
from .errors import SaveSwapError
from .store import SaveStore

logger = logging.getLogger(__name__)


class SaveSwapCoordinator:

    def __init__(self, config: LauncherConfig, store: SaveStore):
        self.config = config
        self.store  = store

    # ------------------------------------------------------------------
    # Before launch
    # ------------------------------------------------------------------

    def prepare(self, chosen: str) -> None:
        """Make *chosen* the active save.  No-op when it already is."""
        if chosen == self.config.active_name:
            logger.info("Using default save folder.")
            return

        source = self.config.path_for(chosen)
        active = self.config.active_path
        try:
            if self.config.staged_swap:
                logger.info('Loading "%s" into "%s"...', chosen, self.config.active_name)
                self.store.replace(source, active)
            else:
                logger.info("Removing default save folder...")
                self.store.delete(active)
                logger.info('Copying "%s" to "%s"...', chosen, self.config.active_name)
                self.store.copy(source, active)
        except OSError as exc:
            raise SaveSwapError(f'Could not load "{chosen}"', exc) from exc
        logger.info("Save loaded successfully!")

    # ------------------------------------------------------------------
    # After exit
    # ------------------------------------------------------------------

    def has_artifact(self) -> bool:
        return self.config.artifact_in(self.config.active_path).exists()

    def differs_from(self, chosen: str) -> bool:
        """
        Compare the active artifact with *chosen*'s copy, read from disk now.

        Anything unreadable counts as different so the player gets asked.
        """
        current  = read_artifact(self.config.artifact_in(self.config.active_path))
        original = read_artifact(self.config.artifact_in(self.config.path_for(chosen)))
        if current is None or original is None:
            logger.error("Error comparing %s files; assuming changed", self.config.artifact_name)
            return True
        return current != original

    def label_problem(self, label: str) -> str | None:
        """Why *label* can't name a new save, or None if it can (blank = skip)."""
        label = label.strip()
        if not label:
            return None
        if "/" in label or "\\" in label:
            return "Save name cannot contain / or \\"
        if self.config.path_for(self.config.save_name(label)).exists():
            return f'"{self.config.save_name(label)}" already exists'
        return None

    def save_as(self, label: str) -> str:
        """Copy the active save to `<active> - <label>`.  Returns the folder name."""
        problem = self.label_problem(label)
        if problem:
            raise ValueError(problem)
        name = self.config.save_name(label.strip())
        logger.info('Saving current game as "%s"...', name)
        try:
            self.store.copy(self.config.active_path, self.config.path_for(name))
        except OSError as exc:
            raise SaveSwapError(f'Could not save "{name}"', exc) from exc
        logger.info("Save created successfully!")
        return name

    def finish(
        self, chosen: str, ask_name: Callable[[Callable[[str], str | None]], str | None]
    ) -> str | None:
        """
        Offer to keep the run's progress.  Returns the new save folder name,
        or None when nothing was saved.
        """
        if not self.has_artifact():
            logger.info("No %s file detected. Skipping save.", self.config.artifact_name)
            return None

        if not self.differs_from(chosen):
            logger.info("No changes detected in save. Skipping save prompt.")
            return None

        logger.info("Changes detected in save.")
        label = (ask_name(self.label_problem) or "").strip()
        if not label:
            logger.info("Save skipped.")
            return None
        return self.save_as(label)
