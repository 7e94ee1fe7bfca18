#!/usr/bin/env python3
"""
Primordialis
Save Manager / Launcher

Pick a save, play, keep your progress.

  1. Choose a save folder; it is swapped into the game's active `save` slot.
  2. The game is launched and watched.  Every ~30 s the world state is
     compared with the last one seen and, if it changed, copied into one of
     ten rotating `save - autosave N` folders.  F5 checks immediately.
  3. After the game exits, if the world changed you are asked for a name
     and the run is kept as `save - <name>`.

Saves live in:
  Windows : %APPDATA%/Primordialis/
  Linux   : ~/.local/share/Primordialis/
"""

import argparse
import logging
import logging.handlers
import sys
import tkinter as tk
from pathlib import Path

from primordialis_save_manager.autosave import AutosaveEngine
from primordialis_save_manager.config import (
    LauncherConfig,
    default_save_root,
    process_name_for,
)
from primordialis_save_manager.errors import InvalidExecutableError, SaveManagerError
from primordialis_save_manager.hotkeys import QuickCheckHotkey
from primordialis_save_manager.process import ProcessMonitor, spawn_detached
from primordialis_save_manager.prompts import ConsolePrompts, TkPrompts
from primordialis_save_manager.session import SessionSupervisor
from primordialis_save_manager.store import SaveStore
from primordialis_save_manager.swap import SaveSwapCoordinator

logger = logging.getLogger("primordialis_save_manager")

MAX_LOG_BYTES     = 1_048_576  # 1 MB
MAX_LOG_ROTATIONS = 3


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="primordialis-save-manager",
        description="Launch Primordialis with save selection and rotating autosaves.",
    )
    p.add_argument("executable", help="Path to the game executable (primordialis.exe).")
    p.add_argument("--save-root", type=Path, default=None,
                   help="Folder holding the game's save folders (default: platform location).")
    p.add_argument("--process-name", default=None,
                   help="Process name to watch (default: executable name without extension).")
    p.add_argument("--console", action="store_true", help="Use text prompts instead of dialogs.")
    p.add_argument("--unstaged-swap", action="store_true",
                   help="Load saves by delete-then-copy instead of staging and renaming.")
    p.add_argument("--no-hotkeys", action="store_true", help="Don't listen for the global F5 key.")
    p.add_argument("--debug", action="store_true", help="Verbose logging.")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file.")
    return p.parse_args(argv)


def configure_logging(debug: bool = False, log_file: Path | None = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file, maxBytes=MAX_LOG_BYTES, backupCount=MAX_LOG_ROTATIONS, encoding="utf-8",
        ))
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


def resolve_executable(raw: str) -> Path:
    exe = Path(raw).expanduser()
    if not exe.is_file():
        raise InvalidExecutableError(f"Game executable not found at: {exe}")
    return exe


def build_config(args: argparse.Namespace, executable: Path) -> LauncherConfig:
    return LauncherConfig(
        save_root=args.save_root or default_save_root(),
        process_name=args.process_name or process_name_for(executable),
        staged_swap=not args.unstaged_swap,
    )


def make_prompts(console: bool):
    if console:
        return ConsolePrompts()
    try:
        return TkPrompts()
    except tk.TclError as exc:
        logger.info("No display for dialogs (%s); using console prompts.", exc)
        return ConsolePrompts()


# ---------------------------------------------------------------------------
# Launcher loop
# ---------------------------------------------------------------------------

class Launcher:

    def __init__(self, config: LauncherConfig, prompts, monitor: ProcessMonitor | None = None,
                 spawner=spawn_detached, sleep=None, hotkey: QuickCheckHotkey | None = None):
        self.config  = config
        self.prompts = prompts
        self.monitor = monitor or ProcessMonitor()
        self.store   = SaveStore(config)
        self.swap    = SaveSwapCoordinator(config, self.store)
        self.hotkey  = hotkey
        self._spawner = spawner
        self._sleep   = sleep

    def new_supervisor(self) -> SessionSupervisor:
        kwargs = {}
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        if self.hotkey is not None:
            kwargs["check_requested"] = self.hotkey.consume
        return SessionSupervisor(
            self.config, self.monitor, AutosaveEngine(self.config, self.store),
            spawner=self._spawner, **kwargs,
        )

    def run_once(self, executable: Path) -> bool:
        """One select/play/save round.  False when the player quit."""
        saves = self.store.list_saves()
        if not saves:
            logger.info("No save folders found in %s", self.config.save_root)
            return False

        chosen = self.prompts.select([(f.label, f.name) for f in saves])
        if not chosen:
            logger.info("No save selected. Exiting...")
            return False

        self.swap.prepare(chosen)
        self.new_supervisor().run(executable)
        self.swap.finish(chosen, self.prompts.ask_name)
        return True

    def run(self, executable: Path) -> None:
        while self.run_once(executable):
            pass


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.debug, args.log_file)

    prompts = None
    hotkey  = None
    try:
        executable = resolve_executable(args.executable)
        config     = build_config(args, executable)

        logger.info("Primordialis Save Manager")
        logger.info("Save directory: %s", config.save_root)

        if not args.no_hotkeys:
            hotkey = QuickCheckHotkey()
            if not hotkey.start():
                hotkey = None

        prompts = make_prompts(args.console)
        Launcher(config, prompts, hotkey=hotkey).run(executable)
        return 0
    except SaveManagerError as exc:
        logger.error("Error: %s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 130
    except Exception:
        logger.exception("Fatal error")
        return 1
    finally:
        if hotkey is not None:
            hotkey.stop()
        if isinstance(prompts, TkPrompts):
            prompts.close()


if __name__ == "__main__":
    sys.exit(main())
