"""
Game session state machine.

    NotStarted -> AwaitingStart -> Running -> Exited
                        \\___________________/   (game never detected)

Each step() sleeps one poll interval and then looks at the game process.
Sleeping goes through an injected callable so tests can run on virtual time.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable

from .autosave import AutosaveEngine
from .config import LauncherConfig
from .process import ProcessMonitor, spawn_detached

logger = logging.getLogger(__name__)


class SessionState(Enum):
    NOT_STARTED    = "NotStarted"
    AWAITING_START = "AwaitingStart"
    RUNNING        = "Running"
    EXITED         = "Exited"


@dataclass
class Session:
    executable_path:   Path
    working_directory: Path
    state:             SessionState = SessionState.NOT_STARTED
    history:           list[SessionState] = field(default_factory=list)


class SessionSupervisor:
    """
    Launches the game once and watches it until it exits.

    One instance per run; Exited is terminal.  `history` records the state
    after every poll, which is what the tests assert on.
    """

    def __init__(
        self,
        config:   LauncherConfig,
        monitor:  ProcessMonitor,
        autosave: AutosaveEngine,
        spawner:  Callable = spawn_detached,
        sleep:    Callable[[float], None] = time.sleep,
        check_requested: Callable[[], bool] | None = None,
    ):
        self.config   = config
        self.monitor  = monitor
        self.autosave = autosave
        self._spawner = spawner
        self._sleep   = sleep
        self._check_requested = check_requested or (lambda: False)

        self.session: Session | None = None
        self._attempts   = 0
        self._poll_count = 0

    @property
    def state(self) -> SessionState:
        return self.session.state if self.session else SessionState.NOT_STARTED

    @property
    def history(self) -> list[SessionState]:
        return self.session.history if self.session else []

    # ------------------------------------------------------------------

    def launch(self, executable: Path) -> None:
        if self.session is not None:
            raise RuntimeError("a supervisor runs exactly one session")
        executable = Path(executable)
        self.session = Session(executable, executable.parent)

        logger.info("Launching %s from: %s", self.config.process_name, executable)
        self._spawner(executable, (), executable.parent)
        self.session.state = SessionState.AWAITING_START
        logger.info("Waiting for game to start...")

    def step(self) -> SessionState:
        """Advance one poll.  Returns the state after the poll."""
        state = self.state
        if state is SessionState.AWAITING_START:
            self._await_start()
        elif state is SessionState.RUNNING:
            self._watch()
        else:
            raise RuntimeError(f"cannot step a session in state {state.value}")
        self.session.history.append(self.session.state)
        return self.session.state

    def run(self, executable: Path) -> SessionState:
        self.launch(executable)
        while self.state is not SessionState.EXITED:
            self.step()
        return self.state

    # ------------------------------------------------------------------

    def _await_start(self) -> None:
        self._sleep(self.config.poll_interval)
        self._attempts += 1

        if self.monitor.is_running(self.config.process_name):
            logger.info("Game detected! Monitoring...")
            self.autosave.prime(self.config.active_path)
            self.session.state = SessionState.RUNNING
            return

        if self._attempts >= self.config.start_attempts:
            waited = self.config.start_attempts * self.config.poll_interval
            logger.warning(
                "Game process not detected after %g seconds. Continuing anyway...", waited
            )
            self.session.state = SessionState.EXITED
            return

        logger.info(
            "Still waiting for game process... (%gs)",
            self._attempts * self.config.poll_interval,
        )

    def _watch(self) -> None:
        self._sleep(self.config.poll_interval)
        self._poll_count += 1

        if not self.monitor.is_running(self.config.process_name):
            logger.info("Game process has exited.")
            self.session.state = SessionState.EXITED
            return

        due       = self._poll_count % self.config.autosave_every == 0
        requested = self._check_requested()
        if due or requested:
            if requested and not due:
                logger.info("Autosave check requested")
            self.autosave.check(self.config.active_path)
