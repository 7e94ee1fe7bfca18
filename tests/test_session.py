import logging
from pathlib import Path

import pytest

from primordialis_save_manager.autosave import AutosaveEngine
from primordialis_save_manager.session import SessionState, SessionSupervisor


class RecordingAutosave:
    def __init__(self):
        self.primed = 0
        self.checks = 0

    def prime(self, active_path=None):
        self.primed += 1

    def check(self, active_path=None):
        self.checks += 1
        return None


class RecordingSpawner:
    def __init__(self):
        self.calls = []

    def __call__(self, path, args, cwd):
        self.calls.append((path, tuple(args), cwd))


EXE = Path("/games/Primordialis/primordialis.exe")


def make_supervisor(config, monitor, fake_sleep, autosave=None, **kwargs):
    return SessionSupervisor(
        config, monitor, autosave or RecordingAutosave(),
        spawner=RecordingSpawner(), sleep=fake_sleep, **kwargs,
    )


def test_launch_spawns_detached_and_awaits_start(config, scripted_monitor, fake_sleep):
    sup = make_supervisor(config, scripted_monitor(lambda n: False), fake_sleep)
    assert sup.state is SessionState.NOT_STARTED

    sup.launch(EXE)

    assert sup.state is SessionState.AWAITING_START
    assert sup._spawner.calls == [(EXE, (), EXE.parent)]
    assert sup.session.working_directory == EXE.parent
    assert fake_sleep.calls == []


def test_detected_on_third_poll(config, scripted_monitor, fake_sleep):
    autosave = RecordingAutosave()
    monitor = scripted_monitor(lambda n: n >= 3)
    sup = make_supervisor(config, monitor, fake_sleep, autosave=autosave)
    sup.launch(EXE)

    for _ in range(5):
        sup.step()

    assert sup.history == [
        SessionState.AWAITING_START,
        SessionState.AWAITING_START,
        SessionState.RUNNING,
        SessionState.RUNNING,
        SessionState.RUNNING,
    ]
    assert autosave.primed == 1
    assert fake_sleep.calls == [2.0] * 5


def test_never_detected_ends_without_running(config, scripted_monitor, fake_sleep, caplog):
    autosave = RecordingAutosave()
    monitor = scripted_monitor(lambda n: False)
    sup = make_supervisor(config, monitor, fake_sleep, autosave=autosave)

    with caplog.at_level(logging.WARNING):
        final = sup.run(EXE)

    assert final is SessionState.EXITED
    assert len(sup.history) == 15
    assert SessionState.RUNNING not in sup.history
    assert monitor.polls == 15
    assert fake_sleep.elapsed == pytest.approx(30.0)
    assert autosave.primed == 0
    assert autosave.checks == 0
    assert "not detected after 30 seconds" in caplog.text


def test_autosave_check_every_fifteenth_running_poll(config, scripted_monitor, fake_sleep):
    autosave = RecordingAutosave()
    # detected on poll 1, then 45 running polls, gone on the 47th query
    monitor = scripted_monitor(lambda n: n <= 46)
    sup = make_supervisor(config, monitor, fake_sleep, autosave=autosave)

    assert sup.run(EXE) is SessionState.EXITED

    assert autosave.checks == 3
    assert sup.history.count(SessionState.RUNNING) == 46
    assert sup.history[-1] is SessionState.EXITED


def test_exit_is_first_negative_poll(config, scripted_monitor, fake_sleep):
    monitor = scripted_monitor(lambda n: n in (1, 2, 3))
    sup = make_supervisor(config, monitor, fake_sleep)

    sup.run(EXE)

    assert sup.history == [
        SessionState.RUNNING,
        SessionState.RUNNING,
        SessionState.RUNNING,
        SessionState.EXITED,
    ]


def test_exited_is_terminal(config, scripted_monitor, fake_sleep):
    sup = make_supervisor(config, scripted_monitor(lambda n: n == 1), fake_sleep)
    sup.run(EXE)

    with pytest.raises(RuntimeError):
        sup.step()
    with pytest.raises(RuntimeError):
        sup.launch(EXE)


def test_requested_check_runs_on_next_poll(config, scripted_monitor, fake_sleep):
    autosave = RecordingAutosave()
    requests = iter([False, True, False, False])
    sup = make_supervisor(
        config, scripted_monitor(lambda n: n <= 5), fake_sleep,
        autosave=autosave, check_requested=lambda: next(requests, False),
    )

    sup.run(EXE)

    assert autosave.checks == 1


def test_real_engine_autosaves_during_run(config, store, make_save, scripted_monitor, fake_sleep):
    make_save("save", b"start")
    engine = AutosaveEngine(config, store)
    # change the world between the prime and the first scheduled check
    fake_sleep.hooks[5] = lambda: (config.active_path / "world.run").write_bytes(b"progress")
    monitor = scripted_monitor(lambda n: n <= 31)
    sup = make_supervisor(config, monitor, fake_sleep, autosave=engine)

    sup.run(EXE)

    slot1 = config.path_for(config.slot_name(1))
    assert (slot1 / "world.run").read_bytes() == b"progress"
    assert not config.path_for(config.slot_name(2)).exists()
    assert engine.last_snapshot == b"progress"
