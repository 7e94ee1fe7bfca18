import subprocess
import sys
from types import SimpleNamespace

import pytest

from primordialis_save_manager import process
from primordialis_save_manager.process import ProcessMonitor, query_process, spawn_detached


@pytest.mark.parametrize(
    "output, expected",
    [
        ("", False),
        ("   \n", False),
        (None, False),
        ("Get-Process : Cannot find a process with the name \"primordialis\"", False),
        ("primordialis.exe", True),
        ("Primordialis\nprimordialis", True),
    ],
)
def test_is_running_normalizes_query_output(output, expected):
    monitor = ProcessMonitor(query=lambda name: output)
    assert monitor.is_running("primordialis") is expected


def test_is_running_passes_name_through():
    seen = []
    monitor = ProcessMonitor(query=lambda name: seen.append(name) or "")
    monitor.is_running("primordialis")
    assert seen == ["primordialis"]


def _fake_procs(*names):
    return [SimpleNamespace(info={"name": n}) for n in names]


def test_query_process_matches_with_or_without_exe(monkeypatch):
    monkeypatch.setattr(
        process.psutil, "process_iter",
        lambda attrs=None: _fake_procs("explorer.exe", "Primordialis.exe", None, "primordialis"),
    )
    assert query_process("primordialis") == "Primordialis.exe\nprimordialis"
    assert query_process("primordialis.EXE") == "Primordialis.exe\nprimordialis"


def test_query_process_no_match_is_empty(monkeypatch):
    monkeypatch.setattr(process.psutil, "process_iter", lambda attrs=None: _fake_procs("bash", "python"))
    assert query_process("primordialis") == ""


def test_spawn_detached_runs_in_executable_dir(monkeypatch, tmp_path):
    calls = []

    def fake_popen(args, **kwargs):
        calls.append((args, kwargs))
        return SimpleNamespace(pid=1234)

    monkeypatch.setattr(process.subprocess, "Popen", fake_popen)
    exe = tmp_path / "game" / "primordialis.exe"

    handle = spawn_detached(exe)

    assert handle.pid == 1234
    (args, kwargs), = calls
    assert args == [str(exe)]
    assert kwargs["cwd"] == str(exe.parent)
    assert kwargs["stdout"] is subprocess.DEVNULL
    if sys.platform == "win32":
        assert kwargs["creationflags"]
    else:
        assert kwargs["start_new_session"] is True


def test_query_process_matches_linux_truncated_name(monkeypatch):
    monkeypatch.setattr(
        process.psutil, "process_iter",
        lambda attrs=None: _fake_procs("primordialis.ex", "primordialis.xx", "primordia"),
    )
    assert query_process("primordialis") == "primordialis.ex"
    assert query_process("primordialis.exe") == "primordialis.ex"
