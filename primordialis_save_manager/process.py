"""
Process liveness and detached launch.

The supervisor never keeps a handle on the game: it spawns and forgets,
then looks the game up by name on every poll.
"""

import logging
import subprocess
import sys
from pathlib import Path
from typing import Callable, Sequence

import psutil

logger = logging.getLogger(__name__)

_NOT_FOUND_MARKERS = ("cannot find", "not found", "no such process")


LINUX_COMM_LEN = 15    # Linux truncates process names (comm) to this length


def _bare_name(name: str) -> str:
    name = name.lower()
    return name[:-4] if name.endswith(".exe") else name


def _matches(pname: str, wanted: str) -> bool:
    pname = pname.lower()
    if _bare_name(pname) == wanted:
        return True
    # primordialis.exe under Proton shows up as "primordialis.ex"
    if len(pname) == LINUX_COMM_LEN:
        return any(full[:LINUX_COMM_LEN] == pname for full in (wanted, wanted + ".exe"))
    return False


def query_process(name: str) -> str:
    """
    Return the names of running processes matching *name*, one per line.

    Matching ignores case and a trailing .exe, and accepts names cut to
    the Linux 15-character limit.  No match -> empty string.
    """
    wanted  = _bare_name(name)
    matches: list[str] = []
    for proc in psutil.process_iter(["name"]):
        pname = proc.info.get("name") or ""
        if pname and _matches(pname, wanted):
            matches.append(pname)
    return "\n".join(matches)


class ProcessMonitor:

    def __init__(self, query: Callable[[str], str] = query_process):
        self._query = query

    def is_running(self, process_name: str) -> bool:
        output = (self._query(process_name) or "").strip()
        if not output:
            return False
        lowered = output.lower()
        return not any(marker in lowered for marker in _NOT_FOUND_MARKERS)


def spawn_detached(path: Path, args: Sequence[str] = (), cwd: Path | None = None) -> subprocess.Popen:
    """Start *path* detached from this process.  The handle is not waited on."""
    path = Path(path)
    kwargs: dict = {
        "cwd":    str(cwd or path.parent),
        "stdin":  subprocess.DEVNULL,
        "stdout": subprocess.DEVNULL,
        "stderr": subprocess.DEVNULL,
    }
    if sys.platform == "win32":
        kwargs["creationflags"] = (
            subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
        )
    else:
        kwargs["start_new_session"] = True

    logger.debug("Spawning %s %s (cwd=%s)", path, list(args), kwargs["cwd"])
    return subprocess.Popen([str(path), *args], **kwargs)
