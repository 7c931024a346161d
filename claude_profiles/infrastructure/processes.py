"""Detection of running host-application sessions."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional, Set

import psutil

from ..constants import HOST_PROCESS_NAMES


def _is_host_process(proc: psutil.Process, names: Set[str]) -> bool:
    try:
        if proc.name().lower() in names:
            return True
        cmdline = proc.cmdline()
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
        return False

    # npm installs run as "node .../bin/claude"
    return any(Path(arg).name.lower() in names for arg in cmdline[:2])


def _is_isolated(proc: psutil.Process, env_var: Optional[str]) -> bool:
    """Sessions started by ``launch`` carry the profile env var and use their own HOME."""
    if not env_var:
        return False
    try:
        return env_var in proc.environ()
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess, OSError):
        return False


def find_host_sessions(
    names: Iterable[str] = HOST_PROCESS_NAMES,
    isolated_env_var: Optional[str] = None,
    exclude_pids: Optional[Iterable[int]] = None,
) -> List[int]:
    """PIDs of running host CLI processes that share the live credential file."""
    wanted = {n.lower() for n in names}
    excluded = set(exclude_pids or ())
    excluded.add(os.getpid())

    pids = []
    for proc in psutil.process_iter():
        if proc.pid in excluded:
            continue
        if _is_host_process(proc, wanted) and not _is_isolated(proc, isolated_env_var):
            pids.append(proc.pid)
    return sorted(pids)
