"""File lock so two claude-profiles commands never interleave."""

from __future__ import annotations

import contextlib
import os
import time
from pathlib import Path
from typing import Optional

from filelock import FileLock as FileLocker, Timeout as FileLockTimeout

from .constants import LOCK_TIMEOUT_SECONDS
from .core.errors import LockTimeout
from .presentation.console import console
from .utils import ensure_private_dir


class ToolLock:
    """
    File-based lock over the profiles root.

    Serializes this tool's own mutations. The host application does not
    take it, so writes to the live credential file can still race.
    """

    def __init__(self, lock_path: Path):
        self.lock_path = lock_path
        self.pid_path = lock_path.with_suffix(".pid")
        self.lock = FileLocker(str(lock_path), timeout=-1)
        self.acquired = False

    def acquire(self, timeout: float = LOCK_TIMEOUT_SECONDS, poll_interval: float = 0.1):
        """
        Acquire the lock, waiting up to ``timeout`` seconds.

        Raises:
           LockTimeout: If another process keeps holding it
        """
        start_time = time.time()
        shown_waiting_msg = False
        ensure_private_dir(self.lock_path.parent)

        while True:
            try:
                self.lock.acquire(timeout=0.001)
                self.acquired = True
                self._write_pid()
                if shown_waiting_msg:
                    console.print("[green]✓ Lock acquired[/green]")
                return
            except FileLockTimeout:
                pid_info = self._read_pid()
                holder = f" (PID: {pid_info})" if pid_info else ""

                if time.time() - start_time >= timeout:
                    raise LockTimeout(f"Timed out waiting for another claude-profiles operation{holder}")

                if not shown_waiting_msg:
                    console.print(f"[yellow]Waiting for another claude-profiles operation to complete{holder}...[/yellow]")
                    shown_waiting_msg = True

                time.sleep(poll_interval)

    def _write_pid(self):
        try:
            fd = os.open(self.pid_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w") as handle:
                handle.write(f"{os.getpid()}\n")
        except OSError:
            pass

    def _read_pid(self) -> Optional[str]:
        """Read PID from lock file for diagnostics."""
        try:
            return self.pid_path.read_text().strip() or None
        except OSError:
            return None

    def release(self):
        if self.acquired:
            self.lock.release()
            self.acquired = False
            with contextlib.suppress(FileNotFoundError, OSError):
                self.pid_path.unlink()

    def __enter__(self) -> ToolLock:
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False

