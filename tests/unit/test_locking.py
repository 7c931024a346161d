"""Unit tests for the tool lock."""

import pytest

from claude_profiles.core.errors import LockTimeout
from claude_profiles.locking import ToolLock


def test_acquire_and_release_writes_pid(tmp_path):
    lock = ToolLock(tmp_path / "root" / ".lock")

    with lock:
        assert lock.acquired is True
        assert lock.pid_path.read_text().strip().isdigit()

    assert lock.acquired is False
    assert not lock.pid_path.exists()


def test_second_holder_times_out(tmp_path):
    path = tmp_path / ".lock"
    with ToolLock(path):
        with pytest.raises(LockTimeout, match="PID"):
            ToolLock(path).acquire(timeout=0.2, poll_interval=0.05)


def test_reacquire_after_release(tmp_path):
    path = tmp_path / ".lock"
    with ToolLock(path):
        pass
    with ToolLock(path) as lock:
        assert lock.acquired
