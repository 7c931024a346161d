"""Unit tests for host-session detection."""

import os
from unittest import mock

import psutil

from claude_profiles.infrastructure.processes import find_host_sessions


def _proc(pid, name, cmdline=(), environ=None, denied=False):
    proc = mock.Mock(pid=pid)
    proc.name.return_value = name
    proc.cmdline.return_value = list(cmdline)
    if denied:
        proc.environ.side_effect = psutil.AccessDenied(pid)
    else:
        proc.environ.return_value = environ or {}
    return proc


def test_finds_native_and_node_sessions():
    procs = [
        _proc(10, "claude"),
        _proc(11, "node", ["/usr/bin/node", "/usr/lib/node_modules/.bin/claude"]),
        _proc(12, "bash", ["bash"]),
        _proc(13, "Claude.exe"),
    ]
    with mock.patch("claude_profiles.infrastructure.processes.psutil.process_iter", return_value=procs):
        assert find_host_sessions() == [10, 11, 13]


def test_skips_isolated_sessions_and_self():
    procs = [
        _proc(20, "claude", environ={"CLAUDE_PROFILE": "work"}),
        _proc(21, "claude", denied=True),
        _proc(os.getpid(), "claude"),
    ]
    with mock.patch("claude_profiles.infrastructure.processes.psutil.process_iter", return_value=procs):
        assert find_host_sessions(isolated_env_var="CLAUDE_PROFILE") == [21]


def test_vanished_process_ignored():
    gone = _proc(30, "claude")
    gone.name.side_effect = psutil.NoSuchProcess(30)
    with mock.patch("claude_profiles.infrastructure.processes.psutil.process_iter", return_value=[gone]):
        assert find_host_sessions() == []
