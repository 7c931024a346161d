"""Isolated Claude Code sessions with a per-profile HOME."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Tuple

from .config import ProfilesConfig
from .constants import CLAUDE_DIRNAME, CREDENTIALS_FILENAME, SETTINGS_FILENAME
from .core.errors import LaunchFailed
from .core.models import LaunchResult
from .data.credential_store import CredentialStore
from .data.registry import ProfileRegistry
from .utils import atomic_copy, ensure_private_dir


class SessionLauncher:
    """
    Starts Claude Code against a private copy of a profile's credentials.

    Each profile gets a persistent sandbox HOME (``<root>/<name>-home``)
    created on first launch and reused afterwards. The shared live
    credential file is never read or written, so any number of launched
    sessions can run side by side.
    """

    def __init__(
        self,
        config: ProfilesConfig,
        registry: ProfileRegistry,
        credential_store: CredentialStore,
        spawner: Optional[Callable[..., subprocess.Popen]] = None,
    ):
        self.config = config
        self.registry = registry
        self.credential_store = credential_store
        self.spawner = spawner or subprocess.Popen

    def prepare(self, name: str) -> Tuple[Path, bool]:
        """
        Materialize the sandbox for ``name``.

        Returns:
           (sandbox home, whether settings.json was copied)

        Raises:
           ProfileNotFound: If the profile has no stored credentials
        """
        self.registry.get_record(name)
        snapshot = self.registry.snapshot_path(name)

        home = self.registry.sandbox_home(name)
        sandbox_claude_dir = home / CLAUDE_DIRNAME
        ensure_private_dir(home)
        ensure_private_dir(sandbox_claude_dir)

        self.credential_store.copy(snapshot, self.registry.mirror_path(name))
        self.credential_store.copy(snapshot, sandbox_claude_dir / CREDENTIALS_FILENAME)

        settings_copied = False
        if self.config.settings_path.is_file():
            atomic_copy(self.config.settings_path, sandbox_claude_dir / SETTINGS_FILENAME)
            settings_copied = True

        return home, settings_copied

    def build_env(self, name: str, home: Path, base_env: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        env = dict(os.environ if base_env is None else base_env)
        resolved = str(home.resolve())
        env["HOME"] = resolved
        env["USERPROFILE"] = resolved
        env[self.config.session_env_var] = name
        # An inherited config dir would point the session back at the shared file
        env.pop("CLAUDE_CONFIG_DIR", None)
        return env

    def _spawn_kwargs(self) -> Dict:
        if sys.platform == "win32":
            return {"creationflags": getattr(subprocess, "CREATE_NEW_CONSOLE", 0)}
        return {"start_new_session": True}

    def launch(self, name: str) -> LaunchResult:
        """
        Spawn an isolated session and return without waiting for it.

        Raises:
           ProfileNotFound: If the profile has no stored credentials
           LaunchFailed: If the launch command cannot be started
        """
        home, settings_copied = self.prepare(name)
        env = self.build_env(name, home)
        command = list(self.config.launch_command)

        try:
            proc = self.spawner(command, env=env, **self._spawn_kwargs())
        except OSError as exc:
            raise LaunchFailed(f"Could not start '{command[0]}': {exc}")

        return LaunchResult(
            name=name,
            home=home,
            pid=getattr(proc, "pid", None),
            command=command,
            settings_copied=settings_copied,
        )

    def exec_here(self, name: str):
        """Replace the current process with an isolated session."""
        home, _ = self.prepare(name)
        env = self.build_env(name, home)
        command = list(self.config.launch_command)
        try:
            os.execvpe(command[0], command, env)
        except OSError as exc:
            raise LaunchFailed(f"Could not start '{command[0]}': {exc}")
