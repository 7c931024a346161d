"""Runtime configuration, resolved once from the environment."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional, Tuple

from .constants import (
    CLAUDE_DIRNAME,
    CREDENTIALS_FILENAME,
    DEFAULT_LAUNCH_COMMAND,
    DEFAULT_PROFILES_DIRNAME,
    LAUNCH_CMD_ENV_VAR,
    ROOT_ENV_VAR,
    SESSION_ENV_VAR,
    SETTINGS_FILENAME,
)


@dataclass(frozen=True)
class ProfilesConfig:
    """Paths and settings shared by every component."""

    home: Path
    profiles_root: Path
    launch_command: Tuple[str, ...] = DEFAULT_LAUNCH_COMMAND
    session_env_var: str = SESSION_ENV_VAR
    claude_dir: Path = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "claude_dir", self.home / CLAUDE_DIRNAME)

    @property
    def live_credentials_path(self) -> Path:
        return self.claude_dir / CREDENTIALS_FILENAME

    @property
    def settings_path(self) -> Path:
        return self.claude_dir / SETTINGS_FILENAME

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> ProfilesConfig:
        """Build configuration from environment variables (defaults to os.environ)."""
        env = os.environ if environ is None else environ

        home_value = env.get("HOME") or env.get("USERPROFILE")
        home = Path(home_value) if home_value else Path.home()

        root_value = env.get(ROOT_ENV_VAR)
        profiles_root = Path(root_value).expanduser() if root_value else home / DEFAULT_PROFILES_DIRNAME

        launch_value = env.get(LAUNCH_CMD_ENV_VAR, "").strip()
        launch_command = tuple(shlex.split(launch_value)) if launch_value else DEFAULT_LAUNCH_COMMAND

        return cls(home=home, profiles_root=profiles_root, launch_command=launch_command)

    def with_root(self, profiles_root: Path) -> ProfilesConfig:
        return replace(self, profiles_root=Path(profiles_root).expanduser())
