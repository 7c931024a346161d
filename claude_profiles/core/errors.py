"""Domain-specific exceptions and advisories for claude_profiles."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional


class ProfilesError(Exception):
   """Base exception for all claude_profiles domain errors."""

   hint: Optional[str] = None


class ProfileNotFound(ProfilesError):
   """No stored credential record exists for the requested profile."""

   def __init__(self, name: str, available: Iterable[str] = ()):
      self.name = name
      self.available = list(available)
      super().__init__(f"Profile not found: {name}")

   @property
   def hint(self) -> str:
      if self.available:
         return f"Available profiles: {', '.join(self.available)}"
      return "No profiles saved yet. Run 'claude-profiles create <name>'"


class NoLiveCredentials(ProfilesError):
   """The host application's credential file is missing or unreadable."""

   hint = "Log in with 'claude' first, then run 'claude-profiles create <name>'"


class MalformedCredentialFile(ProfilesError):
   """Credential file exists but does not hold a JSON object."""

   def __init__(self, path: Path, reason: str = ""):
      self.path = path
      detail = f": {reason}" if reason else ""
      super().__init__(f"Malformed credential file {path}{detail}")


class InvalidProfileName(ProfilesError):
   """Profile name is not filesystem-safe or collides with a reserved name."""

   hint = "Use letters, digits, '.', '_' or '-', not ending in '-home'"


class SwitchAborted(ProfilesError):
   """User declined to switch to a profile with an expired token."""

   def __init__(self, name: str):
      self.name = name
      super().__init__(f"Switch to '{name}' cancelled")

   @property
   def hint(self) -> str:
      return f"Run 'claude-profiles refresh {self.name}' or re-run with --yes"


class TokenRefreshFailed(ProfilesError):
   """OAuth refresh did not return a usable token."""

   hint = "Log in again with 'claude' and re-run 'claude-profiles create <name>'"


class LaunchFailed(ProfilesError):
   """The isolated session process could not be started."""

   hint = "Set CLAUDE_PROFILES_LAUNCH_CMD to the command that starts Claude Code"


class LockTimeout(ProfilesError):
   """Another claude-profiles invocation holds the tool lock."""

   hint = "Wait for the other claude-profiles command to finish"


class Advisory:
   """Non-fatal condition reported alongside a successful operation."""

   def __init__(self, message: str, hint: Optional[str] = None):
      self.message = message
      self.hint = hint

   def __str__(self) -> str:
      return self.message

   def __repr__(self) -> str:
      return f"{type(self).__name__}({self.message!r})"


class ExpiredTokenWarning(Advisory):
   """Target profile's access token has expired."""


class SaveBackSkipped(Advisory):
   """Live credentials were not copied back onto the current profile."""


class MalformedCredentialWarning(Advisory):
   """A credential file could not be parsed where a comparison needed it."""


class ConcurrentModificationWarning(Advisory):
   """Live file changed between the switch copy and its verification."""


class SharedAccountWarning(Advisory):
   """Another profile already holds the same refresh-token identity."""


class HostSessionsRunning(Advisory):
   """Host application processes are running against the shared file."""
