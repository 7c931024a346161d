"""Profile management service layer."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..core.errors import (
   Advisory,
   ExpiredTokenWarning,
   MalformedCredentialFile,
   MalformedCredentialWarning,
   NoLiveCredentials,
   SaveBackSkipped,
   SharedAccountWarning,
)
from ..core.expiry import hours_remaining, is_expired
from ..core.models import CredentialRecord, Profile, ProfileSummary, RefreshResult, VerifyReport
from ..data.credential_store import CredentialStore
from ..data.registry import ProfileRegistry, validate_profile_name
from ..infrastructure.oauth import OAuthClient
from ..utils import now_ms as wall_clock_ms


class ProfileService:
   """
   Orchestrates profile operations.

   Responsibilities:
   - Snapshot live credentials as a named profile
   - List/remove profiles and report the active one
   - Diagnose live file vs. active snapshot
   - Refresh a stored profile's OAuth token
   """

   def __init__(
      self,
      registry: ProfileRegistry,
      credential_store: CredentialStore,
      live_path: Path,
      oauth_client: Optional[OAuthClient] = None,
      clock: Callable[[], int] = wall_clock_ms,
   ):
      self.registry = registry
      self.credential_store = credential_store
      self.live_path = live_path
      self.oauth_client = oauth_client or OAuthClient(clock=clock)
      self.clock = clock

   def create(self, name: str) -> Tuple[Profile, bool, List[Advisory]]:
      """
      Save the live credentials as ``name`` and mark it active.

      Returns:
         (Profile, is_new, advisories) tuple

      Raises:
         InvalidProfileName: If ``name`` is not filesystem-safe
         NoLiveCredentials: If the live file is missing or malformed
      """
      validate_profile_name(name)

      try:
         live = self.credential_store.load(self.live_path)
      except MalformedCredentialFile as exc:
         raise NoLiveCredentials(f"Live credentials are unreadable: {exc}")
      if live is None:
         raise NoLiveCredentials(f"No credentials found at {self.live_path}")

      advisories: List[Advisory] = []
      for other in self.registry.list_profiles():
         if other == name:
            continue
         if live.same_account(self.credential_store.read(self.registry.snapshot_path(other))):
            advisories.append(
               SharedAccountWarning(
                  f"Profile '{other}' already holds this account (…{live.identity})",
                  hint=f"Run 'claude-profiles delete {other}' if it is a duplicate",
               )
            )

      is_new = not self.registry.exists(name)
      self.registry.save_snapshot(name, self.live_path)
      self.registry.set_active(name)

      return self.registry.get(name), is_new, advisories

   def list_profiles(self, now_ms: Optional[int] = None) -> List[ProfileSummary]:
      """All saved profiles with expiry evaluated at ``now_ms``."""
      now = self.clock() if now_ms is None else now_ms
      active = self.registry.get_active()
      summaries = []

      for name in self.registry.list_profiles():
         record = self.credential_store.read(self.registry.snapshot_path(name))
         if record is None:
            continue
         expires_at = self.credential_store.extract_expiry(record)
         summaries.append(
            ProfileSummary(
               name=name,
               is_active=name == active,
               subscription_type=record.subscription_type,
               identity=record.identity,
               expires_at=expires_at,
               hours_remaining=hours_remaining(expires_at, now) if expires_at is not None else None,
               is_expired=expires_at is not None and is_expired(expires_at, now),
            )
         )

      return summaries

   def current(self) -> Optional[str]:
      return self.registry.get_active()

   def delete(self, name: str, purge_home: bool = False) -> bool:
      """
      Remove a profile.

      Returns True when the deleted profile was active (marker cleared).

      Raises:
         ProfileNotFound: If no such profile exists
      """
      return self.registry.remove(name, purge_home=purge_home)

   def verify(self, now_ms: Optional[int] = None) -> VerifyReport:
      """Compare the live credential file with the active profile snapshot."""
      now = self.clock() if now_ms is None else now_ms
      active = self.registry.get_active()
      report = VerifyReport(active=active, live_present=self.live_path.exists())

      live = self._load(self.live_path, report.advisories)
      if not report.live_present and active is not None:
         report.advisories.append(
            Advisory(
               f"No live credential file at {self.live_path}",
               hint=f"Run 'claude-profiles switch {active}' to restore it",
            )
         )
      if live is not None:
         report.live_fingerprint = self.credential_store.fingerprint(self.live_path)
         report.live_identity = live.identity
         if live.expires_at is not None:
            report.live_hours_remaining = hours_remaining(live.expires_at, now)
            report.live_expired = is_expired(live.expires_at, now)
            if report.live_expired:
               report.advisories.append(
                  ExpiredTokenWarning(
                     f"Live access token expired {abs(report.live_hours_remaining):.1f}h ago",
                     hint="Start Claude Code once to let it refresh, or run 'claude-profiles refresh <name>'",
                  )
               )
         report.matching_profiles = [
            name
            for name in self.registry.list_profiles()
            if live.same_account(self.credential_store.read(self.registry.snapshot_path(name)))
         ]

      if active is None:
         return report

      snapshot_path = self.registry.snapshot_path(active)
      stored = self._load(snapshot_path, report.advisories)
      if stored is None:
         report.advisories.append(
            SaveBackSkipped(
               f"Active profile '{active}' has no readable snapshot",
               hint=f"Run 'claude-profiles create {active}' to save the live login again",
            )
         )
         return report

      report.snapshot_fingerprint = self.credential_store.fingerprint(snapshot_path)
      report.snapshot_identity = stored.identity
      if stored.expires_at is not None:
         report.snapshot_hours_remaining = hours_remaining(stored.expires_at, now)
         report.snapshot_expired = is_expired(stored.expires_at, now)

      if live is not None and not live.same_account(stored):
         report.advisories.append(
            SaveBackSkipped(
               f"Live credentials do not belong to active profile '{active}'; "
               "the next switch will not save them back",
               hint="Run 'claude-profiles create <name>' to keep the live login",
            )
         )
      elif live is not None and not report.content_matches:
         report.advisories.append(
            Advisory(f"Live credentials were refreshed since '{active}' was saved; the next switch saves them back")
         )

      return report

   def refresh(self, name: str) -> RefreshResult:
      """
      Refresh a stored profile's OAuth token.

      The live file is only updated when ``name`` is active and the live
      file still carries the pre-refresh refresh token.

      Raises:
         ProfileNotFound: If no such profile exists
         TokenRefreshFailed: If the OAuth endpoint does not issue a token
      """
      previous = self.registry.get_record(name)
      refreshed = self.oauth_client.refresh(previous)
      self.registry.write_record(name, refreshed)

      result = RefreshResult(name=name, record=refreshed)
      if self.registry.get_active() != name:
         return result

      live = self._load(self.live_path, result.advisories)
      if live is not None and live.same_account(previous):
         self.credential_store.copy(self.registry.snapshot_path(name), self.live_path)
         result.live_updated = True
      elif live is not None:
         result.advisories.append(
            SaveBackSkipped(
               f"Live credentials do not belong to '{name}'; live file left unchanged",
               hint=f"Run 'claude-profiles switch {name}' to use the refreshed token",
            )
         )

      return result

   def _load(self, path: Path, advisories: List[Advisory]) -> Optional[CredentialRecord]:
      try:
         return self.credential_store.load(path)
      except MalformedCredentialFile as exc:
         advisories.append(MalformedCredentialWarning(str(exc)))
         return None
