"""Active profile switching."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional

from ..core.errors import (
   Advisory,
   ConcurrentModificationWarning,
   ExpiredTokenWarning,
   MalformedCredentialFile,
   MalformedCredentialWarning,
   SaveBackSkipped,
   SwitchAborted,
)
from ..core.expiry import hours_remaining, is_expired
from ..core.models import CredentialRecord, SwitchResult
from ..data.credential_store import CredentialStore
from ..data.registry import ProfileRegistry
from ..utils import now_ms as wall_clock_ms

ConfirmCallback = Callable[[str], bool]


class SwitchingService:
   """
   Moves the live credential file from one profile to another.

   Responsibilities:
   - Expired-token confirmation gate
   - Guarded save-back of in-place token refreshes
   - Live file overwrite and active marker update
   - Post-switch verification against external writers

   Nothing here can lock the live file against the host application, so
   every anomaly after the target lookup is reported as an advisory.
   """

   def __init__(self, registry: ProfileRegistry, credential_store: CredentialStore, live_path: Path):
      self.registry = registry
      self.credential_store = credential_store
      self.live_path = live_path

   def switch(
      self, target: str, confirm: Optional[ConfirmCallback] = None, now_ms: Optional[int] = None
   ) -> SwitchResult:
      """
      Make ``target`` the active profile.

      Args:
         target: profile name
         confirm: asked before switching to an expired token; None means decline
         now_ms: evaluation time, defaults to the wall clock

      Raises:
         ProfileNotFound: If ``target`` has no stored credential record
         SwitchAborted: If the expired-token gate is declined
      """
      now = wall_clock_ms() if now_ms is None else now_ms
      target_record = self.registry.get_record(target)
      result = SwitchResult(target=target, previous=self.registry.get_active())

      expires_at = self.credential_store.extract_expiry(target_record)
      if expires_at is not None:
         result.hours_remaining = hours_remaining(expires_at, now)
         result.is_expired = is_expired(expires_at, now)
         if result.is_expired:
            warning = ExpiredTokenWarning(
               f"Profile '{target}' token expired {abs(result.hours_remaining):.1f}h ago",
               hint=f"Run 'claude-profiles refresh {target}' or log in again under this profile",
            )
            if confirm is None or not confirm(str(warning)):
               raise SwitchAborted(target)
            result.advisories.append(warning)

      result.saved_back = self._save_back(result.previous, result.advisories)

      self.credential_store.copy(self.registry.snapshot_path(target), self.live_path)
      self.registry.set_active(target)

      result.verified = self._verify(target, result.advisories)
      return result

   def _load_for_comparison(self, path: Path, advisories: List[Advisory]) -> Optional[CredentialRecord]:
      try:
         return self.credential_store.load(path)
      except MalformedCredentialFile as exc:
         advisories.append(MalformedCredentialWarning(str(exc)))
         return None

   def _save_back(self, current: Optional[str], advisories: List[Advisory]) -> bool:
      """Copy the live file onto the current profile only if it is the same account."""
      if not self.live_path.exists():
         if current is not None:
            advisories.append(
               SaveBackSkipped(f"No live credential file; nothing saved back to '{current}'")
            )
         return False

      if current is None:
         advisories.append(
            SaveBackSkipped(
               "No active profile recorded; live credentials were not saved",
               hint="Run 'claude-profiles create <name>' first to keep them",
            )
         )
         return False

      snapshot_path = self.registry.snapshot_path(current)
      if not snapshot_path.exists():
         advisories.append(
            SaveBackSkipped(f"Active profile '{current}' no longer exists; live credentials were not saved")
         )
         return False

      live = self._load_for_comparison(self.live_path, advisories)
      stored = self._load_for_comparison(snapshot_path, advisories)

      if live is None or stored is None:
         advisories.append(SaveBackSkipped(f"Could not compare live credentials with profile '{current}'; save-back skipped"))
         return False

      if not live.same_account(stored):
         advisories.append(
            SaveBackSkipped(
               f"Live credentials (…{live.identity or '--------'}) do not belong to profile "
               f"'{current}' (…{stored.identity or '--------'}); its snapshot was left untouched",
               hint="Run 'claude-profiles create <name>' to keep the live login as its own profile",
            )
         )
         return False

      if self.credential_store.fingerprint(self.live_path) == self.credential_store.fingerprint(snapshot_path):
         return False

      self.registry.save_snapshot(current, self.live_path)
      return True

   def _verify(self, target: str, advisories: List[Advisory]) -> bool:
      """Re-read the live file and confirm it still holds the target snapshot."""
      snapshot_path = self.registry.snapshot_path(target)
      live_fp = self.credential_store.fingerprint(self.live_path)
      expected_fp = self.credential_store.fingerprint(snapshot_path)

      live = self.credential_store.read(self.live_path)
      expected = self.credential_store.read(snapshot_path)
      identity_ok = live is not None and expected is not None and live.refresh_token == expected.refresh_token

      if live_fp is not None and live_fp == expected_fp and identity_ok:
         return True

      advisories.append(
         ConcurrentModificationWarning(
            f"Live credential file changed during the switch (fingerprint {live_fp or 'missing'}, "
            f"expected {expected_fp})",
            hint=f"Close other Claude Code sessions and re-run 'claude-profiles switch {target}', "
            "or use 'claude-profiles launch' for concurrent accounts",
         )
      )
      return False
