"""Core domain models for claude_profiles."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..constants import IDENTITY_SUFFIX_LEN
from .errors import Advisory

OAUTH_KEY = "claudeAiOauth"


class SubscriptionTier(str, Enum):
   MAX = "max"
   TEAM = "team"
   PRO = "pro"
   FREE = "free"
   UNKNOWN = "unknown"

   @classmethod
   def parse(cls, value: Any) -> SubscriptionTier:
      if isinstance(value, str):
         try:
            return cls(value.strip().lower())
         except ValueError:
            pass
      return cls.UNKNOWN


@dataclass
class CredentialRecord:
   """
   Typed view of a Claude Code credential file.

   The host application nests OAuth fields under ``claudeAiOauth``; older
   or hand-made files carry them at top level. Fields this tool does not
   model are kept in ``extra`` (inside the OAuth block) and ``envelope``
   (sibling top-level keys) so that ``to_dict`` round-trips the file.
   """

   access_token: Optional[str] = None
   refresh_token: Optional[str] = None
   expires_at: Optional[int] = None
   subscription_type: SubscriptionTier = SubscriptionTier.UNKNOWN
   rate_limit_tier: Optional[str] = None
   extra: Dict[str, Any] = field(default_factory=dict)
   envelope: Optional[Dict[str, Any]] = None

   # subscriptionType stays in ``extra`` so unrecognised tiers survive verbatim
   _KNOWN = ("accessToken", "refreshToken", "expiresAt", "rateLimitTier")

   @classmethod
   def from_dict(cls, data: Dict[str, Any]) -> CredentialRecord:
      """Build a record from parsed credential JSON."""
      envelope: Optional[Dict[str, Any]] = None
      oauth = data
      if isinstance(data.get(OAUTH_KEY), dict):
         oauth = data[OAUTH_KEY]
         envelope = {k: copy.deepcopy(v) for k, v in data.items() if k != OAUTH_KEY}

      extra = {k: copy.deepcopy(v) for k, v in oauth.items() if k not in cls._KNOWN}

      expires_at = oauth.get("expiresAt")
      if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
         if "expiresAt" in oauth:
            extra["expiresAt"] = copy.deepcopy(expires_at)
         expires_at = None
      else:
         expires_at = int(expires_at)

      return cls(
         access_token=oauth.get("accessToken"),
         refresh_token=oauth.get("refreshToken"),
         expires_at=expires_at,
         subscription_type=SubscriptionTier.parse(oauth.get("subscriptionType")),
         rate_limit_tier=oauth.get("rateLimitTier"),
         extra=extra,
         envelope=envelope,
      )

   def to_dict(self) -> Dict[str, Any]:
      """Serialize back to the host application's layout."""
      oauth: Dict[str, Any] = copy.deepcopy(self.extra)
      if self.access_token is not None:
         oauth["accessToken"] = self.access_token
      if self.refresh_token is not None:
         oauth["refreshToken"] = self.refresh_token
      if self.expires_at is not None:
         oauth["expiresAt"] = self.expires_at
      if self.rate_limit_tier is not None:
         oauth["rateLimitTier"] = self.rate_limit_tier

      if self.envelope is None:
         return oauth
      data = copy.deepcopy(self.envelope)
      data[OAUTH_KEY] = oauth
      return data

   @property
   def identity(self) -> Optional[str]:
      """Trailing refresh-token characters; a display hint, not a secret check."""
      if not self.refresh_token:
         return None
      return self.refresh_token[-IDENTITY_SUFFIX_LEN:]

   def same_account(self, other: Optional[CredentialRecord]) -> bool:
      """True when both records carry the same non-empty refresh token."""
      if other is None or not self.refresh_token or not other.refresh_token:
         return False
      return self.refresh_token == other.refresh_token


@dataclass
class Profile:
   """A named credential snapshot under the profiles root."""

   name: str
   directory: Path
   record: CredentialRecord
   is_active: bool = False


@dataclass
class ProfileSummary:
   """Listing row: profile plus evaluated expiry state."""

   name: str
   is_active: bool
   subscription_type: SubscriptionTier
   identity: Optional[str]
   expires_at: Optional[int]
   hours_remaining: Optional[float]
   is_expired: bool

   def to_dict(self) -> Dict[str, Any]:
      return {
         "name": self.name,
         "active": self.is_active,
         "subscription": self.subscription_type.value,
         "identity": self.identity,
         "expires_at": self.expires_at,
         "hours_remaining": self.hours_remaining,
         "expired": self.is_expired,
      }


@dataclass
class SwitchResult:
   """Outcome of a switch, including every advisory raised on the way."""

   target: str
   previous: Optional[str]
   saved_back: bool = False
   verified: bool = False
   hours_remaining: Optional[float] = None
   is_expired: bool = False
   advisories: List[Advisory] = field(default_factory=list)


@dataclass
class VerifyReport:
   """Diagnostic comparison of the live file against the active snapshot."""

   active: Optional[str]
   live_present: bool
   live_fingerprint: Optional[str] = None
   live_identity: Optional[str] = None
   live_hours_remaining: Optional[float] = None
   live_expired: bool = False
   snapshot_fingerprint: Optional[str] = None
   snapshot_identity: Optional[str] = None
   snapshot_hours_remaining: Optional[float] = None
   snapshot_expired: bool = False
   matching_profiles: List[str] = field(default_factory=list)
   advisories: List[Advisory] = field(default_factory=list)

   @property
   def content_matches(self) -> bool:
      return self.live_fingerprint is not None and self.live_fingerprint == self.snapshot_fingerprint

   @property
   def identity_matches(self) -> bool:
      return self.live_identity is not None and self.live_identity == self.snapshot_identity

   def to_dict(self) -> Dict[str, Any]:
      return {
         "active": self.active,
         "live_present": self.live_present,
         "live_fingerprint": self.live_fingerprint,
         "live_identity": self.live_identity,
         "live_hours_remaining": self.live_hours_remaining,
         "live_expired": self.live_expired,
         "snapshot_fingerprint": self.snapshot_fingerprint,
         "snapshot_identity": self.snapshot_identity,
         "snapshot_hours_remaining": self.snapshot_hours_remaining,
         "snapshot_expired": self.snapshot_expired,
         "content_matches": self.content_matches,
         "identity_matches": self.identity_matches,
         "matching_profiles": self.matching_profiles,
         "advisories": [str(a) for a in self.advisories],
      }


@dataclass
class RefreshResult:
   name: str
   record: CredentialRecord
   live_updated: bool = False
   advisories: List[Advisory] = field(default_factory=list)


@dataclass
class LaunchResult:
   """Spawned isolated session details."""

   name: str
   home: Path
   pid: Optional[int]
   command: List[str]
   settings_copied: bool = False
