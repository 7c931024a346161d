"""Token expiry evaluation on epoch-millisecond timestamps."""

from __future__ import annotations

from typing import Optional

MS_PER_HOUR = 3_600_000


def is_expired(expires_at_ms: int, now_ms: int) -> bool:
   """Expired strictly after the expiry instant; equality is still valid."""
   return now_ms > expires_at_ms


def hours_remaining(expires_at_ms: int, now_ms: int) -> float:
   """Signed hours until expiry, rounded to one decimal. Negative once expired."""
   return round((expires_at_ms - now_ms) / MS_PER_HOUR, 1)


def describe_expiry(expires_at_ms: Optional[int], now_ms: int) -> str:
   """Short human annotation: 'expires in 4.2h', 'expired 1.5h ago', 'expiry unknown'."""
   if expires_at_ms is None:
      return "expiry unknown"
   hours = hours_remaining(expires_at_ms, now_ms)
   if is_expired(expires_at_ms, now_ms):
      return f"expired {abs(hours):.1f}h ago"
   return f"expires in {hours:.1f}h"
