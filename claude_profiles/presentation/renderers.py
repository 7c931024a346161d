"""Rich formatting helpers for claude_profiles presentation layer."""

from __future__ import annotations

from typing import Iterable, List, Optional

from rich import box
from rich.panel import Panel
from rich.table import Table

from ..core.errors import Advisory, ProfilesError
from ..core.models import ProfileSummary, SubscriptionTier, VerifyReport
from .console import console


def format_hours(hours: Optional[float], expired: bool = False) -> str:
   """Colour-coded expiry annotation."""
   if hours is None:
      return "[dim]--[/dim]"
   if expired:
      return f"[red]expired {abs(hours):.1f}h ago[/red]"
   if hours < 1:
      return f"[yellow]{hours:.1f}h left[/yellow]"
   return f"[green]{hours:.1f}h left[/green]"


def format_tier(tier: SubscriptionTier) -> str:
   color = {
      SubscriptionTier.MAX: "green",
      SubscriptionTier.TEAM: "cyan",
      SubscriptionTier.PRO: "blue",
   }.get(tier, "dim")
   return f"[{color}]{tier.value.capitalize()}[/{color}]"


def render_profiles_table(profiles: List[ProfileSummary]) -> Table:
   """Render profile listing as Rich table."""
   table = Table(title="Claude Code Profiles", box=box.ROUNDED)
   table.add_column("", justify="center")
   table.add_column("Profile", style="magenta")
   table.add_column("Type", justify="center")
   table.add_column("Identity", style="cyan")
   table.add_column("Token")

   for profile in profiles:
      table.add_row(
         "[green]●[/green]" if profile.is_active else "",
         f"[bold]{profile.name}[/bold]" if profile.is_active else profile.name,
         format_tier(profile.subscription_type),
         f"…{profile.identity}" if profile.identity else "[dim]--[/dim]",
         format_hours(profile.hours_remaining, profile.is_expired),
      )

   return table


def render_verify_panel(report: VerifyReport) -> Panel:
   """Render live vs. snapshot diagnostics."""

   def _mark(ok: bool) -> str:
      return "[green]✓[/green]" if ok else "[red]✗[/red]"

   lines = [f"Active profile: [bold]{report.active or 'none'}[/bold]", ""]

   if report.live_present:
      lines.append(
         f"Live file:   {report.live_fingerprint or '[red]unreadable[/red]'}  "
         f"…{report.live_identity or '--------'}  {format_hours(report.live_hours_remaining, report.live_expired)}"
      )
   else:
      lines.append("Live file:   [red]missing[/red]")

   if report.active is not None:
      lines.append(
         f"Snapshot:    {report.snapshot_fingerprint or '[red]unreadable[/red]'}  "
         f"…{report.snapshot_identity or '--------'}  {format_hours(report.snapshot_hours_remaining, report.snapshot_expired)}"
      )
      lines.append("")
      lines.append(f"{_mark(report.identity_matches)} Same account")
      lines.append(f"{_mark(report.content_matches)} Identical content")

   if report.matching_profiles:
      lines.append("")
      lines.append(f"Live login matches: {', '.join(report.matching_profiles)}")

   ok = report.active is not None and report.identity_matches
   return Panel("\n".join(lines), title="Credential Check", border_style="green" if ok else "yellow")


def print_advisories(advisories: Iterable[Advisory]):
   for advisory in advisories:
      console.print(f"[yellow]Warning: {advisory.message}[/yellow]")
      if advisory.hint:
         console.print(f"[yellow]→ {advisory.hint}[/yellow]")


def print_error(exc: ProfilesError):
   console.print(f"[red]Error: {exc}[/red]")
   if exc.hint:
      console.print(f"[yellow]→ {exc.hint}[/yellow]")


def print_io_error(exc: OSError):
   console.print(f"[red]Error: {exc}[/red]")
   console.print("[yellow]→ Check permissions and free space, then re-run the command[/yellow]")
