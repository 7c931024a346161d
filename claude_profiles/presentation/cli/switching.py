"""Profile switching command."""

from __future__ import annotations

import json
import sys

import click
from rich.panel import Panel

from ...core.errors import HostSessionsRunning, ProfilesError
from ...infrastructure.factory import ServiceFactory
from ..console import console
from ..renderers import format_hours, print_advisories, print_error, print_io_error


def _confirm_expired(message: str) -> bool:
   console.print(f"[yellow]Warning: {message}[/yellow]")
   try:
      return click.confirm("Switch anyway?", default=False, err=True)
   except click.Abort:
      return False


@click.command()
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Switch even if the stored token has expired")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def switch(factory: ServiceFactory, name: str, yes: bool, output_json: bool):
   """Make NAME the active profile by rewriting the live credential file."""
   service = factory.get_switching_service()
   confirm = (lambda _message: True) if yes else _confirm_expired

   try:
      with factory.lock():
         result = service.switch(name, confirm=confirm)
   except ProfilesError as exc:
      if output_json:
         print(json.dumps({"error": str(exc)}))
      else:
         print_error(exc)
      sys.exit(1)
   except OSError as exc:
      print_io_error(exc)
      sys.exit(1)

   host_pids = factory.find_host_sessions()
   if host_pids:
      result.advisories.append(
         HostSessionsRunning(
            f"{len(host_pids)} Claude Code session(s) running (PID {', '.join(map(str, host_pids))}) "
            "share the credential file this switch rewrote",
            hint="Restart them to pick up the new account, or use 'claude-profiles launch <name>' "
            "to run accounts side by side",
         )
      )

   if output_json:
      print(
         json.dumps(
            {
               "profile": result.target,
               "previous": result.previous,
               "saved_back": result.saved_back,
               "verified": result.verified,
               "hours_remaining": result.hours_remaining,
               "expired": result.is_expired,
               "warnings": [str(a) for a in result.advisories],
            },
            indent=2,
         )
      )
      return

   lines = [
      f"[green]Switched to profile[/green] [bold]{result.target}[/bold]\n",
      f"Previous: {result.previous or '[dim]none[/dim]'}",
      f"Token: {format_hours(result.hours_remaining, result.is_expired)}",
   ]
   if result.saved_back:
      lines.append(f"[green]✓[/green] Saved refreshed credentials back to '{result.previous}'")

   console.print(Panel("\n".join(lines), border_style="green" if result.verified else "yellow"))
   print_advisories(result.advisories)
