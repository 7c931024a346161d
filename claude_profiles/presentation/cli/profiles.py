"""Profile management commands."""

from __future__ import annotations

import json
import sys

import click
from rich.panel import Panel

from ...core.errors import ProfilesError
from ...core.expiry import describe_expiry
from ...infrastructure.factory import ServiceFactory
from ..console import console
from ..renderers import (
   format_tier,
   print_advisories,
   print_error,
   print_io_error,
   render_profiles_table,
   render_verify_panel,
)


@click.command()
@click.argument("name")
@click.pass_obj
def create(factory: ServiceFactory, name: str):
   """Save the current Claude Code login as profile NAME and make it active."""
   service = factory.get_profile_service()

   try:
      with factory.lock():
         profile, is_new, advisories = service.create(name)
   except ProfilesError as exc:
      print_error(exc)
      sys.exit(1)
   except OSError as exc:
      print_io_error(exc)
      sys.exit(1)

   console.print(
      Panel(
         f"[green]✓[/green] Profile {'saved' if is_new else 'updated'}\n\n"
         f"Name: [bold]{profile.name}[/bold]\n"
         f"Type: {format_tier(profile.record.subscription_type)}\n"
         f"Identity: …{profile.record.identity or '--------'}",
         title="Profile Created" if is_new else "Profile Updated",
         border_style="green",
      )
   )
   print_advisories(advisories)


@click.command(name="list")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_profiles_cmd(factory: ServiceFactory, output_json: bool):
   """List saved profiles with the active marker and token expiry."""
   try:
      profiles = factory.get_profile_service().list_profiles()
   except OSError as exc:
      print_io_error(exc)
      sys.exit(1)

   if output_json:
      print(json.dumps([p.to_dict() for p in profiles], indent=2))
      return

   if not profiles:
      console.print("[yellow]No profiles found. Save one with 'claude-profiles create <name>'[/yellow]")
      return

   console.print(render_profiles_table(profiles))


@click.command()
@click.pass_obj
def current(factory: ServiceFactory):
   """Print the active profile name, or 'none'."""
   print(factory.get_profile_service().current() or "none")


@click.command()
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def verify(factory: ServiceFactory, output_json: bool):
   """Compare the live credential file with the active profile snapshot."""
   try:
      report = factory.get_profile_service().verify()
   except OSError as exc:
      print_io_error(exc)
      sys.exit(1)

   if output_json:
      print(json.dumps(report.to_dict(), indent=2))
      return

   console.print(render_verify_panel(report))
   print_advisories(report.advisories)


@click.command()
@click.argument("name")
@click.option("--purge-home", is_flag=True, help="Also remove the profile's launch sandbox")
@click.pass_obj
def delete(factory: ServiceFactory, name: str, purge_home: bool):
   """Remove profile NAME; clears the active marker if it was active."""
   service = factory.get_profile_service()

   try:
      with factory.lock():
         was_active = service.delete(name, purge_home=purge_home)
   except ProfilesError as exc:
      print_error(exc)
      sys.exit(1)
   except OSError as exc:
      print_io_error(exc)
      sys.exit(1)

   console.print(f"[green]✓[/green] Deleted profile [bold]{name}[/bold]")
   if was_active:
      console.print("[yellow]It was the active profile; no profile is active now[/yellow]")
      console.print("[yellow]→ Run 'claude-profiles switch <name>' to pick another[/yellow]")


@click.command()
@click.argument("name")
@click.pass_obj
def refresh(factory: ServiceFactory, name: str):
   """Refresh the OAuth token stored in profile NAME."""
   service = factory.get_profile_service()

   try:
      with factory.lock():
         result = service.refresh(name)
   except ProfilesError as exc:
      print_error(exc)
      sys.exit(1)
   except OSError as exc:
      print_io_error(exc)
      sys.exit(1)

   console.print(f"[green]✓[/green] {name} - {describe_expiry(result.record.expires_at, service.clock())}")
   if result.live_updated:
      console.print("[green]✓[/green] Live credential file updated")
   print_advisories(result.advisories)
