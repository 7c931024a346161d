"""Isolated session command."""

from __future__ import annotations

import sys

import click
from rich.panel import Panel

from ...core.errors import ProfilesError
from ...infrastructure.factory import ServiceFactory
from ..console import console
from ..renderers import print_error, print_io_error


@click.command()
@click.argument("name")
@click.option("--here", is_flag=True, help="Run in this terminal instead of spawning a new process")
@click.pass_obj
def launch(factory: ServiceFactory, name: str, here: bool):
   """Start Claude Code as profile NAME in its own sandboxed HOME.

   Launched sessions never touch the shared ~/.claude/.credentials.json,
   so several accounts can run at once without racing each other.
   """
   launcher = factory.get_launcher()

   try:
      if here:
         launcher.exec_here(name)
         return
      result = launcher.launch(name)
   except ProfilesError as exc:
      print_error(exc)
      sys.exit(1)
   except OSError as exc:
      print_io_error(exc)
      sys.exit(1)

   console.print(
      Panel(
         f"[green]✓[/green] Launched profile [bold]{result.name}[/bold]\n\n"
         f"PID: {result.pid if result.pid is not None else '[dim]--[/dim]'}\n"
         f"Home: {result.home}\n"
         f"Settings: {'copied' if result.settings_copied else '[dim]none[/dim]'}",
         border_style="green",
      )
   )
