"""Command-line interface for claude-profiles."""

import sys
from pathlib import Path
from typing import Optional

import click

from ... import __version__
from ...config import ProfilesConfig
from ...infrastructure.factory import ServiceFactory
from ..console import console
from .launch import launch
from .profiles import create, current, delete, list_profiles_cmd, refresh, verify
from .switching import switch


@click.group()
@click.option(
   "--root",
   type=click.Path(file_okay=False, path_type=Path),
   help="Profiles directory (default: $CLAUDE_PROFILES_DIR or ~/.claude-profiles)",
)
@click.version_option(__version__, prog_name="claude-profiles")
@click.pass_context
def cli(ctx: click.Context, root: Optional[Path]):
   """Claude Code Profiles - Save, switch and launch multiple Claude Code logins.

   'switch' rewrites the shared ~/.claude/.credentials.json and races with
   running sessions; 'launch' gives each profile its own HOME instead.
   """
   config = ProfilesConfig.from_environ()
   if root is not None:
      config = config.with_root(root)
   ctx.obj = ServiceFactory(config)


# Register commands
cli.add_command(create)
cli.add_command(switch)
cli.add_command(list_profiles_cmd)
cli.add_command(current)
cli.add_command(verify)
cli.add_command(delete)
cli.add_command(launch)
cli.add_command(refresh)


@cli.command(name="help")
@click.argument("command", required=False)
@click.pass_context
def help_cmd(ctx: click.Context, command: Optional[str]):
   """Show usage for all commands or for COMMAND."""
   group_ctx = ctx.parent
   if command is None:
      click.echo(group_ctx.get_help())
      return

   cmd = cli.get_command(group_ctx, command)
   if cmd is None:
      console.print(f"[red]Error: Unknown command '{command}'[/red]")
      console.print("[yellow]→ Run 'claude-profiles help' to see available commands[/yellow]")
      sys.exit(1)

   with click.Context(cmd, info_name=command, parent=group_ctx) as cmd_ctx:
      click.echo(cmd.get_help(cmd_ctx))


# Aliases
@cli.command(name="ls", hidden=True)
@click.pass_context
def ls_alias(ctx):
   """Alias for 'list'."""
   ctx.forward(list_profiles_cmd)


@cli.command(name="use", hidden=True)
@click.argument("name")
@click.pass_context
def use(ctx, name):
   """Alias for 'switch'."""
   ctx.forward(switch)


def main():
   cli(prog_name="claude-profiles")
