"""Shared console instance for claude_profiles output.

This module provides a single Rich Console instance configured to write to stderr.
Using stderr keeps stdout free for `current` and `--json` output.
"""

from rich.console import Console

console = Console(stderr=True)
