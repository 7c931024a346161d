"""Manage named Claude Code credential profiles."""

__version__ = "0.3.0"
