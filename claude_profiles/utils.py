"""Shared utility functions."""

from __future__ import annotations

import json
import os
import shutil
import time
from pathlib import Path
from typing import Any, Dict


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def ensure_private_dir(path: Path):
    """Create a directory (and parents) readable only by the owner."""
    path.mkdir(mode=0o700, parents=True, exist_ok=True)
    try:
        os.chmod(path, 0o700)
    except OSError:
        pass  # Best effort


def _file_mode(path: Path, preserve_permissions: bool) -> int:
    mode = 0o600
    if preserve_permissions and path.exists():
        try:
            mode = path.stat().st_mode & 0o777
        except OSError:
            pass
    return mode


def atomic_write_bytes(path: Path, data: bytes, preserve_permissions: bool = True):
    """Atomically replace ``path`` with ``data`` via a sibling temp file."""
    ensure_private_dir(path.parent)
    mode = _file_mode(path, preserve_permissions)

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())

        os.replace(tmp_path, path)
        os.chmod(path, mode)
    except Exception:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise


def atomic_write_json(path: Path, data: Dict[str, Any], preserve_permissions: bool = True):
    """Atomically write JSON to disk with optional permission preservation."""
    atomic_write_bytes(path, json.dumps(data, indent=2).encode("utf-8"), preserve_permissions)


def atomic_write_text(path: Path, text: str, preserve_permissions: bool = True):
    """Atomically write text exactly as given (no trailing newline added)."""
    atomic_write_bytes(path, text.encode("utf-8"), preserve_permissions)


def atomic_copy(src: Path, dst: Path):
    """Byte-exact copy of ``src`` over ``dst``, replacing it atomically."""
    ensure_private_dir(dst.parent)
    tmp_path = dst.with_suffix(dst.suffix + ".tmp")
    try:
        shutil.copyfile(src, tmp_path)
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, dst)
    except Exception:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise
