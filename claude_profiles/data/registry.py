"""Profile directory layout and the active-profile marker."""

from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import List, Optional

from ..constants import (
    ACTIVE_MARKER_FILENAME,
    CLAUDE_DIRNAME,
    CREDENTIALS_FILENAME,
    SANDBOX_SUFFIX,
)
from ..core.errors import InvalidProfileName, ProfileNotFound
from ..core.models import CredentialRecord, Profile
from ..utils import atomic_write_text, ensure_private_dir
from .credential_store import CredentialStore

_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def validate_profile_name(name: str) -> str:
    """Return ``name`` if it is safe to use as a directory name."""
    if not name or not _NAME_RE.match(name) or name.endswith(SANDBOX_SUFFIX):
        raise InvalidProfileName(f"Invalid profile name: {name!r}")
    return name


class ProfileRegistry:
    """
    Saved profiles under a single root directory.

    Layout::

       <root>/.active-profile
       <root>/<name>/.credentials.json
       <root>/<name>/.claude/.credentials.json   (launch mirror)
       <root>/<name>-home/                       (launch sandbox)
    """

    def __init__(self, root: Path, credential_store: CredentialStore):
        self.root = root
        self.credential_store = credential_store

    # Paths

    @property
    def marker_path(self) -> Path:
        return self.root / ACTIVE_MARKER_FILENAME

    def profile_dir(self, name: str) -> Path:
        return self.root / name

    def snapshot_path(self, name: str) -> Path:
        return self.profile_dir(name) / CREDENTIALS_FILENAME

    def mirror_path(self, name: str) -> Path:
        return self.profile_dir(name) / CLAUDE_DIRNAME / CREDENTIALS_FILENAME

    def sandbox_home(self, name: str) -> Path:
        return self.root / f"{name}{SANDBOX_SUFFIX}"

    # Enumeration

    def list_profiles(self) -> List[str]:
        """Names of directories holding a readable credential record, sorted."""
        if not self.root.is_dir():
            return []

        names = []
        for entry in self.root.iterdir():
            if not entry.is_dir() or entry.name.startswith("."):
                continue
            if self.credential_store.read(entry / CREDENTIALS_FILENAME) is not None:
                names.append(entry.name)
        return sorted(names)

    def exists(self, name: str) -> bool:
        return self.profile_dir(name).is_dir()

    def get_record(self, name: str) -> CredentialRecord:
        """
        Load a profile's stored record.

        Raises:
           ProfileNotFound: If the snapshot is missing or unreadable
        """
        record = None
        if _NAME_RE.match(name or ""):
            record = self.credential_store.read(self.snapshot_path(name))
        if record is None:
            raise ProfileNotFound(name, self.list_profiles())
        return record

    def get(self, name: str) -> Profile:
        record = self.get_record(name)
        return Profile(
            name=name,
            directory=self.profile_dir(name),
            record=record,
            is_active=self.get_active() == name,
        )

    # Active marker

    def get_active(self) -> Optional[str]:
        try:
            text = self.marker_path.read_text(encoding="utf-8-sig")
        except FileNotFoundError:
            return None
        name = text.replace("\ufeff", "").strip()
        return name or None

    def set_active(self, name: str):
        ensure_private_dir(self.root)
        atomic_write_text(self.marker_path, name)

    def clear_active(self):
        try:
            self.marker_path.unlink()
        except FileNotFoundError:
            pass

    # Mutation

    def save_snapshot(self, name: str, source: Path):
        """Copy ``source`` into the profile snapshot and its launch mirror."""
        validate_profile_name(name)
        ensure_private_dir(self.profile_dir(name))
        self.credential_store.copy(source, self.snapshot_path(name))
        self.credential_store.copy(self.snapshot_path(name), self.mirror_path(name))

    def write_record(self, name: str, record: CredentialRecord):
        self.credential_store.write(self.snapshot_path(name), record)
        self.credential_store.copy(self.snapshot_path(name), self.mirror_path(name))

    def remove(self, name: str, purge_home: bool = False) -> bool:
        """
        Delete a profile directory, clearing the marker if it named this profile.

        Returns True when the removed profile was active.

        Raises:
           ProfileNotFound: If ``name`` is not a profile holding a snapshot
        """
        if (
            not _NAME_RE.match(name or "")
            or name.endswith(SANDBOX_SUFFIX)
            or not self.snapshot_path(name).is_file()
        ):
            raise ProfileNotFound(name, self.list_profiles())

        shutil.rmtree(self.profile_dir(name))
        if purge_home and self.sandbox_home(name).is_dir():
            shutil.rmtree(self.sandbox_home(name))

        was_active = self.get_active() == name
        if was_active:
            self.clear_active()
        return was_active
