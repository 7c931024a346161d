"""Credential file access: parse, copy, fingerprint, persist."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Optional

from ..constants import FINGERPRINT_LEN
from ..core.errors import MalformedCredentialFile
from ..core.models import CredentialRecord
from ..utils import atomic_copy, atomic_write_json


class CredentialStore:
    """
    Reads and writes Claude Code credential files.

    Responsibilities:
    - Parse credential JSON into a CredentialRecord
    - Byte-exact copies between the live file and profile snapshots
    - Content fingerprints for post-switch verification
    """

    def load(self, path: Path) -> Optional[CredentialRecord]:
        """
        Parse a credential file strictly.

        Returns None when the file does not exist.

        Raises:
           MalformedCredentialFile: If content is not a JSON object
        """
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None

        try:
            data = json.loads(raw.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MalformedCredentialFile(path, str(exc))

        if not isinstance(data, dict):
            raise MalformedCredentialFile(path, "credentials must be a JSON object")

        return CredentialRecord.from_dict(data)

    def read(self, path: Path) -> Optional[CredentialRecord]:
        """Parse a credential file; missing or malformed content reads as absent."""
        try:
            return self.load(path)
        except MalformedCredentialFile:
            return None

    def copy(self, src: Path, dst: Path):
        """Overwrite ``dst`` with the exact bytes of ``src``."""
        if not src.is_file():
            raise FileNotFoundError(f"Credential file not found: {src}")
        atomic_copy(src, dst)

    def write(self, path: Path, record: CredentialRecord):
        """Serialize a record, keeping fields this tool does not model."""
        atomic_write_json(path, record.to_dict())

    @staticmethod
    def extract_expiry(record: Optional[CredentialRecord]) -> Optional[int]:
        if record is None:
            return None
        return record.expires_at

    @staticmethod
    def fingerprint(path: Path) -> Optional[str]:
        """Short content hash for display and verification, not for security."""
        try:
            digest = hashlib.sha256(path.read_bytes()).hexdigest()
        except FileNotFoundError:
            return None
        return digest[:FINGERPRINT_LEN]
