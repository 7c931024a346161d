"""Shared fixtures for claude_profiles tests."""

import json
from pathlib import Path

import pytest

from claude_profiles.config import ProfilesConfig
from claude_profiles.data.credential_store import CredentialStore
from claude_profiles.data.registry import ProfileRegistry

NOW_MS = 1_700_000_000_000
HOUR_MS = 3_600_000


def make_creds(refresh="rt-alice-0001", access="at-alice", expires_at=NOW_MS + 5 * HOUR_MS, tier="max", **extra):
    """Credential JSON in the host application's nested layout."""
    oauth = {
        "accessToken": access,
        "refreshToken": refresh,
        "expiresAt": expires_at,
        "scopes": ["user:inference", "user:profile"],
        "subscriptionType": tier,
        "rateLimitTier": "default_claude_max_20x",
    }
    oauth.update(extra)
    return {"claudeAiOauth": oauth}


def write_creds(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, (dict, list)):
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    else:
        path.write_text(data, encoding="utf-8")
    return path


@pytest.fixture
def config(tmp_path):
    """Config rooted in a throwaway HOME."""
    home = tmp_path / "home"
    home.mkdir()
    return ProfilesConfig(home=home, profiles_root=home / ".claude-profiles")


@pytest.fixture
def store():
    return CredentialStore()


@pytest.fixture
def registry(config, store):
    return ProfileRegistry(config.profiles_root, store)


@pytest.fixture
def live_path(config):
    return config.live_credentials_path


@pytest.fixture
def add_profile(registry):
    """Factory writing a profile snapshot (and mirror) straight to disk."""

    def _add(name, data):
        write_creds(registry.snapshot_path(name), data)
        write_creds(registry.mirror_path(name), data)
        return registry.snapshot_path(name)

    return _add
