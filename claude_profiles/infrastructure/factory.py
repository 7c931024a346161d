"""Service factory for dependency injection."""

from __future__ import annotations

from typing import Optional

from ..config import ProfilesConfig
from ..constants import LOCK_FILENAME
from ..data.credential_store import CredentialStore
from ..data.registry import ProfileRegistry
from ..locking import ToolLock
from ..sandbox import SessionLauncher
from ..services.profiles import ProfileService
from ..services.switching import SwitchingService
from .oauth import OAuthClient
from .processes import find_host_sessions


class ServiceFactory:
    """Builds every component from a single ProfilesConfig."""

    def __init__(self, config: ProfilesConfig):
        self.config = config
        self._credential_store: Optional[CredentialStore] = None
        self._registry: Optional[ProfileRegistry] = None

    def get_credential_store(self) -> CredentialStore:
        if self._credential_store is None:
            self._credential_store = CredentialStore()
        return self._credential_store

    def get_registry(self) -> ProfileRegistry:
        if self._registry is None:
            self._registry = ProfileRegistry(self.config.profiles_root, self.get_credential_store())
        return self._registry

    def get_profile_service(self) -> ProfileService:
        return ProfileService(
            registry=self.get_registry(),
            credential_store=self.get_credential_store(),
            live_path=self.config.live_credentials_path,
            oauth_client=OAuthClient(),
        )

    def get_switching_service(self) -> SwitchingService:
        return SwitchingService(
            registry=self.get_registry(),
            credential_store=self.get_credential_store(),
            live_path=self.config.live_credentials_path,
        )

    def get_launcher(self) -> SessionLauncher:
        return SessionLauncher(
            config=self.config,
            registry=self.get_registry(),
            credential_store=self.get_credential_store(),
        )

    def lock(self) -> ToolLock:
        """Tool lock under the profiles root; use as a context manager."""
        return ToolLock(self.config.profiles_root / LOCK_FILENAME)

    def find_host_sessions(self):
        return find_host_sessions(isolated_env_var=self.config.session_env_var)
