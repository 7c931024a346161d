"""Pass-through OAuth token refresh."""

from __future__ import annotations

import copy
from typing import Callable, Optional

import requests

from ..constants import OAUTH_CLIENT_ID, OAUTH_ENDPOINT, OAUTH_TIMEOUT_SECONDS
from ..core.errors import TokenRefreshFailed
from ..core.models import CredentialRecord
from ..presentation.console import console
from ..utils import now_ms


class OAuthClient:
    """Exchanges a refresh token for a new access/refresh token pair."""

    def __init__(
        self,
        endpoint: str = OAUTH_ENDPOINT,
        client_id: str = OAUTH_CLIENT_ID,
        timeout: int = OAUTH_TIMEOUT_SECONDS,
        clock: Callable[[], int] = now_ms,
    ):
        self.endpoint = endpoint
        self.client_id = client_id
        self.timeout = timeout
        self.clock = clock

    def refresh(self, record: CredentialRecord, session: Optional[requests.Session] = None) -> CredentialRecord:
        """
        Refresh an access token.

        Returns a new record; unknown fields are carried over unchanged.

        Raises:
           TokenRefreshFailed: If there is no refresh token or the endpoint rejects it
        """
        if not record.refresh_token:
            raise TokenRefreshFailed("No refresh token available")

        console.print("[yellow]Refreshing token...[/yellow]")
        post = session.post if session is not None else requests.post

        try:
            response = post(
                self.endpoint,
                json={
                    "grant_type": "refresh_token",
                    "refresh_token": record.refresh_token,
                    "client_id": self.client_id,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TokenRefreshFailed(f"OAuth request failed: {exc}")

        if response.status_code != 200:
            raise TokenRefreshFailed(f"OAuth endpoint returned {response.status_code}")

        try:
            token_data = response.json()
            access_token = token_data["access_token"]
        except (ValueError, KeyError, TypeError):
            raise TokenRefreshFailed("OAuth endpoint returned no access token")

        refreshed = copy.deepcopy(record)
        refreshed.access_token = access_token
        refreshed.refresh_token = token_data.get("refresh_token", record.refresh_token)
        refreshed.expires_at = self.clock() + int(token_data.get("expires_in", 3600)) * 1000

        console.print("[green]Token refreshed successfully[/green]")
        return refreshed
