"""Shared HTTP plumbing for hosting-platform clients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

import requests

from ..exceptions import ConfigurationError, PlatformError
from ..logging_config import get_logger
from ..models import Commit, Platform, RepositorySummary

logger = get_logger(__name__)


class PlatformClient(ABC):
    """Fetch repository summaries and recent commits from one platform.

    Subclasses declare the API root and map endpoints; payloads are turned
    into normalized records by ``platforms.normalize``.
    """

    platform: Platform
    default_base_url: str

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        commits_per_repo: int = 10,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.commits_per_repo = commits_per_repo
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(self._headers(token))

    def _headers(self, token: Optional[str]) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("GET %s %s", url, params or "")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise PlatformError(self.platform.value, str(e))

        if not response.ok:
            raise PlatformError(
                self.platform.value,
                f"{response.status_code} {response.reason}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError:
            raise PlatformError(self.platform.value, f"invalid JSON from {url}")

    def list_repositories(
        self, username: Optional[str] = None, organization: Optional[str] = None
    ) -> list[RepositorySummary]:
        """List repositories for a user, or for an organization if no user."""
        if username:
            return self.list_user_repositories(username)
        if organization:
            return self.list_org_repositories(organization)
        raise ConfigurationError("Username or organization is required")

    @abstractmethod
    def list_user_repositories(self, username: str) -> list[RepositorySummary]:
        ...

    @abstractmethod
    def list_org_repositories(self, organization: str) -> list[RepositorySummary]:
        ...

    @abstractmethod
    def fetch_commits(self, owner: str, repo_name: str) -> list[Commit]:
        """Most recent ``commits_per_repo`` commits of one repository."""
