"""Azure DevOps Git REST client.

Azure DevOps scopes repositories by organization; there is no per-user
listing, so ``list_user_repositories`` returns nothing.
"""

from __future__ import annotations

import base64
from typing import Any, Optional

from ..models import Commit, Platform, RepositorySummary
from .base import PlatformClient
from .normalize import azure_commit, azure_repository, unwrap_records

API_VERSION = "6.0"


class AzureDevOpsClient(PlatformClient):
    platform = Platform.AZURE
    default_base_url = "https://dev.azure.com"

    def __init__(self, *args, organization: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.organization = organization or ""

    def _headers(self, token: Optional[str]) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            # Personal access tokens go in basic auth with an empty user
            encoded = base64.b64encode(f":{token}".encode()).decode()
            headers["Authorization"] = f"Basic {encoded}"
        return headers

    def _api(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        query = {"api-version": API_VERSION, **(params or {})}
        return self._get(f"/{self.organization}/_apis{path}", query)

    def list_user_repositories(self, username: str) -> list[RepositorySummary]:
        return []

    def list_org_repositories(self, organization: str) -> list[RepositorySummary]:
        self.organization = organization
        payload = self._api("/git/repositories")
        return [azure_repository(r) for r in unwrap_records(self.platform, payload, "value")]

    def fetch_commits(self, owner: str, repo_name: str) -> list[Commit]:
        payload = self._api(
            f"/git/repositories/{repo_name}/commits",
            {"searchCriteria.$top": self.commits_per_repo},
        )
        return [azure_commit(c) for c in unwrap_records(self.platform, payload, "value")]
