"""GitHub REST v3 client."""

from __future__ import annotations

from typing import Optional

from ..models import Commit, Platform, RepositorySummary
from .base import PlatformClient
from .normalize import github_commit, github_repository, unwrap_records


class GitHubClient(PlatformClient):
    platform = Platform.GITHUB
    default_base_url = "https://api.github.com"

    def _headers(self, token: Optional[str]) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if token:
            headers["Authorization"] = f"token {token}"
        return headers

    def list_user_repositories(self, username: str) -> list[RepositorySummary]:
        payload = self._get(f"/users/{username}/repos", {"sort": "updated", "per_page": 100})
        return [github_repository(r) for r in unwrap_records(self.platform, payload)]

    def list_org_repositories(self, organization: str) -> list[RepositorySummary]:
        payload = self._get(f"/orgs/{organization}/repos", {"sort": "updated", "per_page": 100})
        return [github_repository(r) for r in unwrap_records(self.platform, payload)]

    def fetch_commits(self, owner: str, repo_name: str) -> list[Commit]:
        payload = self._get(
            f"/repos/{owner}/{repo_name}/commits", {"per_page": self.commits_per_repo}
        )
        return [github_commit(c) for c in unwrap_records(self.platform, payload)]
