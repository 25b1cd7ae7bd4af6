"""Bitbucket Cloud 2.0 client."""

from __future__ import annotations

from ..models import Commit, Platform, RepositorySummary
from .base import PlatformClient
from .normalize import bitbucket_commit, bitbucket_repository, unwrap_records


class BitbucketClient(PlatformClient):
    platform = Platform.BITBUCKET
    default_base_url = "https://api.bitbucket.org/2.0"

    def list_user_repositories(self, username: str) -> list[RepositorySummary]:
        payload = self._get(f"/repositories/{username}", {"pagelen": 100, "sort": "-updated_on"})
        return [bitbucket_repository(r) for r in unwrap_records(self.platform, payload, "values")]

    def list_org_repositories(self, organization: str) -> list[RepositorySummary]:
        # Workspaces and users share the same listing endpoint
        return self.list_user_repositories(organization)

    def fetch_commits(self, owner: str, repo_name: str) -> list[Commit]:
        payload = self._get(
            f"/repositories/{owner}/{repo_name}/commits", {"pagelen": self.commits_per_repo}
        )
        return [bitbucket_commit(c) for c in unwrap_records(self.platform, payload, "values")]
