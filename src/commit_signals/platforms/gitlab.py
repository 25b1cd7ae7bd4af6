"""GitLab REST v4 client (gitlab.com or self-hosted via ``base_url``)."""

from __future__ import annotations

from urllib.parse import quote

from ..models import Commit, Platform, RepositorySummary
from .base import PlatformClient
from .normalize import gitlab_commit, gitlab_project, unwrap_records


class GitLabClient(PlatformClient):
    platform = Platform.GITLAB
    default_base_url = "https://gitlab.com/api/v4"

    def list_user_repositories(self, username: str) -> list[RepositorySummary]:
        payload = self._get(
            f"/users/{username}/projects", {"per_page": 100, "order_by": "updated_at"}
        )
        return [gitlab_project(p) for p in unwrap_records(self.platform, payload)]

    def list_org_repositories(self, organization: str) -> list[RepositorySummary]:
        payload = self._get(
            f"/groups/{quote(organization, safe='')}/projects",
            {"per_page": 100, "order_by": "updated_at"},
        )
        return [gitlab_project(p) for p in unwrap_records(self.platform, payload)]

    def fetch_commits(self, owner: str, repo_name: str) -> list[Commit]:
        project_path = quote(f"{owner}/{repo_name}", safe="")
        payload = self._get(
            f"/projects/{project_path}/repository/commits",
            {"per_page": self.commits_per_repo},
        )
        return [gitlab_commit(c) for c in unwrap_records(self.platform, payload)]
