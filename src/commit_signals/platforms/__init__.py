"""Hosting-platform collaborators: fetch and normalize commit feeds."""

from __future__ import annotations

from typing import Optional

import requests

from ..config import AnalysisConfig
from ..exceptions import UnsupportedPlatformError
from ..models import Platform
from .azure import AzureDevOpsClient
from .base import PlatformClient
from .bitbucket import BitbucketClient
from .github import GitHubClient
from .gitlab import GitLabClient
from .normalize import repository_status, technologies

CLIENTS: dict[Platform, type[PlatformClient]] = {
    Platform.GITHUB: GitHubClient,
    Platform.GITLAB: GitLabClient,
    Platform.BITBUCKET: BitbucketClient,
    Platform.AZURE: AzureDevOpsClient,
}


def create_client(
    config: AnalysisConfig, session: Optional[requests.Session] = None
) -> PlatformClient:
    """Build the client for ``config.platform``.

    Raises:
        UnsupportedPlatformError: If no client handles the platform.
    """
    try:
        platform = Platform(config.platform)
    except ValueError:
        raise UnsupportedPlatformError(config.platform, [p.value for p in Platform])

    kwargs = dict(
        token=config.token,
        base_url=config.base_url,
        commits_per_repo=config.commits_per_repo,
        timeout=config.request_timeout_seconds,
        session=session,
    )
    if platform is Platform.AZURE:
        return AzureDevOpsClient(organization=config.organization, **kwargs)
    return CLIENTS[platform](**kwargs)


__all__ = [
    "PlatformClient",
    "GitHubClient",
    "GitLabClient",
    "BitbucketClient",
    "AzureDevOpsClient",
    "create_client",
    "repository_status",
    "technologies",
]
