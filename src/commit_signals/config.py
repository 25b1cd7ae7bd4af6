"""Configuration loading and management for Commit Signals.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.commit-signals.toml)
    3. Project config (./commit-signals.toml)
    4. Explicit config file
    5. Environment variables (COMMIT_SIGNALS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(platform="gitlab", sample_size=3)
    >>> config.platform
    'gitlab'
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError
from .models import Platform

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "COMMIT_SIGNALS_"
_SUPPORTED_PLATFORMS = tuple(p.value for p in Platform)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for fetching and analyzing repositories.

    The behavioral formulas are fixed; this only shapes the collaborator
    layer around them.

    Attributes:
        Platform access:
            platform: Hosting platform (github/gitlab/bitbucket/azure)
            username: Account whose repositories are analyzed
            organization: Organization/workspace (used when username is unset)
            token: API token sent with every request
            base_url: Override for the platform API root (self-hosted GitLab,
                GitHub Enterprise)

        Sampling:
            sample_size: Number of repositories analyzed per run
            commits_per_repo: Most recent commits fetched per repository

        Performance tuning:
            workers: Parallel repository fetches
            request_timeout_seconds: Per-request HTTP timeout

        Output control:
            verbosity: Logging verbosity level
    """

    # Platform access
    platform: str = "github"
    username: Optional[str] = None
    organization: Optional[str] = None
    token: Optional[str] = None
    base_url: Optional[str] = None

    # Sampling
    sample_size: int = 5
    commits_per_repo: int = 10

    # Performance tuning
    workers: int = 4
    request_timeout_seconds: float = 15.0

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.platform not in _SUPPORTED_PLATFORMS:
            raise InvalidConfigError(
                "platform", self.platform, f"must be one of {', '.join(_SUPPORTED_PLATFORMS)}"
            )
        if self.sample_size < 1:
            raise InvalidConfigError("sample_size", self.sample_size, "must be at least 1")
        if self.commits_per_repo < 1:
            raise InvalidConfigError(
                "commits_per_repo", self.commits_per_repo, "must be at least 1"
            )
        if self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.request_timeout_seconds <= 0:
            raise InvalidConfigError(
                "request_timeout_seconds", self.request_timeout_seconds, "must be positive"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "must be quiet, normal or verbose"
            )

    @property
    def account(self) -> Optional[str]:
        """The user or organization whose repositories are listed."""
        return self.username or self.organization


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset CLI options do not mask files.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".commit-signals.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "commit-signals.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from COMMIT_SIGNALS_* environment variables.

    e.g. COMMIT_SIGNALS_TOKEN, COMMIT_SIGNALS_PLATFORM,
    COMMIT_SIGNALS_SAMPLE_SIZE, COMMIT_SIGNALS_WORKERS.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the field's type."""
    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    return value


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If the file cannot be parsed
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
