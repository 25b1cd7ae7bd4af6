"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config
from ..dashboard import DashboardView
from ..formatters import JsonFormatter, RichFormatter

console = Console()


def resolve_config(config: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Build configuration from CLI options; unset options fall through."""
    return load_config(config_file=config, **overrides)


def emit(view: DashboardView, json_output: bool) -> None:
    if json_output:
        JsonFormatter().render(view)
    else:
        RichFormatter(console).render(view)
