"""Exception hierarchy for Commit Signals."""

from .analysis import AnalysisError, DataError
from .base import CommitSignalsError
from .config import ConfigurationError, InvalidConfigError
from .platform import PlatformError, UnsupportedPlatformError

__all__ = [
    "CommitSignalsError",
    "AnalysisError",
    "DataError",
    "ConfigurationError",
    "InvalidConfigError",
    "PlatformError",
    "UnsupportedPlatformError",
]
