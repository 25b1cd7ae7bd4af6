"""Behavioral scoring engine.

Six independent, stateless analyzers. Each takes a normalized commit feed
(and, where needed, a repository summary) and returns one record. None of
them performs I/O or logs; malformed input raises ``DataError``.
"""

from .collaboration import CollaborationAnalyzer
from .debt import TechnicalDebtAnalyzer
from .developer import DeveloperActivityAnalyzer
from .health import RepositoryHealthAnalyzer
from .patterns import CommitPatternAnalyzer
from .security import SecurityAnalyzer

__all__ = [
    "DeveloperActivityAnalyzer",
    "CommitPatternAnalyzer",
    "RepositoryHealthAnalyzer",
    "SecurityAnalyzer",
    "CollaborationAnalyzer",
    "TechnicalDebtAnalyzer",
]
