"""Root of the Commit Signals exception tree.

Every error the package raises on purpose derives from ``CommitSignalsError``,
so the batch runner can tell a failed repository (recorded and skipped) from
a programming error, and the CLI can turn either into exit status 1.
"""

from typing import Dict, Optional


class CommitSignalsError(Exception):
    """Base exception for all Commit Signals errors.

    ``message`` is the human summary; ``details`` holds the identifying
    context (repository, commit, platform, status) rendered after it as
    ``key=value`` pairs.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
