"""Analysis-related exceptions: malformed commit feeds."""

from typing import Dict, Optional

from .base import CommitSignalsError


class AnalysisError(CommitSignalsError):
    """Base class for analysis-related errors."""

    pass


class DataError(AnalysisError):
    """Raised when a commit feed or repository summary is malformed.

    Carries the repository identifier (when known) so batch callers can
    report a per-repository failure without aborting sibling repositories.
    """

    def __init__(
        self,
        reason: str,
        repository: Optional[str] = None,
        commit_id: Optional[str] = None,
    ):
        details: Dict[str, str] = {"reason": reason}
        if repository is not None:
            details["repository"] = repository
        if commit_id is not None:
            details["commit"] = commit_id

        super().__init__(f"Malformed input data: {reason}", details=details)
        self.reason = reason
        self.repository = repository
        self.commit_id = commit_id

    def with_repository(self, repository: str) -> "DataError":
        """Return a copy of this error tagged with the repository name."""
        if self.repository is not None:
            return self
        return DataError(self.reason, repository=repository, commit_id=self.commit_id)
