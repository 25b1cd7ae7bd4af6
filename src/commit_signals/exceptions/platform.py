"""Hosting platform exceptions: HTTP failures, unknown platforms."""

from typing import Dict, List, Optional

from .base import CommitSignalsError


class PlatformError(CommitSignalsError):
    """Raised when a hosting platform request fails."""

    def __init__(self, platform: str, reason: str, status_code: Optional[int] = None):
        details: Dict[str, str] = {"platform": platform, "reason": reason}
        if status_code is not None:
            details["status"] = str(status_code)

        super().__init__(f"{platform} API error", details=details)
        self.platform = platform
        self.reason = reason
        self.status_code = status_code


class UnsupportedPlatformError(PlatformError):
    """Raised when no client exists for the requested platform."""

    def __init__(self, platform: str, supported_platforms: List[str]):
        super().__init__(platform, f"unsupported platform (supported: {', '.join(supported_platforms)})")
        self.supported_platforms = supported_platforms
