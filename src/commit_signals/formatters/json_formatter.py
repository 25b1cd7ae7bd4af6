"""JSON formatter for Commit Signals."""

import json
import math
from dataclasses import asdict
from datetime import datetime
from enum import Enum
from typing import Any

from ..dashboard import DashboardView
from .base import BaseFormatter


def _jsonable(value: Any) -> Any:
    """Make ``asdict`` output JSON-safe: ISO datetimes, enum values, inf as null."""
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float) and math.isinf(value):
        return None
    return value


class JsonFormatter(BaseFormatter):
    """Render the dashboard as JSON."""

    def render(self, view: DashboardView) -> None:
        print(self.format(view))

    def format(self, view: DashboardView) -> str:
        return json.dumps(_jsonable(asdict(view)), indent=2)
