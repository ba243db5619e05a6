"""Errors that cross the dashboard core boundary."""
from __future__ import annotations


# Localized panel failure prefixes, keyed by resource name.
_PANEL_FAILURE_PREFIX = {
    "log": "无法加载开发日志",
    "work": "无法加载项目进度",
}


class FetchFailure(Exception):
    """A text resource could not be retrieved.

    Parsing never raises; this is the only error surfaced to callers.
    """

    def __init__(self, resource: str, reason: str):
        super().__init__(f"{resource}: {reason}")
        self.resource = resource
        self.reason = reason

    @property
    def message(self) -> str:
        prefix = _PANEL_FAILURE_PREFIX.get(self.resource, f"无法加载 {self.resource}")
        return f"{prefix} ({self.reason})"
