"""Pydantic models for parsed notations and the dashboard render payloads."""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict
from typing import Optional

from catmonitor.config import NO_CONTEXT_MARKER


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── Parsed log notation ────────────────────────────────────────────

class LogEntry(_Frozen):
    context: str = NO_CONTEXT_MARKER
    message: str = ""


class LogGroup(_Frozen):
    date: str  # "YYYY.MM.DD"
    entries: tuple[LogEntry, ...] = ()


# ── Parsed status notation ─────────────────────────────────────────

class StatusItem(_Frozen):
    name: str = ""
    statusLabel: str = ""


class StatusNode(_Frozen):
    category: str
    name: str
    items: tuple[StatusItem, ...] = ()

    @property
    def key(self) -> str:
        """Raw linking key, before path normalization."""
        return f"{self.category}:{self.name}"


class ItemState(_Frozen):
    state: str  # "completed" | "failed" | "in_progress" | "percent" | "pending"
    percent: Optional[int] = None


# ── Render payloads ────────────────────────────────────────────────

class AnnotatedLogEntry(_Frozen):
    context: str
    message: str
    contextKind: str = ""  # "project" | "task" | "skill" | "cat" | ""
    isStatusUpdate: bool = False
    tone: Optional[str] = None  # "success" | "failure" | "restart"


class LogGroupView(_Frozen):
    date: str
    entries: tuple[AnnotatedLogEntry, ...] = ()


class LogPanel(_Frozen):
    source: str = ""
    groups: tuple[LogGroupView, ...] = ()


class StatusItemView(_Frozen):
    name: str = ""
    displayName: str = ""
    statusLabel: str = ""
    state: str = "pending"
    percent: Optional[int] = None


class StatusNodeView(_Frozen):
    position: int
    key: str
    category: str
    categoryKind: str = "other"  # "project" | "task" | "skill" | "other"
    name: str
    completed: bool = False
    failed: bool = False
    items: tuple[StatusItemView, ...] = ()


class StatusPanel(_Frozen):
    source: str = ""
    nodes: tuple[StatusNodeView, ...] = ()


class ResolveResult(_Frozen):
    context: str
    normalizedContext: str = ""
    match: Optional[StatusNodeView] = None
