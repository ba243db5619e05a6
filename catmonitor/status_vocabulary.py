"""Status keyword table, label classification and node verdicts.

Every keyword the dashboard reacts to lives here: the item-label
classifier, the node completion/failure verdicts, and the log
transition/tone detector in ``context_linker`` all read the same sets.
"""
from __future__ import annotations

import re
from enum import Enum

from catmonitor.config import NO_CONTEXT_MARKER
from catmonitor.models import ItemState, StatusNode

_PERCENT_PATTERN = re.compile(r"[0-9]+%")

# Item label classification
COMPLETED_LABELS = frozenset({"已完成", "100%"})
IN_PROGRESS_LABELS = frozenset({"进行中"})
FAILED_LABELS = frozenset({"失败", "无法进行"})
FAILED_FRAGMENTS = ("放弃", "失败")

# Log message vocabulary (substring tests), in tone precedence order
SUCCESS_KEYWORDS = ("已完成", "已全部完成")
FAILURE_KEYWORDS = ("失败", "无法进行", "放弃")
RESTART_KEYWORDS = ("开始", "重启", "恢复")
STATUS_KEYWORDS = (
    "已完成",
    "已全部完成",
    "未开始",
    "进行中",
    "失败",
    "无法进行",
    "放弃",
    "开始",
    "重启",
    "恢复",
)
TONE_KEYWORDS = (
    ("success", SUCCESS_KEYWORDS),
    ("failure", FAILURE_KEYWORDS),
    ("restart", RESTART_KEYWORDS),
)

COMPLETED = "completed"
FAILED = "failed"
IN_PROGRESS = "in_progress"
PERCENT = "percent"
PENDING = "pending"


class Category(str, Enum):
    PROJECT = "项目"
    TASK = "任务"
    SKILL = "技能"
    OTHER = "other"

    @property
    def rank(self) -> int:
        return _CATEGORY_RANK[self]

    @property
    def kind(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "Category":
        """Exact match on a status node category; unknown labels are OTHER."""
        for category in (cls.PROJECT, cls.TASK, cls.SKILL):
            if label == category.value:
                return category
        return cls.OTHER


_CATEGORY_RANK = {
    Category.PROJECT: 1,
    Category.TASK: 2,
    Category.SKILL: 3,
    Category.OTHER: 99,
}


def context_kind(context: str) -> str:
    """Badge kind for a log context: substring match on the category words."""
    if not context:
        return ""
    for category in (Category.PROJECT, Category.TASK, Category.SKILL):
        if category.value in context:
            return category.kind
    if context == NO_CONTEXT_MARKER:
        return "cat"
    return ""


def is_percent(text: str) -> bool:
    return bool(_PERCENT_PATTERN.fullmatch(text))


def _percent_value(label: str) -> int | None:
    # int() refuses digit strings past sys.get_int_max_str_digits()
    try:
        return int(label[:-1])
    except ValueError:
        return None


def is_failure_label(label: str) -> bool:
    if label in FAILED_LABELS:
        return True
    return any(fragment in label for fragment in FAILED_FRAGMENTS)


def classify_label(label: str) -> ItemState:
    if label == "100%":
        return ItemState(state=COMPLETED, percent=100)
    if label in COMPLETED_LABELS:
        return ItemState(state=COMPLETED)
    if is_percent(label):
        return ItemState(state=PERCENT, percent=_percent_value(label))
    if label in IN_PROGRESS_LABELS:
        return ItemState(state=IN_PROGRESS)
    if is_failure_label(label):
        return ItemState(state=FAILED)
    return ItemState(state=PENDING)


def is_node_completed(node: StatusNode) -> bool:
    if not node.items:
        return False
    return all(classify_label(item.statusLabel).state == COMPLETED for item in node.items)


def is_node_failed(node: StatusNode) -> bool:
    if not node.items:
        return False
    return all(is_failure_label(item.statusLabel) for item in node.items)


def is_node_done(node: StatusNode) -> bool:
    return is_node_completed(node) or is_node_failed(node)
