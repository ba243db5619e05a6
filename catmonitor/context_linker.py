"""Link log contexts to status nodes and flag status-transition entries.

Two independent jobs share the path-key rules:

* ``resolve`` finds the status node a clicked log context points at.
  Node keys are ``category:name``; the deepest node whose key is the
  context or one of its ancestors wins, and ties go to the node declared
  first.
* ``annotate_entries`` walks one date group's entries left to right and
  marks an entry as a status update when its message is status
  vocabulary and its context is related to the entry right before it.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from catmonitor import path_keys
from catmonitor.models import AnnotatedLogEntry, LogEntry, StatusNode
from catmonitor.status_vocabulary import (
    STATUS_KEYWORDS,
    TONE_KEYWORDS,
    context_kind,
    is_percent,
)


def node_key(node: StatusNode) -> str:
    return path_keys.normalize(node.key)


def resolve_index(context_text: str, nodes: Sequence[StatusNode]) -> Optional[int]:
    """Position in ``nodes`` of the longest key prefixing the context."""
    target = path_keys.normalize(context_text)
    if not target:
        return None

    best_index: Optional[int] = None
    best_len = -1
    for index, node in enumerate(nodes):
        key = node_key(node)
        if not path_keys.is_prefix_of(key, target):
            continue
        # Strictly longer only, so the first declared node keeps a tie.
        if len(key) > best_len:
            best_len = len(key)
            best_index = index
    return best_index


def resolve(context_text: str, nodes: Sequence[StatusNode]) -> Optional[StatusNode]:
    index = resolve_index(context_text, nodes)
    if index is None:
        return None
    return nodes[index]


def is_status_message(message: str) -> bool:
    if is_percent(message):
        return True
    return any(keyword in message for keyword in STATUS_KEYWORDS)


def are_contexts_related(last: Optional[str], current: Optional[str]) -> bool:
    """Same context, ancestor/descendant, or siblings under one parent."""
    if last is None or current is None:
        return False
    a = path_keys.normalize(last)
    b = path_keys.normalize(current)
    if not a or not b:
        return False
    if path_keys.is_prefix_of(a, b) or path_keys.is_prefix_of(b, a):
        return True
    return path_keys.are_siblings_or_equal(a, b)


def connector_tone(message: str) -> Optional[str]:
    for tone, keywords in TONE_KEYWORDS:
        if any(keyword in message for keyword in keywords):
            return tone
    return None


def annotate_entries(entries: Iterable[LogEntry]) -> tuple[AnnotatedLogEntry, ...]:
    annotated: list[AnnotatedLogEntry] = []
    last_context: Optional[str] = None
    for entry in entries:
        is_update = is_status_message(entry.message) and are_contexts_related(last_context, entry.context)
        annotated.append(
            AnnotatedLogEntry(
                context=entry.context,
                message=entry.message,
                contextKind=context_kind(entry.context),
                isStatusUpdate=is_update,
                tone=connector_tone(entry.message) if is_update else None,
            )
        )
        last_context = entry.context
    return tuple(annotated)
