"""Dashboard service: turns parsed snapshots into render payloads."""
from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from catmonitor.config import EMPTY_ITEM_LABEL
from catmonitor.context_linker import annotate_entries, node_key, resolve_index
from catmonitor.errors import FetchFailure
from catmonitor.models import (
    LogGroup,
    LogGroupView,
    LogPanel,
    ResolveResult,
    StatusItem,
    StatusItemView,
    StatusNode,
    StatusNodeView,
    StatusPanel,
)
from catmonitor.observability import record_panel_load, start_span
from catmonitor.ordering import sort_nodes
from catmonitor.parsers.log import parse_log
from catmonitor.parsers.status import parse_status
from catmonitor import path_keys
from catmonitor.snapshots import SnapshotStore
from catmonitor.sources import TextSource, default_sources
from catmonitor.status_vocabulary import Category, classify_label, is_node_completed, is_node_failed

logger = logging.getLogger("catmonitor")


def _item_view(item: StatusItem) -> StatusItemView:
    state = classify_label(item.statusLabel)
    return StatusItemView(
        name=item.name,
        displayName=item.name or EMPTY_ITEM_LABEL,
        statusLabel=item.statusLabel,
        state=state.state,
        percent=state.percent,
    )


def node_view(node: StatusNode, position: int) -> StatusNodeView:
    return StatusNodeView(
        position=position,
        key=node_key(node),
        category=node.category,
        categoryKind=Category.from_label(node.category).kind,
        name=node.name,
        completed=is_node_completed(node),
        failed=is_node_failed(node),
        items=tuple(_item_view(item) for item in node.items),
    )


def build_log_panel(groups: Sequence[LogGroup], source: str = "") -> LogPanel:
    return LogPanel(
        source=source,
        groups=tuple(
            LogGroupView(date=group.date, entries=annotate_entries(group.entries))
            for group in groups
        ),
    )


def build_status_panel(nodes: Sequence[StatusNode], source: str = "") -> StatusPanel:
    ordered = sort_nodes(nodes)
    return StatusPanel(
        source=source,
        nodes=tuple(node_view(node, position) for position, node in enumerate(ordered)),
    )


def build_resolve_result(context: str, nodes: Sequence[StatusNode]) -> ResolveResult:
    """Resolve against declaration order, report the node at its display position."""
    normalized = path_keys.normalize(context)
    index = resolve_index(context, nodes)
    if index is None:
        return ResolveResult(context=context, normalizedContext=normalized)

    target = nodes[index]
    ordered = sort_nodes(nodes)
    position = next(pos for pos, node in enumerate(ordered) if node is target)
    return ResolveResult(
        context=context,
        normalizedContext=normalized,
        match=node_view(target, position),
    )


class DashboardService:
    """Loads the log and status panels independently from their sources."""

    def __init__(
        self,
        log_source: Optional[TextSource] = None,
        work_source: Optional[TextSource] = None,
        store: Optional[SnapshotStore] = None,
    ):
        default_log, default_work = default_sources()
        self.log_source = log_source or default_log
        self.work_source = work_source or default_work
        self.store = store or SnapshotStore()

    @property
    def sources(self) -> tuple[TextSource, TextSource]:
        return self.log_source, self.work_source

    def _load(self, source: TextSource, parse):
        started = time.perf_counter()
        result = "success"
        try:
            with start_span("catmonitor.panel.load", {"panel": source.name, "path": str(source.path)}):
                return self.store.get(source, parse)
        except FetchFailure:
            result = "fetch_failure"
            raise
        finally:
            record_panel_load(source.name, result, (time.perf_counter() - started) * 1000.0)

    def log_groups(self) -> tuple[LogGroup, ...]:
        return self._load(self.log_source, parse_log)

    def status_nodes(self) -> tuple[StatusNode, ...]:
        return self._load(self.work_source, parse_status)

    def get_log_panel(self) -> LogPanel:
        return build_log_panel(self.log_groups(), source=str(self.log_source.path))

    def get_status_panel(self) -> StatusPanel:
        return build_status_panel(self.status_nodes(), source=str(self.work_source.path))

    def resolve(self, context: str) -> ResolveResult:
        result = build_resolve_result(context, self.status_nodes())
        if result.match is None:
            logger.info(f"No status node matches context {context!r} (normalized {result.normalizedContext!r})")
        return result


dashboard_service = DashboardService()
