"""Parse the block-structured status notation into StatusNode models."""
from __future__ import annotations

import logging
import re

from catmonitor.models import StatusItem, StatusNode

logger = logging.getLogger("catmonitor.parsers")

# "类型:名称{" or "类型.名称{"; the name may itself contain separators.
_HEADER_PATTERN = re.compile(r"^([^:.]+)(?::|\.)(.+)\{$")
_CLOSE_PATTERN = re.compile(r"^\s*\}\s*$")


def parse_item(line: str) -> StatusItem | None:
    """Split an item line at its last ``.``; lines without one are not items."""
    name, sep, label = line.rpartition(".")
    if not sep:
        return None
    return StatusItem(name=name.strip(), statusLabel=label.strip())


def parse_status(text: str) -> tuple[StatusNode, ...]:
    """Parse status text into nodes in declaration order.

    Blocks do not nest: a header seen while a block is open discards the
    open block, and a block still open at end of input is dropped.
    """
    nodes: list[StatusNode] = []
    header: tuple[str, str] | None = None
    items: list[StatusItem] = []

    for raw_line in (text or "").split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        if _CLOSE_PATTERN.match(line):
            if header is not None:
                nodes.append(StatusNode(category=header[0], name=header[1], items=tuple(items)))
                header = None
                items = []
            continue

        match = _HEADER_PATTERN.match(line)
        if match:
            if header is not None:
                logger.debug("Discarding unclosed block %s:%s", header[0], header[1])
            header = (match.group(1).strip(), match.group(2).strip())
            items = []
            continue

        if header is None:
            continue
        item = parse_item(line)
        if item is not None:
            items.append(item)

    if header is not None:
        logger.debug("Dropping unterminated block %s:%s", header[0], header[1])

    return tuple(nodes)
