"""Parse the dated build-log notation into LogGroup models."""
from __future__ import annotations

import logging
import re

from catmonitor.config import NO_CONTEXT_MARKER
from catmonitor.models import LogEntry, LogGroup

logger = logging.getLogger("catmonitor.parsers")

_DATE_PATTERN = re.compile(r"[0-9]{4}\.[0-9]{2}\.[0-9]{2}")


def is_date_line(line: str) -> bool:
    return bool(_DATE_PATTERN.fullmatch(line))


def split_entry(line: str) -> LogEntry:
    """Split a log line at its last ``:`` into context and message.

    Earlier colons belong to the context path, e.g.
    ``项目:自动驾驶.环境搭建:已全部完成`` has context ``项目:自动驾驶.环境搭建``.
    """
    context, sep, message = line.rpartition(":")
    if not sep:
        return LogEntry(context=NO_CONTEXT_MARKER, message=line)
    return LogEntry(context=context.strip(), message=message.strip())


def parse_log(text: str) -> tuple[LogGroup, ...]:
    """Parse log text into groups, newest date first."""
    groups: list[LogGroup] = []
    current_date: str | None = None
    entries: list[LogEntry] = []
    skipped = 0

    for raw_line in (text or "").split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        if is_date_line(line):
            if current_date and entries:
                groups.append(LogGroup(date=current_date, entries=tuple(entries)))
            current_date = line
            entries = []
            continue

        if current_date is None:
            skipped += 1
            continue
        entries.append(split_entry(line))

    if current_date and entries:
        groups.append(LogGroup(date=current_date, entries=tuple(entries)))

    if skipped:
        logger.debug("Dropped %d log lines before the first date", skipped)

    groups.reverse()
    return tuple(groups)
