"""Per-source parse cache.

A snapshot is the parsed value of one source at one file signature.
Snapshots are never mutated: a changed file produces a new snapshot that
replaces the previous one wholesale.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from catmonitor.errors import FetchFailure
from catmonitor.sources import TextSource

logger = logging.getLogger("catmonitor")


@dataclass(frozen=True)
class Snapshot:
    signature: Optional[tuple[int, int]]
    value: Any


class SnapshotStore:
    def __init__(self):
        self._snapshots: dict[str, Snapshot] = {}

    def get(self, source: TextSource, parse: Callable[[str], Any]) -> Any:
        """Return the parsed value of ``source``, re-parsing only when the file changed.

        Raises FetchFailure when the source cannot be read; the cached
        snapshot for that source is dropped in that case.
        """
        signature = source.signature()
        cached = self._snapshots.get(source.name)
        if cached is not None and signature is not None and cached.signature == signature:
            return cached.value

        try:
            text = source.read()
        except FetchFailure:
            self._snapshots.pop(source.name, None)
            raise

        snapshot = Snapshot(signature=signature, value=parse(text))
        self._snapshots[source.name] = snapshot
        logger.debug(f"Parsed new {source.name} snapshot from {source.path}")
        return snapshot.value

    def invalidate(self, name: Optional[str] = None) -> None:
        if name is None:
            self._snapshots.clear()
        else:
            self._snapshots.pop(name, None)

    def invalidate_path(self, path: Path, sources: tuple[TextSource, ...]) -> list[str]:
        """Drop snapshots for every source backed by ``path``; return their names."""
        dropped = []
        resolved = Path(path).resolve()
        for source in sources:
            if source.path.resolve() == resolved:
                self.invalidate(source.name)
                dropped.append(source.name)
        return dropped

    def cached_names(self) -> list[str]:
        return sorted(self._snapshots)
