"""Source watcher using watchfiles.

Monitors the directories holding the log and status files and drops the
cached snapshot of a source when its file is modified, added or deleted.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from watchfiles import awatch, Change

logger = logging.getLogger("catmonitor.watcher")


class SourceWatcher:
    """Background watcher that invalidates snapshots on change."""

    def __init__(self):
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._running = False

    async def start(self, service) -> None:
        """Start watching the service's sources in a background task."""
        if self._running:
            logger.warning("Source watcher already running")
            return

        self._running = True
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._watch_loop(service))
        logger.info(f"Source watcher started for {[s.name for s in service.sources]}")

    async def stop(self) -> None:
        self._running = False
        if self._stop_event:
            self._stop_event.set()
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Source watcher stopped")

    @property
    def is_running(self) -> bool:
        return self._running

    async def _watch_loop(self, service) -> None:
        watch_dirs = sorted({s.path.parent for s in service.sources if s.path.parent.exists()})

        if not watch_dirs:
            logger.warning("No source directories exist, watcher has nothing to monitor")
            self._running = False
            return

        logger.info(f"Watching {len(watch_dirs)} directories: {[str(p) for p in watch_dirs]}")

        try:
            async for changes in awatch(*watch_dirs, stop_event=self._stop_event):
                if not self._running:
                    break
                for change_type, path in self.classify_changes(changes, service.sources):
                    dropped = service.store.invalidate_path(path, service.sources)
                    logger.info(f"{path.name} {change_type}, invalidated {dropped}")
        except asyncio.CancelledError:
            logger.info("Source watcher task cancelled")
        except Exception as e:
            logger.error(f"Source watcher error: {e}")
        finally:
            self._running = False

    @staticmethod
    def classify_changes(changes: set[tuple[Change, str]], sources) -> list[tuple[str, Path]]:
        """Keep only changes to watched source files, as (change_type, path) pairs."""
        watched = {s.path.resolve() for s in sources}
        result = []
        for change_type, path_str in changes:
            path = Path(path_str)
            if path.resolve() not in watched:
                continue
            if change_type == Change.deleted:
                result.append(("deleted", path))
            elif change_type in (Change.modified, Change.added):
                result.append(("modified", path))
        return sorted(result, key=lambda pair: str(pair[1]))


# Singleton instance
source_watcher = SourceWatcher()
