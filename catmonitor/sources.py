"""File-backed text sources for the two dashboard panels."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from catmonitor import config
from catmonitor.errors import FetchFailure
from catmonitor.observability import record_fetch_failure

logger = logging.getLogger("catmonitor.sources")

LOG_RESOURCE = "log"
WORK_RESOURCE = "work"


@dataclass(frozen=True)
class TextSource:
    """A named UTF-8 text resource on disk."""

    name: str
    path: Path

    def signature(self) -> Optional[tuple[int, int]]:
        """(mtime_ns, size) of the file, or None if it cannot be stat'ed."""
        try:
            stat = self.path.stat()
        except OSError:
            return None
        return stat.st_mtime_ns, stat.st_size

    def read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8-sig")
        except FileNotFoundError:
            reason = f"{self.path.name} not found"
        except IsADirectoryError:
            reason = f"{self.path.name} is a directory"
        except PermissionError:
            reason = f"permission denied for {self.path.name}"
        except UnicodeDecodeError:
            reason = f"{self.path.name} is not valid UTF-8"
        except OSError as e:
            reason = f"{self.path.name}: {e.strerror or e}"
        logger.warning(f"Failed to load {self.name} source {self.path}: {reason}")
        record_fetch_failure(self.name)
        raise FetchFailure(self.name, reason)


def default_sources(data_dir: Optional[Path] = None) -> tuple[TextSource, TextSource]:
    """Return (log_source, work_source) under ``data_dir`` or the configured data dir."""
    root = Path(data_dir) if data_dir is not None else config.DATA_DIR
    return (
        TextSource(LOG_RESOURCE, root / config.LOG_FILE),
        TextSource(WORK_RESOURCE, root / config.WORK_FILE),
    )
