"""Cat Monitor Configuration."""
import os
from pathlib import Path


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default

# Project root (one level up from catmonitor/)
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Source files (log notation + status notation)
DATA_DIR = Path(os.getenv("CATMON_DATA_DIR", str(PROJECT_ROOT / "data")))
LOG_FILE = os.getenv("CATMON_LOG_FILE", "log.md")
WORK_FILE = os.getenv("CATMON_WORK_FILE", "work.md")
WATCH_ENABLED = _env_bool("CATMON_WATCH_ENABLED", True)

# Notation defaults
NO_CONTEXT_MARKER = "🐱"
EMPTY_ITEM_LABEL = "进度"

# Observability
OTEL_ENABLED = _env_bool("CATMON_OTEL_ENABLED", False)
OTEL_ENDPOINT = os.getenv("CATMON_OTEL_ENDPOINT", "http://localhost:4318")
OTEL_SERVICE_NAME = os.getenv("CATMON_OTEL_SERVICE_NAME", "catmonitor")
PROM_PORT = _env_int("CATMON_PROM_PORT", 9464)

# Server settings
HOST = os.getenv("CATMON_HOST", "0.0.0.0")
PORT = _env_int("CATMON_PORT", 8000)

# CORS
FRONTEND_ORIGIN = os.getenv("CATMON_FRONTEND_ORIGIN", "http://localhost:3000")
