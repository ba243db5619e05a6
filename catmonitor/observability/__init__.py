"""Observability helpers."""

from catmonitor.observability.otel import (
    initialize,
    shutdown,
    start_span,
    record_panel_load,
    record_fetch_failure,
)

__all__ = [
    "initialize",
    "shutdown",
    "start_span",
    "record_panel_load",
    "record_fetch_failure",
]
