"""Print a dashboard snapshot as JSON, or serve the API.

Usage:
  python -m catmonitor
  python -m catmonitor --data-dir ./data --panel status
  python -m catmonitor --resolve "项目:挑战杯:自动驾驶.测试实车"
  python -m catmonitor --serve
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable

from catmonitor.errors import FetchFailure
from catmonitor.services.dashboard import DashboardService
from catmonitor.sources import default_sources


def _panel_payload(load: Callable[[], Any]) -> tuple[dict[str, Any], bool]:
    try:
        return load().model_dump(), True
    except FetchFailure as e:
        return {"error": e.message}, False


def build_report(service: DashboardService, panel: str, resolve: str | None) -> tuple[dict[str, Any], bool]:
    """Return (report, any_panel_loaded)."""
    report: dict[str, Any] = {}
    loaded: list[bool] = []
    if panel in ("logs", "all"):
        report["logs"], ok = _panel_payload(service.get_log_panel)
        loaded.append(ok)
    if panel in ("status", "all"):
        report["status"], ok = _panel_payload(service.get_status_panel)
        loaded.append(ok)
    if resolve is not None:
        report["resolve"], ok = _panel_payload(lambda: service.resolve(resolve))
        loaded.append(ok)
    return report, any(loaded)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Cat Monitor dashboard snapshot")
    parser.add_argument("--data-dir", default=None, help="Directory holding log.md and work.md")
    parser.add_argument("--panel", choices=("logs", "status", "all"), default="all")
    parser.add_argument("--resolve", default=None, help="Log context to locate in the status panel")
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API instead")
    args = parser.parse_args(argv)

    if args.serve:
        from catmonitor.main import run

        run()
        return 0

    log_source, work_source = default_sources(Path(args.data_dir) if args.data_dir else None)
    service = DashboardService(log_source=log_source, work_source=work_source)
    report, ok = build_report(service, args.panel, args.resolve)
    print(json.dumps(report, ensure_ascii=False, indent=2))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
