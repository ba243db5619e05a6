import unittest
from unittest.mock import patch

from fastapi import HTTPException

from catmonitor.errors import FetchFailure
from catmonitor.models import LogPanel, ResolveResult, StatusNode
from catmonitor.routers import dashboard as dashboard_router
from catmonitor.services.dashboard import build_resolve_result, build_status_panel


class _FakeDashboardService:
    def __init__(self, log_error: str | None = None, work_error: str | None = None) -> None:
        self.log_error = log_error
        self.work_error = work_error
        self.nodes = (
            StatusNode(category="项目", name="挑战杯"),
            StatusNode(category="项目", name="挑战杯:自动驾驶"),
        )

    def get_log_panel(self) -> LogPanel:
        if self.log_error:
            raise FetchFailure("log", self.log_error)
        return LogPanel(source="log.md")

    def get_status_panel(self):
        if self.work_error:
            raise FetchFailure("work", self.work_error)
        return build_status_panel(self.nodes, source="work.md")

    def resolve(self, context: str) -> ResolveResult:
        if self.work_error:
            raise FetchFailure("work", self.work_error)
        return build_resolve_result(context, self.nodes)


class DashboardRouterTests(unittest.TestCase):
    def test_log_fetch_failure_maps_to_503_with_localized_detail(self) -> None:
        fake = _FakeDashboardService(log_error="log.md not found")

        with patch.object(dashboard_router, "dashboard_service", fake):
            with self.assertRaises(HTTPException) as ctx:
                dashboard_router.get_log_panel()
            status_panel = dashboard_router.get_status_panel()

        self.assertEqual(ctx.exception.status_code, 503)
        self.assertEqual(ctx.exception.detail, "无法加载开发日志 (log.md not found)")
        self.assertEqual(len(status_panel.nodes), 2)

    def test_work_fetch_failure_leaves_log_panel_working(self) -> None:
        fake = _FakeDashboardService(work_error="permission denied for work.md")

        with patch.object(dashboard_router, "dashboard_service", fake):
            log_panel = dashboard_router.get_log_panel()
            with self.assertRaises(HTTPException) as ctx:
                dashboard_router.resolve_context("项目:挑战杯")

        self.assertEqual(log_panel.source, "log.md")
        self.assertEqual(ctx.exception.detail, "无法加载项目进度 (permission denied for work.md)")

    def test_resolve_returns_deepest_node(self) -> None:
        with patch.object(dashboard_router, "dashboard_service", _FakeDashboardService()):
            result = dashboard_router.resolve_context("项目:挑战杯:自动驾驶.测试实车")

        assert result.match is not None
        self.assertEqual(result.match.name, "挑战杯:自动驾驶")


if __name__ == "__main__":
    unittest.main()
