import os
import tempfile
import time
import unittest
from pathlib import Path

from catmonitor.errors import FetchFailure
from catmonitor.services.dashboard import DashboardService
from catmonitor.snapshots import SnapshotStore
from catmonitor.sources import TextSource


LOG_TEXT = """2025.03.01
项目:挑战杯:开题:已完成
整理了一下桌面
2025.03.02
项目:挑战杯:自动驾驶.测试实车:失败
项目:挑战杯:自动驾驶.PID与ROS:重启
"""

WORK_TEXT = """技能:Python{
    异步.进行中
}
项目:挑战杯{
    开题.已完成
}
项目:挑战杯:自动驾驶{
    测试实车.失败
    .60%
}
"""


class DashboardServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.log_path = self.root / "log.md"
        self.work_path = self.root / "work.md"
        self.log_path.write_text(LOG_TEXT, encoding="utf-8")
        self.work_path.write_text(WORK_TEXT, encoding="utf-8")
        self.service = DashboardService(
            log_source=TextSource("log", self.log_path),
            work_source=TextSource("work", self.work_path),
            store=SnapshotStore(),
        )

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_log_panel_annotates_transitions(self) -> None:
        panel = self.service.get_log_panel()

        self.assertEqual([g.date for g in panel.groups], ["2025.03.02", "2025.03.01"])
        newest = panel.groups[0].entries
        self.assertFalse(newest[0].isStatusUpdate)
        self.assertTrue(newest[1].isStatusUpdate)
        self.assertEqual(newest[1].tone, "restart")
        oldest = panel.groups[1].entries
        self.assertEqual(oldest[1].contextKind, "cat")

    def test_status_panel_is_ordered_with_verdicts(self) -> None:
        panel = self.service.get_status_panel()

        self.assertEqual([n.key for n in panel.nodes], ["项目:挑战杯:自动驾驶", "项目:挑战杯", "技能:Python"])
        self.assertEqual([n.position for n in panel.nodes], [0, 1, 2])
        self.assertTrue(panel.nodes[1].completed)
        self.assertFalse(panel.nodes[0].failed)
        progress_item = panel.nodes[0].items[1]
        self.assertEqual(progress_item.displayName, "进度")
        self.assertEqual(progress_item.state, "percent")
        self.assertEqual(progress_item.percent, 60)
        self.assertEqual(panel.nodes[2].categoryKind, "skill")

    def test_resolve_reports_display_position(self) -> None:
        result = self.service.resolve("项目:挑战杯:自动驾驶.测试实车")

        self.assertIsNotNone(result.match)
        assert result.match is not None
        self.assertEqual(result.match.key, "项目:挑战杯:自动驾驶")
        self.assertEqual(result.match.position, 0)
        self.assertEqual(result.normalizedContext, "项目:挑战杯:自动驾驶:测试实车")

    def test_resolve_without_match(self) -> None:
        result = self.service.resolve("任务:不存在")
        self.assertIsNone(result.match)

    def test_panels_fail_independently(self) -> None:
        self.log_path.unlink()

        with self.assertRaises(FetchFailure) as ctx:
            self.service.get_log_panel()
        self.assertEqual(ctx.exception.resource, "log")
        self.assertTrue(ctx.exception.message.startswith("无法加载开发日志 ("))

        panel = self.service.get_status_panel()
        self.assertEqual(len(panel.nodes), 3)

    def test_unchanged_file_reuses_snapshot(self) -> None:
        first = self.service.log_groups()
        second = self.service.log_groups()
        self.assertIs(first, second)

    def test_changed_file_is_reparsed(self) -> None:
        first = self.service.status_nodes()

        self.work_path.write_text("任务:新任务{\n步骤.进行中\n}\n", encoding="utf-8")
        later = time.time() + 5
        os.utime(self.work_path, (later, later))

        second = self.service.status_nodes()
        self.assertIsNot(first, second)
        self.assertEqual([n.name for n in second], ["新任务"])


if __name__ == "__main__":
    unittest.main()
