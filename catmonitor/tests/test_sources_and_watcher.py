import tempfile
import unittest
from pathlib import Path

from watchfiles import Change

from catmonitor.errors import FetchFailure
from catmonitor.parsers.log import parse_log
from catmonitor.services.dashboard import DashboardService
from catmonitor.snapshots import SnapshotStore
from catmonitor.sources import TextSource, default_sources
from catmonitor.watcher import SourceWatcher


class TextSourceTests(unittest.TestCase):
    def test_missing_file_raises_fetch_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            source = TextSource("log", Path(tmpdir) / "log.md")

            with self.assertRaises(FetchFailure) as ctx:
                source.read()

        self.assertEqual(ctx.exception.reason, "log.md not found")
        self.assertIsNone(source.signature())

    def test_invalid_utf8_raises_fetch_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "work.md"
            path.write_bytes(b"\xff\xfe\xfa")

            with self.assertRaises(FetchFailure) as ctx:
                TextSource("work", path).read()

        self.assertIn("UTF-8", ctx.exception.reason)

    def test_leading_bom_is_stripped_from_both_panels(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "log.md").write_text("2025.03.01\n项目:A:已完成\n", encoding="utf-8-sig")
            (root / "work.md").write_text("项目:A{\n甲.已完成\n}\n", encoding="utf-8-sig")
            service = DashboardService(
                log_source=TextSource("log", root / "log.md"),
                work_source=TextSource("work", root / "work.md"),
                store=SnapshotStore(),
            )

            log_panel = service.get_log_panel()
            status_panel = service.get_status_panel()
            result = service.resolve("项目:A.甲")

        self.assertEqual([g.date for g in log_panel.groups], ["2025.03.01"])
        self.assertEqual(status_panel.nodes[0].category, "项目")
        self.assertEqual(status_panel.nodes[0].categoryKind, "project")
        assert result.match is not None
        self.assertEqual(result.match.key, "项目:A")

    def test_default_sources_use_data_dir(self) -> None:
        log_source, work_source = default_sources(Path("/srv/cat"))

        self.assertEqual(log_source.name, "log")
        self.assertEqual(work_source.name, "work")
        self.assertEqual(log_source.path.parent, Path("/srv/cat"))


class SnapshotStoreTests(unittest.TestCase):
    def test_failed_read_drops_cached_snapshot(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "log.md"
            path.write_text("2025.01.01\n一条:记录\n", encoding="utf-8")
            source = TextSource("log", path)
            store = SnapshotStore()

            store.get(source, parse_log)
            self.assertEqual(store.cached_names(), ["log"])

            path.unlink()
            with self.assertRaises(FetchFailure):
                store.get(source, parse_log)
            self.assertEqual(store.cached_names(), [])

    def test_invalidate_path_matches_source(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            log_source = TextSource("log", root / "log.md")
            work_source = TextSource("work", root / "work.md")
            log_source.path.write_text("2025.01.01\n记录\n", encoding="utf-8")
            store = SnapshotStore()
            store.get(log_source, parse_log)

            dropped = store.invalidate_path(root / "log.md", (log_source, work_source))

        self.assertEqual(dropped, ["log"])
        self.assertEqual(store.cached_names(), [])


class SourceWatcherTests(unittest.TestCase):
    def test_classify_changes_keeps_only_source_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            sources = (TextSource("log", root / "log.md"), TextSource("work", root / "work.md"))
            changes = {
                (Change.modified, str(root / "log.md")),
                (Change.deleted, str(root / "work.md")),
                (Change.added, str(root / "notes.md")),
            }

            result = SourceWatcher.classify_changes(changes, sources)

        self.assertEqual(
            result,
            [("modified", root / "log.md"), ("deleted", root / "work.md")],
        )

    def test_watcher_starts_stopped(self) -> None:
        self.assertFalse(SourceWatcher().is_running)


if __name__ == "__main__":
    unittest.main()
