import tempfile
import unittest
from pathlib import Path
from unittest import mock

from modmanager.main import apply_overrides, async_main, main, parse_args
from modmanager.storage.models import ReleaseChannel
from modmanager.utils.config import Config, PathsConfig


class TestArguments(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_overrides(self):
        args = parse_args(
            ["--mods-dir", str(self.tmp), "--game-version", "1.18.2", "--channel", "allow_beta"]
        )

        config = apply_overrides(Config(), args)

        self.assertEqual(config.paths.mods_dir, self.tmp.resolve())
        self.assertEqual(config.target_game_version, "1.18.2")
        self.assertEqual(config.release_channel, ReleaseChannel.ALLOW_BETA)

    def test_no_overrides(self):
        config = apply_overrides(Config(target_game_version="1.17.1"), parse_args([]))

        self.assertEqual(config.target_game_version, "1.17.1")
        self.assertEqual(config.release_channel, ReleaseChannel.STABLE_ONLY)
        self.assertEqual(config.paths.mods_dir, Path("./mods"))

    def test_unknown_channel(self):
        with mock.patch("sys.stderr"), self.assertRaises(SystemExit):
            parse_args(["--channel", "nightly"])


class TestAsyncMain(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    async def test_missing_mods_dir(self):
        config = Config(paths=PathsConfig(mods_dir=self.tmp / "missing"))

        with self.assertLogs("modmanager.main", level="ERROR"):
            self.assertEqual(await async_main(config), 1)

    async def test_empty_mods_dir(self):
        config = Config(paths=PathsConfig(mods_dir=self.tmp))

        with self.assertLogs("modmanager.main", level="INFO") as logs:
            self.assertEqual(await async_main(config), 0)

        self.assertTrue(any("0 outdated, 0 up to date, 0 unknown" in line for line in logs.output))


@mock.patch("modmanager.main.setup_logging")
class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_config_error_exits_with_1(self, _setup_logging):
        path = self.tmp / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with self.assertLogs("modmanager.main", level="ERROR"), self.assertRaises(SystemExit) as cm:
            main(["--config", str(path)])

        self.assertEqual(cm.exception.code, 1)

    def test_missing_mods_dir_exits_with_1(self, _setup_logging):
        args = ["--config", str(self.tmp / "missing.yaml"), "--mods-dir", str(self.tmp / "nope")]

        with self.assertLogs("modmanager.main", level="ERROR"), self.assertRaises(SystemExit) as cm:
            main(args)

        self.assertEqual(cm.exception.code, 1)

    def test_success_exits_with_0(self, _setup_logging):
        args = ["--config", str(self.tmp / "missing.yaml"), "--mods-dir", str(self.tmp)]

        with self.assertLogs("modmanager.main", level="INFO"), self.assertRaises(SystemExit) as cm:
            main(args)

        self.assertEqual(cm.exception.code, 0)


if __name__ == "__main__":
    unittest.main()
