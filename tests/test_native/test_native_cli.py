"""native command line - Unit test
"""

import logging
import os
import unittest
from pathlib import Path
from unittest.mock import patch

from cspice import utils
from cspice.native import __main__ as cli
from cspice.native import config

logger = logging.getLogger(__name__)
utils.enable_logging(extra_loggers=[__name__])


class ConfigTestCase(unittest.TestCase):
    def test_shared_library_names(self):
        self.assertTupleEqual(("libcspice.so",), config.shared_library_names("Linux"))
        self.assertTupleEqual(("libcspice.dylib", "libcspice.so"), config.shared_library_names("Darwin"))
        self.assertTupleEqual(("cspice.dll",), config.shared_library_names("Windows"))
        with self.assertRaises(OSError):
            config.shared_library_names("Plan9")

    def test_cache_dir(self):
        with patch.dict(os.environ, {config.CSPICE_CACHE_DIR: "/tmp/cspice-cache"}):
            self.assertEqual(Path("/tmp/cspice-cache"), config.cache_dir())
        with patch.dict(os.environ, {config.CSPICE_CACHE_DIR: ""}):
            self.assertEqual(config.DEFAULT_CACHE_DIR.expanduser(), config.cache_dir())

    def test_env_flag(self):
        for value, expected in [("1", True), ("yes", True), ("TRUE", True), ("0", False), ("off", False)]:
            with patch.dict(os.environ, {config.CSPICE_DOWNLOAD: value}):
                self.assertIs(expected, utils.env_flag(config.CSPICE_DOWNLOAD), value)
        with patch.dict(os.environ, {config.CSPICE_DOWNLOAD: ""}):
            self.assertTrue(utils.env_flag(config.CSPICE_DOWNLOAD, default=True))


class CommandLineTestCase(unittest.TestCase):
    def setUp(self):
        log_patch = patch.object(cli, "enable_logging")
        self.mock_logging = log_patch.start()
        self.addCleanup(log_patch.stop)

    def test_locate(self):
        with patch.object(cli.library, "find_library", return_value=Path("/x/libcspice.so")):
            self.assertEqual(Path("/x/libcspice.so"), cli.cmd_line_call(["locate"]))
        self.mock_logging.assert_called_once_with(log_level=logging.INFO)

    def test_download_verbose(self):
        with patch.object(cli.download, "download_toolkit", return_value=Path("/c/cspice")) as mock_dl:
            cli.cmd_line_call(["-v", "download", "-d", "/c", "--force"])
            mock_dl.assert_called_once_with("/c", url=None, force=True)
        self.mock_logging.assert_called_once_with(log_level=logging.DEBUG)

    def test_build(self):
        with patch.object(cli.download, "build_shared_library", return_value="lib") as mock_build:
            self.assertEqual("lib", cli.cmd_line_call(["build", "/opt/cspice", "-o", "out.so", "--from_source"]))
            mock_build.assert_called_once_with("/opt/cspice", output="out.so", compiler=None, from_source=True)

        with patch.object(cli.download, "ensure_toolkit", return_value="cached") as mock_ensure:
            self.assertEqual("cached", cli.cmd_line_call(["build"]))
            mock_ensure.assert_called_once_with()

    def test_bindgen(self):
        with patch.object(cli.bindgen, "write_bindings", return_value=Path("b.py")) as mock_write:
            cli.cmd_line_call(["bindgen", "-o", "b.py", "--cspice_dir", "/opt/cspice"])
            mock_write.assert_called_once_with("b.py", cspice_dir="/opt/cspice", cpp=None)

    def test_failure_exits(self):
        with patch.object(cli.library, "find_library", side_effect=FileNotFoundError("nope")):
            with self.assertRaises(SystemExit) as ctx:
                cli.cmd_line_call(["locate"])
        self.assertEqual(1, ctx.exception.code)


if __name__ == "__main__":
    unittest.main()
