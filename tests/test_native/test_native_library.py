"""library - Unit test
"""

import ctypes
import logging
import os
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from cspice import utils
from cspice.native import config, library
from cspice.native.prototypes import Prototype

logger = logging.getLogger(__name__)
utils.enable_logging(extra_loggers=[__name__])

_ENV_NAMES = [
    config.CSPICE_DIR,
    config.CSPICE_LIB,
    config.CSPICE_DOWNLOAD,
    config.CSPICE_CACHE_DIR,
]


class LibraryTestCase(unittest.TestCase):
    def setUp(self):
        self.__tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.__tmp_dir.cleanup)
        self.tmp_dir = Path(self.__tmp_dir.name)

        self.cache_dir = self.tmp_dir / "cache"
        self.cspice_dir = self.tmp_dir / "cspice"
        (self.cspice_dir / "lib").mkdir(parents=True)
        (self.cspice_dir / "include").mkdir(parents=True)

        # Isolate from the user's environment.
        env = {k: v for k, v in os.environ.items() if k not in _ENV_NAMES}
        env[config.CSPICE_CACHE_DIR] = str(self.cache_dir)
        env_patch = patch.dict(os.environ, env, clear=True)
        env_patch.start()
        self.addCleanup(env_patch.stop)

        host_patch = patch.object(config.platform, "system", return_value="Linux")
        host_patch.start()
        self.addCleanup(host_patch.stop)

    def test_find_cspice_dir(self):
        self.assertIsNone(library.find_cspice_dir())

        os.environ[config.CSPICE_DIR] = str(self.cspice_dir)
        self.assertEqual(self.cspice_dir, library.find_cspice_dir())

        os.environ[config.CSPICE_DIR] = str(self.tmp_dir / "missing")
        with self.assertRaises(NotADirectoryError):
            library.find_cspice_dir()

    def test_find_include_dir(self):
        with self.assertRaises(library.CSPICENotFoundError):
            library.find_include_dir()

        with self.assertRaisesRegex(library.CSPICENotFoundError, "SpiceUsr.h"):
            library.find_include_dir(self.cspice_dir)

        (self.cspice_dir / "include" / "SpiceUsr.h").touch()
        self.assertEqual(self.cspice_dir / "include", library.find_include_dir(self.cspice_dir))

    def test_find_library_env_lib(self):
        lib_file = self.tmp_dir / "custom.so"
        os.environ[config.CSPICE_LIB] = str(lib_file)
        with self.assertRaisesRegex(library.CSPICENotFoundError, "CSPICE_LIB"):
            library.find_library()

        lib_file.touch()
        self.assertEqual(lib_file, library.find_library())

    def test_find_library_cspice_dir_shared(self):
        lib_file = self.cspice_dir / "lib" / "libcspice.so"
        lib_file.touch()
        os.environ[config.CSPICE_DIR] = str(self.cspice_dir)
        self.assertEqual(lib_file, library.find_library())

    def test_find_library_cspice_dir_static(self):
        (self.cspice_dir / "lib" / "cspice.a").touch()
        os.environ[config.CSPICE_DIR] = str(self.cspice_dir)

        expected = self.cache_dir / "libcspice.so"
        with patch.object(library.download, "build_shared_library", return_value=expected) as mock_build:
            self.assertEqual(expected, library.find_library())
            mock_build.assert_called_once_with(self.cspice_dir, output=expected)

        # Already linked, and newer than the archive.
        self.cache_dir.mkdir()
        expected.touch()
        with patch.object(library.download, "build_shared_library") as mock_build:
            self.assertEqual(expected, library.find_library())
            mock_build.assert_not_called()

        # Older than the archive, so it is linked again.
        archive_mtime = (self.cspice_dir / "lib" / "cspice.a").stat().st_mtime
        os.utime(expected, (archive_mtime - 100, archive_mtime - 100))
        with patch.object(library.download, "build_shared_library", return_value=expected) as mock_build:
            self.assertEqual(expected, library.find_library())
            mock_build.assert_called_once_with(self.cspice_dir, output=expected)

    def test_is_available_link_failure(self):
        (self.cspice_dir / "lib" / "cspice.a").write_bytes(b"not an archive")
        os.environ[config.CSPICE_DIR] = str(self.cspice_dir)

        failure = subprocess.CalledProcessError(1, ["cc", "-shared", "-fPIC"])
        with patch.object(library.download, "build_shared_library", side_effect=failure):
            with self.assertRaises(subprocess.CalledProcessError):
                library.find_library()
            self.assertFalse(library.is_available())

    def test_find_library_cache_then_bundled(self):
        bundled = self.tmp_dir / "spiceypy" / "utils" / "libcspice.so"
        with patch.object(library, "find_bundled_library", return_value=bundled):
            self.assertEqual(bundled, library.find_library())

            cached = self.cache_dir / "libcspice.so"
            self.cache_dir.mkdir()
            cached.touch()
            self.assertEqual(cached, library.find_library())

    def test_find_library_not_found(self):
        with patch.object(library, "find_bundled_library", return_value=None), patch.object(
            library.download, "ensure_toolkit"
        ) as mock_ensure:
            with self.assertRaisesRegex(library.CSPICENotFoundError, "CSPICE_DOWNLOAD"):
                library.find_library()
            self.assertFalse(library.is_available())
            mock_ensure.assert_not_called()

    def test_find_library_download(self):
        os.environ[config.CSPICE_DOWNLOAD] = "1"
        built = self.cache_dir / "libcspice.so"
        with patch.object(library, "find_bundled_library", return_value=None), patch.object(
            library.download, "ensure_toolkit", return_value=built
        ) as mock_ensure:
            self.assertEqual(built, library.find_library())
            mock_ensure.assert_called_once_with(self.cache_dir)

            # Availability checks never download.
            mock_ensure.reset_mock()
            self.assertFalse(library.is_available())
            mock_ensure.assert_not_called()

    def test_find_bundled_library(self):
        pkg_dir = self.tmp_dir / "spiceypy"
        (pkg_dir / "utils").mkdir(parents=True)
        fake_spec = MagicMock(submodule_search_locations=[str(pkg_dir)])

        with patch.object(library.importlib.util, "find_spec", return_value=fake_spec):
            self.assertIsNone(library.find_bundled_library())
            (pkg_dir / "utils" / "libcspice.so").touch()
            self.assertEqual(pkg_dir / "utils" / "libcspice.so", library.find_bundled_library())

        with patch.object(library.importlib.util, "find_spec", return_value=None):
            self.assertIsNone(library.find_bundled_library())

    def test_apply_prototypes(self):
        fake_lib = MagicMock(spec=["str2et_c"])
        fake_lib.str2et_c = MagicMock()
        protos = {
            "str2et_c": Prototype("str2et_c", None, ("a", "b")),
            "nope_c": Prototype("nope_c", None, ()),
        }
        missing = library.apply_prototypes(fake_lib, protos)
        self.assertListEqual(["nope_c"], missing)
        self.assertListEqual(["a", "b"], fake_lib.str2et_c.argtypes)
        self.assertIsNone(fake_lib.str2et_c.restype)

    def test_get_library_cached(self):
        library.reset_library()
        self.addCleanup(library.reset_library)
        with patch.object(library, "load_library", return_value="fake-lib") as mock_load:
            self.assertEqual("fake-lib", library.get_library())
            self.assertEqual("fake-lib", library.get_library())
            mock_load.assert_called_once_with()


@unittest.skipUnless(library.is_available(), "CSPICE library not found")
class LoadLibraryTestCase(unittest.TestCase):
    def test_load_library(self):
        protos = {"j2000_c": Prototype("j2000_c", ctypes.c_double, ())}
        lib = library.load_library(prototypes=protos)
        self.assertEqual(2451545.0, lib.j2000_c())

    def test_load_library_explicit_path(self):
        path = library.find_library(allow_download=False)
        protos = {"b1950_c": Prototype("b1950_c", ctypes.c_double, ())}
        lib = library.load_library(path, prototypes=protos)
        self.assertAlmostEqual(2433282.42345905, lib.b1950_c(), places=8)


if __name__ == "__main__":
    unittest.main()
