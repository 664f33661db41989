"""data - Unit test
"""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import call, patch

from cspice import data, utils
from cspice.error import SpiceError
from cspice.native import library

logger = logging.getLogger(__name__)
utils.enable_logging(extra_loggers=[__name__])


class LoadKernelTestCase(unittest.TestCase):
    def setUp(self):
        furnish_patch = patch.object(data, "furnish")
        self.mock_furnish = furnish_patch.start()
        self.addCleanup(furnish_patch.stop)

        unload_patch = patch.object(data, "unload")
        self.mock_unload = unload_patch.start()
        self.addCleanup(unload_patch.stop)

    def test_context_manager(self):
        with data.load_kernel(["a.tls", ["b.bsp", Path("c.tf")]]) as kern:
            self.assertListEqual(["a.tls", "b.bsp", "c.tf"], kern.loaded)
            self.mock_furnish.assert_has_calls([call("a.tls"), call("b.bsp"), call("c.tf")])
            self.mock_unload.assert_not_called()

        self.mock_unload.assert_has_calls([call("c.tf"), call("b.bsp"), call("a.tls")])
        self.assertListEqual([], kern.loaded)

    def test_dict_meta_first(self):
        kern = data.load_kernel({"spk": ["de.bsp"], "meta": "meta.tm", "lsk": "naif.tls"})
        self.assertListEqual(["meta.tm", "de.bsp", "naif.tls"], kern.loaded)

        kern.unload("de.bsp")
        self.assertListEqual(["meta.tm", "naif.tls"], kern.loaded)
        self.mock_unload.assert_called_once_with("de.bsp")

        kern.unload(clear=True)
        self.assertListEqual([], kern.loaded)

    def test_failed_load_unloads(self):
        self.mock_furnish.side_effect = [None, SpiceError("SPICE(NOSUCHFILE)")]
        with self.assertRaises(SpiceError):
            data.load_kernel(["good.tls", "missing.bsp"])
        self.mock_unload.assert_called_once_with("good.tls")

    def test_invalid(self):
        with self.assertRaisesRegex(ValueError, "Invalid"):
            data.load_kernel(42)

        kern = data.load_kernel([])
        with self.assertRaisesRegex(ValueError, "Must specify"):
            kern.unload()


@unittest.skipUnless(library.is_available(), "CSPICE library not found")
class KernelPoolTestCase(unittest.TestCase):
    def setUp(self):
        self.__tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.__tmp_dir.cleanup)
        self.tmp_dir = Path(self.__tmp_dir.name)

        data.clear_kernels()
        self.addCleanup(data.clear_kernels)

    def test_furnish_missing(self):
        with self.assertRaises(SpiceError) as ctx:
            data.furnish("NON_EXISTENT_FILE")
        self.assertEqual("SPICE(NOSUCHFILE)", ctx.exception.short_message)

    def test_furnish_unload_text_kernel(self):
        kernel = self.tmp_dir / "test.tpc"
        kernel.write_text("KPL/PCK\n\n\\begindata\n\n    BODY399_RADII = ( 6378.1366 6378.1366 6356.7519 )\n\n"
                          "\\begintext\n")

        self.assertEqual(0, data.kernel_count())
        with data.load_kernel(kernel):
            self.assertEqual(1, data.kernel_count())
            self.assertEqual(1, data.kernel_count("TEXT"))
            self.assertEqual(0, data.kernel_count("SPK"))
        self.assertEqual(0, data.kernel_count())

        data.furnish(kernel)
        data.clear_kernels()
        self.assertEqual(0, data.kernel_count("ALL"))


if __name__ == "__main__":
    unittest.main()
