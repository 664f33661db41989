"""spice - Unit test
"""

import logging
import threading
import unittest
from unittest.mock import MagicMock, patch

from cspice import spice, utils
from cspice.native import library
from cspice.spice import Spice, SpiceThreadError, spice_lock

logger = logging.getLogger(__name__)
utils.enable_logging(extra_loggers=[__name__])


def _run_in_thread(func):
    """Run `func` in a new thread, returning its result or raised exception."""
    outcome = {}

    def target():
        try:
            outcome["result"] = func()
        except Exception as e:  # pylint: disable=broad-except
            outcome["error"] = e

    thread = threading.Thread(target=target, name="other-thread")
    thread.start()
    thread.join()
    return outcome


class SpiceOwnerTestCase(unittest.TestCase):
    def setUp(self):
        self.fake_lib = MagicMock(name="cdll")

        owner_patch = patch.object(Spice, "_owner", None)
        owner_patch.start()
        self.addCleanup(owner_patch.stop)

        init_patch = patch.object(Spice, "_initialize")
        self.mock_init = init_patch.start()
        self.addCleanup(init_patch.stop)

        lib_patch = patch.object(spice.library, "get_library", return_value=self.fake_lib)
        lib_patch.start()
        self.addCleanup(lib_patch.stop)

    def test_get_instance_binds_thread(self):
        self.assertIsNone(Spice.owner())
        one = Spice.get_instance()
        two = Spice.get_instance()
        self.assertIs(self.fake_lib, one.lib)
        self.assertIs(self.fake_lib, two.lib)
        self.assertEqual(threading.get_ident(), Spice.owner())
        self.mock_init.assert_called_once_with()

    def test_get_instance_other_thread(self):
        Spice.get_instance()
        outcome = _run_in_thread(Spice.get_instance)
        self.assertIsInstance(outcome.get("error"), SpiceThreadError)

        # The owner is unaffected.
        self.assertIs(self.fake_lib, spice.lib())

    def test_first_thread_wins(self):
        outcome = _run_in_thread(lambda: Spice.get_instance().lib)
        self.assertIs(self.fake_lib, outcome["result"])
        with self.assertRaises(SpiceThreadError):
            Spice.get_instance()

    def test_failed_initialize_releases_owner(self):
        self.mock_init.side_effect = OSError("cannot load")
        with self.assertRaises(OSError):
            Spice.get_instance()
        self.assertIsNone(Spice.owner())

        self.mock_init.side_effect = None
        self.assertIs(self.fake_lib, Spice.get_instance().lib)

    def test_spice_lock_reentrant(self):
        with spice_lock() as lib1:
            with spice_lock() as lib2:
                self.assertIs(lib1, lib2)
        self.assertIs(self.fake_lib, lib1)

    def test_spice_lock_other_thread(self):
        with spice_lock():
            outcome = _run_in_thread(lambda: spice_lock().__enter__())
        self.assertIsInstance(outcome.get("error"), SpiceThreadError)

    def test_spice_lock_other_thread_when_idle(self):
        with spice_lock():
            pass
        # The owner is not inside, but the library stays bound to it.
        outcome = _run_in_thread(lambda: spice_lock().__enter__())
        self.assertIsInstance(outcome.get("error"), SpiceThreadError)


@unittest.skipUnless(library.is_available(), "CSPICE library not found")
class SpiceInstanceTestCase(unittest.TestCase):
    def test_get_instance(self):
        one = Spice.get_instance()
        two = Spice.get_instance()
        self.assertIs(one.lib, two.lib)

    def test_get_instance_different_thread(self):
        Spice.get_instance()
        outcome = _run_in_thread(Spice.get_instance)
        self.assertIsInstance(outcome.get("error"), SpiceThreadError)


if __name__ == "__main__":
    unittest.main()
