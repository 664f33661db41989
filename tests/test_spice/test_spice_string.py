"""string - Unit test
"""

import ctypes
import logging
import unittest
from pathlib import Path

from cspice import string, utils
from cspice.string import SpiceString

logger = logging.getLogger(__name__)
utils.enable_logging(extra_loggers=[__name__])


class SpiceStringTestCase(unittest.TestCase):
    def test_from_buffer(self):
        spice_str = SpiceString.from_buffer(b"ab\0\0\0")
        self.assertEqual("ab", spice_str.as_str())

        buffer = ctypes.create_string_buffer(b"moon", 10)
        self.assertEqual("moon", SpiceString.from_buffer(buffer))

    def test_from_bad_buffer(self):
        with self.assertRaisesRegex(ValueError, "nul terminator"):
            SpiceString.from_buffer(b"ab")

    def test_init(self):
        self.assertEqual(b"J2000", SpiceString("J2000").as_bytes())
        self.assertEqual(b"J2000", SpiceString(b"J2000").as_char_p())
        self.assertEqual("a/b.bsp", SpiceString(Path("a/b.bsp")).as_str())
        self.assertEqual(SpiceString("x"), SpiceString(SpiceString("x")))
        self.assertEqual(5, len(SpiceString("J2000")))

        with self.assertRaisesRegex(ValueError, "nul"):
            SpiceString("a\0b")
        with self.assertRaises(TypeError):
            SpiceString(42)
        with self.assertRaises(UnicodeEncodeError):
            SpiceString("café")

    def test_hash_eq(self):
        self.assertEqual(SpiceString("earth"), "earth")
        self.assertNotEqual(SpiceString("earth"), "moon")
        self.assertEqual(1, len({SpiceString("earth"), SpiceString(b"earth")}))
        self.assertIn("earth", {SpiceString("earth")})

    def test_buffers(self):
        buffer = string.create_buffer(8)
        self.assertEqual(8, len(buffer))
        self.assertEqual("", string.buffer_to_str(buffer))
        buffer.value = b"SCREEN"
        self.assertEqual("SCREEN", string.buffer_to_str(buffer))
        self.assertEqual(b"NULL", string.to_char_p("NULL"))


if __name__ == "__main__":
    unittest.main()
