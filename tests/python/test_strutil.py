"""Unit tests for string helpers."""

import unittest
from strargv.strutil import cmpstrval, scan_int, strisallzero


class TestStrutil(unittest.TestCase):
    """Test string predicate functionality."""

    def test_cmpstrval(self):
        """Test prefix comparison."""
        self.assertEqual(7, cmpstrval("banner=hello", "banner="))
        self.assertEqual(0, cmpstrval("anything", ""))
        self.assertIsNone(cmpstrval("bann", "banner="))
        self.assertIsNone(cmpstrval("signature=x", "banner="))

    def test_strisallzero(self):
        """Test all-zero detection."""
        self.assertTrue(strisallzero("0"))
        self.assertTrue(strisallzero("0000"))
        self.assertFalse(strisallzero(""))
        self.assertFalse(strisallzero("0010"))
        self.assertFalse(strisallzero("00 "))

    def test_scan_int(self):
        """Test unsigned integer scanning."""
        self.assertEqual(0, scan_int("0"))
        self.assertEqual(9600, scan_int("9600"))
        self.assertEqual(115200, scan_int("00115200"))

    def test_scan_int_invalid(self):
        """Test that invalid integers are rejected."""
        self.assertEqual(-1, scan_int(""))
        self.assertEqual(-1, scan_int("-5"))
        self.assertEqual(-1, scan_int("12a"))
        self.assertEqual(-1, scan_int(" 12"))
        self.assertEqual(-1, scan_int("١٢"))


if __name__ == "__main__":
    unittest.main()
