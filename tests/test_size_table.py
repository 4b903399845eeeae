import unittest
from unittest import mock

import size_table
from native_types import resolve
from probe import ctypes_sizes
from profiles import get_profile
from size_table import TypeSizeEntry, TypeSizeTable, lookup_sizeof


def make_table(pairs):
    return TypeSizeTable(TypeSizeEntry(s, resolve(s), n) for s, n in pairs)


class TestTypeSizeTable(unittest.TestCase):
    def setUp(self):
        spellings = get_profile("backend").table_spellings()
        self.table = make_table(zip(spellings, ctypes_sizes(spellings)))

    def test_order_kept(self):
        spellings = [e.spelling for e in self.table]
        self.assertEqual(spellings, get_profile("backend").table_spellings())
        self.assertEqual(len(self.table), 35)

    def test_mapping(self):
        self.assertIn("long unsigned", self.table)
        self.assertNotIn("__int128", self.table)
        self.assertEqual(self.table["char"], 1)
        self.assertEqual(self.table["long unsigned"], self.table["unsigned long"])

    def test_sizes_is_a_copy(self):
        sizes = self.table.sizes()
        sizes["char"] = 100
        self.assertEqual(self.table["char"], 1)

    def test_spellings_of_a_type_agree(self):
        by_type = {}
        for entry in self.table:
            by_type.setdefault(entry.type.name, set()).add(entry.size)
        for name, sizes in by_type.items():
            self.assertEqual(len(sizes), 1, name)

    def test_family_order(self):
        """Test a conventional data model passes the sanity check."""
        self.assertEqual(self.table.check_family_order(), [])

    def test_family_order_problem(self):
        table = make_table([("short", 4), ("int", 2), ("long", 8)])
        with self.assertLogs("size_table", level="WARNING"):
            self.assertEqual(table.check_family_order(), [("short", "int")])

    def test_duplicate_spelling(self):
        with self.assertRaises(ValueError):
            make_table([("int", 4), ("long", 8), ("int", 4)])

    def test_non_positive_size(self):
        with self.assertRaises(ValueError):
            make_table([("int", 0)])

    def test_size_mismatch(self):
        """Test two spellings of one type with different sizes."""
        with self.assertRaises(RuntimeError):
            make_table([("unsigned long", 8), ("long unsigned", 4)])


class TestLookupSizeof(unittest.TestCase):
    def setUp(self):
        self.table = make_table([("char", 1), ("int", 4)])

    def test_present(self):
        with mock.patch.object(size_table.logger, "warning") as warning:
            self.assertEqual(lookup_sizeof(self.table, "int"), 4)
        warning.assert_not_called()

    def test_missing(self):
        """Test a missing spelling warns once and returns the default."""
        with self.assertLogs("size_table", level="WARNING") as cm:
            self.assertIsNone(lookup_sizeof(self.table, "__int128"))
        self.assertEqual(len(cm.output), 1)
        self.assertIn("No sizeof for C type '__int128'", cm.output[0])
        self.assertIn("test_size_table.py", cm.output[0])

    def test_missing_default(self):
        with self.assertLogs("size_table", level="WARNING"):
            self.assertEqual(lookup_sizeof({}, "int", default=-1), -1)

    def test_plain_dict(self):
        self.assertEqual(lookup_sizeof(self.table.sizes(), "char"), 1)


if __name__ == "__main__":
    unittest.main()
