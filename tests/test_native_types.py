import unittest

from native_types import *


class TestResolve(unittest.TestCase):
    def test_canonical_names(self):
        """Test every canonical name resolves to its own type."""
        for t in NATIVE_TYPES:
            self.assertIs(resolve(t.name), t)

    def test_listed_spellings(self):
        for t in NATIVE_TYPES:
            for spelling in t.spellings:
                self.assertIs(resolve(spelling), t, spelling)

    def test_word_order(self):
        """Test reordered words name the same type."""
        self.assertIs(resolve("long unsigned"), ULONG_TYPE)
        self.assertIs(resolve("long unsigned int"), ULONG_TYPE)
        self.assertIs(resolve("int long unsigned"), ULONG_TYPE)
        self.assertIs(resolve("char unsigned"), UCHAR_TYPE)
        self.assertIs(resolve("short unsigned"), USHORT_TYPE)
        self.assertIs(resolve("long long unsigned int"), ULONG_LONG_TYPE)
        self.assertIs(resolve("long signed long"), LONG_LONG_TYPE)

    def test_implicit_int(self):
        self.assertIs(resolve("signed"), INT_TYPE)
        self.assertIs(resolve("unsigned"), UINT_TYPE)

    def test_char_signedness(self):
        """Test plain, signed and unsigned char stay three types."""
        self.assertIs(resolve("char"), CHAR_TYPE)
        self.assertIs(resolve("signed char"), SCHAR_TYPE)
        self.assertIs(resolve("unsigned char"), UCHAR_TYPE)

    def test_typedef(self):
        self.assertIs(resolve("size_t"), SIZE_TYPE)

    def test_unsupported(self):
        """Test spellings that are not supported native types."""
        for spelling in ("__int128", "short char", "long long long",
                         "unsigned float", "signed unsigned int",
                         "unsigned size_t", "long float"):
            with self.assertRaises(TypeError, msg=spelling):
                resolve(spelling)

    def test_syntax_error(self):
        with self.assertRaises(SyntaxError):
            resolve("")
        with self.assertRaises(SyntaxError):
            resolve("int *")


class TestSpellings(unittest.TestCase):
    def test_word_permutations(self):
        self.assertEqual(list(word_permutations("int")), ["int"])
        self.assertEqual(
            list(word_permutations("unsigned long")),
            ["unsigned long", "long unsigned"]
        )
        self.assertEqual(len(list(word_permutations("unsigned long int"))), 6)

    def test_repeated_words(self):
        """Test repeated words do not produce repeated spellings."""
        self.assertEqual(
            sorted(word_permutations("long long int")),
            ["int long long", "long int long", "long long int"]
        )

    def test_all_spellings(self):
        spellings = list(all_spellings())
        self.assertEqual(len(spellings), len(set(spellings)))
        self.assertIn("int unsigned", spellings)
        self.assertIn("double long", spellings)
        for spelling in spellings:
            resolve(spelling)

    def test_family_rank(self):
        self.assertLess(family_rank(CHAR_TYPE), family_rank(SHORT_TYPE))
        self.assertLess(family_rank(SHORT_TYPE), family_rank(UINT_TYPE))
        self.assertLess(family_rank(ULONG_TYPE), family_rank(LONG_LONG_TYPE))
        self.assertIsNone(family_rank(DOUBLE_TYPE))
        self.assertIsNone(family_rank(SIZE_TYPE))


if __name__ == "__main__":
    unittest.main()
