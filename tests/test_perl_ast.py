import unittest

from perl_ast import *


class TestQuoting(unittest.TestCase):
    def test_bare_keys(self):
        """Test identifiers are left bare on the left of =>."""
        self.assertEqual(perl_hash_key("char"), "char")
        self.assertEqual(perl_hash_key("size_t"), "size_t")

    def test_quoted_keys(self):
        self.assertEqual(perl_hash_key("unsigned char"), "'unsigned char'")
        self.assertEqual(perl_hash_key("1st"), "'1st'")

    def test_escapes(self):
        self.assertEqual(perl_quote("it's"), "'it\\'s'")
        self.assertEqual(perl_quote("a\\b"), "'a\\\\b'")


class TestNodes(unittest.TestCase):
    def test_hash_assign(self):
        """Test keys are padded to the widest and the last entry has no
        comma."""
        node = HashAssign("%sizeof", [
            HashEntry("char", 1),
            HashEntry("long double", 16),
            HashEntry("size_t", 8),
        ])
        self.assertEqual(node.perl_code(), "\n".join([
            "%sizeof = (",
            "    char          => 0x1,",
            "    'long double' => 0x10,",
            "    size_t        => 0x8",
            ");",
        ]))

    def test_hash_assign_single(self):
        node = HashAssign("%h", [HashEntry("int", 255)])
        self.assertEqual(list(node.lines()), ["%h = (", "    int => 0xff", ");"])

    def test_hash_assign_empty(self):
        self.assertEqual(list(HashAssign("%h", []).lines()), ["%h = (", ");"])

    def test_comment(self):
        """Test empty comment lines keep the prefix."""
        self.assertEqual(list(Comment(["a", "", "b"]).lines()),
                         ["# a", "# ", "# b"])

    def test_begin_block(self):
        node = Block([
            Stmt("local %INC"),
            NoWarnings("portable"),
            Require("linux/fs.ph"),
        ], name="BEGIN")
        self.assertEqual(node.perl_code(), "\n".join([
            "BEGIN {",
            "    local %INC;",
            "    no warnings 'portable';",
            "    require 'linux/fs.ph';",
            "}",
        ]))

    def test_nested_blocks(self):
        """Test nesting indents again and blank lines stay empty."""
        node = Block([
            Package("A::B"),
            Blank(),
            Sub("FETCH", [Stmt("return 1")]),
        ])
        self.assertEqual(list(node.lines()), [
            "{",
            "    package A::B;",
            "",
            "    sub FETCH {",
            "        return 1;",
            "    }",
            "}",
        ])

    def test_require_module(self):
        self.assertEqual(Require("Tie::Hash", is_file=False).perl_code(),
                         "require Tie::Hash;")

    def test_our_and_tie(self):
        self.assertEqual(Our("%sizeof").perl_code(), "our %sizeof;")
        self.assertEqual(Our("@ISA", "qw/ Tie::StdHash /").perl_code(),
                         "our @ISA = qw/ Tie::StdHash /;")
        self.assertEqual(Tie("%sizeof", "A::HASH").perl_code(),
                         "tie %sizeof, 'A::HASH';")

    def test_module(self):
        """Test a module ends with a newline."""
        module = Module([Package("A"), Blank(), TrueValue(), End()])
        self.assertEqual(module.perl_code(), "package A;\n\n1;\n__END__\n")

    def test_dump_tree(self):
        tree = dump_tree(Module([Use("strict")]))
        self.assertEqual(tree.splitlines(), [
            "Module:",
            "    body=[",
            "        Use:",
            '            module="strict"',
            "    ]",
        ])


if __name__ == "__main__":
    unittest.main()
