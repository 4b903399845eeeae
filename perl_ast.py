import re

from slotted import SlottedClass, optional

INDENT = "    "

PERL_IDENTIFIER = re.compile(r"^[A-Za-z_]\w*$")


class Node(SlottedClass):
    def lines(self):
        """
        Yields strings representing each line of the perl source for this
        node. The tailing newline is excluded.
        """
        raise NotImplementedError("lines() not implemented for node {}".format(type(self)))

    def perl_code(self):
        return "\n".join(self.lines())

    def __str__(self):
        return self.perl_code()


def ext_enumerate(iterable):
    """
    Yields:
        Any: the item
        idx: item index
        bool: if the element is last
    """
    items = list(iterable)
    for idx, item in enumerate(items):
        yield item, idx, idx == len(items) - 1


def iter_fields(node):
    for attr in node.__attrs__:
        yield attr, getattr(node, attr)


def iter_indent_seq(seq):
    """Iterate through a sequence of nodes and indent each line in the node."""
    for node in seq:
        for line in node.lines():
            yield INDENT + line if line else line


def dump_tree(node, indent_size=4):
    indent = " " * indent_size

    def _lines(node, attr=None):
        if attr:
            start = attr + "="
        else:
            start = ""

        if isinstance(node, Node):
            yield start + node.__class__.__name__ + ":"

            for attr, val in iter_fields(node):
                for line in _lines(val, attr=attr):
                    yield indent + line
        elif isinstance(node, (list, tuple)):
            if not node:
                yield start + "[]"
            else:
                yield start + "["

                for elem in node:
                    for line in _lines(elem):
                        yield indent + line

                yield "]"
        elif isinstance(node, str):
            yield start + '"{}"'.format(node.replace('"', r'\"').replace("\n", r"\n"))
        else:
            yield start + str(node)

    return "\n".join(_lines(node))


def perl_quote(s):
    """Single quoted perl string literal."""
    return "'{}'".format(s.replace("\\", "\\\\").replace("'", "\\'"))


def perl_hash_key(key):
    """Identifiers need no quotes on the left of =>."""
    if PERL_IDENTIFIER.match(key):
        return key
    return perl_quote(key)


################ Nodes #################


class Module(Node):
    __attrs__ = ("body", )
    __types__ = {"body": [Node]}
    __defaults__ = {"body": []}

    def lines(self):
        for node in self.body:
            yield from node.lines()

    def perl_code(self):
        # Files end with a newline
        return super().perl_code() + "\n"


class Blank(Node):
    def lines(self):
        yield ""


class Comment(Node):
    """Comment lines. Empty lines keep the '# ' prefix."""
    __attrs__ = ("text", )
    __types__ = {"text": [str]}

    def lines(self):
        for line in self.text:
            yield "# " + line


class Stmt(Node):
    """A statement the tree does not model any further."""
    __attrs__ = ("code", )
    __types__ = {"code": str}

    def lines(self):
        yield self.code + ";"


class Package(Node):
    __attrs__ = ("name", )
    __types__ = {"name": str}

    def lines(self):
        yield "package {};".format(self.name)


class Use(Node):
    __attrs__ = ("module", )
    __types__ = {"module": str}

    def lines(self):
        yield "use {};".format(self.module)


class NoWarnings(Node):
    __attrs__ = ("category", )
    __types__ = {"category": str}

    def lines(self):
        yield "no warnings {};".format(perl_quote(self.category))


class Require(Node):
    """require of a file (quoted) or of a module (bare)."""
    __attrs__ = ("target", "is_file")
    __types__ = {
        "target": str,
        "is_file": bool,
    }
    __defaults__ = {"is_file": True}

    def lines(self):
        if self.is_file:
            yield "require {};".format(perl_quote(self.target))
        else:
            yield "require {};".format(self.target)


class Block(Node):
    """Bare block, or a named one such as BEGIN."""
    __attrs__ = ("body", "name")
    __types__ = {
        "body": [Node],
        "name": optional(str),
    }
    __defaults__ = {"name": None}

    def lines(self):
        if self.name:
            yield self.name + " {"
        else:
            yield "{"
        yield from iter_indent_seq(self.body)
        yield "}"


class Sub(Node):
    __attrs__ = ("name", "body")
    __types__ = {
        "name": str,
        "body": [Node],
    }

    def lines(self):
        yield "sub {} {{".format(self.name)
        yield from iter_indent_seq(self.body)
        yield "}"


class Our(Node):
    __attrs__ = ("var", "init")
    __types__ = {
        "var": str,
        "init": optional(str),
    }
    __defaults__ = {"init": None}

    def lines(self):
        if self.init is None:
            yield "our {};".format(self.var)
        else:
            yield "our {} = {};".format(self.var, self.init)


class Tie(Node):
    __attrs__ = ("var", "cls")
    __types__ = {
        "var": str,
        "cls": str,
    }

    def lines(self):
        yield "tie {}, {};".format(self.var, perl_quote(self.cls))


class HashEntry(Node):
    __attrs__ = ("key", "value")
    __types__ = {
        "key": str,
        "value": int,
    }

    def key_code(self):
        return perl_hash_key(self.key)

    def value_code(self):
        return "0x{:x}".format(self.value)

    def lines(self):
        yield "{} => {}".format(self.key_code(), self.value_code())


class HashAssign(Node):
    """
    %var = ( key => value, ... );

    Keys are padded to the widest one so the arrows line up. The last entry
    gets no trailing comma.
    """
    __attrs__ = ("var", "entries")
    __types__ = {
        "var": str,
        "entries": [HashEntry],
    }

    def lines(self):
        yield "{} = (".format(self.var)

        width = max((len(e.key_code()) for e in self.entries), default=0)
        for entry, _, is_last in ext_enumerate(self.entries):
            line = "{}{} => {}".format(
                INDENT, entry.key_code().ljust(width), entry.value_code())
            if not is_last:
                line += ","
            yield line

        yield ");"


class TrueValue(Node):
    """Modules loaded with require must end on a true value."""

    def lines(self):
        yield "1;"


class End(Node):
    def lines(self):
        yield "__END__"
