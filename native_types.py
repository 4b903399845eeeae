import itertools

from slotted import SlottedClass
from spelling_parse import TypeSpelling, parse_spelling


class NativeType(SlottedClass):
    __attrs__ = ("name", "family", "ctype", "spellings")
    __types__ = {
        "name": str,
        "family": str,
        "ctype": str,
        "spellings": [str],
    }

    def __hash__(self):
        return hash(self.name)

    def __str__(self):
        return self.name


"""
The spellings listed for each type are the ones C11 6.7.2 allows, each in
one conventional word order. Any other order of the same words names the
same type.
"""


# Families, in the order their sizes are expected to grow
CHAR_FAMILY = "char"
SHORT_FAMILY = "short"
INT_FAMILY = "int"
LONG_FAMILY = "long"
LONG_LONG_FAMILY = "long long"
FLOAT_FAMILY = "float"
SIZE_FAMILY = "size"

INTEGRAL_FAMILIES = (CHAR_FAMILY, SHORT_FAMILY, INT_FAMILY, LONG_FAMILY,
                     LONG_LONG_FAMILY)


CHAR_TYPE = NativeType("char", CHAR_FAMILY, "c_char", ["char"])
SCHAR_TYPE = NativeType("signed char", CHAR_FAMILY, "c_byte", ["signed char"])
UCHAR_TYPE = NativeType("unsigned char", CHAR_FAMILY, "c_ubyte",
                        ["unsigned char"])

SHORT_TYPE = NativeType(
    "short", SHORT_FAMILY, "c_short",
    ["short", "short int", "signed short", "signed short int"])
USHORT_TYPE = NativeType(
    "unsigned short", SHORT_FAMILY, "c_ushort",
    ["unsigned short", "unsigned short int"])

INT_TYPE = NativeType("int", INT_FAMILY, "c_int",
                      ["int", "signed", "signed int"])
UINT_TYPE = NativeType("unsigned int", INT_FAMILY, "c_uint",
                       ["unsigned", "unsigned int"])

LONG_TYPE = NativeType(
    "long", LONG_FAMILY, "c_long",
    ["long", "long int", "signed long", "signed long int"])
ULONG_TYPE = NativeType(
    "unsigned long", LONG_FAMILY, "c_ulong",
    ["unsigned long", "unsigned long int"])

LONG_LONG_TYPE = NativeType(
    "long long", LONG_LONG_FAMILY, "c_longlong",
    ["long long", "long long int", "signed long long", "signed long long int"])
ULONG_LONG_TYPE = NativeType(
    "unsigned long long", LONG_LONG_FAMILY, "c_ulonglong",
    ["unsigned long long", "unsigned long long int"])

FLOAT_TYPE = NativeType("float", FLOAT_FAMILY, "c_float", ["float"])
DOUBLE_TYPE = NativeType("double", FLOAT_FAMILY, "c_double", ["double"])
LONG_DOUBLE_TYPE = NativeType("long double", FLOAT_FAMILY, "c_longdouble",
                              ["long double"])

SIZE_TYPE = NativeType("size_t", SIZE_FAMILY, "c_size_t", ["size_t"])


NATIVE_TYPES = (
    # Character
    CHAR_TYPE,
    SCHAR_TYPE,
    UCHAR_TYPE,

    # Integral
    SHORT_TYPE,
    USHORT_TYPE,
    INT_TYPE,
    UINT_TYPE,
    LONG_TYPE,
    ULONG_TYPE,
    LONG_LONG_TYPE,
    ULONG_LONG_TYPE,

    # Real floating point
    FLOAT_TYPE,
    DOUBLE_TYPE,
    LONG_DOUBLE_TYPE,

    # Typedefs
    SIZE_TYPE,
)


def _word_key(words):
    return tuple(sorted(words))


# Sorted word multiset -> type
_TYPES_BY_WORDS = {
    _word_key(spelling.split()): t
    for t in NATIVE_TYPES
    for spelling in t.spellings
}


def resolve(spelling):
    """
    Find the native type a spelling names.

    Args:
        spelling (str|TypeSpelling): e.g. "long unsigned int"

    Returns:
        NativeType

    Raises:
        SyntaxError: the spelling cannot be tokenized or is empty
        TypeError: the words do not name a supported native type
    """
    if not isinstance(spelling, TypeSpelling):
        spelling = parse_spelling(spelling)

    t = _TYPES_BY_WORDS.get(_word_key(spelling.words))
    if t is None:
        raise TypeError("'{}' does not name a supported native type".format(
            spelling))
    return t


def word_permutations(spelling):
    """
    Every distinct word order of a spelling, starting with the given one.

    "unsigned long int" -> "unsigned long int", "unsigned int long",
    "long unsigned int", ...
    """
    seen = set()
    for permutation in itertools.permutations(spelling.split()):
        s = " ".join(permutation)
        if s not in seen:
            seen.add(s)
            yield s


def all_spellings(types=NATIVE_TYPES):
    """Every accepted spelling of the given types in every word order."""
    for t in types:
        for spelling in t.spellings:
            yield from word_permutations(spelling)


def family_rank(t):
    """Position of the type's family in the growing-size chain, or None."""
    if t.family in INTEGRAL_FAMILIES:
        return INTEGRAL_FAMILIES.index(t.family)
    return None
