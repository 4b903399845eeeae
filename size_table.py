import inspect
import logging

from native_types import NativeType, family_rank
from slotted import SlottedClass

logger = logging.getLogger(__name__)


class TypeSizeEntry(SlottedClass):
    __attrs__ = ("spelling", "type", "size")
    __types__ = {
        "spelling": str,
        "type": NativeType,
        "size": int,
    }

    def __str__(self):
        return "{} => {}".format(self.spelling, self.size)


class TypeSizeTable:
    """
    Ordered, read only spelling -> size table. Construction checks that
    every spelling appears once, every size is positive and all spellings
    of one native type agree on its size.
    """

    def __init__(self, entries):
        self.__entries = tuple(entries)
        self.__sizes = {}

        by_type = {}
        for entry in self.__entries:
            if entry.spelling in self.__sizes:
                raise ValueError("Spelling '{}' appears more than once".format(
                    entry.spelling))
            if entry.size <= 0:
                raise ValueError("Size of '{}' must be positive. Found {}.".format(
                    entry.spelling, entry.size))

            first = by_type.setdefault(entry.type.name, entry)
            if first.size != entry.size:
                raise RuntimeError(
                    "'{}' and '{}' both name {} but have sizes {} and {}".format(
                        first.spelling, entry.spelling, entry.type,
                        first.size, entry.size))

            self.__sizes[entry.spelling] = entry.size

    def __iter__(self):
        return iter(self.__entries)

    def __len__(self):
        return len(self.__entries)

    def __contains__(self, spelling):
        return spelling in self.__sizes

    def __getitem__(self, spelling):
        return self.__sizes[spelling]

    def sizes(self):
        """Plain dict copy of the table."""
        return dict(self.__sizes)

    def check_family_order(self):
        """
        Sanity check that sizes do not shrink along
        char <= short <= int <= long <= long long. Returns the offending
        (smaller family type, larger family type) pairs; an empty list on any
        conventional data model.
        """
        ranked = sorted(
            (e for e in self.__entries if family_rank(e.type) is not None),
            key=lambda e: family_rank(e.type)
        )
        problems = []
        for lower in ranked:
            for upper in ranked:
                if (family_rank(lower.type) < family_rank(upper.type) and
                        lower.size > upper.size):
                    pair = (lower.type.name, upper.type.name)
                    if pair not in problems:
                        problems.append(pair)
        for lower, upper in problems:
            logger.warning("sizeof(%s) is larger than sizeof(%s)", lower, upper)
        return problems


def lookup_sizeof(table, spelling, default=None):
    """
    Look a spelling up in a sizeof mapping, warning when it is missing.

    The warning names the caller's module, file and line, the same way the
    debug build of the emitted perl module reports missing keys.
    """
    if spelling in table:
        return table[spelling]

    caller = inspect.currentframe().f_back
    logger.warning("No sizeof for C type '%s' in %s file %s at line %s.",
                   spelling, caller.f_globals.get("__name__"),
                   caller.f_code.co_filename, caller.f_lineno)
    return default
