import re

from file_conversion import check_relative, to_perl_header
from native_types import LONG_LONG_FAMILY, NATIVE_TYPES, all_spellings, resolve
from slotted import SlottedClass

PACKAGE_NAME_RE = re.compile(r"[A-Za-z_]\w*(::\w+)*", re.ASCII)


def check_package(name):
    if not PACKAGE_NAME_RE.fullmatch(name):
        raise ValueError("'{}' is not a valid perl package name".format(name))
    return name


class Profile(SlottedClass):
    """
    Everything that differs between two builds of the sizeof module.

    companions: h2ph(1) modules required before %sizeof is defined, relative
        to inc_dir.
    inc_dir: directory holding the companions, relative to the directory of
        the emitted module.
    spellings: the table keys in output order, long long spellings included.
    long_long: whether the long long family makes it into the table.
    std: C standard the size probe is compiled with.
    """
    __attrs__ = ("name", "package", "companions", "inc_dir", "spellings",
                 "long_long", "all_spellings", "std")
    __types__ = {
        "name": str,
        "package": str,
        "companions": [str],
        "inc_dir": str,
        "spellings": [str],
        "long_long": bool,
        "all_spellings": bool,
        "std": str,
    }
    __defaults__ = {
        "package": "iMSCP::H2ph",
        "inc_dir": "../h2ph/inc",
        "long_long": True,
        "all_spellings": False,
        "std": "c99",
    }

    def table_spellings(self):
        """The spellings this profile emits, in order."""
        if self.all_spellings:
            types = [t for t in NATIVE_TYPES
                     if self.long_long or t.family != LONG_LONG_FAMILY]
            return list(all_spellings(types))

        return [s for s in self.spellings
                if self.long_long or resolve(s).family != LONG_LONG_FAMILY]

    def required_modules(self):
        """Companion modules as the names perl's require expects."""
        return [to_perl_header(check_relative(c)) for c in self.companions]


ENGINE_PROFILE = Profile(
    name="engine",
    companions=["sys/syscall.ph", "linux/fs.ph"],
    spellings=[
        # char
        "char",
        "signed char",
        "unsigned char",

        # integer
        "short",
        "short int",
        "signed short",
        "signed short int",
        "unsigned short",
        "unsigned short int",
        "short unsigned int",
        "int",
        "signed",
        "signed int",
        "long",
        "long int",
        "signed long",
        "signed long int",
        "unsigned long",
        "unsigned long int",
        "long unsigned int",
        "long long",
        "long long int",
        "signed long long",
        "signed long long int",
        "unsigned long long",
        "unsigned long long int",

        # Real floating-point
        "float",
        "double",
        "long double",

        # typedef
        "size_t",
    ],
    # Built as ISO C90, which has no long long
    long_long=False,
    std="c90",
)


BACKEND_PROFILE = Profile(
    name="backend",
    companions=["syscall.ph", "linux/fs.ph", "sys/mount.ph"],
    spellings=[
        # char
        "char",
        "signed char",
        "unsigned char",
        "char unsigned",

        # integer
        "short",
        "short int",
        "signed short",
        "signed short int",
        "unsigned short",
        "short unsigned",
        "unsigned short int",
        "short unsigned int",
        "int",
        "signed",
        "signed int",
        "long",
        "long int",
        "signed long",
        "signed long int",
        "unsigned long",
        "long unsigned",
        "unsigned long int",
        "long unsigned int",
        "long long",
        "long long int",
        "signed long long",
        "signed long long int",
        "unsigned long long",
        "long long unsigned",
        "unsigned long long int",
        "long long unsigned int",

        # Real floating-point
        "float",
        "double",
        "long double",

        # typedef
        "size_t",
    ],
)


PROFILES = {p.name: p for p in (ENGINE_PROFILE, BACKEND_PROFILE)}

DEFAULT_PROFILE = BACKEND_PROFILE.name


def get_profile(name):
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError("Unknown profile '{}'. Expected one of {}.".format(
            name, ", ".join(sorted(PROFILES)))) from None
