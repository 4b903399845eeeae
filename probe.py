"""
Size sources. Each one takes a list of spellings and returns their sizes in
bytes, in the same order.

The compiler source asks the host C compiler itself: it builds a small
program printing sizeof() of every spelling, runs it and reads the answers
back. The ctypes source asks the interpreter's own C ABI description instead
and needs no compiler.
"""

import ctypes
import logging
import os.path
import shutil
import subprocess
import tempfile

from native_types import resolve

logger = logging.getLogger(__name__)

COMPILER_CANDIDATES = ("cc", "gcc", "clang")

SOURCE_AUTO = "auto"
SOURCE_COMPILER = "compiler"
SOURCE_CTYPES = "ctypes"
SOURCES = (SOURCE_AUTO, SOURCE_COMPILER, SOURCE_CTYPES)

PROBE_INCLUDES = ("stddef.h", "stdio.h")


def probe_c_lines(spellings):
    """Lines of a C program printing the size of each spelling on its own line."""
    for include in PROBE_INCLUDES:
        yield "#include <{}>".format(include)
    yield ""
    yield "int main(void) {"
    for spelling in spellings:
        yield "    printf(\"%lu\\n\", (unsigned long)sizeof({}));".format(spelling)
    yield "    return 0;"
    yield "}"


def probe_c_code(spellings):
    return "\n".join(probe_c_lines(spellings)) + "\n"


def find_compiler(compiler=None):
    """Full path of the C compiler to use, or None if there is none."""
    if compiler:
        return shutil.which(compiler)

    for candidate in COMPILER_CANDIDATES:
        found = shutil.which(candidate)
        if found:
            return found
    return None


def compile_c_source(c_fname, *, compiler, std="c99", output=None):
    if not output:
        output = os.path.splitext(c_fname)[0]

    cmd = [compiler, "-std={}".format(std), "-o", output, c_fname]
    logger.debug("Compiling size probe: %s", " ".join(cmd))
    try:
        subprocess.run(cmd, check=True, stdout=subprocess.PIPE,
                       stderr=subprocess.PIPE, universal_newlines=True)
    except subprocess.CalledProcessError as err:
        raise RuntimeError("Could not compile size probe with {}:\n{}".format(
            compiler, err.stderr.strip())) from err
    except OSError as err:
        raise RuntimeError("Could not run {}: {}".format(compiler, err)) from err

    return output


def parse_probe_output(output, spellings):
    lines = output.split()
    if len(lines) != len(spellings):
        raise RuntimeError("Size probe printed {} sizes for {} types".format(
            len(lines), len(spellings)))

    sizes = []
    for spelling, line in zip(spellings, lines):
        try:
            sizes.append(int(line))
        except ValueError:
            raise RuntimeError("Size probe printed '{}' for '{}'".format(
                line, spelling)) from None
    return sizes


def compiler_sizes(spellings, *, compiler=None, std="c99"):
    """
    Sizes of the spellings as the host C compiler computes them.

    Args:
        compiler (optional[str]): Compiler to use. The first of cc, gcc and
            clang found on PATH by default.
        std (str): Value for the -std= flag.
    """
    exe = find_compiler(compiler)
    if exe is None:
        raise RuntimeError("No C compiler found (tried {})".format(
            compiler or ", ".join(COMPILER_CANDIDATES)))

    with tempfile.TemporaryDirectory(prefix="h2ph-sizeof-") as workdir:
        c_fname = os.path.join(workdir, "sizeof_probe.c")
        with open(c_fname, "w") as f:
            f.write(probe_c_code(spellings))

        probe = compile_c_source(c_fname, compiler=exe, std=std)
        try:
            out = subprocess.run(
                [probe],
                check=True,
                stdout=subprocess.PIPE,
                universal_newlines=True,
            )
        except subprocess.CalledProcessError as err:
            raise RuntimeError("Size probe exited with status {}".format(
                err.returncode)) from err
        except OSError as err:
            raise RuntimeError("Could not run size probe: {}".format(
                err)) from err

    return parse_probe_output(out.stdout, spellings)


def ctypes_sizes(spellings):
    """Sizes of the spellings according to ctypes."""
    return [ctypes.sizeof(getattr(ctypes, resolve(s).ctype)) for s in spellings]


def get_sizes(spellings, *, source=SOURCE_AUTO, compiler=None, std="c99"):
    """Sizes from the requested source. auto prefers the compiler."""
    if source == SOURCE_AUTO:
        if find_compiler(compiler):
            source = SOURCE_COMPILER
        else:
            logger.warning("No C compiler found, falling back to ctypes sizes")
            source = SOURCE_CTYPES

    logger.debug("Taking sizes from %s", source)
    if source == SOURCE_COMPILER:
        return compiler_sizes(spellings, compiler=compiler, std=std)
    elif source == SOURCE_CTYPES:
        return ctypes_sizes(spellings)
    else:
        raise ValueError("Unknown size source '{}'".format(source))
