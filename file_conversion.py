C_HEADER_EXT = ".h"
PERL_HEADER_EXT = ".ph"

# Quotes end the perl string a path is written into; sigils and backslashes
# get interpolated
PERL_SPECIAL_CHARS = "'\"$@\\"


def is_c_header(source):
    return source.endswith(C_HEADER_EXT)


def is_perl_header(source):
    return source.endswith(PERL_HEADER_EXT)


def to_perl_header(source):
    """
    Name of the h2ph(1) output for a C header, relative to the include
    directory. Names that already end in .ph are returned unchanged.

    Example:
        linux/fs.h -> linux/fs.ph
    """
    if is_perl_header(source):
        return source
    elif is_c_header(source):
        return source[:-len(C_HEADER_EXT)] + PERL_HEADER_EXT
    else:
        raise RuntimeError("Unknown header type '{}'".format(source))


def check_relative(path):
    """Companion modules and the include directory must be relative paths."""
    if not path or path.startswith("/"):
        raise ValueError("Expected a relative path. Found '{}'.".format(path))
    bad = [c for c in PERL_SPECIAL_CHARS if c in path]
    if bad:
        raise ValueError("Characters {} are not allowed in '{}'".format(
            " ".join(bad), path))
    return path
