"""
Builds the iMSCP::H2ph perl module: the %sizeof table that h2ph(1) does not
generate, wrapped in the scaffolding that loads the h2ph companion modules.
"""

import logging
import sys

from file_conversion import check_relative
from native_types import resolve
from perl_ast import (Blank, Block, Comment, End, HashAssign, HashEntry,
                      Module, NoWarnings, Our, Package, Require, Stmt, Sub,
                      Tie, TrueValue, Use)
from probe import SOURCE_AUTO, get_sizes
from profiles import check_package
from size_table import TypeSizeEntry, TypeSizeTable

logger = logging.getLogger(__name__)

SIZEOF_VAR = "%sizeof"

LICENSE_HEADER = [
    "i-MSCP - internet Multi Server Control Panel",
    "Copyright (C) 2010-2018 Laurent Declercq <l.declercq@nuxwin.com>",
    "",
    "This library is free software; you can redistribute it and/or",
    "modify it under the terms of the GNU Lesser General Public",
    "License as published by the Free Software Foundation; either",
    "version 2.1 of the License, or (at your option) any later version.",
    "",
    "This library is distributed in the hope that it will be useful,",
    "but WITHOUT ANY WARRANTY; without even the implied warranty of",
    "MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU",
    "Lesser General Public License for more details.",
    "",
    "You should have received a copy of the GNU Lesser General Public",
    "License along with this library; if not, write to the Free Software",
    "Foundation, Inc., 51 Franklin St, Fifth Floor, Boston, MA 02110-1301 USA",
]

SIZEOF_COMMENT = [
    "We need build the %sizeof hash as the H2PH(1) converter",
    "doesn't do that for us.",
    "See https://bugs.debian.org/cgi-bin/bugreport.cgi?bug=190887",
]


def build_table(profile, *, source=SOURCE_AUTO, compiler=None):
    """
    Resolve the profile's spellings and size them.

    Returns:
        TypeSizeTable
    """
    spellings = profile.table_spellings()
    types = [resolve(s) for s in spellings]
    sizes = get_sizes(spellings, source=source, compiler=compiler,
                      std=profile.std)

    table = TypeSizeTable(
        TypeSizeEntry(spelling, t, size)
        for spelling, t, size in zip(spellings, types, sizes)
    )
    table.check_family_order()
    return table


def setup_block(profile):
    """
    BEGIN block loading the companion modules. %INC and @INC are localized
    so neither the extra search directory nor the loaded files stay visible
    to the rest of the program.
    """
    body = [
        Comment(["We do not want keep track of the following"]),
        Stmt("local %INC"),
        Stmt("local @INC = @INC"),
        Stmt('push @INC, "@{{[ dirname __FILE__]}}/{}"'.format(
            check_relative(profile.inc_dir))),
        NoWarnings("portable"),
    ]
    body.extend(Require(m) for m in profile.required_modules())
    return Block(body, name="BEGIN")


def missing_key_warning_block(hash_package):
    """Tie::StdHash subclass warning on lookups of unknown spellings."""
    return Block([
        Package(hash_package),
        Require("Tie::Hash", is_file=False),
        Our("@ISA", "qw/ Tie::StdHash /"),
        Blank(),
        Sub("FETCH", [
            Stmt("my $context = sprintf qq[in %s file %s at line %s.], caller"),
            Stmt("warn qq[No sizeof for C type '$_[1]' $context\\n] "
                 "unless exists $_[0]{$_[1]}"),
            Stmt("return $_[0]{$_[1]}"),
        ]),
    ])


def build_module(profile, table, *, debug=False):
    """Perl module tree for a table."""
    package = check_package(profile.package)
    body = [
        Comment(LICENSE_HEADER),
        Blank(),
        Package(package),
        Blank(),
        Use("strict"),
        Use("warnings"),
        Use("File::Basename"),
        Blank(),
        setup_block(profile),
        Blank(),
        Our(SIZEOF_VAR),
        Blank(),
    ]

    if debug:
        hash_package = package + "::HASH"
        body += [
            missing_key_warning_block(hash_package),
            Blank(),
            Tie(SIZEOF_VAR, hash_package),
            Blank(),
        ]

    body += [
        Comment(SIZEOF_COMMENT),
        HashAssign(SIZEOF_VAR, [HashEntry(e.spelling, e.size) for e in table]),
        Blank(),
        TrueValue(),
        End(),
    ]
    return Module(body)


def generate(profile, *, debug=False, source=SOURCE_AUTO, compiler=None):
    """Source of the perl module for a profile."""
    table = build_table(profile, source=source, compiler=compiler)
    return build_module(profile, table, debug=debug).perl_code()


def emit(profile, *, stream=None, **kwargs):
    """Write the perl module for a profile to stream (stdout by default)."""
    code = generate(profile, **kwargs)
    if stream is None:
        stream = sys.stdout
    stream.write(code)
    stream.flush()
