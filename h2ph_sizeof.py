#!/usr/bin/env python
# -*- coding: utf-8 -*-

# This is the program to be run at build time to generate the sizeof module

import logging
import sys

from file_conversion import check_relative
from generator import build_module, build_table, emit, generate
from perl_ast import dump_tree
from probe import SOURCE_AUTO, SOURCES, probe_c_code
from profiles import DEFAULT_PROFILE, PROFILES, check_package, get_profile

logger = logging.getLogger("h2ph_sizeof")


def get_args(argv=None):
    from argparse import ArgumentParser
    parser = ArgumentParser(
        description="Print a perl module holding the size of native C types.")

    parser.add_argument("-p", "--profile", default=DEFAULT_PROFILE,
                        choices=sorted(PROFILES),
                        help="Set of companion modules and spellings to use.")
    parser.add_argument("-d", "--debug", default=False, action="store_true",
                        help="Warn from perl when an unknown type is looked up.")
    parser.add_argument("--long-long", dest="long_long", default=None,
                        action="store_true",
                        help="Include the long long family.")
    parser.add_argument("--no-long-long", dest="long_long",
                        action="store_false",
                        help="Leave the long long family out.")
    parser.add_argument("--all-spellings", default=False, action="store_true",
                        help="Emit every word order of every spelling.")
    parser.add_argument("-c", "--companion", dest="companions",
                        action="append", metavar="HEADER",
                        help="h2ph module (or C header) to require. Repeat "
                             "for several. Replaces the profile's list.")
    parser.add_argument("--inc-dir",
                        help="Directory of the companion modules, relative "
                             "to the generated module.")
    parser.add_argument("--package", help="Name of the perl package.")
    parser.add_argument("-s", "--source", default=SOURCE_AUTO, choices=SOURCES,
                        help="Where type sizes come from.")
    parser.add_argument("--compiler",
                        help="C compiler used to compute the sizes.")
    parser.add_argument("-o", "--output",
                        help="Write the module here instead of stdout.")
    parser.add_argument("-t", "--tree", default=False, action="store_true",
                        help="Dump the module tree instead of the module.")
    parser.add_argument("--print-probe", default=False, action="store_true",
                        help="Dump the C size probe instead of the module.")
    parser.add_argument("-v", "--verbose", default=False, action="store_true",
                        help="Log what is going on.")

    return parser.parse_args(argv)


def configure_logging(verbose):
    logging.basicConfig(
        stream=sys.stderr,
        format="%(levelname)s: %(message)s",
        level=logging.DEBUG if verbose else logging.WARNING,
    )


def profile_from_args(args):
    """The chosen profile with the command line overrides applied."""
    profile = get_profile(args.profile)

    changes = {}
    if args.long_long is not None:
        changes["long_long"] = args.long_long
    if args.all_spellings:
        changes["all_spellings"] = True
    if args.companions:
        changes["companions"] = args.companions
    if args.inc_dir:
        changes["inc_dir"] = check_relative(args.inc_dir)
    if args.package:
        changes["package"] = check_package(args.package)

    if changes:
        profile = profile.replace(**changes)
    return profile


def run(args):
    profile = profile_from_args(args)
    logger.debug("Using profile %s", profile.name)

    if args.print_probe:
        sys.stdout.write(probe_c_code(profile.table_spellings()))
        return

    if args.tree:
        table = build_table(profile, source=args.source, compiler=args.compiler)
        print(dump_tree(build_module(profile, table, debug=args.debug)))
        return

    kwargs = dict(debug=args.debug, source=args.source, compiler=args.compiler)
    if args.output:
        # Nothing is written unless the whole module could be generated
        code = generate(profile, **kwargs)
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(code)
        except OSError as err:
            raise RuntimeError("Could not write {}: {}".format(
                args.output, err.strerror or err)) from err
    else:
        emit(profile, **kwargs)


def main(argv=None):
    args = get_args(argv)
    configure_logging(args.verbose)

    try:
        run(args)
    except (SyntaxError, TypeError, ValueError, RuntimeError) as err:
        logger.error("%s", err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
