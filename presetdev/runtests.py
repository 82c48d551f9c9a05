#!/usr/bin/python3

# @begin:license
#
# Copyright (c) 2015-2019, Benjamin Niemann <pink@odahoda.de>
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along
# with this program; if not, write to the Free Software Foundation, Inc.,
# 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.
#
# @end:license

import argparse
import fnmatch
import logging
import os
import os.path
import sys
import unittest

import coverage

ROOTDIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
PACKAGES = ['presetgen', 'presetdev']


def bool_arg(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value.lower() in ('true', 'y', 'yes', 'on', '1'):
            return True
        if value.lower() in ('false', 'n', 'no', 'off', '0'):
            return False
        raise ValueError("Invalid value '%s'." % value)
    raise TypeError("Invalid type '%s'." % type(value).__name__)


def find_test_modules(selectors):
    for package in PACKAGES:
        for dirpath, dirnames, filenames in os.walk(os.path.join(ROOTDIR, package)):
            for ignore_dir in ('__pycache__', 'testdata'):
                if ignore_dir in dirnames:
                    dirnames.remove(ignore_dir)

            dirnames.sort()

            for filename in sorted(filenames):
                if not fnmatch.fnmatch(filename, '*_test.py'):
                    continue

                modpath = os.path.join(dirpath, os.path.splitext(filename)[0])
                modname = os.path.relpath(modpath, ROOTDIR).replace(os.sep, '.')

                if selectors and not any(modname.startswith(s) for s in selectors):
                    continue

                yield modname


def iter_tests(suite):
    for test in suite:
        if isinstance(test, unittest.TestSuite):
            yield from iter_tests(test)
        else:
            yield test


def filter_by_tags(suite, tags):
    filtered = unittest.TestSuite()
    for test in iter_tests(suite):
        test_tags = getattr(test, 'tags', {'unit'})
        if test_tags & tags:
            filtered.addTest(test)
    return filtered


def main(argv):
    parser = argparse.ArgumentParser()
    parser.add_argument('selectors', type=str, nargs='*')
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warning', 'error', 'critical'],
        default='critical',
        help="Minimum level for log messages written to STDERR.")
    parser.add_argument(
        '--tags', type=str, default='unit,integration',
        help="Comma separated list of test tags to run.")
    parser.add_argument('--coverage', nargs='?', type=bool_arg, const=True, default=False)
    args = parser.parse_args(argv[1:])

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    logging.basicConfig(
        format='%(levelname)-8s:%(name)s: %(message)s',
        level={
            'debug': logging.DEBUG,
            'info': logging.INFO,
            'warning': logging.WARNING,
            'error': logging.ERROR,
            'critical': logging.CRITICAL,
        }[args.log_level])

    if args.coverage:
        cov = coverage.Coverage(
            source=PACKAGES,
            omit='*_test.py',
            config_file=False)
        cov.set_option("run:branch", True)
        cov.start()

    loader = unittest.defaultTestLoader
    suite = unittest.TestSuite()
    for modname in find_test_modules(args.selectors):
        suite.addTest(loader.loadTestsFromName(modname))

    tags = {t.strip() for t in args.tags.split(',') if t.strip()}
    suite = filter_by_tags(suite, tags)

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    if args.coverage:
        cov.stop()
        total_coverage = cov.report(show_missing=False, skip_covered=True)
        print()
        print("Total coverage: %.1f%%" % total_coverage)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(main(sys.argv))
