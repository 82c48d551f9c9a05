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

from presetdev import unittest
from . import constants
from . import runtime_settings


class RuntimeSettingsTest(unittest.TestCase):
    def parse(self, *argv):
        settings = runtime_settings.RuntimeSettings()
        parser = argparse.ArgumentParser()
        settings.init_argparser(parser)
        settings.set_from_args(parser.parse_args(list(argv)))
        return settings

    def test_defaults(self):
        settings = self.parse()
        self.assertEqual(settings.log_level, 'warning')
        self.assertIsNone(settings.log_file)
        self.assertEqual(settings.presets_dir, constants.PRESETS_DIR)
        self.assertEqual(settings.settings_file, constants.SETTINGS_FILE)

    def test_args(self):
        settings = self.parse(
            '--log-level=debug', '--log-file=/tmp/x.log', '--log-file-size=1024',
            '--log-file-keep-old=2', '--presets-dir=/p', '--settings-file=/s.json')
        self.assertEqual(settings.log_level, 'debug')
        self.assertEqual(settings.log_file, '/tmp/x.log')
        self.assertEqual(settings.log_file_size, 1024)
        self.assertEqual(settings.log_file_keep_old, 2)
        self.assertEqual(settings.presets_dir, '/p')
        self.assertEqual(settings.settings_file, '/s.json')


if __name__ == '__main__':
    unittest.main()
