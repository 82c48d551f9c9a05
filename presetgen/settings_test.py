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

from presetdev import unittest
from . import json_codec
from . import settings


class SettingsTest(unittest.FakeFileSystemMixin, unittest.TestCase):
    fake_os_modules = (settings,)

    def setup_testcase(self):
        self.settings = settings.Settings('/config/settings.json')

    def read_file(self):
        with open('/config/settings.json', 'r') as fp:
            return json_codec.decode(fp.read())

    def test_defaults(self):
        self.assertEqual(self.settings.get('font_size'), 14)
        self.assertEqual(self.settings.get('default_plugin'), "Kontakt 7")
        self.assertEqual(self.settings.get('default_length'), "1.5")
        self.assertIs(self.settings.get('autosave_enabled'), True)

    def test_defaults_is_a_copy(self):
        defaults = self.settings.defaults()
        defaults['font_size'] = 30
        self.assertEqual(self.settings.defaults()['font_size'], 14)

    def test_load_missing_file(self):
        self.settings.load()
        self.assertEqual(self.settings.values, settings.DEFAULTS)

    def test_load_merges(self):
        self.fake_fs.create_file(
            '/config/settings.json',
            contents='{"font_size": 20, "preview_duration": 1, "bogus": 1, "autosave_enabled": 0}')
        self.settings.load()
        self.assertEqual(self.settings.get('font_size'), 20)
        self.assertEqual(self.settings.get('preview_duration'), 1.0)
        self.assertIsInstance(self.settings.get('preview_duration'), float)
        self.assertIs(self.settings.get('autosave_enabled'), True)
        self.assertNotIn('bogus', self.settings.values)

    def test_load_corrupt_file(self):
        self.fake_fs.create_file('/config/settings.json', contents='{"font_size": ')
        with self.assertLogs('presetgen.settings', 'WARNING'):
            self.settings.load()
        self.assertEqual(self.settings.values, settings.DEFAULTS)

    def test_set_saves(self):
        self.settings.set('font_size', 18)
        self.assertEqual(self.settings.get('font_size'), 18)
        self.assertEqual(self.read_file()['font_size'], 18)

        other = settings.Settings('/config/settings.json')
        other.load()
        self.assertEqual(other.get('font_size'), 18)

    def test_set_int_for_float(self):
        self.settings.set('preview_duration', 2)
        self.assertEqual(self.settings.get('preview_duration'), 2.0)

    def test_set_errors(self):
        with self.assertRaises(settings.SettingsError):
            self.settings.set('bogus', 1)
        with self.assertRaises(settings.SettingsError):
            self.settings.set('font_size', '18')
        with self.assertRaises(settings.SettingsError):
            self.settings.set('font_size', True)
        with self.assertRaises(settings.SettingsError):
            self.settings.set('font_size', 40)
        self.assertEqual(self.settings.get('font_size'), 14)

    def test_get_unknown(self):
        with self.assertRaises(settings.SettingsError):
            self.settings.get('bogus')

    def test_reset(self):
        self.settings.set('preview_velocity', 64)
        self.settings.reset()
        self.assertEqual(self.settings.get('preview_velocity'), 100)
        self.assertEqual(self.read_file()['preview_velocity'], 100)

    def test_validate(self):
        self.assertEqual(self.settings.validate('font_size', 8), (True, ""))
        self.assertFalse(self.settings.validate('font_size', 7)[0])
        self.assertFalse(self.settings.validate('preview_velocity', 0)[0])
        self.assertTrue(self.settings.validate('preview_duration', 10)[0])
        self.assertFalse(self.settings.validate('preview_duration', 0)[0])
        self.assertFalse(self.settings.validate('autosave_interval', 61)[0])
        self.assertTrue(self.settings.validate('default_dynamics', 0)[0])
        self.assertFalse(self.settings.validate('default_variations', 401)[0])
        self.assertFalse(self.settings.validate('region_spacing', -0.5)[0])
        self.assertTrue(self.settings.validate('default_plugin', "Anything")[0])

    def test_load_out_of_range_values(self):
        self.fake_fs.create_file(
            '/config/settings.json',
            contents='{"region_spacing": -5.0, "font_size": 500, "preview_velocity": 64}')
        self.settings.load()
        self.assertEqual(self.settings.get('region_spacing'), 0.0)
        self.assertEqual(self.settings.get('font_size'), 14)
        self.assertEqual(self.settings.get('preview_velocity'), 64)

    def test_load_invalid_utf8(self):
        self.fake_fs.create_file('/config/settings.json', contents=b'{"font_size": "\xff"}')
        self.settings.load()
        self.assertEqual(self.settings.values, settings.DEFAULTS)

    def test_failed_save_keeps_values(self):
        # A plain file where the settings directory should be.
        self.fake_fs.create_file('/config')
        with self.assertRaises(settings.SettingsError):
            self.settings.set('font_size', 18)
        self.assertEqual(self.settings.get('font_size'), 14)

    def test_failed_reset_keeps_values(self):
        self.settings.set('font_size', 18)
        self.fake_fs.create_dir('/config/settings.json.new')
        with self.assertRaises(settings.SettingsError):
            self.settings.reset()
        self.assertEqual(self.settings.get('font_size'), 18)

    def test_unencodable_value(self):
        with self.assertRaises(settings.SettingsError):
            self.settings.set('default_plugin', 'Kontakt\udc80')
        self.assertEqual(self.settings.get('default_plugin'), "Kontakt 7")

    def test_validate_non_finite(self):
        self.assertFalse(self.settings.validate('region_spacing', float('nan'))[0])
        self.assertFalse(self.settings.validate('preview_duration', float('inf'))[0])


if __name__ == '__main__':
    unittest.main()
