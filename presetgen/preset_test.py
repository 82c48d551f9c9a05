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
from . import preset


PRESET_JSON = '''
{
  "preset_name": "Drums",
  "num_instruments": 1,
  "instruments": [
    {
      "name": "Kick",
      "note": "C1",
      "length": "1,5",
      "dynamics": "4",
      "variations": 2,
      "sound_layers": [
        {"name": "Body", "layer_type": "midi", "note": "C2", "start_layer": 2},
        {"name": "Click", "layer_type": "wav", "wav_path": "/s/click.wav"}
      ]
    }
  ]
}
'''


class FromJsonTest(unittest.TestCase):
    def test_defaults(self):
        p = preset.Preset.from_json(json_codec.decode(PRESET_JSON))
        self.assertEqual(p.preset_name, 'Drums')
        self.assertEqual(p.num_instruments, 1)

        inst = p.instruments[0]
        self.assertEqual(inst.range_min, 0)
        self.assertEqual(inst.range_max, 127)
        self.assertEqual(inst.region_length, 1.5)
        self.assertEqual(inst.num_dynamics, 4)
        self.assertEqual(inst.num_variations, 2)
        self.assertEqual(inst.midi_note, 24)

        body, click = inst.sound_layers
        self.assertEqual((body.start_layer, body.end_layer), (2, 4))
        self.assertEqual((body.velocity_min, body.velocity_max), (0, 127))
        self.assertEqual(body.midi_note, 36)
        self.assertEqual((click.start_layer, click.end_layer), (1, 4))
        self.assertIsNone(click.note)
        self.assertIsNone(click.midi_note)

    def test_missing_sound_layers(self):
        inst = preset.Instrument.from_json({'name': 'Snare', 'note': 'D1'})
        self.assertEqual(inst.sound_layers, [])
        self.assertEqual(inst.length, '1.5')

    def test_legacy_empty_container(self):
        inst = preset.Instrument.from_json(json_codec.decode('{"sound_layers": {}}'))
        self.assertEqual(inst.sound_layers, [])

    def test_not_an_object(self):
        with self.assertRaises(preset.PresetFormatError):
            preset.Preset.from_json([1, 2])

    def test_bad_field_types(self):
        with self.assertRaises(preset.PresetFormatError):
            preset.Preset.from_json({'preset_name': 12})
        with self.assertRaises(preset.PresetFormatError):
            preset.Preset.from_json({'instruments': 'Kick'})
        with self.assertRaises(preset.PresetFormatError):
            preset.Instrument.from_json({'range_min': 'low'})
        with self.assertRaises(preset.PresetFormatError):
            preset.Instrument.from_json({'range_min': True})
        with self.assertRaises(preset.PresetFormatError):
            preset.Instrument.from_json({'sound_layers': ['Body']})

    def test_format_error_is_preset_error(self):
        self.assertTrue(issubclass(preset.PresetFormatError, preset.PresetError))
        self.assertTrue(issubclass(preset.PresetNotFoundError, preset.Error))


class ToJsonTest(unittest.TestCase):
    def test_round_trip(self):
        p = preset.Preset.from_json(json_codec.decode(PRESET_JSON))
        p2 = preset.Preset.from_json(json_codec.decode(json_codec.encode(p.to_json())))
        self.assertEqual(p2.to_json(), p.to_json())

    def test_empty_instrument_list(self):
        text = json_codec.encode(preset.Preset('Empty').to_json())
        self.assertEqual(
            text, '{"preset_name":"Empty","num_instruments":0,"instruments":[]}')

    def test_optional_fields_omitted(self):
        obj = preset.SoundLayer(name='Body', end_layer=3).to_json()
        self.assertNotIn('note', obj)
        self.assertNotIn('wav_path', obj)
        self.assertIsInstance(obj, json_codec.JsonObject)

    def test_sound_layers_are_array(self):
        obj = preset.Instrument(name='Kick').to_json()
        self.assertIsInstance(obj['sound_layers'], json_codec.JsonArray)
        self.assertEqual(json_codec.decode(json_codec.encode(obj))['sound_layers'], [])


class CheckTest(unittest.TestCase):
    def test_check(self):
        p = preset.Preset('', [])
        with self.assertRaises(preset.ValidationError) as cm:
            p.check()
        self.assertIn('preset', cm.exception.errors)
        self.assertIn('instruments', cm.exception.errors)


if __name__ == '__main__':
    unittest.main()
