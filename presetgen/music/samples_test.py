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

import os.path
import shutil
import tempfile
import wave

import numpy
import numpy.testing

from presetdev import unittest
from . import samples


def make_sample(path, peak):
    sample = samples.Sample(path, numpy.array([0.0, peak, -peak / 2, 0.0], dtype=numpy.float32))
    sample.analyze()
    return sample


class AnalysisTest(unittest.TestCase):
    def test_peak_amplitude(self):
        self.assertAlmostEqual(
            samples.calculate_peak_amplitude(numpy.array([0.1, -0.5, 0.25])), 0.5)
        self.assertEqual(samples.calculate_peak_amplitude(numpy.array([])), 0.0)

    def test_rms_amplitude(self):
        self.assertAlmostEqual(
            samples.calculate_rms_amplitude(numpy.array([1.0, -1.0, 1.0, -1.0])), 1.0)
        self.assertAlmostEqual(
            samples.calculate_rms_amplitude(numpy.array([0.5, 0.0])), numpy.sqrt(0.125))
        self.assertEqual(samples.calculate_rms_amplitude(numpy.array([])), 0.0)

    def test_waveform(self):
        buffer = numpy.array([1.0, -1.0, 0.5, -0.5, 0.0, 0.0, 0.25, 0.25])
        numpy.testing.assert_allclose(
            samples.generate_waveform(buffer, 4), [1.0, 0.5, 0.0, 0.25])

    def test_waveform_short_buffer(self):
        waveform = samples.generate_waveform(numpy.array([0.5, -0.5]), 4)
        numpy.testing.assert_allclose(waveform, [0.5, 0.5, 0.0, 0.0])

    def test_waveform_empty_buffer(self):
        numpy.testing.assert_allclose(samples.generate_waveform(numpy.array([]), 3), [0, 0, 0])


class SampleTest(unittest.TestCase):
    def test_analyze(self):
        sample = make_sample('/samples/kick.wav', 0.5)
        self.assertEqual(sample.name, 'kick.wav')
        self.assertAlmostEqual(sample.peak_amplitude, 0.5)
        self.assertAlmostEqual(sample.peak_db, -6.0206, places=3)
        self.assertEqual(sample.amplitude, 114)
        self.assertEqual(len(sample.waveform), samples.WAVEFORM_POINTS)

    def test_windows_path(self):
        self.assertEqual(samples.Sample('C:\\samples\\snare.wav').name, 'snare.wav')

    def test_silent_sample(self):
        sample = make_sample('silence.wav', 0.0)
        self.assertEqual(sample.peak_db, -60.0)
        self.assertEqual(sample.amplitude, 0)

    def test_analyze_without_buffer(self):
        sample = samples.Sample('missing.wav')
        sample.analyze()
        self.assertIsNone(sample.peak_db)

    def test_dynamic_volume(self):
        sample = make_sample('a.wav', 0.5)
        vol = sample.calculate_dynamic_volume(1, 1, 3)
        self.assertAlmostEqual(vol.db, sample.peak_db - 12.0)
        self.assertAlmostEqual(sample.volume_for_dynamic_layer(3, 1, 3), 0.5, places=5)

    def test_dynamic_volume_unanalyzed(self):
        sample = samples.Sample('a.wav')
        self.assertAlmostEqual(sample.volume_for_dynamic_layer(2, 1, 2), 1.0)


class LoadWavTest(unittest.TestCase):
    def setup_testcase(self):
        self.tmp_dir = tempfile.mkdtemp(prefix='presetgen-test-')

    def cleanup_testcase(self):
        shutil.rmtree(self.tmp_dir)

    def write_wav(self, name, data, sample_width, channels=1):
        path = os.path.join(self.tmp_dir, name)
        with wave.open(path, 'wb') as fp:
            fp.setnchannels(channels)
            fp.setsampwidth(sample_width)
            fp.setframerate(44100)
            fp.writeframes(data)
        return path

    def test_16bit(self):
        data = numpy.array([0, 16384, -32768, 32767], dtype='<i2').tobytes()
        path = self.write_wav('test16.wav', data, 2)
        buffer, sample_rate, channels = samples.load_wav(path)
        self.assertEqual(sample_rate, 44100)
        self.assertEqual(channels, 1)
        numpy.testing.assert_allclose(buffer, [0.0, 0.5, -1.0, 32767 / 32768], rtol=1e-6)

    def test_8bit(self):
        path = self.write_wav('test8.wav', bytes([128, 192, 0]), 1)
        buffer, _, _ = samples.load_wav(path)
        numpy.testing.assert_allclose(buffer, [0.0, 0.5, -1.0])

    def test_24bit(self):
        data = bytes([0x00, 0x00, 0x40, 0x00, 0x00, 0x80])
        path = self.write_wav('test24.wav', data, 3)
        buffer, _, _ = samples.load_wav(path)
        numpy.testing.assert_allclose(buffer, [0.5, -1.0])

    def test_stereo(self):
        data = numpy.array([0, 0, 16384, -16384], dtype='<i2').tobytes()
        path = self.write_wav('stereo.wav', data, 2, channels=2)
        buffer, _, channels = samples.load_wav(path)
        self.assertEqual(channels, 2)
        self.assertEqual(len(buffer), 4)

    def test_sample_load(self):
        data = numpy.array([0, 16384, -8192], dtype='<i2').tobytes()
        path = self.write_wav('load.wav', data, 2)
        sample = samples.Sample.load(path)
        self.assertEqual(sample.sample_rate, 44100)
        self.assertAlmostEqual(sample.peak_amplitude, 0.5)
        self.assertEqual(sample.amplitude, 114)

    def test_not_a_wav(self):
        path = os.path.join(self.tmp_dir, 'junk.wav')
        with open(path, 'wb') as fp:
            fp.write(b'This is a totally random file.')
        with self.assertRaises(samples.SampleLoadError):
            samples.load_wav(path)

    def test_missing_file(self):
        with self.assertRaises(samples.SampleLoadError):
            samples.load_wav(os.path.join(self.tmp_dir, 'missing.wav'))


class SampleMatrixTest(unittest.TestCase):
    def test_find_best_column(self):
        matrix = samples.SampleMatrix()
        self.assertEqual(matrix.find_best_column(0), 1)
        self.assertEqual(matrix.find_best_column(15), 1)
        self.assertEqual(matrix.find_best_column(16), 2)
        self.assertEqual(matrix.find_best_column(114), 8)
        self.assertEqual(matrix.find_best_column(127), 8)

    def test_add_sample(self):
        matrix = samples.SampleMatrix()
        quiet = matrix.add_sample(make_sample('quiet.wav', 0.01))
        loud = matrix.add_sample(make_sample('loud.wav', 0.5))
        self.assertEqual((quiet.column, quiet.layer), (3, 1))
        self.assertEqual((loud.column, loud.layer), (8, 1))

        loud2 = matrix.add_sample(make_sample('loud2.wav', 0.5))
        self.assertEqual((loud2.column, loud2.layer), (8, 2))
        self.assertEqual(matrix.samples_in_column(8), [loud, loud2])

    def test_add_sample_bad_column(self):
        matrix = samples.SampleMatrix(columns=4)
        with self.assertRaises(ValueError):
            matrix.add_sample(make_sample('a.wav', 0.5), column=5)

    def test_move_sample(self):
        matrix = samples.SampleMatrix()
        sample = matrix.add_sample(make_sample('a.wav', 0.5))
        self.assertTrue(matrix.move_sample(sample, 2))
        self.assertEqual((sample.column, sample.layer), (2, 1))
        self.assertEqual(matrix.samples_in_column(8), [])
        self.assertEqual(matrix.samples_in_column(2), [sample])
        self.assertFalse(matrix.move_sample(None, 2))

    def test_next_layer(self):
        matrix = samples.SampleMatrix()
        self.assertEqual(matrix.next_layer(3), 1)
        matrix.add_sample(make_sample('a.wav', 0.5), column=3, layer=5)
        self.assertEqual(matrix.next_layer(3), 6)

    def test_column_db(self):
        matrix = samples.SampleMatrix()
        self.assertEqual(matrix.column_db(1), -60.0)
        matrix.add_sample(make_sample('a.wav', 1.0), column=1)
        self.assertAlmostEqual(matrix.column_db(1), 0.0, places=3)

    def test_find_sample_by_path(self):
        matrix = samples.SampleMatrix()
        sample = matrix.add_sample(make_sample('/a/b.wav', 0.5))
        self.assertIs(matrix.find_sample_by_path('/a/b.wav'), sample)
        self.assertIsNone(matrix.find_sample_by_path('/a/c.wav'))

    def test_sample_info(self):
        matrix = samples.SampleMatrix()
        info = matrix.sample_info(make_sample('/a/b.wav', 0.5))
        self.assertEqual(info['name'], 'b.wav')
        self.assertEqual(info['amplitude'], 114)
        self.assertEqual(len(info['waveform'].split(',')), samples.WAVEFORM_POINTS)
        self.assertIsNone(matrix.sample_info(None))

    def test_volume_for_layer(self):
        matrix = samples.SampleMatrix()
        self.assertEqual(matrix.volume_for_layer(None, 1, 1, 4), 1.0)
        sample = make_sample('a.wav', 1.0)
        self.assertAlmostEqual(matrix.volume_for_layer(sample, 4, 1, 4), 1.0)


if __name__ == '__main__':
    unittest.main()
