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

import logging
import re
import wave
from typing import Any, Dict, List, Optional, Tuple

import numpy

from presetgen.constants import MIN_DB, AMPLITUDE_RANGE
from . import dynamics

logger = logging.getLogger(__name__)

GRID_COLUMNS = 8
WAVEFORM_POINTS = 50


class SampleLoadError(Exception):
    pass


def calculate_peak_amplitude(buffer: numpy.ndarray) -> float:
    if len(buffer) == 0:
        return 0.0
    return float(numpy.max(numpy.abs(buffer)))


def calculate_rms_amplitude(buffer: numpy.ndarray) -> float:
    if len(buffer) == 0:
        return 0.0
    samples = numpy.asarray(buffer, dtype=numpy.float64)
    return float(numpy.sqrt(numpy.mean(samples * samples)))


def generate_waveform(buffer: numpy.ndarray, points: int = WAVEFORM_POINTS) -> numpy.ndarray:
    """Mean absolute sample value of 'points' equally sized chunks of the buffer."""

    waveform = numpy.zeros(points, dtype=numpy.float32)
    if len(buffer) == 0:
        return waveform

    step = max(1, len(buffer) // points)
    magnitudes = numpy.abs(numpy.asarray(buffer, dtype=numpy.float32))
    for i in range(points):
        chunk = magnitudes[i * step:(i + 1) * step]
        if len(chunk) == 0:
            break
        waveform[i] = numpy.mean(chunk)
    return waveform


def _pcm_to_float(frames: bytes, sample_width: int) -> numpy.ndarray:
    if sample_width == 1:
        data = numpy.frombuffer(frames, dtype=numpy.uint8).astype(numpy.float32)
        return (data - 128.0) / 128.0

    if sample_width == 2:
        data = numpy.frombuffer(frames, dtype='<i2').astype(numpy.float32)
        return data / 32768.0

    if sample_width == 3:
        raw = numpy.frombuffer(frames, dtype=numpy.uint8).reshape(-1, 3).astype(numpy.int32)
        data = raw[:, 0] | (raw[:, 1] << 8) | (raw[:, 2] << 16)
        data = (data ^ 0x800000) - 0x800000
        return data.astype(numpy.float32) / 8388608.0

    if sample_width == 4:
        data = numpy.frombuffer(frames, dtype='<i4').astype(numpy.float64)
        return (data / 2147483648.0).astype(numpy.float32)

    raise SampleLoadError("Unsupported sample width %d" % sample_width)


def load_wav(path: str) -> Tuple[numpy.ndarray, int, int]:
    """Read a PCM WAV file.

    Returns the interleaved samples as float32 in the range [-1, 1], the sample rate
    and the number of channels.
    """

    try:
        with wave.open(path, 'rb') as fp:
            logger.info("%s: %s", path, fp.getparams())
            channels = fp.getnchannels()
            sample_width = fp.getsampwidth()
            sample_rate = fp.getframerate()
            frames = fp.readframes(fp.getnframes())
    except (wave.Error, EOFError) as exc:
        raise SampleLoadError("Failed to read '%s': %s" % (path, exc)) from exc
    except OSError as exc:
        raise SampleLoadError("Failed to open '%s': %s" % (path, exc)) from exc

    return _pcm_to_float(frames, sample_width), sample_rate, channels


class Sample(object):
    def __init__(self, path: str, buffer: Optional[numpy.ndarray] = None) -> None:
        self.path = path
        self.name = re.split(r'[/\\]', path)[-1]
        self.buffer = buffer
        self.sample_rate = None  # type: int
        self.channels = None  # type: int

        self.peak_amplitude = 0.0
        self.rms_amplitude = 0.0
        self.peak_db = None  # type: float
        self.rms_db = None  # type: float
        self.amplitude = 0
        self.waveform = None  # type: numpy.ndarray

        self.column = None  # type: int
        self.layer = None  # type: int

    def __repr__(self) -> str:
        return 'Sample(%r)' % self.path

    @classmethod
    def load(cls, path: str) -> 'Sample':
        buffer, sample_rate, channels = load_wav(path)
        sample = cls(path, buffer)
        sample.sample_rate = sample_rate
        sample.channels = channels
        sample.analyze()
        return sample

    def analyze(self) -> None:
        if self.buffer is None:
            return

        self.peak_amplitude = calculate_peak_amplitude(self.buffer)
        self.rms_amplitude = calculate_rms_amplitude(self.buffer)

        self.peak_db = dynamics.db_from_linear(self.peak_amplitude)
        self.rms_db = dynamics.db_from_linear(self.rms_amplitude)

        # Velocity-like loudness 0..127.
        self.amplitude = dynamics.velocity_from_db(self.peak_db)

        self.waveform = generate_waveform(self.buffer, WAVEFORM_POINTS)

        logger.debug(
            "Analyzed %s: peak=%.2fdB rms=%.2fdB amplitude=%d",
            self.name, self.peak_db, self.rms_db, self.amplitude)

    def calculate_dynamic_volume(
            self, current_layer: int, start_layer: int, end_layer: int) -> dynamics.DynamicVolume:
        return dynamics.interpolate_dynamic_layer(
            current_layer, start_layer, end_layer,
            self.peak_db if self.peak_db is not None else 0.0)

    def volume_for_dynamic_layer(self, current_layer: int, start_layer: int, end_layer: int) -> float:
        return self.calculate_dynamic_volume(current_layer, start_layer, end_layer).gain


class SampleMatrix(object):
    """Samples arranged in columns of increasing loudness.

    Each column holds a stack of samples keyed by a 1-based layer number. Samples
    without an explicit position are put into the column matching their amplitude.
    """

    def __init__(self, columns: int = GRID_COLUMNS) -> None:
        if columns < 1:
            raise ValueError("Bad number of columns %r" % columns)
        self.columns = columns
        self.samples = {}  # type: Dict[int, Dict[int, Sample]]

    def __check_column(self, column: int) -> None:
        if not 1 <= column <= self.columns:
            raise ValueError("Bad column %r" % column)

    def find_best_column(self, amplitude: float) -> int:
        col_width = AMPLITUDE_RANGE / self.columns
        return max(1, min(int(amplitude // col_width) + 1, self.columns))

    def next_layer(self, column: int) -> int:
        layers = self.samples.get(column)
        if not layers:
            return 1
        return max(layers) + 1

    def add_sample(
            self, sample: Sample, column: Optional[int] = None, layer: Optional[int] = None
    ) -> Sample:
        if column is None:
            column = self.find_best_column(sample.amplitude)
        self.__check_column(column)
        if layer is None:
            layer = self.next_layer(column)

        self.samples.setdefault(column, {})[layer] = sample
        sample.column = column
        sample.layer = layer
        logger.info("Placed %s at column %d, layer %d", sample.name, column, layer)
        return sample

    def remove_sample(self, sample: Sample) -> None:
        if sample.column is not None and sample.layer is not None:
            layers = self.samples.get(sample.column)
            if layers is not None and layers.get(sample.layer) is sample:
                del layers[sample.layer]
                if not layers:
                    del self.samples[sample.column]
        sample.column = None
        sample.layer = None

    def move_sample(self, sample: Sample, column: int, layer: Optional[int] = None) -> bool:
        if sample is None or column is None:
            return False
        self.__check_column(column)

        self.remove_sample(sample)
        self.add_sample(sample, column, layer)
        return True

    def samples_in_column(self, column: int) -> List[Sample]:
        layers = self.samples.get(column, {})
        return [layers[layer] for layer in sorted(layers)]

    def column_db(self, column: int) -> float:
        samples = self.samples_in_column(column)
        if not samples:
            return MIN_DB
        return dynamics.combine_db(
            dynamics.db_from_linear(sample.amplitude / AMPLITUDE_RANGE) for sample in samples)

    def find_sample_by_path(self, path: str) -> Optional[Sample]:
        for layers in self.samples.values():
            for sample in layers.values():
                if sample.path == path:
                    return sample
        return None

    def sample_info(self, sample: Optional[Sample]) -> Optional[Dict[str, Any]]:
        if sample is None:
            return None
        return {
            'path': sample.path,
            'name': sample.name,
            'amplitude': sample.amplitude,
            'peak_db': sample.peak_db,
            'rms_db': sample.rms_db,
            'waveform': (
                ','.join('%g' % v for v in sample.waveform)
                if sample.waveform is not None else None),
        }

    def volume_for_layer(
            self, sample: Optional[Sample], current_layer: int, start_layer: int, end_layer: int
    ) -> float:
        if sample is None:
            return 1.0
        return sample.volume_for_dynamic_layer(current_layer, start_layer, end_layer)
