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

"""Checks for the values users type into the preset form.

Form fields are text, so every helper accepts strings as well as numbers. A comma
is accepted as decimal separator.
"""

import math
from typing import Any, Dict, Optional

from presetgen.constants import MIN_VELOCITY, MAX_VELOCITY
from presetgen.music import pitch

MSG_PRESET_NAME = "Preset name cannot be empty"
MSG_NUMBER = "Please enter a valid number"
MSG_POSITIVE_NUMBER = "Please enter a valid positive number"
MSG_INSTRUMENT_NAME = "Instrument name cannot be empty"
MSG_NOTE_EMPTY = "Note cannot be empty"
MSG_NOTE_INVALID = "Invalid note. Please enter a note between C0 and C9"
MSG_VELOCITY_RANGE = "Velocity range must be within 0..127, minimum first"


def to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value.strip().replace(',', '.'))
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(result):
        return None
    return result


def to_int(value: Any) -> Optional[int]:
    number = to_float(value)
    if number is None or math.floor(number) != number:
        return None
    return int(number)


def validate_integer(value: Any) -> bool:
    number = to_int(value)
    return number is not None and number > 0


def validate_float(value: Any) -> bool:
    number = to_float(value)
    return number is not None and number > 0


def is_velocity(value: Any) -> bool:
    number = to_int(value)
    return number is not None and MIN_VELOCITY <= number <= MAX_VELOCITY


def _validate_sound_layer(layer: Any, num_dynamics: Optional[int]) -> Optional[str]:
    if layer.layer_type not in ('midi', 'wav'):
        return "Unknown layer type %r" % (layer.layer_type,)

    if layer.layer_type == 'midi' and layer.note and not pitch.is_valid_note_name(layer.note):
        return MSG_NOTE_INVALID

    if layer.layer_type == 'wav' and not layer.wav_path:
        return "WAV layers need a file"

    start_layer = to_int(layer.start_layer)
    end_layer = to_int(layer.end_layer)
    if start_layer is None or end_layer is None:
        return "Dynamic layers must be whole numbers"
    if start_layer > end_layer:
        return "Start layer must not be after end layer"
    if num_dynamics is not None and (start_layer < 1 or end_layer > num_dynamics):
        return "Dynamic layers must be within 1..%d" % num_dynamics

    if not (is_velocity(layer.velocity_min) and is_velocity(layer.velocity_max)):
        return MSG_VELOCITY_RANGE
    if to_int(layer.velocity_min) > to_int(layer.velocity_max):
        return MSG_VELOCITY_RANGE

    return None


def _layers_carry_notes(inst: Any) -> bool:
    midi_layers = [layer for layer in inst.sound_layers if layer.layer_type == 'midi']
    return bool(midi_layers) and all(layer.note for layer in midi_layers)


def validate_preset(preset: Any) -> Dict[str, str]:
    """Check all fields of a preset.

    Returns a dict mapping field keys to error messages, which is empty if the preset
    is valid. Instrument and layer indices in the keys are 1-based.
    """

    errors = {}  # type: Dict[str, str]

    if not (preset.preset_name or '').strip():
        errors['preset'] = MSG_PRESET_NAME

    if not preset.instruments:
        errors['instruments'] = MSG_NUMBER

    for i, inst in enumerate(preset.instruments, 1):
        if not (inst.name or '').strip():
            errors['inst_name_%d' % i] = MSG_INSTRUMENT_NAME

        if not inst.note:
            if not _layers_carry_notes(inst):
                errors['inst_note_%d' % i] = MSG_NOTE_EMPTY
        elif not pitch.is_valid_note_name(inst.note):
            errors['inst_note_%d' % i] = MSG_NOTE_INVALID

        if not validate_float(inst.length):
            errors['inst_length_%d' % i] = MSG_POSITIVE_NUMBER

        if not validate_integer(inst.dynamics):
            errors['inst_dynamics_%d' % i] = MSG_NUMBER

        if not validate_integer(inst.variations):
            errors['inst_variations_%d' % i] = MSG_NUMBER

        if (not (is_velocity(inst.range_min) and is_velocity(inst.range_max))
                or to_int(inst.range_min) > to_int(inst.range_max)):
            errors['inst_velocity_%d' % i] = MSG_VELOCITY_RANGE

        num_dynamics = to_int(inst.dynamics) if validate_integer(inst.dynamics) else None
        for j, layer in enumerate(inst.sound_layers, 1):
            msg = _validate_sound_layer(layer, num_dynamics)
            if msg is not None:
                errors['layer_%d_%d' % (i, j)] = msg

    return errors
