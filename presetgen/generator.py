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

"""Turns a preset into the list of regions to create in the project.

Each instrument yields one region per dynamic layer and variation, laid out one
after the other. Every region holds a single MIDI note (or one per active sound
layer), whose velocity rises with the dynamic layer.
"""

import logging
import math
import random
from typing import List, NamedTuple, Optional

from presetgen.constants import TICKS_PER_QUARTER
from .music import dynamics
from . import preset as preset_lib
from . import validation

logger = logging.getLogger(__name__)

MIN_COLOR_COMPONENT = 50
MAX_COLOR_COMPONENT = 255


class LayerNote(NamedTuple):
    layer: str
    note: int
    velocity: int
    plugin: Optional[str]


class Region(NamedTuple):
    name: str
    instrument: str
    dynamic: int
    variation: int
    start: float
    end: float
    note: Optional[int]
    velocity: int
    note_start: float
    note_end: float
    color: int
    layer_notes: List[LayerNote]

    @property
    def length(self) -> float:
        return self.end - self.start


def random_color(rng: random.Random) -> int:
    r = rng.randint(MIN_COLOR_COMPONENT, MAX_COLOR_COMPONENT)
    g = rng.randint(MIN_COLOR_COMPONENT, MAX_COLOR_COMPONENT)
    b = rng.randint(MIN_COLOR_COMPONENT, MAX_COLOR_COMPONENT)
    return r + g * 256 + b * 65536


def region_name(preset_name: str, instrument_name: str, dynamic: int, variation: int) -> str:
    return '%s_%s_%d_%d' % (preset_name, instrument_name, dynamic, variation)


def note_length_ticks(length: float) -> float:
    # One sixteenth of the region length, measured in ticks.
    return length * TICKS_PER_QUARTER / 16


def total_regions(instrument: preset_lib.Instrument) -> int:
    return (instrument.num_dynamics or 0) * (instrument.num_variations or 0)


def layer_notes(instrument: preset_lib.Instrument, dynamic: int) -> List[LayerNote]:
    notes = []  # type: List[LayerNote]
    for layer in instrument.sound_layers:
        if layer.layer_type != 'midi':
            continue

        velocity = dynamics.layer_velocity(
            dynamic, layer.start_layer, layer.end_layer,
            layer.velocity_min, layer.velocity_max)
        if velocity is None:
            continue

        note = layer.midi_note
        if note is None:
            note = instrument.midi_note
        notes.append(LayerNote(layer=layer.name, note=note, velocity=velocity, plugin=layer.plugin))

    return notes


def generate_plan(
        preset: preset_lib.Preset, start_position: float = 0.0, region_spacing: float = 0.0,
        rng: Optional[random.Random] = None
) -> List[Region]:
    errors = validation.validate_preset(preset)
    if not (math.isfinite(region_spacing) and region_spacing >= 0):
        errors['region_spacing'] = "Region spacing must be a non-negative number"
    if errors:
        raise preset_lib.ValidationError(errors)

    if rng is None:
        rng = random.Random()

    regions = []  # type: List[Region]
    position = start_position
    for instrument in preset.instruments:
        length = instrument.region_length
        num_dynamics = instrument.num_dynamics
        num_variations = instrument.num_variations
        midi_note = instrument.midi_note
        color = random_color(rng)

        logger.info(
            "Planning %d regions for instrument '%s'...",
            total_regions(instrument), instrument.name)

        for dynamic in range(1, num_dynamics + 1):
            velocity = dynamics.interpolate_velocity_across_layers(
                dynamic, num_dynamics, instrument.range_min, instrument.range_max,
                truncate=True)
            notes = layer_notes(instrument, dynamic)

            for variation in range(1, num_variations + 1):
                regions.append(Region(
                    name=region_name(preset.preset_name, instrument.name, dynamic, variation),
                    instrument=instrument.name,
                    dynamic=dynamic,
                    variation=variation,
                    start=position,
                    end=position + length,
                    note=midi_note,
                    velocity=velocity,
                    note_start=0.0,
                    note_end=note_length_ticks(length),
                    color=color,
                    layer_notes=notes))
                position += length + region_spacing

    return regions
