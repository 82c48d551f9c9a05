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

"""Conversions between decibels, linear gain and MIDI velocities.

Velocities 0..127 are mapped linearly onto the range MIN_DB..MAX_DB. Out of range
inputs are clamped; only malformed dynamic layer ranges are errors.
"""

import math
from typing import Iterable, NamedTuple, Optional

from presetgen.constants import (
    MIN_DB, MAX_DB, DYNAMIC_WINDOW_DB, MIN_VELOCITY, MAX_VELOCITY)


class DynamicRangeError(ValueError):
    pass


class DynamicVolume(NamedTuple):
    db: float
    gain: float
    normalized: float


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_velocity(velocity: int) -> int:
    return max(MIN_VELOCITY, min(MAX_VELOCITY, velocity))


def velocity_from_db(db: float) -> int:
    if math.isnan(db):
        raise DynamicRangeError("Level is not a number")
    if db <= MIN_DB:
        return MIN_VELOCITY
    if db >= MAX_DB:
        return MAX_VELOCITY

    normalized = (db - MIN_DB) / (MAX_DB - MIN_DB)
    return round_half_up(normalized * MAX_VELOCITY)


def db_from_velocity(velocity: float) -> float:
    normalized = velocity / MAX_VELOCITY
    return MIN_DB + normalized * (MAX_DB - MIN_DB)


def linear_from_db(db: float) -> float:
    if db <= MIN_DB:
        return 0.0
    return 10 ** (db / 20)


def db_from_linear(linear: float) -> float:
    if linear <= 0:
        return MIN_DB
    return 20 * math.log10(linear)


def gain_from_db(db: float) -> float:
    return 10 ** (db / 20)


def _check_layer_range(start_layer: int, end_layer: int) -> None:
    if end_layer < start_layer:
        raise DynamicRangeError(
            "Bad dynamic layer range %r..%r" % (start_layer, end_layer))


def interpolate_dynamic_layer(
        current_layer: int, start_layer: int, end_layer: int, base_peak_db: float = 0.0
) -> DynamicVolume:
    """Volume of a sample when played back on the given dynamic layer.

    The layers start_layer..end_layer are spread evenly over a window of
    DYNAMIC_WINDOW_DB below the sample's peak level, i.e. the last layer plays the
    sample at its peak level and the first one DYNAMIC_WINDOW_DB quieter.
    """

    _check_layer_range(start_layer, end_layer)

    if end_layer > start_layer:
        normalized = (current_layer - start_layer) / (end_layer - start_layer)
        normalized = max(0.0, min(1.0, normalized))
    else:
        normalized = 0.0

    target_db = -DYNAMIC_WINDOW_DB + DYNAMIC_WINDOW_DB * normalized
    final_db = base_peak_db + target_db
    return DynamicVolume(db=final_db, gain=gain_from_db(final_db), normalized=normalized)


def interpolate_velocity_across_layers(
        dynamic_index: int, num_dynamics: int, velocity_min: int, velocity_max: int,
        truncate: bool = False
) -> int:
    """Velocity of the dynamic_index-th (1-based) of num_dynamics layers.

    The layers are spread evenly over velocity_min..velocity_max. The result is
    rounded, or truncated if truncate is set.
    """

    if num_dynamics < 1:
        raise DynamicRangeError("Number of dynamic layers must be >= 1, got %r" % num_dynamics)

    if num_dynamics > 1:
        fraction = (dynamic_index - 1) / (num_dynamics - 1)
        velocity = velocity_min + fraction * (velocity_max - velocity_min)
        if truncate:
            velocity = int(math.floor(velocity))
        else:
            velocity = round_half_up(velocity)
    else:
        velocity = int(velocity_min)

    return clamp_velocity(velocity)


def layer_velocity(
        dynamic: int, start_layer: int, end_layer: int, velocity_min: int, velocity_max: int
) -> Optional[int]:
    """Velocity of a sound layer on a dynamic, None if the layer isn't active there."""

    _check_layer_range(start_layer, end_layer)

    if dynamic < start_layer or dynamic > end_layer:
        return None

    velocity = velocity_min
    if end_layer > start_layer:
        velocity = velocity_min + (
            (dynamic - start_layer) / (end_layer - start_layer) * (velocity_max - velocity_min))
    return clamp_velocity(int(math.floor(velocity)))


def combine_db(values: Iterable[float]) -> float:
    total_db = MIN_DB
    for db in values:
        total_db = 10 * math.log10(10 ** (total_db / 10) + 10 ** (db / 10))
    return total_db
