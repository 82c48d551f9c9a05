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

from .pitch import (
    Pitch,
    InvalidNote,
    NOTE_TO_MIDI,
    MIDI_TO_NOTE,
    parse_note_name,
    is_valid_note_name,
    note_name_from_midi,
)
from .dynamics import (
    DynamicVolume,
    DynamicRangeError,
    velocity_from_db,
    db_from_velocity,
    linear_from_db,
    db_from_linear,
    gain_from_db,
    interpolate_dynamic_layer,
    interpolate_velocity_across_layers,
    layer_velocity,
    combine_db,
)
from .samples import (
    Sample,
    SampleMatrix,
    SampleLoadError,
    load_wav,
)
