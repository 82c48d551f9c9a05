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
from typing import Any, Dict, List, Optional

from presetgen.constants import MIN_VELOCITY, MAX_VELOCITY
from .json_codec import JsonArray, JsonObject
from .music import pitch
from . import validation

logger = logging.getLogger(__name__)


class Error(Exception):
    pass


class PresetError(Error):
    pass


class PresetFormatError(PresetError):
    pass


class PresetNotFoundError(PresetError):
    pass


class ValidationError(Error):
    def __init__(self, errors: Dict[str, str]) -> None:
        super().__init__(
            "Invalid preset: " + ', '.join('%s: %s' % (k, v) for k, v in errors.items()))
        self.errors = errors


_NUMBER = (int, float)
_TEXT_OR_NUMBER = (str, int, float)


def _check_object(obj: Any, what: str) -> None:
    if not isinstance(obj, dict):
        raise PresetFormatError("%s must be an object, got %s" % (what, type(obj).__name__))


def _get(obj: Dict[str, Any], key: str, types: Any, default: Any) -> Any:
    value = obj.get(key)
    if value is None:
        return default
    # bool is an int subclass, but never a valid value for any field.
    if isinstance(value, bool) or not isinstance(value, types):
        raise PresetFormatError(
            "Bad value for '%s': %r" % (key, value))
    return value


def _get_list(obj: Dict[str, Any], key: str) -> List[Any]:
    value = obj.get(key)
    if value is None:
        return []
    if isinstance(value, dict) and not value:
        # Empty containers are ambiguous in files written by the legacy encoder.
        return []
    if not isinstance(value, list):
        raise PresetFormatError("'%s' must be an array" % key)
    return value


def _put(obj: JsonObject, key: str, value: Any) -> None:
    if value is not None:
        obj[key] = value


class SoundLayer(object):
    def __init__(
            self, *,
            name: str = '', layer_type: str = 'midi', note: Optional[str] = None,
            plugin: Optional[str] = None, wav_path: Optional[str] = None,
            velocity_min: int = MIN_VELOCITY, velocity_max: int = MAX_VELOCITY,
            start_layer: int = 1, end_layer: int = 1) -> None:
        self.name = name
        self.layer_type = layer_type
        self.note = note
        self.plugin = plugin
        self.wav_path = wav_path
        self.velocity_min = velocity_min
        self.velocity_max = velocity_max
        self.start_layer = start_layer
        self.end_layer = end_layer

    def __repr__(self) -> str:
        return 'SoundLayer(%r, %s, %s..%s)' % (
            self.name, self.layer_type, self.start_layer, self.end_layer)

    @property
    def midi_note(self) -> Optional[int]:
        if not self.note:
            return None
        return pitch.parse_note_name(self.note)

    def is_active_on(self, dynamic: int) -> bool:
        return self.start_layer <= dynamic <= self.end_layer

    @classmethod
    def from_json(cls, obj: Any, dynamics: Optional[int] = None) -> 'SoundLayer':
        _check_object(obj, "Sound layer")
        start_layer = _get(obj, 'start_layer', _NUMBER, 1)
        return cls(
            name=_get(obj, 'name', str, ''),
            layer_type=_get(obj, 'layer_type', str, 'midi'),
            note=_get(obj, 'note', str, None),
            plugin=_get(obj, 'plugin', str, None),
            wav_path=_get(obj, 'wav_path', str, None),
            velocity_min=_get(obj, 'velocity_min', _NUMBER, MIN_VELOCITY),
            velocity_max=_get(obj, 'velocity_max', _NUMBER, MAX_VELOCITY),
            start_layer=start_layer,
            end_layer=_get(
                obj, 'end_layer', _NUMBER, dynamics if dynamics is not None else start_layer))

    def to_json(self) -> JsonObject:
        obj = JsonObject()
        obj['name'] = self.name
        obj['layer_type'] = self.layer_type
        _put(obj, 'note', self.note)
        _put(obj, 'plugin', self.plugin)
        _put(obj, 'wav_path', self.wav_path)
        obj['velocity_min'] = self.velocity_min
        obj['velocity_max'] = self.velocity_max
        obj['start_layer'] = self.start_layer
        obj['end_layer'] = self.end_layer
        return obj


class Instrument(object):
    """One instrument of a preset.

    length, dynamics and variations hold whatever the user typed into the form, which
    may be text. Use the region_length, num_dynamics and num_variations properties
    to get them as numbers.
    """

    def __init__(
            self, *,
            name: str = '', note: str = '', length: Any = '1.5', dynamics: Any = '',
            variations: Any = '', range_min: int = MIN_VELOCITY,
            range_max: int = MAX_VELOCITY, sound_layers: Optional[List[SoundLayer]] = None
    ) -> None:
        self.name = name
        self.note = note
        self.length = length
        self.dynamics = dynamics
        self.variations = variations
        self.range_min = range_min
        self.range_max = range_max
        self.sound_layers = list(sound_layers or [])

    def __repr__(self) -> str:
        return 'Instrument(%r, %r)' % (self.name, self.note)

    @property
    def region_length(self) -> Optional[float]:
        return validation.to_float(self.length)

    @property
    def num_dynamics(self) -> Optional[int]:
        return validation.to_int(self.dynamics)

    @property
    def num_variations(self) -> Optional[int]:
        return validation.to_int(self.variations)

    @property
    def midi_note(self) -> Optional[int]:
        if not self.note:
            return None
        return pitch.parse_note_name(self.note)

    @classmethod
    def from_json(cls, obj: Any) -> 'Instrument':
        _check_object(obj, "Instrument")
        dynamics = _get(obj, 'dynamics', _TEXT_OR_NUMBER, '')
        num_dynamics = validation.to_int(dynamics)
        return cls(
            name=_get(obj, 'name', str, ''),
            note=_get(obj, 'note', str, ''),
            length=_get(obj, 'length', _TEXT_OR_NUMBER, '1.5'),
            dynamics=dynamics,
            variations=_get(obj, 'variations', _TEXT_OR_NUMBER, ''),
            range_min=_get(obj, 'range_min', _NUMBER, MIN_VELOCITY),
            range_max=_get(obj, 'range_max', _NUMBER, MAX_VELOCITY),
            sound_layers=[
                SoundLayer.from_json(layer, num_dynamics)
                for layer in _get_list(obj, 'sound_layers')])

    def to_json(self) -> JsonObject:
        obj = JsonObject()
        obj['name'] = self.name
        obj['note'] = self.note
        obj['length'] = self.length
        obj['dynamics'] = self.dynamics
        obj['variations'] = self.variations
        obj['range_min'] = self.range_min
        obj['range_max'] = self.range_max
        obj['sound_layers'] = JsonArray(layer.to_json() for layer in self.sound_layers)
        return obj


class Preset(object):
    def __init__(
            self, preset_name: str = '', instruments: Optional[List[Instrument]] = None
    ) -> None:
        self.preset_name = preset_name
        self.instruments = list(instruments or [])

    def __repr__(self) -> str:
        return 'Preset(%r, %d instruments)' % (self.preset_name, len(self.instruments))

    @property
    def num_instruments(self) -> int:
        return len(self.instruments)

    def validate(self) -> Dict[str, str]:
        return validation.validate_preset(self)

    def check(self) -> None:
        errors = self.validate()
        if errors:
            raise ValidationError(errors)

    @classmethod
    def from_json(cls, obj: Any) -> 'Preset':
        _check_object(obj, "Preset")
        instruments = [
            Instrument.from_json(inst) for inst in _get_list(obj, 'instruments')]

        num_instruments = obj.get('num_instruments')
        if num_instruments is not None and num_instruments != len(instruments):
            logger.warning(
                "Preset declares %r instruments, but contains %d.",
                num_instruments, len(instruments))

        return cls(
            preset_name=_get(obj, 'preset_name', str, ''),
            instruments=instruments)

    def to_json(self) -> JsonObject:
        obj = JsonObject()
        obj['preset_name'] = self.preset_name
        obj['num_instruments'] = self.num_instruments
        obj['instruments'] = JsonArray(inst.to_json() for inst in self.instruments)
        return obj
