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
import math
import os
import os.path
from typing import Any, Dict, Tuple

from . import json_codec

logger = logging.getLogger(__name__)


class SettingsError(Exception):
    pass


# name: (type, default)
SETTINGS = [
    ('font_size', int, 14),
    ('default_plugin', str, "Kontakt 7"),
    ('default_length', str, "1.5"),
    ('preview_velocity', int, 100),
    ('preview_duration', float, 0.5),
    ('autosave_interval', int, 5),
    ('autosave_enabled', bool, True),
    ('region_spacing', float, 0.0),
    ('default_dynamics', int, 10),
    ('default_variations', int, 1),
]

TYPES = {name: typ for name, typ, _ in SETTINGS}
DEFAULTS = {name: default for name, _, default in SETTINGS}


def _has_type(value: Any, typ: type) -> bool:
    if typ is bool:
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if typ is float:
        return isinstance(value, (int, float))
    return isinstance(value, typ)


def _check_range(value: Any, lower: float, upper: float) -> bool:
    return lower <= value <= upper


class Settings(object):
    """User preferences, persisted as a JSON object."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.values = self.defaults()

    def defaults(self) -> Dict[str, Any]:
        return dict(DEFAULTS)

    def load(self) -> None:
        self.values = self.defaults()

        if not os.path.isfile(self.path):
            logger.info("No settings file at %s, using defaults.", self.path)
            return

        try:
            with open(self.path, 'r', encoding='utf-8') as fp:
                obj = json_codec.decode(fp.read())
        except (OSError, UnicodeDecodeError, json_codec.ParseError) as exc:
            logger.warning("Failed to read settings from %s, using defaults: %s", self.path, exc)
            return

        if not isinstance(obj, dict):
            logger.warning("Settings file %s does not contain an object, using defaults.", self.path)
            return

        for key, value in obj.items():
            if key not in TYPES:
                logger.info("Ignoring unknown setting '%s'.", key)
                continue
            if not _has_type(value, TYPES[key]):
                logger.warning("Ignoring bad value for setting '%s': %r", key, value)
                continue
            ok, msg = self.validate(key, value)
            if not ok:
                logger.warning("Ignoring bad value for setting '%s': %s", key, msg)
                continue
            if TYPES[key] is float:
                value = float(value)
            self.values[key] = value

    def save(self) -> None:
        obj = json_codec.JsonObject()
        for name, _, _ in SETTINGS:
            obj[name] = self.values[name]

        logger.info("Saving settings to %s...", self.path)
        try:
            data = json_codec.encode(obj).encode('utf-8')

            directory = os.path.dirname(self.path)
            if directory and not os.path.isdir(directory):
                os.makedirs(directory)

            with open(self.path + '.new', 'wb') as fp:
                fp.write(data)
            os.replace(self.path + '.new', self.path)
        except (OSError, UnicodeEncodeError) as exc:
            raise SettingsError("Failed to save settings to %s: %s" % (self.path, exc)) from exc

    def get(self, key: str) -> Any:
        try:
            return self.values[key]
        except KeyError:
            raise SettingsError("Unknown setting '%s'" % key) from None

    def set(self, key: str, value: Any) -> None:
        if key not in TYPES:
            raise SettingsError("Unknown setting '%s'" % key)
        if not _has_type(value, TYPES[key]):
            raise SettingsError(
                "Setting '%s' must be of type %s, got %r" % (key, TYPES[key].__name__, value))

        ok, msg = self.validate(key, value)
        if not ok:
            raise SettingsError(msg)

        if TYPES[key] is float:
            value = float(value)
        self.__update(dict(self.values, **{key: value}))

    def reset(self) -> None:
        self.__update(self.defaults())

    def __update(self, values: Dict[str, Any]) -> None:
        old_values = self.values
        self.values = values
        try:
            self.save()
        except Exception:
            self.values = old_values
            raise

    def validate(self, key: str, value: Any) -> Tuple[bool, str]:
        if isinstance(value, float) and not math.isfinite(value):
            return False, "Value must be a finite number"
        if key == 'font_size':
            if not _check_range(value, 8, 32):
                return False, "Font size must be between 8 and 32"
        elif key == 'preview_velocity':
            if not _check_range(value, 1, 127):
                return False, "Preview velocity must be between 1 and 127"
        elif key == 'preview_duration':
            if not 0 < value <= 10:
                return False, "Preview duration must be between 0 and 10 seconds"
        elif key == 'autosave_interval':
            if not _check_range(value, 1, 60):
                return False, "Autosave interval must be between 1 and 60 minutes"
        elif key == 'region_spacing':
            if value < 0:
                return False, "Region spacing must not be negative"
        elif key in ('default_dynamics', 'default_variations'):
            if not _check_range(value, 0, 400):
                return False, "Value must be between 0 and 400"
        return True, ""
