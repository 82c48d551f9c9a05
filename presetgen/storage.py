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
import os
import os.path
from typing import List

from . import json_codec
from . import preset
from .preset import PresetError, PresetFormatError, PresetNotFoundError

logger = logging.getLogger(__name__)

SUFFIX = '.json'


class PresetStorage(object):
    """Presets stored as one JSON file per preset in a directory."""

    def __init__(self, directory: str) -> None:
        self.directory = directory

    def path_for(self, name: str) -> str:
        if not name or not name.strip():
            raise PresetError("Preset name cannot be empty")
        if '/' in name or '\\' in name or name in ('.', '..'):
            raise PresetError("Invalid preset name '%s'" % name)
        return os.path.join(self.directory, name + SUFFIX)

    def save(self, p: preset.Preset) -> str:
        path = self.path_for(p.preset_name)

        if not os.path.isdir(self.directory):
            logger.info("Creating presets directory %s...", self.directory)
            os.makedirs(self.directory)

        # The file is only written once the preset is fully serialized.
        try:
            data = json_codec.encode(p.to_json()).encode('utf-8')
        except UnicodeEncodeError as exc:
            raise PresetError("Failed to encode preset '%s': %s" % (p.preset_name, exc)) from exc

        logger.info("Saving preset '%s' to %s...", p.preset_name, path)
        with open(path + '.new', 'wb') as fp:
            fp.write(data)
        os.replace(path + '.new', path)
        return path

    def load(self, name: str) -> preset.Preset:
        path = self.path_for(name)
        if not os.path.isfile(path):
            raise PresetNotFoundError("Preset '%s' not found" % name)

        logger.info("Loading preset '%s' from %s...", name, path)
        with open(path, 'rb') as fp:
            data = fp.read()

        try:
            obj = json_codec.decode(data)
        except (UnicodeDecodeError, json_codec.ParseError) as exc:
            raise PresetFormatError("Corrupt preset file %s: %s" % (path, exc)) from exc

        return preset.Preset.from_json(obj)

    def delete(self, name: str) -> None:
        path = self.path_for(name)
        if not os.path.isfile(path):
            raise PresetNotFoundError("Preset '%s' not found" % name)

        logger.info("Deleting preset '%s' (%s)...", name, path)
        os.unlink(path)

    def exists(self, name: str) -> bool:
        return os.path.isfile(self.path_for(name))

    def list(self) -> List[str]:
        if not os.path.isdir(self.directory):
            return []

        names = []
        for filename in os.listdir(self.directory):
            if not filename.endswith(SUFFIX):
                continue
            if not os.path.isfile(os.path.join(self.directory, filename)):
                continue
            names.append(filename[:-len(SUFFIX)])
        return sorted(names)
