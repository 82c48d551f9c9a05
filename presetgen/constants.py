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

# Important: This module must not import any other presetgen modules.

import os
import os.path

# Exit codes of the command line tool.
EXIT_SUCCESS = 0
EXIT_FAILURE = 1

ROOT = os.path.abspath(os.path.dirname(__file__))

CONFIG_DIR = os.path.abspath(os.path.join(os.path.expanduser('~'), '.config', 'presetgen'))
PRESETS_DIR = os.path.join(CONFIG_DIR, 'presets')
SETTINGS_FILE = os.path.join(CONFIG_DIR, 'settings.json')
LOG_FILE = os.path.join(CONFIG_DIR, 'presetgen.log')

# Loudness range which is mapped onto MIDI velocities 0..127.
MIN_DB = -60.0
MAX_DB = 0.0
AMPLITUDE_RANGE = 127

# Dynamic layers are spread over this many dB below the sample's peak.
DYNAMIC_WINDOW_DB = 12.0

MIN_VELOCITY = 0
MAX_VELOCITY = 127

TICKS_PER_QUARTER = 960

# Cleanup namespace
del os
