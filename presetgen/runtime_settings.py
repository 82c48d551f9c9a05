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

# mypy: loose

from . import constants


class RuntimeSettings(object):
    def __init__(self):
        self.log_level = 'warning'
        self.log_file = None
        self.log_file_size = 10 * 2**20
        self.log_file_keep_old = 9
        self.presets_dir = constants.PRESETS_DIR
        self.settings_file = constants.SETTINGS_FILE

    def init_argparser(self, parser):
        parser.add_argument(
            '--log-level',
            default='warning',
            help=("Minimum level for log messages written to STDERR. A comma separated list"
                  " of logger=level pairs, where 'logger' is the name of a logger and 'level'"
                  " one of 'debug', 'info', 'warning', 'error', 'critical'. A bare 'level'"
                  " applies to the root logger. E.g. 'error,presetgen.storage=info' will print"
                  " INFO level logs for 'presetgen.storage' and ERROR level for all other"
                  " loggers."))
        parser.add_argument(
            '--log-file',
            default=None,
            metavar="PATH",
            help="Also write the log to this file.")
        parser.add_argument(
            '--log-file-size',
            type=int,
            default=10*2**20,
            metavar="BYTES",
            help="Maximum size of the log file.")
        parser.add_argument(
            '--log-file-keep-old',
            type=int,
            default=9,
            metavar="NUM",
            help="Number of old log files to keep.")
        parser.add_argument(
            '--presets-dir',
            default=constants.PRESETS_DIR,
            metavar="DIR",
            help="Directory holding the preset files [default: %(default)s].")
        parser.add_argument(
            '--settings-file',
            default=constants.SETTINGS_FILE,
            metavar="PATH",
            help="Path of the settings file [default: %(default)s].")

    def set_from_args(self, args):
        self.log_level = args.log_level
        self.log_file = args.log_file
        self.log_file_size = args.log_file_size
        self.log_file_keep_old = args.log_file_keep_old
        self.presets_dir = args.presets_dir
        self.settings_file = args.settings_file
