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

import argparse
import random
import sys
from typing import List, Optional, TextIO

from .constants import EXIT_SUCCESS, EXIT_FAILURE
from .runtime_settings import RuntimeSettings
from .music import dynamics
from .music import pitch
from .music import samples
from . import generator
from . import json_codec
from . import logging
from . import preset as preset_lib
from . import settings as settings_lib
from . import storage as storage_lib

logger = logging.getLogger(__name__)

ERRORS = (
    preset_lib.Error,
    settings_lib.SettingsError,
    samples.SampleLoadError,
    pitch.InvalidNote,
    dynamics.DynamicRangeError,
    json_codec.Error,
)


class Command(object):
    def __init__(self, runtime_settings: RuntimeSettings, out: TextIO) -> None:
        self.runtime_settings = runtime_settings
        self.out = out
        self.storage = storage_lib.PresetStorage(runtime_settings.presets_dir)
        self.settings = settings_lib.Settings(runtime_settings.settings_file)

    def write(self, fmt: str, *args: object) -> None:
        self.out.write((fmt % args if args else fmt) + '\n')

    def run(self, args: argparse.Namespace) -> int:
        return getattr(self, 'cmd_' + args.command)(args)

    def cmd_list(self, args: argparse.Namespace) -> int:
        for name in self.storage.list():
            self.write('%s', name)
        return EXIT_SUCCESS

    def cmd_show(self, args: argparse.Namespace) -> int:
        p = self.storage.load(args.name)
        self.write("Preset: %s", p.preset_name)
        for idx, inst in enumerate(p.instruments, 1):
            self.write(
                "%d. %s  note=%s length=%s dynamics=%s variations=%s velocity=%s..%s",
                idx, inst.name, inst.note or '-', inst.length, inst.dynamics,
                inst.variations, inst.range_min, inst.range_max)
            for layer in inst.sound_layers:
                self.write(
                    "     %s [%s] note=%s layers=%s..%s velocity=%s..%s",
                    layer.name, layer.layer_type, layer.note or layer.wav_path or '-',
                    layer.start_layer, layer.end_layer, layer.velocity_min, layer.velocity_max)

        errors = p.validate()
        for key, msg in errors.items():
            self.write("  ! %s: %s", key, msg)
        return EXIT_SUCCESS

    def cmd_plan(self, args: argparse.Namespace) -> int:
        p = self.storage.load(args.name)

        region_spacing = args.spacing
        if region_spacing is None:
            self.settings.load()
            region_spacing = self.settings.get('region_spacing')

        rng = random.Random(args.seed)
        try:
            regions = generator.generate_plan(
                p, start_position=args.start, region_spacing=region_spacing, rng=rng)
        except preset_lib.ValidationError as exc:
            for key, msg in exc.errors.items():
                logger.error("%s: %s", key, msg)
            return EXIT_FAILURE

        for region in regions:
            self.write(
                "%-30s %8.3f %8.3f  note=%-4s velocity=%3d  color=#%06x",
                region.name, region.start, region.end,
                pitch.note_name_from_midi(region.note) if region.note is not None else '-',
                region.velocity, region.color)
        self.write("%d regions", len(regions))
        return EXIT_SUCCESS

    def cmd_note(self, args: argparse.Namespace) -> int:
        value = args.note.strip()
        if value.isdigit():
            self.write('%s', pitch.note_name_from_midi(int(value)))
        else:
            self.write('%d', pitch.parse_note_name(value))
        return EXIT_SUCCESS

    def cmd_velocity(self, args: argparse.Namespace) -> int:
        self.write(
            "velocity=%d gain=%.4f",
            dynamics.velocity_from_db(args.db), dynamics.linear_from_db(args.db))
        return EXIT_SUCCESS

    def cmd_analyze(self, args: argparse.Namespace) -> int:
        matrix = samples.SampleMatrix()
        for path in args.paths:
            sample = matrix.add_sample(samples.Sample.load(path))
            self.write(
                "%s: peak=%.2fdB rms=%.2fdB amplitude=%d column=%d layer=%d",
                sample.name, sample.peak_db, sample.rms_db, sample.amplitude,
                sample.column, sample.layer)
        return EXIT_SUCCESS


def build_argparser(runtime_settings: RuntimeSettings, prog: Optional[str] = None
                   ) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Plan the regions of multi-sampled instrument presets.")
    runtime_settings.init_argparser(parser)

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    subparsers.add_parser('list', help="List the stored presets.")

    show_parser = subparsers.add_parser('show', help="Show a preset.")
    show_parser.add_argument('name', help="Name of the preset.")

    plan_parser = subparsers.add_parser(
        'plan', help="Print the regions, which would be generated for a preset.")
    plan_parser.add_argument('name', help="Name of the preset.")
    plan_parser.add_argument(
        '--start', type=float, default=0.0, metavar='SECONDS',
        help="Position of the first region [default: %(default)s].")
    plan_parser.add_argument(
        '--spacing', type=float, default=None, metavar='SECONDS',
        help="Gap between regions [default: the 'region_spacing' setting].")
    plan_parser.add_argument(
        '--seed', type=int, default=None,
        help="Seed for the random region colors.")

    note_parser = subparsers.add_parser(
        'note', help="Convert a note name to a MIDI note number or vice versa.")
    note_parser.add_argument('note', metavar='NAME_OR_NUMBER')

    velocity_parser = subparsers.add_parser(
        'velocity', help="Convert a level in dB to a MIDI velocity.")
    velocity_parser.add_argument('db', type=float, metavar='DB')

    analyze_parser = subparsers.add_parser(
        'analyze', help="Analyze WAV files and place them in the sample matrix.")
    analyze_parser.add_argument('paths', nargs='+', metavar='WAV')

    return parser


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    if argv is None:
        argv = sys.argv
    if out is None:
        out = sys.stdout

    runtime_settings = RuntimeSettings()
    parser = build_argparser(runtime_settings, prog=argv[0])
    args = parser.parse_args(args=argv[1:])
    runtime_settings.set_from_args(args)

    with logging.LogManager(runtime_settings):
        logger.debug("Running command '%s'...", args.command)
        try:
            return Command(runtime_settings, out).run(args)
        except ERRORS as exc:
            logger.error("%s", exc)
            return EXIT_FAILURE


if __name__ == '__main__':
    sys.exit(main(sys.argv))
