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

import re
from typing import Dict, List, Tuple, Union

MIN_OCTAVE = 0
MAX_OCTAVE = 9

PITCH_CLASSES = {
    'C': 0, 'C#': 1, 'Db': 1,
    'D': 2, 'D#': 3, 'Eb': 3,
    'E': 4,
    'F': 5, 'F#': 6, 'Gb': 6,
    'G': 7, 'G#': 8, 'Ab': 8,
    'A': 9, 'A#': 10, 'Bb': 10,
    'B': 11,
}  # type: Dict[str, int]

NOTE_TO_MIDI = {}  # type: Dict[str, int]
MIDI_TO_NOTE = {}  # type: Dict[int, str]

def _fill_midi_maps(note_to_midi: Dict[str, int], midi_to_note: Dict[int, str]) -> None:
    note_names = [
        ('C',),
        ('C#', 'Db'),
        ('D',),
        ('D#', 'Eb'),
        ('E',),
        ('F',),
        ('F#', 'Gb'),
        ('G',),
        ('G#', 'Ab'),
        ('A',),
        ('A#', 'Bb'),
        ('B',)
    ]  # type: List[Tuple[str, ...]]

    for o in range(MIN_OCTAVE, MAX_OCTAVE + 1):
        for pc, n in enumerate(note_names):
            k = pc + (o + 1) * 12
            if k < 128:
                for p in n:
                    note_to_midi['%s%d' % (p, o)] = k
                midi_to_note[k] = '%s%d' % (n[0], o)

_fill_midi_maps(NOTE_TO_MIDI, MIDI_TO_NOTE)


class InvalidNote(ValueError):
    pass


_NOTE_RE = re.compile(r'^\s*([A-Ga-g])([#bB]?)(\d+)\s*$')


def split_note_name(text: str) -> Tuple[str, str, int]:
    """Split a note name into (letter, accidental, octave).

    The letter is returned in upper case, the accidental as '', '#' or 'b'.
    """

    if not isinstance(text, str):
        raise InvalidNote("Bad note name %r" % (text,))

    m = _NOTE_RE.match(text)
    if m is None:
        raise InvalidNote("Bad note name %r" % text)

    letter = m.group(1).upper()
    accidental = m.group(2).lower()
    if letter + accidental not in PITCH_CLASSES:
        raise InvalidNote("Bad note %s%s" % (letter, accidental))

    octave = int(m.group(3))
    if octave < MIN_OCTAVE or octave > MAX_OCTAVE:
        raise InvalidNote("Bad octave %d" % octave)

    return letter, accidental, octave


def parse_note_name(text: str) -> int:
    """Convert a note name like 'C4', 'g#3' or 'Db5' to a MIDI note number."""

    letter, accidental, octave = split_note_name(text)
    midi = PITCH_CLASSES[letter + accidental] + (octave + 1) * 12
    if midi > 127:
        raise InvalidNote("Note %r is out of the MIDI range" % text)
    return midi


def is_valid_note_name(text: str) -> bool:
    try:
        parse_note_name(text)
    except InvalidNote:
        return False
    return True


def note_name_from_midi(midi: int) -> str:
    try:
        return MIDI_TO_NOTE[midi]
    except KeyError:
        raise InvalidNote("No note name for MIDI note %r" % (midi,)) from None


class Pitch(object):
    def __init__(self, name: Union['Pitch', str]) -> None:
        if isinstance(name, Pitch):
            self._value = name._value  # type: str
            self._accidental = name._accidental  # type: str
            self._octave = name._octave  # type: int
            self._midi_note = name._midi_note  # type: int
        else:
            self._midi_note = parse_note_name(name)
            self._value, self._accidental, self._octave = split_note_name(name)

    @classmethod
    def from_midi(cls, midi: int) -> 'Pitch':
        return cls(note_name_from_midi(midi))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return 'Pitch(%s)' % self.name

    def __hash__(self) -> int:
        return hash(self._midi_note)

    def __eq__(self, other: object) -> bool:
        if other is None:
            return False

        if not isinstance(other, Pitch):
            raise TypeError(
                "Can't compare %s to %s" % (type(self).__name__, type(other).__name__))

        return self._midi_note == other._midi_note

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Pitch):
            raise TypeError(
                "Can't compare %s to %s" % (type(self).__name__, type(other).__name__))

        return self._midi_note > other._midi_note

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Pitch):
            raise TypeError(
                "Can't compare %s to %s" % (type(self).__name__, type(other).__name__))

        return self._midi_note < other._midi_note

    @property
    def name(self) -> str:
        return '%s%s%d' % (self._value, self._accidental, self._octave)

    @property
    def value(self) -> str:
        return self._value

    @property
    def accidental(self) -> str:
        return self._accidental

    @property
    def octave(self) -> int:
        return self._octave

    @property
    def midi_note(self) -> int:
        return self._midi_note

    def transposed(self, half_notes: int = 0, octaves: int = 0) -> 'Pitch':
        return Pitch.from_midi(self._midi_note + half_notes + 12 * octaves)
