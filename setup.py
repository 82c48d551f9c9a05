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

from setuptools import setup


setup(
    name = 'presetgen',
    version = '0.1',
    author = 'Ben Niemann',
    author_email = 'pink@odahoda.de',
    description = "Region planner for multi-sampled instrument presets.",
    packages = [
        'presetgen',
        'presetgen.music',
        'presetdev',
    ],
    python_requires = '>=3.6',
    install_requires = [
        'numpy',
    ],
    extras_require = {
        'test': [
            'coverage',
            'mox3',
            'pyfakefs',
        ],
    },
    entry_points = {
        'console_scripts': [
            'presetgen = presetgen.main:main',
        ],
    },
    classifiers = [
        'Development Status :: 2 - Pre-Alpha',
        'Environment :: Console',
        'Intended Audience :: End Users/Desktop',
        'License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)',
        'Natural Language :: English',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: Artistic Software',
        'Topic :: Multimedia :: Sound/Audio :: MIDI',
    ],
)
