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

import sys
import logging.handlers
from logging import *  # pylint: disable=W0614,W0401
from typing import Any, Dict, Optional, List, Tuple  # pylint: disable=unused-import

from . import runtime_settings as runtime_settings_lib


LEVELS = {
    'debug': DEBUG,
    'info': INFO,
    'warning': WARNING,
    'error': ERROR,
    'critical': CRITICAL,
}


class WrappingFormatter(Formatter):
    def formatMessage(self, record: LogRecord) -> str:
        record.message = record.message.replace('\n', '\n\t')
        return super().formatMessage(record)  # type: ignore


class LogFilter(Filter):
    def __init__(self, level_spec: str) -> None:
        super().__init__()

        self.levels = []  # type: List[Tuple[str, int]]

        for pair in level_spec.split(','):
            pair = pair.strip()
            if not pair:
                continue
            if '=' in pair:
                logger_name, level_name = pair.split('=', 1)
            else:
                logger_name = ''
                level_name = pair
            try:
                log_level = LEVELS[level_name.lower()]
            except KeyError:
                raise ValueError("Invalid log level '%s'" % level_name) from None
            self.levels.append((logger_name, log_level))

    def filter(self, record: LogRecord) -> bool:
        for logger_name, level in self.levels:
            if (record.levelno >= level and (logger_name == ''
                                             or record.name == logger_name
                                             or record.name.startswith(logger_name + '.'))):
                return True
        return False


class LogManager(object):
    """Installs the log handlers for the command line tool.

    All existing handlers of the root logger are replaced by a STDERR handler, which
    only passes records matching the configured level spec, and an optional rotating
    log file, which gets everything.
    """

    def __init__(self, runtime_settings: runtime_settings_lib.RuntimeSettings) -> None:
        self.runtime_settings = runtime_settings

        self.root_logger = None  # type: Logger
        self.handlers = {}  # type: Dict[str, Handler]
        self.__old_handlers = []  # type: List[Handler]
        self.__old_level = None  # type: int

    def __enter__(self) -> 'LogManager':
        self.setup()
        return self

    def __exit__(self, *args: Any) -> bool:
        self.cleanup()
        return False

    def setup(self) -> None:
        captureWarnings(True)

        self.root_logger = getLogger()
        self.__old_handlers = list(self.root_logger.handlers)
        self.__old_level = self.root_logger.level
        for handler in self.__old_handlers:
            self.root_logger.removeHandler(handler)
        self.root_logger.setLevel(DEBUG)

        self.add_handler('stderr', self.create_stderr_logger())

        if self.runtime_settings.log_file:
            self.add_handler('file', self.create_file_logger())

    def cleanup(self) -> None:
        for name in list(self.handlers):
            handler = self.remove_handler(name)
            handler.close()

        if self.root_logger is not None:
            for handler in self.__old_handlers:
                self.root_logger.addHandler(handler)
            self.root_logger.setLevel(self.__old_level)
            self.__old_handlers = []
            self.root_logger = None

        captureWarnings(False)

    def add_handler(self, name: str, handler: Handler) -> None:
        assert name not in self.handlers, name
        self.handlers[name] = handler
        self.root_logger.addHandler(handler)

    def remove_handler(self, name: str) -> Optional[Handler]:
        handler = self.handlers.pop(name, None)
        if handler is not None:
            self.root_logger.removeHandler(handler)
        return handler

    def create_stderr_logger(self) -> Handler:
        handler = StreamHandler(sys.stderr)
        handler.addFilter(LogFilter(self.runtime_settings.log_level))
        handler.setFormatter(WrappingFormatter('%(levelname)-8s:%(name)s: %(message)s'))
        return handler

    def create_file_logger(self) -> Handler:
        handler = logging.handlers.RotatingFileHandler(
            self.runtime_settings.log_file,
            maxBytes=self.runtime_settings.log_file_size,
            backupCount=self.runtime_settings.log_file_keep_old,
            encoding='utf-8')
        handler.setLevel(DEBUG)
        handler.setFormatter(WrappingFormatter(
            '%(asctime)s\t%(levelname)s\t%(process)s\t%(thread)08x\t%(name)s\t%(message)s',
            '%Y%m%d-%H%M%S'))
        return handler
