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

"""A small JSON codec for preset and settings files.

Encoding produces compact output (no whitespace) with object members in insertion
order. Arrays and objects are told apart by type: JsonArray (or any list/tuple)
becomes an array, JsonObject (or any dict) becomes an object. Numbers never use
exponent notation, because the decoder doesn't accept it.
"""

import decimal
import logging
import math
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class Error(Exception):
    pass


class EncodeError(Error):
    pass


class ParseError(Error):
    def __init__(self, message: str, pos: int, char: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.pos = pos
        self.char = char

    def __str__(self) -> str:
        if self.char is not None:
            return '%s at position %d: %r' % (self.message, self.pos, self.char)
        return '%s at position %d' % (self.message, self.pos)


class JsonArray(list):
    def __repr__(self) -> str:
        return 'JsonArray(%s)' % super().__repr__()


class JsonObject(dict):
    def __repr__(self) -> str:
        return 'JsonObject(%s)' % super().__repr__()


Value = Union[None, bool, int, float, str, JsonArray, JsonObject]


_ESCAPES = {
    '"': '\\"',
    '\\': '\\\\',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}

_UNESCAPES = {
    '"': '"',
    '\\': '\\',
    '/': '/',
    'b': '\b',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
}

_WHITESPACE = ' \t\n\r\f\v'
_NUMBER_CHARS = '0123456789.-'


def quote_string(s: str) -> str:
    out = ['"']
    for c in s:
        escaped = _ESCAPES.get(c)
        if escaped is not None:
            out.append(escaped)
        elif ord(c) < 0x20:
            out.append('\\u%04x' % ord(c))
        else:
            out.append(c)
    out.append('"')
    return ''.join(out)


def format_number(value: Union[int, float]) -> str:
    if isinstance(value, int):
        return str(value)

    if not math.isfinite(value):
        raise EncodeError("Can't encode %r" % value)

    s = repr(value)
    if 'e' in s or 'E' in s:
        s = format(decimal.Decimal(s), 'f')
        if '.' not in s:
            s += '.0'
    return s


def _legacy_array_items(value: Dict[Any, Any]) -> Optional[List[Any]]:
    # A mapping with the keys 1..N is a 1-based sequence.
    if not value:
        return None
    keys = set(value.keys())
    if keys != set(range(1, len(value) + 1)):
        return None
    return [value[idx] for idx in range(1, len(value) + 1)]


class _Encoder(object):
    def __init__(self, legacy_containers: bool) -> None:
        self.legacy_containers = legacy_containers

    def encode(self, value: Any) -> str:
        if isinstance(value, bool):
            return 'true' if value else 'false'

        if isinstance(value, (int, float)):
            return format_number(value)

        if isinstance(value, str):
            return quote_string(value)

        if isinstance(value, (list, tuple)):
            if self.legacy_containers and not value:
                return '{}'
            return self.encode_array(value)

        if isinstance(value, dict):
            if self.legacy_containers:
                items = _legacy_array_items(value)
                if items is not None:
                    return self.encode_array(items)
            return self.encode_object(value)

        return 'null'

    def encode_array(self, items: Any) -> str:
        return '[' + ','.join(self.encode(item) for item in items) + ']'

    def encode_object(self, members: Dict[Any, Any]) -> str:
        parts = []
        for key, value in members.items():
            if isinstance(key, bool) or not isinstance(key, (str, int, float)):
                raise EncodeError("Object keys must be strings, got %s" % type(key).__name__)
            if not isinstance(key, str):
                key = str(key)
            parts.append('%s:%s' % (quote_string(key), self.encode(value)))
        return '{' + ','.join(parts) + '}'


def encode(value: Any, legacy_containers: bool = False) -> str:
    """Serialize a value tree to a compact JSON string.

    With legacy_containers=True containers are classified the way the old preset
    files were written: a dict with the keys 1..N and a non-empty list are arrays,
    every empty container is written as '{}'.
    """

    return _Encoder(legacy_containers).encode(value)


class _Parser(object):
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, message: str, pos: Optional[int] = None) -> ParseError:
        if pos is None:
            pos = self.pos
        char = self.text[pos] if pos < len(self.text) else None
        return ParseError(message, pos, char)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ''

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def parse(self) -> Value:
        result = self.parse_value()

        self.skip_whitespace()
        if not self.at_end():
            raise self.error("Trailing characters in JSON string")

        return result

    def parse_value(self) -> Value:
        self.skip_whitespace()

        if self.at_end():
            raise self.error("Unexpected end of input")

        c = self.text[self.pos]
        if c == '{':
            return self.parse_object()
        elif c == '[':
            return self.parse_array()
        elif c == '"':
            return self.parse_string()
        elif c in _NUMBER_CHARS and c != '.':
            return self.parse_number()
        elif self.text.startswith('true', self.pos):
            self.pos += 4
            return True
        elif self.text.startswith('false', self.pos):
            self.pos += 5
            return False
        elif self.text.startswith('null', self.pos):
            self.pos += 4
            return None
        else:
            raise self.error("Unexpected character")

    def parse_string(self) -> str:
        assert self.text[self.pos] == '"'
        start = self.pos
        self.pos += 1

        chunks = []  # type: List[str]
        while True:
            if self.at_end():
                raise self.error("Unterminated string starting", start)

            c = self.text[self.pos]
            if c == '"':
                self.pos += 1
                break

            if c == '\\':
                self.pos += 1
                if self.at_end():
                    raise self.error("Unterminated string starting", start)
                esc = self.text[self.pos]
                if esc == 'u':
                    digits = self.text[self.pos + 1:self.pos + 5]
                    if len(digits) != 4 or any(d not in '0123456789abcdefABCDEF' for d in digits):
                        raise self.error("Invalid \\u escape", self.pos - 1)
                    code = int(digits, 16)
                    self.pos += 5
                    if 0xd800 <= code < 0xdc00 and self.text.startswith('\\u', self.pos):
                        low = self.text[self.pos + 2:self.pos + 6]
                        if (len(low) == 4
                                and all(d in '0123456789abcdefABCDEF' for d in low)
                                and 0xdc00 <= int(low, 16) < 0xe000):
                            code = 0x10000 + ((code - 0xd800) << 10) + (int(low, 16) - 0xdc00)
                            self.pos += 6
                    chunks.append(chr(code))
                else:
                    try:
                        chunks.append(_UNESCAPES[esc])
                    except KeyError:
                        raise self.error("Invalid escape sequence", self.pos - 1) from None
                    self.pos += 1
                continue

            chunks.append(c)
            self.pos += 1

        return ''.join(chunks)

    def parse_number(self) -> Union[int, float]:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in _NUMBER_CHARS:
            self.pos += 1
        token = self.text[start:self.pos]

        try:
            if '.' in token:
                return float(token)
            return int(token)
        except ValueError:
            raise ParseError("Invalid number %r" % token, start, token[0]) from None

    def parse_object(self) -> JsonObject:
        assert self.text[self.pos] == '{'
        obj = JsonObject()
        self.pos += 1

        self.skip_whitespace()
        if self.peek() == '}':
            self.pos += 1
            return obj

        while True:
            self.skip_whitespace()
            if self.at_end():
                raise self.error("Unexpected end of input in object")
            if self.peek() != '"':
                raise self.error("Expected string key in object")

            key = self.parse_string()

            self.skip_whitespace()
            if self.peek() != ':':
                raise self.error("Expected ':' after object key")
            self.pos += 1

            obj[key] = self.parse_value()

            self.skip_whitespace()
            c = self.peek()
            if c == '}':
                self.pos += 1
                return obj
            elif c == ',':
                self.pos += 1
                self.skip_whitespace()
                if self.peek() == '}':
                    raise self.error("Trailing comma in object")
            elif c == '':
                raise self.error("Unexpected end of input in object")
            else:
                raise self.error("Expected ',' or '}' in object")

    def parse_array(self) -> JsonArray:
        assert self.text[self.pos] == '['
        arr = JsonArray()
        self.pos += 1

        self.skip_whitespace()
        if self.peek() == ']':
            self.pos += 1
            return arr

        while True:
            arr.append(self.parse_value())

            self.skip_whitespace()
            c = self.peek()
            if c == ']':
                self.pos += 1
                return arr
            elif c == ',':
                self.pos += 1
                self.skip_whitespace()
                if self.peek() == ']':
                    raise self.error("Trailing comma in array")
            elif c == '':
                raise self.error("Unexpected end of input in array")
            else:
                raise self.error("Expected ',' or ']' in array")


def decode(text: str) -> Value:
    """Parse a JSON document.

    Raises ParseError for any syntax error; there is no partial result.
    """

    if isinstance(text, bytes):
        text = text.decode('utf-8')
    return _Parser(text).parse()
