#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
A bounds-checked reader over an immutable byte buffer.

Byte order is given with the `struct` prefix characters: ``'<'`` for little
endian and ``'>'`` for big endian.

"""
from struct import calcsize, unpack_from

from fitcore._util.exceptions import InsufficientDataError


LITTLE_ENDIAN = '<'
BIG_ENDIAN = '>'


class ByteCursor:
    """Position-tracking reader.

    A read either consumes exactly the bytes it asked for or raises
    `InsufficientDataError`, leaving the position untouched.
    """
    __slots__ = ('_data', '_pos')

    def __init__(self, data, position=0):
        self._data = bytes(data)
        self._pos = position

    def __len__(self):
        return len(self._data)

    @property
    def data(self):
        return self._data

    def position(self):
        return self._pos

    def remaining(self):
        return len(self._data) - self._pos

    def _check(self, size):
        available = self.remaining()
        if size > available:
            raise InsufficientDataError(size, max(available, 0))

    def unpack(self, fmt):
        """Unpack a `struct` format at the current position."""
        size = calcsize(fmt)
        self._check(size)
        values = unpack_from(fmt, self._data, self._pos)
        self._pos += size
        return values

    def _scalar(self, code, endian):
        value, = self.unpack(endian + code)
        return value

    def read_u8(self, endian=LITTLE_ENDIAN):
        return self._scalar('B', endian)

    def read_i8(self, endian=LITTLE_ENDIAN):
        return self._scalar('b', endian)

    def read_u16(self, endian=LITTLE_ENDIAN):
        return self._scalar('H', endian)

    def read_i16(self, endian=LITTLE_ENDIAN):
        return self._scalar('h', endian)

    def read_u32(self, endian=LITTLE_ENDIAN):
        return self._scalar('I', endian)

    def read_i32(self, endian=LITTLE_ENDIAN):
        return self._scalar('i', endian)

    def read_u64(self, endian=LITTLE_ENDIAN):
        return self._scalar('Q', endian)

    def read_i64(self, endian=LITTLE_ENDIAN):
        return self._scalar('q', endian)

    def read_f32(self, endian=LITTLE_ENDIAN):
        return self._scalar('f', endian)

    def read_f64(self, endian=LITTLE_ENDIAN):
        return self._scalar('d', endian)

    def read_array(self, code, count, endian=LITTLE_ENDIAN):
        """Read `count` repetitions of a single `struct` type code."""
        return self.unpack('{}{:d}{}'.format(endian, count, code))

    def read_bytes(self, size):
        self._check(size)
        start = self._pos
        self._pos += size
        return self._data[start:self._pos]

    def read_cstring(self, max_len):
        """Read up to the first zero byte within `max_len` bytes.

        The terminator is consumed if found; when there is none the whole
        `max_len` bytes are consumed. Returns the raw prefix.

        Fewer than `max_len` bytes may remain as long as the terminator is
        among them.
        """
        window = self._data[self._pos:self._pos + max_len]
        end = window.find(b'\x00')
        if end < 0:
            self._check(max_len)
            self._pos += max_len
            return window
        self._pos += end + 1
        return window[:end]
