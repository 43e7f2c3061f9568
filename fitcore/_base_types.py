#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FIT base types.

Each base type knows its `struct` format code, hence its width, and the bit
pattern reserved to mean "no value". Floating types are invalid when NaN
(0xFFFFFFFF and 0xFFFFFFFFFFFFFFFF both unpack to NaN).

"""
from math import isnan
import struct


FLOAT_NAN = float('nan')


class BaseType:
    __slots__ = ('name', 'identifier', 'fmt', 'invalid')

    def __init__(self, **kwargs):
        for name, value in kwargs.items():
            setattr(self, name, value)

    def __repr__(self):
        return '<BaseType {0.name} 0x{0.identifier:02X}>'.format(self)

    @property
    def size(self):
        return struct.calcsize(self.fmt)

    width = size

    @property
    def type_num(self):
        return self.identifier & 0x1F

    @property
    def is_string(self):
        return self.fmt == 's'

    @property
    def is_float(self):
        return self.fmt in 'fd'

    @property
    def is_signed(self):
        return self.fmt in 'bhiqfd'

    @property
    def is_array_capable(self):
        """Strings and raw bytes are surfaced whole, never as arrays."""
        return not self.is_string and self.name != 'byte'

    @property
    def invalid_sentinel(self):
        return FLOAT_NAN if self.is_float else self.invalid

    def is_invalid(self, value):
        if self.is_float:
            return isnan(value)
        return value == self.invalid


BASE_TYPE_BYTE = BaseType(name='byte', identifier=0x0D, fmt='B', invalid=0xFF)

BASE_TYPES = {
    0x00: BaseType(name='enum',    identifier=0x00, fmt='B', invalid=0xFF),
    0x01: BaseType(name='sint8',   identifier=0x01, fmt='b', invalid=0x7F),
    0x02: BaseType(name='uint8',   identifier=0x02, fmt='B', invalid=0xFF),
    0x83: BaseType(name='sint16',  identifier=0x83, fmt='h', invalid=0x7FFF),
    0x84: BaseType(name='uint16',  identifier=0x84, fmt='H', invalid=0xFFFF),
    0x85: BaseType(name='sint32',  identifier=0x85, fmt='i', invalid=0x7FFFFFFF),
    0x86: BaseType(name='uint32',  identifier=0x86, fmt='I', invalid=0xFFFFFFFF),
    0x07: BaseType(name='string',  identifier=0x07, fmt='s', invalid=None),
    0x88: BaseType(name='float32', identifier=0x88, fmt='f', invalid=0xFFFFFFFF),
    0x89: BaseType(name='float64', identifier=0x89, fmt='d', invalid=0xFFFFFFFFFFFFFFFF),
    0x0A: BaseType(name='uint8z',  identifier=0x0A, fmt='B', invalid=0x0),
    0x8B: BaseType(name='uint16z', identifier=0x8B, fmt='H', invalid=0x0),
    0x8C: BaseType(name='uint32z', identifier=0x8C, fmt='I', invalid=0x0),
    0x0D: BASE_TYPE_BYTE,
    0x8E: BaseType(name='sint64',  identifier=0x8E, fmt='q', invalid=0x7FFFFFFFFFFFFFFF),
    0x8F: BaseType(name='uint64',  identifier=0x8F, fmt='Q', invalid=0xFFFFFFFFFFFFFFFF),
    0x90: BaseType(name='uint64z', identifier=0x90, fmt='Q', invalid=0x0)}

BASE_TYPES_BY_NAME = {bt.name: bt for bt in BASE_TYPES.values()}

# Some producers drop the endian-ability bit (0x80) from the identifier.
BASE_TYPES_BY_NUM = {bt.type_num: bt for bt in BASE_TYPES.values()}


def lookup(identifier):
    """Base type for an identifier byte, or None if it is not recognised."""
    base_type = BASE_TYPES.get(identifier)
    if base_type is None and not identifier & 0x60:
        base_type = BASE_TYPES_BY_NUM.get(identifier & 0x1F)
    return base_type
