#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Decoded messages and the field values they carry.

A field value is a closed tagged variant: `kind` is one of the module
constants below. Arrays are tuples whose elements share `element_kind`.

"""
from datetime import datetime, timedelta

import pytz

from fitcore._profile import PROFILE


SINT = 'sint'
UINT = 'uint'
FLOAT = 'float'
STRING = 'string'
BYTES = 'bytes'
ARRAY = 'array'

KINDS = (SINT, UINT, FLOAT, STRING, BYTES, ARRAY)

# FIT timestamps count seconds since this instant.
FIT_EPOCH = datetime(year=1989, month=12, day=31, tzinfo=pytz.utc)


def to_datetime(timestamp):
    if timestamp is None:
        return None
    return FIT_EPOCH + timedelta(seconds=timestamp)


def apply_scale_offset(value, scale, offset):
    """From the FIT SDK release 20.03.00

    When specified, the binary quantity is divided by the scale factor and
    then the offset is subtracted, yielding a floating point quantity.
    """
    if (scale in (None, 1)) and not offset:
        return value
    if isinstance(value, tuple):
        return tuple(apply_scale_offset(v, scale, offset) for v in value)
    return value / (scale or 1) - (offset or 0)


class _Value:
    """Shared behaviour of standard and developer field values."""
    __slots__ = ()

    @property
    def is_array(self):
        return self.kind == ARRAY

    @property
    def scaled(self):
        """Value with scale and offset applied, None if invalid."""
        if not self.is_valid:
            return None
        if self.kind in (STRING, BYTES) or self.element_kind == BYTES:
            return self.value
        return apply_scale_offset(self.value, self.scale, self.offset)


class FieldValue(_Value):
    """A standard field read from a data message.

    Attributes
    ----------
    number : int
        Field definition number.
    kind : str
        One of `KINDS`.
    element_kind : str or None
        For arrays, the kind of every element.
    value : int, float, str, bytes or tuple
        The raw decoded value (before scale/offset).
    is_valid : bool
        False if the value matched the base type's invalid sentinel.
    base_type : BaseType or None
        None when the definition named an unrecognised base type.
    info : FieldInfo or None
        Profile metadata, None for fields unknown to the profile.
    """
    __slots__ = ('number', 'kind', 'element_kind', 'value', 'is_valid',
                 'base_type', 'info')

    def __init__(self, number, kind, value, is_valid, base_type=None,
                 element_kind=None, info=None):
        self.number = number
        self.kind = kind
        self.element_kind = element_kind
        self.value = value
        self.is_valid = is_valid
        self.base_type = base_type
        self.info = info

    def __repr__(self):
        return '<FieldValue {!s}({:d})={!r}{}>'.format(
            self.name or 'unknown', self.number, self.value,
            '' if self.is_valid else ' invalid')

    @property
    def name(self):
        return self.info.name if self.info else None

    @property
    def units(self):
        return self.info.units if self.info else ''

    @property
    def scale(self):
        return self.info.scale if self.info else 1

    @property
    def offset(self):
        return self.info.offset if self.info else 0

    @property
    def type_name(self):
        return self.info.type_name if self.info else None


class DeveloperFieldValue(_Value):
    """A developer field, interpreted with a type learned from an earlier
    field description message when one is available.

    Unresolved fields keep their raw bytes and have no name or units.
    """
    __slots__ = ('number', 'developer_data_index', 'raw', 'kind',
                 'element_kind', 'value', 'is_valid', 'descriptor')

    def __init__(self, number, developer_data_index, raw, kind, value,
                 is_valid=True, element_kind=None, descriptor=None):
        self.number = number
        self.developer_data_index = developer_data_index
        self.raw = raw
        self.kind = kind
        self.element_kind = element_kind
        self.value = value
        self.is_valid = is_valid
        self.descriptor = descriptor

    def __repr__(self):
        return '<DeveloperFieldValue {!s}({:d}:{:d})={!r}>'.format(
            self.name or 'unknown', self.developer_data_index, self.number,
            self.value)

    @property
    def is_resolved(self):
        return self.descriptor is not None

    @property
    def name(self):
        return self.descriptor.name if self.descriptor else None

    @property
    def units(self):
        return self.descriptor.units if self.descriptor else None

    @property
    def scale(self):
        return self.descriptor.scale if self.descriptor else None

    @property
    def offset(self):
        return self.descriptor.offset if self.descriptor else None


class DefinitionMessage:
    """A decoded definition record: a snapshot of the layout it declared."""
    __slots__ = ('header', 'definition', 'name')

    is_definition = True

    def __init__(self, header, definition, name=None):
        self.header = header
        self.definition = definition
        self.name = name

    def __repr__(self):
        return '<DefinitionMessage local={:d} global={:d} ({!s})>'.format(
            self.local_message_type, self.global_id, self.name or 'unknown')

    @property
    def local_message_type(self):
        return self.header.local_message_type

    @property
    def global_id(self):
        return self.definition.global_id


class DataMessage:
    """The useful part of a *.fit file."""
    __slots__ = ('header', 'global_id', 'name', 'fields', 'developer_fields',
                 'timestamp', '_profile')

    is_definition = False

    def __init__(self, header, global_id, fields, developer_fields=(),
                 timestamp=None, name=None, profile=PROFILE):
        self.header = header
        self.global_id = global_id
        self.name = name
        self.fields = tuple(fields)
        self.developer_fields = tuple(developer_fields)
        self.timestamp = timestamp
        self._profile = profile

    def __repr__(self):
        return ('<DataMessage local={:d} global={!s} ({!s}) fields={:d} '
                'dev_fields={:d}>').format(
                    self.local_message_type, self.global_id,
                    self.name or 'unknown', len(self.fields),
                    len(self.developer_fields))

    @property
    def local_message_type(self):
        return self.header.local_message_type

    @property
    def datetime(self):
        """UTC datetime of `timestamp`."""
        return to_datetime(self.timestamp)

    def field(self, name_or_number):
        """First FieldValue matching a name or field number, else None."""
        key = 'number' if isinstance(name_or_number, int) else 'name'
        for field in self.fields:
            if getattr(field, key) == name_or_number:
                return field
        return None

    def get(self, name, default=None):
        field = self.field(name)
        if field is None or not field.is_valid:
            return default
        return field.scaled

    def get_number(self, number, default=None):
        return self.get(number, default)

    def get_developer(self, name, default=None):
        for dev_field in self.developer_fields:
            if dev_field.name == name:
                return dev_field.scaled
        return default

    def as_dict(self):
        """Valid, named fields and named developer fields by name."""
        values = {field.name: field.scaled for field in self.fields
                  if field.is_valid and field.name}
        values.update((dev.name, dev.scaled) for dev in self.developer_fields
                      if dev.name)
        return values

    def decode(self):
        """Decode like the FitCSVTool.

        Returns
        -------
        [(name, value, units), (name, value, units), ...]
        """
        decoded = [self._extract(field) for field in self.fields
                   if field.is_valid]
        decoded.extend((dev.name or 'unknown', dev.scaled, dev.units or '')
                       for dev in self.developer_fields)
        return decoded

    def _extract(self, field):
        value = field.scaled
        if field.type_name and field.kind in (UINT, SINT):
            value = self._profile.value_name(field.type_name, value)
        return field.name or 'unknown', value, field.units
