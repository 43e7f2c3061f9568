#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Implement the record layer of the Flexible and Interoperable data Transfer
(FIT) protocol.

Records are not self-delimiting: the length of a data record is only known
from the definition currently stored in its local message slot. A read
failure or a reference to an empty slot therefore ends the decode; there is
no way to find the next record boundary.

TODO:
-----
    + field components
    + accumulators

"""
from collections import namedtuple
import logging
from struct import unpack
import warnings

from fitcore import _base_types
from fitcore._developer import DeveloperFieldCatalog
from fitcore._messages import (
    ARRAY, BYTES, FLOAT, SINT, STRING, UINT,
    DataMessage, DefinitionMessage, DeveloperFieldValue, FieldValue)
from fitcore._profile import (
    DEVELOPER_DATA_ID, FIELD_DESCRIPTION, PROFILE, TIMESTAMP_FIELD)
from fitcore._util.cursor import BIG_ENDIAN, LITTLE_ENDIAN
from fitcore._util.exceptions import (
    MissingDefinitionError, UnrecognizedBaseTypeWarning)


logger = logging.getLogger(__name__)

LOCAL_MESSAGE_SLOTS = 16


class NormalHeader:
    """From the FIT SDK release 20.03.00

    Normal Header Bit Field Description
    -----------------------------------

    =====  =============  ========================
    Bit        Value      Description
    =====  =============  ========================
      7          0        Normal header
      6        0 or 1     Message type:
                            1: definition message
                            0: data message
      5     0 (default)   Message type specific
                            (developer data flag)
      4          0        Reserved
     0-3        0-15      Local message type
    =====  =============  ========================
    """
    __slots__ = ('is_definition', 'has_developer_data', 'local_message_type')

    is_compressed = False
    time_offset = None

    def __init__(self, header_byte):
        self.is_definition = bool(header_byte & 0x40)
        self.has_developer_data = bool(header_byte & 0x20)
        self.local_message_type = header_byte & 0xF    # bits 0-3

    def __repr__(self):
        return '<NormalHeader {} local={:d}{}>'.format(
            'definition' if self.is_definition else 'data',
            self.local_message_type,
            ' +dev' if self.has_developer_data else '')


class CompressedTimestampHeader:
    """From the FIT SDK release 20.03.00

    Compressed Timestamp Header Description
    ---------------------------------------

    The compressed timestamp header is a special form of record header that
    allows some timestamp information to be placed within the record header,
    rather than within the record content.

    =====  =============  ========================
    Bit        Value      Description
    =====  =============  ========================
      7          1        Compressed timestamp
     5-6        0-3       Local message type
     0-4        0-31      Time offset (seconds)
    =====  =============  ========================

    NOTE: this type of record header is used for a *data message only*.
    """
    __slots__ = ('local_message_type', 'time_offset')

    is_compressed = True
    is_definition = False
    has_developer_data = False

    def __init__(self, header_byte):
        self.local_message_type = (header_byte >> 5) & 0x3   # bits 5-6
        self.time_offset = header_byte & 0x1F                # bits 0-4

    def __repr__(self):
        return '<CompressedTimestampHeader local={:d} offset={:d}>'.format(
            self.local_message_type, self.time_offset)


def parse_record_header(header_byte):
    # A value of 0 in bit 7 indicates that this is a normal header.
    if header_byte & 0x80:
        return CompressedTimestampHeader(header_byte)
    return NormalHeader(header_byte)


FieldSpec = namedtuple('FieldSpec', 'number size base_type_id')

DeveloperFieldSpec = namedtuple(
    'DeveloperFieldSpec', 'number size developer_data_index')


class LocalDefinition:
    """From the FIT SDK release 20.03.00

    Definition Message Contents
    ---------------------------

    ======  =======================  =============  ===========================
    Byte    Description                 Length      Value
    (bytes)
    ======  =======================  =============  ===========================
      0     Reserved                       1         0
      1     Architecture                   1         0 or 1
                                                       0: little endian
                                                       1: big endian
     2-3    Global message number          2         Unique to each message
      4     Fields                         1         Number of fields in the
                                                     data message
      5     Field definition(s)            3         See table below
     ...                              (per field)
      *     Developer fields               1         Only if the header's
                                                     developer flag is set
      *     Developer field def(s)         3         Number, size, developer
                                                     data index
    ======  =======================  =============  ===========================

    Field Definition Contents
    -------------------------

    ======  =================  ===============================================
     Byte    Name               Description
    ======  =================  ===============================================
      0     Field definition   Defined in the global FIT profile for the
            number             specified FIT message.
      1     Size               Size (in bytes) of the specified FIT message's
                               field.
      2     Base type          Base type of the specified FIT message's field.
    ======  =================  ===============================================

    """
    __slots__ = ('architecture', 'global_id', 'field_specs',
                 'developer_specs')

    def __init__(self, architecture, global_id, field_specs,
                 developer_specs=()):
        self.architecture = architecture
        self.global_id = global_id
        self.field_specs = tuple(field_specs)
        self.developer_specs = tuple(developer_specs)

    def __repr__(self):
        return '<LocalDefinition global={:d} fields={:d} dev_fields={:d}>'.format(
            self.global_id, len(self.field_specs), len(self.developer_specs))

    def __eq__(self, other):
        if not isinstance(other, LocalDefinition):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name)
                   for name in self.__slots__)

    @property
    def endian(self):
        return BIG_ENDIAN if self.architecture else LITTLE_ENDIAN

    @property
    def data_size(self):
        """Bytes in a data record body using this definition."""
        return (sum(spec.size for spec in self.field_specs)
                + sum(spec.size for spec in self.developer_specs))

    @classmethod
    def parse(cls, cursor, has_developer_data=False):
        __, architecture = cursor.unpack('<2B')   # ignore reserved
        endian = BIG_ENDIAN if architecture else LITTLE_ENDIAN

        global_id, field_count = cursor.unpack(endian + 'HB')

        # NOTE: single bytes, so no need to apply endianness here.
        field_specs = [FieldSpec(*cursor.unpack('<3B'))
                       for _ in range(field_count)]

        developer_specs = []
        if has_developer_data:
            dev_count = cursor.read_u8()
            developer_specs = [DeveloperFieldSpec(*cursor.unpack('<3B'))
                               for _ in range(dev_count)]

        return cls(architecture, global_id, field_specs, developer_specs)


class DefinitionTable:
    """The 16 local message slots of one decode session.

    Storing into a slot replaces whatever was there; the newest definition
    always wins.
    """
    __slots__ = ('_slots',)

    def __init__(self):
        self._slots = [None] * LOCAL_MESSAGE_SLOTS

    def __len__(self):
        return sum(1 for definition in self._slots if definition is not None)

    def parse(self, cursor, has_developer_data=False):
        return LocalDefinition.parse(cursor, has_developer_data)

    def store(self, slot, definition):
        self._slots[slot] = definition

    def get(self, slot):
        return self._slots[slot]

    def require(self, slot):
        definition = self._slots[slot]
        if definition is None:
            raise MissingDefinitionError(slot)
        return definition


def kind_of(base_type):
    if base_type is None or not base_type.is_array_capable:
        return STRING if base_type and base_type.is_string else BYTES
    if base_type.is_float:
        return FLOAT
    return SINT if base_type.is_signed else UINT


def interpret(raw, base_type, endian):
    """Turn raw field bytes into a tagged value.

    Returns
    -------
    (kind, element_kind, value, is_valid)
    """
    size = len(raw)

    if base_type is None:
        return BYTES, None, raw, True

    if base_type.is_string:
        text = raw.split(b'\x00')[0].decode('utf-8', 'replace')
        # Strings carry no invalid sentinel.
        return STRING, None, text, True

    if not base_type.is_array_capable:   # byte
        return BYTES, None, raw, any(b != base_type.invalid for b in raw)

    width = base_type.size
    if size == 0 or size % width:
        return BYTES, None, raw, True

    count = size // width
    kind = kind_of(base_type)
    values = unpack('{}{:d}{}'.format(endian, count, base_type.fmt), raw)

    if count == 1:
        value, = values
        return kind, None, value, not base_type.is_invalid(value)

    # An array is only invalid when every element is.
    is_valid = not all(base_type.is_invalid(value) for value in values)
    return ARRAY, kind, values, is_valid


def advance_timestamp(timestamp, time_offset):
    """Apply a 5 bit compressed-header offset to a rolling timestamp.

    The offset is the low five bits of the new timestamp, so it rolls over
    every 32 seconds.
    """
    return timestamp + ((time_offset - (timestamp & 0x1F) + 32) % 32)


class MessageDecoder:
    """Decode records one at a time.

    Holds the session state: the local definition slots, the developer field
    catalog and the rolling timestamp used by compressed headers. An instance
    belongs to exactly one decode and must not be shared.

    Parameters
    ----------
    profile : Profile, optional
        Supplies message names and field metadata.
    field_description_mesg_num, developer_data_id_mesg_num : int, optional
        Global message numbers that feed the developer field catalog.
    """
    def __init__(self, *, profile=PROFILE,
                 field_description_mesg_num=FIELD_DESCRIPTION,
                 developer_data_id_mesg_num=DEVELOPER_DATA_ID):
        self.profile = profile
        self.field_description_mesg_num = field_description_mesg_num
        self.developer_data_id_mesg_num = developer_data_id_mesg_num

        self.definitions = DefinitionTable()
        self.developer_fields = DeveloperFieldCatalog()
        self.timestamp = 0

    def read_record(self, cursor):
        """Parse a message (header + contents)."""
        header = parse_record_header(cursor.read_u8())

        if header.is_definition:
            return self.read_definition(header, cursor)
        return self.read_data(header, cursor)

    def read_definition(self, header, cursor):
        definition = self.definitions.parse(cursor, header.has_developer_data)

        for spec in definition.field_specs:
            if _base_types.lookup(spec.base_type_id) is None:
                warnings.warn(UnrecognizedBaseTypeWarning(
                    spec.base_type_id, spec.number))

        self.definitions.store(header.local_message_type, definition)
        logger.debug('local message %d defined as global %d (%d fields)',
                     header.local_message_type, definition.global_id,
                     len(definition.field_specs))

        return DefinitionMessage(
            header, definition,
            name=self.profile.message_name(definition.global_id))

    def read_data(self, header, cursor):
        definition = self.definitions.require(header.local_message_type)
        endian = definition.endian
        global_id = definition.global_id

        timestamp = None
        if header.is_compressed:
            self.timestamp = advance_timestamp(self.timestamp,
                                               header.time_offset)
            timestamp = self.timestamp

        fields = [self.read_field(cursor, spec, endian, global_id)
                  for spec in definition.field_specs]

        developer_fields = [self.read_developer_field(cursor, spec, endian)
                            for spec in definition.developer_specs]

        for field in fields:
            if (field.number == TIMESTAMP_FIELD and field.is_valid
                    and field.kind == UINT):
                self.timestamp = timestamp = field.value

        message = DataMessage(header, global_id, fields, developer_fields,
                              timestamp=timestamp,
                              name=self.profile.message_name(global_id),
                              profile=self.profile)

        if global_id == self.field_description_mesg_num:
            self.developer_fields.learn_field_description(message)
        elif global_id == self.developer_data_id_mesg_num:
            self.developer_fields.learn_developer_data_id(message)

        return message

    def read_field(self, cursor, spec, endian, global_id):
        raw = cursor.read_bytes(spec.size)
        base_type = _base_types.lookup(spec.base_type_id)
        kind, element_kind, value, is_valid = interpret(raw, base_type, endian)
        return FieldValue(spec.number, kind, value, is_valid,
                          base_type=base_type, element_kind=element_kind,
                          info=self.profile.lookup(global_id, spec.number))

    def read_developer_field(self, cursor, spec, endian):
        # Read once; the type comes from the catalog, not the definition.
        raw = cursor.read_bytes(spec.size)

        descriptor = self.developer_fields.resolve(
            spec.developer_data_index, spec.number)
        if descriptor is None:
            return DeveloperFieldValue(spec.number, spec.developer_data_index,
                                       raw, BYTES, raw)

        base_type = _base_types.lookup(descriptor.base_type_id)
        kind, element_kind, value, is_valid = interpret(raw, base_type, endian)
        return DeveloperFieldValue(spec.number, spec.developer_data_index,
                                   raw, kind, value, is_valid=is_valid,
                                   element_kind=element_kind,
                                   descriptor=descriptor)
