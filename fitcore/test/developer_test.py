#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Two-pass developer fields: the definition supplies a byte count, an earlier
field_description message supplies name, type and units.

"""
from struct import pack

from fitcore._developer import DeveloperFieldCatalog, DeveloperFieldDescriptor
from fitcore._messages import ARRAY, BYTES, UINT
from fitcore._protocol import MessageDecoder
from fitcore._util.cursor import ByteCursor
from fitcore.test import fitbuild


UINT8, UINT16, UINT32 = 0x02, 0x84, 0x86


def decode_records(*records, **kwargs):
    decoder = MessageDecoder(**kwargs)
    cursor = ByteCursor(b''.join(records))
    messages = []
    while cursor.remaining():
        messages.append(decoder.read_record(cursor))
    return decoder, messages


def core_temp_records(value=b'\x26'):
    return (
        fitbuild.field_description(5, 0, 7, UINT8, 'core_temp', units='C'),
        fitbuild.definition(0, 20, [(253, 4, UINT32), (3, 1, UINT8)],
                            dev_fields=[(7, len(value), 0)]),
        fitbuild.data(0, pack('<IB', 1000000, 150) + value))


def test_two_pass_resolution():
    decoder, messages = decode_records(*core_temp_records())
    record = messages[-1]

    assert record.get('heart_rate') == 150
    assert record.get_number(3) == 150
    assert record.get_number(99) is None
    assert record.get_number(99, default=0) == 0
    dev_field, = record.developer_fields
    assert dev_field.is_resolved
    assert dev_field.name == 'core_temp'
    assert dev_field.units == 'C'
    assert dev_field.kind == UINT
    assert dev_field.value == 38
    assert dev_field.raw == b'\x26'
    assert record.get_developer('core_temp') == 38
    assert record.as_dict()['core_temp'] == 38


def test_catalog_is_learned():
    decoder, messages = decode_records(*core_temp_records())
    descriptor = decoder.developer_fields.resolve(0, 7)

    assert messages[1].name == 'field_description'
    assert descriptor.name == 'core_temp'
    assert descriptor.base_type_id == UINT8
    assert descriptor.units == 'C'
    assert (0, 7) in decoder.developer_fields
    assert len(decoder.developer_fields) == 1


def test_unresolved_developer_field():
    __, messages = decode_records(
        fitbuild.definition(0, 20, [(3, 1, UINT8)], dev_fields=[(9, 2, 1)]),
        fitbuild.data(0, b'\x96\x01\x02'))

    dev_field, = messages[-1].developer_fields
    assert not dev_field.is_resolved
    assert dev_field.name is None
    assert dev_field.units is None
    assert dev_field.kind == BYTES
    assert dev_field.value == b'\x01\x02'
    assert dev_field.developer_data_index == 1
    assert messages[-1].as_dict() == {'heart_rate': 150}


def test_reinterpret_as_array():
    __, messages = decode_records(
        fitbuild.field_description(5, 0, 11, UINT16, 'hrv', units='ms'),
        fitbuild.definition(0, 20, [], dev_fields=[(11, 4, 0)]),
        fitbuild.data(0, b'\x20\x03\x84\x03'))

    dev_field, = messages[-1].developer_fields
    assert dev_field.kind == ARRAY
    assert dev_field.value == (800, 900)


def test_size_not_a_multiple_falls_back_to_bytes():
    __, messages = decode_records(
        fitbuild.field_description(5, 0, 11, UINT16, 'hrv'),
        fitbuild.definition(0, 20, [], dev_fields=[(11, 3, 0)]),
        fitbuild.data(0, b'\x01\x02\x03'))

    dev_field, = messages[-1].developer_fields
    assert dev_field.is_resolved
    assert dev_field.name == 'hrv'
    assert dev_field.kind == BYTES
    assert dev_field.value == b'\x01\x02\x03'


def test_big_endian_reinterpretation():
    __, messages = decode_records(
        fitbuild.field_description(5, 0, 11, UINT16, 'hrv'),
        fitbuild.definition(0, 20, [], dev_fields=[(11, 2, 0)],
                            big_endian=True),
        fitbuild.data(0, b'\x03\x20'))
    assert messages[-1].developer_fields[0].value == 800


def test_scale_and_offset():
    __, messages = decode_records(
        fitbuild.field_description(5, 0, 7, UINT16, 'core_temp', units='C',
                                   scale=100, offset=-1),
        fitbuild.definition(0, 20, [], dev_fields=[(7, 2, 0)]),
        fitbuild.data(0, pack('<H', 3850)))

    dev_field, = messages[-1].developer_fields
    assert dev_field.value == 3850
    assert abs(dev_field.scaled - 39.5) < 1e-9


def test_redescription_overwrites():
    __, messages = decode_records(
        fitbuild.field_description(5, 0, 7, UINT8, 'core_temp'),
        fitbuild.field_description(5, 0, 7, UINT16, 'skin_temp'),
        fitbuild.definition(0, 20, [], dev_fields=[(7, 2, 0)]),
        fitbuild.data(0, b'\x01\x01'))

    dev_field, = messages[-1].developer_fields
    assert dev_field.name == 'skin_temp'
    assert dev_field.value == 257


def test_developer_data_id():
    application_id = bytes(range(16))
    decoder, messages = decode_records(
        fitbuild.definition(3, 207, [(1, 16, 0x0D), (3, 1, UINT8),
                                     (4, 4, UINT32)]),
        fitbuild.data(3, application_id + pack('<BI', 0, 3)))

    assert messages[-1].name == 'developer_data_id'
    application = decoder.developer_fields.application(0)
    assert application.application_id == application_id
    assert application.application_version == 3
    assert application.developer_id is None
    # Not mistaken for a field description.
    assert len(decoder.developer_fields) == 0


def test_configurable_message_numbers():
    description = fitbuild.field_description(5, 0, 7, UINT8, 'core_temp')
    # Re-target the description records at message number 0xFF00.
    description = description.replace(pack('<H', 206), pack('<H', 0xFF00), 1)
    records = (description,
               fitbuild.definition(0, 20, [], dev_fields=[(7, 1, 0)]),
               fitbuild.data(0, b'\x26'))

    __, messages = decode_records(*records)
    assert not messages[-1].developer_fields[0].is_resolved

    __, messages = decode_records(*records,
                                  field_description_mesg_num=0xFF00)
    assert messages[-1].developer_fields[0].name == 'core_temp'


def test_incomplete_description_is_ignored():
    __, messages = decode_records(
        fitbuild.definition(5, 206, [(0, 1, UINT8), (1, 1, UINT8),
                                     (2, 1, UINT8)]),
        fitbuild.data(5, b'\x00\x07\xff'))   # invalid base type id

    catalog = MessageDecoder().developer_fields
    assert catalog.learn_field_description(messages[-1]) is None
    assert len(catalog) == 0


def test_catalog_add_and_resolve():
    catalog = DeveloperFieldCatalog()
    descriptor = DeveloperFieldDescriptor(0, 7, 'core_temp', UINT8, 'C',
                                          None, None)
    catalog.add(descriptor)

    assert catalog.resolve(0, 7) is descriptor
    assert catalog.resolve(1, 7) is None
    assert list(catalog) == [descriptor]
    assert (0, 7) in catalog
    assert (1, 7) not in catalog


def test_empty_units_stay_strings():
    decoder, messages = decode_records(
        fitbuild.field_description(5, 0, 7, UINT8, 'count'),
        fitbuild.definition(0, 20, [], dev_fields=[(7, 1, 0)]),
        fitbuild.data(0, b'\x03'))

    descriptor = decoder.developer_fields.resolve(0, 7)
    assert descriptor.units == ''
    dev_field, = messages[-1].developer_fields
    assert dev_field.units == ''
    assert messages[-1].decode() == [('count', 3, '')]
