#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Assemble synthetic FIT byte streams for the tests.

"""
from struct import pack

from fitcore._util import crc


UINT8, UINT16, UINT32, STRING = 0x02, 0x84, 0x86, 0x07


def preamble(data_size, header_size=14, protocol=0x20, profile=2132,
             header_crc=None):
    header = pack('<2BHI4s', header_size, protocol, profile, data_size,
                  b'.FIT')
    if header_size == 14:
        if header_crc is None:
            header_crc = crc.compute(header)
        header += pack('<H', header_crc)
    return header


def definition(local, global_id, fields, dev_fields=None, big_endian=False):
    """Definition record. `fields` are (number, size, base type) triples and
    `dev_fields` (number, size, developer data index) triples."""
    header = 0x40 | local
    if dev_fields is not None:
        header |= 0x20
    endian = '>' if big_endian else '<'

    record = pack('<3B', header, 0, int(big_endian))
    record += pack(endian + 'HB', global_id, len(fields))
    record += b''.join(pack('<3B', *field) for field in fields)
    if dev_fields is not None:
        record += pack('<B', len(dev_fields))
        record += b''.join(pack('<3B', *field) for field in dev_fields)
    return record


def data(local, payload=b''):
    return pack('<B', local) + payload


def compressed(local, time_offset, payload=b''):
    return pack('<B', 0x80 | (local << 5) | time_offset) + payload


def string(text, size):
    encoded = text.encode('utf-8')
    return encoded + b'\x00' * (size - len(encoded))


def field_description(local, index, number, base_type_id, name, units='',
                      scale=None, offset=None):
    """A field_description definition + data record pair."""
    fields = [(0, 1, UINT8), (1, 1, UINT8), (2, 1, UINT8), (3, 16, STRING),
              (8, 8, STRING)]
    payload = pack('<3B', index, number, base_type_id)
    payload += string(name, 16) + string(units, 8)
    if scale is not None:
        fields.append((6, 1, UINT8))
        payload += pack('<B', scale)
    if offset is not None:
        fields.append((7, 1, 0x01))
        payload += pack('<b', offset)
    return definition(local, 206, fields) + data(local, payload)


def fit_file(*records, header_size=14, data_size=None, file_crc=True):
    body = b''.join(records)
    if data_size is None:
        data_size = len(body)
    out = preamble(data_size, header_size=header_size) + body
    if file_crc:
        out += pack('<H', crc.compute(out))
    return out
