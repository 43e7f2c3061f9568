#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import random

from fitcore._util import crc


def test_table():
    assert len(crc.CRC_TABLE) == 256
    assert crc.CRC_TABLE[0] == 0x0000
    assert crc.CRC_TABLE[1] == 0x1021
    assert all(0 <= entry <= 0xFFFF for entry in crc.CRC_TABLE)


def test_check_value():
    # CRC-16/XMODEM check value
    assert crc.compute(b'123456789') == 0x31C3


def test_empty():
    assert crc.compute(b'') == 0


def test_range():
    data = b'xx123456789yy'
    assert crc.compute(data, 2, 11) == crc.compute(b'123456789')
    assert crc.compute(data, 2) == crc.compute(data[2:])


def test_deterministic():
    data = bytes(range(256)) * 3
    assert crc.compute(data) == crc.compute(data)


def test_single_bit_flips():
    rng = random.Random(20)
    data = bytearray(rng.getrandbits(8) for _ in range(64))
    original = crc.compute(data)

    for _ in range(50):
        flipped = bytearray(data)
        bit = rng.randrange(len(data) * 8)
        flipped[bit // 8] ^= 1 << (bit % 8)
        assert crc.compute(flipped) != original


def test_appended_crc_checks_to_zero():
    data = b'.FIT header and records'
    value = crc.compute(data)
    assert crc.compute(data + bytes([value >> 8, value & 0xFF])) == 0
