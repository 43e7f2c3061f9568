#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CRC-16/CCITT (polynomial 0x1021) as used for the header and whole-file
checksums.

"""
POLYNOMIAL = 0x1021


def _make_table():
    table = []
    for i in range(256):
        crc = i << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ POLYNOMIAL
            else:
                crc <<= 1
        table.append(crc & 0xFFFF)
    return tuple(table)


CRC_TABLE = _make_table()


def compute(data, start=0, end=None):
    """Checksum of ``data[start:end]``, folding from an initial value of 0.

    Parameters
    ----------
    data : bytes-like
        Buffer to checksum.
    start, end : int, optional
        Byte range, defaulting to the whole buffer.

    Returns
    -------
    int
        16-bit CRC.
    """
    if end is None:
        end = len(data)

    crc = 0
    for byte in data[start:end]:
        crc = ((crc << 8) ^ CRC_TABLE[(crc >> 8) ^ byte]) & 0xFFFF
    return crc
