#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import math

from fitcore import _base_types
from fitcore._base_types import BASE_TYPES, BASE_TYPES_BY_NAME, lookup


def test_catalog():
    assert len(BASE_TYPES) == 17
    widths = {bt.name: bt.width for bt in BASE_TYPES.values()}
    assert widths['enum'] == widths['uint8z'] == widths['byte'] == 1
    assert widths['sint16'] == widths['uint16z'] == 2
    assert widths['float32'] == widths['uint32'] == 4
    assert widths['float64'] == widths['uint64'] == 8


def test_lookup():
    assert lookup(0x84).name == 'uint16'
    assert lookup(0x8C).name == 'uint32z'
    assert lookup(0x0D) is _base_types.BASE_TYPE_BYTE


def test_lookup_without_endian_bit():
    assert lookup(0x04).name == 'uint16'
    assert lookup(0x09).name == 'float64'


def test_lookup_unknown():
    assert lookup(0x55) is None
    assert lookup(0xFF) is None
    assert lookup(0x1F) is None


def test_sentinels():
    by_name = BASE_TYPES_BY_NAME
    assert by_name['uint8'].is_invalid(0xFF)
    assert not by_name['uint8'].is_invalid(0)
    assert by_name['sint16'].is_invalid(0x7FFF)
    assert by_name['uint32z'].is_invalid(0)
    assert not by_name['uint32z'].is_invalid(0xFFFFFFFF)
    assert by_name['float32'].is_invalid(float('nan'))
    assert not by_name['float32'].is_invalid(1.5)
    assert math.isnan(by_name['float64'].invalid_sentinel)
    assert by_name['sint32'].invalid_sentinel == 0x7FFFFFFF


def test_flags():
    by_name = BASE_TYPES_BY_NAME
    assert by_name['string'].is_string
    assert not by_name['string'].is_array_capable
    assert not by_name['byte'].is_array_capable
    assert by_name['uint16'].is_array_capable
    assert by_name['sint8'].is_signed and not by_name['uint8'].is_signed
    assert by_name['float64'].is_float
