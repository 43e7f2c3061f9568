#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Translate decoded messages into tabular records.

"""
from contextlib import contextmanager

import numpy as np
from pandas import to_datetime
import pytz

from fitcore._file import decode
from fitcore._types import RecordData


TZ_UTC = pytz.timezone('UTC')


def semicircles_to_degrees(semicircles):
    """Positional data conversion for *.fit files

    https://github.com/kuperov/fit/blob/master/R/fit.R
    """
    return (np.asarray(semicircles, dtype='float64') * 180 / 2**31
            + 180) % 360 - 180


COLUMN_SPEC = {     # decoded key --> (column name, conversion)
    'position_lat_semicircles': ('lat', semicircles_to_degrees),
    'position_long_semicircles': ('lon', semicircles_to_degrees),
}


def message_filter(message, keep=('record', 'lap')):
    return not message.is_definition and message.name in keep


def make_key(name, units):
    if units:
        return name + '_' + units
    else:
        return name


def format_message(message):
    record = {make_key(name, units): value
              for name, value, units in message.decode()
              if name != 'unknown'}

    record.pop('timestamp_s', None)
    if message.timestamp is not None:
        record['timestamp'] = message.datetime   # UTC

    return message.name, record


@contextmanager
def open_fit(source):
    """Yield the bytes of a path, a binary file object or a buffer."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        yield bytes(source)
    elif hasattr(source, 'read'):
        yield source.read()
    else:
        with open(source, 'rb') as reader:
            yield reader.read()


def read_fit(source, **kwargs):
    """Decode a FIT source. Keyword arguments go to `FileDecoder`."""
    with open_fit(source) as data:
        return decode(data, **kwargs)


def gen_records(source, **kwargs):
    """Generator function for iterating over individual file records.

    "Records" are dictionary objects representing a single "sample" of data;
    i.e. a row in a tabular representation. Note this can be passed to
    the `from_records` constructor method of `pandas.DataFrame`s.
    """
    fitfile = source if hasattr(source, 'messages') else read_fit(source,
                                                                  **kwargs)
    messages = filter(message_filter, fitfile.messages)
    lap = 1
    for name, record in (format_message(message) for message in messages):
        if name == 'lap':
            lap += 1
        else:
            record['lap'] = lap
            yield record


def read_and_format(source, *, tz_str=None, **kwargs):
    """Decode a FIT source straight into a `RecordData` table."""
    return to_record_data(read_fit(source, **kwargs), tz_str=tz_str)


def to_record_data(fitfile, *, tz_str=None):
    data = RecordData.from_records(list(gen_records(fitfile)))
    data.preamble = fitfile.preamble

    if 'timestamp' in data:
        timestamps = to_datetime(data.pop('timestamp'), utc=True)

        timezone = pytz.timezone(tz_str) if tz_str is not None else TZ_UTC
        timestamps = timestamps.dt.tz_convert(timezone)
        tstart = timestamps.iloc[0]

        timeoffsets = timestamps - tstart
        data._finish_up(column_spec=COLUMN_SPEC,
                        start=tstart, timeoffsets=timeoffsets)
    else:
        data._finish_up(column_spec=COLUMN_SPEC)

    return data
