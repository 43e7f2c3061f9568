#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from pandas import DataFrame, TimedeltaIndex


class DataFrameSubclass(DataFrame):
    _metadata = []

    @property
    def _constructor(self):
        return self.__class__

    def __finalize__(self, other, method=None, **kwargs):
        """Propagate metadata from other to self."""
        for name in self._metadata:
            object.__setattr__(self, name, getattr(other, name, None))
        return self


class RecordData(DataFrameSubclass):
    """Record messages as a table, one row per sample.

    Attributes
    ----------
    start : datetime or None
        Time of the first sample.
    preamble : Preamble or None
        Header of the file the records came from.
    """
    _metadata = ['start', 'preamble']

    def _finish_up(self, *, column_spec, start=None, timeoffsets=None):
        for old_key, (new_key, convert) in column_spec.items():
            # DataFrame.pop() does not take a default arg
            try:
                old_column = self.pop(old_key)
            except KeyError:
                continue
            self[new_key] = convert(old_column)

        self.start = start
        if timeoffsets is not None:
            self.index = TimedeltaIndex(timeoffsets, name='time')

        # No point hanging on to completely empty columns!
        self.dropna(axis=1, how='all', inplace=True)

    @property
    def time(self):   # makes accessing the index more readable
        if isinstance(self.index, TimedeltaIndex):
            return self.index
        else:
            # because recursion problems with super().__getattr__()
            raise AttributeError('index is not TimedeltaIndex')

    def by_lap(self):
        """Group rows by the lap counter."""
        return self.groupby('lap')
