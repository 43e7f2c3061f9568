#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exceptions for this package.

Fatal decode errors stop the record loop. When they are raised by
`FileDecoder.decode` the partially decoded file is attached as ``result``
so the caller can decide whether to keep what was recovered.

"""


class FitError(Exception):
    """Base exception."""
    _default_message = ''

    def __init__(self, message=None):
        super().__init__(message if message else self._default_message)
        self.result = None   # partial FitFile, attached by the file decoder


class InvalidPreambleError(FitError):
    _default_message = "this doesn't look like a fit file!"


class InsufficientDataError(FitError):
    def __init__(self, requested, available):
        message = 'requested %d bytes but only %d available' % (
            requested, available)
        super().__init__(message)
        self.requested, self.available = requested, available


class MissingDefinitionError(FitError):
    def __init__(self, local_message_type):
        message = ('no definition for local message type %d'
                   % local_message_type)
        super().__init__(message)
        self.local_message_type = local_message_type

    @property
    def slot(self):
        return self.local_message_type


class CrcMismatchError(FitError):
    def __init__(self, which, expected, computed):
        message = '{!s} crc mismatch: stored 0x{:04X}, computed 0x{:04X}'.format(
            which, expected, computed)
        super().__init__(message)
        self.which = which
        self.expected, self.computed = expected, computed


class UnrecognizedBaseTypeWarning(UserWarning):
    """A field declared a base type id outside the catalog; its bytes are
    surfaced raw."""
    def __init__(self, base_type_id, field_number):
        message = 'unrecognized base type 0x{:02X} for field {:d}'.format(
            base_type_id, field_number)
        super().__init__(message)
        self.base_type_id = base_type_id
        self.field_number = field_number
