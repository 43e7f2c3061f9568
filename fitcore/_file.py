#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Whole-file decoding: the file header (preamble), the record loop and the
header and file CRCs.

"""
from collections import namedtuple
import logging
from struct import pack

from fitcore._profile import DEVELOPER_DATA_ID, FIELD_DESCRIPTION, PROFILE
from fitcore._protocol import MessageDecoder
from fitcore._util import crc
from fitcore._util.cursor import ByteCursor
from fitcore._util.exceptions import (
    CrcMismatchError, FitError, InvalidPreambleError)


logger = logging.getLogger(__name__)

MAGIC = b'.FIT'
HEADER_SIZES = (12, 14)
CRC_SIZE = 2


class Preamble(namedtuple('Preamble', ('header_size', 'protocol_version',
                                       'profile_version', 'data_size',
                                       'data_type', 'crc'))):
    """The FIT file header.

    ======  ===================  =========================================
     Byte    Name                 Description
    ======  ===================  =========================================
      0     Header size          12 (legacy) or 14
      1     Protocol version     High nibble major, low nibble minor
     2-3    Profile version      major * 100 + minor, little endian
     4-7    Data size            Bytes of records after the header
     8-11   Data type            ".FIT"
    12-13   CRC                  Of bytes 0-11 (14 byte headers only)
    ======  ===================  =========================================
    """
    __slots__ = ()

    @classmethod
    def parse(cls, data):
        if len(data) < HEADER_SIZES[0]:
            raise InvalidPreambleError(
                'file too small for a header (%d bytes)' % len(data))

        header_size = data[0]
        if header_size not in HEADER_SIZES:
            raise InvalidPreambleError(
                'irregular file header size (%d)' % header_size)

        if len(data) < header_size:
            raise InvalidPreambleError(
                'file too small for a %d byte header' % header_size)

        if bytes(data[8:12]) != MAGIC:
            raise InvalidPreambleError()

        # Larger fields are explicitly little endian from SDK.
        cursor = ByteCursor(data[:header_size])
        __, protocol, profile, data_size = cursor.unpack('<2BHI')
        data_type = cursor.read_bytes(4)
        header_crc = cursor.read_u16() if header_size == 14 else None

        return cls(header_size, protocol, profile, data_size, data_type,
                   header_crc)

    def pack(self):
        packed = pack('<2BHI4s', self.header_size, self.protocol_version,
                      self.profile_version, self.data_size, self.data_type)
        if self.header_size == 14:
            header_crc = crc.compute(packed) if self.crc is None else self.crc
            packed += pack('<H', header_crc)
        return packed

    @property
    def protocol(self):
        """Decode version info the same way the FIT SDK does."""
        prot = self.protocol_version
        return float('{:.0f}.{:.0f}'.format(prot >> 4, prot & 0xF))

    @property
    def profile(self):
        prof = self.profile_version
        return float('{:d}.{:02d}'.format(prof // 100, prof % 100))

    @property
    def end(self):
        """Offset one past the last record byte."""
        return self.header_size + self.data_size


class FitFile:
    """The outcome of decoding one buffer.

    Attributes
    ----------
    preamble : Preamble
    messages : list
        `DefinitionMessage` and `DataMessage` objects in file order.
    header_crc_valid, file_crc_valid : bool or None
        None when the corresponding CRC bytes are absent.
    error : FitError or None
        The error that stopped the record loop, if any.
    developer_fields : DeveloperFieldCatalog
        Developer field bindings learned during the decode.
    """
    def __init__(self, preamble, messages=None, header_crc_valid=None,
                 file_crc_valid=None, error=None, developer_fields=None):
        self.preamble = preamble
        self.messages = messages if messages is not None else []
        self.header_crc_valid = header_crc_valid
        self.file_crc_valid = file_crc_valid
        self.error = error
        self.developer_fields = developer_fields

    def __repr__(self):
        return ('<FitFile protocol={0.protocol:.1f} profile={0.profile:.2f} '
                'messages={1:d} records={2:d}>').format(
                    self.preamble, len(self.messages), len(self.records))

    def __iter__(self):
        return iter(self.messages)

    def __len__(self):
        return len(self.messages)

    @property
    def is_complete(self):
        return self.error is None

    @property
    def data_messages(self):
        return [m for m in self.messages if not m.is_definition]

    @property
    def definition_messages(self):
        return [m for m in self.messages if m.is_definition]

    def get_messages(self, name_or_number):
        key = 'global_id' if isinstance(name_or_number, int) else 'name'
        return [m for m in self.data_messages
                if getattr(m, key) == name_or_number]

    @property
    def records(self):
        return self.get_messages('record')

    @property
    def laps(self):
        return self.get_messages('lap')

    @property
    def sessions(self):
        return self.get_messages('session')


class FileDecoder:
    """Decode a complete, in-memory FIT file.

    Parameters
    ----------
    profile : Profile, optional
        Message and field metadata.
    field_description_mesg_num, developer_data_id_mesg_num : int, optional
        Message numbers that feed developer field resolution.
    check_crc : bool, optional
        Raise `CrcMismatchError` on a header or file CRC mismatch rather than
        just reporting it.
    errors : {'raise', 'keep'}, optional
        On a fatal error in the record loop either raise it (with the partial
        `FitFile` attached as ``error.result``) or return the partial file
        with ``error`` set.
    """
    def __init__(self, *, profile=PROFILE,
                 field_description_mesg_num=FIELD_DESCRIPTION,
                 developer_data_id_mesg_num=DEVELOPER_DATA_ID,
                 check_crc=False, errors='raise'):
        if errors not in ('raise', 'keep'):
            raise ValueError("errors must be 'raise' or 'keep'")

        self.profile = profile
        self.field_description_mesg_num = field_description_mesg_num
        self.developer_data_id_mesg_num = developer_data_id_mesg_num
        self.check_crc = check_crc
        self.errors = errors

    def message_decoder(self):
        # Fresh session state for every decode.
        return MessageDecoder(
            profile=self.profile,
            field_description_mesg_num=self.field_description_mesg_num,
            developer_data_id_mesg_num=self.developer_data_id_mesg_num)

    def decode(self, data):
        data = bytes(data)
        preamble = Preamble.parse(data)

        header_crc_valid = None
        if preamble.crc is not None:
            computed = crc.compute(data, 0, 12)
            header_crc_valid = computed == preamble.crc
            if not header_crc_valid:
                self._crc_mismatch('header', preamble.crc, computed)

        decoder = self.message_decoder()
        fitfile = FitFile(preamble, header_crc_valid=header_crc_valid,
                          developer_fields=decoder.developer_fields)

        cursor = ByteCursor(data, preamble.header_size)
        try:
            while cursor.position() < preamble.end:
                fitfile.messages.append(decoder.read_record(cursor))
        except FitError as error:
            return self._abort(fitfile, error)

        if cursor.remaining() >= CRC_SIZE:
            end = cursor.position()
            stored = cursor.read_u16()
            computed = crc.compute(data, 0, end)
            fitfile.file_crc_valid = computed == stored
            if not fitfile.file_crc_valid:
                self._crc_mismatch('file', stored, computed, fitfile)

        return fitfile

    def _crc_mismatch(self, which, stored, computed, fitfile=None):
        logger.warning('%s crc mismatch: stored 0x%04X, computed 0x%04X',
                       which, stored, computed)
        if self.check_crc:
            error = CrcMismatchError(which, stored, computed)
            error.result = fitfile
            raise error

    def _abort(self, fitfile, error):
        fitfile.error = error
        if self.errors == 'keep':
            return fitfile
        error.result = fitfile
        raise error


def decode(data, **kwargs):
    """Decode FIT file bytes.

    Keyword arguments are passed to `FileDecoder`.

    Returns
    -------
    FitFile
    """
    return FileDecoder(**kwargs).decode(data)
