"""
Decode the Flexible and Interoperable data Transfer (FIT) protocol [1]_.

A lean, py3k decoder for FIT activity files. The whole file is read into
memory and decoded in one pass into definition and data messages, with
developer fields resolved against the field descriptions found earlier in
the same file. The header and file CRCs are checked and reported.

The decoding internals---i.e. the protocol implementation---are in the
`_protocol` and `_file` modules. Field names, scales and units come from a
slice of the FIT profile in `_profile`; pass your own ``profile`` to the
decoder for anything it does not cover.

    >>> import fitcore
    >>> fitfile = fitcore.decode(open('ride.fit', 'rb').read())
    >>> fitfile.records[0].get('heart_rate')
    >>> table = fitcore.read('ride.fit')   # pandas, one row per record


.. [1] https://www.thisisant.com/resources/fit

"""
__version__ = '0.1.0'

from fitcore._file import FileDecoder, FitFile, Preamble, decode
from fitcore._messages import (
    ARRAY, BYTES, FLOAT, SINT, STRING, UINT,
    DataMessage, DefinitionMessage, DeveloperFieldValue, FieldValue)
from fitcore._profile import (
    DEVELOPER_DATA_ID, FIELD_DESCRIPTION, PROFILE, FieldInfo, Profile)
from fitcore._protocol import DefinitionTable, LocalDefinition, MessageDecoder
from fitcore._reading import read_and_format as read
from fitcore._reading import gen_records, read_fit
from fitcore._util.exceptions import (
    CrcMismatchError, FitError, InsufficientDataError, InvalidPreambleError,
    MissingDefinitionError, UnrecognizedBaseTypeWarning)
