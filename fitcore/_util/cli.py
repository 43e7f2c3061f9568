#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
parse is installed as an executable console_script with this package.

"""
from argparse import ArgumentParser
from collections import Counter
from functools import partial
import logging
import sys

from fitcore import _reading
from fitcore._util import console


def make_parser():
    parser = ArgumentParser(description='decode a FIT activity file')

    parser.add_argument('input',
                        type=str,
                        help='raw file to read')
    parser.add_argument('--output',
                        type=str,
                        metavar='filename',
                        default=None,
                        help='optional; file to write the record table to')
    parser.add_argument('--summary',
                        action='store_true',
                        help='print the header, message counts and CRC status')
    parser.add_argument('--messages',
                        action='store_true',
                        help='print every data message')
    parser.add_argument('--tz',
                        type=str,
                        default=None,
                        help='optional; timezone for the record table')
    parser.add_argument('-v', '--verbose',
                        action='store_true',
                        help='log decoder internals')
    return parser


def print_summary(fitfile, out):
    colour = out.isatty()
    preamble = fitfile.preamble

    console.printd('FIT protocol %.1f, profile %.2f, %d data bytes' % (
        preamble.protocol, preamble.profile, preamble.data_size),
        'header', file=out)
    print('header crc: ' + console.crc_status(fitfile.header_crc_valid,
                                              enabled=colour), file=out)
    print('file crc:   ' + console.crc_status(fitfile.file_crc_valid,
                                              enabled=colour), file=out)

    counts = Counter(m.name or 'unknown(%d)' % m.global_id
                     for m in fitfile.data_messages)
    for name, count in sorted(counts.items()):
        print('%8d  %s' % (count, name), file=out)

    for descriptor in fitfile.developer_fields:
        print('developer field %d:%d %s [%s]' % (
            descriptor.developer_data_index, descriptor.field_number,
            descriptor.name, descriptor.units or ''), file=out)


def print_messages(fitfile, out):
    for message in fitfile.data_messages:
        fields = ', '.join('%s=%r%s' % (name, value, units and ' ' + units)
                           for name, value, units in message.decode())
        print('%s: %s' % (message.name or message.global_id, fields),
              file=out)


def parse(argv=None, out=None):
    out = out if out is not None else sys.stdout

    # Argument handling
    args = make_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')

    # Script begins
    status = 0
    fitfile = _reading.read_fit(args.input, errors='keep')
    if fitfile.error is not None:
        console.printd('decode stopped early: %s' % fitfile.error,
                       'fail', file=sys.stderr)
        status = 1

    if args.summary:
        print_summary(fitfile, out)
    if args.messages:
        print_messages(fitfile, out)
    if args.summary or args.messages:
        return status

    data = _reading.to_record_data(fitfile, tz_str=args.tz)

    write = partial(data.to_csv,
                    na_rep='NA', index_label='time', encoding='utf-8')
    if args.output is None:
        print(write(), file=out)
    else:
        write(args.output)

    return status


if __name__ == '__main__':
    sys.exit(parse())
