#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import io
from struct import pack

from fitcore._util import cli, console, crc
from fitcore.test import fitbuild


UINT8, UINT32 = 0x02, 0x86


def write_activity(tmp_path, truncate=0):
    body = (fitbuild.definition(0, 20, [(253, 4, UINT32), (3, 1, UINT8)])
            + fitbuild.data(0, pack('<IB', 1000, 120))
            + fitbuild.data(0, pack('<IB', 1001, 121)))
    data = fitbuild.preamble(len(body)) + body
    data += pack('<H', crc.compute(data))
    if truncate:
        data = data[:-truncate]

    path = tmp_path / 'activity.fit'
    path.write_bytes(data)
    return str(path)


def test_crc_status():
    assert console.crc_status(True, enabled=False) == 'ok'
    assert console.crc_status(False, enabled=False) == 'MISMATCH'
    assert console.crc_status(None, enabled=False) == 'absent'
    assert console.decorate('x', 'bold') == '\033[1mx\033[0m'


def test_summary(tmp_path):
    out = io.StringIO()
    status = cli.parse([write_activity(tmp_path), '--summary'], out=out)

    assert status == 0
    text = out.getvalue()
    assert 'profile 21.32' in text
    assert 'header crc: ok' in text
    assert 'file crc:   ok' in text
    assert '       2  record' in text


def test_messages(tmp_path):
    out = io.StringIO()
    cli.parse([write_activity(tmp_path), '--messages'], out=out)

    lines = out.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith('record: ')
    assert 'heart_rate=120 bpm' in lines[0]


def test_csv(tmp_path):
    out = io.StringIO()
    assert cli.parse([write_activity(tmp_path)], out=out) == 0

    header = out.getvalue().splitlines()[0].split(',')
    assert header[0] == 'time'
    assert 'heart_rate_bpm' in header


def test_csv_to_file(tmp_path):
    output = tmp_path / 'records.csv'
    cli.parse([write_activity(tmp_path), '--output', str(output)],
              out=io.StringIO())
    assert output.read_text().startswith('time,')


def test_truncated_file_exits_nonzero(tmp_path, capsys):
    out = io.StringIO()
    # Drop the file CRC and the last data record's final byte.
    status = cli.parse([write_activity(tmp_path, truncate=3), '--summary'],
                       out=out)

    assert status == 1
    assert 'decode stopped early' in capsys.readouterr().err
    assert 'file crc:   absent' in out.getvalue()
