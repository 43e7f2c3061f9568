#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Prettify the command line summary.

"""
import sys


TEXT_DECORATIONS = {
    'header': '\033[95m',
    'green': '\033[92m',
    'warning': '\033[93m',
    'fail': '\033[91m',
    'bold': '\033[1m',
    'end': '\033[0m',
}


def decorate(text, *decorations, enabled=True):
    """Return a text string with ANSI escape codes pre- and appended.

    Parameters
    ----------
    text : str
        Text to be decorated.
    *decorations : str
        Keys of `TEXT_DECORATIONS`.
    enabled : bool, optional
        Return `text` untouched when False (e.g. output is not a terminal).
    """
    if not enabled or not decorations:
        return text
    decors = ''.join(TEXT_DECORATIONS[d] for d in decorations)
    end = TEXT_DECORATIONS['end']
    return decors + text + end


def crc_status(valid, **kwargs):
    """'ok', 'MISMATCH' or 'absent' for a CRC validity flag."""
    if valid is None:
        return decorate('absent', 'warning', **kwargs)
    elif valid:
        return decorate('ok', 'green', **kwargs)
    else:
        return decorate('MISMATCH', 'fail', 'bold', **kwargs)


def printd(text, *decorations, file=None, **kwargs):
    """Print decorated, only colouring when writing to a terminal."""
    file = file if file is not None else sys.stdout
    enabled = hasattr(file, 'isatty') and file.isatty()
    print(decorate(text, *decorations, enabled=enabled), file=file, **kwargs)
