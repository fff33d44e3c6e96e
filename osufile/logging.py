# -*- coding: utf-8 -*-

import sys
from datetime import timezone
from datetime import tzinfo
from enum import IntEnum
from functools import cache
from typing import Optional
from typing import TextIO

from .utils import get_timestamp

__all__ = ('Ansi', 'printc', 'set_timezone', 'set_stream', 'log')

class Ansi(IntEnum):
    # Default colours
    BLACK   = 30
    RED     = 31
    GREEN   = 32
    YELLOW  = 33
    BLUE    = 34
    MAGENTA = 35
    CYAN    = 36
    WHITE   = 37

    # Light colours
    GRAY     = 90
    LRED     = 91
    LGREEN   = 92
    LYELLOW  = 93
    LBLUE    = 94
    LMAGENTA = 95
    LCYAN    = 96
    LWHITE   = 97

    RESET = 0

    @cache
    def __repr__(self) -> str:
        return f'\x1b[{self.value}m'

_gray = repr(Ansi.GRAY)
_reset = repr(Ansi.RESET)

def printc(msg: str, col: Ansi, end: str = '\n') -> None:
    """Print a string, in a specified ansi colour."""
    out = _log_stream or sys.stdout
    out.write(f'{col!r}{msg}{_reset}{end}')
    out.flush()

_log_tz: tzinfo = timezone.utc
def set_timezone(tz: tzinfo) -> None:
    global _log_tz
    _log_tz = tz

# `None` means whatever sys.stdout currently is.
_log_stream: Optional[TextIO] = None
def set_stream(stream: Optional[TextIO]) -> None:
    global _log_stream
    _log_stream = stream

def log(msg: str, col: Optional[Ansi] = None, end: str = '\n') -> None:
    """Print a string, in a specified ansi colour with timestamp."""
    out = _log_stream or sys.stdout
    ts_short = get_timestamp(full=False, tz=_log_tz)

    if col:
        out.write(f'{_gray}[{ts_short}] {col!r}{msg}{_reset}{end}')
    else:
        out.write(f'{_gray}[{ts_short}]{_reset} {msg}{end}')

    out.flush()
