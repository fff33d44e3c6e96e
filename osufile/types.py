# -*- coding: utf-8 -*-

from enum import IntEnum, unique, auto

from .errors import InvalidNumericToken
from .errors import UnknownEnumCode

__all__ = (
    'BeatmapMode',
    'ObjectType',
    'ScanState'
)

@unique
class BeatmapMode(IntEnum):
    Standard = 0
    Taiko = 1
    CatchTheBeat = 2
    Mania = 3

    @classmethod
    def from_str(cls, s: str) -> 'BeatmapMode':
        if not (s.isascii() and s.isdecimal()):
            raise InvalidNumericToken(s)

        try:
            return cls(int(s))
        except ValueError:
            raise UnknownEnumCode(s) from None

class ObjectType:
    HIT_CIRCLE = 1 << 0
    SLIDER = 1 << 1
    SPINNER = 1 << 3
    MANIA_HOLD = 1 << 7

@unique
class ScanState(IntEnum):
    AWAITING_SECTION = auto() # no header latched
    IN_SECTION = auto() # header latched, name not yet consumed
    DONE = auto() # source exhausted
