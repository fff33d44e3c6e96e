# -*- coding: utf-8 -*-

__all__ = (
    'BeatmapError', 'EmptyInput', 'MalformedHeader', 'IoFailure',
    'ExpectedSectionGotField', 'ExpectedSection', 'MalformedKeyValueField',
    'MalformedTimingPointRecord', 'MalformedHitObjectRecord',
    'InvalidBooleanToken', 'InvalidNumericToken', 'UnknownEnumCode'
)

class BeatmapError(Exception):
    """Base class for anything that aborts a parse."""
    default_msg = 'failed to parse beatmap'

    def __init__(self, msg: str = '') -> None:
        super().__init__(msg or self.default_msg)

class EmptyInput(BeatmapError):
    default_msg = 'empty file'

class MalformedHeader(BeatmapError):
    default_msg = 'malformed header'

class IoFailure(BeatmapError, OSError):
    default_msg = 'io error'

class ExpectedSectionGotField(BeatmapError):
    default_msg = 'expected a section, not a field'

class ExpectedSection(BeatmapError):
    default_msg = 'expected a section'

class MalformedKeyValueField(BeatmapError):
    default_msg = 'malformed key-value field'

class MalformedTimingPointRecord(BeatmapError):
    default_msg = 'malformed timing point'

class MalformedHitObjectRecord(BeatmapError):
    default_msg = 'malformed hit object'

# coercion errors keep the token that failed

class _TokenError(BeatmapError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f'{self.default_msg}: {token!r}')

class InvalidBooleanToken(_TokenError):
    default_msg = 'malformed bool'

class InvalidNumericToken(_TokenError):
    default_msg = 'malformed number'

class UnknownEnumCode(_TokenError):
    default_msg = 'unknown enum code'
