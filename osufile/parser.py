""" A streaming, line-based decoder for osu!'s .osu file format """
# -*- coding: utf-8 -*-

import re
from typing import Callable
from typing import Iterable
from typing import Iterator
from typing import Optional

from . import logging
from .beatmap import Animation
from .beatmap import BackgroundMedia
from .beatmap import Beatmap
from .beatmap import Circle
from .beatmap import Event
from .beatmap import HitObject
from .beatmap import HitObjectBase
from .beatmap import LongNote
from .beatmap import Other
from .beatmap import Slider
from .beatmap import Spinner
from .beatmap import Sprite
from .beatmap import TimingPoint
from .errors import EmptyInput
from .errors import ExpectedSection
from .errors import ExpectedSectionGotField
from .errors import InvalidBooleanToken
from .errors import InvalidNumericToken
from .errors import IoFailure
from .errors import MalformedHeader
from .errors import MalformedHitObjectRecord
from .errors import MalformedKeyValueField
from .errors import MalformedTimingPointRecord
from .types import BeatmapMode
from .types import ObjectType
from .types import ScanState

__all__ = ('Parser', 'LineScanner', 'read_header', 'split_key_value',
           'split_record', 'trim_quotes', 'parse_bool', 'parse_uint',
           'parse_float', 'HEADER_PREFIX')

"""\
The parser never holds more than a single line of the file; it pulls
lines from whatever iterable it's given (an open file, a list, etc.),
one section at a time, and fills in a `Beatmap` as it goes.

Any malformed value in a section it understands aborts the whole parse
with a `BeatmapError`. The exception to that is [Events]; records there
which don't match a known shape are skipped, since the format keeps
growing new event types.
"""

HEADER_PREFIX = 'osu file format'
COMMENT_PREFIX = '//'

# lines from the source can fail for reasons out of our control.
_SOURCE_ERRORS = (OSError, UnicodeDecodeError)

""" tokenizing """

def split_key_value(line: str) -> tuple[str, str]:
    """Split a `Key: Value` line on the first colon."""
    kv = line.split(':', maxsplit=1)
    if len(kv) != 2:
        raise MalformedKeyValueField(f'malformed key-value field: {line!r}')

    return kv[0].strip(), kv[1].strip()

def split_record(line: str) -> list[str]:
    return line.split(',')

def trim_quotes(s: str) -> str:
    # NOTE: only wrapping quotes are removed, nothing is unescaped.
    return s.strip('"')

def parse_bool(s: str) -> bool:
    if s == '0':
        return False
    elif s == '1':
        return True

    raise InvalidBooleanToken(s)

def parse_uint(s: str, bits: int = 32) -> int:
    """Parse an unsigned `bits`-wide integer; ascii digits only."""
    if not (s.isascii() and s.isdecimal()):
        raise InvalidNumericToken(s)

    if (n := int(s)) >> bits:
        raise InvalidNumericToken(s)

    return n

# no whitespace or `_` separators, which float() would let through.
_FLOAT_RGX = re.compile(
    r'[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)',
    re.ASCII | re.IGNORECASE
)

def parse_float(s: str) -> float:
    if not _FLOAT_RGX.fullmatch(s):
        raise InvalidNumericToken(s)

    return float(s)

""" scanning """

def _pull(lines: Iterator[str]) -> Optional[str]:
    try:
        return next(lines)
    except StopIteration:
        return None
    except _SOURCE_ERRORS as exc:
        raise IoFailure(f'io error: {exc}') from exc

def read_header(lines: Iterator[str]) -> str:
    """Read & validate the very first line of the file."""
    if (line := _pull(lines)) is None:
        raise EmptyInput()

    if not line.startswith(HEADER_PREFIX):
        raise MalformedHeader(f'malformed header: {line[:32]!r}')

    return line.rstrip('\r\n')

def _file_version(header: str) -> Optional[int]:
    ver_str = header[len(HEADER_PREFIX):].strip()

    if ver_str.startswith('v') and ver_str[1:].isdecimal():
        return int(ver_str[1:])

class LineScanner:
    """Forward-only reader over a beatmap's lines.

    Blank lines & comments are skipped. A `[Section]` header is never
    handed out as content; instead its name is latched & the scanner
    reports no more content until `next_section_name` consumes it.
    """
    __slots__ = ('_lines', 'state', 'section')

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = iter(lines)

        self.state = ScanState.AWAITING_SECTION
        self.section: Optional[str] = None # latched header name

    @property
    def done(self) -> bool:
        return self.state is ScanState.DONE

    def next_content_line(self) -> Optional[str]:
        """Return the next content line (trimmed), or `None` if a
        section header was reached or the source has run dry."""
        if self.state is not ScanState.AWAITING_SECTION:
            return

        while (line := _pull(self._lines)) is not None:
            s = line.strip()

            if not s or s.startswith(COMMENT_PREFIX):
                continue

            if s.startswith('['):
                self.section = s.strip('[]').strip()
                self.state = ScanState.IN_SECTION
                return

            return s

        self.state = ScanState.DONE

    def next_section_name(self) -> Optional[str]:
        """Return the next section's name, or `None` once the source is
        exhausted; anything but a header here is an error."""
        if self.state is ScanState.DONE:
            return

        if self.state is ScanState.AWAITING_SECTION:
            if (line := self.next_content_line()) is not None:
                raise ExpectedSectionGotField(
                    f'expected a section, not a field: {line!r}'
                )

            if self.state is ScanState.DONE:
                # ran out of lines before any header
                raise ExpectedSection()

        name = self.section
        self.section = None
        self.state = ScanState.AWAITING_SECTION
        return name

""" parsing """

class Parser:
    __slots__ = ('_lines', 'scanner', 'debug', '_section_parsers')

    def __init__(self, lines: Iterable[str], debug: bool = False) -> None:
        # the header is read from the same iterator
        # before the scanner ever touches it.
        self._lines = iter(lines)
        self.scanner = LineScanner(self._lines)
        self.debug = debug

        self._section_parsers: dict[str, Callable[[Beatmap], None]] = {
            'General': self._parse_general,
            'Metadata': self._parse_metadata,
            'Difficulty': self._parse_difficulty,
            'Events': self._parse_events,
            'TimingPoints': self._parse_timing_points,
            'HitObjects': self._parse_hit_objects
        }

    def parse(self) -> Beatmap:
        bmap = Beatmap()

        header = read_header(self._lines)
        bmap.file_version = _file_version(header)

        while (name := self.scanner.next_section_name()) is not None:
            self._parse_section(name, bmap)

        return bmap

    def _log(self, msg: str) -> None:
        if self.debug:
            logging.log(msg, logging.Ansi.LYELLOW)

    def _parse_section(self, name: str, bmap: Beatmap) -> None:
        if name in self._section_parsers:
            self._section_parsers[name](bmap)
            return

        # unknown sections still have to be read
        # through, or we'd lose our place in the file.
        skipped = 0
        while self.scanner.next_content_line() is not None:
            skipped += 1

        self._log(f'Skipped [{name}] section ({skipped} lines)')

    def _key_values(self) -> Iterator[tuple[str, str]]:
        while (line := self.scanner.next_content_line()) is not None:
            yield split_key_value(line)

    def _records(self) -> Iterator[tuple[str, list[str]]]:
        while (line := self.scanner.next_content_line()) is not None:
            yield line, split_record(line)

    def _parse_general(self, bmap: Beatmap) -> None:
        general = bmap.general

        for key, val in self._key_values():
            if key == 'AudioFilename':
                general.audio_filename = val
            elif key == 'AudioLeadIn':
                general.audio_lead_in = parse_uint(val)
            elif key == 'PreviewTime':
                general.preview_time = parse_uint(val)
            elif key == 'Countdown':
                general.countdown = parse_bool(val)
            elif key == 'SampleSet':
                general.sample_set = val
            elif key == 'StackLeniency':
                general.stack_leniency = parse_float(val)
            elif key == 'Mode':
                general.mode = BeatmapMode.from_str(val)
            elif key == 'LetterboxInBreaks':
                general.letterbox_in_breaks = parse_bool(val)
            elif key == 'WidescreenStoryboard':
                general.widescreen_storyboard = parse_bool(val)
            else:
                self._log(f'Unknown [General] key {key}')

    def _parse_metadata(self, bmap: Beatmap) -> None:
        metadata = bmap.metadata

        for key, val in self._key_values():
            if key == 'Title':
                metadata.title = val
            elif key == 'TitleUnicode':
                metadata.title_unicode = val
            elif key == 'Artist':
                metadata.artist = val
            elif key == 'ArtistUnicode':
                metadata.artist_unicode = val
            elif key == 'Creator':
                metadata.creator = val
            elif key == 'Version':
                metadata.version = val
            elif key == 'Source':
                metadata.source = val
            elif key == 'Tags':
                metadata.tags = val.split()
            elif key == 'BeatmapID':
                metadata.beatmap_id = parse_uint(val, bits=64)
            elif key == 'BeatmapSetID':
                metadata.beatmap_set_id = parse_uint(val, bits=64)
            else:
                self._log(f'Unknown [Metadata] key {key}')

    def _parse_difficulty(self, bmap: Beatmap) -> None:
        difficulty = bmap.difficulty

        # all diff params are floats
        for key, val in self._key_values():
            if key == 'HPDrainRate':
                difficulty.hp_drain_rate = parse_float(val)
            elif key == 'CircleSize':
                difficulty.circle_size = parse_float(val)
            elif key == 'OverallDifficulty':
                difficulty.overall_difficulty = parse_float(val)
            elif key == 'ApproachRate':
                difficulty.approach_rate = parse_float(val)
            elif key == 'SliderMultiplier':
                difficulty.slider_multiplier = parse_float(val)
            elif key == 'SliderTickRate':
                difficulty.slider_tick_rate = parse_float(val)
            else:
                self._log(f'Unknown [Difficulty] key {key}')

    def _parse_events(self, bmap: Beatmap) -> None:
        for line, values in self._records():
            if values[0].startswith((' ', '_')):
                # storyboard command for the previous sprite
                continue

            try:
                ev = self._event_from_values(values)
            except InvalidNumericToken:
                ev = None

            if ev is None:
                self._log(f'Skipped event "{line}"')
                continue

            bmap.events.append(ev)

    @staticmethod
    def _event_from_values(values: list[str]) -> Optional[Event]:
        _type = values[0]

        if _type == 'Sprite':
            if len(values) != 6:
                return

            return Sprite(
                layer=values[1],
                origin=values[2],
                path=trim_quotes(values[3]),
                x=parse_uint(values[4]),
                y=parse_uint(values[5])
            )
        elif _type == 'Animation':
            if len(values) != 9:
                return

            return Animation(
                layer=values[1],
                origin=values[2],
                path=trim_quotes(values[3]),
                x=parse_uint(values[4]),
                y=parse_uint(values[5]),
                frame_count=parse_uint(values[6]),
                frame_delay=parse_uint(values[7]),
                loop_type=values[8]
            )
        else:
            # backgrounds, videos & anything we don't know about.
            if len(values) != 5:
                return

            return BackgroundMedia(path=trim_quotes(values[3]))

    def _parse_timing_points(self, bmap: Beatmap) -> None:
        for line, values in self._records():
            if len(values) != 8:
                raise MalformedTimingPointRecord(f'malformed timing point: {line!r}')

            bmap.timing_points.append(TimingPoint(
                offset=parse_uint(values[0]),
                milliseconds_per_beat=parse_float(values[1]),
                meter=parse_uint(values[2]),
                sample_type=parse_uint(values[3]),
                sample_set=parse_uint(values[4]),
                volume=parse_uint(values[5]),
                # the file stores whether the point is *un*inherited
                inherited=not parse_bool(values[6]),
                kiai_mode=parse_bool(values[7])
            ))

    def _parse_hit_objects(self, bmap: Beatmap) -> None:
        for line, values in self._records():
            if len(values) < 6:
                raise MalformedHitObjectRecord(f'malformed hit object: {line!r}')

            base = HitObjectBase(
                x=parse_uint(values[0]),
                y=parse_uint(values[1]),
                time=parse_uint(values[2]),
                object_type=parse_uint(values[3]),
                hit_sound=parse_uint(values[4])
            )

            bmap.hit_objects.append(self._hit_object_from_base(base, values[5]))

    @staticmethod
    def _hit_object_from_base(base: HitObjectBase, extra: str) -> HitObject:
        t = base.object_type

        # several type bits may be set at once;
        # the first match in this order wins.
        if t & ObjectType.HIT_CIRCLE:
            return Circle(base)
        elif t & ObjectType.SLIDER:
            return Slider(base)
        elif t & ObjectType.SPINNER:
            return Spinner(base)
        elif t & ObjectType.MANIA_HOLD:
            end_time, *_ = extra.split(':')
            return LongNote(base, end_time=parse_uint(end_time))
        else:
            return Other(base)
