""" Data model for osu!'s .osu file format """
# -*- coding: utf-8 -*-

import io
import os
from typing import Any
from typing import Iterable
from typing import NamedTuple
from typing import Optional
from typing import Union

import orjson

from .errors import IoFailure
from .types import BeatmapMode

__all__ = ('Beatmap', 'General', 'Metadata', 'Difficulty',
           'Event', 'BackgroundMedia', 'Sprite', 'Animation',
           'TimingPoint', 'resolve_timing_points',
           'HitObjectBase', 'HitObject', 'Circle', 'Slider',
           'Spinner', 'LongNote', 'Other', 'HIT_OBJECT_KINDS')

"""\
Everything produced by a parse lives here.

Settings sections are plain slotted objects which the parser fills in
place; records (events, timing points & hit objects) are namedtuples,
so once a beatmap is handed back nothing in it should change.

Basic usage:
```
  bmap = Beatmap.from_file('1234567.osu')

  print(bmap.general.mode, bmap.metadata.title, bmap.difficulty.approach_rate)

  for obj in bmap.hit_objects:
    print(type(obj).__name__, obj.base.time, obj.base.x, obj.base.y)
```
"""

StrOrBytesPath = Union[str, bytes, os.PathLike[str], os.PathLike[bytes]]

class _Section:
    """A settings section with total defaults."""
    __slots__ = ()

    def __repr__(self) -> str:
        attrs = ', '.join([f'{k}={getattr(self, k)!r}' for k in self.__slots__])
        return f'{type(self).__name__}({attrs})'

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return self.as_tuple == other.as_tuple

    @property
    def as_tuple(self) -> tuple[Any, ...]:
        return tuple([getattr(self, k) for k in self.__slots__])

    def as_dict(self) -> dict[str, Any]:
        return {k: getattr(self, k) for k in self.__slots__}

class General(_Section):
    __slots__ = (
        'audio_filename', 'audio_lead_in', 'preview_time', 'countdown',
        'sample_set', 'stack_leniency', 'mode', 'letterbox_in_breaks',
        'widescreen_storyboard'
    )

    def __init__(
        self, audio_filename: str = '', audio_lead_in: int = 0,
        preview_time: int = 0, countdown: bool = False,
        sample_set: str = '', stack_leniency: float = 0.0,
        mode: BeatmapMode = BeatmapMode.Standard,
        letterbox_in_breaks: bool = False,
        widescreen_storyboard: bool = False
    ) -> None:
        self.audio_filename = audio_filename
        self.audio_lead_in = audio_lead_in # ms
        self.preview_time = preview_time # ms
        self.countdown = countdown
        self.sample_set = sample_set
        self.stack_leniency = stack_leniency
        self.mode = mode
        self.letterbox_in_breaks = letterbox_in_breaks
        self.widescreen_storyboard = widescreen_storyboard

    def as_dict(self) -> dict[str, Any]:
        d = super().as_dict()
        d['mode'] = self.mode.name
        return d

class Metadata(_Section):
    __slots__ = (
        'title', 'title_unicode', 'artist', 'artist_unicode',
        'creator', 'version', 'source', 'tags',
        'beatmap_id', 'beatmap_set_id'
    )

    def __init__(
        self, title: str = '', title_unicode: str = '',
        artist: str = '', artist_unicode: str = '',
        creator: str = '', version: str = '', source: str = '',
        tags: Optional[list[str]] = None,
        beatmap_id: int = 0, beatmap_set_id: int = 0
    ) -> None:
        self.title = title
        self.title_unicode = title_unicode
        self.artist = artist
        self.artist_unicode = artist_unicode
        self.creator = creator
        self.version = version
        self.source = source
        self.tags = tags if tags is not None else []
        self.beatmap_id = beatmap_id
        self.beatmap_set_id = beatmap_set_id

    def as_dict(self) -> dict[str, Any]:
        d = super().as_dict()
        d['tags'] = list(self.tags)
        return d

class Difficulty(_Section):
    __slots__ = (
        'hp_drain_rate', 'circle_size', 'overall_difficulty',
        'approach_rate', 'slider_multiplier', 'slider_tick_rate'
    )

    def __init__(
        self, hp_drain_rate: float = 0.0, circle_size: float = 0.0,
        overall_difficulty: float = 0.0, approach_rate: float = 0.0,
        slider_multiplier: float = 0.0, slider_tick_rate: float = 0.0
    ) -> None:
        self.hp_drain_rate = hp_drain_rate
        self.circle_size = circle_size
        self.overall_difficulty = overall_difficulty
        self.approach_rate = approach_rate
        self.slider_multiplier = slider_multiplier
        self.slider_tick_rate = slider_tick_rate

# TODO: storyboard commands (the `_`-prefixed lines
#       under a sprite) are dropped by the parser.

class BackgroundMedia(NamedTuple):
    # backgrounds, videos and any unknown event type
    path: str

class Sprite(NamedTuple):
    layer: str
    origin: str
    path: str
    x: int
    y: int

class Animation(NamedTuple):
    layer: str
    origin: str
    path: str
    x: int
    y: int
    frame_count: int
    frame_delay: int
    loop_type: str

Event = Union[BackgroundMedia, Sprite, Animation]

class TimingPoint(NamedTuple):
    offset: int = 0 # ms
    milliseconds_per_beat: float = 0.0
    meter: int = 0 # beats per measure
    sample_type: int = 0
    sample_set: int = 0
    volume: int = 0 # 0 to 100
    kiai_mode: bool = False
    inherited: bool = False

    @property
    def bpm(self) -> float:
        if self.milliseconds_per_beat == 0:
            return float('inf')

        return 1 / self.milliseconds_per_beat * 1000 * 60

    def inherit(self, prev: 'TimingPoint') -> 'TimingPoint':
        """Resolve this point's tempo against the point before it.

        Uninherited points are returned as-is. For inherited ones,
        `milliseconds_per_beat` is an offset onto `prev`'s value, and
        the result takes `prev`'s inherited flag; `prev` should itself
        already be resolved (see `resolve_timing_points`).
        """
        if not self.inherited:
            return self

        return self._replace(
            milliseconds_per_beat=prev.milliseconds_per_beat + self.milliseconds_per_beat,
            inherited=prev.inherited
        )

def resolve_timing_points(points: Iterable[TimingPoint]) -> list[TimingPoint]:
    """Fold `TimingPoint.inherit` left-to-right over `points`."""
    resolved = []
    prev = None

    for tp in points:
        if prev is not None:
            tp = tp.inherit(prev)

        resolved.append(tp)
        prev = tp

    return resolved

class HitObjectBase(NamedTuple):
    x: int = 0 # 0 to 512
    y: int = 0 # 0 to 384
    time: int = 0 # ms
    object_type: int = 0 # see `types.ObjectType`
    hit_sound: int = 0

class Circle(NamedTuple):
    base: HitObjectBase

class Slider(NamedTuple):
    # curve & pixel length are not extracted
    base: HitObjectBase
    slider_type: int = 0
    repeat: int = 0
    edge_hitsound: int = 0
    edge_addition: int = 0

class Spinner(NamedTuple):
    base: HitObjectBase
    end_time: int = 0

class LongNote(NamedTuple):
    # mania hold; the column is floor(x * columns / 512)
    base: HitObjectBase
    end_time: int = 0

class Other(NamedTuple):
    base: HitObjectBase

HitObject = Union[Circle, Slider, Spinner, LongNote, Other]
HIT_OBJECT_KINDS = (Circle, Slider, Spinner, LongNote, Other)

class Beatmap:
    __slots__ = (
        'file_version', 'general', 'metadata', 'difficulty',
        'events', 'timing_points', 'hit_objects'
    )

    def __init__(
        self, file_version: Optional[int] = None,
        general: Optional[General] = None,
        metadata: Optional[Metadata] = None,
        difficulty: Optional[Difficulty] = None,
        events: Optional[list[Event]] = None,
        timing_points: Optional[list[TimingPoint]] = None,
        hit_objects: Optional[list[HitObject]] = None
    ) -> None:
        self.file_version = file_version

        self.general = general or General()
        self.metadata = metadata or Metadata()
        self.difficulty = difficulty or Difficulty()

        # all in file order
        self.events = events if events is not None else []
        self.timing_points = timing_points if timing_points is not None else []
        self.hit_objects = hit_objects if hit_objects is not None else []

    def __repr__(self) -> str:
        md = self.metadata
        return f'{md.artist} - {md.title} ({md.creator}) [{md.version}]'

    @classmethod
    def from_lines(cls, lines: Iterable[str], debug: bool = False) -> 'Beatmap':
        from .parser import Parser
        return Parser(lines, debug=debug).parse()

    @classmethod
    def from_data(cls, data: str, debug: bool = False) -> 'Beatmap':
        # only \r & \n end a line, same as a file opened in text mode.
        return cls.from_lines(io.StringIO(data, newline=None), debug=debug)

    @classmethod
    def from_file(cls, path: StrOrBytesPath, debug: bool = False) -> 'Beatmap':
        try:
            f = open(path, 'r', encoding='utf-8-sig')
        except OSError as exc:
            raise IoFailure(f'io error: {exc}') from exc

        with f:
            return cls.from_lines(f, debug=debug)

    def resolved_timing_points(self) -> list[TimingPoint]:
        return resolve_timing_points(self.timing_points)

    def as_dict(self) -> dict[str, Any]:
        events = []
        for ev in self.events:
            events.append({'kind': type(ev).__name__, **ev._asdict()})

        hit_objects = []
        for obj in self.hit_objects:
            extra = obj._asdict()
            del extra['base']
            hit_objects.append({
                'kind': type(obj).__name__,
                **obj.base._asdict(), **extra
            })

        return {
            'file_version': self.file_version,
            'general': self.general.as_dict(),
            'metadata': self.metadata.as_dict(),
            'difficulty': self.difficulty.as_dict(),
            'events': events,
            'timing_points': [tp._asdict() for tp in self.timing_points],
            'hit_objects': hit_objects
        }

    def to_json(self, indent: bool = False) -> bytes:
        return orjson.dumps(
            self.as_dict(),
            option=orjson.OPT_INDENT_2 if indent else 0
        )
