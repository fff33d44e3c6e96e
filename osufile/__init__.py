# -*- coding: utf-8 -*-

"""\
Tools for reading osu!'s .osu beatmap file format.

A small, streaming decoder: feed it lines (an open file, a string, a
list..) and get back a fully typed `Beatmap`, or a `BeatmapError`
describing the first problem found.

:copyright: (c) 2021 osufile
:license: MIT
"""

__title__ = 'osufile'
__author__ = 'osufile'
__license__ = 'MIT'
__copyright__ = 'Copyright 2021 osufile'
__version__ = '0.3.1'

from .api import *
from .beatmap import *
from .errors import *
from .parser import *
from .types import *
