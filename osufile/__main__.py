# -*- coding: utf-8 -*-

"""\
Parse a .osu file & print a summary of it.

Usage:
    python -m osufile path/to/map.osu
    python -m osufile path/to/map.osu --json
"""

import argparse
import sys
import time

from . import logging
from .beatmap import Beatmap
from .errors import BeatmapError
from .utils import magnitude_fmt_time

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog='osufile', description=__doc__.splitlines()[0])
    parser.add_argument('path', help='path to a .osu file')
    parser.add_argument('--json', action='store_true',
                        help='dump the parsed beatmap as json')
    parser.add_argument('--debug', action='store_true',
                        help='log ignored keys, sections & events')
    args = parser.parse_args(argv)

    if args.json:
        # stdout only carries the json document.
        logging.set_stream(sys.stderr)

    st = time.time_ns()
    try:
        bmap = Beatmap.from_file(args.path, debug=args.debug)
    except BeatmapError as exc:
        logging.printc(f'Failed to parse {args.path}: {exc}', logging.Ansi.LRED)
        return 1
    finally:
        logging.set_stream(None)
    elapsed = magnitude_fmt_time(time.time_ns() - st)

    if args.json:
        sys.stdout.buffer.write(bmap.to_json(indent=True))
        sys.stdout.buffer.write(b'\n')
    else:
        print(f'Parsed {bmap} in {elapsed}.')
        print(f'{len(bmap.timing_points)} timing points, '
              f'{len(bmap.hit_objects)} hit objects, '
              f'{len(bmap.events)} events ({bmap.general.mode.name}).')

    return 0

if __name__ == '__main__':
    raise SystemExit(main())
