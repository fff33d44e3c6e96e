# -*- coding: utf-8 -*-

from typing import Optional

import aiohttp

from . import logging
from .beatmap import Beatmap
from .errors import IoFailure

__all__ = ('BeatmapDownloader', 'OSU_BASE_URL')

OSU_BASE_URL = 'https://osu.ppy.sh'

class BeatmapDownloader:
    """Fetch .osu files straight from osu!'s web server.

    Can be given an existing session to share; otherwise
    one is created for the lifetime of the `async with`.
    """
    def __init__(self, base_url: str = OSU_BASE_URL,
                 http_sess: Optional[aiohttp.ClientSession] = None) -> None:
        self.base_url = base_url.rstrip('/')

        self.http_sess = http_sess
        self._owns_sess = http_sess is None

    async def __aenter__(self):
        if self._owns_sess:
            self.http_sess = aiohttp.ClientSession()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._owns_sess:
            await self.http_sess.close()
            self.http_sess = None

    # GET /osu/{beatmap_id}
    async def get_osu_file(self, beatmap_id: int) -> Optional[str]:
        """Return the raw .osu file for a beatmap, if it exists."""
        if self.http_sess is None:
            raise RuntimeError('BeatmapDownloader must be used with `async with`')

        url = f'{self.base_url}/osu/{beatmap_id}'

        async with self.http_sess.get(url) as resp:
            if resp.status != 200:
                logging.log(
                    f'Failed to fetch beatmap {beatmap_id} ({resp.status})',
                    logging.Ansi.LRED
                )
                return

            try:
                return await resp.text(encoding='utf-8-sig')
            except UnicodeDecodeError as exc:
                raise IoFailure(f'io error: {exc}') from exc

    async def get_beatmap(self, beatmap_id: int) -> Optional[Beatmap]:
        """Fetch & parse a beatmap; parse errors are left to the caller."""
        if (data := await self.get_osu_file(beatmap_id)) is None:
            return

        return Beatmap.from_data(data)
