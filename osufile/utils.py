# -*- coding: utf-8 -*-

from datetime import datetime
from datetime import tzinfo
from typing import Optional
from typing import Union

__all__ = ('get_timestamp', 'magnitude_fmt_time')

def get_timestamp(
    full: bool = False,
    tz: Optional[tzinfo] = None
) -> str:
    fmt = '%d/%m/%Y %I:%M:%S%p' if full else '%I:%M:%S%p'
    return f'{datetime.now(tz=tz):{fmt}}'

TIME_ORDER_SUFFIXES = ['nsec', 'μsec', 'msec', 'sec']
def magnitude_fmt_time(
    t: Union[int, float] # in nanosec
) -> str:
    for suffix in TIME_ORDER_SUFFIXES:
        if t < 1000:
            break
        t /= 1000
    return f'{t:.2f} {suffix}'
