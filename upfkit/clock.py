"""Microsecond wall-clock time and its conversion to calendar fields."""

from __future__ import annotations

import time
from dataclasses import dataclass

USEC_PER_SEC = 1_000_000

MONTH_SNAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
DAY_SNAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class TimeTM:
    """Calendar fields of a time plus its microsecond remainder."""

    usec: int
    tm: time.struct_time


def time_now() -> int:
    """Return microseconds since the Unix epoch."""
    return time.time_ns() // 1000


def time_convert(ut: int, use_local: bool = False) -> TimeTM:
    """Split a microsecond timestamp into GMT or local calendar fields."""
    seconds, usec = divmod(ut, USEC_PER_SEC)
    tm = time.localtime(seconds) if use_local else time.gmtime(seconds)
    return TimeTM(usec=usec, tm=tm)