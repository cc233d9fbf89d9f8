"""Timers kept in expiry order on active and idle lists, polled for expiry."""

from __future__ import annotations

import bisect
import threading
from enum import IntEnum
from typing import Any, Callable

from upfkit.clock import time_now
from upfkit.log import UtltError
from upfkit.pool import Pool, PoolError

__all__ = ["TimerType", "TimerList", "Timer", "MAX_NUM_OF_TIMER", "NUM_OF_PARAMS"]

MAX_NUM_OF_TIMER = 1024
NUM_OF_PARAMS = 6

_TIMER_POOL = Pool(object, MAX_NUM_OF_TIMER)

ExpireFunc = Callable[[Any, list], None]


def _now_ms() -> int:
    return time_now() // 1000


def _expire_key(timer: Timer) -> int:
    return timer.expire_time


class TimerType(IntEnum):
    PERIOD = 0
    ONCE = 1


class Timer:
    """A timer belonging to a TimerList."""

    def __init__(self, timer_list: TimerList, timer_type: TimerType,
                 duration: int, expire_func: ExpireFunc, token: object) -> None:
        self.timer_list = timer_list
        self.type = TimerType(timer_type)
        self.duration = duration
        self.expire_func = expire_func
        self.expire_time = 0
        self.params: list = [0] * NUM_OF_PARAMS
        self._is_running = False
        self._where: list | None = None
        self._token: object | None = token

    def __repr__(self) -> str:
        return (f"Timer(type={self.type.name}, duration={self.duration}, "
                f"running={self._is_running})")

    def _detach(self) -> None:
        if self._where is not None:
            self._where.remove(self)
            self._where = None

    def _insert(self, target: list) -> None:
        bisect.insort_right(target, self, key=_expire_key)
        self._where = target

    def start(self) -> None:
        """(Re)start the timer for one duration from now."""
        with self.timer_list._lock:
            self._detach()
            self.expire_time = _now_ms() + self.duration
            self._insert(self.timer_list.active)
            self._is_running = True

    def stop(self) -> None:
        """Stop a running timer; a stopped one is left alone."""
        with self.timer_list._lock:
            if self._is_running:
                self._detach()
                self._insert(self.timer_list.idle)
                self._is_running = False

    def delete(self) -> None:
        """Take the timer off its list and give its slot back."""
        with self.timer_list._lock:
            self._detach()
            self._is_running = False
            token, self._token = self._token, None
        if token is not None:
            _TIMER_POOL.free(token)

    def set_param(self, param_id: int, value: Any) -> None:
        """Set one of the six parameters handed to the expire function."""
        if not 0 <= param_id < NUM_OF_PARAMS:
            raise UtltError("Wrong paramID for setting timer parameter")
        self.params[param_id] = value

    def is_expired(self) -> bool:
        """Whether the expiry time has passed."""
        return self.expire_time < _now_ms()

    def running(self) -> bool:
        """Whether the timer is on the active list."""
        return self._is_running


class TimerList:
    """Active and idle timers, each list sorted by expiry time."""

    def __init__(self) -> None:
        self.active: list[Timer] = []
        self.idle: list[Timer] = []
        self._lock = threading.Lock()

    def create(self, timer_type: TimerType, duration: int,
               expire_func: ExpireFunc) -> Timer:
        """Create an idle timer of the given type and duration in milliseconds."""
        try:
            token = _TIMER_POOL.alloc()
        except PoolError:
            raise UtltError("The pool of timer create is empty") from None
        timer = Timer(self, timer_type, duration, expire_func, token)
        with self._lock:
            timer._insert(self.idle)
        return timer

    def expire_check(self, data: Any) -> list[Timer]:
        """Fire every expired timer with ``data`` and return them in firing order."""
        expired: list[Timer] = []
        with self._lock:
            now = _now_ms()
            while self.active and self.active[0].expire_time < now:
                timer = self.active.pop(0)
                timer._where = None
                expired.append(timer)
                if timer.type == TimerType.PERIOD:
                    timer.expire_time = now + timer.duration
                    timer._is_running = True
                    timer._insert(self.active)
                else:
                    timer._is_running = False
                    timer._insert(self.idle)
        for timer in expired:
            timer.expire_func(data, timer.params)
        return expired