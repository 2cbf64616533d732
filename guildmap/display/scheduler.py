"""FrameScheduler — start/stop handle around the per-frame callback."""

import logging
from typing import Callable

import pyglet

from guildmap import config

logger = logging.getLogger(__name__)


class FrameScheduler:
    """Calls ``callback(dt)`` once per display frame until stopped.

    *clock* is anything with pyglet's ``schedule_interval`` / ``unschedule``
    interface; it defaults to ``pyglet.clock``.
    """

    def __init__(
        self,
        callback: Callable[[float], object],
        fps: int = config.DISPLAY_FPS,
        clock=None,
    ) -> None:
        self._callback = callback
        self._interval = 1.0 / max(1, int(fps))
        self._clock = clock if clock is not None else pyglet.clock
        self._running = False
        self._errors = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def error_count(self) -> int:
        return self._errors

    def start(self) -> None:
        if self._running:
            return
        self._clock.schedule_interval(self._tick, self._interval)
        self._running = True
        logger.info("Frame loop started at %.0f FPS", 1.0 / self._interval)

    def stop(self) -> None:
        if not self._running:
            return
        self._clock.unschedule(self._tick)
        self._running = False
        logger.info("Frame loop stopped")

    def _tick(self, dt: float) -> None:
        try:
            self._callback(dt)
        except Exception:
            # A broken frame must not take the loop (or the page) down.
            self._errors += 1
            if self._errors == 1:
                logger.exception("Frame callback failed")
            else:
                logger.debug("Frame callback failed (%d times)", self._errors, exc_info=True)
