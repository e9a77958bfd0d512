"""
Macro playback.

A Macro walks a cursor over its events as time accumulates and fires
every event whose scheduled time has passed.
"""

import logging
from typing import Callable, Sequence

from blobflock.macros.events import MacroEvent

logger = logging.getLogger(__name__)


class Macro:
    """
    Replays a fixed sequence of macro events.

    Events are handed to a ``fire`` callback, which should route them
    through the same entry points as live input.
    """

    def __init__(self, events: Sequence[MacroEvent], name: str = ""):
        self.name = name
        self.events = list(events)
        self.running = False
        self.cursor = 0  # index of the next unfired event
        self.elapsed = 0.0

    @property
    def finished(self) -> bool:
        return self.cursor >= len(self.events)

    def start(self):
        """(Re)start playback from the first event, discarding any progress."""
        self.cursor = 0
        self.elapsed = 0.0
        self.running = bool(self.events)
        logger.info("Starting macro %r (%d events)", self.name, len(self.events))

    def update(self, dt: float, fire: Callable[[MacroEvent], None]):
        """
        Advance playback by ``dt`` seconds.

        Every event scheduled strictly before the new elapsed time is fired
        in order. Playback stops once the last event has been fired.
        """
        if not self.running:
            return

        self.elapsed += dt

        while not self.finished and self.events[self.cursor].time < self.elapsed:
            event = self.events[self.cursor]
            self.cursor += 1
            fire(event)

        if self.finished:
            self.running = False
            logger.debug("Macro %r finished after %.2fs", self.name, self.elapsed)
