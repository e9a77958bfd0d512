"""
Macro recording from live input.
"""

import json
import time
from typing import Callable, List, Optional

from blobflock.macros.events import MacroEvent


class MacroRecording:
    """
    Append-only recording of live input events.

    The first recorded event is at time 0; later events are timed in
    seconds since that first event.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.events: List[MacroEvent] = []
        self._clock = clock
        self._start_time: Optional[float] = None

    def _get_time(self) -> float:
        now = self._clock()
        if self._start_time is None:
            self._start_time = now
            return 0.0
        return now - self._start_time

    def add_click(self, x: float, y: float, width: float, height: float):
        """Record a click at pixel (x, y) as percentages of the surface size."""
        self.events.append(MacroEvent(
            time=self._get_time(),
            type="click",
            coords=(100 * x / width, 100 * y / height),
        ))

    def add_key_event(self, key_name: str, event_type: str):
        """Record a "keydown" or "keyup" of the named action."""
        self.events.append(MacroEvent(time=self._get_time(), type=event_type, key=key_name))

    def to_list(self) -> list[dict]:
        return [event.to_dict() for event in self.events]

    def to_json(self) -> str:
        """Export the recording in macro catalog format."""
        return json.dumps(self.to_list())

    def __len__(self) -> int:
        return len(self.events)
