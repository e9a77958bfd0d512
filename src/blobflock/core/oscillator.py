"""
Low frequency oscillator used to modulate blob parameters over time.
"""

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class Oscillator:
    """
    A bounded value that moves at a constant rate and turns around at
    its bounds.

    In the default "bounce" mode the value reflects off both bounds. With
    ``wrap`` set the value jumps from ``max_value`` back to ``min_value``
    instead; the direction then never changes, so only the upper bound
    is ever reached.

    Overshoot is folded back once per bound per update. A single step
    longer than the range can therefore leave the value out of bounds.
    """

    min_value: float
    max_value: float
    rate: float  # change per second
    callback: Callable[[float], None]
    wrap: bool = False

    value: float = field(init=False)
    direction: int = field(init=False, default=1)

    def __post_init__(self):
        self.value = (self.min_value + self.max_value) / 2

    def update(self, dt: float) -> float:
        """Advance by ``dt`` seconds, push the new value to the callback and return it."""
        self.value += self.rate * dt * self.direction

        if self.value > self.max_value:
            extra = self.value - self.max_value
            if self.wrap:
                self.value = self.min_value + extra
            else:
                self.direction *= -1
                self.value = self.max_value - extra

        # Wrapping oscillators always move upwards so this only bounces
        if self.value < self.min_value:
            self.direction *= -1
            extra = self.min_value - self.value
            self.value = self.min_value + extra

        self.callback(self.value)
        return self.value

    def reset(self):
        self.value = (self.min_value + self.max_value) / 2
        self.direction = 1
