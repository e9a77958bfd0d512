"""
A single blob particle and the factory for a flock of them.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from blobflock.core.colour import Colour


@dataclass
class Blob:
    """
    A coloured disc heading in a fixed direction.

    Bearing is measured in radians clockwise from the top of the surface.
    Positions are never clamped; blobs may wander off the surface.
    """

    x: float
    y: float
    bearing: float
    colour: Colour
    extra_speed: float = 0.0  # added to speed while "randomise speed" is held
    bearing_shift: float = 0.0  # modulated by the bearing oscillator

    @property
    def effective_bearing(self) -> float:
        return self.bearing + self.bearing_shift

    def update(
        self,
        dt: float,
        speed: float,
        paused: bool = False,
        randomise_speed: bool = False,
    ):
        """
        Move the blob one explicit Euler step.

        Args:
            dt: Seconds since the previous step.
            speed: Base speed in pixels per second (already swapped for the
                slow speed by the caller when needed).
            paused: Skip movement entirely.
            randomise_speed: Add this blob's own ``extra_speed``.
        """
        if paused:
            return

        if randomise_speed:
            speed += self.extra_speed

        bearing = self.effective_bearing
        self.x += math.sin(bearing) * speed * dt
        self.y -= math.cos(bearing) * speed * dt


def create_blobs(
    count: int,
    width: float,
    height: float,
    max_extra_speed: float = 0.0,
    rng: Optional[np.random.Generator] = None,
    x: Optional[float] = None,
    y: Optional[float] = None,
) -> List[Blob]:
    """
    Create ``count`` blobs with random headings, colours and extra speeds.

    Args:
        count: Number of blobs.
        width: Surface width, used for random x placement.
        height: Surface height, used for random y placement.
        max_extra_speed: Extra speed is drawn from [-max, max).
        rng: Random generator (a fresh unseeded one if None).
        x: Fixed x-coordinate for every blob (random if None).
        y: Fixed y-coordinate for every blob (random if None).

    Returns:
        List of new Blob objects.
    """
    rng = rng if rng is not None else np.random.default_rng()
    blobs = []
    for _ in range(count):
        bearing = rng.random() * 2 * math.pi

        colour = Colour(120, rng.random() * 100, rng.random() * 100)

        bx = x if x is not None else rng.random() * width
        by = y if y is not None else rng.random() * height

        extra = 2 * max_extra_speed * rng.random() - max_extra_speed

        blobs.append(Blob(float(bx), float(by), float(bearing), colour, extra_speed=float(extra)))
    return blobs
