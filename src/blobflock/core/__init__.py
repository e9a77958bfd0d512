"""Simulation primitives: colour, oscillators, blobs and flock operations."""

from blobflock.core.blob import Blob, create_blobs
from blobflock.core.colour import Colour, hsv_to_rgb
from blobflock.core.flock import attract_blobs, dispatch_click, move_blobs
from blobflock.core.oscillator import Oscillator

__all__ = [
    "Blob",
    "Colour",
    "Oscillator",
    "attract_blobs",
    "create_blobs",
    "dispatch_click",
    "hsv_to_rgb",
    "move_blobs",
]
